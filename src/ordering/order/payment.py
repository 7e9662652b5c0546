"""Order payment confirmation — command and handler.

The gateway reports payment through the webhook route, which dispatches
ConfirmPayment with the order id it received as external reference.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.dto import order_dto
from ordering.order.order import Order


@ordering.command(part_of="Order")
class ConfirmPayment:
    order_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class ConfirmPaymentHandler:
    @handle(ConfirmPayment)
    def confirm_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.mark_paid()
        repo.add(order)

        logger.info("Order paid", order_id=str(order.id), amount=order.total)
        return order_dto(order)
