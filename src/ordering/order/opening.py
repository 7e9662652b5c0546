"""Order opening — command and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.customer.customer import Customer
from ordering.domain import logger, ordering
from ordering.order.dto import order_dto
from ordering.order.order import Order


@ordering.command(part_of="Order")
class OpenOrder:
    """Open an empty order, for a registered customer or for a guest."""

    customer_id = Identifier()


@ordering.command_handler(part_of=Order)
class OpenOrderHandler:
    @handle(OpenOrder)
    def open_order(self, command):
        if command.customer_id:
            # Raises ObjectNotFoundError for unknown customers
            current_domain.repository_for(Customer).get(command.customer_id)

        order = Order.open(customer_id=command.customer_id)
        current_domain.repository_for(Order).add(order)

        logger.info("Order opened", order_id=str(order.id), customer_id=command.customer_id)
        return order_dto(order)
