"""Order item addition — command and handler.

The product is looked up before the order, so an unknown product is reported
even when the order id is also wrong.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.dto import order_dto
from ordering.order.order import Order
from ordering.product.product import Product


@ordering.command(part_of="Order")
class AddOrderItem:
    """Add a quantity of a catalogue product to an open order."""

    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@ordering.command_handler(part_of=Order)
class AddOrderItemHandler:
    @handle(AddOrderItem)
    def add_order_item(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)

        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.add_item(product, command.quantity)
        repo.add(order)

        logger.info(
            "Order item added",
            order_id=str(order.id),
            product_id=str(product.id),
            quantity=command.quantity,
        )
        return order_dto(order)
