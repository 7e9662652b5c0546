"""Order checkout — command and handler.

Builds a new order from a list of product ids and hands it to the payment
gateway as a PIX payment:

    1. Resolve the customer, when one is given
    2. Resolve every product, stopping at the first unknown id
    3. Open the order with one item (quantity 1) per product id
    4. Move the order to AWAITING_PAYMENT
    5. Ask the gateway to open the payment
    6. Persist the order only after the gateway accepted it

Repeated product ids become repeated line items. A gateway failure
propagates unchanged and leaves nothing persisted.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.customer.customer import Customer
from ordering.domain import logger, ordering
from ordering.gateway import get_gateway
from ordering.gateway.port import PaymentMethod
from ordering.order.dto import order_dto
from ordering.order.order import Order
from ordering.product.product import Product


@ordering.command(part_of="Order")
class CheckoutOrder:
    """Create an order from product ids and start its PIX payment."""

    customer_id = Identifier()
    product_ids = Text(required=True)  # JSON: list of product ids


def _parse_product_ids(raw):
    try:
        product_ids = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError({"product_ids": ["Must be a JSON list of product ids"]}) from exc
    if not isinstance(product_ids, list):
        raise ValidationError({"product_ids": ["Must be a list of product ids"]})
    return [str(product_id) for product_id in product_ids]


@ordering.command_handler(part_of=Order)
class CheckoutOrderHandler:
    def _fetch_products(self, product_ids):
        repo = current_domain.repository_for(Product)
        return [repo.get(product_id) for product_id in product_ids]

    @handle(CheckoutOrder)
    def checkout_order(self, command):
        if command.customer_id:
            current_domain.repository_for(Customer).get(command.customer_id)

        products = self._fetch_products(_parse_product_ids(command.product_ids))

        order = Order.open(customer_id=command.customer_id)
        for product in products:
            order.add_item(product, 1)

        order.await_payment(PaymentMethod.PIX.value)

        confirmation = get_gateway().execute(order_dto(order), PaymentMethod.PIX)

        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order checked out",
            order_id=str(order.id),
            customer_id=command.customer_id,
            item_count=len(order.items),
            payment_id=confirmation.payment_id,
        )
        return confirmation
