"""Domain events for the Order aggregate.

Events are versioned, immutable facts raised as the order moves through
OPEN → AWAITING_PAYMENT → PAID.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderOpened:
    """A new, empty order was opened, optionally for a known customer."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    customer_id = Identifier()
    opened_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderItemAdded:
    """A product was added to an open order."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    unit_price = Float(required=True)
    new_total = Float(required=True)


@ordering.event(part_of="Order")
class OrderAwaitingPayment:
    """Checkout started; the order waits for the gateway to confirm payment."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    payment_method = String(required=True)
    amount = Float(required=True)


@ordering.event(part_of="Order")
class OrderPaid:
    """The gateway confirmed payment of the order."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    amount = Float(required=True)
    paid_at = DateTime(required=True)
