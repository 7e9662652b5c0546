"""Order aggregate — the core of the ordering domain.

State Machine:
    OPEN → AWAITING_PAYMENT → PAID

Items can only be added while the order is OPEN. Transitions never go
backwards; a failed payment simply leaves the order AWAITING_PAYMENT.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.domain import ordering
from ordering.order.events import OrderAwaitingPayment, OrderItemAdded, OrderOpened, OrderPaid


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    OPEN = "Open"
    AWAITING_PAYMENT = "Awaiting_Payment"
    PAID = "Paid"


_VALID_TRANSITIONS = {
    OrderStatus.OPEN: {OrderStatus.AWAITING_PAYMENT},
    OrderStatus.AWAITING_PAYMENT: {OrderStatus.PAID},
    OrderStatus.PAID: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A line item: one product at the price it had when it was added."""

    product_id = Identifier(required=True)
    product_name = String(max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    position = Integer(min_value=0, default=0)  # index within the order

    @property
    def subtotal(self):
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier()
    items = HasMany(OrderItem)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.OPEN.value,
    )
    payment_method = String(max_length=50)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def open(cls, customer_id=None):
        """Open a new, empty order. ``customer_id`` is None for guests."""
        now = datetime.now(UTC)
        order = cls(
            customer_id=customer_id,
            status=OrderStatus.OPEN.value,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderOpened(
                order_id=str(order.id),
                customer_id=str(customer_id) if customer_id else None,
                opened_at=now,
            )
        )
        return order

    @property
    def total(self):
        return sum(item.subtotal for item in self.items)

    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def add_item(self, product, quantity):
        """Add ``quantity`` units of ``product``. Only allowed while OPEN."""
        if OrderStatus(self.status) != OrderStatus.OPEN:
            raise ValidationError({"status": [f"Items can only be added to Open orders, order is {self.status}"]})

        item = OrderItem(
            position=len(self.items),
            product_id=str(product.id),
            product_name=product.name,
            unit_price=product.price,
            quantity=quantity,
        )
        self.add_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderItemAdded(
                order_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product.id),
                quantity=quantity,
                unit_price=product.price,
                new_total=self.total,
            )
        )
        return item

    def await_payment(self, payment_method):
        """Close the item list and wait for the gateway to confirm payment."""
        self._assert_can_transition(OrderStatus.AWAITING_PAYMENT)
        self.status = OrderStatus.AWAITING_PAYMENT.value
        self.payment_method = payment_method
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderAwaitingPayment(
                order_id=str(self.id),
                payment_method=payment_method,
                amount=self.total,
            )
        )

    def mark_paid(self):
        """Record the gateway's payment confirmation."""
        self._assert_can_transition(OrderStatus.PAID)
        now = datetime.now(UTC)
        self.status = OrderStatus.PAID.value
        self.updated_at = now

        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                amount=self.total,
                paid_at=now,
            )
        )
