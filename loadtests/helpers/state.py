"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state — no cross-user sharing.
State tracks entity IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class OrderDeskState:
    """Tracks state for a single simulated customer visit."""

    customer_id: str | None = None
    product_ids: list[str] = field(default_factory=list)
    order_id: str | None = None
    checkout_order_id: str | None = None
