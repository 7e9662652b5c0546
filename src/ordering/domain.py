"""Ordering bounded context — customers, product catalogue and orders.

Handles opening orders, adding line items, and the PIX checkout flow that
hands the order over to the payment gateway.
"""

from protean.domain import Domain

from ordering.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

ordering = Domain(name="ordering")
