"""Ordering domain API package."""

from ordering.api.errors import register_exception_handlers
from ordering.api.routes import customer_router, order_router, payment_router, product_router

__all__ = [
    "customer_router",
    "order_router",
    "payment_router",
    "product_router",
    "register_exception_handlers",
]
