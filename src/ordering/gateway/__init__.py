"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- FakeGateway for development and testing (default)
- MercadoPagoGateway when PAYMENT_GATEWAY=mercadopago
"""

import os

from ordering.gateway.fake_adapter import FakeGateway
from ordering.gateway.mercadopago_adapter import DEFAULT_BASE_URL, MercadoPagoGateway
from ordering.gateway.port import PaymentGateway

_current_gateway: PaymentGateway | None = None


def _gateway_from_env() -> PaymentGateway:
    name = os.environ.get("PAYMENT_GATEWAY", "fake").lower()
    if name == "fake":
        return FakeGateway()
    if name == "mercadopago":
        return MercadoPagoGateway(
            access_token=os.environ["MERCADOPAGO_ACCESS_TOKEN"],
            user_id=os.environ["MERCADOPAGO_USER_ID"],
            pos_id=os.environ["MERCADOPAGO_POS_ID"],
            webhook_secret=os.environ["MERCADOPAGO_WEBHOOK_SECRET"],
            notification_url=os.environ.get("MERCADOPAGO_NOTIFICATION_URL"),
            base_url=os.environ.get("MERCADOPAGO_BASE_URL", DEFAULT_BASE_URL),
        )
    raise ValueError(f"Unknown payment gateway: {name}")


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, building it from the environment on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _gateway_from_env()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
