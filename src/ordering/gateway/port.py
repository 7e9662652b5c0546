"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement, so the
checkout handler can run against FakeGateway (dev/test) or MercadoPagoGateway
(production) unchanged.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class PaymentMethod(Enum):
    PIX = "PIX"


class PaymentGatewayError(Exception):
    """The gateway refused or could not process a checkout."""

    def __init__(self, reason: str, order_id: str | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.order_id = order_id


@dataclass(frozen=True)
class CheckoutConfirmation:
    """Gateway-issued confirmation that a payment has been opened for an order."""

    order_id: str
    payment_id: str
    payment_method: str
    amount: float
    qr_code: str


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def execute(self, order: dict, payment_method: PaymentMethod) -> CheckoutConfirmation:
        """Open a payment for the order snapshot.

        Raises PaymentGatewayError when the gateway rejects the request.
        """
        ...

    @abstractmethod
    def verify_webhook_signature(self, payload: bytes, signature: str) -> bool:
        """Verify that a webhook payload is authentically from the gateway.

        ``payload`` is the raw request body, exactly as it was signed.
        """
        ...
