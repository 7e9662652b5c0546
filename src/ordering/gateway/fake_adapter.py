"""Configurable fake payment gateway for development and testing.

Simulates the PIX gateway without any external calls. It can be configured
at runtime to succeed or fail and records every call it receives, so tests
can assert on what checkout sent to the gateway.
"""

from uuid import uuid4

from ordering.gateway.port import CheckoutConfirmation, PaymentGateway, PaymentGatewayError, PaymentMethod


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Payment refused"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Payment refused") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def execute(self, order: dict, payment_method: PaymentMethod) -> CheckoutConfirmation:
        self.calls.append(
            {
                "method": "execute",
                "order": order,
                "payment_method": payment_method.value,
            }
        )

        if not self.should_succeed:
            raise PaymentGatewayError(self.failure_reason, order_id=order["id"])

        payment_id = f"fake_pix_{uuid4().hex[:12]}"
        return CheckoutConfirmation(
            order_id=order["id"],
            payment_id=payment_id,
            payment_method=payment_method.value,
            amount=order["total"],
            qr_code=f"00020101021226830014br.gov.bcb.pix2561fake/{payment_id}5204000053039865802BR",
        )

    def verify_webhook_signature(self, payload: bytes, signature: str) -> bool:  # noqa: ARG002
        return signature == "test-signature"
