"""Mercado Pago payment gateway adapter (instore dynamic PIX QR codes).

Creates an instore order on the configured point of sale; Mercado Pago answers
with the QR payload the customer scans. The order id travels as
``external_reference`` so payment notifications can be matched back to it.

Payment notifications reach ``POST /payments/webhook`` through a relay that
resolves the Mercado Pago notification to its ``external_reference`` and posts
``{"order_id": ..., "status": ...}``, signing the raw body with HMAC-SHA256
under the shared webhook secret.
"""

import hashlib
import hmac

import requests
import structlog

from ordering.gateway.port import CheckoutConfirmation, PaymentGateway, PaymentGatewayError, PaymentMethod

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://api.mercadopago.com"
DEFAULT_TIMEOUT = 10


class MercadoPagoGateway(PaymentGateway):
    def __init__(
        self,
        access_token: str,
        user_id: str,
        pos_id: str,
        webhook_secret: str,
        notification_url: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.access_token = access_token
        self.user_id = user_id
        self.pos_id = pos_id
        self.webhook_secret = webhook_secret
        self.notification_url = notification_url
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def qr_url(self) -> str:
        return f"{self.base_url}/instore/orders/qr/seller/collectors/{self.user_id}/pos/{self.pos_id}/qrs"

    def _build_payload(self, order: dict) -> dict:
        items = [
            {
                "sku_number": item["product_id"],
                "title": item["product_name"],
                "unit_price": item["unit_price"],
                "quantity": item["quantity"],
                "unit_measure": "unit",
                "total_amount": item["unit_price"] * item["quantity"],
            }
            for item in order["items"]
        ]
        payload = {
            "external_reference": order["id"],
            "title": f"Order {order['id']}",
            "description": f"{len(items)} item(s)",
            "total_amount": order["total"],
            "items": items,
        }
        if self.notification_url:
            payload["notification_url"] = self.notification_url
        return payload

    def execute(self, order: dict, payment_method: PaymentMethod) -> CheckoutConfirmation:
        if payment_method is not PaymentMethod.PIX:
            raise PaymentGatewayError(f"Unsupported payment method: {payment_method.value}", order_id=order["id"])

        try:
            response = self.session.post(
                self.qr_url,
                json=self._build_payload(order),
                headers={"Authorization": f"Bearer {self.access_token}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Mercado Pago request failed", order_id=order["id"], error=str(exc))
            raise PaymentGatewayError(f"Payment gateway unreachable: {exc}", order_id=order["id"]) from exc

        if not response.ok:
            logger.warning(
                "Mercado Pago rejected checkout",
                order_id=order["id"],
                status_code=response.status_code,
            )
            raise PaymentGatewayError(
                f"Payment gateway returned {response.status_code}: {response.text[:200]}",
                order_id=order["id"],
            )

        body = response.json()
        return CheckoutConfirmation(
            order_id=order["id"],
            payment_id=body["in_store_order_id"],
            payment_method=payment_method.value,
            amount=order["total"],
            qr_code=body["qr_data"],
        )

    def verify_webhook_signature(self, payload: bytes, signature: str) -> bool:
        expected = hmac.new(self.webhook_secret.encode(), payload, hashlib.sha256).hexdigest()
        return hmac.compare_digest(expected, signature)
