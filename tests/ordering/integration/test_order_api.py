"""Integration tests for Order API endpoints via TestClient."""

import hashlib
import hmac
import json
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api import (
    customer_router,
    order_router,
    payment_router,
    product_router,
    register_exception_handlers,
)
from ordering.gateway import set_gateway
from ordering.gateway.mercadopago_adapter import MercadoPagoGateway
from ordering.order.order import Order, OrderStatus
from protean import current_domain


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(customer_router)
    app.include_router(product_router)
    app.include_router(order_router)
    app.include_router(payment_router)
    register_exception_handlers(app)
    return TestClient(app)


def _register_customer(client):
    response = client.post(
        "/customers",
        json={"name": "Maria Silva", "email": "maria@example.com", "cpf": "12345678901"},
    )
    assert response.status_code == 201
    return response.json()["customer_id"]


def _add_product(client, name="X-Burger", category="Snack", price=25.0):
    response = client.post("/products", json={"name": name, "category": category, "price": price})
    assert response.status_code == 201
    return response.json()["product_id"]


def _open_order(client, customer_id=None):
    response = client.post("/order/open/", json={"customer_id": customer_id})
    assert response.status_code == 201
    return response.json()["id"]


class TestOpenOrderEndpoint:
    def test_open_guest_order(self, client):
        response = client.post("/order/open/", json={})
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == OrderStatus.OPEN.value
        assert body["items"] == []
        assert body["customer_id"] is None

    def test_open_customer_order(self, client):
        customer_id = _register_customer(client)
        order_id = _open_order(client, customer_id)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.customer_id == customer_id

    def test_unknown_customer_is_not_acceptable(self, client):
        response = client.post("/order/open/", json={"customer_id": "no-such-customer"})
        assert response.status_code == 406
        assert "error" in response.json()

    def test_malformed_body_is_bad_request(self, client):
        response = client.post("/order/open/", json={"customer_id": {"nested": True}})
        assert response.status_code == 400


class TestAddOrderItemEndpoint:
    def test_add_item(self, client):
        order_id = _open_order(client)
        product_id = _add_product(client)

        response = client.post(f"/order/{order_id}/add/item", json={"product_id": product_id, "quantity": 2})

        assert response.status_code == 201
        body = response.json()
        assert body["items"][0]["product_id"] == product_id
        assert body["items"][0]["quantity"] == 2
        assert body["total"] == 50.0

    def test_missing_quantity_is_bad_request(self, client):
        order_id = _open_order(client)
        product_id = _add_product(client)
        response = client.post(f"/order/{order_id}/add/item", json={"product_id": product_id})
        assert response.status_code == 400

    def test_zero_quantity_is_bad_request(self, client):
        order_id = _open_order(client)
        product_id = _add_product(client)
        response = client.post(f"/order/{order_id}/add/item", json={"product_id": product_id, "quantity": 0})
        assert response.status_code == 400

    def test_unknown_product_is_not_acceptable(self, client):
        order_id = _open_order(client)
        response = client.post(f"/order/{order_id}/add/item", json={"product_id": "nope", "quantity": 1})
        assert response.status_code == 406

    def test_unknown_order_is_not_acceptable(self, client):
        product_id = _add_product(client)
        response = client.post("/order/no-such-order/add/item", json={"product_id": product_id, "quantity": 1})
        assert response.status_code == 406


class TestCheckoutEndpoint:
    def test_checkout(self, client, gateway):
        customer_id = _register_customer(client)
        burger = _add_product(client)
        soda = _add_product(client, name="Soda", category="Drink", price=6.5)

        response = client.post(
            "/order/checkout",
            json={"customer_id": customer_id, "product_ids": [burger, burger, soda]},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["payment_method"] == "PIX"
        assert body["amount"] == 56.5
        assert body["qr_code"]

        order = current_domain.repository_for(Order).get(body["order_id"])
        assert order.status == OrderStatus.AWAITING_PAYMENT.value
        assert len(order.items) == 3
        assert len(gateway.calls) == 1

    def test_unknown_product_is_not_acceptable(self, client, gateway):
        response = client.post("/order/checkout", json={"product_ids": ["nope"]})
        assert response.status_code == 406
        assert gateway.calls == []

    def test_gateway_failure_is_not_acceptable(self, client, gateway):
        gateway.configure(should_succeed=False, failure_reason="PIX unavailable")
        burger = _add_product(client)

        response = client.post("/order/checkout", json={"product_ids": [burger]})

        assert response.status_code == 406
        assert response.json() == {"error": "PIX unavailable"}

    def test_missing_product_ids_is_bad_request(self, client):
        response = client.post("/order/checkout", json={"customer_id": None})
        assert response.status_code == 400


class TestGetOrderEndpoint:
    def test_get_order(self, client):
        order_id = _open_order(client)
        response = client.get(f"/order/{order_id}")
        assert response.status_code == 200
        assert response.json()["id"] == order_id

    def test_unknown_order(self, client):
        response = client.get("/order/no-such-order")
        assert response.status_code == 406


class TestPaymentWebhookEndpoint:
    def _checkout(self, client):
        burger = _add_product(client)
        response = client.post("/order/checkout", json={"product_ids": [burger]})
        return response.json()["order_id"]

    def test_approved_payment_marks_order_paid(self, client):
        order_id = self._checkout(client)

        response = client.post(
            "/payments/webhook",
            json={"order_id": order_id, "status": "approved"},
            headers={"X-Gateway-Signature": "test-signature"},
        )

        assert response.status_code == 200
        assert response.json() == {"status": "processed"}
        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.PAID.value

    def test_other_status_is_ignored(self, client):
        order_id = self._checkout(client)

        response = client.post(
            "/payments/webhook",
            json={"order_id": order_id, "status": "rejected"},
            headers={"X-Gateway-Signature": "test-signature"},
        )

        assert response.json() == {"status": "ignored"}
        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.AWAITING_PAYMENT.value

    def test_invalid_signature(self, client):
        order_id = self._checkout(client)

        response = client.post(
            "/payments/webhook",
            json={"order_id": order_id, "status": "approved"},
            headers={"X-Gateway-Signature": "forged"},
        )

        assert response.status_code == 401

    def test_paying_open_order_is_not_acceptable(self, client):
        order_id = _open_order(client)
        response = client.post(
            "/payments/webhook",
            json={"order_id": order_id, "status": "approved"},
            headers={"X-Gateway-Signature": "test-signature"},
        )
        assert response.status_code == 406


class TestMercadoPagoWebhook:
    SECRET = b"s3cret"

    @pytest.fixture(autouse=True)
    def mercadopago(self, gateway):  # installed over the FakeGateway
        set_gateway(
            MercadoPagoGateway(
                access_token="TEST-token",
                user_id="123",
                pos_id="POS001",
                webhook_secret=self.SECRET.decode(),
                session=MagicMock(),
            )
        )

    def _awaiting_payment_order(self, burger):
        order = Order.open()
        order.add_item(burger, 1)
        order.await_payment("PIX")
        current_domain.repository_for(Order).add(order)
        return str(order.id)

    def _post(self, client, payload, signature):
        return client.post(
            "/payments/webhook",
            content=payload,
            headers={"Content-Type": "application/json", "X-Gateway-Signature": signature},
        )

    def test_signature_over_compact_body_is_accepted(self, client, burger):
        order_id = self._awaiting_payment_order(burger)
        payload = json.dumps({"order_id": order_id, "status": "approved"}, separators=(",", ":")).encode()
        signature = hmac.new(self.SECRET, payload, hashlib.sha256).hexdigest()

        response = self._post(client, payload, signature)

        assert response.status_code == 200
        assert response.json() == {"status": "processed"}
        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.PAID.value

    def test_signature_over_reordered_keys_is_accepted(self, client, burger):
        order_id = self._awaiting_payment_order(burger)
        payload = ('{"status": "approved",  "order_id": "' + order_id + '"}').encode()
        signature = hmac.new(self.SECRET, payload, hashlib.sha256).hexdigest()

        response = self._post(client, payload, signature)

        assert response.status_code == 200
        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.PAID.value

    def test_tampered_body_is_rejected(self, client, burger):
        order_id = self._awaiting_payment_order(burger)
        signed = json.dumps({"order_id": order_id, "status": "rejected"}).encode()
        signature = hmac.new(self.SECRET, signed, hashlib.sha256).hexdigest()
        tampered = json.dumps({"order_id": order_id, "status": "approved"}).encode()

        response = self._post(client, tampered, signature)

        assert response.status_code == 401
        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.AWAITING_PAYMENT.value

    def test_signed_malformed_body_is_bad_request(self, client):
        payload = b'{"order_id": "order-001"}'
        signature = hmac.new(self.SECRET, payload, hashlib.sha256).hexdigest()

        response = self._post(client, payload, signature)

        assert response.status_code == 400


class TestCatalogueEndpoints:
    def test_register_customer_rejects_bad_cpf(self, client):
        response = client.post("/customers", json={"name": "Maria", "email": "m@example.com", "cpf": "123"})
        assert response.status_code == 400

    def test_add_product_rejects_unknown_category(self, client):
        response = client.post("/products", json={"name": "Soup", "category": "Starter", "price": 10.0})
        assert response.status_code == 400

    def test_register_customer_invalid_email_is_not_acceptable(self, client):
        response = client.post("/customers", json={"name": "Maria", "email": "no-at-sign"})
        assert response.status_code == 406
