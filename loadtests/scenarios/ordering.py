"""Ordering load test scenarios.

Two stateful SequentialTaskSet journeys: a registered customer building an
order item by item and then checking out, and a guest doing a one-shot
checkout that the gateway later confirms through the webhook.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import checkout_data, customer_data, order_item_data, product_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import OrderDeskState

# Accepted by FakeGateway; the default gateway outside production
WEBHOOK_SIGNATURE = "test-signature"


class _CatalogueSetupMixin:
    def _seed_products(self, count=3):
        for _ in range(count):
            with self.client.post(
                "/products",
                json=product_data(),
                catch_response=True,
                name="POST /products",
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["product_id"])
                else:
                    resp.failure(f"Add product failed: {resp.status_code} — {extract_error_detail(resp)}")
        if not self.state.product_ids:
            self.interrupt()


class CustomerOrderJourney(_CatalogueSetupMixin, SequentialTaskSet):
    """Register -> Open Order -> Add Items -> Checkout.

    Generates events: OrderOpened, OrderItemAdded (x2) on the open order,
    then OrderOpened, OrderItemAdded, OrderAwaitingPayment for the checkout.
    """

    def on_start(self):
        self.state = OrderDeskState()
        self._seed_products()

    @task
    def register_customer(self):
        with self.client.post(
            "/customers",
            json=customer_data(),
            catch_response=True,
            name="POST /customers",
        ) as resp:
            if resp.status_code == 201:
                self.state.customer_id = resp.json()["customer_id"]
            else:
                resp.failure(f"Register failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def open_order(self):
        with self.client.post(
            "/order/open/",
            json={"customer_id": self.state.customer_id},
            catch_response=True,
            name="POST /order/open/",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["id"]
            else:
                resp.failure(f"Open order failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_items(self):
        for _ in range(2):
            with self.client.post(
                f"/order/{self.state.order_id}/add/item",
                json=order_item_data(random.choice(self.state.product_ids)),
                catch_response=True,
                name="POST /order/{id}/add/item",
            ) as resp:
                if resp.status_code != 201:
                    resp.failure(f"Add item failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def checkout(self):
        with self.client.post(
            "/order/checkout",
            json=checkout_data(self.state.product_ids, self.state.customer_id),
            catch_response=True,
            name="POST /order/checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.checkout_order_id = resp.json()["order_id"]
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class GuestCheckoutJourney(_CatalogueSetupMixin, SequentialTaskSet):
    """Checkout as guest -> Gateway webhook confirms payment."""

    def on_start(self):
        self.state = OrderDeskState()
        self._seed_products(count=2)

    @task
    def checkout(self):
        with self.client.post(
            "/order/checkout",
            json=checkout_data(self.state.product_ids),
            catch_response=True,
            name="POST /order/checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.checkout_order_id = resp.json()["order_id"]
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def confirm_payment(self):
        with self.client.post(
            "/payments/webhook",
            json={"order_id": self.state.checkout_order_id, "status": "approved"},
            headers={"X-Gateway-Signature": WEBHOOK_SIGNATURE},
            catch_response=True,
            name="POST /payments/webhook",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Webhook failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class OrderingUser(HttpUser):
    """Customers and guests placing food orders."""

    wait_time = between(1, 3)
    tasks = {CustomerOrderJourney: 2, GuestCheckoutJourney: 3}
