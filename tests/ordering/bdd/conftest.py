"""Shared BDD fixtures and step definitions for the Ordering domain."""

import json

import pytest
from ordering.gateway.port import PaymentGatewayError
from ordering.order.checkout import CheckoutOrder
from ordering.order.order import Order
from ordering.order.payment import ConfirmPayment
from ordering.product.product import Product, ProductCategory
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from pytest_bdd import given, parsers, then, when


@pytest.fixture()
def catalogue():
    """Product name → persisted Product."""
    return {}


@pytest.fixture()
def outcome():
    """Container for the checkout result or the exception it raised."""
    return {"confirmation": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the catalogue has a product "{name}" priced {price:f}'))
def _(catalogue, name, price):
    product = Product(name=name, category=ProductCategory.SNACK.value, price=price)
    current_domain.repository_for(Product).add(product)
    catalogue[name] = product


@given(parsers.cfparse('the payment gateway refuses payments with "{reason}"'))
def _(gateway, reason):
    gateway.configure(should_succeed=False, failure_reason=reason)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('a guest checks out "{names}"'))
def _(catalogue, outcome, names):
    product_ids = []
    for name in (n.strip() for n in names.split(",")):
        product = catalogue.get(name)
        product_ids.append(str(product.id) if product else f"unknown-{name}")

    try:
        outcome["confirmation"] = current_domain.process(
            CheckoutOrder(product_ids=json.dumps(product_ids)),
            asynchronous=False,
        )
    except (ObjectNotFoundError, PaymentGatewayError) as exc:
        outcome["exc"] = exc


@when("the gateway confirms the payment")
def _(outcome):
    current_domain.process(ConfirmPayment(order_id=outcome["confirmation"].order_id), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the checkout succeeds with amount {amount:f}"))
def _(outcome, amount):
    assert outcome["exc"] is None
    assert outcome["confirmation"].amount == pytest.approx(amount)


@then(parsers.cfparse('the order is stored as "{status}" with {count:d} items'))
def _(outcome, status, count):
    order = current_domain.repository_for(Order).get(outcome["confirmation"].order_id)
    assert order.status == status
    assert len(order.items) == count


@then("every stored item has quantity 1")
def _(outcome):
    order = current_domain.repository_for(Order).get(outcome["confirmation"].order_id)
    assert all(item.quantity == 1 for item in order.items)


@then("the checkout fails because something was not found")
def _(outcome):
    assert isinstance(outcome["exc"], ObjectNotFoundError)


@then(parsers.cfparse('the checkout fails with gateway reason "{reason}"'))
def _(outcome, reason):
    assert isinstance(outcome["exc"], PaymentGatewayError)
    assert outcome["exc"].reason == reason


@then("the payment gateway was not called")
def _(gateway):
    assert gateway.calls == []


@then("no order is stored")
def _():
    assert current_domain.repository_for(Order)._dao.query.all().total == 0
