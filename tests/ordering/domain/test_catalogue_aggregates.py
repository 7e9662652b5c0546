"""Tests for the Customer and Product aggregates."""

import pytest
from ordering.customer.customer import Customer
from ordering.product.product import Product, ProductCategory
from protean.exceptions import ValidationError


class TestCustomer:
    def test_register(self):
        customer = Customer.register(name="Maria Silva", email="maria@example.com", cpf="12345678901")
        assert customer.name == "Maria Silva"
        assert customer.cpf == "12345678901"
        assert customer.registered_at is not None

    def test_cpf_is_optional(self):
        customer = Customer.register(name="Joao", email="joao@example.com")
        assert customer.cpf is None

    def test_name_is_required(self):
        with pytest.raises(ValidationError):
            Customer.register(name=None, email="joao@example.com")

    def test_invalid_email(self):
        with pytest.raises(ValidationError) as exc:
            Customer.register(name="Joao", email="joao.example.com")
        assert "email" in exc.value.messages

    def test_cpf_must_be_digits(self):
        with pytest.raises(ValidationError) as exc:
            Customer.register(name="Joao", email="joao@example.com", cpf="123.456.789")
        assert "cpf" in exc.value.messages


class TestProduct:
    def test_construction(self):
        product = Product(name="X-Burger", category=ProductCategory.SNACK.value, price=25.0)
        assert product.id is not None
        assert product.price == 25.0

    def test_unknown_category(self):
        with pytest.raises(ValidationError):
            Product(name="X-Burger", category="Appetizer", price=25.0)

    def test_price_must_be_positive(self):
        with pytest.raises(ValidationError):
            Product(name="Free lunch", category=ProductCategory.SNACK.value, price=0.0)
