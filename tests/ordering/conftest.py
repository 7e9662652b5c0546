import pytest
from ordering.customer.customer import Customer
from ordering.gateway import reset_gateway, set_gateway
from ordering.gateway.fake_adapter import FakeGateway
from ordering.product.product import Product, ProductCategory
from protean import current_domain


@pytest.fixture(autouse=True)
def gateway():
    """A fresh FakeGateway for every test, recording the calls it receives."""
    fake = FakeGateway()
    set_gateway(fake)
    yield fake
    reset_gateway()


@pytest.fixture()
def customer():
    customer = Customer.register(name="Maria Silva", email="maria@example.com", cpf="12345678901")
    current_domain.repository_for(Customer).add(customer)
    return customer


@pytest.fixture()
def burger():
    product = Product(name="X-Burger", category=ProductCategory.SNACK.value, price=25.0)
    current_domain.repository_for(Product).add(product)
    return product


@pytest.fixture()
def soda():
    product = Product(name="Soda", category=ProductCategory.DRINK.value, price=6.5)
    current_domain.repository_for(Product).add(product)
    return product
