"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules
and match the exact field names expected by the API's Pydantic request
schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker("pt_BR")

_MENU = {
    "Snack": ["X-Burger", "X-Salad", "X-Bacon", "Hot Dog"],
    "Side": ["Fries", "Onion Rings", "Nuggets"],
    "Drink": ["Soda", "Orange Juice", "Iced Tea"],
    "Dessert": ["Sundae", "Apple Pie", "Brownie"],
}


def customer_data() -> dict:
    """Generate RegisterCustomerRequest payload; CPF is 11 digits."""
    return {
        "name": fake.name()[:150],
        "email": f"{fake.user_name()[:20]}.{uuid.uuid4().hex[:4]}@{fake.free_email_domain()}",
        "cpf": "".join(random.choices("0123456789", k=11)),
    }


def product_data(category: str | None = None) -> dict:
    """Generate AddProductRequest payload from the fixed menu."""
    category = category or random.choice(list(_MENU))
    return {
        "name": random.choice(_MENU[category]),
        "description": fake.sentence(nb_words=8),
        "category": category,
        "price": round(random.uniform(4.5, 39.9), 2),
    }


def order_item_data(product_id: str) -> dict:
    return {"product_id": product_id, "quantity": random.randint(1, 3)}


def checkout_data(product_ids: list[str], customer_id: str | None = None) -> dict:
    """Pick 1-4 products (repeats allowed) for a checkout request."""
    return {
        "customer_id": customer_id,
        "product_ids": random.choices(product_ids, k=random.randint(1, 4)),
    }
