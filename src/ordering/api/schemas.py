"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands.
"""

from pydantic import BaseModel, Field

from ordering.product.product import ProductCategory


# ---------------------------------------------------------------------------
# Customer & Product Schemas
# ---------------------------------------------------------------------------
class RegisterCustomerRequest(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    email: str = Field(max_length=254)
    cpf: str | None = Field(default=None, pattern=r"^\d{11}$")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Maria Silva",
                    "email": "maria@example.com",
                    "cpf": "12345678901",
                }
            ]
        }
    }


class AddProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    category: ProductCategory
    price: float = Field(gt=0)


class CustomerIdResponse(BaseModel):
    customer_id: str


class ProductIdResponse(BaseModel):
    product_id: str


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class OpenOrderRequest(BaseModel):
    customer_id: str | None = None


class AddOrderItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1)


class CheckoutRequest(BaseModel):
    customer_id: str | None = None
    product_ids: list[str]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_id": None,
                    "product_ids": ["prod-001", "prod-001", "prod-002"],
                }
            ]
        }
    }


class PaymentWebhookRequest(BaseModel):
    order_id: str
    status: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    product_name: str | None = None
    unit_price: float
    quantity: int


class OrderResponse(BaseModel):
    id: str
    customer_id: str | None = None
    status: str
    items: list[OrderItemResponse]
    total: float


class CheckoutResponse(BaseModel):
    order_id: str
    payment_id: str
    payment_method: str
    amount: float
    qr_code: str


class StatusResponse(BaseModel):
    status: str = "ok"
