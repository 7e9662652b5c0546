"""FastAPI routes for the Ordering domain — customers, products, orders, payments."""

import json
from dataclasses import asdict

from fastapi import APIRouter, Header, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from protean.utils.globals import current_domain
from pydantic import ValidationError as PydanticValidationError

from ordering.api.schemas import (
    AddOrderItemRequest,
    AddProductRequest,
    CheckoutRequest,
    CheckoutResponse,
    CustomerIdResponse,
    OpenOrderRequest,
    OrderResponse,
    PaymentWebhookRequest,
    ProductIdResponse,
    RegisterCustomerRequest,
    StatusResponse,
)
from ordering.customer.registration import RegisterCustomer
from ordering.domain import logger
from ordering.gateway import get_gateway
from ordering.order.checkout import CheckoutOrder
from ordering.order.dto import order_dto
from ordering.order.items import AddOrderItem
from ordering.order.opening import OpenOrder
from ordering.order.order import Order
from ordering.order.payment import ConfirmPayment
from ordering.product.management import AddProduct

APPROVED_PAYMENT_STATUS = "approved"

# ---------------------------------------------------------------------------
# Customer Router
# ---------------------------------------------------------------------------
customer_router = APIRouter(prefix="/customers", tags=["customers"])


@customer_router.post("", status_code=201, response_model=CustomerIdResponse)
async def register_customer(body: RegisterCustomerRequest) -> CustomerIdResponse:
    command = RegisterCustomer(
        name=body.name,
        email=body.email,
        cpf=body.cpf,
    )
    result = current_domain.process(command, asynchronous=False)
    return CustomerIdResponse(customer_id=result)


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        description=body.description,
        category=body.category.value,
        price=body.price,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/order", tags=["orders"])


@order_router.post("/open/", status_code=201, response_model=OrderResponse)
async def open_order(body: OpenOrderRequest) -> OrderResponse:
    """Open an empty order, optionally associated with a customer."""
    command = OpenOrder(customer_id=body.customer_id)
    result = current_domain.process(command, asynchronous=False)
    return OrderResponse(**result)


@order_router.post("/{order_id}/add/item", status_code=201, response_model=OrderResponse)
async def add_order_item(order_id: str, body: AddOrderItemRequest) -> OrderResponse:
    command = AddOrderItem(
        order_id=order_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderResponse(**result)


@order_router.post("/checkout", status_code=201, response_model=CheckoutResponse)
async def checkout_order(body: CheckoutRequest) -> CheckoutResponse:
    """Create an order from the given products and open its PIX payment.

    Responds with the gateway's confirmation, including the QR code payload.
    """
    command = CheckoutOrder(
        customer_id=body.customer_id,
        product_ids=json.dumps(body.product_ids),
    )
    confirmation = current_domain.process(command, asynchronous=False)
    return CheckoutResponse(**asdict(confirmation))


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    order = current_domain.repository_for(Order).get(order_id)
    return OrderResponse(**order_dto(order))


# ---------------------------------------------------------------------------
# Payment Router
# ---------------------------------------------------------------------------
payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post(
    "/webhook",
    response_model=StatusResponse,
    openapi_extra={"requestBody": {"content": {"application/json": {"schema": PaymentWebhookRequest.model_json_schema()}}}},
)
async def process_webhook(
    request: Request,
    x_gateway_signature: str = Header(default=""),
) -> StatusResponse:
    """Receive a payment notification from the gateway.

    The signature covers the raw request body, so it is checked before the
    body is parsed.
    """
    payload = await request.body()
    if not get_gateway().verify_webhook_signature(payload, x_gateway_signature):
        raise HTTPException(status_code=401, detail="Invalid webhook signature")

    try:
        body = PaymentWebhookRequest.model_validate_json(payload)
    except PydanticValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc

    if body.status != APPROVED_PAYMENT_STATUS:
        logger.info("Ignoring payment notification", order_id=body.order_id, payment_status=body.status)
        return StatusResponse(status="ignored")

    current_domain.process(ConfirmPayment(order_id=body.order_id), asynchronous=False)
    return StatusResponse(status="processed")
