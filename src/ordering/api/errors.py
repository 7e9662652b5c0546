"""Map domain and gateway failures onto HTTP responses.

Malformed requests answer 400. Requests that are well formed but cannot be
honoured (unknown customer, product or order; a business rule; a payment
gateway refusal) answer 406 Not Acceptable.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from ordering.domain import logger
from ordering.gateway.port import PaymentGatewayError


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


async def _object_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    logger.info("Lookup failed", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_406_NOT_ACCEPTABLE,
        content={"error": str(exc)},
    )


async def _domain_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Business rule violated", path=request.url.path, error=exc.messages)
    return JSONResponse(
        status_code=status.HTTP_406_NOT_ACCEPTABLE,
        content={"error": exc.messages},
    )


async def _payment_gateway_error(request: Request, exc: PaymentGatewayError) -> JSONResponse:
    logger.warning("Payment gateway failure", path=request.url.path, order_id=exc.order_id, reason=exc.reason)
    return JSONResponse(
        status_code=status.HTTP_406_NOT_ACCEPTABLE,
        content={"error": exc.reason},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, _object_not_found)
    app.add_exception_handler(ValidationError, _domain_validation_error)
    app.add_exception_handler(PaymentGatewayError, _payment_gateway_error)
