"""HTTP mapping for domain exceptions.

Protean's handlers cover the generic cases (validation 400, not found 404).
Checkout, status-transition and persistence failures get their own codes on
top, with the same ``{"error": ...}`` body.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers as register_domain_exception_handlers

from ordering.order.errors import CheckoutError, InvalidStatusTransition, OrderPersistenceError

logger = structlog.get_logger(__name__)


async def _checkout_error(request: Request, exc: CheckoutError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"error": exc.messages, "code": exc.code})


async def _invalid_transition(request: Request, exc: InvalidStatusTransition) -> JSONResponse:
    return JSONResponse(status_code=409, content={"error": exc.messages})


async def _persistence_error(request: Request, exc: OrderPersistenceError) -> JSONResponse:
    logger.error("Order store unavailable", path=request.url.path)
    return JSONResponse(
        status_code=503,
        content={"error": "Your order could not be saved. Please try again."},
    )


def register_exception_handlers(app: FastAPI) -> None:
    register_domain_exception_handlers(app)
    app.add_exception_handler(CheckoutError, _checkout_error)
    app.add_exception_handler(InvalidStatusTransition, _invalid_transition)
    app.add_exception_handler(OrderPersistenceError, _persistence_error)
