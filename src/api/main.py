"""
FastAPI Application Setup

Main entry point for the Ordering API application.

Responsibility:
    - Build the Ordering API app (create_app)
    - Router registration (carts, orders)
    - CORS middleware configuration
    - Global exception handlers
    - Request logging middleware
    - Health check endpoint

Architecture Notes:
    - API Layer entry point, served by uvicorn
    - Domain and lookup errors become ErrorResponse bodies here, routers only raise

Error mapping (all bodies use ErrorResponse):
    - DomainException -> 400 Bad Request
    - PaymentDeclinedError -> 402 Payment Required
    - ExchangeRateNotFoundError -> 422 Unprocessable Entity
    - OrderNotFoundException / CartNotFoundException -> 404 Not Found
    - Any other exception -> 500 Internal Server Error
"""

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.api.routers import carts, orders
from src.api.schemas.common import ErrorResponse
from src.application.queries.get_order import (
    CartNotFoundException,
    OrderNotFoundException,
)
from src.domain.shared.exceptions import (
    DomainException,
    ExchangeRateNotFoundError,
    PaymentDeclinedError,
)

# Configure logger
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


# ============================================================================
# RESPONSE MODELS
# ============================================================================


class HealthCheckResponse(BaseModel):
    """
    Body of GET /health.

    Attributes:
        status: "ok" whenever the process answers
        version: API_VERSION
        timestamp: Server time (Unix seconds)
    """

    status: str = "ok"
    version: str = API_VERSION
    timestamp: float


# ============================================================================
# MIDDLEWARE
# ============================================================================


async def request_logging_middleware(request: Request, call_next):
    """
    Log method, path, status code and duration of every request.

    Logging Format:
        INFO: "Incoming request: POST /api/orders"
        INFO: "Request completed: POST /api/orders - 201 - 0.004s"
    """
    logger.info(f"Incoming request: {request.method} {request.url.path}")
    start_time = time.time()

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"Request completed: {request.method} {request.url.path} - "
        f"{response.status_code} - {duration:.3f}s"
    )
    return response


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================


def _error_code(exc: Exception) -> str:
    """InvalidOrderError -> INVALID_ORDER, CurrencyMismatchError -> CURRENCY_MISMATCH."""
    name = exc.__class__.__name__.removesuffix("Error").removesuffix("Exception")
    return "".join(f"_{c}" if c.isupper() else c for c in name).lstrip("_").upper()


async def domain_exception_handler(request: Request, exc: DomainException):
    """
    Global exception handler for domain layer exceptions.

    Mapping:
        - PaymentDeclinedError -> 402 Payment Required
        - ExchangeRateNotFoundError -> 422 Unprocessable Entity
        - Other DomainException -> 400 Bad Request
    """
    details: dict = {"exception_type": exc.__class__.__name__}

    if isinstance(exc, PaymentDeclinedError):
        status_code = status.HTTP_402_PAYMENT_REQUIRED
        details["order_id"] = str(exc.order_id) if exc.order_id else None
        details["amount"] = str(exc.amount) if exc.amount is not None else None
    elif isinstance(exc, ExchangeRateNotFoundError):
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
        details["source_currency"] = exc.source_currency
        details["target_currency"] = exc.target_currency
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    error_response = ErrorResponse(
        code=_error_code(exc),
        message=exc.message,
        details=details,
    )

    logger.warning(
        f"Domain exception: {exc.__class__.__name__} - {exc.message} - "
        f"Request: {request.method} {request.url.path}"
    )

    return JSONResponse(status_code=status_code, content=error_response.model_dump())


async def order_not_found_exception_handler(request: Request, exc: OrderNotFoundException):
    """Convert OrderNotFoundException to 404 Not Found."""
    logger.warning(
        f"Order not found: {exc.order_id} - Request: {request.method} {request.url.path}"
    )
    error_response = ErrorResponse(
        code="ORDER_NOT_FOUND",
        message=str(exc),
        details={"order_id": str(exc.order_id)},
    )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND, content=error_response.model_dump()
    )


async def cart_not_found_exception_handler(request: Request, exc: CartNotFoundException):
    """Convert CartNotFoundException to 404 Not Found."""
    logger.warning(
        f"Cart not found: {exc.cart_id} - Request: {request.method} {request.url.path}"
    )
    error_response = ErrorResponse(
        code="CART_NOT_FOUND",
        message=str(exc),
        details={"cart_id": str(exc.cart_id)},
    )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND, content=error_response.model_dump()
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """
    Catch-all for unexpected exceptions (500 Internal Server Error).

    Logs full stack trace for debugging.
    """
    error_response = ErrorResponse(
        code="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred",
        details={"error": str(exc), "type": exc.__class__.__name__},
    )

    logger.error(
        f"Unexpected error: {exc.__class__.__name__} - {str(exc)} - "
        f"Request: {request.method} {request.url.path}",
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(),
    )


# ============================================================================
# APP FACTORY
# ============================================================================


def create_app() -> FastAPI:
    """
    FastAPI application factory.

    Configuration:
        - Title: Ordering API
        - CORS: Allow all origins (development mode)
        - Routers: /api/carts, /api/orders
        - Health: GET /health

    Usage:
        >>> app = create_app()
        >>> # uvicorn src.api.main:app --reload
    """
    app = FastAPI(
        title="Ordering API",
        version=API_VERSION,
        description=(
            "Shopping carts and orders: build a cart, check out, pay, "
            "cancel and convert order totals between currencies."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Production: restrict to specific origins
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(request_logging_middleware)

    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(OrderNotFoundException, order_not_found_exception_handler)
    app.add_exception_handler(CartNotFoundException, cart_not_found_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.include_router(carts.router, prefix="/api")
    app.include_router(orders.router, prefix="/api")

    @app.get(
        "/health",
        response_model=HealthCheckResponse,
        status_code=status.HTTP_200_OK,
        summary="Health check endpoint",
        tags=["health"],
    )
    async def health_check() -> HealthCheckResponse:
        return HealthCheckResponse(status="ok", version=API_VERSION, timestamp=time.time())

    logger.info("FastAPI application created successfully")
    logger.info("Registered routers: /api/carts, /api/orders")

    return app


# ============================================================================
# APP INSTANCE (for uvicorn)
# ============================================================================

# Usage: uvicorn src.api.main:app --reload
app = create_app()
