"""
API Schemas Package

Contains shared Pydantic models for API Layer.
"""

from src.api.schemas.common import ErrorResponse
from src.api.schemas.orders import (
    AddCartItemRequest,
    CartItemResponse,
    CartResponse,
    CreateCartRequest,
    OrderTotalResponse,
    PaymentQueuedResponse,
    PaymentResponse,
    PlaceOrderRequest,
)

__all__ = [
    "ErrorResponse",
    "AddCartItemRequest",
    "CartItemResponse",
    "CartResponse",
    "CreateCartRequest",
    "OrderTotalResponse",
    "PaymentQueuedResponse",
    "PaymentResponse",
    "PlaceOrderRequest",
]
