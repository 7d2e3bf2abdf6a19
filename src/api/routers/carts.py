"""
API Router for Shopping Carts

Responsibility:
    HTTP interface for building a cart before checkout.

Contains:
    - POST   /carts                              - Create empty cart
    - GET    /carts/{cart_id}                    - Cart contents and total
    - POST   /carts/{cart_id}/items              - Add product (merges lines)
    - DELETE /carts/{cart_id}/items/{product_id} - Remove units or whole line

Does NOT contain:
    - Cart rules (ShoppingCart aggregate)
    - Storage (repositories via OrderService)
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from src.api.dependencies import get_order_service
from src.api.schemas.common import ErrorResponse
from src.api.schemas.orders import AddCartItemRequest, CartResponse, CreateCartRequest
from src.application.services.order_service import OrderService
from src.domain.ordering.constants import MAX_ITEM_QUANTITY, MIN_ITEM_QUANTITY

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/carts",
    tags=["carts"],
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request - Cart rule violated"},
        404: {"model": ErrorResponse, "description": "Not Found - Cart not found or expired"},
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    },
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CartResponse,
    summary="Create an empty shopping cart",
)
async def create_cart(
    request: Optional[CreateCartRequest] = None,
    service: OrderService = Depends(get_order_service),
) -> CartResponse:
    currency = request.currency if request else CreateCartRequest().currency
    cart = await service.create_cart(currency)
    return CartResponse.from_entity(cart)


@router.get(
    "/{cart_id}",
    response_model=CartResponse,
    summary="Get shopping cart",
)
async def get_cart(
    cart_id: UUID = Path(..., description="Cart ID"),
    service: OrderService = Depends(get_order_service),
) -> CartResponse:
    cart = await service.get_cart(cart_id)
    return CartResponse.from_entity(cart)


@router.post(
    "/{cart_id}/items",
    response_model=CartResponse,
    summary="Add a product to the cart",
    description=(
        "Adds units of a product. Adding a product already in the cart at the "
        "same unit price increases its quantity."
    ),
)
async def add_cart_item(
    request: AddCartItemRequest,
    cart_id: UUID = Path(..., description="Cart ID"),
    service: OrderService = Depends(get_order_service),
) -> CartResponse:
    cart = await service.get_cart(cart_id)
    cart = await service.add_to_cart(cart_id, request.to_order_item(cart.currency))
    return CartResponse.from_entity(cart)


@router.delete(
    "/{cart_id}/items/{product_id}",
    response_model=CartResponse,
    summary="Remove a product from the cart",
    description="Removes `quantity` units, or the whole line when quantity is omitted.",
)
async def remove_cart_item(
    cart_id: UUID = Path(..., description="Cart ID"),
    product_id: str = Path(..., description="Product identifier"),
    quantity: Optional[int] = Query(
        default=None, ge=MIN_ITEM_QUANTITY, le=MAX_ITEM_QUANTITY, description="Units to remove"
    ),
    service: OrderService = Depends(get_order_service),
) -> CartResponse:
    cart = await service.remove_from_cart(cart_id, product_id, quantity)
    return CartResponse.from_entity(cart)
