"""
API Router for Orders

Responsibility:
    HTTP interface for the order lifecycle: checkout, reads, payment,
    cancellation, deletion and currency conversion of totals.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Writes go through OrderService, reads through GetOrderQueryHandler (CQRS)
    - Background payment is handed to the Celery process_payment task
    - Errors are raised and converted by global handlers in main.py

Contains:
    - POST   /orders                      - Place order from cart
    - GET    /orders                      - List orders
    - GET    /orders/{order_id}           - Get order
    - POST   /orders/{order_id}/payment   - Pay order (sync or background)
    - POST   /orders/{order_id}/cancel    - Cancel order
    - DELETE /orders/{order_id}           - Delete order
    - GET    /orders/{order_id}/total     - Total in order or other currency
"""

import logging
from typing import Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, Response, status

from src.api.dependencies import get_order_service, get_query_handler
from src.api.schemas.common import ErrorResponse
from src.api.schemas.orders import (
    OrderTotalResponse,
    PaymentQueuedResponse,
    PaymentResponse,
    PlaceOrderRequest,
)
from src.application.commands.place_order import PlaceOrderCommand
from src.application.models import PaymentStatus
from src.application.queries.get_order import (
    GetOrderQuery,
    GetOrderQueryHandler,
    OrderResult,
)
from src.application.services.order_service import OrderService
from src.application.tasks.payment_tasks import process_payment_task

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/orders",
    tags=["orders"],
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request - Order rule violated"},
        404: {"model": ErrorResponse, "description": "Not Found - Order or cart not found"},
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    },
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=OrderResult,
    summary="Place an order from a shopping cart",
    description=(
        "Converts the cart into a CONFIRMED order and empties the cart. "
        "Fails with 400 when the cart is empty."
    ),
)
async def place_order(
    request: PlaceOrderRequest,
    service: OrderService = Depends(get_order_service),
) -> OrderResult:
    command = PlaceOrderCommand(
        cart_id=request.cart_id, customer_name=request.customer_name
    )
    order = await service.place_order(command)
    return OrderResult.from_entity(order)


@router.get(
    "",
    response_model=list[OrderResult],
    summary="List orders",
)
async def list_orders(
    handler: GetOrderQueryHandler = Depends(get_query_handler),
) -> list[OrderResult]:
    return await handler.handle_all()


@router.get(
    "/{order_id}",
    response_model=OrderResult,
    summary="Get order",
)
async def get_order(
    order_id: UUID = Path(..., description="Order ID"),
    handler: GetOrderQueryHandler = Depends(get_query_handler),
) -> OrderResult:
    return await handler.handle(GetOrderQuery(order_id=order_id))


@router.post(
    "/{order_id}/payment",
    response_model=Union[PaymentResponse, PaymentQueuedResponse],
    summary="Pay a confirmed order",
    description=(
        "Charges the order total. By default the charge runs in the request "
        "and the receipt is returned. With background=true the charge is "
        "queued on the Celery worker and 202 Accepted is returned."
    ),
    responses={
        202: {"model": PaymentQueuedResponse, "description": "Payment queued"},
        402: {"model": ErrorResponse, "description": "Payment declined"},
    },
)
async def pay_order(
    response: Response,
    order_id: UUID = Path(..., description="Order ID"),
    background: bool = Query(False, description="Process payment on the worker"),
    service: OrderService = Depends(get_order_service),
) -> Union[PaymentResponse, PaymentQueuedResponse]:
    if background:
        # Fail fast on unknown orders before queueing
        await service.get_order(order_id)
        task = process_payment_task.delay(str(order_id))
        logger.info(f"Queued payment for order {order_id} (task {task.id})")
        response.status_code = status.HTTP_202_ACCEPTED
        return PaymentQueuedResponse(order_id=order_id, task_id=task.id)

    receipt = await service.process_payment(order_id)
    return PaymentResponse.from_receipt(receipt, PaymentStatus.APPROVED.value)


@router.post(
    "/{order_id}/cancel",
    response_model=OrderResult,
    summary="Cancel an order",
    description="Allowed for PENDING and CONFIRMED orders only.",
)
async def cancel_order(
    order_id: UUID = Path(..., description="Order ID"),
    service: OrderService = Depends(get_order_service),
) -> OrderResult:
    order = await service.cancel_order(order_id)
    return OrderResult.from_entity(order)


@router.delete(
    "/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete an order",
)
async def delete_order(
    order_id: UUID = Path(..., description="Order ID"),
    service: OrderService = Depends(get_order_service),
) -> Response:
    await service.delete_order(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{order_id}/total",
    response_model=OrderTotalResponse,
    summary="Get order total, optionally converted",
    responses={
        422: {"model": ErrorResponse, "description": "No exchange rate for currency pair"},
    },
)
async def get_order_total(
    order_id: UUID = Path(..., description="Order ID"),
    currency: Optional[str] = Query(
        default=None, min_length=3, max_length=3, description="Target currency code"
    ),
    service: OrderService = Depends(get_order_service),
) -> OrderTotalResponse:
    order = await service.get_order(order_id)
    original = order.total()

    if currency is None:
        converted = original
    else:
        converted = await service.convert_order_total(order_id, currency)

    return OrderTotalResponse(
        order_id=order.id,
        amount=converted.amount,
        currency=converted.currency,
        original_amount=original.amount,
        original_currency=original.currency,
        converted=converted.currency != original.currency,
    )
