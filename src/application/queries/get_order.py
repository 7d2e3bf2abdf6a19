"""
GetOrderQuery - CQRS Read Query

Query objects and handler for reading orders from the repository.
Part of CQRS pattern - separates read operations from write operations.

Responsibility:
    - Query: Data holder with order_id to look up
    - Result DTOs: Flat, JSON-friendly view of the Order aggregate
    - Handler: Executes query against OrderRepositoryProtocol

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Handler depends only on the Domain repository interface
    - DTOs are converted to API response models in the API Layer
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.ordering.entities.order import Order
from src.domain.ordering.repositories.order_repository import OrderRepositoryProtocol

logger = logging.getLogger(__name__)


class OrderNotFoundException(Exception):
    """
    Raised when an order does not exist in the repository.

    Attributes:
        order_id: UUID that was looked up
    """

    def __init__(self, order_id: UUID):
        self.order_id = order_id
        super().__init__(f"Order with ID {order_id} not found")


class CartNotFoundException(Exception):
    """
    Raised when a shopping cart does not exist (or has expired).

    Attributes:
        cart_id: UUID that was looked up
    """

    def __init__(self, cart_id: UUID):
        self.cart_id = cart_id
        super().__init__(f"Shopping cart with ID {cart_id} not found or expired")


class GetOrderQuery(BaseModel):
    """Query object containing the order ID to retrieve."""

    order_id: UUID = Field(description="Order ID")


class OrderItemResult(BaseModel):
    """Line item DTO."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


class OrderResult(BaseModel):
    """
    Result DTO returned by GetOrderQueryHandler.

    Attributes:
        order_id: Order UUID
        customer_name: Ordering customer
        order_date: When the order was placed
        status: OrderState value as string
        currency: Order currency code
        items: Line items with subtotals
        item_count: Total number of units
        total: Exact total (sum of subtotals)
        payment_reference: Gateway transaction ID (PAID orders only)
        updated_at: Last modification time
    """

    order_id: UUID
    customer_name: str
    order_date: datetime
    status: str
    currency: str
    items: list[OrderItemResult]
    item_count: int
    total: Decimal
    payment_reference: Optional[str] = None
    updated_at: datetime

    @classmethod
    def from_entity(cls, order: Order) -> "OrderResult":
        """Map Order aggregate to DTO."""
        return cls(
            order_id=order.id,
            customer_name=order.customer_name,
            order_date=order.order_date,
            status=order.state.value,
            currency=order.currency,
            items=[
                OrderItemResult(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=item.unit_price.amount,
                    subtotal=item.subtotal().amount,
                )
                for item in order.items
            ],
            item_count=order.item_count(),
            total=order.total().amount,
            payment_reference=order.payment_reference,
            updated_at=order.updated_at,
        )


class GetOrderQueryHandler:
    """
    Handler for reading orders.

    Architecture:
        API Layer -> QueryHandler -> OrderRepositoryProtocol

    Usage:
        handler = GetOrderQueryHandler(order_repository)
        result = await handler.handle(GetOrderQuery(order_id=order_id))
    """

    def __init__(self, order_repository: OrderRepositoryProtocol):
        """
        Initialize with dependencies.

        Args:
            order_repository: Implementation of OrderRepositoryProtocol
        """
        self.order_repository = order_repository

    async def handle(self, query: GetOrderQuery) -> OrderResult:
        """
        Retrieve a single order.

        Raises:
            OrderNotFoundException: If order does not exist
        """
        logger.debug(f"Retrieving order: {query.order_id}")

        order = await self.order_repository.get_by_id(query.order_id)
        if order is None:
            logger.warning(f"Order not found: {query.order_id}")
            raise OrderNotFoundException(query.order_id)

        return OrderResult.from_entity(order)

    async def handle_all(self) -> list[OrderResult]:
        """Retrieve all orders, oldest order_date first."""
        orders = await self.order_repository.get_all()
        orders.sort(key=lambda order: order.order_date)
        logger.debug(f"Retrieved {len(orders)} orders")
        return [OrderResult.from_entity(order) for order in orders]
