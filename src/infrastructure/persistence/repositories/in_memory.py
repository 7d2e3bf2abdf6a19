"""
In-Memory Repositories

Dictionary-backed implementations of the ordering repository Protocols.
Used by the API in development (ORDER_STORAGE_BACKEND=memory) and in tests.

Entities are stored as dictionaries (to_dict) and rebuilt on every read
(from_dict), so a caller mutating a loaded entity never changes stored state
until it calls save() again.
"""

import logging
from typing import Any, Optional
from uuid import UUID

from src.domain.ordering.entities.order import Order
from src.domain.ordering.entities.shopping_cart import ShoppingCart

logger = logging.getLogger(__name__)


class InMemoryOrderRepository:
    """Process-local OrderRepositoryProtocol implementation."""

    def __init__(self) -> None:
        self._orders: dict[UUID, dict[str, Any]] = {}

    async def save(self, order: Order) -> None:
        self._orders[order.id] = order.to_dict()
        logger.debug(f"Saved order {order.id} in memory")

    async def get_by_id(self, order_id: UUID) -> Optional[Order]:
        data = self._orders.get(order_id)
        return Order.from_dict(data) if data is not None else None

    async def delete(self, order_id: UUID) -> bool:
        return self._orders.pop(order_id, None) is not None

    async def get_all(self) -> list[Order]:
        return [Order.from_dict(data) for data in self._orders.values()]


class InMemoryShoppingCartRepository:
    """Process-local ShoppingCartRepositoryProtocol implementation (no expiry)."""

    def __init__(self) -> None:
        self._carts: dict[UUID, dict[str, Any]] = {}

    async def save(self, cart: ShoppingCart) -> None:
        self._carts[cart.id] = cart.to_dict()
        logger.debug(f"Saved cart {cart.id} in memory")

    async def get_by_id(self, cart_id: UUID) -> Optional[ShoppingCart]:
        data = self._carts.get(cart_id)
        return ShoppingCart.from_dict(data) if data is not None else None

    async def delete(self, cart_id: UUID) -> bool:
        return self._carts.pop(cart_id, None) is not None
