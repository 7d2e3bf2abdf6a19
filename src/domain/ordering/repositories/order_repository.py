"""
OrderRepository Interface

Repository pattern interface for Order aggregate persistence.
Defines the contract for storing, retrieving and deleting orders.

Responsibility:
    - Define data access contract (interface)
    - Enable Dependency Inversion (Domain defines, Infrastructure implements)
    - Support testing (easy to mock or replace with in-memory implementation)

Architecture Notes:
    - Repository Pattern (Martin Fowler)
    - Protocol-based interface (structural typing)
    - Async methods
    - Implementations in Infrastructure layer (Redis, in-memory)
"""

from typing import Optional, Protocol
from uuid import UUID

from ..entities.order import Order


class OrderRepositoryProtocol(Protocol):
    """
    Protocol defining the contract for Order persistence.

    This is a repository interface defined in the Domain Layer but implemented
    in the Infrastructure Layer. The repository works on whole aggregates:
    an Order is always saved and loaded together with its line items.

    Usage:
        Repository is injected into Application Layer services:

        >>> class OrderService:
        ...     def __init__(self, order_repository: OrderRepositoryProtocol, ...):
        ...         self.order_repository = order_repository
        ...
        ...     async def place_order(self, command):
        ...         order = Order.from_cart(cart, command.customer_name)
        ...         order.confirm()
        ...         await self.order_repository.save(order)
    """

    async def save(self, order: Order) -> None:
        """
        Store an order (insert or overwrite by ID).

        Args:
            order: Order aggregate to store

        Raises:
            Infrastructure error (e.g. RedisError) if storage fails
        """
        ...

    async def get_by_id(self, order_id: UUID) -> Optional[Order]:
        """
        Retrieve an order by its UUID.

        Args:
            order_id: UUID of the order

        Returns:
            Order if found, None otherwise
        """
        ...

    async def delete(self, order_id: UUID) -> bool:
        """
        Delete an order.

        Args:
            order_id: UUID of the order

        Returns:
            True if an order was deleted, False if it did not exist
        """
        ...

    async def get_all(self) -> list[Order]:
        """
        Retrieve all stored orders.

        Business Rules:
            - Order is not guaranteed (sort in Application layer if needed)
            - Empty list if no orders stored
        """
        ...
