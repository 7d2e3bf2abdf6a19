"""
ShoppingCartRepository Interface

Repository contract for ShoppingCart persistence. Carts are short-lived,
so implementations may expire them (Redis TTL).
"""

from typing import Optional, Protocol
from uuid import UUID

from ..entities.shopping_cart import ShoppingCart


class ShoppingCartRepositoryProtocol(Protocol):
    """Protocol defining the contract for ShoppingCart persistence."""

    async def save(self, cart: ShoppingCart) -> None:
        """Store a cart (insert or overwrite by ID)."""
        ...

    async def get_by_id(self, cart_id: UUID) -> Optional[ShoppingCart]:
        """Retrieve a cart by UUID, None if not found or expired."""
        ...

    async def delete(self, cart_id: UUID) -> bool:
        """Delete a cart, returning True if it existed."""
        ...
