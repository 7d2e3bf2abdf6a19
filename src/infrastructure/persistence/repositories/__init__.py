"""
Repository Implementations Module

Concrete implementations of Domain repository interfaces.

Exports:
    - RedisOrderRepository: Redis-based order storage
    - RedisShoppingCartRepository: Redis-based cart storage (TTL)
    - InMemoryOrderRepository: Dict-based order storage
    - InMemoryShoppingCartRepository: Dict-based cart storage
"""

from .in_memory import InMemoryOrderRepository, InMemoryShoppingCartRepository
from .redis_order_repository import RedisOrderRepository
from .redis_shopping_cart_repository import RedisShoppingCartRepository

__all__ = [
    "RedisOrderRepository",
    "RedisShoppingCartRepository",
    "InMemoryOrderRepository",
    "InMemoryShoppingCartRepository",
]
