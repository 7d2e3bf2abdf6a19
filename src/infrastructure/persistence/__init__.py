"""
Persistence Infrastructure Module

Data persistence implementations (Redis connection, repositories).

Exports:
    From redis:
        - get_redis_client, health_check, close_connections

    From repositories:
        - RedisOrderRepository, RedisShoppingCartRepository
        - InMemoryOrderRepository, InMemoryShoppingCartRepository
"""

from .redis import close_connections, get_redis_client, health_check
from .repositories import (
    InMemoryOrderRepository,
    InMemoryShoppingCartRepository,
    RedisOrderRepository,
    RedisShoppingCartRepository,
)

__all__ = [
    "get_redis_client",
    "health_check",
    "close_connections",
    "RedisOrderRepository",
    "RedisShoppingCartRepository",
    "InMemoryOrderRepository",
    "InMemoryShoppingCartRepository",
]
