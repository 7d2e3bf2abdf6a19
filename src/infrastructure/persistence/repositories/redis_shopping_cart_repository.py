"""
Redis Shopping Cart Repository

Concrete implementation of ShoppingCartRepositoryProtocol.

Carts are session data: every save refreshes the TTL (CART_TTL_SECONDS,
default 24 hours) so abandoned carts expire on their own.
"""

import json
import logging
import os
from typing import Optional
from uuid import UUID

from redis import Redis
from redis.exceptions import RedisError

from src.domain.ordering.entities.shopping_cart import ShoppingCart
from src.infrastructure.persistence.redis.connection import get_redis_client

logger = logging.getLogger(__name__)


class RedisShoppingCartRepository:
    """
    Redis-based implementation of ShoppingCartRepositoryProtocol.

    Storage Strategy:
        - Key pattern: "cart:{uuid}"
        - Value: JSON serialized ShoppingCart.to_dict()
        - TTL: CART_TTL_SECONDS (default 86400)
    """

    def __init__(self, redis_client: Optional[Redis] = None) -> None:
        self.redis: Redis = redis_client if redis_client is not None else get_redis_client()
        self.ttl: int = int(os.getenv("CART_TTL_SECONDS", "86400"))

    def _get_key(self, cart_id: UUID) -> str:
        return f"cart:{cart_id}"

    async def save(self, cart: ShoppingCart) -> None:
        try:
            self.redis.setex(self._get_key(cart.id), self.ttl, json.dumps(cart.to_dict()))
        except RedisError as e:
            logger.error(f"Failed to save cart {cart.id}: {e}")
            raise
        logger.debug(f"Saved cart {cart.id} ({len(cart.items)} lines, ttl={self.ttl}s)")

    async def get_by_id(self, cart_id: UUID) -> Optional[ShoppingCart]:
        try:
            raw = self.redis.get(self._get_key(cart_id))
        except RedisError as e:
            logger.error(f"Failed to load cart {cart_id}: {e}")
            raise
        if raw is None:
            return None
        return ShoppingCart.from_dict(json.loads(raw))

    async def delete(self, cart_id: UUID) -> bool:
        try:
            return bool(self.redis.delete(self._get_key(cart_id)))
        except RedisError as e:
            logger.error(f"Failed to delete cart {cart_id}: {e}")
            raise
