"""
Redis Order Repository

Concrete implementation of OrderRepositoryProtocol from Domain Layer.

Responsibility:
    - Store/retrieve Order aggregates as JSON documents in Redis
    - Optional TTL (ORDER_TTL_SECONDS, 0 = keep forever)
    - Serialize/deserialize through Order.to_dict() / Order.from_dict()

Architecture Notes:
    - Infrastructure Layer (implements Domain interface)
    - Dependency Inversion: Domain defines interface, Infrastructure implements
    - Shared connection pool from persistence.redis.connection
"""

import json
import logging
import os
from typing import Optional
from uuid import UUID

from redis import Redis
from redis.exceptions import RedisError

from src.domain.ordering.entities.order import Order
from src.infrastructure.persistence.redis.connection import get_redis_client

logger = logging.getLogger(__name__)

ORDER_KEY_PREFIX = "order:"


class RedisOrderRepository:
    """
    Redis-based implementation of OrderRepositoryProtocol.

    Storage Strategy:
        - Key pattern: "order:{uuid}"
        - Value: JSON serialized Order.to_dict()
        - TTL: ORDER_TTL_SECONDS (default 0 = persistent)

    Examples:
        >>> repo = RedisOrderRepository()
        >>> await repo.save(order)
        >>> loaded = await repo.get_by_id(order.id)
        >>> loaded.total() == order.total()
        True
    """

    def __init__(self, redis_client: Optional[Redis] = None) -> None:
        """
        Args:
            redis_client: Redis client (default: shared pool client)
        """
        self.redis: Redis = redis_client if redis_client is not None else get_redis_client()
        self.ttl: int = int(os.getenv("ORDER_TTL_SECONDS", "0"))

    def _get_key(self, order_id: UUID) -> str:
        """
        Examples:
            >>> repo._get_key(UUID("3fa85f64-5717-4562-b3fc-2c963f66afa6"))
            'order:3fa85f64-5717-4562-b3fc-2c963f66afa6'
        """
        return f"{ORDER_KEY_PREFIX}{order_id}"

    async def save(self, order: Order) -> None:
        """
        Store order (overwrites existing order with same UUID).

        Raises:
            RedisError: If Redis operation fails
        """
        key = self._get_key(order.id)
        payload = json.dumps(order.to_dict())
        try:
            if self.ttl > 0:
                self.redis.setex(key, self.ttl, payload)
            else:
                self.redis.set(key, payload)
        except RedisError as e:
            logger.error(f"Failed to save order {order.id}: {e}")
            raise
        logger.debug(f"Saved order {order.id} ({order.state.value})")

    async def get_by_id(self, order_id: UUID) -> Optional[Order]:
        """
        Load order by UUID.

        Returns:
            Order if found, None if missing or expired

        Raises:
            RedisError: If Redis operation fails
        """
        try:
            raw = self.redis.get(self._get_key(order_id))
        except RedisError as e:
            logger.error(f"Failed to load order {order_id}: {e}")
            raise
        if raw is None:
            return None
        return Order.from_dict(json.loads(raw))

    async def delete(self, order_id: UUID) -> bool:
        """
        Delete order.

        Returns:
            True if a stored order was removed, False if none existed
        """
        try:
            removed = self.redis.delete(self._get_key(order_id))
        except RedisError as e:
            logger.error(f"Failed to delete order {order_id}: {e}")
            raise
        return bool(removed)

    async def get_all(self) -> list[Order]:
        """
        Load every stored order (SCAN, no KEYS).

        Keys that expire between SCAN and GET are skipped.
        """
        orders: list[Order] = []
        try:
            for key in self.redis.scan_iter(match=f"{ORDER_KEY_PREFIX}*", count=100):
                raw = self.redis.get(key)
                if raw is not None:
                    orders.append(Order.from_dict(json.loads(raw)))
        except RedisError as e:
            logger.error(f"Failed to list orders: {e}")
            raise
        return orders
