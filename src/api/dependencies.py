"""
API Dependency Injection

Builds Application Layer objects for FastAPI endpoints (Depends).

Storage backend (ORDER_STORAGE_BACKEND):
    - memory (default): one process-wide pair of in-memory repositories
    - redis: Redis repositories on the shared connection pool

Tests replace get_order_service / get_query_handler through
app.dependency_overrides.
"""

import logging
import os
from functools import lru_cache

from src.application.models import StorageBackend
from src.application.queries.get_order import GetOrderQueryHandler
from src.application.services.order_service import OrderService
from src.domain.ordering.repositories.order_repository import OrderRepositoryProtocol
from src.domain.ordering.repositories.shopping_cart_repository import (
    ShoppingCartRepositoryProtocol,
)
from src.infrastructure.currency.static_exchange_rate_provider import (
    StaticExchangeRateProvider,
)
from src.infrastructure.payments.simulated_payment_gateway import (
    SimulatedPaymentGateway,
)
from src.infrastructure.persistence.repositories.in_memory import (
    InMemoryOrderRepository,
    InMemoryShoppingCartRepository,
)
from src.infrastructure.persistence.repositories.redis_order_repository import (
    RedisOrderRepository,
)
from src.infrastructure.persistence.repositories.redis_shopping_cart_repository import (
    RedisShoppingCartRepository,
)

logger = logging.getLogger(__name__)


def get_storage_backend() -> StorageBackend:
    """
    Read ORDER_STORAGE_BACKEND.

    Raises:
        ValueError: If the value is not a StorageBackend member
    """
    raw = os.getenv("ORDER_STORAGE_BACKEND", StorageBackend.MEMORY.value).strip().lower()
    try:
        return StorageBackend(raw)
    except ValueError as e:
        allowed = ", ".join(backend.value for backend in StorageBackend)
        raise ValueError(
            f"Unsupported ORDER_STORAGE_BACKEND '{raw}' (expected one of: {allowed})"
        ) from e


@lru_cache(maxsize=None)
def get_repositories(
    backend: StorageBackend,
) -> tuple[OrderRepositoryProtocol, ShoppingCartRepositoryProtocol]:
    """Repositories are created once per backend and shared by all requests."""
    logger.info(f"Using {backend.value} storage backend")
    if backend == StorageBackend.REDIS:
        return RedisOrderRepository(), RedisShoppingCartRepository()
    return InMemoryOrderRepository(), InMemoryShoppingCartRepository()


@lru_cache(maxsize=1)
def get_payment_gateway() -> SimulatedPaymentGateway:
    return SimulatedPaymentGateway()


@lru_cache(maxsize=1)
def get_rate_provider() -> StaticExchangeRateProvider:
    return StaticExchangeRateProvider()


def get_order_service() -> OrderService:
    """Dependency: OrderService wired for the configured backend."""
    order_repository, cart_repository = get_repositories(get_storage_backend())
    return OrderService(
        order_repository=order_repository,
        cart_repository=cart_repository,
        payment_gateway=get_payment_gateway(),
        rate_provider=get_rate_provider(),
    )


def get_query_handler() -> GetOrderQueryHandler:
    """Dependency: read-side handler sharing the service's order repository."""
    order_repository, _ = get_repositories(get_storage_backend())
    return GetOrderQueryHandler(order_repository=order_repository)
