"""
Infrastructure Layer - External Dependencies

Implements technical capabilities that support the Domain Layer.

Architecture:
    - Implements Domain repository and service Protocols (Dependency Inversion)
    - Depends on external libraries (Redis)
    - No Domain business logic (only technical implementations)

Modules:
    - persistence: Redis connection and repository implementations
    - payments: Payment gateway implementation
    - currency: Exchange rate provider implementation

Usage:
    >>> from src.infrastructure import InMemoryOrderRepository, SimulatedPaymentGateway
    >>> from src.infrastructure.persistence import RedisOrderRepository
"""

# Persistence
from .persistence import (
    InMemoryOrderRepository,
    InMemoryShoppingCartRepository,
    RedisOrderRepository,
    RedisShoppingCartRepository,
)

# Payments
from .payments import SimulatedPaymentGateway

# Currency
from .currency import StaticExchangeRateProvider

__all__ = [
    # Persistence
    "RedisOrderRepository",
    "RedisShoppingCartRepository",
    "InMemoryOrderRepository",
    "InMemoryShoppingCartRepository",
    # Payments
    "SimulatedPaymentGateway",
    # Currency
    "StaticExchangeRateProvider",
]
