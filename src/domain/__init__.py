"""
Domain Layer - Core Business Logic

Heart of the ordering application. Contains all business rules, entities,
value objects, and domain service contracts. Framework-independent and
highly testable.

Architecture:
    - Clean Architecture: Domain Layer is the center, no external dependencies
    - Domain-Driven Design: Entities, Value Objects, Aggregates, Repositories
    - Dependency Inversion: Domain defines interfaces, Infrastructure implements

Subdomains:
    - ordering: Orders, shopping carts, money
    - shared: Cross-subdomain concepts (exceptions)

Usage:
    >>> from src.domain import Order, Money, DomainException
    >>> from src.domain.ordering.entities import ShoppingCart
"""

# Ordering Subdomain
from .ordering import (
    Money,
    Order,
    OrderItem,
    OrderRepositoryProtocol,
    OrderState,
    ShoppingCart,
    ShoppingCartRepositoryProtocol,
)

# Shared Domain
from .shared import DomainException

__all__ = [
    # Ordering Subdomain
    "Order",
    "OrderState",
    "OrderItem",
    "ShoppingCart",
    "Money",
    "OrderRepositoryProtocol",
    "ShoppingCartRepositoryProtocol",
    # Shared Domain
    "DomainException",
]
