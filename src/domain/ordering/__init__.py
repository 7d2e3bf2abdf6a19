"""
Ordering Subdomain Module

Core business logic for orders and shopping carts.
Contains entities, value objects, service contracts, and repository interfaces.

This module is the main entry point for the ordering subdomain and re-exports
all public interfaces for use by Application Layer.

Exports:
    Entities:
        - Order: Aggregate root (customer order)
        - OrderState: Order lifecycle states
        - ShoppingCart: Line items before checkout

    Value Objects:
        - Money: Amount + currency
        - OrderItem: Order line
        - PaymentReceipt: Payment gateway outcome

    Services:
        - ExchangeRateProviderProtocol
        - PaymentGatewayProtocol

    Repository Interfaces:
        - OrderRepositoryProtocol
        - ShoppingCartRepositoryProtocol

Usage:
    >>> from src.domain.ordering import Order, OrderItem, Money
    >>> from src.domain.ordering.entities import ShoppingCart
"""

# Value Objects
from .value_objects import Money, OrderItem, PaymentReceipt

# Entities
from .entities import Order, OrderState, ShoppingCart

# Services
from .services import ExchangeRateProviderProtocol, PaymentGatewayProtocol

# Repository Interfaces
from .repositories import OrderRepositoryProtocol, ShoppingCartRepositoryProtocol

from . import constants

__all__ = [
    # Entities
    "Order",
    "OrderState",
    "ShoppingCart",
    # Value Objects
    "Money",
    "OrderItem",
    "PaymentReceipt",
    # Services
    "ExchangeRateProviderProtocol",
    "PaymentGatewayProtocol",
    # Repository Interfaces
    "OrderRepositoryProtocol",
    "ShoppingCartRepositoryProtocol",
    "constants",
]
