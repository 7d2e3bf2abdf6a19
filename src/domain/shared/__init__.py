"""
Shared Domain Module

Shared domain concepts used across all subdomains.
Contains the domain exception hierarchy.

This module exports:
    - DomainException: Base exception for all domain errors
    - Specific exceptions for money, orders, carts, exchange rates and payments
"""

from .exceptions import (
    CurrencyMismatchError,
    DomainException,
    ExchangeRateNotFoundError,
    InvalidMoneyError,
    InvalidOrderError,
    InvalidOrderItemError,
    InvalidPlaceOrderCommandError,
    InvalidShoppingCartError,
    PaymentDeclinedError,
)

__all__ = [
    "DomainException",
    "InvalidMoneyError",
    "CurrencyMismatchError",
    "InvalidOrderItemError",
    "InvalidOrderError",
    "InvalidShoppingCartError",
    "ExchangeRateNotFoundError",
    "PaymentDeclinedError",
    "InvalidPlaceOrderCommandError",
]
