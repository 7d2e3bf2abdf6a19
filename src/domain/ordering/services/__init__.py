"""
Ordering Domain Services Module

Contracts for operations that don't naturally fit into entities.

This module exports:
    - ExchangeRateProviderProtocol: Currency conversion rates (used by Money)
    - PaymentGatewayProtocol: Charging orders (used by OrderService)
"""

from .exchange_rate_provider import ExchangeRateProviderProtocol
from .payment_gateway import PaymentGatewayProtocol

__all__ = [
    "ExchangeRateProviderProtocol",
    "PaymentGatewayProtocol",
]
