"""
Currency Infrastructure Module

Exports:
    - StaticExchangeRateProvider: ExchangeRateProviderProtocol implementation
"""

from .static_exchange_rate_provider import StaticExchangeRateProvider

__all__ = ["StaticExchangeRateProvider"]
