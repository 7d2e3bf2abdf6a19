"""
ExchangeRateProvider Domain Service Contract

Protocol (interface) used by Money.convert_to() to obtain conversion rates.

Architecture Notes:
- Protocol pattern (not ABC) for dependency inversion
- Domain only needs a rate; where it comes from (static table, external
  API) is an Infrastructure concern
"""

from decimal import Decimal
from typing import Protocol


class ExchangeRateProviderProtocol(Protocol):
    """
    Protocol defining interface for exchange rate lookup.

    Usage Example:
        provider = StaticExchangeRateProvider()
        rate = provider.get_rate("USD", "EUR")
        eur = Money.of("10", "USD").convert_to("EUR", provider)
    """

    def get_rate(self, source_currency: str, target_currency: str) -> Decimal:
        """
        Return multiplier converting source_currency amounts to target_currency.

        Args:
            source_currency: Three-letter code converted from
            target_currency: Three-letter code converted to

        Returns:
            Positive Decimal rate (1 for identical currencies)

        Raises:
            ExchangeRateNotFoundError: If no rate is known for the pair
        """
        ...
