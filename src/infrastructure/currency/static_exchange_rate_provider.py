"""
Static Exchange Rate Provider

ExchangeRateProviderProtocol implementation backed by a fixed rate table.

Rate sources (first match wins):
    1. rates argument: {("USD", "EUR"): Decimal("0.92")}
    2. EXCHANGE_RATES env var: JSON object {"USD/EUR": "0.92", ...}
    3. DEFAULT_RATES table below

Lookup rules:
    - Same currency: Decimal(1)
    - Direct pair configured: that rate
    - Only reverse pair configured: 1 / reverse rate
    - Otherwise: ExchangeRateNotFoundError
"""

import json
import logging
import os
from decimal import Decimal, InvalidOperation
from typing import Mapping, Optional, Union

from src.domain.shared.exceptions import ExchangeRateNotFoundError

logger = logging.getLogger(__name__)

RateTable = Mapping[tuple[str, str], Union[Decimal, int, float, str]]

DEFAULT_RATES: dict[tuple[str, str], Decimal] = {
    ("USD", "EUR"): Decimal("0.92"),
    ("USD", "GBP"): Decimal("0.79"),
    ("USD", "PLN"): Decimal("4.00"),
    ("EUR", "GBP"): Decimal("0.86"),
    ("EUR", "PLN"): Decimal("4.35"),
}


def parse_rates(raw: str) -> dict[tuple[str, str], Decimal]:
    """
    Parse EXCHANGE_RATES JSON ({"USD/EUR": "0.92"}) into a rate table.

    Raises:
        ValueError: If JSON is malformed, a key is not "AAA/BBB"
            or a rate is not a positive number
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"EXCHANGE_RATES is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("EXCHANGE_RATES must be a JSON object")

    rates: dict[tuple[str, str], Decimal] = {}
    for pair, value in data.items():
        source, sep, target = pair.partition("/")
        if not sep or not source or not target:
            raise ValueError(f"Invalid currency pair '{pair}', expected 'AAA/BBB'")
        try:
            rate = Decimal(str(value))
        except InvalidOperation as e:
            raise ValueError(f"Invalid rate for {pair}: {value!r}") from e
        if not rate.is_finite() or rate <= 0:
            raise ValueError(f"Rate for {pair} must be positive, got {value!r}")
        rates[(source.strip().upper(), target.strip().upper())] = rate
    return rates


class StaticExchangeRateProvider:
    """
    Fixed-table exchange rates.

    Examples:
        >>> provider = StaticExchangeRateProvider({("USD", "EUR"): Decimal("0.5")})
        >>> provider.get_rate("USD", "EUR")
        Decimal('0.5')
        >>> provider.get_rate("EUR", "USD")
        Decimal('2')
    """

    def __init__(self, rates: Optional[RateTable] = None) -> None:
        if rates is None:
            raw = os.getenv("EXCHANGE_RATES")
            if raw:
                rates = parse_rates(raw)
                logger.info(f"Loaded {len(rates)} exchange rates from EXCHANGE_RATES")
            else:
                rates = DEFAULT_RATES
        self._rates: dict[tuple[str, str], Decimal] = {
            (source.upper(), target.upper()): Decimal(str(rate))
            for (source, target), rate in rates.items()
        }

    def get_rate(self, source_currency: str, target_currency: str) -> Decimal:
        source = source_currency.upper()
        target = target_currency.upper()

        if source == target:
            return Decimal(1)

        direct = self._rates.get((source, target))
        if direct is not None:
            return direct

        reverse = self._rates.get((target, source))
        if reverse is not None:
            return Decimal(1) / reverse

        logger.warning(f"No exchange rate for {source}/{target}")
        raise ExchangeRateNotFoundError(
            f"No exchange rate for {source}/{target}",
            source_currency=source,
            target_currency=target,
        )
