"""
Money Value Object.

Money represents a monetary amount in a single currency. It is the unit in
which line-item prices and order totals are expressed.

This is an immutable Value Object following DDD principles. Amounts are
held as Decimal so that sums of prices never pick up binary floating point
artefacts.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, DecimalException, InvalidOperation
from typing import TYPE_CHECKING, Any, Union

from src.domain.ordering.constants import CURRENCY_CODE_PATTERN, MONEY_QUANTUM
from src.domain.shared.exceptions import CurrencyMismatchError, InvalidMoneyError

# Import only for type checking to avoid circular dependency
if TYPE_CHECKING:
    from src.domain.ordering.services.exchange_rate_provider import (
        ExchangeRateProviderProtocol,
    )


AmountInput = Union[Decimal, int, float, str]


def _to_decimal(value: AmountInput) -> Decimal:
    """
    Convert supported amount input to Decimal.

    Floats go through str() so that 0.1 becomes Decimal("0.1"),
    not Decimal("0.1000000000000000055511151231257827...").

    Raises:
        InvalidMoneyError: If value cannot be parsed or is not finite
    """
    if isinstance(value, bool):
        raise InvalidMoneyError(
            "Amount must be a number, got bool", original_value=str(value)
        )

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation as e:
            raise InvalidMoneyError(
                f"Cannot parse amount from '{value}'", original_value=value
            ) from e
    else:
        raise InvalidMoneyError(
            f"Amount must be Decimal, int, float or str, got {type(value).__name__}",
            original_value=str(value),
        )

    if not amount.is_finite():
        raise InvalidMoneyError(
            f"Amount must be finite, got {amount}", original_value=str(value)
        )

    return amount


def _out_of_range(
    operation: str, amount: Decimal, error: DecimalException
) -> InvalidMoneyError:
    return InvalidMoneyError(
        f"Cannot {operation} {amount}: result exceeds Decimal precision ({type(error).__name__})",
        original_value=str(amount),
    )


@dataclass(frozen=True)
class Money:
    """
    Immutable Value Object representing an amount of money in one currency.

    Attributes:
        amount: Decimal amount (exact, not rounded)
        currency: Three-letter currency code, upper case (e.g. "USD", "EUR")

    Equality is based on value: Money("10.0", "USD") == Money("10.00", "USD").

    Examples:
        >>> price = Money(Decimal("19.99"), "usd")
        >>> price.currency
        'USD'
        >>> str(price * 3)
        '59.97 USD'
        >>> Money.zero("EUR").is_zero()
        True
    """

    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        """
        Validate and normalize amount and currency.

        Since the object is frozen, object.__setattr__ is used to store the
        normalized values.

        Raises:
            InvalidMoneyError: If amount or currency is invalid
        """
        object.__setattr__(self, "amount", _to_decimal(self.amount))

        if not isinstance(self.currency, str):
            raise InvalidMoneyError(
                f"Currency must be string, got {type(self.currency).__name__}"
            )

        currency = self.currency.strip().upper()
        if not CURRENCY_CODE_PATTERN.match(currency):
            raise InvalidMoneyError(
                f"Currency must be a 3-letter code, got '{self.currency}'",
                original_value=self.currency,
            )
        object.__setattr__(self, "currency", currency)

    @classmethod
    def of(cls, amount: AmountInput, currency: str) -> "Money":
        """
        Factory method accepting any supported amount type.

        Examples:
            >>> Money.of("12.50", "EUR")
            Money(amount=Decimal('12.50'), currency='EUR')
            >>> Money.of(3, "USD").amount
            Decimal('3')
        """
        return cls(_to_decimal(amount), currency)

    @classmethod
    def zero(cls, currency: str) -> "Money":
        """Create zero amount in given currency (identity for add)."""
        return cls(Decimal("0"), currency)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _ensure_same_currency(self, other: "Money", operation: str) -> None:
        if not isinstance(other, Money):
            raise InvalidMoneyError(
                f"Cannot {operation} Money and {type(other).__name__}"
            )
        if other.currency != self.currency:
            raise CurrencyMismatchError(
                f"Cannot {operation} {other.currency} and {self.currency}",
                left_currency=self.currency,
                right_currency=other.currency,
            )

    def add(self, other: "Money") -> "Money":
        """
        Add two amounts in the same currency.

        Raises:
            CurrencyMismatchError: If currencies differ
        """
        self._ensure_same_currency(other, "add")
        try:
            return Money(self.amount + other.amount, self.currency)
        except DecimalException as e:
            raise _out_of_range("add", self.amount, e) from e

    def subtract(self, other: "Money") -> "Money":
        """
        Subtract other from self (same currency). Result may be negative.

        Raises:
            CurrencyMismatchError: If currencies differ
        """
        self._ensure_same_currency(other, "subtract")
        try:
            return Money(self.amount - other.amount, self.currency)
        except DecimalException as e:
            raise _out_of_range("subtract", self.amount, e) from e

    def multiply(self, factor: Union[int, Decimal]) -> "Money":
        """
        Multiply amount by an integer quantity or Decimal factor.

        Floats are rejected; use Decimal for fractional factors.

        Raises:
            InvalidMoneyError: If factor is not int or Decimal
        """
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise InvalidMoneyError(
                f"Factor must be int or Decimal, got {type(factor).__name__}"
            )
        try:
            return Money(self.amount * factor, self.currency)
        except DecimalException as e:
            raise _out_of_range("multiply", self.amount, e) from e

    def __add__(self, other: "Money") -> "Money":
        return self.add(other)

    def __sub__(self, other: "Money") -> "Money":
        return self.subtract(other)

    def __mul__(self, factor: Union[int, Decimal]) -> "Money":
        return self.multiply(factor)

    __rmul__ = __mul__

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def __lt__(self, other: "Money") -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._ensure_same_currency(other, "compare")
        return self.amount < other.amount

    def __le__(self, other: "Money") -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._ensure_same_currency(other, "compare")
        return self.amount <= other.amount

    def __gt__(self, other: "Money") -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._ensure_same_currency(other, "compare")
        return self.amount > other.amount

    def __ge__(self, other: "Money") -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._ensure_same_currency(other, "compare")
        return self.amount >= other.amount

    def is_zero(self) -> bool:
        """Check if amount equals zero."""
        return self.amount == 0

    def is_negative(self) -> bool:
        """Check if amount is below zero."""
        return self.amount < 0

    # ------------------------------------------------------------------
    # Rounding and conversion
    # ------------------------------------------------------------------

    def rounded(self) -> "Money":
        """
        Round amount to minor units (2 decimal places, half-up).

        Business rule: totals are kept exact and only rounded when charged
        or displayed.

        Examples:
            >>> Money.of("10.005", "USD").rounded().amount
            Decimal('10.01')
            >>> Money.of("10.004", "USD").rounded().amount
            Decimal('10.00')

        Raises:
            InvalidMoneyError: If the amount has too many digits to keep cents
        """
        try:
            amount = self.amount.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
        except DecimalException as e:
            raise _out_of_range("round", self.amount, e) from e
        return Money(amount, self.currency)

    def convert_to(
        self, target_currency: str, rate_provider: "ExchangeRateProviderProtocol"
    ) -> "Money":
        """
        Convert to another currency using an exchange rate provider.

        Conversion steps:
        1. Normalize target currency code
        2. Return self unchanged if currencies are equal
        3. Ask provider for rate (source -> target)
        4. Multiply and round to minor units

        Args:
            target_currency: Currency code to convert to
            rate_provider: Implementation of ExchangeRateProviderProtocol

        Returns:
            New Money in target currency, rounded to 2 decimal places

        Raises:
            InvalidMoneyError: If target currency code is malformed or the
                converted amount is out of range
            ExchangeRateNotFoundError: If provider has no rate for the pair

        Examples:
            >>> provider = StaticExchangeRateProvider({("USD", "EUR"): Decimal("0.9")})
            >>> Money.of("10", "USD").convert_to("EUR", provider)
            Money(amount=Decimal('9.00'), currency='EUR')
        """
        target = Money.zero(target_currency).currency

        if target == self.currency:
            return self

        rate = rate_provider.get_rate(self.currency, target)
        try:
            converted = self.amount * rate
        except DecimalException as e:
            raise _out_of_range("convert", self.amount, e) from e
        return Money(converted, target).rounded()

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, str]:
        """
        Convert to JSON-serializable dictionary.

        Amount is serialized as string to preserve Decimal precision.

        Examples:
            >>> Money.of("12.50", "EUR").to_dict()
            {'amount': '12.50', 'currency': 'EUR'}
        """
        return {"amount": str(self.amount), "currency": self.currency}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Money":
        """
        Reconstruct Money from to_dict() output.

        Raises:
            KeyError: If 'amount' or 'currency' is missing
            InvalidMoneyError: If values are invalid
        """
        return cls.of(data["amount"], data["currency"])

    def __str__(self) -> str:
        """User-friendly representation, e.g. '12.50 USD'."""
        return f"{self.amount} {self.currency}"
