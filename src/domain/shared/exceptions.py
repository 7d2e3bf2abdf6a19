"""
Domain Layer Exceptions

This module defines the exception hierarchy for the Domain Layer.
All domain-specific exceptions inherit from DomainException.

Responsibility:
    - Base exception class for domain errors
    - Type-safe error handling across layers
    - Clear separation from framework exceptions

Architecture Notes:
    - Part of Shared Domain (used across all subdomains)
    - API Layer maps each subclass to an HTTP status code
    - Infrastructure Layer should not raise DomainException (use own exceptions)
"""

from decimal import Decimal
from uuid import UUID


class DomainException(Exception):
    """
    Base exception for all domain layer errors.

    This exception serves as the root of the domain exception hierarchy.
    All domain-specific exceptions should inherit from this class to enable
    type-safe error handling in Application and API layers.

    Usage:
        - Catch this in Application Layer to handle all domain errors
        - API Layer converts to appropriate HTTP status codes

    Examples:
        >>> raise DomainException("Business rule violation")

        >>> try:
        ...     order.confirm()
        ... except DomainException as e:
        ...     logger.error(f"Domain error: {e}")
    """

    def __init__(self, message: str) -> None:
        """
        Initialize domain exception with error message.

        Args:
            message: Human-readable error description
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.__class__.__name__}: {self.message}"

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"{self.__class__.__name__}(message={self.message!r})"


class InvalidMoneyError(DomainException):
    """
    Raised when a Money value cannot be constructed.

    This exception is raised when:
    - Amount cannot be parsed as a decimal number
    - Amount is NaN or infinite
    - Currency code is not a three-letter ISO-4217 style code

    Examples:
        >>> raise InvalidMoneyError("Cannot parse amount from 'abc'", original_value="abc")
        >>> raise InvalidMoneyError("Currency must be a 3-letter code, got 'EURO'")
    """

    def __init__(self, message: str, original_value: str | None = None) -> None:
        """
        Initialize money validation error.

        Args:
            message: Error description
            original_value: Original input that caused the error (optional)
        """
        self.original_value = original_value
        super().__init__(message)


class CurrencyMismatchError(DomainException):
    """
    Raised when two Money values in different currencies are combined.

    Arithmetic, comparison and aggregation (order totals) are only defined
    for a single currency. Conversion must be explicit (Money.convert_to).

    Examples:
        >>> raise CurrencyMismatchError(
        ...     "Cannot add EUR to USD", left_currency="USD", right_currency="EUR"
        ... )
    """

    def __init__(
        self,
        message: str,
        left_currency: str | None = None,
        right_currency: str | None = None,
    ) -> None:
        """
        Initialize currency mismatch error.

        Args:
            message: Error description
            left_currency: Currency of the left-hand operand (optional)
            right_currency: Currency of the right-hand operand (optional)
        """
        self.left_currency = left_currency
        self.right_currency = right_currency
        super().__init__(message)


class InvalidOrderItemError(DomainException):
    """
    Raised when OrderItem validation fails.

    This exception is raised when:
    - product_id or product_name is empty
    - quantity is not a positive integer or exceeds the per-line limit
    - unit_price is not Money or is negative

    Examples:
        >>> raise InvalidOrderItemError("quantity must be >= 1, got 0", field_name="quantity")
    """

    def __init__(self, message: str, field_name: str | None = None) -> None:
        """
        Initialize order item validation error.

        Args:
            message: Error description
            field_name: Name of field that caused error (optional)
        """
        self.field_name = field_name
        super().__init__(message)


class InvalidOrderError(DomainException):
    """
    Raised when an Order business rule is violated.

    This exception is raised when:
    - customer_name is empty
    - Invalid state transition attempted (e.g. cancel a PAID order)
    - Confirming an order without items
    - Modifying an order that is no longer PENDING
    - Removing an item that is not part of the order

    Examples:
        >>> raise InvalidOrderError("Cannot confirm an order without items")
        >>> raise InvalidOrderError("customer_name cannot be empty", field_name="customer_name")
    """

    def __init__(self, message: str, field_name: str | None = None) -> None:
        """
        Initialize order validation error.

        Args:
            message: Error description
            field_name: Name of field that caused error (optional)
        """
        self.field_name = field_name
        super().__init__(message)


class InvalidShoppingCartError(DomainException):
    """
    Raised when a ShoppingCart operation is not allowed.

    This exception is raised when:
    - Removing a product that is not in the cart
    - Adding a product already in the cart with a different unit price
    - Removing a non-positive quantity
    - Checking out an empty cart

    Examples:
        >>> raise InvalidShoppingCartError("Product 'sku-1' is not in the cart")
    """

    def __init__(self, message: str, field_name: str | None = None) -> None:
        """
        Initialize shopping cart error.

        Args:
            message: Error description
            field_name: Name of field that caused error (optional)
        """
        self.field_name = field_name
        super().__init__(message)


class ExchangeRateNotFoundError(DomainException):
    """
    Raised when no exchange rate is known for a currency pair.

    Used by:
    - ExchangeRateProviderProtocol implementations
    - Money.convert_to()

    Examples:
        >>> raise ExchangeRateNotFoundError(
        ...     "No exchange rate for USD/JPY",
        ...     source_currency="USD",
        ...     target_currency="JPY",
        ... )
    """

    def __init__(
        self,
        message: str,
        source_currency: str | None = None,
        target_currency: str | None = None,
    ) -> None:
        """
        Initialize missing exchange rate error.

        Args:
            message: Error description
            source_currency: Currency converted from (optional)
            target_currency: Currency converted to (optional)
        """
        self.source_currency = source_currency
        self.target_currency = target_currency
        super().__init__(message)


class PaymentDeclinedError(DomainException):
    """
    Raised when the payment gateway declines a charge.

    The order stays CONFIRMED so the payment can be retried.

    Attributes:
        order_id: Order that could not be paid
        amount: Charged amount (Decimal, in the order currency)

    Examples:
        >>> raise PaymentDeclinedError(
        ...     "Amount exceeds approval limit",
        ...     order_id=order.id,
        ...     amount=Decimal("25000.00"),
        ... )
    """

    def __init__(
        self,
        message: str,
        order_id: UUID | None = None,
        amount: Decimal | None = None,
    ) -> None:
        """
        Initialize payment declined error.

        Args:
            message: Error description (gateway message)
            order_id: Order identifier (optional)
            amount: Amount that was declined (optional)
        """
        self.order_id = order_id
        self.amount = amount
        super().__init__(message)


class InvalidPlaceOrderCommandError(DomainException):
    """
    Raised when PlaceOrderCommand validation fails.

    Collects every business rule violation so the caller gets complete
    feedback in one response.

    Attributes:
        errors: List of validation error messages

    Examples:
        >>> raise InvalidPlaceOrderCommandError(
        ...     "Invalid place order command",
        ...     errors=["customer_name cannot be blank"],
        ... )
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        """
        Initialize command validation error.

        Args:
            message: Primary error message
            errors: Optional list of specific validation errors
        """
        self.errors = errors or []
        if self.errors:
            detailed_message = f"{message}:\n" + "\n".join(f"  - {err}" for err in self.errors)
            super().__init__(detailed_message)
        else:
            super().__init__(message)
