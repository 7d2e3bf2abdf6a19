"""
PaymentReceipt Value Object

Result of a single charge attempt against a payment gateway.

Responsibility:
    - Carry gateway outcome (approved / declined) back to the domain
    - Keep the charged amount and transaction reference for auditing
    - Immutable value object

Architecture Notes:
    - Value Object (immutable, defined by values)
    - Uses Pydantic for validation (same as other gateway-facing DTOs)
    - Amount is stored as Decimal + currency code, Money is exposed via property
"""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.domain.ordering.value_objects.money import Money
from src.domain.shared.timestamps import to_utc, utc_now


class PaymentReceipt(BaseModel):
    """
    Immutable value object describing a payment attempt.

    Attributes:
        transaction_id: Gateway transaction reference
        order_id: Order that was charged
        amount: Charged amount (rounded to minor units)
        currency: Three-letter currency code
        succeeded: True if the gateway approved the charge
        message: Gateway message (reason for decline, or approval note)
        processed_at: When the gateway processed the request

    Examples:
        >>> receipt = PaymentReceipt.approved(
        ...     transaction_id="txn_1f2e",
        ...     order_id=order.id,
        ...     amount=Money.of("59.97", "USD"),
        ... )
        >>> receipt.succeeded
        True
        >>> str(receipt.money)
        '59.97 USD'
    """

    transaction_id: str = Field(min_length=1, description="Gateway transaction reference")
    order_id: UUID = Field(description="Charged order ID")
    amount: Decimal = Field(description="Charged amount")
    currency: str = Field(min_length=3, max_length=3, description="Currency code")
    succeeded: bool = Field(description="Whether the charge was approved")
    message: str = Field(default="", description="Gateway message")
    processed_at: datetime = Field(default_factory=utc_now)

    model_config = {"frozen": True}

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, value: str) -> str:
        """Currency codes are stored upper case."""
        return value.upper()

    @field_validator("processed_at")
    @classmethod
    def normalize_processed_at(cls, value: datetime) -> datetime:
        """Timestamps are stored as aware UTC."""
        return to_utc(value)

    @property
    def money(self) -> Money:
        """Charged amount as Money value object."""
        return Money(self.amount, self.currency)

    @classmethod
    def approved(
        cls, transaction_id: str, order_id: UUID, amount: Money, message: str = "Approved"
    ) -> "PaymentReceipt":
        """Factory for an approved charge."""
        return cls(
            transaction_id=transaction_id,
            order_id=order_id,
            amount=amount.amount,
            currency=amount.currency,
            succeeded=True,
            message=message,
        )

    @classmethod
    def declined(
        cls, transaction_id: str, order_id: UUID, amount: Money, message: str
    ) -> "PaymentReceipt":
        """Factory for a declined charge."""
        return cls(
            transaction_id=transaction_id,
            order_id=order_id,
            amount=amount.amount,
            currency=amount.currency,
            succeeded=False,
            message=message,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize receipt to JSON-compatible dictionary."""
        return {
            "transaction_id": self.transaction_id,
            "order_id": str(self.order_id),
            "amount": str(self.amount),
            "currency": self.currency,
            "succeeded": self.succeeded,
            "message": self.message,
            "processed_at": self.processed_at.isoformat(),
        }
