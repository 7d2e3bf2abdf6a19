"""
PlaceOrderCommand - CQRS Write Command

Encapsulates all data needed to convert a shopping cart into an order.
Part of CQRS pattern - separates write operations from read operations.

Responsibility:
    - Data holder for checkout initiation
    - Business rules validation (customer name, order date)
    - Mapped from the POST /api/orders request body

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Used by OrderService.place_order()
    - Immutable data structure (Command pattern)
    - Does NOT validate cart existence (OrderService responsibility)
"""

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.domain.ordering.constants import MAX_CUSTOMER_NAME_LENGTH
from src.domain.shared.exceptions import InvalidPlaceOrderCommandError
from src.domain.shared.timestamps import to_utc, utc_now

# Orders may not be back- or forward-dated by more than this
MAX_ORDER_DATE_SKEW: timedelta = timedelta(days=1)


class PlaceOrderCommand(BaseModel):
    """
    Command to place an order from the contents of a shopping cart.

    Attributes:
        cart_id: UUID of the cart to check out
        customer_name: Name of the ordering customer
        order_date: Explicit order date (optional, defaults to now)

    Examples:
        >>> command = PlaceOrderCommand(
        ...     cart_id=UUID("a3bb189e-8bf9-3888-9912-ace4e6543002"),
        ...     customer_name="Ada Lovelace",
        ... )
        >>> command.validate_business_rules()
    """

    cart_id: UUID = Field(description="Cart to check out")
    customer_name: str = Field(
        min_length=1,
        max_length=MAX_CUSTOMER_NAME_LENGTH,
        description="Name of the ordering customer",
    )
    order_date: Optional[datetime] = Field(
        default=None, description="Order date (defaults to now, naive means UTC)"
    )

    model_config = {"frozen": True}

    @field_validator("order_date")
    @classmethod
    def normalize_order_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Order dates are held as aware UTC."""
        return to_utc(value) if value is not None else None

    def validate_business_rules(self) -> None:
        """
        Validate rules that Pydantic field constraints cannot express.

        All violations are collected and raised together.

        Raises:
            InvalidPlaceOrderCommandError: If any business rule is violated
        """
        errors: list[str] = []

        if not self.customer_name.strip():
            errors.append("customer_name cannot be blank")

        if self.order_date is not None:
            now = utc_now()
            if abs(now - self.order_date) > MAX_ORDER_DATE_SKEW:
                errors.append(
                    f"order_date must be within {MAX_ORDER_DATE_SKEW.days} day(s) "
                    f"of now, got {self.order_date.isoformat()}"
                )

        if errors:
            raise InvalidPlaceOrderCommandError(
                "Invalid place order command", errors=errors
            )
