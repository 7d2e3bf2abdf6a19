"""
OrderItem Value Object.

A single line of an order or shopping cart: which product, how many, and at
what unit price. The line subtotal (quantity x unit price) is the building
block of the order total.

Immutable: changing the quantity produces a new OrderItem.
"""

from dataclasses import dataclass, replace
from typing import Any, Iterable

from src.domain.ordering.constants import MAX_ITEM_QUANTITY, MIN_ITEM_QUANTITY
from src.domain.ordering.value_objects.money import Money
from src.domain.shared.exceptions import InvalidOrderItemError


@dataclass(frozen=True)
class OrderItem:
    """
    Immutable Value Object representing one order line.

    Attributes:
        product_id: Product identifier (SKU), non-empty
        product_name: Display name, non-empty
        quantity: Number of units (1-10000)
        unit_price: Price per unit, non-negative Money

    Examples:
        >>> item = OrderItem(
        ...     product_id="sku-42",
        ...     product_name="Espresso beans 1kg",
        ...     quantity=3,
        ...     unit_price=Money.of("12.50", "EUR"),
        ... )
        >>> str(item.subtotal())
        '37.50 EUR'
        >>> item.with_quantity(5).quantity
        5
    """

    product_id: str
    product_name: str
    quantity: int
    unit_price: Money

    def __post_init__(self) -> None:
        """
        Validate line item business rules.

        Raises:
            InvalidOrderItemError: If any field is invalid
        """
        for field_name in ("product_id", "product_name"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidOrderItemError(
                    f"{field_name} must be a non-empty string", field_name=field_name
                )
            object.__setattr__(self, field_name, value.strip())

        # bool is a subclass of int - reject it explicitly
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise InvalidOrderItemError(
                f"quantity must be integer, got {type(self.quantity).__name__}",
                field_name="quantity",
            )

        if not (MIN_ITEM_QUANTITY <= self.quantity <= MAX_ITEM_QUANTITY):
            raise InvalidOrderItemError(
                f"quantity must be between {MIN_ITEM_QUANTITY} and "
                f"{MAX_ITEM_QUANTITY}, got {self.quantity}",
                field_name="quantity",
            )

        if not isinstance(self.unit_price, Money):
            raise InvalidOrderItemError(
                f"unit_price must be Money, got {type(self.unit_price).__name__}",
                field_name="unit_price",
            )

        if self.unit_price.is_negative():
            raise InvalidOrderItemError(
                f"unit_price cannot be negative, got {self.unit_price}",
                field_name="unit_price",
            )

    @property
    def currency(self) -> str:
        """Currency of the unit price."""
        return self.unit_price.currency

    def subtotal(self) -> Money:
        """
        Calculate line subtotal: quantity x unit price.

        Not rounded - rounding happens once on the order total.
        """
        return self.unit_price * self.quantity

    def with_quantity(self, quantity: int) -> "OrderItem":
        """
        Return a copy of this line with a different quantity.

        Raises:
            InvalidOrderItemError: If quantity is out of range
        """
        return replace(self, quantity=quantity)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible dictionary."""
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "quantity": self.quantity,
            "unit_price": self.unit_price.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OrderItem":
        """Reconstruct OrderItem from to_dict() output."""
        return cls(
            product_id=data["product_id"],
            product_name=data["product_name"],
            quantity=data["quantity"],
            unit_price=Money.from_dict(data["unit_price"]),
        )


def sum_subtotals(items: Iterable[OrderItem], currency: str) -> Money:
    """
    Sum quantity x unit price across items.

    This is the total rule shared by Order and ShoppingCart. An empty
    collection totals to zero in the given currency.

    Raises:
        CurrencyMismatchError: If any item is priced in another currency

    Examples:
        >>> sum_subtotals([], "USD")
        Money(amount=Decimal('0'), currency='USD')
    """
    total = Money.zero(currency)
    for item in items:
        total = total + item.subtotal()
    return total
