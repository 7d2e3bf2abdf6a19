"""
ShoppingCart Entity.

Mutable entity collecting the line items a customer intends to order.
A cart has identity (UUID) but no lifecycle states: it is filled, emptied
and finally converted into an Order at checkout.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from uuid import UUID, uuid4

from src.domain.ordering.constants import DEFAULT_CURRENCY
from src.domain.ordering.value_objects.money import Money
from src.domain.ordering.value_objects.order_item import OrderItem, sum_subtotals
from src.domain.shared.exceptions import (
    CurrencyMismatchError,
    InvalidShoppingCartError,
)
from src.domain.shared.timestamps import to_utc, utc_now


@dataclass
class ShoppingCart:
    """
    Mutable entity holding line items before checkout.

    Invariants:
        - All items are priced in the cart currency
        - At most one line per product_id (adding again merges quantities)

    Attributes:
        items: Line items in insertion order
        currency: Cart currency (normalized upper case)
        id: Unique identifier (UUID4, auto-generated)
        created_at: Creation timestamp
        updated_at: Last modification timestamp

    Examples:
        >>> cart = ShoppingCart(currency="EUR")
        >>> cart.add_item(OrderItem("sku-1", "Mug", 2, Money.of("8.00", "EUR")))
        >>> cart.add_item(OrderItem("sku-1", "Mug", 1, Money.of("8.00", "EUR")))
        >>> cart.get_item("sku-1").quantity
        3
        >>> str(cart.total())
        '24.00 EUR'
    """

    items: list[OrderItem] = field(default_factory=list)
    currency: str = DEFAULT_CURRENCY

    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        """
        Normalize currency and validate initial items.

        Raises:
            InvalidMoneyError: If currency code is malformed
            CurrencyMismatchError: If an initial item uses another currency
        """
        self.currency = Money.zero(self.currency).currency
        self.created_at = to_utc(self.created_at)
        self.updated_at = to_utc(self.updated_at)
        initial_items, self.items = list(self.items), []
        for item in initial_items:
            self._merge(item)

    def _ensure_currency(self, item: OrderItem) -> None:
        if item.currency != self.currency:
            raise CurrencyMismatchError(
                f"Cart currency is {self.currency}, item '{item.product_id}' "
                f"is priced in {item.currency}",
                left_currency=self.currency,
                right_currency=item.currency,
            )

    def _index_of(self, product_id: str) -> Optional[int]:
        for index, item in enumerate(self.items):
            if item.product_id == product_id:
                return index
        return None

    def _merge(self, item: OrderItem) -> None:
        if not isinstance(item, OrderItem):
            raise InvalidShoppingCartError(
                f"item must be OrderItem instance, got {type(item).__name__}"
            )
        self._ensure_currency(item)

        index = self._index_of(item.product_id)
        if index is None:
            self.items.append(item)
            return

        existing = self.items[index]
        if existing.unit_price != item.unit_price:
            raise InvalidShoppingCartError(
                f"Product '{item.product_id}' is already in the cart at "
                f"{existing.unit_price}, cannot add it at {item.unit_price}",
                field_name="unit_price",
            )
        self.items[index] = existing.with_quantity(existing.quantity + item.quantity)

    def add_item(self, item: OrderItem) -> None:
        """
        Add a line item to the cart.

        If the product is already in the cart, the quantities are merged.

        Raises:
            CurrencyMismatchError: If item currency differs from cart currency
            InvalidShoppingCartError: If product is present with another unit price
            InvalidOrderItemError: If merged quantity exceeds per-line limit
        """
        self._merge(item)
        self.updated_at = utc_now()

    def remove_item(self, product_id: str, quantity: Optional[int] = None) -> None:
        """
        Remove a product, or decrease its quantity.

        Args:
            product_id: Product to remove
            quantity: Units to remove; None removes the whole line. When the
                remaining quantity reaches zero the line is removed.

        Raises:
            InvalidShoppingCartError: If product is not in the cart or quantity < 1
        """
        index = self._index_of(product_id)
        if index is None:
            raise InvalidShoppingCartError(
                f"Product '{product_id}' is not in the cart", field_name="product_id"
            )

        if quantity is None:
            del self.items[index]
        else:
            if quantity < 1:
                raise InvalidShoppingCartError(
                    f"quantity to remove must be >= 1, got {quantity}",
                    field_name="quantity",
                )
            remaining = self.items[index].quantity - quantity
            if remaining <= 0:
                del self.items[index]
            else:
                self.items[index] = self.items[index].with_quantity(remaining)

        self.updated_at = utc_now()

    def get_item(self, product_id: str) -> Optional[OrderItem]:
        """Return line for product_id or None."""
        index = self._index_of(product_id)
        return self.items[index] if index is not None else None

    def clear(self) -> None:
        """Remove all items (used after checkout)."""
        self.items = []
        self.updated_at = utc_now()

    def is_empty(self) -> bool:
        return not self.items

    def item_count(self) -> int:
        """Total number of units across all lines."""
        return sum(item.quantity for item in self.items)

    def total(self) -> Money:
        """Sum of quantity x unit price over all lines (exact, not rounded)."""
        return sum_subtotals(self.items, self.currency)

    def to_dict(self) -> dict[str, Any]:
        """Serialize cart to JSON-compatible dictionary."""
        return {
            "id": str(self.id),
            "currency": self.currency,
            "items": [item.to_dict() for item in self.items],
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShoppingCart":
        """
        Deserialize cart from to_dict() output.

        Items are re-validated through the normal constructor path.
        """
        cart = cls(
            items=[OrderItem.from_dict(item) for item in data.get("items", [])],
            currency=data.get("currency", DEFAULT_CURRENCY),
        )
        if data.get("id"):
            cart.id = UUID(data["id"])
        if data.get("created_at"):
            cart.created_at = to_utc(datetime.fromisoformat(data["created_at"]))
        if data.get("updated_at"):
            cart.updated_at = to_utc(datetime.fromisoformat(data["updated_at"]))
        return cart

    def __str__(self) -> str:
        return f"ShoppingCart {self.id} ({self.item_count()} items, {self.total()})"
