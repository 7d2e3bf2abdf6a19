"""
Order Entity (Aggregate Root).

Core domain entity representing a customer order. The Order owns its line
items and enforces consistency over them: single currency, modification only
while PENDING, and the total computed from the lines.

Unlike Value Objects, Entities are mutable and track their state over time.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from src.domain.ordering.constants import DEFAULT_CURRENCY, MAX_CUSTOMER_NAME_LENGTH
from src.domain.ordering.entities.shopping_cart import ShoppingCart
from src.domain.ordering.value_objects.money import Money
from src.domain.ordering.value_objects.order_item import OrderItem, sum_subtotals
from src.domain.shared.exceptions import (
    CurrencyMismatchError,
    InvalidOrderError,
    InvalidShoppingCartError,
)
from src.domain.shared.timestamps import to_utc, utc_now


class OrderState(str, Enum):
    """
    Lifecycle states of Order aggregate.

    State transitions:
    PENDING -> CONFIRMED -> PAID
    PENDING | CONFIRMED -> CANCELLED

    States:
        PENDING: Order created, items can still be added/removed
        CONFIRMED: Customer confirmed the order, awaiting payment
        PAID: Payment captured (terminal)
        CANCELLED: Order cancelled before payment (terminal)
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    PAID = "paid"
    CANCELLED = "cancelled"


@dataclass
class Order:
    """
    Mutable aggregate root representing a customer order.

    The order encapsulates:
    - Customer name and order date
    - Ordered line items (OrderItem value objects)
    - Derived total (sum of quantity x unit price)
    - Lifecycle state and payment reference

    Attributes:
        customer_name: Name of the ordering customer (whitespace-normalized)
        items: Ordered line items
        currency: Order currency; every item must be priced in it
        order_date: When the order was placed
        state: Current lifecycle state
        payment_reference: Gateway transaction ID once PAID
        id: Unique identifier (UUID4, auto-generated)
        updated_at: Last modification timestamp

    Examples:
        >>> order = Order(customer_name="Ada Lovelace")
        >>> order.add_item(OrderItem("sku-1", "Notebook", 2, Money.of("4.50", "USD")))
        >>> str(order.total())
        '9.00 USD'
        >>> order.confirm()
        >>> order.state
        <OrderState.CONFIRMED: 'confirmed'>
    """

    # Required fields
    customer_name: str

    items: list[OrderItem] = field(default_factory=list)
    currency: str = DEFAULT_CURRENCY
    order_date: datetime = field(default_factory=utc_now)

    # State tracking
    state: OrderState = OrderState.PENDING
    payment_reference: str | None = None

    # Identity and timestamps (auto-generated)
    id: UUID = field(default_factory=uuid4)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        """
        Validate and normalize entity after initialization.

        Raises:
            InvalidOrderError: If customer_name is invalid
            InvalidMoneyError: If currency code is malformed
            CurrencyMismatchError: If an item uses another currency
        """
        self.customer_name = self._normalize_customer_name(self.customer_name)
        self.order_date = to_utc(self.order_date)
        self.updated_at = to_utc(self.updated_at)
        self.currency = Money.zero(self.currency).currency
        self.items = list(self.items)
        for item in self.items:
            self._ensure_currency(item)

    @classmethod
    def from_cart(
        cls,
        cart: ShoppingCart,
        customer_name: str,
        order_date: Optional[datetime] = None,
    ) -> "Order":
        """
        Factory method to create a PENDING order from a shopping cart.

        The cart is not modified; clearing it after checkout is the caller's
        responsibility (OrderService.place_order).

        Args:
            cart: Cart to convert
            customer_name: Name of the ordering customer
            order_date: Order date (defaults to now, normalized to UTC)

        Returns:
            New Order in PENDING state with the cart's items and currency

        Raises:
            InvalidShoppingCartError: If cart is empty
            InvalidOrderError: If customer_name is invalid

        Examples:
            >>> order = Order.from_cart(cart, customer_name="Grace Hopper")
            >>> order.items == cart.items
            True
        """
        if cart.is_empty():
            raise InvalidShoppingCartError(
                f"Cannot create an order from empty cart {cart.id}"
            )

        return cls(
            customer_name=customer_name,
            items=list(cart.items),
            currency=cart.currency,
            order_date=order_date or utc_now(),
        )

    def _normalize_customer_name(self, name: str) -> str:
        if not isinstance(name, str):
            raise InvalidOrderError(
                f"customer_name must be string, got {type(name).__name__}",
                field_name="customer_name",
            )

        normalized = " ".join(name.split())
        if not normalized:
            raise InvalidOrderError(
                "customer_name cannot be empty", field_name="customer_name"
            )
        if len(normalized) > MAX_CUSTOMER_NAME_LENGTH:
            raise InvalidOrderError(
                f"customer_name must have at most {MAX_CUSTOMER_NAME_LENGTH} "
                f"characters, got {len(normalized)}",
                field_name="customer_name",
            )
        return normalized

    def _ensure_currency(self, item: OrderItem) -> None:
        if item.currency != self.currency:
            raise CurrencyMismatchError(
                f"Order currency is {self.currency}, item '{item.product_id}' "
                f"is priced in {item.currency}",
                left_currency=self.currency,
                right_currency=item.currency,
            )

    def _ensure_modifiable(self) -> None:
        if not self.can_be_modified():
            raise InvalidOrderError(
                f"Cannot modify order in state {self.state.value}. "
                f"Items can only change while the order is pending."
            )

    def _touch(self) -> None:
        self.updated_at = utc_now()

    # ------------------------------------------------------------------
    # Line items
    # ------------------------------------------------------------------

    def add_item(self, item: OrderItem) -> None:
        """
        Add a line item to a PENDING order.

        A line with the same product_id and unit price has its quantity
        increased; otherwise the item is appended as a new line.

        Raises:
            InvalidOrderError: If order is not PENDING
            CurrencyMismatchError: If item currency differs from order currency
        """
        self._ensure_modifiable()
        self._ensure_currency(item)

        for index, existing in enumerate(self.items):
            if (
                existing.product_id == item.product_id
                and existing.unit_price == item.unit_price
            ):
                self.items[index] = existing.with_quantity(
                    existing.quantity + item.quantity
                )
                break
        else:
            self.items.append(item)

        self._touch()

    def remove_item(self, product_id: str) -> None:
        """
        Remove all lines for product_id from a PENDING order.

        Raises:
            InvalidOrderError: If order is not PENDING or product is not in the order
        """
        self._ensure_modifiable()

        remaining = [item for item in self.items if item.product_id != product_id]
        if len(remaining) == len(self.items):
            raise InvalidOrderError(
                f"Product '{product_id}' is not part of order {self.id}",
                field_name="product_id",
            )

        self.items = remaining
        self._touch()

    def total(self) -> Money:
        """
        Calculate order total: sum of quantity x unit price over items.

        The total is exact (no rounding). An empty order totals to zero
        in the order currency.

        Examples:
            >>> Order(customer_name="Ada").total()
            Money(amount=Decimal('0'), currency='USD')
        """
        return sum_subtotals(self.items, self.currency)

    def item_count(self) -> int:
        """Total number of units across all lines."""
        return sum(item.quantity for item in self.items)

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def confirm(self) -> None:
        """
        Confirm the order: PENDING -> CONFIRMED.

        Raises:
            InvalidOrderError: If order is not PENDING or has no items
        """
        if self.state != OrderState.PENDING:
            raise InvalidOrderError(
                f"Cannot confirm order in state {self.state.value}. "
                f"Must be in PENDING state."
            )
        if not self.items:
            raise InvalidOrderError("Cannot confirm an order without items")

        self.state = OrderState.CONFIRMED
        self._touch()

    def mark_paid(self, payment_reference: str) -> None:
        """
        Record successful payment: CONFIRMED -> PAID.

        Args:
            payment_reference: Gateway transaction ID

        Raises:
            InvalidOrderError: If order is not CONFIRMED or reference is empty
        """
        if self.state != OrderState.CONFIRMED:
            raise InvalidOrderError(
                f"Cannot mark order as paid in state {self.state.value}. "
                f"Must be in CONFIRMED state."
            )
        if not payment_reference or not payment_reference.strip():
            raise InvalidOrderError(
                "payment_reference cannot be empty", field_name="payment_reference"
            )

        self.payment_reference = payment_reference.strip()
        self.state = OrderState.PAID
        self._touch()

    def cancel(self) -> None:
        """
        Cancel the order: PENDING | CONFIRMED -> CANCELLED.

        Raises:
            InvalidOrderError: If order is already PAID or CANCELLED
        """
        if self.state in (OrderState.PAID, OrderState.CANCELLED):
            raise InvalidOrderError(
                f"Cannot cancel order in state {self.state.value}"
            )

        self.state = OrderState.CANCELLED
        self._touch()

    def can_be_modified(self) -> bool:
        return self.state == OrderState.PENDING

    def is_paid(self) -> bool:
        return self.state == OrderState.PAID

    def is_cancelled(self) -> bool:
        return self.state == OrderState.CANCELLED

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize entity to dictionary for storage/transport.

        Money amounts are serialized as strings to keep Decimal precision.

        Examples:
            >>> data = Order(customer_name="Ada").to_dict()
            >>> data["state"]
            'pending'
        """
        return {
            "id": str(self.id),
            "customer_name": self.customer_name,
            "currency": self.currency,
            "order_date": self.order_date.isoformat(),
            "items": [item.to_dict() for item in self.items],
            "state": self.state.value,
            "payment_reference": self.payment_reference,
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Order":
        """
        Deserialize entity from dictionary.

        Reconstructs identity, state and timestamps exactly, so that a stored
        PAID order is loaded as PAID (no state machine replay).

        Raises:
            KeyError: If 'customer_name' is missing
            InvalidOrderError / InvalidOrderItemError: If stored data is invalid
        """
        order = cls(
            customer_name=data["customer_name"],
            items=[OrderItem.from_dict(item) for item in data.get("items", [])],
            currency=data.get("currency", DEFAULT_CURRENCY),
            state=OrderState(data.get("state", OrderState.PENDING.value)),
            payment_reference=data.get("payment_reference"),
        )

        if data.get("id"):
            order.id = UUID(data["id"])
        if data.get("order_date"):
            order.order_date = to_utc(datetime.fromisoformat(data["order_date"]))
        if data.get("updated_at"):
            order.updated_at = to_utc(datetime.fromisoformat(data["updated_at"]))

        return order

    def __str__(self) -> str:
        """User-friendly representation."""
        return f"Order {self.id} for {self.customer_name}: {self.total()} [{self.state.value}]"
