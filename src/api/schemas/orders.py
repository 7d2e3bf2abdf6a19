"""
Order and Cart API Schemas

HTTP request/response models for the carts and orders routers.
Order reads reuse the Application Layer OrderResult DTO.
"""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.ordering.constants import (
    DEFAULT_CURRENCY,
    MAX_CUSTOMER_NAME_LENGTH,
    MAX_ITEM_QUANTITY,
    MAX_UNIT_PRICE,
    MIN_ITEM_QUANTITY,
)
from src.domain.ordering.entities.shopping_cart import ShoppingCart
from src.domain.ordering.value_objects.money import Money
from src.domain.ordering.value_objects.order_item import OrderItem
from src.domain.ordering.value_objects.payment_receipt import PaymentReceipt


# ============================================================================
# CARTS
# ============================================================================


class CreateCartRequest(BaseModel):
    """Request body for POST /api/carts."""

    currency: str = Field(
        default=DEFAULT_CURRENCY,
        min_length=3,
        max_length=3,
        description="ISO 4217 currency code for all cart lines",
    )


class AddCartItemRequest(BaseModel):
    """
    Request body for POST /api/carts/{cart_id}/items.

    The unit price is expressed in the cart currency.
    """

    product_id: str = Field(min_length=1, description="Product identifier")
    product_name: str = Field(min_length=1, description="Display name")
    quantity: int = Field(
        default=1, ge=MIN_ITEM_QUANTITY, le=MAX_ITEM_QUANTITY, description="Units to add"
    )
    unit_price: Decimal = Field(ge=0, le=MAX_UNIT_PRICE, description="Price per unit")

    class Config:
        json_schema_extra = {
            "example": {
                "product_id": "SKU-001",
                "product_name": "Espresso beans 1kg",
                "quantity": 2,
                "unit_price": "12.50",
            }
        }

    def to_order_item(self, currency: str) -> OrderItem:
        return OrderItem(
            product_id=self.product_id,
            product_name=self.product_name,
            quantity=self.quantity,
            unit_price=Money.of(self.unit_price, currency),
        )


class CartItemResponse(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


class CartResponse(BaseModel):
    """Cart state with computed totals."""

    cart_id: UUID
    currency: str
    items: list[CartItemResponse]
    item_count: int
    total: Decimal

    @classmethod
    def from_entity(cls, cart: ShoppingCart) -> "CartResponse":
        return cls(
            cart_id=cart.id,
            currency=cart.currency,
            items=[
                CartItemResponse(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=item.unit_price.amount,
                    subtotal=item.subtotal().amount,
                )
                for item in cart.items
            ],
            item_count=cart.item_count(),
            total=cart.total().amount,
        )


# ============================================================================
# ORDERS
# ============================================================================


class PlaceOrderRequest(BaseModel):
    """Request body for POST /api/orders."""

    cart_id: UUID = Field(description="Cart to check out")
    customer_name: str = Field(
        min_length=1,
        max_length=MAX_CUSTOMER_NAME_LENGTH,
        description="Customer placing the order",
    )

    class Config:
        json_schema_extra = {
            "example": {
                "cart_id": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
                "customer_name": "Ada Lovelace",
            }
        }


class PaymentResponse(BaseModel):
    """Result of a synchronous payment."""

    order_id: UUID
    status: str
    transaction_id: str
    amount: Decimal
    currency: str
    message: str

    @classmethod
    def from_receipt(cls, receipt: PaymentReceipt, status: str) -> "PaymentResponse":
        return cls(
            order_id=receipt.order_id,
            status=status,
            transaction_id=receipt.transaction_id,
            amount=receipt.amount,
            currency=receipt.currency,
            message=receipt.message,
        )


class PaymentQueuedResponse(BaseModel):
    """Payment handed to the Celery worker (202 Accepted)."""

    order_id: UUID
    task_id: str = Field(description="Celery task ID of process_payment")
    status: str = Field(default="queued")


class OrderTotalResponse(BaseModel):
    """Order total, optionally converted to another currency."""

    order_id: UUID
    amount: Decimal
    currency: str
    original_amount: Decimal
    original_currency: str
    converted: bool = Field(description="False when the order currency was requested")
