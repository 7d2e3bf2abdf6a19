"""
Ordering Value Objects.

This module exports all Value Objects used in the ordering domain.
Value Objects are immutable objects that represent domain concepts by their value,
not by their identity.

Available Value Objects:
    - Money: Decimal amount in a single currency
    - OrderItem: Order / cart line (product, quantity, unit price)
    - PaymentReceipt: Outcome of a payment gateway charge
"""

from src.domain.ordering.value_objects.money import Money
from src.domain.ordering.value_objects.order_item import OrderItem
from src.domain.ordering.value_objects.payment_receipt import PaymentReceipt

__all__ = [
    "Money",
    "OrderItem",
    "PaymentReceipt",
]
