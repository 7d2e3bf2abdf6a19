"""
Ordering Domain Entities.

This module exports all entities used in the ordering domain.
Entities have identity and lifecycle - they are mutable objects tracked by ID.

Available Entities:
    - Order: Aggregate root for a customer order
    - OrderState: Enum representing order lifecycle states
    - ShoppingCart: Line items collected before checkout
"""

from src.domain.ordering.entities.order import Order, OrderState
from src.domain.ordering.entities.shopping_cart import ShoppingCart

__all__ = [
    "Order",
    "OrderState",
    "ShoppingCart",
]
