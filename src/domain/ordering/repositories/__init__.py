"""
Ordering Repository Interfaces Module

Repository pattern interfaces (contracts) for data persistence.
Defined in Domain Layer, implemented in Infrastructure Layer.

This module exports:
    - OrderRepositoryProtocol: Repository interface for Order
    - ShoppingCartRepositoryProtocol: Repository interface for ShoppingCart
"""

from .order_repository import OrderRepositoryProtocol
from .shopping_cart_repository import ShoppingCartRepositoryProtocol

__all__ = [
    "OrderRepositoryProtocol",
    "ShoppingCartRepositoryProtocol",
]
