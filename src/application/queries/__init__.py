"""
Application Queries (CQRS read side).

Exports:
    - GetOrderQuery / GetOrderQueryHandler: Read orders
    - OrderResult / OrderItemResult: Read DTOs
    - OrderNotFoundException / CartNotFoundException: Lookup failures
"""

from src.application.queries.get_order import (
    CartNotFoundException,
    GetOrderQuery,
    GetOrderQueryHandler,
    OrderItemResult,
    OrderNotFoundException,
    OrderResult,
)

__all__ = [
    "GetOrderQuery",
    "GetOrderQueryHandler",
    "OrderResult",
    "OrderItemResult",
    "OrderNotFoundException",
    "CartNotFoundException",
]
