"""
Application Commands (CQRS write side).

Exports:
    - PlaceOrderCommand: Check out a shopping cart
"""

from src.application.commands.place_order import PlaceOrderCommand

__all__ = ["PlaceOrderCommand"]
