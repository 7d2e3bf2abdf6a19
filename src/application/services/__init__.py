"""
Application Services

Responsibility:
    Orchestration services that coordinate domain aggregates, repositories
    and infrastructure gateways.

Contains:
    - OrderService: Order lifecycle (checkout, payment, cancellation)

Does NOT contain:
    - Domain business logic (use Domain entities/value objects)
    - Direct infrastructure calls (use dependency injection)
"""

from src.application.services.order_service import OrderService

__all__ = ["OrderService"]
