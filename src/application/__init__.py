"""
Application Layer - Use Cases and Orchestration

Responsibility:
    Coordinates the flow of data between API and Domain layers.
    Handles asynchronous payment processing with Celery.

Contains:
    - commands/: CQRS write operations (PlaceOrderCommand)
    - queries/: CQRS read operations (GetOrderQuery)
    - services/: Application services (OrderService)
    - tasks/: Celery async tasks
    - models: Shared Application Layer enums

Does NOT contain:
    - Domain business rules (belongs to Domain layer)
    - HTTP handling (belongs to API layer)
    - Infrastructure details (belongs to Infrastructure layer)
"""

from src.application.models import PaymentStatus, StorageBackend

__all__ = [
    "PaymentStatus",
    "StorageBackend",
]
