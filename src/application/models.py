"""
Shared Application Models

Responsibility:
    Contains shared models used across Application Layer.
    Prevents circular dependencies and code duplication.

Contains:
    - PaymentStatus: Outcome of a payment attempt (service, task and API)
    - StorageBackend: Which repository implementation the app wires up

Does NOT contain:
    - Business logic (belongs to Domain Layer)
    - HTTP models (belongs to API Layer)
"""

from enum import Enum


class PaymentStatus(str, Enum):
    """
    Outcome of processing a payment for an order.

    Attributes:
        APPROVED: Gateway approved the charge, order is PAID
        DECLINED: Gateway declined the charge, order stays CONFIRMED
        FAILED: Infrastructure error, payment outcome unknown
    """

    APPROVED = "approved"
    DECLINED = "declined"
    FAILED = "failed"


class StorageBackend(str, Enum):
    """
    Repository implementation selected by ORDER_STORAGE_BACKEND.

    Attributes:
        MEMORY: Process-local dictionaries (development, tests)
        REDIS: Redis JSON documents (shared between API and Celery workers)
    """

    MEMORY = "memory"
    REDIS = "redis"
