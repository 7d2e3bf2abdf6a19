"""
Celery Tasks

Responsibility:
    Asynchronous task definitions for operations that should not block
    HTTP requests.

Contains:
    - celery_app.py - Celery configuration and health_check task
    - payment_tasks.py - process_payment_task

Does NOT contain:
    - Business logic (delegates to OrderService and the Order aggregate)
"""

from .celery_app import celery_app, health_check
from .payment_tasks import process_payment_task

__all__ = ["celery_app", "health_check", "process_payment_task"]
