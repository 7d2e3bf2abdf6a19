"""
Celery Task for Asynchronous Payment Processing

Charges the payment gateway for a confirmed order in the background.

Responsibility:
    - Build OrderService with Redis repositories and the payment gateway
    - Run the async service call inside the worker (asyncio.run)
    - Translate outcomes into a JSON result dict
    - Retry infrastructure failures with exponential backoff

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Thin orchestrator - business rules live in Order / OrderService
    - Workers always use Redis storage (memory storage is not shared
      between processes)

Outcome handling:
    - Approved: {"status": "approved", "transaction_id": ...}
    - Declined: {"status": "declined", ...} - NOT retried, order stays CONFIRMED
    - Order missing or not CONFIRMED: {"status": "failed", ...} - NOT retried
    - RedisError: retried (max 3, backoff up to 900s); the gateway returns the
      original receipt if the failed attempt had already been charged
"""

import asyncio
import logging
from functools import lru_cache
from uuid import UUID

from celery import Task
from redis.exceptions import RedisError

from .celery_app import celery_app
from src.application.models import PaymentStatus
from src.application.queries.get_order import OrderNotFoundException
from src.application.services.order_service import OrderService
from src.domain.shared.exceptions import InvalidOrderError, PaymentDeclinedError
from src.infrastructure.payments.simulated_payment_gateway import (
    SimulatedPaymentGateway,
)
from src.infrastructure.persistence.repositories.redis_order_repository import (
    RedisOrderRepository,
)
from src.infrastructure.persistence.repositories.redis_shopping_cart_repository import (
    RedisShoppingCartRepository,
)

# Configure logger for this module
logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_payment_gateway() -> SimulatedPaymentGateway:
    """One gateway per worker process, so retries reach the same idempotency memory."""
    return SimulatedPaymentGateway()


def build_order_service() -> OrderService:
    """Wire OrderService for worker processes."""
    return OrderService(
        order_repository=RedisOrderRepository(),
        cart_repository=RedisShoppingCartRepository(),
        payment_gateway=get_payment_gateway(),
    )


@celery_app.task(
    bind=True,
    name="process_payment",
    max_retries=3,
    retry_backoff=True,
    retry_backoff_max=900,
    time_limit=60,
    soft_time_limit=50,
)
def process_payment_task(self: Task, order_id: str) -> dict:
    """
    Charge the gateway for a confirmed order.

    Args:
        self: Celery task instance (bind=True gives access to self.retry)
        order_id: Order UUID as string (JSON-serializable)

    Returns:
        dict with keys:
            - status (str): PaymentStatus value
            - order_id (str)
            - transaction_id (str | None)
            - message (str)

    Raises:
        celery.exceptions.Retry: On RedisError while retries remain
    """
    logger.info(f"Task {self.request.id}: processing payment for order {order_id}")
    service = build_order_service()

    try:
        receipt = asyncio.run(service.process_payment(UUID(order_id)))
    except PaymentDeclinedError as exc:
        logger.warning(f"Order {order_id}: payment declined: {exc.message}")
        return {
            "status": PaymentStatus.DECLINED.value,
            "order_id": order_id,
            "transaction_id": None,
            "message": exc.message,
        }
    except (OrderNotFoundException, InvalidOrderError) as exc:
        logger.error(f"Order {order_id}: payment not processed: {exc}")
        return {
            "status": PaymentStatus.FAILED.value,
            "order_id": order_id,
            "transaction_id": None,
            "message": str(exc),
        }
    except RedisError as exc:
        logger.error(f"Order {order_id}: storage error, retrying: {exc}")
        raise self.retry(exc=exc)

    return {
        "status": PaymentStatus.APPROVED.value,
        "order_id": order_id,
        "transaction_id": receipt.transaction_id,
        "message": receipt.message,
    }
