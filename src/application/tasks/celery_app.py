"""
Celery application initialization.

Background worker for the ordering service. Payments are charged outside the
request cycle so that the API can answer immediately with 202 Accepted.

Architecture Note:
- Part of Application Layer (orchestration)
- Uses environment variables for configuration (.env supported)
- No business logic - pure infrastructure setup
"""

import logging
import os
from datetime import datetime

from celery import Celery
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

celery_app = Celery(
    "ordering",
    broker=os.environ.get("CELERY_BROKER_URL", "redis://localhost:6379/0"),
    backend=os.environ.get("CELERY_RESULT_BACKEND", "redis://localhost:6379/1"),
)

celery_app.conf.update(
    task_track_started=True,
    task_time_limit=60,  # Payment calls are short
    result_expires=3600,  # Results expire after 1 hour
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
)

# Registers process_payment from payment_tasks.py
celery_app.autodiscover_tasks(["src.application.tasks"])


@celery_app.task(name="health_check")
def health_check() -> dict:
    """
    Simple health check task to verify Celery-Redis connection.

    Returns:
        dict: Status information with timestamp
            - status (str): "ok" if healthy
            - message (str): Human-readable status message
            - timestamp (str): ISO format timestamp
            - worker (str): Worker hostname that executed the task
    """
    return {
        "status": "ok",
        "message": "Celery worker is healthy",
        "timestamp": datetime.now().isoformat(),
        "worker": (
            celery_app.current_task.request.hostname
            if celery_app.current_task
            else "unknown"
        ),
    }
