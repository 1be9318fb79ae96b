"""
Celery application configuration.

This module sets up the Celery app with Redis as broker and backend.
"""
from celery import Celery

from app.core.config import settings

# Create Celery app
celery_app = Celery(
    "agency_marketplace",
    broker=settings.redis_url,
    backend=settings.redis_url,
)

# Configure Celery
celery_app.conf.update(
    # Serialization
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],

    # Timezone
    timezone="UTC",
    enable_utc=True,

    # Task settings
    task_track_started=True,
    task_time_limit=60,
    task_soft_time_limit=45,

    # E-mail delivery is quick and I/O bound
    worker_prefetch_multiplier=4,
    task_acks_late=True,  # Ack after completion for reliability

    # Result settings
    result_expires=3600,  # Results expire after 1 hour

    # Retry settings
    task_default_retry_delay=30,
    task_max_retries=3,
)

# Auto-discover tasks from workers module
celery_app.autodiscover_tasks(["app.workers"])
