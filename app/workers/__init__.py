"""
Workers package - Celery tasks and background processing.
"""
from app.workers.celery_app import celery_app
from app.workers.tasks import send_magic_link_email

__all__ = [
    "celery_app",
    "send_magic_link_email",
]
