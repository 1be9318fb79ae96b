"""
Health check routes.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
import redis.asyncio as redis

from app.core import storage
from app.core.database import get_db
from app.core.config import settings
from app.core.logging import get_logger
from app.schemas.base import BaseSchema

router = APIRouter(tags=["health"])

logger = get_logger(__name__)


class HealthResponse(BaseSchema):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    checks: dict


@router.get("/health", response_model=HealthResponse)
async def health_check(db: AsyncSession = Depends(get_db)):
    """
    Health check endpoint for monitoring.

    Reports the database, Redis and the logo bucket separately; any failing
    check turns the overall status to "degraded".
    """
    checks = {}

    # Database
    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = "healthy"
    except Exception as e:
        logger.warning("health_database_failed", error=str(e))
        checks["database"] = f"unhealthy: {str(e)}"

    # Redis (Celery broker)
    try:
        r = redis.from_url(settings.redis_url)
        await r.ping()
        await r.aclose()
        checks["redis"] = "healthy"
    except Exception as e:
        logger.warning("health_redis_failed", error=str(e))
        checks["redis"] = f"unhealthy: {str(e)}"

    # Object storage
    checks["storage"] = "healthy" if await storage.bucket_reachable() else "unhealthy"

    all_healthy = all(v == "healthy" for v in checks.values())

    return HealthResponse(
        status="healthy" if all_healthy else "degraded",
        version=settings.app_version,
        timestamp=datetime.now(timezone.utc).isoformat(),
        checks=checks,
    )
