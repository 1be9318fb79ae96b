"""
Rate limiting configuration using slowapi.

Storage defaults to in-process memory; point RATE_LIMIT_STORAGE_URI at Redis
so limits are shared across workers.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from app.core.config import settings


def _get_user_or_ip(request: Request) -> str:
    """
    Rate-limit key: authenticated user ID if available, otherwise client IP.
    """
    user = getattr(request.state, "current_user", None)
    if user and hasattr(user, "id"):
        return str(user.id)
    return get_remote_address(request)


limiter = Limiter(
    key_func=_get_user_or_ip,
    storage_uri=settings.rate_limit_storage_uri,
    strategy="fixed-window",
    enabled=settings.rate_limit_enabled,
)

# Pre-defined rate limit strings for use in route decorators:
#   @limiter.limit(RATE_AUTH)
RATE_AUTH = "5/minute"           # login, register, magic link
RATE_LOGO_UPLOAD = "10/hour"     # logo uploads
RATE_DEFAULT = "60/minute"       # general API fallback
