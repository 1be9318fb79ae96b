"""
S3 / MinIO object storage for agency logos.

All network calls go through aioboto3. The same code works against MinIO in
development (``s3_endpoint_url=http://localhost:9000``) and real AWS S3.

Logos are public objects: the bucket policy allows anonymous GET, and the
API stores the public URL on the agency row together with the object key so
the object can be removed later.
"""
import re
import time
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings
from app.core.exceptions import (
    PayloadTooLargeException,
    StorageException,
    UnsupportedMediaTypeException,
)
from app.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class UploadResult:
    url: str
    path: str


# ── Validation ───────────────────────────────────────────────────────────────

def validate_logo(content_type: Optional[str], size_bytes: int) -> None:
    """
    Reject anything that is not a small PNG/JPEG/WebP image.

    Raises:
        UnsupportedMediaTypeException: unknown content type
        PayloadTooLargeException: file larger than the configured limit
    """
    if content_type not in settings.allowed_logo_types:
        raise UnsupportedMediaTypeException(
            "Invalid file type. Please upload a PNG, JPG, or WebP image.",
            code="INVALID_FILE_TYPE",
        )
    if size_bytes > settings.max_logo_size_bytes:
        raise PayloadTooLargeException(
            f"File size exceeds {settings.max_logo_size_mb}MB limit. "
            "Please upload a smaller image.",
            code="FILE_TOO_LARGE",
        )


# ── Key construction ─────────────────────────────────────────────────────────

def build_logo_key(
    user_id: UUID,
    filename: str,
    agency_id: Optional[UUID] = None,
    timestamp_ms: Optional[int] = None,
) -> str:
    """
    Object key: ``{user_id}/{agency_id}-{timestamp}.{ext}`` or
    ``{user_id}/{timestamp}.{ext}`` before the agency exists.

    The owner's ID is the first path segment so bucket policies can scope
    writes per user.
    """
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    ext = _extension(filename)
    name = f"{agency_id}-{timestamp_ms}" if agency_id else str(timestamp_ms)
    return f"{user_id}/{name}.{ext}"


def _extension(filename: str) -> str:
    """Last dot-separated part of the filename, reduced to safe characters."""
    ext = filename.rsplit(".", 1)[-1] if "." in filename else "bin"
    ext = re.sub(r"[^A-Za-z0-9]", "", ext).lower()
    return ext[:10] or "bin"


def public_url(key: str) -> str:
    """Anonymous-read URL for an object in the logo bucket."""
    if settings.s3_public_base_url:
        return f"{settings.s3_public_base_url.rstrip('/')}/{key}"
    if settings.s3_endpoint_url:
        return f"{settings.s3_endpoint_url.rstrip('/')}/{settings.s3_bucket_name}/{key}"
    return f"https://{settings.s3_bucket_name}.s3.{settings.s3_region}.amazonaws.com/{key}"


# ── Session factory ──────────────────────────────────────────────────────────

def _s3_client():
    """Return an async context-manager for an S3 client configured from settings."""
    session = aioboto3.Session()
    kwargs = dict(
        region_name=settings.s3_region,
        aws_access_key_id=settings.s3_aws_access_key_id,
        aws_secret_access_key=settings.s3_aws_secret_access_key,
    )
    if settings.s3_endpoint_url:
        kwargs["endpoint_url"] = settings.s3_endpoint_url
    return session.client("s3", **kwargs)


# ── Upload ───────────────────────────────────────────────────────────────────

async def upload_agency_logo(
    data: bytes,
    *,
    content_type: Optional[str],
    filename: str,
    user_id: UUID,
    agency_id: Optional[UUID] = None,
) -> UploadResult:
    """
    Validate and store a logo, returning its public URL and object key.

    Existing objects are never overwritten: the key carries a millisecond
    timestamp and the PUT is conditional on the key being absent.

    Raises:
        UnsupportedMediaTypeException / PayloadTooLargeException: validation
        StorageException: the bucket rejected the upload
    """
    validate_logo(content_type, len(data))
    key = build_logo_key(user_id, filename, agency_id)

    try:
        async with _s3_client() as s3:
            await s3.put_object(
                Bucket=settings.s3_bucket_name,
                Key=key,
                Body=data,
                ContentType=content_type,
                CacheControl=f"max-age={settings.logo_cache_control}",
                IfNoneMatch="*",
            )
    except (BotoCoreError, ClientError) as exc:
        logger.error("logo_upload_failed", key=key, error=str(exc))
        raise StorageException("Failed to upload image. Please try again.") from exc

    logger.info("logo_uploaded", key=key, size=len(data))
    return UploadResult(url=public_url(key), path=key)


# ── Delete ───────────────────────────────────────────────────────────────────

async def delete_agency_logo(key: str) -> bool:
    """
    Remove a logo object. Returns False (and logs) instead of raising, so
    callers can treat removal of stale logos as best-effort.
    """
    try:
        async with _s3_client() as s3:
            await s3.delete_object(Bucket=settings.s3_bucket_name, Key=key)
    except (BotoCoreError, ClientError) as exc:
        logger.warning("logo_delete_failed", key=key, error=str(exc))
        return False
    return True


async def bucket_reachable() -> bool:
    """HEAD the logo bucket; used by the health check."""
    try:
        async with _s3_client() as s3:
            await s3.head_bucket(Bucket=settings.s3_bucket_name)
    except (BotoCoreError, ClientError) as exc:
        logger.warning("bucket_unreachable", bucket=settings.s3_bucket_name, error=str(exc))
        return False
    return True
