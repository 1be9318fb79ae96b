"""
API dependencies for dependency injection.
"""
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.logging import bind_user
from app.core.security import decode_token, verify_token_type
from app.core.exceptions import (
    UnauthorizedException,
    InvalidTokenException,
)
from app.models.user import User
from app.repositories.user_repository import UserRepository


# Security scheme
security = HTTPBearer(auto_error=False)

user_repo = UserRepository()


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Get the current authenticated user.

    Raises:
        UnauthorizedException: If no token provided
        InvalidTokenException: If token is invalid or expired
    """
    if not credentials:
        raise UnauthorizedException("Authentication required")

    payload = decode_token(credentials.credentials)

    if not payload or not verify_token_type(payload, "access"):
        raise InvalidTokenException()

    try:
        user_id = UUID(payload.get("sub") or "")
    except ValueError:
        raise InvalidTokenException()

    user = await user_repo.get_active_by_id(db, user_id)
    if not user:
        raise InvalidTokenException()

    # Rate limiter keys on this; log lines carry it
    request.state.current_user = user
    bind_user(str(user.id))
    return user


async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """
    Get the current user if authenticated, None otherwise.
    Useful for endpoints that work with or without authentication.
    """
    if not credentials:
        return None

    try:
        return await get_current_user(request, credentials, db)
    except UnauthorizedException:
        return None
