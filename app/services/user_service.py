"""
User service - business logic for the caller's own account.
"""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import hash_password, verify_password
from app.core.exceptions import BadRequestException
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.user import UserResponse


class UserService:
    """Handles user profile operations."""

    def __init__(self):
        self.user_repo = UserRepository()

    def get_profile(self, user: User) -> UserResponse:
        return self._to_response(user)

    async def update_profile(
        self,
        db: AsyncSession,
        user: User,
        *,
        full_name: Optional[str] = None,
    ) -> UserResponse:
        """Update user profile fields."""
        if full_name is not None:
            user = await self.user_repo.update(db, user, full_name=full_name)
            await db.commit()

        return self._to_response(user)

    async def change_password(
        self,
        db: AsyncSession,
        user: User,
        *,
        current_password: str,
        new_password: str,
    ) -> None:
        """
        Change user's password, or set a first one for a magic-link-only account.

        Raises:
            BadRequestException: If current password is wrong.
        """
        if user.password_hash and not verify_password(current_password, user.password_hash):
            raise BadRequestException("Current password is incorrect")

        await self.user_repo.update(db, user, password_hash=hash_password(new_password))
        await db.commit()

    def _to_response(self, user: User) -> UserResponse:
        """Convert a User model to UserResponse schema."""
        return UserResponse(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            role=user.role,
            email_verified=user.email_verified,
            is_active=user.is_active,
            has_password=bool(user.password_hash),
            last_seen_at=user.last_seen_at,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
