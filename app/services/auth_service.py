"""
Authentication service - registration, password and magic-link sign-in, token refresh.
"""
from datetime import datetime, timezone
from urllib.parse import urlencode
from uuid import UUID

from kombu.exceptions import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import (
    verify_password,
    hash_password,
    create_access_token,
    create_refresh_token,
    create_magic_link_token,
    new_magic_link_nonce,
    decode_token,
    verify_token_type,
)
from app.core.exceptions import (
    InvalidCredentialsException,
    EmailAlreadyExistsException,
    InvalidMagicLinkException,
    InvalidTokenException,
    ServiceUnavailableException,
)
from app.core.logging import get_logger
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.auth import TokenResponse

logger = get_logger(__name__)

MAGIC_LINK_SENT = "Check your email for the magic link!"


def magic_link_url(token: str) -> str:
    """Frontend page that posts the token back to /auth/magic-link/verify."""
    return f"{settings.frontend_url.rstrip('/')}/auth/verify?{urlencode({'token': token})}"


class AuthService:
    """Handles all authentication business logic."""

    def __init__(self):
        self.user_repo = UserRepository()

    async def register(
        self,
        db: AsyncSession,
        *,
        email: str,
        password: str,
        role: str,
    ) -> TokenResponse:
        """
        Register a new user and return tokens.

        Raises:
            EmailAlreadyExistsException: If email is already registered.
        """
        email = email.lower()
        if await self.user_repo.email_exists(db, email):
            raise EmailAlreadyExistsException()

        user = await self.user_repo.create(
            db,
            email=email,
            password_hash=hash_password(password),
            full_name=email.split("@", 1)[0],
            role=role,
        )
        await db.commit()
        logger.info("user_registered", user_id=str(user.id), role=role)

        return self._generate_tokens(user)

    async def login(
        self,
        db: AsyncSession,
        *,
        email: str,
        password: str,
    ) -> TokenResponse:
        """
        Authenticate user and return tokens.

        Raises:
            InvalidCredentialsException: If email/password is wrong.
        """
        user = await self.user_repo.get_active_by_email(db, email)

        # Magic-link-only accounts have no password to check against
        if not user or not user.password_hash or not verify_password(password, user.password_hash):
            raise InvalidCredentialsException()

        # Update last seen
        user.last_seen_at = datetime.now(timezone.utc)
        await db.commit()

        return self._generate_tokens(user)

    async def request_magic_link(
        self,
        db: AsyncSession,
        *,
        email: str,
    ) -> str:
        """
        E-mail a one-time sign-in link.

        Unknown addresses get the same answer and no e-mail, so the endpoint
        cannot be used to probe for accounts. Requesting a new link
        invalidates any earlier one.

        Raises:
            ServiceUnavailableException: the e-mail could not be queued
        """
        user = await self.user_repo.get_active_by_email(db, email)
        if not user:
            logger.info("magic_link_unknown_email")
            return MAGIC_LINK_SENT

        user.magic_link_nonce = new_magic_link_nonce()
        await db.commit()

        token = create_magic_link_token(str(user.id), user.magic_link_nonce)

        # Deferred import keeps Celery out of the import graph of the API layer
        from app.workers.tasks import send_magic_link_email
        try:
            send_magic_link_email.delay(user.email, magic_link_url(token))
        except OperationalError as exc:
            logger.error("magic_link_enqueue_failed", user_id=str(user.id), error=str(exc))
            raise ServiceUnavailableException(
                "Failed to send magic link. Please try again."
            ) from exc

        logger.info("magic_link_requested", user_id=str(user.id))
        return MAGIC_LINK_SENT

    async def verify_magic_link(
        self,
        db: AsyncSession,
        *,
        token: str,
    ) -> TokenResponse:
        """
        Exchange a magic-link token for session tokens.

        The user's nonce is rotated, so the same link cannot be used twice.

        Raises:
            InvalidMagicLinkException: bad signature, expired, wrong type or already used
        """
        payload = decode_token(token)
        if not payload or not verify_token_type(payload, "magic_link"):
            raise InvalidMagicLinkException()

        user_id = payload.get("sub")
        nonce = payload.get("nonce")
        if not user_id or not nonce:
            raise InvalidMagicLinkException()

        try:
            user_id = UUID(user_id)
        except ValueError:
            raise InvalidMagicLinkException()

        user = await self.user_repo.get_active_by_id(db, user_id)
        if not user or user.magic_link_nonce != nonce:
            raise InvalidMagicLinkException()

        user.magic_link_nonce = new_magic_link_nonce()
        user.email_verified = True
        user.last_seen_at = datetime.now(timezone.utc)
        await db.commit()
        logger.info("magic_link_used", user_id=str(user.id))

        return self._generate_tokens(user)

    async def refresh(
        self,
        db: AsyncSession,
        *,
        refresh_token: str,
    ) -> TokenResponse:
        """
        Issue new tokens using a valid refresh token.

        Raises:
            InvalidTokenException: If refresh token is invalid or expired.
        """
        payload = decode_token(refresh_token)

        if not payload or not verify_token_type(payload, "refresh"):
            raise InvalidTokenException()

        user_id = payload.get("sub")
        if not user_id:
            raise InvalidTokenException()

        try:
            user_id = UUID(user_id)
        except ValueError:
            raise InvalidTokenException()

        user = await self.user_repo.get_active_by_id(db, user_id)
        if not user:
            raise InvalidTokenException()

        return self._generate_tokens(user)

    def _generate_tokens(self, user: User) -> TokenResponse:
        """Generate access and refresh tokens for a user."""
        access_token = create_access_token({"sub": str(user.id)})
        refresh_token = create_refresh_token({"sub": str(user.id)})

        return TokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=settings.access_token_expire_minutes * 60,
        )
