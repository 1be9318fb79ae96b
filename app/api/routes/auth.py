"""
Authentication routes.
"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.rate_limit import limiter, RATE_AUTH
from app.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    MagicLinkRequest,
    MagicLinkVerifyRequest,
    TokenResponse,
    RefreshTokenRequest,
)
from app.schemas.base import MessageResponse
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])

auth_service = AuthService()


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_AUTH)
async def register(
    request: Request,
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new business or agency account.

    Returns access and refresh tokens on successful registration.
    """
    return await auth_service.register(
        db,
        email=body.email,
        password=body.password,
        role=body.role,
    )


@router.post("/login", response_model=TokenResponse)
@limiter.limit(RATE_AUTH)
async def login(
    request: Request,
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """Login with email and password."""
    return await auth_service.login(db, email=body.email, password=body.password)


@router.post("/magic-link", response_model=MessageResponse)
@limiter.limit(RATE_AUTH)
async def request_magic_link(
    request: Request,
    body: MagicLinkRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    E-mail a one-time sign-in link.

    The response is the same whether or not the address has an account.
    """
    message = await auth_service.request_magic_link(db, email=body.email)
    return MessageResponse(message=message)


@router.post("/magic-link/verify", response_model=TokenResponse)
@limiter.limit(RATE_AUTH)
async def verify_magic_link(
    request: Request,
    body: MagicLinkVerifyRequest,
    db: AsyncSession = Depends(get_db),
):
    """Exchange the token from a magic link for access and refresh tokens."""
    return await auth_service.verify_magic_link(db, token=body.token)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    body: RefreshTokenRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Refresh access token using refresh token.
    """
    return await auth_service.refresh(db, refresh_token=body.refresh_token)


@router.post("/logout", response_model=MessageResponse)
async def logout():
    """
    Logout current user.

    Note: With JWT, logout is handled client-side by discarding tokens.
    """
    return MessageResponse(message="Logged out successfully")
