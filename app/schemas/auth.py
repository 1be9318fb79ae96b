"""
Authentication schemas.
"""
from typing import Literal
from pydantic import EmailStr, Field, model_validator
from app.schemas.base import BaseSchema


class LoginRequest(BaseSchema):
    """Password login request body."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseSchema):
    """Registration request body."""

    email: EmailStr
    password: str = Field(..., min_length=8)
    confirm_password: str
    role: Literal["business", "agency"]

    @model_validator(mode="after")
    def _passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class MagicLinkRequest(BaseSchema):
    """Passwordless sign-in: send a one-time link to this address."""

    email: EmailStr


class MagicLinkVerifyRequest(BaseSchema):
    """Exchange a magic-link token for session tokens."""

    token: str


class TokenResponse(BaseSchema):
    """Token response after successful authentication."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class RefreshTokenRequest(BaseSchema):
    """Refresh token request body."""

    refresh_token: str


class ChangePasswordRequest(BaseSchema):
    """Change password request body."""

    current_password: str
    new_password: str = Field(..., min_length=8)
