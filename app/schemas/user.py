"""
User schemas.
"""
from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field
from app.schemas.base import BaseSchema, TimestampSchema, IDSchema


class UserUpdate(BaseSchema):
    """User update schema."""

    full_name: Optional[str] = Field(None, max_length=255)


class UserResponse(IDSchema, TimestampSchema):
    """User response schema."""

    email: EmailStr
    full_name: Optional[str] = None
    role: str
    email_verified: bool
    is_active: bool
    has_password: bool = True
    last_seen_at: Optional[datetime] = None
