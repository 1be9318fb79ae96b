"""
User model - a business or agency account.
"""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


ROLE_BUSINESS = "business"
ROLE_AGENCY = "agency"


class User(BaseModel):
    """
    User entity.

    password_hash is empty for accounts that only ever sign in by magic link.
    """

    __tablename__ = "users"

    # Authentication
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    magic_link_nonce: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    # Profile
    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(20), default=ROLE_BUSINESS)  # 'business', 'agency'

    # Status
    email_verified: Mapped[bool] = mapped_column(Boolean, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)

    # Activity tracking
    last_seen_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<User {self.email}>"
