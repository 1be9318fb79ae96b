"""
Agency model - an AI service provider listed in the directory.
"""
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional
from sqlalchemy import ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.taxonomy import Industry, Service, Technology
    from app.models.user import User


AGENCY_STATUS_PENDING = "pending"
AGENCY_STATUS_APPROVED = "approved"
AGENCY_STATUS_REJECTED = "rejected"


class Agency(BaseModel):
    """
    Agency entity.

    New profiles start as 'pending' and only appear in the public directory
    once approved. Each user owns at most one agency.
    """

    __tablename__ = "agencies"

    owner_user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )

    # Profile
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    case_studies: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    certifications_awards: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Contact
    contact_email: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Logo (public URL + object key for later removal)
    logo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    logo_path: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Directory attributes
    location_city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    location_country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    employee_range: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    rating_avg: Mapped[Optional[Decimal]] = mapped_column(Numeric(3, 2), nullable=True, index=True)
    review_count: Mapped[int] = mapped_column(Integer, default=0)

    status: Mapped[str] = mapped_column(
        String(20),
        default=AGENCY_STATUS_PENDING,
        index=True,
    )  # 'pending', 'approved', 'rejected'

    # Relationships (read side; links are written through the join models)
    owner: Mapped["User"] = relationship("User")
    services: Mapped[List["Service"]] = relationship(
        "Service",
        secondary="agency_services",
        viewonly=True,
        order_by="Service.name",
    )
    industries: Mapped[List["Industry"]] = relationship(
        "Industry",
        secondary="agency_industries",
        viewonly=True,
        order_by="Industry.name",
    )
    technologies: Mapped[List["Technology"]] = relationship(
        "Technology",
        secondary="agency_technologies",
        viewonly=True,
        order_by="Technology.name",
    )

    def __repr__(self) -> str:
        return f"<Agency {self.name} ({self.status})>"


class AgencyService(BaseModel):
    __tablename__ = "agency_services"
    __table_args__ = (
        UniqueConstraint("agency_id", "service_id", name="uq_agency_service"),
    )

    agency_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("agencies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    service_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("services.id"),
        nullable=False,
    )


class AgencyIndustry(BaseModel):
    __tablename__ = "agency_industries"
    __table_args__ = (
        UniqueConstraint("agency_id", "industry_id", name="uq_agency_industry"),
    )

    agency_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("agencies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    industry_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("industries.id"),
        nullable=False,
    )


class AgencyTechnology(BaseModel):
    __tablename__ = "agency_technologies"
    __table_args__ = (
        UniqueConstraint("agency_id", "technology_id", name="uq_agency_technology"),
    )

    agency_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("agencies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    technology_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("technologies.id"),
        nullable=False,
    )


class AgencyRequest(BaseModel):
    """Review request recorded when an agency profile is first submitted."""

    __tablename__ = "agency_requests"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    agency_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("agencies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
