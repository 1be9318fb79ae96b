"""
Project model - a business's request for AI agency work.
"""
import uuid
from typing import TYPE_CHECKING, List, Optional
from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel, OwnedMixin

if TYPE_CHECKING:
    from app.models.taxonomy import Service


PROJECT_STATUS_OPEN = "open"

PROJECT_STATUS_LABELS = {
    "open": "Open",
    "in-progress": "In Progress",
    "closed": "Closed",
    "completed": "Completed",
}


class Project(OwnedMixin, BaseModel):
    __tablename__ = "projects"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    industry: Mapped[str] = mapped_column(String(100), nullable=False)
    budget_range: Mapped[str] = mapped_column(String(50), nullable=False)
    project_timing: Mapped[str] = mapped_column(String(20), nullable=False)  # 'short-term', 'long-term'
    location_preference: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Company contact
    company_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    contact_email: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    status: Mapped[str] = mapped_column(String(20), default=PROJECT_STATUS_OPEN, index=True)

    services: Mapped[List["Service"]] = relationship(
        "Service",
        secondary="project_services",
        viewonly=True,
        order_by="Service.name",
    )

    def __repr__(self) -> str:
        return f"<Project {self.title}>"


class ProjectService(BaseModel):
    __tablename__ = "project_services"
    __table_args__ = (
        UniqueConstraint("project_id", "service_id", name="uq_project_service"),
    )

    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    service_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("services.id"),
        nullable=False,
    )
