"""
Job model - a position posted by a business looking for AI talent.
"""
import uuid
from datetime import date
from typing import TYPE_CHECKING, List, Optional
from sqlalchemy import Date, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel, OwnedMixin

if TYPE_CHECKING:
    from app.models.taxonomy import Benefit, Skill


JOB_STATUS_PUBLISHED = "published"

JOB_STATUS_LABELS = {
    "published": "Published",
    "draft": "Draft",
    "closed": "Closed",
    "filled": "Filled",
}


class Job(OwnedMixin, BaseModel):
    """
    Job posting entity.

    Published immediately on creation; the owner can later close or mark it filled.
    """

    __tablename__ = "jobs"

    # Core fields
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    employment_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
    )  # 'full-time', 'part-time', 'contract', 'internship'
    industry: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)

    # Salary
    salary_min: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    salary_max: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    application_deadline: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Qualifications
    education_required: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    experience_level: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
        index=True,
    )  # 'entry', 'mid', 'senior', 'expert'
    certifications: Mapped[list] = mapped_column(JSONB, default=list)

    # Company
    company_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    company_website: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    contact_email: Mapped[str] = mapped_column(String(255), nullable=False)

    status: Mapped[str] = mapped_column(String(20), default=JOB_STATUS_PUBLISHED, index=True)

    skills: Mapped[List["Skill"]] = relationship(
        "Skill",
        secondary="job_skills",
        viewonly=True,
        order_by="Skill.name",
    )
    benefits: Mapped[List["Benefit"]] = relationship(
        "Benefit",
        secondary="job_benefits",
        viewonly=True,
        order_by="Benefit.name",
    )

    def __repr__(self) -> str:
        return f"<Job {self.title}>"


class JobSkill(BaseModel):
    __tablename__ = "job_skills"
    __table_args__ = (
        UniqueConstraint("job_id", "skill_id", name="uq_job_skill"),
    )

    job_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("jobs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    skill_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("skills.id"),
        nullable=False,
    )


class JobBenefit(BaseModel):
    __tablename__ = "job_benefits"
    __table_args__ = (
        UniqueConstraint("job_id", "benefit_id", name="uq_job_benefit"),
    )

    job_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("jobs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    benefit_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("benefits.id"),
        nullable=False,
    )
