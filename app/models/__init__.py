"""
Database models for the AI Agency Marketplace.

All models use UUID primary keys and include created_at/updated_at timestamps.
"""
from app.models.base import BaseModel, TimestampMixin, UUIDMixin, OwnedMixin
from app.models.user import User
from app.models.taxonomy import Service, Industry, Technology, Skill, Benefit, TAXONOMY_MODELS
from app.models.agency import (
    Agency,
    AgencyService,
    AgencyIndustry,
    AgencyTechnology,
    AgencyRequest,
)
from app.models.project import Project, ProjectService
from app.models.job import Job, JobSkill, JobBenefit
from app.models.event import Event, EventSpeaker

__all__ = [
    "BaseModel",
    "TimestampMixin",
    "UUIDMixin",
    "OwnedMixin",
    "User",
    "Service",
    "Industry",
    "Technology",
    "Skill",
    "Benefit",
    "TAXONOMY_MODELS",
    "Agency",
    "AgencyService",
    "AgencyIndustry",
    "AgencyTechnology",
    "AgencyRequest",
    "Project",
    "ProjectService",
    "Job",
    "JobSkill",
    "JobBenefit",
    "Event",
    "EventSpeaker",
]
