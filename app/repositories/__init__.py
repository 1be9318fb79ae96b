"""
Repository layer - data access abstraction.

Repositories handle all database queries, keeping SQL/ORM logic
out of the service and route layers.
"""
from app.repositories.base import BaseRepository
from app.repositories.user_repository import UserRepository
from app.repositories.taxonomy_repository import TaxonomyRepository
from app.repositories.agency_repository import AgencyRepository
from app.repositories.project_repository import ProjectRepository
from app.repositories.job_repository import JobRepository
from app.repositories.event_repository import EventRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "TaxonomyRepository",
    "AgencyRepository",
    "ProjectRepository",
    "JobRepository",
    "EventRepository",
]
