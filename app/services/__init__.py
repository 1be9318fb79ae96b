"""
Service layer - business logic and orchestration.

Services contain the application's business logic, coordinate between
repositories, and handle cross-cutting concerns.

RULE: Routes call services. Services call repositories. Never the reverse.
"""
from app.services.auth_service import AuthService
from app.services.user_service import UserService
from app.services.taxonomy_service import TaxonomyService
from app.services.agency_service import AgencyService
from app.services.project_service import ProjectService
from app.services.job_service import JobService
from app.services.event_service import EventService

__all__ = [
    "AuthService",
    "UserService",
    "TaxonomyService",
    "AgencyService",
    "ProjectService",
    "JobService",
    "EventService",
]
