"""
Project service - businesses posting work for agencies.
"""
from typing import List
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    ListingUnavailableException,
    ProjectNotFoundException,
    UnknownTermException,
)
from app.core.logging import get_logger
from app.models.project import PROJECT_STATUS_LABELS, PROJECT_STATUS_OPEN, Project
from app.models.taxonomy import Service
from app.models.user import User
from app.repositories.project_repository import ProjectRepository
from app.repositories.taxonomy_repository import TaxonomyRepository
from app.schemas.project import BUDGET_RANGES, ProjectCreate, ProjectResponse
from app.services.compensation import create_with_links

logger = get_logger(__name__)

SAVE_FAILED = "Failed to post project. Please try again."


def status_label(status: str) -> str:
    return PROJECT_STATUS_LABELS.get(status, status)


class ProjectService:
    """Handles project creation and the owner's project list."""

    def __init__(self):
        self.project_repo = ProjectRepository()
        self.service_terms = TaxonomyRepository(Service)

    async def create_project(
        self,
        db: AsyncSession,
        user: User,
        form: ProjectCreate,
    ) -> ProjectResponse:
        """
        Create an open project linked to the requested services.

        Raises:
            UnknownTermException: a service name does not exist
            SaveFailedException: the write failed; the project was removed again
        """
        ids_by_name = await self.service_terms.ids_by_name(db, form.required_services)
        service_ids = []
        for name in form.required_services:
            if name not in ids_by_name:
                raise UnknownTermException("Service", name)
            service_ids.append(ids_by_name[name])

        project = await create_with_links(
            db,
            self.project_repo,
            values={
                "user_id": user.id,
                "title": form.title,
                "description": form.description,
                "industry": form.industry,
                "budget_range": form.budget_range,
                "project_timing": form.timing,
                "location_preference": form.location,
                "company_name": form.company_details.company_name,
                "contact_email": form.company_details.email,
                "contact_phone": form.company_details.phone,
                "status": PROJECT_STATUS_OPEN,
            },
            link_steps=[
                lambda project_id: self.project_repo.add_services(db, project_id, service_ids),
            ],
            entity="project",
            failure_message=SAVE_FAILED,
        )
        logger.info("project_created", project_id=str(project.id))

        return await self.get_project(db, project.id)

    async def list_my_projects(
        self,
        db: AsyncSession,
        user: User,
    ) -> List[ProjectResponse]:
        """The caller's projects, newest first."""
        try:
            projects = await self.project_repo.list_by_owner(db, user.id)
        except SQLAlchemyError as exc:
            logger.error("project_list_failed", error=str(exc))
            raise ListingUnavailableException("Failed to load projects.") from exc
        return [self._to_response(p) for p in projects]

    async def get_project(
        self,
        db: AsyncSession,
        project_id: UUID,
    ) -> ProjectResponse:
        """
        Raises:
            ProjectNotFoundException: If project doesn't exist.
        """
        project = await self.project_repo.get_with_services(db, project_id)
        if project is None:
            raise ProjectNotFoundException()
        return self._to_response(project)

    def _to_response(self, project: Project) -> ProjectResponse:
        return ProjectResponse(
            id=project.id,
            title=project.title,
            description=project.description,
            industry=project.industry,
            budget_range=project.budget_range,
            budget_label=BUDGET_RANGES.get(project.budget_range, project.budget_range),
            project_timing=project.project_timing,
            location_preference=project.location_preference,
            company_name=project.company_name,
            status=project.status,
            status_label=status_label(project.status),
            created_at=project.created_at,
            services=[s.name for s in project.services],
        )
