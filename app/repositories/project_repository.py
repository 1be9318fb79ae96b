"""
Project repository - data access for Project entity.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.project import PROJECT_STATUS_OPEN, Project, ProjectService
from app.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    def __init__(self):
        super().__init__(Project)

    async def get_with_services(
        self,
        db: AsyncSession,
        project_id: UUID,
    ) -> Optional[Project]:
        result = await db.execute(
            select(Project)
            .options(selectinload(Project.services))
            .where(Project.id == project_id)
        )
        return result.scalar_one_or_none()

    async def list_by_owner(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> List[Project]:
        """A user's projects, newest first."""
        result = await db.execute(
            select(Project)
            .options(selectinload(Project.services))
            .where(Project.user_id == user_id)
            .order_by(Project.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_open(
        self,
        db: AsyncSession,
        *,
        limit: int = 2,
    ) -> List[Project]:
        """Most recent open projects, shown as featured work on agency profiles."""
        result = await db.execute(
            select(Project)
            .where(Project.status == PROJECT_STATUS_OPEN)
            .order_by(Project.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def add_services(self, db: AsyncSession, project_id: UUID, service_ids: List[UUID]) -> None:
        await self.add_links(db, ProjectService, "project_id", project_id, "service_id", service_ids)
