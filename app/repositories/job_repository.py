"""
Job repository - data access for Job entity.
"""
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, func, and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.job import JOB_STATUS_PUBLISHED, Job, JobBenefit, JobSkill
from app.repositories.base import BaseRepository


def _with_terms(query):
    return query.options(selectinload(Job.skills), selectinload(Job.benefits))


class JobRepository(BaseRepository[Job]):
    def __init__(self):
        super().__init__(Job)

    async def find_published(
        self,
        db: AsyncSession,
        *,
        search: Optional[str] = None,
        employment_type: Optional[str] = None,
        experience_level: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Job], int]:
        """
        Find published jobs with filters, pagination, and total count.

        Returns:
            Tuple of (jobs list, total count)
        """
        query = select(Job).where(Job.status == JOB_STATUS_PUBLISHED)

        filters = []

        if search:
            filters.append(Job.title.ilike(f"%{search}%"))

        if employment_type:
            filters.append(Job.employment_type == employment_type)

        if experience_level:
            filters.append(Job.experience_level == experience_level)

        if filters:
            query = query.where(and_(*filters))

        # Total count
        count_query = select(func.count()).select_from(query.subquery())
        total_result = await db.execute(count_query)
        total = total_result.scalar() or 0

        # Pagination
        query = _with_terms(query).order_by(Job.created_at.desc())
        query = query.offset(offset).limit(limit)

        result = await db.execute(query)
        jobs = list(result.scalars().all())

        return jobs, total

    async def get_with_terms(
        self,
        db: AsyncSession,
        job_id: UUID,
    ) -> Optional[Job]:
        """Get a job with skills and benefits eagerly loaded."""
        result = await db.execute(
            _with_terms(select(Job)).where(Job.id == job_id)
        )
        return result.scalar_one_or_none()

    async def list_by_owner(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> List[Job]:
        """A user's job postings, newest first."""
        result = await db.execute(
            _with_terms(select(Job))
            .where(Job.user_id == user_id)
            .order_by(Job.created_at.desc())
        )
        return list(result.scalars().all())

    async def add_skills(self, db: AsyncSession, job_id: UUID, skill_ids: List[UUID]) -> None:
        await self.add_links(db, JobSkill, "job_id", job_id, "skill_id", skill_ids)

    async def add_benefits(self, db: AsyncSession, job_id: UUID, benefit_ids: List[UUID]) -> None:
        await self.add_links(db, JobBenefit, "job_id", job_id, "benefit_id", benefit_ids)
