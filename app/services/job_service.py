"""
Job service - job postings by businesses and the public job board.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    JobNotFoundException,
    ListingUnavailableException,
    UnknownTermException,
)
from app.core.logging import get_logger
from app.core.pagination import page_bounds, total_pages
from app.models.job import JOB_STATUS_LABELS, JOB_STATUS_PUBLISHED, Job
from app.models.taxonomy import Benefit, Skill
from app.models.user import User
from app.repositories.job_repository import JobRepository
from app.repositories.taxonomy_repository import TaxonomyRepository
from app.schemas.base import PaginatedResponse
from app.schemas.job import JobCreate, JobResponse
from app.services.compensation import create_with_links

logger = get_logger(__name__)

SAVE_FAILED = "Failed to post job. Please try again."


def salary_display(salary_min: Optional[int], salary_max: Optional[int]) -> str:
    """
    Human readable salary range.

    >>> salary_display(50000, 80000)
    '$50,000 - $80,000'
    >>> salary_display(None, None)
    'Salary not specified'
    """
    if not salary_min and not salary_max:
        return "Salary not specified"
    if salary_min and salary_max:
        return f"${salary_min:,} - ${salary_max:,}"
    if salary_min:
        return f"${salary_min:,}+"
    return f"Up to ${salary_max:,}"


def status_label(status: str) -> str:
    return JOB_STATUS_LABELS.get(status, status)


class JobService:
    """Handles job posting, the owner's job list and the public job board."""

    def __init__(self):
        self.job_repo = JobRepository()
        self.skill_terms = TaxonomyRepository(Skill)
        self.benefit_terms = TaxonomyRepository(Benefit)

    async def create_job(
        self,
        db: AsyncSession,
        user: User,
        form: JobCreate,
    ) -> JobResponse:
        """
        Publish a job with its required skills and offered benefits.

        Unknown skills are rejected; unknown benefits are skipped.

        Raises:
            UnknownTermException: a skill name does not exist
            SaveFailedException: the write failed; the job was removed again
        """
        skills_by_name = await self.skill_terms.ids_by_name(db, form.required_skills)
        skill_ids = []
        for name in form.required_skills:
            if name not in skills_by_name:
                raise UnknownTermException("Skill", name)
            skill_ids.append(skills_by_name[name])

        benefits_by_name = await self.benefit_terms.ids_by_name(db, form.benefits)
        benefit_ids = [benefits_by_name[name] for name in form.benefits if name in benefits_by_name]

        link_steps = [lambda job_id: self.job_repo.add_skills(db, job_id, skill_ids)]
        if benefit_ids:
            link_steps.append(lambda job_id: self.job_repo.add_benefits(db, job_id, benefit_ids))

        job = await create_with_links(
            db,
            self.job_repo,
            values={
                "user_id": user.id,
                "title": form.title,
                "description": form.description,
                "employment_type": form.employment_type,
                "industry": form.industry,
                "location": form.location,
                "salary_min": form.salary_range.min,
                "salary_max": form.salary_range.max,
                "application_deadline": form.application_deadline,
                "education_required": form.qualifications.education,
                "experience_level": form.qualifications.experience_level,
                "certifications": form.qualifications.certifications,
                "company_name": form.company_info.name,
                "company_website": str(form.company_info.website),
                "contact_email": form.company_info.contact_email,
                "status": JOB_STATUS_PUBLISHED,
            },
            link_steps=link_steps,
            entity="job",
            failure_message=SAVE_FAILED,
        )
        logger.info("job_created", job_id=str(job.id))

        return await self.get_job(db, job.id)

    async def list_my_jobs(
        self,
        db: AsyncSession,
        user: User,
    ) -> List[JobResponse]:
        """The caller's job postings, newest first."""
        try:
            jobs = await self.job_repo.list_by_owner(db, user.id)
        except SQLAlchemyError as exc:
            logger.error("job_list_failed", error=str(exc))
            raise ListingUnavailableException("Failed to load jobs.") from exc
        return [self._to_response(job) for job in jobs]

    async def list_jobs(
        self,
        db: AsyncSession,
        *,
        search: Optional[str] = None,
        employment_type: Optional[str] = None,
        experience_level: Optional[str] = None,
        page: int = 1,
        per_page: int = 10,
    ) -> PaginatedResponse[JobResponse]:
        """Get paginated published jobs with filters."""
        offset, _ = page_bounds(page, per_page)
        try:
            jobs, total = await self.job_repo.find_published(
                db,
                search=search,
                employment_type=employment_type,
                experience_level=experience_level,
                offset=offset,
                limit=per_page,
            )
        except SQLAlchemyError as exc:
            logger.error("job_board_failed", page=page, error=str(exc))
            raise ListingUnavailableException(
                "Failed to load jobs. Please try again later."
            ) from exc

        return PaginatedResponse(
            items=[self._to_response(job) for job in jobs],
            total=total,
            page=page,
            limit=per_page,
            pages=total_pages(total, per_page),
        )

    async def get_job(
        self,
        db: AsyncSession,
        job_id: UUID,
    ) -> JobResponse:
        """
        Raises:
            JobNotFoundException: If job doesn't exist.
        """
        job = await self.job_repo.get_with_terms(db, job_id)
        if job is None:
            raise JobNotFoundException()
        return self._to_response(job)

    def _to_response(self, job: Job) -> JobResponse:
        """Convert a Job model to a JobResponse."""
        return JobResponse(
            id=job.id,
            title=job.title,
            description=job.description,
            employment_type=job.employment_type,
            industry=job.industry,
            salary_min=job.salary_min,
            salary_max=job.salary_max,
            salary_display=salary_display(job.salary_min, job.salary_max),
            location=job.location,
            application_deadline=job.application_deadline,
            education_required=job.education_required,
            experience_level=job.experience_level,
            certifications=job.certifications or [],
            company_name=job.company_name,
            company_website=job.company_website,
            status=job.status,
            status_label=status_label(job.status),
            created_at=job.created_at,
            skills=[s.name for s in job.skills],
            benefits=[b.name for b in job.benefits],
        )
