"""
Job routes.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.core.config import settings
from app.core.database import get_db
from app.core.rate_limit import limiter, RATE_DEFAULT
from app.models.user import User
from app.schemas.base import PaginatedResponse
from app.schemas.job import EmploymentType, ExperienceLevel, JobCreate, JobResponse
from app.services.job_service import JobService

router = APIRouter(prefix="/jobs", tags=["jobs"])

job_service = JobService()


@router.get("", response_model=PaginatedResponse[JobResponse])
@limiter.limit(RATE_DEFAULT)
async def list_jobs(
    request: Request,
    search: Optional[str] = Query(None, description="Title keyword search"),
    employment_type: Optional[EmploymentType] = Query(None),
    experience_level: Optional[ExperienceLevel] = Query(None),
    page: int = Query(1, ge=1),
    db: AsyncSession = Depends(get_db),
):
    """
    List published jobs with optional filters.
    """
    return await job_service.list_jobs(
        db,
        search=search or None,
        employment_type=employment_type,
        experience_level=experience_level,
        page=page,
        per_page=settings.jobs_per_page,
    )


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    body: JobCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Publish a job posting."""
    return await job_service.create_job(db, current_user, body)


@router.get("/mine", response_model=List[JobResponse])
async def list_my_jobs(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """The caller's job postings, newest first."""
    return await job_service.list_my_jobs(db, current_user)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """
    Get job details with skills and benefits.
    """
    return await job_service.get_job(db, job_id)
