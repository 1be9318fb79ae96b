"""
Agency routes - public directory and the caller's own agency profile.
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_optional_user
from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import BadRequestException
from app.core.rate_limit import limiter, RATE_DEFAULT, RATE_LOGO_UPLOAD
from app.models.user import User
from app.schemas.agency import (
    AGENCY_SORTS,
    AgencyCard,
    AgencyDetail,
    AgencyFilters,
    AgencyProfileForm,
    LogoUploadResponse,
    MyAgencyResponse,
)
from app.schemas.base import PaginatedResponse
from app.schemas.taxonomy import AgencyFilterOptions
from app.services.agency_service import AgencyService
from app.services.taxonomy_service import TaxonomyService

router = APIRouter(prefix="/agencies", tags=["agencies"])

agency_service = AgencyService()
taxonomy_service = TaxonomyService()

PAGE_SIZES = (9, 12, 24, 36)


@router.get("", response_model=PaginatedResponse[AgencyCard])
@limiter.limit(RATE_DEFAULT)
async def list_agencies(
    request: Request,
    search: Optional[str] = Query(None, description="Name contains"),
    service: Optional[str] = Query(None, description="Service name"),
    industry: Optional[str] = Query(None, description="Industry name"),
    technology: Optional[str] = Query(None, description="Technology name"),
    location: Optional[str] = Query(None, description="United States, United Kingdom, Europe, Asia, Remote"),
    rating: Optional[float] = Query(None, ge=0, le=5, description="Minimum rating"),
    size: Optional[str] = Query(None, description="Employee range"),
    sort: str = Query("rating-desc", description=", ".join(AGENCY_SORTS)),
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, description="9, 12, 24 or 36"),
    db: AsyncSession = Depends(get_db),
):
    """
    Browse approved agencies.

    Service, industry and technology filters are applied to the returned
    page only; `total` counts matches of the other filters.
    """
    per_page = per_page or settings.agencies_per_page
    if per_page not in PAGE_SIZES:
        raise BadRequestException(
            f"per_page must be one of {', '.join(map(str, PAGE_SIZES))}",
            code="INVALID_PAGE_SIZE",
        )

    filters = AgencyFilters(
        search=search or None,
        service=service or None,
        industry=industry or None,
        technology=technology or None,
        location=location or None,
        rating=rating,
        size=size or None,
    )
    return await agency_service.list_agencies(
        db, filters=filters, sort=sort, page=page, per_page=per_page
    )


@router.get("/filters", response_model=AgencyFilterOptions)
async def agency_filter_options(
    db: AsyncSession = Depends(get_db),
):
    """Choices for the directory filter panel."""
    return await taxonomy_service.agency_filter_options(db)


@router.get("/me", response_model=MyAgencyResponse)
async def get_my_agency(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """The caller's agency, for prefilling the profile form."""
    return await agency_service.get_my_agency(db, current_user)


@router.put("/me", response_model=MyAgencyResponse)
async def save_my_agency(
    body: AgencyProfileForm,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Create the caller's agency profile, or update it.

    New profiles are pending until reviewed.
    """
    return await agency_service.save_my_agency(db, current_user, body)


@router.post("/me/logo", response_model=LogoUploadResponse, status_code=201)
@limiter.limit(RATE_LOGO_UPLOAD)
async def upload_logo(
    request: Request,
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Upload a PNG, JPG or WebP logo (max 5 MB).

    Returns the public URL and object path; pass both in the profile form
    when the agency does not exist yet.
    """
    # One byte over the limit is enough to reject
    data = await file.read(settings.max_logo_size_bytes + 1)
    return await agency_service.upload_logo(
        db,
        current_user,
        data=data,
        content_type=file.content_type,
        filename=file.filename or "logo",
    )


@router.get("/{agency_id}", response_model=AgencyDetail)
async def get_agency(
    agency_id: UUID,
    viewer: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """Agency profile page."""
    return await agency_service.get_profile(db, agency_id, viewer)
