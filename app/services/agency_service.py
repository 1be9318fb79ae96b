"""
Agency service - the public directory, profile pages and the owner's own profile.

Directory rules
───────────────
• Only approved agencies are listed or viewable by the public
• Column filters (search, location, rating, size) run in SQL
• Taxonomy filters (service, industry, technology) run over the fetched page;
  the reported total is the SQL count before that step
• New profiles start pending; the owner sees their own profile regardless of status
"""
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import storage
from app.core.exceptions import (
    AgencyNotFoundException,
    BadRequestException,
    ListingUnavailableException,
    SaveFailedException,
    UnknownTermException,
)
from app.core.logging import get_logger
from app.core.pagination import page_bounds, total_pages
from app.models.agency import AGENCY_STATUS_APPROVED, AGENCY_STATUS_PENDING, Agency
from app.models.taxonomy import Industry, Service
from app.models.user import User
from app.repositories.agency_repository import AgencyRepository
from app.repositories.filters import agency_conditions, agency_order_by, post_filter_by_terms
from app.repositories.project_repository import ProjectRepository
from app.repositories.taxonomy_repository import TaxonomyRepository
from app.schemas.agency import (
    AgencyCard,
    AgencyDetail,
    AgencyFilters,
    AgencyProfileForm,
    FeaturedProject,
    LogoUploadResponse,
    MyAgencyResponse,
)
from app.schemas.base import PaginatedResponse
from app.services.compensation import create_with_links

logger = get_logger(__name__)

LOAD_FAILED = "Failed to load agencies. Please try again later."
SAVE_FAILED = "Failed to save agency profile. Please try again."
FEATURED_PROJECTS = 2


def format_location(city: Optional[str], country: Optional[str]) -> str:
    """'City, Country', whichever half is present, or a placeholder."""
    if city and country:
        return f"{city}, {country}"
    return city or country or "Location not specified"


def _rating(agency: Agency) -> float:
    return float(agency.rating_avg) if agency.rating_avg is not None else 0.0


class AgencyService:
    """Handles the agency directory and agency profile management."""

    def __init__(self):
        self.agency_repo = AgencyRepository()
        self.project_repo = ProjectRepository()
        self.service_terms = TaxonomyRepository(Service)
        self.industry_terms = TaxonomyRepository(Industry)

    # ── Directory ────────────────────────────────────────────────────────────

    async def list_agencies(
        self,
        db: AsyncSession,
        *,
        filters: AgencyFilters,
        sort: Optional[str] = None,
        page: int = 1,
        per_page: int = 9,
    ) -> PaginatedResponse[AgencyCard]:
        """
        One page of the public directory.

        Raises:
            ListingUnavailableException: the database query failed
        """
        offset, _ = page_bounds(page, per_page)

        try:
            agencies, total = await self.agency_repo.find_approved(
                db,
                conditions=agency_conditions(filters),
                order_by=agency_order_by(sort),
                offset=offset,
                limit=per_page,
            )
        except SQLAlchemyError as exc:
            logger.error("agency_list_failed", page=page, error=str(exc))
            raise ListingUnavailableException(LOAD_FAILED) from exc

        cards = post_filter_by_terms([self._to_card(a) for a in agencies], filters)

        return PaginatedResponse(
            items=cards,
            total=total,
            page=page,
            limit=per_page,
            pages=total_pages(total, per_page),
        )

    async def get_profile(
        self,
        db: AsyncSession,
        agency_id,
        viewer: Optional[User] = None,
    ) -> AgencyDetail:
        """
        Public profile page.

        Raises:
            AgencyNotFoundException: no such agency, or not approved and the
                viewer is not its owner
        """
        try:
            agency = await self.agency_repo.get_with_terms(db, agency_id)
            if agency is None or not self._visible_to(agency, viewer):
                raise AgencyNotFoundException()
            featured = await self.project_repo.list_open(db, limit=FEATURED_PROJECTS)
        except SQLAlchemyError as exc:
            logger.error("agency_profile_failed", agency_id=str(agency_id), error=str(exc))
            raise ListingUnavailableException(
                "Failed to load agency details. Please try again later."
            ) from exc

        return AgencyDetail(
            id=agency.id,
            name=agency.name,
            description=agency.description or "No description available.",
            rating_avg=_rating(agency),
            review_count=agency.review_count or 0,
            location=format_location(agency.location_city, agency.location_country),
            location_city=agency.location_city,
            location_country=agency.location_country,
            employee_range=agency.employee_range,
            contact_email=agency.contact_email,
            contact_phone=agency.contact_phone,
            logo_url=agency.logo_url,
            case_studies=agency.case_studies,
            certifications_awards=agency.certifications_awards,
            services=[s.name for s in agency.services],
            industries=[i.name for i in agency.industries],
            technologies=[t.name for t in agency.technologies],
            featured_projects=[FeaturedProject.model_validate(p) for p in featured],
        )

    # ── Owner's profile ──────────────────────────────────────────────────────

    async def get_my_agency(
        self,
        db: AsyncSession,
        user: User,
    ) -> MyAgencyResponse:
        """
        The caller's agency, shaped for prefilling the profile form.

        Raises:
            AgencyNotFoundException: the caller has not created one yet
        """
        agency = await self.agency_repo.get_by_owner(db, user.id)
        if agency is None:
            raise AgencyNotFoundException()
        return self._to_mine(agency)

    async def save_my_agency(
        self,
        db: AsyncSession,
        user: User,
        form: AgencyProfileForm,
    ) -> MyAgencyResponse:
        """
        Create the caller's agency, or update it if they already own one.

        Raises:
            UnknownTermException: a selected service or industry does not exist
            BadRequestException: the logo path does not belong to the caller
            SaveFailedException: the write failed and was rolled back
        """
        # Rollbacks expire the session's instances, the caller's user included
        user_id = user.id

        await self._check_terms(db, form)
        if form.logo_path and not form.logo_path.startswith(f"{user_id}/"):
            raise BadRequestException("Invalid logo path", code="INVALID_LOGO_PATH")

        existing = await self.agency_repo.get_by_owner(db, user_id)
        if existing is None:
            agency_id = await self._create(db, user_id, form)
        else:
            agency_id = await self._update(db, user_id, existing, form)

        agency = await self.agency_repo.get_by_owner(db, user_id)
        if agency is None or agency.id != agency_id:
            raise AgencyNotFoundException()
        return self._to_mine(agency)

    async def _check_terms(self, db: AsyncSession, form: AgencyProfileForm) -> None:
        known_services = await self.service_terms.existing_ids(db, form.services_offered)
        for service_id in form.services_offered:
            if service_id not in known_services:
                raise UnknownTermException("Service", str(service_id))

        known_industries = await self.industry_terms.existing_ids(db, form.industry_specialties)
        for industry_id in form.industry_specialties:
            if industry_id not in known_industries:
                raise UnknownTermException("Industry", str(industry_id))

    def _profile_values(self, form: AgencyProfileForm) -> Dict[str, Any]:
        values = {
            "name": form.agency_name,
            "contact_email": form.contact_email,
            "contact_phone": form.contact_phone,
            "case_studies": form.case_studies,
            "certifications_awards": form.certifications_awards,
        }
        if form.logo_path:
            values["logo_url"] = storage.public_url(form.logo_path)
            values["logo_path"] = form.logo_path
        return values

    async def _create(self, db: AsyncSession, user_id: UUID, form: AgencyProfileForm) -> UUID:
        agency = await create_with_links(
            db,
            self.agency_repo,
            values={
                "owner_user_id": user_id,
                "status": AGENCY_STATUS_PENDING,
                **self._profile_values(form),
            },
            link_steps=[
                lambda agency_id: self.agency_repo.add_services(db, agency_id, form.services_offered),
                lambda agency_id: self.agency_repo.add_industries(db, agency_id, form.industry_specialties),
            ],
            entity="agency",
            failure_message=SAVE_FAILED,
        )
        agency_id = agency.id
        logger.info("agency_created", agency_id=str(agency_id))

        # Review request bookkeeping; the profile itself is already saved
        try:
            await self.agency_repo.record_request(db, user_id=user_id, agency_id=agency_id)
            await db.commit()
        except SQLAlchemyError as exc:
            await db.rollback()
            logger.warning("agency_request_failed", agency_id=str(agency_id), error=str(exc))

        return agency_id

    async def _update(
        self,
        db: AsyncSession,
        user_id: UUID,
        agency: Agency,
        form: AgencyProfileForm,
    ) -> UUID:
        agency_id = agency.id
        try:
            updated = await self.agency_repo.update_owned(
                db, agency_id, user_id, **self._profile_values(form)
            )
            if not updated:
                raise AgencyNotFoundException()
            await self.agency_repo.replace_terms(
                db,
                agency_id,
                service_ids=form.services_offered,
                industry_ids=form.industry_specialties,
            )
            await db.commit()
        except SQLAlchemyError as exc:
            await db.rollback()
            logger.error("agency_update_failed", agency_id=str(agency_id), error=str(exc))
            raise SaveFailedException(SAVE_FAILED) from exc

        logger.info("agency_updated", agency_id=str(agency_id))
        return agency_id

    # ── Logo ─────────────────────────────────────────────────────────────────

    async def upload_logo(
        self,
        db: AsyncSession,
        user: User,
        *,
        data: bytes,
        content_type: Optional[str],
        filename: str,
    ) -> LogoUploadResponse:
        """
        Store a logo image. If the caller already owns an agency the new logo
        replaces the old one, which is then removed from the bucket.
        """
        user_id = user.id
        agency = await self.agency_repo.get_by_owner(db, user_id)
        agency_id = agency.id if agency else None

        result = await storage.upload_agency_logo(
            data,
            content_type=content_type,
            filename=filename,
            user_id=user_id,
            agency_id=agency_id,
        )

        if agency_id is not None:
            previous = agency.logo_path
            try:
                await self.agency_repo.update_owned(
                    db, agency_id, user_id, logo_url=result.url, logo_path=result.path
                )
                await db.commit()
            except SQLAlchemyError as exc:
                await db.rollback()
                logger.error("agency_logo_save_failed", agency_id=str(agency_id), error=str(exc))
                await storage.delete_agency_logo(result.path)
                raise SaveFailedException(SAVE_FAILED) from exc

            if previous and previous != result.path:
                await storage.delete_agency_logo(previous)

        return LogoUploadResponse(url=result.url, path=result.path)

    # ── Shaping ──────────────────────────────────────────────────────────────

    @staticmethod
    def _visible_to(agency: Agency, viewer: Optional[User]) -> bool:
        if agency.status == AGENCY_STATUS_APPROVED:
            return True
        return viewer is not None and viewer.id == agency.owner_user_id

    @staticmethod
    def _to_card(agency: Agency) -> AgencyCard:
        return AgencyCard(
            id=agency.id,
            name=agency.name,
            rating=_rating(agency),
            location=format_location(agency.location_city, agency.location_country),
            services=[s.name for s in agency.services],
            industries=[i.name for i in agency.industries],
            technologies=[t.name for t in agency.technologies],
            size=agency.employee_range or "Size not specified",
            image_url=agency.logo_url,
        )

    @staticmethod
    def _to_mine(agency: Agency) -> MyAgencyResponse:
        return MyAgencyResponse(
            id=agency.id,
            name=agency.name,
            contact_email=agency.contact_email,
            contact_phone=agency.contact_phone,
            case_studies=agency.case_studies,
            certifications_awards=agency.certifications_awards,
            logo_url=agency.logo_url,
            status=agency.status,
            services=[s.id for s in agency.services],
            industries=[i.id for i in agency.industries],
        )
