"""
Taxonomy service - the controlled vocabularies offered by filters and forms.
"""
from typing import Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ListingUnavailableException, NotFoundException
from app.core.logging import get_logger
from app.models.taxonomy import TAXONOMY_MODELS, Industry, Service, Technology
from app.repositories.taxonomy_repository import TaxonomyRepository
from app.schemas.agency import AGENCY_LOCATIONS, AGENCY_RATINGS, AGENCY_SIZES
from app.schemas.taxonomy import AgencyFilterOptions, TermResponse

logger = get_logger(__name__)


class TaxonomyService:
    """Lists taxonomy terms, always ordered by name."""

    def __init__(self):
        self.repos: Dict[str, TaxonomyRepository] = {
            kind: TaxonomyRepository(model) for kind, model in TAXONOMY_MODELS.items()
        }

    async def list_terms(
        self,
        db: AsyncSession,
        kind: str,
    ) -> List[TermResponse]:
        """
        All terms of one vocabulary.

        Raises:
            NotFoundException: unknown vocabulary name
            ListingUnavailableException: the query failed
        """
        repo = self.repos.get(kind)
        if repo is None:
            raise NotFoundException(f"Unknown taxonomy '{kind}'", code="UNKNOWN_TAXONOMY")

        try:
            terms = await repo.list_ordered(db)
        except SQLAlchemyError as exc:
            logger.error("taxonomy_list_failed", kind=kind, error=str(exc))
            raise ListingUnavailableException(
                f"Failed to load {kind}. Please try again later."
            ) from exc

        return [TermResponse(id=term.id, name=term.name) for term in terms]

    async def agency_filter_options(
        self,
        db: AsyncSession,
    ) -> AgencyFilterOptions:
        """Everything the agency directory needs to render its filter panel."""
        return AgencyFilterOptions(
            services=await self.list_terms(db, Service.__tablename__),
            industries=await self.list_terms(db, Industry.__tablename__),
            technologies=await self.list_terms(db, Technology.__tablename__),
            locations=AGENCY_LOCATIONS,
            sizes=AGENCY_SIZES,
            ratings=AGENCY_RATINGS,
        )
