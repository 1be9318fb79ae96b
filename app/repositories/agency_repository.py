"""
Agency repository - data access for Agency and its taxonomy links.
"""
from typing import Any, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import select, func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.agency import (
    AGENCY_STATUS_APPROVED,
    Agency,
    AgencyIndustry,
    AgencyRequest,
    AgencyService,
)
from app.repositories.base import BaseRepository


def _with_terms(query):
    return query.options(
        selectinload(Agency.services),
        selectinload(Agency.industries),
        selectinload(Agency.technologies),
    )


class AgencyRepository(BaseRepository[Agency]):
    def __init__(self):
        super().__init__(Agency)

    async def find_approved(
        self,
        db: AsyncSession,
        *,
        conditions: Sequence[Any],
        order_by: Sequence[Any],
        offset: int,
        limit: int,
    ) -> Tuple[List[Agency], int]:
        """
        One page of approved agencies matching ``conditions``.

        Returns:
            Tuple of (agencies with terms loaded, total matching count)
        """
        query = select(Agency).where(
            Agency.status == AGENCY_STATUS_APPROVED,
            *conditions,
        )

        count_query = select(func.count()).select_from(query.subquery())
        total = (await db.execute(count_query)).scalar() or 0

        query = _with_terms(query).order_by(*order_by).offset(offset).limit(limit)
        result = await db.execute(query)
        return list(result.scalars().all()), total

    async def get_with_terms(
        self,
        db: AsyncSession,
        agency_id: UUID,
    ) -> Optional[Agency]:
        """Get an agency with services, industries and technologies loaded."""
        result = await db.execute(
            _with_terms(select(Agency)).where(Agency.id == agency_id)
        )
        return result.scalar_one_or_none()

    async def get_by_owner(
        self,
        db: AsyncSession,
        owner_user_id: UUID,
    ) -> Optional[Agency]:
        """The agency a user owns, with terms loaded."""
        result = await db.execute(
            _with_terms(select(Agency))
            .where(Agency.owner_user_id == owner_user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def update_owned(
        self,
        db: AsyncSession,
        agency_id: UUID,
        owner_user_id: UUID,
        **values: Any,
    ) -> bool:
        """Update columns on an agency only if ``owner_user_id`` owns it."""
        result = await db.execute(
            update(Agency)
            .where(Agency.id == agency_id, Agency.owner_user_id == owner_user_id)
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount > 0

    async def add_services(self, db: AsyncSession, agency_id: UUID, service_ids: List[UUID]) -> None:
        await self.add_links(db, AgencyService, "agency_id", agency_id, "service_id", service_ids)

    async def add_industries(self, db: AsyncSession, agency_id: UUID, industry_ids: List[UUID]) -> None:
        await self.add_links(db, AgencyIndustry, "agency_id", agency_id, "industry_id", industry_ids)

    async def replace_terms(
        self,
        db: AsyncSession,
        agency_id: UUID,
        *,
        service_ids: List[UUID],
        industry_ids: List[UUID],
    ) -> None:
        """Swap the service and industry links for new ones."""
        await self.remove_links(db, AgencyService, "agency_id", agency_id)
        await self.remove_links(db, AgencyIndustry, "agency_id", agency_id)
        await self.add_services(db, agency_id, service_ids)
        await self.add_industries(db, agency_id, industry_ids)

    async def record_request(
        self,
        db: AsyncSession,
        *,
        user_id: UUID,
        agency_id: UUID,
    ) -> AgencyRequest:
        """Record that an agency was submitted for review."""
        request = AgencyRequest(user_id=user_id, agency_id=agency_id)
        db.add(request)
        await db.flush()
        return request
