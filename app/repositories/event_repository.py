"""
Event repository - data access for Event entity.
"""
from typing import Any, List, Sequence, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.event import EVENT_STATUS_PUBLISHED, Event
from app.repositories.base import BaseRepository


class EventRepository(BaseRepository[Event]):
    def __init__(self):
        super().__init__(Event)

    async def find_published(
        self,
        db: AsyncSession,
        *,
        conditions: Sequence[Any],
        offset: int,
        limit: int,
    ) -> Tuple[List[Event], int]:
        """
        One page of published events, featured first then soonest first.

        Returns:
            Tuple of (events with speakers loaded, total count)
        """
        query = select(Event).where(
            Event.status == EVENT_STATUS_PUBLISHED,
            *conditions,
        )

        count_query = select(func.count()).select_from(query.subquery())
        total = (await db.execute(count_query)).scalar() or 0

        query = (
            query.options(selectinload(Event.speakers))
            .order_by(Event.is_featured.desc(), Event.start_at.asc().nulls_last())
            .offset(offset)
            .limit(limit)
        )
        result = await db.execute(query)
        return list(result.scalars().all()), total

    async def get_by_title(self, db: AsyncSession, title: str):
        """Used by the seed script to stay idempotent."""
        result = await db.execute(select(Event).where(Event.title == title))
        return result.scalar_one_or_none()
