"""
Event service - the public events page.
"""
from datetime import date, datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ListingUnavailableException
from app.core.logging import get_logger
from app.core.pagination import page_bounds, total_pages
from app.models.event import LOCATION_TYPE_VIRTUAL, PRICE_TYPE_FREE, Event
from app.repositories.event_repository import EventRepository
from app.repositories.filters import event_conditions
from app.schemas.base import PaginatedResponse
from app.schemas.event import EventCard, EventFilters, SpeakerBrief

logger = get_logger(__name__)


def event_duration(start_at: Optional[datetime], end_at: Optional[datetime]) -> str:
    """Number of calendar days the event touches, counting both ends."""
    if start_at is None:
        return "TBD"
    if end_at is None:
        return "1 day"
    days = (end_at.date() - start_at.date()).days + 1
    if days <= 1:
        return "1 day"
    return f"{days} days"


def event_location(event: Event) -> str:
    if event.location_type == LOCATION_TYPE_VIRTUAL:
        return "Virtual"
    return event.location_label or "TBD"


def ticket_price(event: Event):
    if event.price_type == PRICE_TYPE_FREE:
        return "Free"
    return float(event.price_amount) if event.price_amount is not None else 0.0


class EventService:
    """Lists published events."""

    def __init__(self):
        self.event_repo = EventRepository()

    async def list_events(
        self,
        db: AsyncSession,
        *,
        filters: EventFilters,
        page: int = 1,
        per_page: int = 9,
        today: Optional[date] = None,
    ) -> PaginatedResponse[EventCard]:
        """
        One page of published events, featured first then soonest first.

        Raises:
            ListingUnavailableException: the database query failed
        """
        offset, _ = page_bounds(page, per_page)
        conditions = event_conditions(filters, today or date.today())

        try:
            events, total = await self.event_repo.find_published(
                db,
                conditions=conditions,
                offset=offset,
                limit=per_page,
            )
        except SQLAlchemyError as exc:
            logger.error("event_list_failed", page=page, error=str(exc))
            raise ListingUnavailableException(
                "Failed to load events. Please try again later."
            ) from exc

        return PaginatedResponse(
            items=[self.to_card(event) for event in events],
            total=total,
            page=page,
            limit=per_page,
            pages=total_pages(total, per_page),
        )

    @staticmethod
    def to_card(event: Event) -> EventCard:
        return EventCard(
            id=event.id,
            title=event.title,
            type=event.event_type,
            description=event.description,
            location=event_location(event),
            date=event.start_at,
            duration=event_duration(event.start_at, event.end_at),
            organizer=event.organizer_name or "TBD",
            organizer_logo=event.organizer_logo_url or event.cover_image_url or "",
            ticket_price=ticket_price(event),
            tags=event.tags or [],
            speakers=[
                SpeakerBrief(
                    name=speaker.name,
                    title=speaker.title or "",
                    image=speaker.image_url or "",
                )
                for speaker in event.speakers
            ],
            registration_url=event.registration_url,
        )
