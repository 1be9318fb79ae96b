"""
Event routes.
"""
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.core.rate_limit import limiter, RATE_DEFAULT
from app.schemas.base import PaginatedResponse
from app.schemas.event import DateRange, EventCard, EventFilters
from app.services.event_service import EventService

router = APIRouter(prefix="/events", tags=["events"])

event_service = EventService()


@router.get("", response_model=PaginatedResponse[EventCard])
@limiter.limit(RATE_DEFAULT)
async def list_events(
    request: Request,
    search: Optional[str] = Query(None, description="Title contains"),
    event_type: str = Query("all", description="conference, webinar, workshop, ... or all"),
    location: str = Query("all", description="virtual, united states, europe, asia, other or all"),
    date_range: DateRange = Query("all"),
    price: Literal["all", "free", "paid"] = Query("all"),
    page: int = Query(1, ge=1),
    db: AsyncSession = Depends(get_db),
):
    """Published events, featured first then soonest first."""
    filters = EventFilters(
        search=search or None,
        event_type=event_type,
        location=location,
        date_range=date_range,
        price=price,
    )
    return await event_service.list_events(
        db, filters=filters, page=page, per_page=settings.events_per_page
    )
