"""
Event schemas.
"""
from datetime import datetime
from typing import List, Literal, Optional, Union
from app.schemas.base import BaseSchema, IDSchema


EVENT_TYPES = ["conference", "webinar", "workshop", "hackathon", "meetup", "training", "networking"]
EVENT_LOCATIONS = ["virtual", "united states", "europe", "asia", "other"]
DATE_RANGES = ["today", "this-week", "this-month", "next-month"]

DateRange = Literal["all", "today", "this-week", "this-month", "next-month"]


class EventFilters(BaseSchema):
    """Events page filters; 'all' disables a filter."""

    search: Optional[str] = None
    event_type: str = "all"
    location: str = "all"
    date_range: DateRange = "all"
    price: Literal["all", "free", "paid"] = "all"


class SpeakerBrief(BaseSchema):
    name: str
    title: str = ""
    image: str = ""


class EventCard(IDSchema):
    title: str
    type: str
    description: Optional[str] = None
    location: str
    date: Optional[datetime] = None
    duration: str
    organizer: str
    organizer_logo: str
    ticket_price: Union[Literal["Free"], float]
    tags: List[str] = []
    speakers: List[SpeakerBrief] = []
    registration_url: Optional[str] = None
