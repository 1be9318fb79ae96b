"""
Event model - conferences, webinars and meetups shown on the events page.
"""
import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import Boolean, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel


EVENT_STATUS_PUBLISHED = "published"
LOCATION_TYPE_VIRTUAL = "virtual"
PRICE_TYPE_FREE = "free"


class Event(BaseModel):
    __tablename__ = "events"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    event_type: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        index=True,
    )  # conference, webinar, workshop, hackathon, meetup, training, networking
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Where
    location_type: Mapped[str] = mapped_column(String(20), default="in_person")  # 'virtual', 'in_person'
    location_label: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # When
    start_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True, index=True)
    end_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # Organizer
    organizer_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    organizer_logo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    cover_image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Tickets
    price_type: Mapped[str] = mapped_column(String(10), default=PRICE_TYPE_FREE)  # 'free', 'paid'
    price_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    registration_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    tags: Mapped[list] = mapped_column(JSONB, default=list)
    status: Mapped[str] = mapped_column(String(20), default="draft", index=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False)

    speakers: Mapped[List["EventSpeaker"]] = relationship(
        "EventSpeaker",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="EventSpeaker.created_at",
    )

    def __repr__(self) -> str:
        return f"<Event {self.title}>"


class EventSpeaker(BaseModel):
    __tablename__ = "event_speakers"

    event_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    event: Mapped["Event"] = relationship("Event", back_populates="speakers")
