"""Event model definition."""

import datetime as dt
from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base, utcnow


class EventCategory(str, Enum):
    """Event category enumeration."""
    GOVERNMENT = "government"
    SCHOOLS = "schools"
    CLINICS = "clinics"
    OCCASIONS = "occasions"
    ENTERTAINMENT = "entertainment"
    OPENINGS = "openings"


class Event(Base):
    """Event entity representing a bookable happening in the catalog."""

    __tablename__ = "events"

    # Primary key (catalog ids are short strings such as "1")
    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    # Bilingual content
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    title_ar: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    description_ar: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[EventCategory] = mapped_column(String(20), nullable=False, index=True)

    # Schedule and place
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    time: Mapped[str] = mapped_column(String(5), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    location_ar: Mapped[str] = mapped_column(String(255), nullable=False)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Ticketing
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    max_attendees: Mapped[int] = mapped_column(Integer, nullable=False)
    current_attendees: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Presentation
    image: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    organizer: Mapped[str] = mapped_column(String(255), nullable=False)
    organizer_ar: Mapped[str] = mapped_column(String(255), nullable=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utcnow,
        onupdate=utcnow
    )

    __table_args__ = (
        CheckConstraint("max_attendees > 0", name="ck_event_max_attendees_positive"),
        CheckConstraint("current_attendees >= 0", name="ck_event_current_attendees_non_negative"),
        CheckConstraint("price >= 0", name="ck_event_price_non_negative"),
    )

    @property
    def available_tickets(self) -> int:
        return max(0, self.max_attendees - self.current_attendees)

    def __repr__(self) -> str:
        return (
            f"<Event(id={self.id}, title='{self.title}', category={self.category}, "
            f"attendees={self.current_attendees}/{self.max_attendees})>"
        )
