"""Event catalog schemas."""

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.event import EventCategory


class Event(BaseModel):
    """Event response schema."""

    id: str = Field(..., description="Unique event ID")
    title: str = Field(..., description="English title")
    title_ar: str = Field(..., description="Arabic title")
    description: str = Field(..., description="English description")
    description_ar: str = Field(..., description="Arabic description")
    category: EventCategory = Field(..., description="Event category")
    date: dt.date = Field(..., description="Event date (ISO 8601)")
    time: str = Field(..., description="Start time (HH:MM)")
    location: str = Field(..., description="English location")
    location_ar: str = Field(..., description="Arabic location")
    price: float = Field(..., ge=0, description="Ticket price, 0 for free events")
    image: str = Field(..., description="Cover image URL")
    organizer: str = Field(..., description="English organizer name")
    organizer_ar: str = Field(..., description="Arabic organizer name")
    is_featured: bool = Field(..., description="Shown on the featured carousel")
    latitude: Optional[float] = Field(None, description="Venue latitude")
    longitude: Optional[float] = Field(None, description="Venue longitude")
    max_attendees: int = Field(..., ge=1, description="Venue capacity")
    current_attendees: int = Field(..., ge=0, description="Tickets sold")
    available_tickets: int = Field(..., ge=0, description="Tickets still available")

    class Config:
        from_attributes = True


class EventList(BaseModel):
    """List of events."""

    items: List[Event] = Field(..., description="Events")


class ListEventsRequest(BaseModel):
    """Request schema for listing events."""

    category: Optional[EventCategory] = Field(None, description="Only events in this category")
    featured_only: bool = Field(False, description="Only featured events")


class GetEventRequest(BaseModel):
    """Request schema for getting an event."""

    event_id: str = Field(..., min_length=1, description="Event to retrieve")


class SearchEventsRequest(BaseModel):
    """Request schema for free-text event search."""

    query: str = Field("", max_length=255, description="Search text; empty returns every event")


class EventsByCategoryRequest(BaseModel):
    """Request schema for listing one category."""

    category: EventCategory = Field(..., description="Event category")


class NearbyEventsRequest(BaseModel):
    """Request schema for events within a radius."""

    latitude: float = Field(..., ge=-90, le=90, description="Origin latitude")
    longitude: float = Field(..., ge=-180, le=180, description="Origin longitude")
    radius_km: float = Field(..., gt=0, description="Search radius in kilometres")
