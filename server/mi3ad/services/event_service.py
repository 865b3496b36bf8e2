"""Event service for catalog browsing and search."""

import logging
import math
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundError
from ..models.event import Event, EventCategory

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    a = min(1.0, a)
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def text_matches(query: str, english: Iterable[str], arabic: Iterable[str]) -> bool:
    """
    Match a search query against bilingual text.

    English fields match case-insensitively; Arabic fields match as written.
    An empty query matches everything.
    """
    if not query:
        return True
    needle = query.lower()
    if any(needle in value.lower() for value in english):
        return True
    return any(query in value for value in arabic)


def has_coordinates(event: Event) -> bool:
    # A zero coordinate is treated as missing, as the mobile client stores it
    return bool(event.latitude) and bool(event.longitude)


class EventService:
    """Service for event catalog operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _all_events(self) -> list[Event]:
        stmt = select(Event).order_by(Event.date, Event.id)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_events(
        self,
        category: Optional[EventCategory] = None,
        featured_only: bool = False
    ) -> list[Event]:
        """
        List catalog events.

        Args:
            category: Only events in this category
            featured_only: Only featured events

        Returns:
            Events ordered by date
        """
        stmt = select(Event)
        if category is not None:
            stmt = stmt.where(Event.category == category)
        if featured_only:
            stmt = stmt.where(Event.is_featured.is_(True))
        stmt = stmt.order_by(Event.date, Event.id)

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_event_by_id(self, event_id: str) -> Optional[Event]:
        """Get an event by ID, or None."""
        stmt = select(Event).where(Event.id == event_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_event(self, event_id: str) -> Event:
        """
        Get an event by ID.

        Raises:
            NotFoundError: If the event does not exist
        """
        event = await self.get_event_by_id(event_id)
        if not event:
            raise NotFoundError(resource_type="event", resource_id=event_id)
        return event

    async def search_events(self, query: str) -> list[Event]:
        """Search titles, descriptions and locations in both languages."""
        query = query.strip()
        events = await self._all_events()
        matches = [
            event for event in events
            if text_matches(
                query,
                (event.title, event.description, event.location),
                (event.title_ar, event.description_ar, event.location_ar),
            )
        ]

        logger.debug(
            "Event search completed",
            extra={"query": query, "matches": len(matches)}
        )
        return matches

    async def get_events_by_category(self, category: EventCategory) -> list[Event]:
        return await self.list_events(category=category)

    async def get_featured_events(self) -> list[Event]:
        return await self.list_events(featured_only=True)

    async def get_nearby_events(self, latitude: float, longitude: float, radius_km: float) -> list[Event]:
        """
        Find events within a radius of a point.

        Events without coordinates are never returned.
        """
        events = await self._all_events()
        nearby = [
            event for event in events
            if has_coordinates(event)
            and haversine_km(latitude, longitude, event.latitude, event.longitude) <= radius_km
        ]

        logger.debug(
            "Nearby event search completed",
            extra={
                "latitude": latitude,
                "longitude": longitude,
                "radius_km": radius_km,
                "matches": len(nearby)
            }
        )
        return nearby
