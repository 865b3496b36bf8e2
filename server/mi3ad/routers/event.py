"""Event router for catalog browsing."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..models.event import Event as EventModel
from ..schemas.event import (
    Event,
    EventList,
    EventsByCategoryRequest,
    GetEventRequest,
    ListEventsRequest,
    NearbyEventsRequest,
    SearchEventsRequest,
)
from ..services.event_service import EventService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/event", tags=["event"])

DB_DEPENDENCY = Depends(get_db)


def _event_list_response(events: list[EventModel]) -> JSONResponse:
    response_data = EventList(items=[Event.model_validate(event) for event in events])
    return JSONResponse(
        status_code=200,
        content=response_data.model_dump(mode="json")
    )


@router.post("/list", response_model=EventList)
async def list_events(
    request: ListEventsRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """List catalog events, optionally narrowed to one category or to featured events."""
    events = await EventService(db).list_events(request.category, request.featured_only)
    return _event_list_response(events)


@router.post("/get", response_model=Event)
async def get_event(
    request: GetEventRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Get one event with its remaining ticket count."""
    event = await EventService(db).get_event(request.event_id)
    return JSONResponse(
        status_code=200,
        content=Event.model_validate(event).model_dump(mode="json")
    )


@router.post("/search", response_model=EventList)
async def search_events(
    request: SearchEventsRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """
    Search titles, descriptions and locations.

    English text matches case-insensitively, Arabic text exactly. An empty
    query returns every event.
    """
    events = await EventService(db).search_events(request.query)

    logger.debug(
        "Event search",
        extra={"query": request.query, "results": len(events)}
    )

    return _event_list_response(events)


@router.post("/category", response_model=EventList)
async def events_by_category(
    request: EventsByCategoryRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    events = await EventService(db).get_events_by_category(request.category)
    return _event_list_response(events)


@router.post("/featured", response_model=EventList)
async def featured_events(db: AsyncSession = DB_DEPENDENCY) -> JSONResponse:
    events = await EventService(db).get_featured_events()
    return _event_list_response(events)


@router.post("/nearby", response_model=EventList)
async def nearby_events(
    request: NearbyEventsRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Events within radius_km of a point. Events without coordinates are skipped."""
    events = await EventService(db).get_nearby_events(
        request.latitude, request.longitude, request.radius_km
    )
    return _event_list_response(events)
