"""Unit tests for event service."""

import pytest

from mi3ad.core.exceptions import NotFoundError
from mi3ad.models.event import EventCategory
from mi3ad.services.catalog_service import seed_catalog
from mi3ad.services.event_service import EventService


@pytest.mark.asyncio
async def test_seed_catalog_is_idempotent(catalog):
    """Seeding twice inserts nothing the second time."""
    assert await seed_catalog(catalog) == 0

    events = await EventService(catalog).list_events()
    assert [event.id for event in events] == ["1", "2", "3", "4", "5", "6"]


@pytest.mark.asyncio
async def test_list_events_by_category(catalog):
    service = EventService(catalog)

    events = await service.list_events(category=EventCategory.SCHOOLS)

    assert [event.id for event in events] == ["2"]


@pytest.mark.asyncio
async def test_featured_events(catalog):
    service = EventService(catalog)

    events = await service.get_featured_events()

    assert {event.id for event in events} == {"1", "2", "4", "6"}
    assert all(event.is_featured for event in events)


@pytest.mark.asyncio
async def test_get_event_reports_available_tickets(catalog):
    event = await EventService(catalog).get_event("4")

    assert event.max_attendees == 150
    assert event.current_attendees == 127
    assert event.available_tickets == 23


@pytest.mark.asyncio
async def test_get_unknown_event(catalog):
    with pytest.raises(NotFoundError):
        await EventService(catalog).get_event("999")


@pytest.mark.asyncio
async def test_search_english_is_case_insensitive(catalog):
    service = EventService(catalog)

    assert [e.id for e in await service.search_events("COMEDY")] == ["5"]
    assert [e.id for e in await service.search_events("school")] == ["2"]


@pytest.mark.asyncio
async def test_search_arabic_text(catalog):
    events = await EventService(catalog).search_events("الكوميديا")

    assert [event.id for event in events] == ["5"]


@pytest.mark.asyncio
async def test_empty_search_returns_everything(catalog):
    events = await EventService(catalog).search_events("   ")

    assert len(events) == 6


@pytest.mark.asyncio
async def test_search_without_matches(catalog):
    assert await EventService(catalog).search_events("quantum physics") == []


@pytest.mark.asyncio
async def test_nearby_events_in_tripoli(catalog):
    """Every event except the Benghazi fair lies within 10 km of central Tripoli."""
    events = await EventService(catalog).get_nearby_events(32.8872, 13.1913, 10)

    assert {event.id for event in events} == {"1", "3", "4", "5", "6"}


@pytest.mark.asyncio
async def test_nearby_events_in_benghazi(catalog):
    events = await EventService(catalog).get_nearby_events(32.1244, 20.0707, 5)

    assert [event.id for event in events] == ["2"]


@pytest.mark.asyncio
async def test_nearby_skips_events_without_coordinates(catalog):
    service = EventService(catalog)
    event = await service.get_event("3")
    event.latitude = None
    event.longitude = None
    await catalog.commit()

    events = await service.get_nearby_events(32.8925, 13.1802, 1)

    assert "3" not in {e.id for e in events}
    assert {e.id for e in events} == {"4", "6"}
