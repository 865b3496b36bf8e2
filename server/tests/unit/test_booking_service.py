"""Unit tests for booking service."""

import pytest

from mi3ad.core.exceptions import BookingStateError, InsufficientTicketsError, NotFoundError, ValidationError
from mi3ad.models.booking import BookingStatus
from mi3ad.services.booking_service import BookingService, generate_qr_code, is_valid_qr_code
from mi3ad.services.event_service import EventService


@pytest.mark.asyncio
async def test_book_event(catalog, user):
    """Booking confirms immediately, prices all tickets and takes them from the event."""
    service = BookingService(catalog)

    booking = await service.book_event(user, "2", 3)

    assert booking.status == BookingStatus.CONFIRMED
    assert booking.ticket_count == 3
    assert booking.total_price == 15
    assert booking.user_id == user.id
    assert is_valid_qr_code(booking.qr_code)
    assert booking.qr_code.endswith("-2")

    event = await EventService(catalog).get_event("2")
    assert event.current_attendees == 159


@pytest.mark.asyncio
async def test_book_free_event(catalog, user):
    booking = await BookingService(catalog).book_event(user, "1", 2)

    assert booking.total_price == 0


@pytest.mark.asyncio
async def test_book_more_than_available(catalog, user):
    """Event 4 has 23 tickets left."""
    service = BookingService(catalog)

    with pytest.raises(InsufficientTicketsError) as exc_info:
        await service.book_event(user, "4", 24)

    assert exc_info.value.problem_details["code"] == "SOLD_OUT"
    assert exc_info.value.problem_details["available_tickets"] == 23

    event = await EventService(catalog).get_event("4")
    assert event.current_attendees == 127


@pytest.mark.asyncio
async def test_book_last_tickets(catalog, user):
    service = BookingService(catalog)

    await service.book_event(user, "4", 23)

    event = await EventService(catalog).get_event("4")
    assert event.available_tickets == 0
    with pytest.raises(InsufficientTicketsError):
        await service.book_event(user, "4", 1)


@pytest.mark.asyncio
async def test_book_zero_tickets(catalog, user):
    with pytest.raises(ValidationError):
        await BookingService(catalog).book_event(user, "1", 0)


@pytest.mark.asyncio
async def test_book_unknown_event(catalog, user):
    with pytest.raises(NotFoundError):
        await BookingService(catalog).book_event(user, "missing", 1)


@pytest.mark.asyncio
async def test_qr_codes_are_unique(catalog, user):
    service = BookingService(catalog)

    codes = {(await service.book_event(user, "6", 1)).qr_code for _ in range(5)}

    assert len(codes) == 5


@pytest.mark.asyncio
async def test_cancel_restores_availability(catalog, user):
    service = BookingService(catalog)
    booking = await service.book_event(user, "3", 4)

    cancelled = await service.cancel_booking(user, booking.id)

    assert cancelled.status == BookingStatus.CANCELLED
    event = await EventService(catalog).get_event("3")
    assert event.current_attendees == 89


@pytest.mark.asyncio
async def test_cancel_twice_is_noop(catalog, user):
    service = BookingService(catalog)
    booking = await service.book_event(user, "3", 4)

    await service.cancel_booking(user, booking.id)
    again = await service.cancel_booking(user, booking.id)

    assert again.status == BookingStatus.CANCELLED
    event = await EventService(catalog).get_event("3")
    assert event.current_attendees == 89


@pytest.mark.asyncio
async def test_cancel_never_drops_attendance_below_zero(catalog, user):
    service = BookingService(catalog)
    booking = await service.book_event(user, "3", 4)

    event = await EventService(catalog).get_event("3")
    event.current_attendees = 1
    await catalog.commit()

    await service.cancel_booking(user, booking.id)

    event = await EventService(catalog).get_event("3")
    assert event.current_attendees == 0


@pytest.mark.asyncio
async def test_cancelled_ticket_cannot_be_used(catalog, user):
    service = BookingService(catalog)
    booking = await service.book_event(user, "5", 1)
    await service.cancel_booking(user, booking.id)

    with pytest.raises(BookingStateError):
        await service.mark_ticket_as_used(user, booking.id)


@pytest.mark.asyncio
async def test_used_ticket_cannot_be_cancelled(catalog, user):
    service = BookingService(catalog)
    booking = await service.book_event(user, "5", 1)
    await service.mark_ticket_as_used(user, booking.id)

    with pytest.raises(BookingStateError):
        await service.cancel_booking(user, booking.id)


@pytest.mark.asyncio
async def test_mark_used_twice(catalog, user):
    service = BookingService(catalog)
    booking = await service.book_event(user, "5", 1)

    await service.mark_ticket_as_used(user, booking.id)
    again = await service.mark_ticket_as_used(user, booking.id)

    assert again.status == BookingStatus.USED


@pytest.mark.asyncio
async def test_bookings_are_private(catalog, user, other_user):
    service = BookingService(catalog)
    booking = await service.book_event(user, "1", 1)

    with pytest.raises(NotFoundError):
        await service.get_booking(other_user, booking.id)
    with pytest.raises(NotFoundError):
        await service.cancel_booking(other_user, booking.id)

    assert await service.list_bookings(other_user) == []


@pytest.mark.asyncio
async def test_list_bookings_by_status(catalog, user):
    service = BookingService(catalog)
    first = await service.book_event(user, "1", 1)
    second = await service.book_event(user, "2", 1)
    await service.cancel_booking(user, first.id)

    confirmed = await service.list_bookings(user, BookingStatus.CONFIRMED)
    cancelled = await service.list_bookings(user, BookingStatus.CANCELLED)

    assert [b.id for b in confirmed] == [second.id]
    assert [b.id for b in cancelled] == [first.id]
    assert len(await service.list_bookings(user)) == 2


def test_generate_qr_code_format():
    assert generate_qr_code("3", 1700000000000) == "MI3AD-1700000000000-3"
    assert is_valid_qr_code("MI3AD-1700000000000-3")
    assert not is_valid_qr_code("MI3AD-abc-3")
    assert not is_valid_qr_code("OTHER-1700000000000-3")
