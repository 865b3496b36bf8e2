"""Unit tests for ticket scanning and passes."""

import pytest

from mi3ad.core.exceptions import BookingStateError, NotFoundError
from mi3ad.models.booking import BookingStatus
from mi3ad.schemas.booking import ScanResultType
from mi3ad.services.booking_service import BookingService
from mi3ad.services.ticket_service import TicketService, format_price


@pytest.mark.asyncio
async def test_scan_confirmed_ticket(catalog, user):
    booking = await BookingService(catalog).book_event(user, "4", 2)

    result = await TicketService(catalog).scan_ticket(booking.qr_code)

    assert result.type == ScanResultType.SUCCESS
    assert result.booking.id == booking.id
    assert "عدد التذاكر: 2" in result.message
    assert "50 د.ل" in result.message


@pytest.mark.asyncio
async def test_scan_does_not_change_ticket(catalog, user):
    booking = await BookingService(catalog).book_event(user, "4", 1)
    service = TicketService(catalog)

    await service.scan_ticket(booking.qr_code)
    second = await service.scan_ticket(booking.qr_code)

    assert second.type == ScanResultType.SUCCESS
    assert second.booking.status == BookingStatus.CONFIRMED


@pytest.mark.asyncio
async def test_scan_free_ticket_shows_free_price(catalog, user):
    booking = await BookingService(catalog).book_event(user, "1", 1)

    result = await TicketService(catalog).scan_ticket(booking.qr_code)

    assert "مجاني" in result.message


@pytest.mark.asyncio
async def test_scan_used_ticket_warns(catalog, user):
    booking_service = BookingService(catalog)
    booking = await booking_service.book_event(user, "3", 1)
    await booking_service.mark_ticket_as_used(user, booking.id)

    result = await TicketService(catalog).scan_ticket(booking.qr_code)

    assert result.type == ScanResultType.WARNING


@pytest.mark.asyncio
async def test_scan_cancelled_ticket_errors(catalog, user):
    booking_service = BookingService(catalog)
    booking = await booking_service.book_event(user, "3", 1)
    await booking_service.cancel_booking(user, booking.id)

    result = await TicketService(catalog).scan_ticket(booking.qr_code)

    assert result.type == ScanResultType.ERROR
    assert result.booking.status == BookingStatus.CANCELLED


@pytest.mark.asyncio
@pytest.mark.parametrize("qr_code", ["MI3AD-1700000000000-1", "not-a-ticket", "MI3AD--1"])
async def test_scan_unknown_or_malformed_code(catalog, qr_code):
    result = await TicketService(catalog).scan_ticket(qr_code)

    assert result.type == ScanResultType.ERROR
    assert result.booking is None


@pytest.mark.asyncio
async def test_admit_ticket(catalog, user):
    booking = await BookingService(catalog).book_event(user, "6", 1)
    service = TicketService(catalog)

    admitted = await service.admit_ticket(booking.qr_code)

    assert admitted.status == BookingStatus.USED
    with pytest.raises(BookingStateError):
        await service.admit_ticket(booking.qr_code)


@pytest.mark.asyncio
async def test_admit_unknown_ticket(catalog):
    with pytest.raises(NotFoundError):
        await TicketService(catalog).admit_ticket("garbage")


@pytest.mark.asyncio
async def test_ticket_pass_follows_user_language(catalog, user):
    booking = await BookingService(catalog).book_event(user, "5", 2)
    service = TicketService(catalog)

    arabic = await service.get_ticket_pass(user, booking.id)
    assert arabic.pass_data.holder_name == user.name
    assert arabic.pass_data.qr_code == booking.qr_code
    assert arabic.pass_data.total_price == 30
    assert arabic.share_url.endswith(f"/ticket/{booking.id}")
    assert arabic.apple_wallet_url.endswith(f"/wallet/apple/{booking.id}.pkpass")

    user.language = "en"
    await catalog.commit()

    english = await service.get_ticket_pass(user, booking.id)
    assert english.pass_data.event_title != arabic.pass_data.event_title
    assert english.pass_data.location != arabic.pass_data.location


@pytest.mark.asyncio
async def test_ticket_pass_for_other_user(catalog, user, other_user):
    booking = await BookingService(catalog).book_event(user, "5", 1)

    with pytest.raises(NotFoundError):
        await TicketService(catalog).get_ticket_pass(other_user, booking.id)


def test_format_price():
    assert format_price(0) == "مجاني"
    assert format_price(25) == "25 د.ل"
    assert format_price(7.5) == "7.5 د.ل"
