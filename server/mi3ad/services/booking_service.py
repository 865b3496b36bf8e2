"""Booking service for business logic operations."""

import logging
import re
import time
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import BookingStateError, InsufficientTicketsError, NotFoundError, ValidationError
from ..core.observability import metrics_collector
from ..models.booking import Booking, BookingStatus
from ..models.event import Event
from ..models.user import User

logger = logging.getLogger(__name__)

QR_CODE_PATTERN = re.compile(rf"^{re.escape(settings.qr_code_prefix)}-\d+-\w+$")


def generate_qr_code(event_id: str, timestamp_ms: Optional[int] = None) -> str:
    """Build a ticket QR payload of the form PREFIX-<epoch-ms>-<event_id>."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{settings.qr_code_prefix}-{timestamp_ms}-{event_id}"


def is_valid_qr_code(qr_code: str) -> bool:
    return bool(QR_CODE_PATTERN.match(qr_code))


class BookingService:
    """Service for booking-related operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_event_with_lock(self, event_id: str) -> Event:
        """Get an event, locking its row for the rest of the transaction where supported."""
        stmt = select(Event).where(Event.id == event_id).with_for_update()
        result = await self.db.execute(stmt)
        event = result.scalar_one_or_none()
        if not event:
            raise NotFoundError(resource_type="event", resource_id=event_id)
        return event

    async def get_booking_by_qr_code(self, qr_code: str) -> Optional[Booking]:
        stmt = select(Booking).where(Booking.qr_code == qr_code)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def _unique_qr_code(self, event_id: str) -> str:
        timestamp_ms = int(time.time() * 1000)
        qr_code = generate_qr_code(event_id, timestamp_ms)
        while await self.get_booking_by_qr_code(qr_code):
            timestamp_ms += 1
            qr_code = generate_qr_code(event_id, timestamp_ms)
        return qr_code

    async def book_event(self, user: User, event_id: str, ticket_count: int) -> Booking:
        """
        Book tickets for an event.

        Args:
            user: Ticket holder
            event_id: Event to book
            ticket_count: Number of tickets

        Returns:
            Confirmed booking

        Raises:
            NotFoundError: If the event does not exist
            ValidationError: If ticket_count is below one
            InsufficientTicketsError: If fewer tickets remain than requested
        """
        if ticket_count < 1:
            raise ValidationError(
                detail="At least one ticket must be booked",
                errors={"ticket_count": ticket_count}
            )

        event = await self._get_event_with_lock(event_id)

        if ticket_count > event.available_tickets:
            logger.warning(
                "Booking failed - insufficient tickets",
                extra={
                    "event_id": event_id,
                    "user_id": user.id,
                    "requested_tickets": ticket_count,
                    "available_tickets": event.available_tickets
                }
            )
            raise InsufficientTicketsError(
                event_id=event_id,
                requested_tickets=ticket_count,
                available_tickets=event.available_tickets
            )

        booking = Booking(
            event_id=event.id,
            user_id=user.id,
            ticket_count=ticket_count,
            total_price=event.price * ticket_count,
            status=BookingStatus.CONFIRMED,
            qr_code=await self._unique_qr_code(event.id)
        )

        event.current_attendees += ticket_count

        self.db.add(booking)
        self.db.add(event)

        await self.db.commit()
        await self.db.refresh(booking)

        metrics_collector.record_booking_created(event.id)

        logger.info(
            "Booking created successfully",
            extra={
                "booking_id": booking.id,
                "event_id": event.id,
                "user_id": user.id,
                "ticket_count": ticket_count,
                "total_price": booking.total_price,
                "remaining_tickets": event.available_tickets
            }
        )

        return booking

    async def get_booking(self, user: User, booking_id: str) -> Booking:
        """
        Get one of the user's bookings.

        Bookings belonging to other users are reported as missing.
        """
        stmt = select(Booking).where(Booking.id == booking_id, Booking.user_id == user.id)
        result = await self.db.execute(stmt)
        booking = result.scalar_one_or_none()
        if not booking:
            raise NotFoundError(resource_type="booking", resource_id=booking_id)
        return booking

    async def list_bookings(self, user: User, status: Optional[BookingStatus] = None) -> list[Booking]:
        """List the user's bookings, newest first."""
        stmt = select(Booking).where(Booking.user_id == user.id)
        if status is not None:
            stmt = stmt.where(Booking.status == status)
        stmt = stmt.order_by(Booking.booking_date.desc())

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def cancel_booking(self, user: User, booking_id: str) -> Booking:
        """
        Cancel a booking and release its tickets.

        Cancelling an already cancelled booking returns it unchanged.

        Raises:
            NotFoundError: If the booking is not the user's
            BookingStateError: If the ticket was already used
        """
        booking = await self.get_booking(user, booking_id)

        if booking.status == BookingStatus.CANCELLED:
            logger.info(
                "Booking already cancelled - returning existing booking",
                extra={"booking_id": booking_id, "user_id": user.id}
            )
            return booking

        if booking.status == BookingStatus.USED:
            raise BookingStateError(booking_id, BookingStatus.USED.value, "cancelled")

        event = await self._get_event_with_lock(booking.event_id)
        event.current_attendees = max(0, event.current_attendees - booking.ticket_count)
        booking.status = BookingStatus.CANCELLED

        self.db.add(booking)
        self.db.add(event)

        await self.db.commit()
        await self.db.refresh(booking)

        metrics_collector.record_booking_cancelled()

        logger.info(
            "Booking cancelled successfully",
            extra={
                "booking_id": booking_id,
                "event_id": event.id,
                "user_id": user.id,
                "released_tickets": booking.ticket_count,
                "remaining_tickets": event.available_tickets
            }
        )

        return booking

    async def mark_used(self, booking: Booking) -> Booking:
        """
        Move a confirmed booking to used.

        Raises:
            BookingStateError: If the booking was cancelled
        """
        if booking.status == BookingStatus.USED:
            return booking

        if booking.status == BookingStatus.CANCELLED:
            raise BookingStateError(booking.id, BookingStatus.CANCELLED.value, "used")

        booking.status = BookingStatus.USED
        self.db.add(booking)

        await self.db.commit()
        await self.db.refresh(booking)

        logger.info(
            "Ticket marked as used",
            extra={"booking_id": booking.id, "event_id": booking.event_id}
        )

        return booking

    async def mark_ticket_as_used(self, user: User, booking_id: str) -> Booking:
        """Mark one of the user's tickets as used."""
        booking = await self.get_booking(user, booking_id)
        return await self.mark_used(booking)
