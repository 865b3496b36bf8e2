"""Booking router for ticket booking operations."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import get_current_user
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..models.user import User
from ..schemas.booking import (
    BookEventRequest,
    Booking,
    BookingIdRequest,
    BookingList,
    ListBookingsRequest,
    TicketPass,
)
from ..services.booking_service import BookingService
from ..services.ticket_service import TicketService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/booking", tags=["booking"])

# Define dependencies to avoid B008 linting errors
DB_DEPENDENCY = Depends(get_db)
USER_DEPENDENCY = Depends(get_current_user)


@router.post("/create", response_model=Booking, status_code=201)
async def book_event(
    request: BookEventRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """
    Book tickets for an event.

    The booking is confirmed immediately and carries the ticket QR code.
    Requests for more tickets than remain fail with SOLD_OUT.
    """
    booking_service = BookingService(db)

    try:
        booking = await booking_service.book_event(user, request.event_id, request.ticket_count)
        response_data = Booking.model_validate(booking)

        return JSONResponse(
            status_code=201,
            content=response_data.model_dump(mode="json")
        )

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in booking creation",
            extra={
                "event_id": request.event_id,
                "ticket_count": request.ticket_count,
                "user_id": user.id,
                "error": str(e)
            },
            exc_info=True
        )
        raise InternalServerError() from e


@router.post("/cancel", response_model=Booking)
async def cancel_booking(
    request: BookingIdRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """
    Cancel a booking and release its tickets.

    Cancelling an already cancelled booking returns it unchanged; a used
    ticket cannot be cancelled.
    """
    booking_service = BookingService(db)

    try:
        booking = await booking_service.cancel_booking(user, request.booking_id)
        response_data = Booking.model_validate(booking)

        return JSONResponse(
            status_code=200,
            content=response_data.model_dump(mode="json")
        )

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in booking cancellation",
            extra={"booking_id": request.booking_id, "user_id": user.id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError() from e


@router.post("/use", response_model=Booking)
async def mark_ticket_as_used(
    request: BookingIdRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Mark one of the caller's tickets as used. Cancelled tickets cannot be used."""
    booking_service = BookingService(db)

    try:
        booking = await booking_service.mark_ticket_as_used(user, request.booking_id)
        response_data = Booking.model_validate(booking)

        return JSONResponse(
            status_code=200,
            content=response_data.model_dump(mode="json")
        )

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error marking ticket as used",
            extra={"booking_id": request.booking_id, "user_id": user.id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError() from e


@router.post("/get", response_model=Booking)
async def get_booking(
    request: BookingIdRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """
    Get booking details.

    Bookings of other users are reported as not found.
    """
    booking = await BookingService(db).get_booking(user, request.booking_id)
    return JSONResponse(
        status_code=200,
        content=Booking.model_validate(booking).model_dump(mode="json")
    )


@router.post("/list", response_model=BookingList)
async def list_bookings(
    request: ListBookingsRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    bookings = await BookingService(db).list_bookings(user, request.status)
    response_data = BookingList(items=[Booking.model_validate(b) for b in bookings])
    return JSONResponse(
        status_code=200,
        content=response_data.model_dump(mode="json")
    )


@router.post("/pass", response_model=TicketPass)
async def ticket_pass(
    request: BookingIdRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Wallet pass data for a booking, localized to the caller's language."""
    response_data = await TicketService(db).get_ticket_pass(user, request.booking_id)
    return JSONResponse(
        status_code=200,
        content=response_data.model_dump(mode="json")
    )
