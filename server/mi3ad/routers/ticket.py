"""Ticket router for gate scanning."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import get_current_user
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..models.user import User
from ..schemas.booking import Booking, ScanResult, ScanTicketRequest
from ..services.ticket_service import TicketService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/ticket", tags=["ticket"])

DB_DEPENDENCY = Depends(get_db)
USER_DEPENDENCY = Depends(get_current_user)


@router.post("/scan", response_model=ScanResult)
async def scan_ticket(
    request: ScanTicketRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """
    Validate a scanned QR code without admitting the holder.

    Unknown and malformed codes are reported in the result, not as errors.
    """
    ticket_service = TicketService(db)

    try:
        response_data = await ticket_service.scan_ticket(request.qr_code)

        return JSONResponse(
            status_code=200,
            content=response_data.model_dump(mode="json")
        )

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in ticket scan",
            extra={"qr_code": request.qr_code, "scanner_id": user.id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError() from e


@router.post("/admit", response_model=Booking)
async def admit_ticket(
    request: ScanTicketRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """
    Admit the holder of a confirmed ticket, marking it used.

    Used or cancelled tickets are rejected with INVALID_BOOKING_STATE.
    """
    ticket_service = TicketService(db)

    try:
        booking = await ticket_service.admit_ticket(request.qr_code)

        logger.info(
            "Ticket holder admitted",
            extra={"booking_id": booking.id, "scanner_id": user.id}
        )

        return JSONResponse(
            status_code=200,
            content=Booking.model_validate(booking).model_dump(mode="json")
        )

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in ticket admission",
            extra={"qr_code": request.qr_code, "scanner_id": user.id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError() from e
