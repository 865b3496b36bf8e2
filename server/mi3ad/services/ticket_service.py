"""Ticket service for gate scanning and wallet passes."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import BookingStateError, NotFoundError
from ..core.observability import metrics_collector
from ..models.booking import Booking, BookingStatus
from ..models.user import User
from ..schemas.booking import Booking as BookingSchema
from ..schemas.booking import PassData, ScanResult, ScanResultType, TicketPass
from .booking_service import BookingService, is_valid_qr_code

logger = logging.getLogger(__name__)


def format_price(total_price: float) -> str:
    """Render a ticket price the way the scanner shows it."""
    if total_price == 0:
        return "مجاني"
    return f"{total_price:g} د.ل"


def ticket_summary(booking: Booking) -> str:
    return f"عدد التذاكر: {booking.ticket_count}\nالسعر: {format_price(booking.total_price)}"


class TicketService:
    """Service for ticket validation at the gate and pass generation."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.booking_service = BookingService(db)

    async def _find_ticket(self, qr_code: str) -> Booking | None:
        if not is_valid_qr_code(qr_code):
            return None
        return await self.booking_service.get_booking_by_qr_code(qr_code)

    async def scan_ticket(self, qr_code: str) -> ScanResult:
        """
        Check a scanned ticket without changing it.

        Returns:
            success for a confirmed ticket, warning for a used one and
            error for cancelled, unknown or malformed codes
        """
        booking = await self._find_ticket(qr_code)

        if not booking:
            result = ScanResult(
                type=ScanResultType.ERROR,
                title="تذكرة غير صالحة ❌",
                message="رمز QR غير صحيح أو التذكرة غير موجودة في النظام",
            )
        elif booking.status == BookingStatus.USED:
            result = ScanResult(
                type=ScanResultType.WARNING,
                title="تذكرة مستخدمة ⚠️",
                message=f"تم استخدام هذه التذكرة مسبقاً\n{ticket_summary(booking)}",
                booking=BookingSchema.model_validate(booking),
            )
        elif booking.status == BookingStatus.CANCELLED:
            result = ScanResult(
                type=ScanResultType.ERROR,
                title="تذكرة ملغاة ❌",
                message="هذه التذكرة تم إلغاؤها ولا يمكن استخدامها",
                booking=BookingSchema.model_validate(booking),
            )
        else:
            result = ScanResult(
                type=ScanResultType.SUCCESS,
                title="تذكرة صالحة ✅",
                message=f"تذكرة صحيحة!\n{ticket_summary(booking)}",
                booking=BookingSchema.model_validate(booking),
            )

        metrics_collector.record_ticket_scanned(result.type.value)

        logger.info(
            "Ticket scanned",
            extra={
                "qr_code": qr_code,
                "outcome": result.type.value,
                "booking_id": booking.id if booking else None
            }
        )

        return result

    async def admit_ticket(self, qr_code: str) -> Booking:
        """
        Admit a ticket holder, moving the ticket from confirmed to used.

        Raises:
            NotFoundError: If the code is malformed or unknown
            BookingStateError: If the ticket is used or cancelled
        """
        booking = await self._find_ticket(qr_code)
        if not booking:
            raise NotFoundError(resource_type="ticket", resource_id=qr_code)

        if booking.status != BookingStatus.CONFIRMED:
            raise BookingStateError(booking.id, str(BookingStatus(booking.status).value), "admitted")

        booking = await self.booking_service.mark_used(booking)
        metrics_collector.record_ticket_admitted()

        logger.info(
            "Ticket admitted",
            extra={"booking_id": booking.id, "event_id": booking.event_id}
        )

        return booking

    async def get_ticket_pass(self, user: User, booking_id: str) -> TicketPass:
        """Build wallet pass data for one of the user's bookings, in the user's language."""
        booking = await self.booking_service.get_booking(user, booking_id)
        event = booking.event
        arabic = user.language == "ar"

        pass_data = PassData(
            event_title=event.title_ar if arabic else event.title,
            event_date=event.date.isoformat(),
            event_time=event.time,
            location=event.location_ar if arabic else event.location,
            ticket_count=booking.ticket_count,
            total_price=booking.total_price,
            qr_code=booking.qr_code,
            holder_name=user.name,
            organizer_name=event.organizer_ar if arabic else event.organizer,
            booking_id=booking.id,
        )

        return TicketPass(
            pass_data=pass_data,
            share_url=f"{settings.public_base_url}/ticket/{booking.id}",
            apple_wallet_url=f"{settings.wallet_api_base_url}/wallet/apple/{booking.id}.pkpass",
        )
