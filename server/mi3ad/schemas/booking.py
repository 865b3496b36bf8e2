"""Booking and ticket schemas."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.booking import BookingStatus


class BookEventRequest(BaseModel):
    """Request schema for booking tickets."""

    event_id: str = Field(..., min_length=1, description="Event to book")
    ticket_count: int = Field(..., ge=1, description="Number of tickets")


class BookingIdRequest(BaseModel):
    """Request schema addressing one booking."""

    booking_id: str = Field(..., min_length=1, description="Booking ID")


class ListBookingsRequest(BaseModel):
    """Request schema for listing the caller's bookings."""

    status: Optional[BookingStatus] = Field(None, description="Only bookings with this status")


class Booking(BaseModel):
    """Booking response schema."""

    id: str = Field(..., description="Unique booking ID")
    event_id: str = Field(..., description="Booked event")
    user_id: str = Field(..., description="Ticket holder")
    ticket_count: int = Field(..., ge=1, description="Number of tickets")
    total_price: float = Field(..., ge=0, description="Price paid for all tickets")
    booking_date: datetime = Field(..., description="Booking time (ISO 8601)")
    status: BookingStatus = Field(..., description="Booking status")
    qr_code: str = Field(..., description="Ticket QR payload")

    class Config:
        from_attributes = True


class BookingList(BaseModel):
    """List of bookings."""

    items: List[Booking] = Field(..., description="Bookings, newest first")


class ScanTicketRequest(BaseModel):
    """Request schema for scanning or admitting a ticket."""

    qr_code: str = Field(..., min_length=1, max_length=128, description="Scanned QR payload")


class ScanResultType(str, Enum):
    """Outcome shown on the scanner screen."""
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class ScanResult(BaseModel):
    """Ticket scan outcome."""

    type: ScanResultType = Field(..., description="Outcome")
    title: str = Field(..., description="Short headline")
    message: str = Field(..., description="Explanation shown to the gate operator")
    booking: Optional[Booking] = Field(None, description="Matched booking, when found")


class PassData(BaseModel):
    """Wallet pass content."""

    event_title: str
    event_date: str
    event_time: str
    location: str
    ticket_count: int
    total_price: float
    qr_code: str
    holder_name: str
    organizer_name: str
    booking_id: str


class TicketPass(BaseModel):
    """Wallet pass with share and download links."""

    pass_data: PassData = Field(..., description="Localized pass fields")
    share_url: str = Field(..., description="Public ticket link")
    apple_wallet_url: str = Field(..., description="Apple Wallet pass download")
