"""Service layer package."""

from .auth_service import AuthService
from .booking_service import BookingService
from .catalog_service import seed_catalog
from .chat_service import ChatService
from .event_service import EventService
from .favorites_service import FavoritesService
from .notification_service import NotificationService
from .security_service import SecurityService
from .ticket_service import TicketService

__all__ = [
    "AuthService",
    "BookingService",
    "ChatService",
    "EventService",
    "FavoritesService",
    "NotificationService",
    "SecurityService",
    "TicketService",
    "seed_catalog",
]
