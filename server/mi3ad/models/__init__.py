"""Models module exporting all database models."""

from .booking import Booking, BookingStatus
from .chat import Chat, Message, MessageType, ReplyKind, ScheduledReply, SenderType
from .event import Event, EventCategory
from .favorite import SavedEvent, SavedPost
from .notification import Notification, NotificationType
from .school import School
from .security import AuditLog, SecurityProfile
from .user import AccountType, User

__all__ = [
    # Accounts
    "User",
    "AccountType",

    # Catalog
    "Event",
    "EventCategory",
    "School",

    # Booking entities
    "Booking",
    "BookingStatus",

    # Chat entities
    "Chat",
    "Message",
    "MessageType",
    "SenderType",
    "ScheduledReply",
    "ReplyKind",

    # Notifications
    "Notification",
    "NotificationType",

    # Saved items
    "SavedEvent",
    "SavedPost",

    # Security
    "SecurityProfile",
    "AuditLog",
]
