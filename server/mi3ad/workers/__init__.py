"""Background workers that simulate notifications, school replies and session auto-lock."""

from .chat_workers import IncomingMessageWorker, SchoolReplyWorker
from .notification_worker import NotificationSimulationWorker
from .session_lock_worker import SessionLockWorker

__all__ = [
    "IncomingMessageWorker",
    "NotificationSimulationWorker",
    "SchoolReplyWorker",
    "SessionLockWorker",
]
