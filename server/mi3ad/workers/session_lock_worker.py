"""Background worker for auto-locking idle sessions."""

import logging

from ..core.database import async_session_factory
from ..services.security_service import SecurityService
from .base import BaseWorker

logger = logging.getLogger(__name__)


class SessionLockWorker(BaseWorker):
    """
    Lock sessions whose last authentication is older than their session timeout.

    Only users with auto-lock enabled are affected.
    """

    def __init__(self, interval_seconds: float = 60):
        super().__init__(name="SessionLock", interval_seconds=interval_seconds)

    async def process(self) -> int:
        async with async_session_factory() as db:
            try:
                return await SecurityService(db).lock_timed_out_sessions()
            except Exception:
                await db.rollback()
                raise
