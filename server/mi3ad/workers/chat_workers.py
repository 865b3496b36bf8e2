"""Background workers that play the school side of chats."""

import logging

from ..core.database import async_session_factory
from ..services.chat_service import ChatService
from .base import BaseWorker

logger = logging.getLogger(__name__)


class SchoolReplyWorker(BaseWorker):
    """
    Deliver scheduled welcome messages and replies once they are due.

    Runs at a short interval so replies land close to their scheduled delay.
    """

    def __init__(self, interval_seconds: float = 1):
        super().__init__(name="SchoolReply", interval_seconds=interval_seconds)

    async def process(self) -> int:
        async with async_session_factory() as db:
            try:
                return await ChatService(db).deliver_due_replies()
            except Exception:
                await db.rollback()
                raise


class IncomingMessageWorker(BaseWorker):
    """Send an unsolicited message from an online school into a random chat."""

    def __init__(self, interval_seconds: float = 45):
        super().__init__(name="IncomingMessage", interval_seconds=interval_seconds)

    async def process(self) -> int:
        async with async_session_factory() as db:
            try:
                message = await ChatService(db).simulate_incoming_message()
            except Exception:
                await db.rollback()
                raise
        return 1 if message else 0
