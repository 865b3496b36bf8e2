"""Background worker that pushes simulated notifications."""

import logging

from ..core.database import async_session_factory
from ..services.notification_service import NotificationService
from .base import BaseWorker

logger = logging.getLogger(__name__)


class NotificationSimulationWorker(BaseWorker):
    """
    Push a random notification to every user below the simulation cap.

    Stands in for a real push channel so the in-app list keeps changing.
    """

    def __init__(self, interval_seconds: float = 30):
        super().__init__(name="NotificationSimulation", interval_seconds=interval_seconds)

    async def process(self) -> int:
        async with async_session_factory() as db:
            try:
                return await NotificationService(db).simulate_notifications()
            except Exception:
                await db.rollback()
                raise
