"""Notification service for in-app notifications."""

import logging
import random
from datetime import datetime, timedelta
from typing import Any, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.database import utcnow
from ..core.exceptions import NotFoundError
from ..core.observability import metrics_collector
from ..models.notification import Notification, NotificationType
from ..models.user import User
from ..seed_data import SIMULATED_NOTIFICATIONS, STARTER_NOTIFICATIONS

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for notification operations."""

    def __init__(self, db: AsyncSession, rng: Optional[random.Random] = None):
        self.db = db
        self.rng = rng or random.Random()

    def seed_starter_notifications(self, user_id: str, now: Optional[datetime] = None) -> list[Notification]:
        """
        Add the starter notifications for a new account.

        The caller commits.
        """
        now = now or utcnow()
        notifications = []
        for template in STARTER_NOTIFICATIONS:
            fields = {key: value for key, value in template.items() if key != "hours_ago"}
            notification = Notification(
                user_id=user_id,
                created_at=now - timedelta(hours=template["hours_ago"]),
                **fields
            )
            self.db.add(notification)
            notifications.append(notification)
        return notifications

    async def list_notifications(
        self,
        user: User,
        notification_type: Optional[NotificationType] = None
    ) -> list[Notification]:
        """List the user's notifications, newest first."""
        stmt = select(Notification).where(Notification.user_id == user.id)
        if notification_type is not None:
            stmt = stmt.where(Notification.type == notification_type)
        stmt = stmt.order_by(Notification.created_at.desc())

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_notifications_by_type(self, user: User, notification_type: NotificationType) -> list[Notification]:
        return await self.list_notifications(user, notification_type)

    async def get_unread_count(self, user: User) -> int:
        stmt = select(func.count()).select_from(Notification).where(
            Notification.user_id == user.id,
            Notification.is_read.is_(False)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def _get_owned(self, user: User, notification_id: str) -> Notification:
        stmt = select(Notification).where(
            Notification.id == notification_id,
            Notification.user_id == user.id
        )
        result = await self.db.execute(stmt)
        notification = result.scalar_one_or_none()
        if not notification:
            raise NotFoundError(resource_type="notification", resource_id=notification_id)
        return notification

    async def mark_as_read(self, user: User, notification_id: str) -> Notification:
        """
        Mark one notification as read.

        Raises:
            NotFoundError: If the notification is not the user's
        """
        notification = await self._get_owned(user, notification_id)
        notification.is_read = True
        self.db.add(notification)

        await self.db.commit()
        await self.db.refresh(notification)
        return notification

    async def mark_all_as_read(self, user: User) -> int:
        """Mark every notification read; returns how many changed."""
        stmt = (
            update(Notification)
            .where(Notification.user_id == user.id, Notification.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.db.execute(stmt)
        await self.db.commit()

        logger.info(
            "Notifications marked as read",
            extra={"user_id": user.id, "updated": result.rowcount}
        )
        return result.rowcount

    async def delete_notification(self, user: User, notification_id: str) -> None:
        notification = await self._get_owned(user, notification_id)
        await self.db.delete(notification)
        await self.db.commit()

    async def clear_all_notifications(self, user: User) -> int:
        """Delete every notification of the user; returns how many were removed."""
        stmt = delete(Notification).where(Notification.user_id == user.id)
        result = await self.db.execute(stmt)
        await self.db.commit()

        logger.info(
            "Notifications cleared",
            extra={"user_id": user.id, "deleted": result.rowcount}
        )
        return result.rowcount

    async def add_notification(
        self,
        user_id: str,
        notification_type: NotificationType,
        title: str,
        message: str,
        data: Optional[dict[str, Any]] = None,
        action_url: Optional[str] = None,
        image_url: Optional[str] = None,
        from_user: Optional[dict[str, Any]] = None,
    ) -> Notification:
        """Create a new unread notification for a user."""
        notification = Notification(
            user_id=user_id,
            type=notification_type,
            title=title,
            message=message,
            data=data,
            is_read=False,
            action_url=action_url,
            image_url=image_url,
            from_user=from_user,
        )
        self.db.add(notification)

        await self.db.commit()
        await self.db.refresh(notification)

        metrics_collector.record_notification_created(NotificationType(notification_type).value)

        logger.info(
            "Notification created",
            extra={
                "notification_id": notification.id,
                "user_id": user_id,
                "type": NotificationType(notification_type).value
            }
        )

        return notification

    async def simulate_notifications(self) -> int:
        """
        Push one random notification to every user below the simulation cap.

        Returns:
            Number of notifications created
        """
        counts = (
            select(Notification.user_id, func.count(Notification.id).label("total"))
            .group_by(Notification.user_id)
            .subquery()
        )
        stmt = (
            select(User.id)
            .outerjoin(counts, counts.c.user_id == User.id)
            .where(func.coalesce(counts.c.total, 0) < settings.max_notifications_for_simulation)
        )
        user_ids = list((await self.db.execute(stmt)).scalars().all())

        for user_id in user_ids:
            template = self.rng.choice(SIMULATED_NOTIFICATIONS)
            await self.add_notification(
                user_id,
                NotificationType(template["type"]),
                template["title"],
                template["message"],
                action_url=template.get("action_url"),
            )

        return len(user_ids)
