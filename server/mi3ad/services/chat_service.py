"""Chat service for school conversations and simulated school replies."""

import logging
import random
from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.database import utcnow
from ..core.exceptions import NotFoundError
from ..core.observability import metrics_collector
from ..models.chat import Chat, Message, MessageType, ReplyKind, ScheduledReply, SenderType
from ..models.school import School
from ..models.user import User
from ..schemas.chat import SendMessageRequest
from ..seed_data import SCHOOL_RESPONSES, WELCOME_TEMPLATE
from .event_service import text_matches

logger = logging.getLogger(__name__)


def welcome_message(school: School) -> str:
    return WELCOME_TEMPLATE.format(name_ar=school.name_ar)


class ChatService:
    """Service for school directory and chat operations."""

    def __init__(self, db: AsyncSession, rng: Optional[random.Random] = None):
        self.db = db
        self.rng = rng or random.Random()

    # Schools

    async def list_schools(self) -> list[School]:
        result = await self.db.execute(select(School).order_by(School.id))
        return list(result.scalars().all())

    async def get_school(self, school_id: str) -> School:
        """
        Get a school by ID.

        Raises:
            NotFoundError: If the school does not exist
        """
        school = await self.db.get(School, school_id)
        if not school:
            raise NotFoundError(resource_type="school", resource_id=school_id)
        return school

    async def search_schools(self, query: str) -> list[School]:
        """Search school names and locations in both languages."""
        query = query.strip()
        schools = await self.list_schools()
        return [
            school for school in schools
            if text_matches(query, (school.name, school.location), (school.name_ar, school.location_ar))
        ]

    # Chats

    async def get_chat(self, user: User, chat_id: str) -> Chat:
        """
        Get one of the user's chats.

        Raises:
            NotFoundError: If the chat is not the user's
        """
        stmt = select(Chat).where(Chat.id == chat_id, Chat.user_id == user.id)
        result = await self.db.execute(stmt)
        chat = result.scalar_one_or_none()
        if not chat:
            raise NotFoundError(resource_type="chat", resource_id=chat_id)
        return chat

    async def list_chats(self, user: User) -> list[Chat]:
        """List the user's chats, most recent activity first."""
        stmt = (
            select(Chat)
            .where(Chat.user_id == user.id)
            .order_by(Chat.updated_at.desc(), Chat.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def create_chat(self, user: User, school_id: str) -> Chat:
        """
        Open a chat with a school, or return the existing one.

        A new chat gets a welcome message from the school shortly after.
        """
        school = await self.get_school(school_id)

        stmt = select(Chat).where(Chat.user_id == user.id, Chat.school_id == school_id)
        existing = (await self.db.execute(stmt)).scalar_one_or_none()
        if existing:
            logger.info(
                "Chat already exists - returning existing chat",
                extra={"chat_id": existing.id, "school_id": school_id, "user_id": user.id}
            )
            return existing

        now = utcnow()
        chat = Chat(
            id=str(uuid4()),
            school_id=school.id,
            school_name=school.name,
            school_name_ar=school.name_ar,
            user_id=user.id,
            user_name=user.name,
            unread_count=0,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        self.db.add(chat)
        self.db.add(ScheduledReply(
            chat_id=chat.id,
            kind=ReplyKind.WELCOME,
            due_at=now + timedelta(seconds=settings.chat_welcome_delay_seconds),
        ))

        await self.db.commit()
        await self.db.refresh(chat)

        logger.info(
            "Chat created successfully",
            extra={"chat_id": chat.id, "school_id": school_id, "user_id": user.id}
        )

        return chat

    async def send_message(self, user: User, request: SendMessageRequest) -> Message:
        """
        Post a user message to a chat.

        When the school is online an automatic reply is scheduled after a
        random delay.
        """
        chat = await self.get_chat(user, request.chat_id)
        school = await self.db.get(School, chat.school_id)

        now = utcnow()
        message = Message(
            id=str(uuid4()),
            chat_id=chat.id,
            sender_id=user.id,
            sender_name=user.name,
            sender_type=SenderType.USER,
            content=request.content,
            timestamp=now,
            is_read=False,
            message_type=request.message_type,
            attachment_url=request.attachment_url,
        )
        self.db.add(message)

        chat.last_message = message.snapshot()
        chat.updated_at = now
        self.db.add(chat)

        if school and school.is_online:
            delay = self.rng.uniform(settings.chat_reply_min_delay_seconds, settings.chat_reply_max_delay_seconds)
            self.db.add(ScheduledReply(
                chat_id=chat.id,
                kind=ReplyKind.REPLY,
                due_at=now + timedelta(seconds=delay),
            ))

        await self.db.commit()
        await self.db.refresh(message)

        metrics_collector.record_chat_message(SenderType.USER.value)

        logger.info(
            "Message sent",
            extra={
                "chat_id": chat.id,
                "message_id": message.id,
                "user_id": user.id,
                "reply_scheduled": bool(school and school.is_online)
            }
        )

        return message

    def _post_admin_message(self, chat: Chat, school: School, content: str, now: datetime) -> Message:
        """Add a school admin message to a chat; the caller commits."""
        message = Message(
            id=str(uuid4()),
            chat_id=chat.id,
            sender_id=school.primary_admin_id,
            sender_name=f"{school.name} Admin",
            sender_type=SenderType.ADMIN,
            content=content,
            timestamp=now,
            is_read=False,
            message_type=MessageType.TEXT,
        )
        self.db.add(message)

        chat.last_message = message.snapshot()
        chat.unread_count += 1
        chat.updated_at = now
        self.db.add(chat)

        metrics_collector.record_chat_message(SenderType.ADMIN.value)
        return message

    async def deliver_due_replies(self, now: Optional[datetime] = None) -> int:
        """
        Deliver scheduled school messages that are due.

        Welcome messages are always delivered. Replies are dropped when the
        school has gone offline.

        Returns:
            Number of messages delivered
        """
        now = now or utcnow()
        stmt = (
            select(ScheduledReply, Chat, School)
            .join(Chat, ScheduledReply.chat_id == Chat.id)
            .join(School, Chat.school_id == School.id)
            .where(ScheduledReply.due_at <= now)
            .order_by(ScheduledReply.due_at)
        )
        rows = (await self.db.execute(stmt)).all()

        delivered = 0
        for scheduled, chat, school in rows:
            if scheduled.kind == ReplyKind.WELCOME:
                self._post_admin_message(chat, school, welcome_message(school), now)
                delivered += 1
            elif school.is_online:
                self._post_admin_message(chat, school, self.rng.choice(SCHOOL_RESPONSES), now)
                delivered += 1
            await self.db.delete(scheduled)

        if rows:
            await self.db.commit()
            logger.info(
                "Scheduled school messages processed",
                extra={"due": len(rows), "delivered": delivered}
            )

        return delivered

    async def simulate_incoming_message(self) -> Optional[Message]:
        """Send a canned message from an online school into a random chat."""
        stmt = (
            select(Chat, School)
            .join(School, Chat.school_id == School.id)
            .where(School.is_online.is_(True))
        )
        rows = (await self.db.execute(stmt)).all()
        if not rows:
            return None

        chat, school = self.rng.choice(rows)
        message = self._post_admin_message(chat, school, self.rng.choice(SCHOOL_RESPONSES), utcnow())

        await self.db.commit()
        await self.db.refresh(message)

        logger.info(
            "Simulated school message delivered",
            extra={"chat_id": chat.id, "school_id": school.id}
        )

        return message

    async def get_messages(self, user: User, chat_id: str) -> list[Message]:
        """Get a chat's messages, oldest first."""
        await self.get_chat(user, chat_id)
        stmt = select(Message).where(Message.chat_id == chat_id).order_by(Message.timestamp, Message.id)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def mark_messages_as_read(self, user: User, chat_id: str) -> Chat:
        """Mark every message in a chat as read and reset its unread count."""
        chat = await self.get_chat(user, chat_id)

        await self.db.execute(
            update(Message)
            .where(Message.chat_id == chat_id, Message.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session="fetch")
        )

        chat.unread_count = 0
        if chat.last_message:
            chat.last_message = {**chat.last_message, "is_read": True}
        self.db.add(chat)

        await self.db.commit()
        await self.db.refresh(chat)
        return chat

    async def delete_chat(self, user: User, chat_id: str) -> None:
        """Delete a chat together with its messages and pending replies."""
        chat = await self.get_chat(user, chat_id)

        await self.db.execute(delete(Message).where(Message.chat_id == chat.id))
        await self.db.execute(delete(ScheduledReply).where(ScheduledReply.chat_id == chat.id))
        await self.db.delete(chat)
        await self.db.commit()

        logger.info("Chat deleted", extra={"chat_id": chat_id, "user_id": user.id})

    async def get_unread_count(self, user: User) -> int:
        stmt = select(func.coalesce(func.sum(Chat.unread_count), 0)).where(Chat.user_id == user.id)
        result = await self.db.execute(stmt)
        return int(result.scalar_one())
