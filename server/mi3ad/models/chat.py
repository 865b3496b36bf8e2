"""Chat, message and scheduled reply model definitions."""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.database import Base, utcnow


class SenderType(str, Enum):
    """Message sender enumeration."""
    USER = "user"
    ADMIN = "admin"


class MessageType(str, Enum):
    """Message content type enumeration."""
    TEXT = "text"
    IMAGE = "image"
    FILE = "file"


class ReplyKind(str, Enum):
    """Kind of automatic school message waiting to be delivered."""
    WELCOME = "welcome"
    REPLY = "reply"


class Chat(Base):
    """Conversation between a user and a school's administrators."""

    __tablename__ = "chats"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4())
    )

    school_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Denormalized for list screens
    school_name: Mapped[str] = mapped_column(String(255), nullable=False)
    school_name_ar: Mapped[str] = mapped_column(String(255), nullable=False)
    user_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_message: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    unread_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow, index=True)

    __table_args__ = (
        UniqueConstraint("user_id", "school_id", name="uq_chat_user_school"),
    )

    messages: Mapped[list["Message"]] = relationship(
        "Message",
        back_populates="chat",
        cascade="all, delete-orphan",
        passive_deletes=True
    )
    scheduled_replies: Mapped[list["ScheduledReply"]] = relationship(
        "ScheduledReply",
        back_populates="chat",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Chat(id={self.id}, school_id={self.school_id}, unread={self.unread_count})>"


class Message(Base):
    """Single chat message."""

    __tablename__ = "messages"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4())
    )
    chat_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("chats.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    sender_id: Mapped[str] = mapped_column(String(64), nullable=False)
    sender_name: Mapped[str] = mapped_column(String(255), nullable=False)
    sender_type: Mapped[SenderType] = mapped_column(String(10), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow, index=True)
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    message_type: Mapped[MessageType] = mapped_column(String(10), nullable=False, default=MessageType.TEXT)
    attachment_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    chat: Mapped["Chat"] = relationship("Chat", back_populates="messages")

    def snapshot(self) -> dict[str, Any]:
        """JSON form stored as a chat's last message."""
        return {
            "id": self.id,
            "chat_id": self.chat_id,
            "sender_id": self.sender_id,
            "sender_name": self.sender_name,
            "sender_type": str(SenderType(self.sender_type).value),
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
            "is_read": self.is_read,
            "message_type": str(MessageType(self.message_type).value),
            "attachment_url": self.attachment_url,
        }

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, chat_id={self.chat_id}, sender_type={self.sender_type})>"


class ScheduledReply(Base):
    """Automatic school message due for delivery by the reply worker."""

    __tablename__ = "scheduled_replies"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4())
    )
    chat_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("chats.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    kind: Mapped[ReplyKind] = mapped_column(String(10), nullable=False)
    due_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    chat: Mapped["Chat"] = relationship("Chat", back_populates="scheduled_replies")

    def __repr__(self) -> str:
        return f"<ScheduledReply(id={self.id}, chat_id={self.chat_id}, kind={self.kind}, due_at={self.due_at})>"
