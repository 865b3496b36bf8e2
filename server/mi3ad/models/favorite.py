"""Saved event and saved post model definitions."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base, utcnow


class SavedEvent(Base):
    """Event bookmarked by a user."""

    __tablename__ = "saved_events"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    event_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False
    )
    saved_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="uq_saved_event_user_event"),
    )

    def __repr__(self) -> str:
        return f"<SavedEvent(user_id={self.user_id}, event_id={self.event_id})>"


class SavedPost(Base):
    """Feed post bookmarked by a user; the post itself lives outside this service."""

    __tablename__ = "saved_posts"

    # Row key; post_id is the caller's identifier for the post
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    post_id: Mapped[str] = mapped_column(String(64), nullable=False)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image_url: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    author: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    category: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_liked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    saved_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="uq_saved_post_user_post"),
    )

    def __repr__(self) -> str:
        return f"<SavedPost(user_id={self.user_id}, post_id={self.post_id})>"
