"""Security profile and audit log model definitions."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base, utcnow


class SecurityProfile(Base):
    """
    Per-user security state.

    Settings and device capabilities are stored as JSON documents; callers
    replace the whole document on every change so the ORM sees the update.
    """

    __tablename__ = "security_profiles"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True
    )

    settings: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    device: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    is_online: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_authenticated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utcnow,
        onupdate=utcnow
    )

    def __repr__(self) -> str:
        return f"<SecurityProfile(user_id={self.user_id}, is_authenticated={self.is_authenticated})>"


class AuditLog(Base):
    """Security audit log entry."""

    __tablename__ = "audit_logs"

    id: Mapped[str] = mapped_column(String(16), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow, index=True)
    action: Mapped[str] = mapped_column(String(64), nullable=False)
    details: Mapped[str] = mapped_column(Text, nullable=False)
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    device_info: Mapped[str] = mapped_column(String(255), nullable=False, default="unknown")
    success: Mapped[bool] = mapped_column(Boolean, nullable=False)

    def __repr__(self) -> str:
        return f"<AuditLog(id={self.id}, action={self.action}, success={self.success})>"
