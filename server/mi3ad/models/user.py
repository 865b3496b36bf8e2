"""User model definition."""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import Boolean, CheckConstraint, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base, utcnow


class AccountType(str, Enum):
    """Account type enumeration."""
    PERSONAL = "personal"
    BUSINESS = "business"


class User(Base):
    """User entity representing a registered app account."""

    __tablename__ = "users"

    # Primary key
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4())
    )

    # Profile
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(32), nullable=False, unique=True, index=True)
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    avatar: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    account_type: Mapped[AccountType] = mapped_column(
        String(20),
        nullable=False,
        default=AccountType.PERSONAL
    )

    # Credentials (salted SHA-256)
    password_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    password_salt: Mapped[str] = mapped_column(String(32), nullable=False)

    # Preferences
    is_dark_mode: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    language: Mapped[str] = mapped_column(String(8), nullable=False, default="ar")

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utcnow,
        onupdate=utcnow
    )

    __table_args__ = (
        CheckConstraint("length(phone) > 0", name="ck_user_phone_not_empty"),
    )

    @property
    def is_business_account(self) -> bool:
        return self.account_type == AccountType.BUSINESS

    def __repr__(self) -> str:
        return f"<User(id={self.id}, phone='{self.phone}', account_type={self.account_type})>"
