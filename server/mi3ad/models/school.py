"""School model definition."""

from sqlalchemy import JSON, Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base


class School(Base):
    """School entity users can open a chat with."""

    __tablename__ = "schools"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_ar: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    description_ar: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    location_ar: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Administrators answering chats; the first one signs automatic replies
    admin_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_online: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    response_time: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    @property
    def primary_admin_id(self) -> str:
        return self.admin_ids[0] if self.admin_ids else f"school-{self.id}-admin"

    def __repr__(self) -> str:
        return f"<School(id={self.id}, name='{self.name}', is_online={self.is_online})>"
