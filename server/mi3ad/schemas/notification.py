"""Notification schemas."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..models.notification import NotificationType


class FromUser(BaseModel):
    """User who triggered a notification."""

    id: str
    name: str
    avatar: Optional[str] = None


class Notification(BaseModel):
    """Notification response schema."""

    id: str = Field(..., description="Unique notification ID")
    type: NotificationType = Field(..., description="Notification type")
    title: str = Field(..., description="Headline")
    message: str = Field(..., description="Body text")
    data: Optional[Dict[str, Any]] = Field(None, description="Free-form payload")
    is_read: bool = Field(..., description="Read flag")
    created_at: datetime = Field(..., description="Creation time (ISO 8601)")
    action_url: Optional[str] = Field(None, description="In-app route opened on tap")
    image_url: Optional[str] = Field(None, description="Image URL")
    from_user: Optional[FromUser] = Field(None, description="Originating user")

    class Config:
        from_attributes = True


class NotificationList(BaseModel):
    """List of notifications."""

    items: List[Notification] = Field(..., description="Notifications, newest first")


class ListNotificationsRequest(BaseModel):
    """Request schema for listing notifications."""

    type: Optional[NotificationType] = Field(None, description="Only notifications of this type")


class NotificationsByTypeRequest(BaseModel):
    """Request schema for listing one notification type."""

    type: NotificationType = Field(..., description="Notification type")


class NotificationIdRequest(BaseModel):
    """Request schema addressing one notification."""

    notification_id: str = Field(..., min_length=1, description="Notification ID")


class AddNotificationRequest(BaseModel):
    """Request schema for adding a notification."""

    type: NotificationType = Field(..., description="Notification type")
    title: str = Field(..., min_length=1, max_length=255, description="Headline")
    message: str = Field(..., min_length=1, max_length=2000, description="Body text")
    data: Optional[Dict[str, Any]] = Field(None, description="Free-form payload")
    action_url: Optional[str] = Field(None, max_length=1024)
    image_url: Optional[str] = Field(None, max_length=1024)
    from_user: Optional[FromUser] = Field(None)
