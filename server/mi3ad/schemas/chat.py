"""School and chat schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.chat import MessageType, SenderType


class School(BaseModel):
    """School response schema."""

    id: str = Field(..., description="Unique school ID")
    name: str = Field(..., description="English name")
    name_ar: str = Field(..., description="Arabic name")
    description: str = Field(..., description="English description")
    description_ar: str = Field(..., description="Arabic description")
    image: str = Field(..., description="Image URL")
    location: str = Field(..., description="English location")
    location_ar: str = Field(..., description="Arabic location")
    phone: str = Field(..., description="Contact phone")
    email: str = Field(..., description="Contact email")
    website: Optional[str] = Field(None, description="Website")
    admin_ids: List[str] = Field(..., description="Administrators answering chats")
    is_online: bool = Field(..., description="Whether administrators are currently answering")
    response_time: str = Field(..., description="Typical response time")

    class Config:
        from_attributes = True


class SchoolList(BaseModel):
    """List of schools."""

    items: List[School] = Field(..., description="Schools")


class GetSchoolRequest(BaseModel):
    """Request schema for getting a school."""

    school_id: str = Field(..., min_length=1, description="School to retrieve")


class SearchSchoolsRequest(BaseModel):
    """Request schema for school search."""

    query: str = Field("", max_length=255, description="Search text; empty returns every school")


class Message(BaseModel):
    """Chat message response schema."""

    id: str = Field(..., description="Unique message ID")
    chat_id: str = Field(..., description="Owning chat")
    sender_id: str = Field(..., description="Sender user or admin ID")
    sender_name: str = Field(..., description="Sender display name")
    sender_type: SenderType = Field(..., description="user or admin")
    content: str = Field(..., description="Message text")
    timestamp: datetime = Field(..., description="Send time (ISO 8601)")
    is_read: bool = Field(..., description="Read flag")
    message_type: MessageType = Field(..., description="Content type")
    attachment_url: Optional[str] = Field(None, description="Attachment URL")

    class Config:
        from_attributes = True


class MessageList(BaseModel):
    """Messages of one chat."""

    items: List[Message] = Field(..., description="Messages, oldest first")


class Chat(BaseModel):
    """Chat response schema."""

    id: str = Field(..., description="Unique chat ID")
    school_id: str = Field(..., description="School on the other side")
    school_name: str = Field(..., description="English school name")
    school_name_ar: str = Field(..., description="Arabic school name")
    user_id: str = Field(..., description="Chat owner")
    user_name: str = Field(..., description="Chat owner's name")
    last_message: Optional[Message] = Field(None, description="Most recent message")
    unread_count: int = Field(..., ge=0, description="Unread admin messages")
    is_active: bool = Field(..., description="Whether the chat is open")
    created_at: datetime = Field(..., description="Creation time (ISO 8601)")
    updated_at: datetime = Field(..., description="Last activity time (ISO 8601)")

    class Config:
        from_attributes = True


class ChatList(BaseModel):
    """List of chats."""

    items: List[Chat] = Field(..., description="Chats, most recent activity first")


class CreateChatRequest(BaseModel):
    """Request schema for opening a chat with a school."""

    school_id: str = Field(..., min_length=1, description="School to contact")


class ChatIdRequest(BaseModel):
    """Request schema addressing one chat."""

    chat_id: str = Field(..., min_length=1, description="Chat ID")


class SendMessageRequest(BaseModel):
    """Request schema for sending a message."""

    chat_id: str = Field(..., min_length=1, description="Chat to post to")
    content: str = Field(..., min_length=1, max_length=4000, description="Message text")
    message_type: MessageType = Field(MessageType.TEXT, description="Content type")
    attachment_url: Optional[str] = Field(None, max_length=1024, description="Attachment URL")
