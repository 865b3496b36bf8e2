"""Saved event and saved post schemas."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class SavedEvent(BaseModel):
    """Saved event response schema."""

    id: str = Field(..., description="Unique saved-event ID")
    event_id: str = Field(..., description="Saved event")
    saved_date: datetime = Field(..., description="Time the event was saved (ISO 8601)")

    class Config:
        from_attributes = True


class SavedEventList(BaseModel):
    """List of saved events."""

    items: List[SavedEvent] = Field(..., description="Saved events, newest first")


class EventIdRequest(BaseModel):
    """Request schema addressing one event."""

    event_id: str = Field(..., min_length=1, description="Event ID")


class SavePostRequest(BaseModel):
    """Request schema for saving a post."""

    id: str = Field(..., min_length=1, max_length=64, description="Post ID")
    title: str = Field(..., min_length=1, max_length=255, description="Post title")
    description: str = Field("", max_length=4000, description="Post text")
    image_url: str = Field("", max_length=1024, description="Post image URL")
    author: str = Field("", max_length=255, description="Post author")
    category: str = Field("", max_length=64, description="Post category")
    likes: int = Field(0, ge=0, description="Like count")
    is_liked: bool = Field(False, description="Whether the caller liked the post")


class SavedPost(BaseModel):
    """Saved post response schema."""

    id: str = Field(..., description="Post ID")
    title: str
    description: str
    image_url: str
    author: str
    saved_date: datetime = Field(..., description="Time the post was saved (ISO 8601)")
    category: str
    likes: int
    is_liked: bool


class SavedPostList(BaseModel):
    """List of saved posts."""

    items: List[SavedPost] = Field(..., description="Saved posts, newest first")


class PostIdRequest(BaseModel):
    """Request schema addressing one post."""

    post_id: str = Field(..., min_length=1, description="Post ID")


class SavedStatus(BaseModel):
    """Whether an item is saved."""

    is_saved: bool


class FavoriteCounts(BaseModel):
    """Saved item totals."""

    saved_posts: int = Field(..., ge=0)
    saved_events: int = Field(..., ge=0)
