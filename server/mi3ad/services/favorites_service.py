"""Favorites service for saved events and saved posts."""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.favorite import SavedEvent, SavedPost
from ..models.user import User
from ..schemas.favorites import SavedPost as SavedPostSchema
from ..schemas.favorites import SavePostRequest
from .event_service import EventService

logger = logging.getLogger(__name__)


def saved_post_schema(post: SavedPost) -> SavedPostSchema:
    """Saved posts are addressed by their post ID, not the row ID."""
    return SavedPostSchema(
        id=post.post_id,
        title=post.title,
        description=post.description,
        image_url=post.image_url,
        author=post.author,
        saved_date=post.saved_date,
        category=post.category,
        likes=post.likes,
        is_liked=post.is_liked,
    )


class FavoritesService:
    """Service for bookmarking events and posts."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.event_service = EventService(db)

    async def _get_saved_event(self, user_id: str, event_id: str) -> SavedEvent | None:
        stmt = select(SavedEvent).where(SavedEvent.user_id == user_id, SavedEvent.event_id == event_id)
        return (await self.db.execute(stmt)).scalar_one_or_none()

    async def _get_saved_post(self, user_id: str, post_id: str) -> SavedPost | None:
        stmt = select(SavedPost).where(SavedPost.user_id == user_id, SavedPost.post_id == post_id)
        return (await self.db.execute(stmt)).scalar_one_or_none()

    async def save_event(self, user: User, event_id: str) -> SavedEvent:
        """
        Bookmark an event. Saving it twice returns the first bookmark.

        Raises:
            NotFoundError: If the event does not exist
        """
        await self.event_service.get_event(event_id)

        existing = await self._get_saved_event(user.id, event_id)
        if existing:
            return existing

        user_id = user.id
        saved = SavedEvent(user_id=user_id, event_id=event_id)
        self.db.add(saved)
        try:
            await self.db.commit()
        except IntegrityError:
            # Another request saved the same event first
            await self.db.rollback()
            existing = await self._get_saved_event(user_id, event_id)
            if existing is None:
                raise
            logger.info(
                "Event saved by concurrent request - returning existing",
                extra={"user_id": user_id, "event_id": event_id}
            )
            return existing

        await self.db.refresh(saved)

        logger.info("Event saved", extra={"user_id": user_id, "event_id": event_id})
        return saved

    async def unsave_event(self, user: User, event_id: str) -> bool:
        """Remove an event bookmark; returns False when it was not saved."""
        stmt = delete(SavedEvent).where(SavedEvent.user_id == user.id, SavedEvent.event_id == event_id)
        result = await self.db.execute(stmt)
        await self.db.commit()
        return result.rowcount > 0

    async def is_event_saved(self, user: User, event_id: str) -> bool:
        return await self._get_saved_event(user.id, event_id) is not None

    async def list_saved_events(self, user: User) -> list[SavedEvent]:
        stmt = (
            select(SavedEvent)
            .where(SavedEvent.user_id == user.id)
            .order_by(SavedEvent.saved_date.desc())
        )
        return list((await self.db.execute(stmt)).scalars().all())

    async def save_post(self, user: User, request: SavePostRequest) -> SavedPost:
        """Bookmark a post, stamping the save time. Saving it twice returns the first bookmark."""
        existing = await self._get_saved_post(user.id, request.id)
        if existing:
            return existing

        user_id = user.id
        saved = SavedPost(
            user_id=user_id,
            post_id=request.id,
            title=request.title,
            description=request.description,
            image_url=request.image_url,
            author=request.author,
            category=request.category,
            likes=request.likes,
            is_liked=request.is_liked,
        )
        self.db.add(saved)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            existing = await self._get_saved_post(user_id, request.id)
            if existing is None:
                raise
            logger.info(
                "Post saved by concurrent request - returning existing",
                extra={"user_id": user_id, "post_id": request.id}
            )
            return existing

        await self.db.refresh(saved)

        logger.info("Post saved", extra={"user_id": user_id, "post_id": request.id})
        return saved

    async def unsave_post(self, user: User, post_id: str) -> bool:
        stmt = delete(SavedPost).where(SavedPost.user_id == user.id, SavedPost.post_id == post_id)
        result = await self.db.execute(stmt)
        await self.db.commit()
        return result.rowcount > 0

    async def is_post_saved(self, user: User, post_id: str) -> bool:
        return await self._get_saved_post(user.id, post_id) is not None

    async def list_saved_posts(self, user: User) -> list[SavedPost]:
        stmt = (
            select(SavedPost)
            .where(SavedPost.user_id == user.id)
            .order_by(SavedPost.saved_date.desc())
        )
        return list((await self.db.execute(stmt)).scalars().all())

    async def counts(self, user: User) -> dict[str, int]:
        """Number of saved posts and saved events."""
        posts = await self.db.execute(
            select(func.count()).select_from(SavedPost).where(SavedPost.user_id == user.id)
        )
        events = await self.db.execute(
            select(func.count()).select_from(SavedEvent).where(SavedEvent.user_id == user.id)
        )
        return {"saved_posts": posts.scalar_one(), "saved_events": events.scalar_one()}
