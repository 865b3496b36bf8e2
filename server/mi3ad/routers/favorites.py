"""Favorites router for saved events and posts."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import get_current_user
from ..models.user import User
from ..schemas.common import OperationResult
from ..schemas.favorites import (
    EventIdRequest,
    FavoriteCounts,
    PostIdRequest,
    SavedEvent,
    SavedEventList,
    SavedPost,
    SavedPostList,
    SavedStatus,
    SavePostRequest,
)
from ..services.favorites_service import FavoritesService, saved_post_schema

router = APIRouter(prefix="/v1/favorites", tags=["favorites"])

DB_DEPENDENCY = Depends(get_db)
USER_DEPENDENCY = Depends(get_current_user)


def _ok(response_data) -> JSONResponse:
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.post("/events/save", response_model=SavedEvent)
async def save_event(
    request: EventIdRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Bookmark an event. Saving an event twice returns the existing bookmark."""
    saved = await FavoritesService(db).save_event(user, request.event_id)
    return _ok(SavedEvent.model_validate(saved))


@router.post("/events/unsave", response_model=OperationResult)
async def unsave_event(
    request: EventIdRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    removed = await FavoritesService(db).unsave_event(user, request.event_id)
    return _ok(OperationResult(success=removed, affected=int(removed)))


@router.post("/events/status", response_model=SavedStatus)
async def is_event_saved(
    request: EventIdRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    is_saved = await FavoritesService(db).is_event_saved(user, request.event_id)
    return _ok(SavedStatus(is_saved=is_saved))


@router.post("/events/list", response_model=SavedEventList)
async def list_saved_events(
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    saved = await FavoritesService(db).list_saved_events(user)
    return _ok(SavedEventList(items=[SavedEvent.model_validate(s) for s in saved]))


@router.post("/posts/save", response_model=SavedPost)
async def save_post(
    request: SavePostRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Bookmark a post; the save time is set by the server."""
    saved = await FavoritesService(db).save_post(user, request)
    return _ok(saved_post_schema(saved))


@router.post("/posts/unsave", response_model=OperationResult)
async def unsave_post(
    request: PostIdRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    removed = await FavoritesService(db).unsave_post(user, request.post_id)
    return _ok(OperationResult(success=removed, affected=int(removed)))


@router.post("/posts/status", response_model=SavedStatus)
async def is_post_saved(
    request: PostIdRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    is_saved = await FavoritesService(db).is_post_saved(user, request.post_id)
    return _ok(SavedStatus(is_saved=is_saved))


@router.post("/posts/list", response_model=SavedPostList)
async def list_saved_posts(
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    saved = await FavoritesService(db).list_saved_posts(user)
    return _ok(SavedPostList(items=[saved_post_schema(s) for s in saved]))


@router.post("/counts", response_model=FavoriteCounts)
async def counts(
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    totals = await FavoritesService(db).counts(user)
    return _ok(FavoriteCounts(**totals))
