"""Notification router for in-app notifications."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import get_current_user
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..models.notification import Notification as NotificationModel
from ..models.user import User
from ..schemas.common import OperationResult, UnreadCount
from ..schemas.notification import (
    AddNotificationRequest,
    ListNotificationsRequest,
    Notification,
    NotificationIdRequest,
    NotificationList,
    NotificationsByTypeRequest,
)
from ..services.notification_service import NotificationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/notification", tags=["notification"])

DB_DEPENDENCY = Depends(get_db)
USER_DEPENDENCY = Depends(get_current_user)


def _notification_list_response(notifications: list[NotificationModel]) -> JSONResponse:
    response_data = NotificationList(items=[Notification.model_validate(n) for n in notifications])
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.post("/list", response_model=NotificationList)
async def list_notifications(
    request: ListNotificationsRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """The caller's notifications, newest first."""
    notifications = await NotificationService(db).list_notifications(user, request.type)
    return _notification_list_response(notifications)


@router.post("/by-type", response_model=NotificationList)
async def notifications_by_type(
    request: NotificationsByTypeRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    notifications = await NotificationService(db).get_notifications_by_type(user, request.type)
    return _notification_list_response(notifications)


@router.post("/unread", response_model=UnreadCount)
async def unread_count(
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    count = await NotificationService(db).get_unread_count(user)
    return JSONResponse(status_code=200, content=UnreadCount(count=count).model_dump(mode="json"))


@router.post("/read", response_model=Notification)
async def mark_as_read(
    request: NotificationIdRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    notification = await NotificationService(db).mark_as_read(user, request.notification_id)
    return JSONResponse(
        status_code=200,
        content=Notification.model_validate(notification).model_dump(mode="json")
    )


@router.post("/read-all", response_model=OperationResult)
async def mark_all_as_read(
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    updated = await NotificationService(db).mark_all_as_read(user)
    return JSONResponse(
        status_code=200,
        content=OperationResult(success=True, affected=updated).model_dump(mode="json")
    )


@router.post("/delete", response_model=OperationResult)
async def delete_notification(
    request: NotificationIdRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    await NotificationService(db).delete_notification(user, request.notification_id)
    return JSONResponse(
        status_code=200,
        content=OperationResult(success=True, affected=1).model_dump(mode="json")
    )


@router.post("/clear", response_model=OperationResult)
async def clear_all_notifications(
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    deleted = await NotificationService(db).clear_all_notifications(user)
    return JSONResponse(
        status_code=200,
        content=OperationResult(success=True, affected=deleted).model_dump(mode="json")
    )


@router.post("/add", response_model=Notification, status_code=201)
async def add_notification(
    request: AddNotificationRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Add a notification to the caller's own list."""
    notification_service = NotificationService(db)

    try:
        notification = await notification_service.add_notification(
            user.id,
            request.type,
            request.title,
            request.message,
            data=request.data,
            action_url=request.action_url,
            image_url=request.image_url,
            from_user=request.from_user.model_dump() if request.from_user else None,
        )

        return JSONResponse(
            status_code=201,
            content=Notification.model_validate(notification).model_dump(mode="json")
        )

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error adding notification",
            extra={"user_id": user.id, "type": request.type.value, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError() from e
