"""Chat router for conversations with schools."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import get_current_user
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..models.user import User
from ..schemas.chat import (
    Chat,
    ChatIdRequest,
    ChatList,
    CreateChatRequest,
    Message,
    MessageList,
    SendMessageRequest,
)
from ..schemas.common import OperationResult, UnreadCount
from ..services.chat_service import ChatService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/chat", tags=["chat"])

# Define dependencies to avoid B008 linting errors
DB_DEPENDENCY = Depends(get_db)
USER_DEPENDENCY = Depends(get_current_user)


@router.post("/create", response_model=Chat)
async def create_chat(
    request: CreateChatRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """
    Open a chat with a school.

    There is one chat per user and school; asking again returns the
    existing chat. The school greets new chats shortly after.
    """
    chat_service = ChatService(db)

    try:
        chat = await chat_service.create_chat(user, request.school_id)
        response_data = Chat.model_validate(chat)

        return JSONResponse(
            status_code=200,
            content=response_data.model_dump(mode="json")
        )

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in chat creation",
            extra={"school_id": request.school_id, "user_id": user.id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError() from e


@router.post("/send", response_model=Message)
async def send_message(
    request: SendMessageRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """
    Send a message to a school.

    Online schools answer after a short delay.
    """
    chat_service = ChatService(db)

    try:
        message = await chat_service.send_message(user, request)
        response_data = Message.model_validate(message)

        return JSONResponse(
            status_code=200,
            content=response_data.model_dump(mode="json")
        )

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error sending message",
            extra={"chat_id": request.chat_id, "user_id": user.id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError() from e


@router.post("/messages", response_model=MessageList)
async def get_messages(
    request: ChatIdRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    messages = await ChatService(db).get_messages(user, request.chat_id)
    response_data = MessageList(items=[Message.model_validate(m) for m in messages])
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.post("/read", response_model=Chat)
async def mark_messages_as_read(
    request: ChatIdRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Mark all messages of a chat as read and reset its unread count."""
    chat = await ChatService(db).mark_messages_as_read(user, request.chat_id)
    return JSONResponse(
        status_code=200,
        content=Chat.model_validate(chat).model_dump(mode="json")
    )


@router.post("/delete", response_model=OperationResult)
async def delete_chat(
    request: ChatIdRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Delete a chat and its messages."""
    chat_service = ChatService(db)

    try:
        await chat_service.delete_chat(user, request.chat_id)

        return JSONResponse(
            status_code=200,
            content=OperationResult(success=True, affected=1).model_dump(mode="json")
        )

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error deleting chat",
            extra={"chat_id": request.chat_id, "user_id": user.id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError() from e


@router.post("/list", response_model=ChatList)
async def list_chats(
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    chats = await ChatService(db).list_chats(user)
    response_data = ChatList(items=[Chat.model_validate(c) for c in chats])
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.post("/unread", response_model=UnreadCount)
async def unread_count(
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Unread admin messages across all of the caller's chats."""
    count = await ChatService(db).get_unread_count(user)
    return JSONResponse(status_code=200, content=UnreadCount(count=count).model_dump(mode="json"))
