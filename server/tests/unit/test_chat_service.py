"""Unit tests for chat service."""

from datetime import timedelta

import pytest

from mi3ad.core.database import utcnow
from mi3ad.core.exceptions import NotFoundError
from mi3ad.models.chat import SenderType
from mi3ad.schemas.chat import SendMessageRequest
from mi3ad.seed_data import SCHOOL_RESPONSES
from mi3ad.services.chat_service import ChatService


def later(seconds: int = 10):
    return utcnow() + timedelta(seconds=seconds)


@pytest.mark.asyncio
async def test_search_schools(catalog):
    service = ChatService(catalog)

    assert [s.id for s in await service.search_schools("benghazi")] == ["2"]
    assert [s.id for s in await service.search_schools("مصراتة")] == ["3"]
    assert len(await service.search_schools("")) == 4


@pytest.mark.asyncio
async def test_get_unknown_school(catalog):
    with pytest.raises(NotFoundError):
        await ChatService(catalog).get_school("99")


@pytest.mark.asyncio
async def test_create_chat_schedules_welcome(catalog, user, rng):
    service = ChatService(catalog, rng)

    chat = await service.create_chat(user, "1")

    assert chat.school_name_ar == "المدرسة الدولية طرابلس"
    assert chat.unread_count == 0
    assert chat.last_message is None
    assert await service.deliver_due_replies() == 0

    assert await service.deliver_due_replies(later()) == 1

    messages = await service.get_messages(user, chat.id)
    assert len(messages) == 1
    assert messages[0].sender_type == SenderType.ADMIN
    assert messages[0].sender_id == "admin1"
    assert messages[0].content == "مرحباً بك في المدرسة الدولية طرابلس! كيف يمكننا مساعدتك اليوم؟"

    chat = await service.get_chat(user, chat.id)
    assert chat.unread_count == 1
    assert chat.last_message["content"] == messages[0].content


@pytest.mark.asyncio
async def test_create_chat_twice_returns_same_chat(catalog, user):
    service = ChatService(catalog)

    first = await service.create_chat(user, "3")
    second = await service.create_chat(user, "3")

    assert first.id == second.id
    assert len(await service.list_chats(user)) == 1
    assert await service.deliver_due_replies(later()) == 1


@pytest.mark.asyncio
async def test_send_message_gets_reply_from_online_school(catalog, user, rng):
    service = ChatService(catalog, rng)
    chat = await service.create_chat(user, "1")

    message = await service.send_message(user, SendMessageRequest(chat_id=chat.id, content="متى يبدأ التسجيل؟"))

    assert message.sender_type == SenderType.USER
    assert message.sender_id == user.id

    assert await service.deliver_due_replies(later()) == 2

    messages = await service.get_messages(user, chat.id)
    assert [m.sender_type for m in messages][-1] == SenderType.ADMIN
    assert messages[-1].content in SCHOOL_RESPONSES
    assert (await service.get_chat(user, chat.id)).unread_count == 2


@pytest.mark.asyncio
async def test_offline_school_only_sends_welcome(catalog, user, rng):
    service = ChatService(catalog, rng)
    chat = await service.create_chat(user, "2")

    await service.send_message(user, SendMessageRequest(chat_id=chat.id, content="hello"))

    assert await service.deliver_due_replies(later()) == 1
    messages = await service.get_messages(user, chat.id)
    assert [m.sender_type for m in messages] == [SenderType.USER, SenderType.ADMIN]


@pytest.mark.asyncio
async def test_reply_dropped_when_school_goes_offline(catalog, user, rng):
    service = ChatService(catalog, rng)
    chat = await service.create_chat(user, "4")
    await service.deliver_due_replies(later())
    await service.send_message(user, SendMessageRequest(chat_id=chat.id, content="hello"))

    school = await service.get_school("4")
    school.is_online = False
    await catalog.commit()

    assert await service.deliver_due_replies(later()) == 0
    assert await service.deliver_due_replies(later(60)) == 0


@pytest.mark.asyncio
async def test_mark_messages_as_read(catalog, user, rng):
    service = ChatService(catalog, rng)
    chat = await service.create_chat(user, "1")
    await service.deliver_due_replies(later())
    assert await service.get_unread_count(user) == 1

    chat = await service.mark_messages_as_read(user, chat.id)

    assert chat.unread_count == 0
    assert chat.last_message["is_read"] is True
    assert all(m.is_read for m in await service.get_messages(user, chat.id))
    assert await service.get_unread_count(user) == 0


@pytest.mark.asyncio
async def test_unread_count_sums_chats(catalog, user, rng):
    service = ChatService(catalog, rng)
    await service.create_chat(user, "1")
    await service.create_chat(user, "3")

    await service.deliver_due_replies(later())

    assert await service.get_unread_count(user) == 2


@pytest.mark.asyncio
async def test_delete_chat(catalog, user, rng):
    service = ChatService(catalog, rng)
    chat = await service.create_chat(user, "1")
    await service.send_message(user, SendMessageRequest(chat_id=chat.id, content="hello"))

    await service.delete_chat(user, chat.id)

    assert await service.list_chats(user) == []
    assert await service.deliver_due_replies(later()) == 0
    with pytest.raises(NotFoundError):
        await service.get_messages(user, chat.id)


@pytest.mark.asyncio
async def test_chats_are_private(catalog, user, other_user):
    service = ChatService(catalog)
    chat = await service.create_chat(user, "1")

    with pytest.raises(NotFoundError):
        await service.get_messages(other_user, chat.id)
    with pytest.raises(NotFoundError):
        await service.send_message(other_user, SendMessageRequest(chat_id=chat.id, content="hi"))


@pytest.mark.asyncio
async def test_simulate_incoming_message(catalog, user, rng):
    service = ChatService(catalog, rng)
    assert await service.simulate_incoming_message() is None

    chat = await service.create_chat(user, "3")
    message = await service.simulate_incoming_message()

    assert message.chat_id == chat.id
    assert message.content in SCHOOL_RESPONSES
    assert (await service.get_chat(user, chat.id)).unread_count == 1


@pytest.mark.asyncio
async def test_simulate_incoming_message_skips_offline_schools(catalog, user, rng):
    service = ChatService(catalog, rng)
    await service.create_chat(user, "2")

    assert await service.simulate_incoming_message() is None
