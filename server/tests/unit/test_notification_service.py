"""Unit tests for notification service."""

import pytest

from mi3ad.core.exceptions import NotFoundError
from mi3ad.models.notification import NotificationType
from mi3ad.services.notification_service import NotificationService


@pytest.mark.asyncio
async def test_new_account_has_starter_notifications(catalog, user):
    service = NotificationService(catalog)

    notifications = await service.list_notifications(user)

    assert len(notifications) == 5
    assert notifications[0].type == NotificationType.EVENT_REMINDER
    assert notifications[-1].type == NotificationType.SYSTEM
    assert await service.get_unread_count(user) == 3


@pytest.mark.asyncio
async def test_notifications_by_type(catalog, user):
    service = NotificationService(catalog)

    likes = await service.get_notifications_by_type(user, NotificationType.LIKE)

    assert len(likes) == 1
    assert likes[0].from_user["name"] == "فاطمة علي"
    assert await service.get_notifications_by_type(user, NotificationType.COMMENT) == []


@pytest.mark.asyncio
async def test_mark_as_read(catalog, user):
    service = NotificationService(catalog)
    unread = [n for n in await service.list_notifications(user) if not n.is_read]

    notification = await service.mark_as_read(user, unread[0].id)

    assert notification.is_read
    assert await service.get_unread_count(user) == 2


@pytest.mark.asyncio
async def test_notifications_are_private(catalog, user, other_user):
    service = NotificationService(catalog)
    notification = (await service.list_notifications(user))[0]

    with pytest.raises(NotFoundError):
        await service.mark_as_read(other_user, notification.id)
    with pytest.raises(NotFoundError):
        await service.delete_notification(other_user, notification.id)


@pytest.mark.asyncio
async def test_mark_all_as_read(catalog, user):
    service = NotificationService(catalog)

    assert await service.mark_all_as_read(user) == 3
    assert await service.get_unread_count(user) == 0
    assert await service.mark_all_as_read(user) == 0


@pytest.mark.asyncio
async def test_delete_and_clear(catalog, user, other_user):
    service = NotificationService(catalog)
    notification = (await service.list_notifications(user))[0]

    await service.delete_notification(user, notification.id)
    assert len(await service.list_notifications(user)) == 4

    assert await service.clear_all_notifications(user) == 4
    assert await service.list_notifications(user) == []
    assert len(await service.list_notifications(other_user)) == 5


@pytest.mark.asyncio
async def test_add_notification(catalog, user):
    service = NotificationService(catalog)

    notification = await service.add_notification(
        user.id,
        NotificationType.COMMENT,
        "تعليق جديد",
        "علق شخص ما على منشورك",
        data={"post_id": "42"},
    )

    assert not notification.is_read
    assert notification.data == {"post_id": "42"}
    assert (await service.list_notifications(user))[0].id == notification.id
    assert await service.get_unread_count(user) == 4


@pytest.mark.asyncio
async def test_simulation_stops_at_cap(catalog, user, rng):
    service = NotificationService(catalog, rng)

    for _ in range(5):
        assert await service.simulate_notifications() == 1

    assert len(await service.list_notifications(user)) == 10
    assert await service.simulate_notifications() == 0


@pytest.mark.asyncio
async def test_simulation_reaches_users_without_notifications(catalog, user, rng):
    service = NotificationService(catalog, rng)
    await service.clear_all_notifications(user)

    assert await service.simulate_notifications() == 1

    notifications = await service.list_notifications(user)
    assert len(notifications) == 1
    assert notifications[0].type in (NotificationType.MESSAGE, NotificationType.LIKE)
