"""Unit tests for security service."""

import json
from datetime import timedelta

import pytest

from mi3ad.core.config import settings
from mi3ad.core.database import utcnow
from mi3ad.core.exceptions import DataImportError, SessionLockedError, ValidationError
from mi3ad.schemas.auth import UpdatePreferencesRequest, UpdateProfileRequest
from mi3ad.schemas.security import (
    BiometricSettingsUpdate,
    DeviceCapabilities,
    PrivacySettingsUpdate,
    SecurityLevel,
    SecuritySettingsUpdate,
)
from mi3ad.services.auth_service import AuthService
from mi3ad.services.booking_service import BookingService
from mi3ad.services.event_service import EventService
from mi3ad.services.favorites_service import FavoritesService
from mi3ad.services.notification_service import NotificationService
from mi3ad.services.security_service import SecurityService

IOS_DEVICE = DeviceCapabilities(
    is_biometric_available=True,
    biometric_type="face",
    has_secure_hardware=True,
    platform="ios",
    os_version="17.2",
)


async def actions(service: SecurityService, user) -> list[str]:
    return [entry.action for entry in await service.get_audit_logs(user)]


@pytest.mark.asyncio
async def test_default_state(catalog, user):
    state = await SecurityService(catalog).get_state(user)

    assert state.settings.session_timeout == 30
    assert state.settings.biometric.max_failed_attempts == 3
    assert not state.settings.is_locked
    assert state.is_online
    assert state.device.platform == "unknown"


@pytest.mark.asyncio
async def test_nested_settings_merge(catalog, user):
    service = SecurityService(catalog)

    updated = await service.update_security_settings(user, SecuritySettingsUpdate(
        session_timeout=10,
        privacy=PrivacySettingsUpdate(share_analytics=True),
    ))

    assert updated.session_timeout == 10
    assert updated.privacy.share_analytics is True
    assert updated.privacy.encrypt_local_data is True
    assert updated.biometric.max_failed_attempts == 3
    assert (await service.get_state(user)).settings.session_timeout == 10
    assert "settings_update" in await actions(service, user)


@pytest.mark.asyncio
async def test_password_failures_lock_session(catalog, user):
    service = SecurityService(catalog)

    for attempt in (1, 2):
        result = await service.authenticate_with_password(user, "wrong-password")
        assert not result.success
        assert result.failed_attempts == attempt
        assert not result.is_locked

    result = await service.authenticate_with_password(user, "wrong-password")

    assert result.is_locked
    assert result.failed_attempts == 3
    state = await service.get_state(user)
    assert state.settings.is_locked
    assert not state.is_authenticated
    logged = await actions(service, user)
    assert logged.count("password_auth_failed") == 3
    assert "app_locked" in logged


@pytest.mark.asyncio
async def test_password_success_resets_attempts(catalog, user, password):
    service = SecurityService(catalog)
    await service.authenticate_with_password(user, "wrong-password")

    result = await service.authenticate_with_password(user, password)

    assert result.success
    assert result.failed_attempts == 0
    state = await service.get_state(user)
    assert state.is_authenticated
    assert state.settings.last_auth_time is not None


@pytest.mark.asyncio
async def test_biometric_unavailable_does_not_count(catalog, user):
    service = SecurityService(catalog)

    result = await service.authenticate_with_biometric(user, True)

    assert not result.success
    assert result.failed_attempts == 0
    assert "biometric_auth_unavailable" in await actions(service, user)


@pytest.mark.asyncio
async def test_biometric_on_web_is_rejected(catalog, user):
    service = SecurityService(catalog)
    await service.report_device(user, DeviceCapabilities(is_biometric_available=True, platform="web"))

    result = await service.authenticate_with_biometric(user, True)

    assert not result.success
    assert result.failed_attempts == 0


@pytest.mark.asyncio
async def test_biometric_unlock_flow(catalog, user):
    service = SecurityService(catalog)
    await service.report_device(user, IOS_DEVICE)
    await service.update_biometric_settings(user, BiometricSettingsUpdate(enabled=True))
    await service.lock_app(user)

    with pytest.raises(ValidationError):
        await service.unlock_app(user)

    failed = await service.unlock_app(user, biometric_success=False)
    assert not failed.success
    assert failed.failed_attempts == 1

    unlocked = await service.unlock_app(user, biometric_success=True)
    assert unlocked.success
    assert not unlocked.is_locked
    assert (await service.get_state(user)).is_authenticated


@pytest.mark.asyncio
async def test_unlock_without_biometrics(catalog, user):
    service = SecurityService(catalog)
    locked = await service.lock_app(user)
    assert locked.settings.is_locked

    result = await service.unlock_app(user)

    assert result.success
    assert not (await service.get_state(user)).settings.is_locked
    logged = await actions(service, user)
    assert "app_lock" in logged
    assert "app_unlock" in logged


@pytest.mark.asyncio
async def test_session_timeout(catalog, user, password):
    service = SecurityService(catalog)

    assert not (await service.check_session_timeout(user)).timed_out

    await service.authenticate_with_password(user, password)

    assert not (await service.check_session_timeout(user)).timed_out
    status = await service.check_session_timeout(user, utcnow() + timedelta(minutes=31))
    assert status.timed_out
    assert status.session_timeout == 30


@pytest.mark.asyncio
async def test_lock_timed_out_sessions(catalog, user, password, other_user):
    service = SecurityService(catalog)
    await service.authenticate_with_password(user, password)

    assert await service.lock_timed_out_sessions(utcnow() + timedelta(minutes=5)) == 0
    assert await service.lock_timed_out_sessions(utcnow() + timedelta(minutes=31)) == 1
    assert await service.lock_timed_out_sessions(utcnow() + timedelta(minutes=31)) == 0

    assert (await service.get_state(user)).settings.is_locked
    assert not (await service.get_state(other_user)).settings.is_locked


@pytest.mark.asyncio
async def test_auto_lock_disabled_keeps_session_open(catalog, user, password):
    service = SecurityService(catalog)
    await service.update_security_settings(user, SecuritySettingsUpdate(auto_lock_enabled=False))
    await service.authenticate_with_password(user, password)

    assert await service.lock_timed_out_sessions(utcnow() + timedelta(hours=2)) == 0


@pytest.mark.asyncio
async def test_hidden_online_status_is_not_changed(catalog, user):
    service = SecurityService(catalog)
    await service.update_privacy_settings(user, PrivacySettingsUpdate(show_online_status=False))

    state = await service.set_online_status(user, False)

    assert state.is_online


@pytest.mark.asyncio
async def test_online_status_change(catalog, user):
    service = SecurityService(catalog)

    state = await service.set_online_status(user, False)

    assert not state.is_online
    assert "status_change" in await actions(service, user)


@pytest.mark.asyncio
async def test_disabled_audit_log_records_nothing(catalog, user):
    service = SecurityService(catalog)
    await service.update_security_settings(user, SecuritySettingsUpdate(audit_log_enabled=False))
    before = await actions(service, user)

    assert await service.add_audit_log(user.id, "custom", "", True) is None
    await service.lock_app(user)

    assert await actions(service, user) == before


@pytest.mark.asyncio
async def test_audit_log_retention(catalog, user, monkeypatch):
    monkeypatch.setattr(settings, "audit_log_retention", 3)
    service = SecurityService(catalog)

    for index in range(5):
        await service.add_audit_log(user.id, f"event_{index}", "", True)

    assert len(await service.get_audit_logs(user)) == 3


@pytest.mark.asyncio
async def test_audit_entries_describe_device(catalog, user):
    service = SecurityService(catalog)
    await service.report_device(user, IOS_DEVICE)

    entry = await service.add_audit_log(user.id, "custom", "details", True, ip_address="10.0.0.1")

    assert entry.device_info == "ios 17.2"
    assert entry.ip_address == "10.0.0.1"
    assert len(entry.id) == 16


@pytest.mark.asyncio
async def test_clear_audit_logs(catalog, user):
    service = SecurityService(catalog)
    await service.lock_app(user)
    await service.unlock_app(user)

    await service.clear_audit_logs(user)

    assert await actions(service, user) == ["audit_logs_cleared"]


@pytest.mark.asyncio
async def test_maximum_security(catalog, user):
    service = SecurityService(catalog)
    await service.report_device(user, IOS_DEVICE)

    security = await service.enable_maximum_security(user)

    assert security.security_level == SecurityLevel.MAXIMUM
    assert security.session_timeout == 5
    assert security.biometric.enabled
    assert security.biometric.max_failed_attempts == 2
    assert security.privacy.anonymize_data
    assert "max_security_enabled" in await actions(service, user)


@pytest.mark.asyncio
async def test_security_scan_default_score(catalog, user):
    service = SecurityService(catalog)

    result = await service.perform_security_scan(user)

    assert result.overall_score == 50
    assert len(result.strengths) == 4
    assert len(result.vulnerabilities) == len(result.recommendations) == 3
    logged = await actions(service, user)
    assert "security_scan_start" in logged
    assert "security_scan_complete" in logged


@pytest.mark.asyncio
async def test_security_scan_after_maximum_security(catalog, user):
    service = SecurityService(catalog)
    await service.report_device(user, IOS_DEVICE)
    await service.enable_maximum_security(user)

    result = await service.perform_security_scan(user)

    assert result.overall_score == 100
    assert result.vulnerabilities == []


@pytest.mark.asyncio
async def test_plain_export(catalog, user):
    service = SecurityService(catalog)
    await BookingService(catalog).book_event(user, "1", 2)

    exported = await service.export_user_data(user)

    assert not exported.encrypted
    data = json.loads(exported.data)
    assert data["profile"]["phone"] == user.phone
    assert len(data["bookings"]) == 1
    assert data["version"] == "1.0.0"
    assert data["language"] == "ar"
    assert "device_fingerprint" not in data
    assert any(entry["action"] == "data_export_start" for entry in data["audit_logs"])


@pytest.mark.asyncio
async def test_export_without_audit_log(catalog, user):
    service = SecurityService(catalog)
    await service.update_security_settings(user, SecuritySettingsUpdate(audit_log_enabled=False))

    data = json.loads((await service.export_user_data(user)).data)

    assert "audit_logs" not in data


@pytest.mark.asyncio
async def test_password_export_import_round_trip(catalog, user):
    service = SecurityService(catalog)
    favorites = FavoritesService(catalog)
    await favorites.save_event(user, "4")
    await service.update_security_settings(user, SecuritySettingsUpdate(session_timeout=12))

    exported = await service.export_user_data(user, password="export-pass")
    assert exported.encrypted
    assert "export-pass" not in exported.data

    await AuthService(catalog).update_profile(user, UpdateProfileRequest(name="Someone Else"))
    await favorites.unsave_event(user, "4")
    await service.update_security_settings(user, SecuritySettingsUpdate(session_timeout=45))

    await service.import_user_data(user, exported.data, password="export-pass")

    assert user.name == "Sara Ali"
    assert await favorites.is_event_saved(user, "4")
    assert (await service.get_state(user)).settings.session_timeout == 12
    assert "data_import_success" in await actions(service, user)


@pytest.mark.asyncio
async def test_import_keeps_current_session_state(catalog, user):
    service = SecurityService(catalog)
    exported = await service.export_user_data(user)
    await service.authenticate_with_password(user, "wrong-password")

    await service.import_user_data(user, exported.data)

    assert (await service.get_state(user)).settings.failed_attempts == 1


@pytest.mark.asyncio
async def test_import_with_wrong_password(catalog, user):
    service = SecurityService(catalog)
    exported = await service.export_user_data(user, password="export-pass")

    with pytest.raises(DataImportError):
        await service.import_user_data(user, exported.data, password="guess")

    await catalog.refresh(user)
    assert "data_import_error" in await actions(service, user)


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [
    "not json",
    "[1, 2]",
    json.dumps({"profile": {}}),
    json.dumps({"export_date": "2026-01-01T00:00:00Z", "version": "1.0.0", "profile": "x"}),
])
async def test_import_rejects_non_exports(catalog, user, payload):
    with pytest.raises(DataImportError):
        await SecurityService(catalog).import_user_data(user, payload)


@pytest.mark.asyncio
@pytest.mark.parametrize("envelope", [
    json.dumps({"data": "e30=", "salt": 1, "hash": "abc"}),
    json.dumps({"data": "e30=", "salt": "abc", "hash": None}),
    json.dumps({"data": 5, "salt": "abc", "hash": "abc"}),
])
async def test_import_rejects_malformed_envelopes(catalog, user, envelope):
    with pytest.raises(DataImportError):
        await SecurityService(catalog).import_user_data(user, envelope, password="pw")


@pytest.mark.asyncio
async def test_locked_session_blocks_data_operations(catalog, user):
    service = SecurityService(catalog)
    exported = await service.export_user_data(user)
    await service.lock_app(user)

    with pytest.raises(SessionLockedError):
        await service.export_user_data(user)
    with pytest.raises(SessionLockedError):
        await service.import_user_data(user, exported.data)
    with pytest.raises(SessionLockedError):
        await service.clear_all_data(user)


@pytest.mark.asyncio
async def test_clear_all_data(catalog, user, other_user):
    service = SecurityService(catalog)
    booking_service = BookingService(catalog)
    await booking_service.book_event(user, "4", 3)
    await booking_service.book_event(other_user, "4", 2)
    await FavoritesService(catalog).save_event(user, "1")
    await AuthService(catalog).update_preferences(user, UpdatePreferencesRequest(is_dark_mode=True, language="en"))
    await service.update_security_settings(user, SecuritySettingsUpdate(session_timeout=10))

    await service.clear_all_data(user)

    assert await booking_service.list_bookings(user) == []
    assert len(await booking_service.list_bookings(other_user)) == 1
    assert (await EventService(catalog).get_event("4")).current_attendees == 129
    assert await NotificationService(catalog).list_notifications(user) == []
    assert await FavoritesService(catalog).counts(user) == {"saved_posts": 0, "saved_events": 0}
    assert user.language == "ar"
    assert not user.is_dark_mode
    assert (await service.get_state(user)).settings.session_timeout == 30
    assert await actions(service, user) == ["data_clear_success"]
