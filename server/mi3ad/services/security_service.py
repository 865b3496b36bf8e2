"""Security service for session locking, privacy settings, audit logs and data portability."""

import json
import logging
from datetime import datetime, timedelta
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings as app_settings
from ..core.database import utcnow
from ..core.exceptions import DataImportError, SessionLockedError, ValidationError
from ..core.observability import metrics_collector
from ..core.security import (
    EXPORT_FORMAT_VERSION,
    EnvelopeError,
    decrypt_user_data,
    encrypt_user_data,
    generate_secure_token,
    verify_password,
)
from ..models.booking import Booking, BookingStatus
from ..models.chat import Chat, Message, ScheduledReply
from ..models.event import Event
from ..models.favorite import SavedEvent, SavedPost
from ..models.notification import Notification
from ..models.security import AuditLog, SecurityProfile
from ..models.user import User
from ..schemas.auth import Language, UserProfile
from ..schemas.booking import Booking as BookingSchema
from ..schemas.chat import Chat as ChatSchema
from ..schemas.chat import Message as MessageSchema
from ..schemas.favorites import SavedEvent as SavedEventSchema
from ..schemas.favorites import SavedPost as SavedPostSchema
from ..schemas.security import (
    AuditLogEntry,
    AuthResult,
    BiometricSettingsUpdate,
    DeviceCapabilities,
    ExportResponse,
    PrivacySettingsUpdate,
    SecurityLevel,
    SecurityScanResult,
    SecuritySettings,
    SecuritySettingsUpdate,
    SecurityState,
    SessionTimeoutStatus,
)
from .favorites_service import saved_post_schema

logger = logging.getLogger(__name__)

# Session state is tied to this device and login, not carried by exports
SESSION_FIELDS = ("last_auth_time", "failed_attempts", "is_locked")


def biometric_available(device: DeviceCapabilities) -> bool:
    return device.is_biometric_available and device.platform != "web"


def session_timed_out(security: SecuritySettings, now: datetime) -> bool:
    """True when more than session_timeout minutes passed since the last authentication."""
    if security.last_auth_time is None:
        return False
    return now - security.last_auth_time > timedelta(minutes=security.session_timeout)


def merge_settings(current: SecuritySettings, update: SecuritySettingsUpdate) -> SecuritySettings:
    """Apply a partial update; nested biometric and privacy sections merge field by field."""
    changes = update.model_dump(exclude_unset=True, exclude_none=True)
    biometric = changes.pop("biometric", None)
    privacy = changes.pop("privacy", None)

    merged = current.model_copy(update=changes)
    if biometric:
        merged.biometric = current.biometric.model_copy(update=biometric)
    if privacy:
        merged.privacy = current.privacy.model_copy(update=privacy)

    # Round-trip through validation so enum and bound checks apply
    return SecuritySettings.model_validate(merged.model_dump())


def maximum_security_settings(current: SecuritySettings, device: DeviceCapabilities) -> SecuritySettings:
    """Settings applied by the maximum security preset."""
    return SecuritySettings.model_validate({
        **current.model_dump(),
        "security_level": SecurityLevel.MAXIMUM,
        "session_timeout": 5,
        "auto_lock_enabled": True,
        "encryption_enabled": True,
        "audit_log_enabled": True,
        "biometric": {
            **current.biometric.model_dump(),
            "enabled": device.is_biometric_available,
            "require_for_login": True,
            "require_for_sensitive_actions": True,
            "lock_timeout": 1,
            "max_failed_attempts": 2,
            "enable_advanced_security": True,
        },
        "privacy": {
            **current.privacy.model_dump(),
            "encrypt_local_data": True,
            "require_password_for_export": True,
            "anonymize_data": True,
            "limit_data_collection": True,
            "secure_memory_mode": True,
            "share_analytics": False,
            "allow_location_tracking": False,
        },
    })


def compute_security_scan(security: SecuritySettings, device: DeviceCapabilities) -> SecurityScanResult:
    """
    Score the account against the security checklist.

    Each passed check adds its weight and a strength; each failed check adds
    a vulnerability and a recommendation.
    """
    checks = [
        (
            25,
            security.biometric.enabled and device.is_biometric_available,
            "المصادقة البيومترية مفعلة",
            "المصادقة البيومترية غير مفعلة",
            "فعّل المصادقة البيومترية لحماية إضافية",
        ),
        (
            20,
            security.encryption_enabled and security.privacy.encrypt_local_data,
            "تشفير البيانات مفعل",
            "تشفير البيانات غير مفعل",
            "فعّل تشفير البيانات المحلية",
        ),
        (
            15,
            security.session_timeout <= 15,
            "مهلة الجلسة قصيرة ومناسبة",
            "مهلة الجلسة طويلة جداً",
            "قلل مهلة انتهاء الجلسة إلى 15 دقيقة أو أقل",
        ),
        (
            10,
            security.auto_lock_enabled,
            "القفل التلقائي مفعل",
            "القفل التلقائي غير مفعل",
            "فعّل القفل التلقائي للتطبيق",
        ),
        (
            10,
            security.audit_log_enabled,
            "سجلات التدقيق مفعلة",
            "سجلات التدقيق غير مفعلة",
            "فعّل سجلات التدقيق لمراقبة النشاط",
        ),
        (
            10,
            not security.privacy.share_analytics and security.privacy.limit_data_collection,
            "إعدادات الخصوصية محسّنة",
            "إعدادات الخصوصية تحتاج تحسين",
            "راجع إعدادات الخصوصية وقلل مشاركة البيانات",
        ),
        (
            10,
            device.has_secure_hardware,
            "الجهاز يدعم الأجهزة الآمنة",
            "الجهاز لا يدعم الأجهزة الآمنة",
            "استخدم جهازاً يدعم الأجهزة الآمنة إن أمكن",
        ),
    ]

    score = 0
    strengths: list[str] = []
    vulnerabilities: list[str] = []
    recommendations: list[str] = []
    for weight, passed, strength, vulnerability, recommendation in checks:
        if passed:
            score += weight
            strengths.append(strength)
        else:
            vulnerabilities.append(vulnerability)
            recommendations.append(recommendation)

    return SecurityScanResult(
        overall_score=score,
        recommendations=recommendations,
        vulnerabilities=vulnerabilities,
        strengths=strengths,
    )


class SecurityService:
    """Service for per-user security state."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # Profile storage

    async def get_profile(self, user_id: str) -> SecurityProfile:
        """Get the user's security profile, creating it with defaults on first use."""
        profile = await self.db.get(SecurityProfile, user_id)
        if profile is None:
            profile = SecurityProfile(
                user_id=user_id,
                settings=SecuritySettings().model_dump(mode="json"),
                device=DeviceCapabilities().model_dump(mode="json"),
                is_online=True,
                is_authenticated=False,
            )
            self.db.add(profile)
            await self.db.flush()
        return profile

    @staticmethod
    def _settings(profile: SecurityProfile) -> SecuritySettings:
        return SecuritySettings.model_validate(profile.settings)

    @staticmethod
    def _device(profile: SecurityProfile) -> DeviceCapabilities:
        return DeviceCapabilities.model_validate(profile.device or {})

    @staticmethod
    def _store(profile: SecurityProfile, security: SecuritySettings) -> None:
        # Assign a new document so the JSON column is flagged as changed
        profile.settings = security.model_dump(mode="json")

    def _state(self, profile: SecurityProfile) -> SecurityState:
        return SecurityState(
            settings=self._settings(profile),
            device=self._device(profile),
            is_online=profile.is_online,
            is_authenticated=profile.is_authenticated,
        )

    @staticmethod
    def _ensure_unlocked(security: SecuritySettings) -> None:
        if security.is_locked:
            raise SessionLockedError(security.failed_attempts)

    # Audit log

    async def add_audit_log(
        self,
        user_id: str,
        action: str,
        details: str,
        success: bool,
        ip_address: Optional[str] = None,
        commit: bool = True,
    ) -> Optional[AuditLog]:
        """
        Record a security audit entry.

        Nothing is stored when the user disabled the audit log. Only the
        newest audit_log_retention entries are kept.
        """
        metrics_collector.record_security_event(action, success)

        profile = await self.get_profile(user_id)
        if not self._settings(profile).audit_log_enabled:
            if commit:
                await self.db.commit()
            return None

        device = self._device(profile)
        device_info = f"{device.platform} {device.os_version}" if device.os_version else device.platform

        entry = AuditLog(
            id=generate_secure_token(16),
            user_id=user_id,
            timestamp=utcnow(),
            action=action,
            details=details,
            ip_address=ip_address,
            device_info=device_info,
            success=success,
        )
        self.db.add(entry)
        await self.db.flush()

        stale = (
            select(AuditLog.id)
            .where(AuditLog.user_id == user_id)
            .order_by(AuditLog.timestamp.desc())
            .offset(app_settings.audit_log_retention)
        )
        stale_ids = list((await self.db.execute(stale)).scalars().all())
        if stale_ids:
            await self.db.execute(delete(AuditLog).where(AuditLog.id.in_(stale_ids)))

        if commit:
            await self.db.commit()

        logger.info(
            "Security audit event recorded",
            extra={"user_id": user_id, "action": action, "success": success}
        )
        return entry

    async def get_audit_logs(self, user: User) -> list[AuditLog]:
        """Audit entries, newest first."""
        stmt = (
            select(AuditLog)
            .where(AuditLog.user_id == user.id)
            .order_by(AuditLog.timestamp.desc())
        )
        return list((await self.db.execute(stmt)).scalars().all())

    async def clear_audit_logs(self, user: User) -> None:
        await self.db.execute(delete(AuditLog).where(AuditLog.user_id == user.id))
        await self.add_audit_log(user.id, "audit_logs_cleared", "تم مسح سجلات التدقيق", True)

    # Settings

    async def get_state(self, user: User) -> SecurityState:
        profile = await self.get_profile(user.id)
        await self.db.commit()
        return self._state(profile)

    async def update_security_settings(self, user: User, update: SecuritySettingsUpdate) -> SecuritySettings:
        profile = await self.get_profile(user.id)
        security = merge_settings(self._settings(profile), update)
        self._store(profile, security)
        await self.add_audit_log(user.id, "settings_update", "تم تحديث إعدادات الأمان", True)
        return security

    async def update_biometric_settings(self, user: User, update: BiometricSettingsUpdate) -> SecuritySettings:
        profile = await self.get_profile(user.id)
        security = merge_settings(self._settings(profile), SecuritySettingsUpdate(biometric=update))
        self._store(profile, security)
        await self.add_audit_log(user.id, "biometric_update", "تم تحديث إعدادات المصادقة البيومترية", True)
        return security

    async def update_privacy_settings(self, user: User, update: PrivacySettingsUpdate) -> SecuritySettings:
        profile = await self.get_profile(user.id)
        security = merge_settings(self._settings(profile), SecuritySettingsUpdate(privacy=update))
        self._store(profile, security)
        await self.add_audit_log(user.id, "privacy_update", "تم تحديث إعدادات الخصوصية", True)
        return security

    async def report_device(self, user: User, capabilities: DeviceCapabilities) -> SecurityState:
        """Store the capabilities reported by the client device."""
        profile = await self.get_profile(user.id)
        profile.device = capabilities.model_dump(mode="json")
        self.db.add(profile)
        await self.db.commit()

        logger.info(
            "Device capabilities reported",
            extra={
                "user_id": user.id,
                "platform": capabilities.platform,
                "biometric_available": capabilities.is_biometric_available
            }
        )
        return self._state(profile)

    async def set_online_status(self, user: User, is_online: bool) -> SecurityState:
        """Change presence; ignored when the user hides their online status."""
        profile = await self.get_profile(user.id)
        if self._settings(profile).privacy.show_online_status:
            profile.is_online = is_online
            await self.add_audit_log(
                user.id,
                "status_change",
                f"تم تغيير الحالة إلى: {'متصل' if is_online else 'غير متصل'}",
                True,
            )
        else:
            await self.db.commit()
        return self._state(profile)

    async def enable_maximum_security(self, user: User) -> SecuritySettings:
        profile = await self.get_profile(user.id)
        security = maximum_security_settings(self._settings(profile), self._device(profile))
        self._store(profile, security)
        await self.add_audit_log(user.id, "settings_update", "تم تحديث إعدادات الأمان", True, commit=False)
        await self.add_audit_log(user.id, "max_security_enabled", "تم تفعيل الحد الأقصى للأمان", True)
        return security

    async def perform_security_scan(self, user: User) -> SecurityScanResult:
        profile = await self.get_profile(user.id)
        await self.add_audit_log(user.id, "security_scan_start", "بدء فحص الأمان", True, commit=False)

        result = compute_security_scan(self._settings(profile), self._device(profile))

        await self.add_audit_log(
            user.id,
            "security_scan_complete",
            f"فحص الأمان مكتمل - النتيجة: {result.overall_score}/100",
            True,
        )
        return result

    # Authentication and locking

    def _authenticated(self, profile: SecurityProfile, security: SecuritySettings) -> AuthResult:
        security = security.model_copy(update={
            "last_auth_time": utcnow(),
            "failed_attempts": 0,
            "is_locked": False,
        })
        self._store(profile, security)
        profile.is_authenticated = True
        return AuthResult(success=True, is_locked=False, failed_attempts=0)

    async def _failed(self, profile: SecurityProfile, security: SecuritySettings, action: str, details: str) -> AuthResult:
        attempts = security.failed_attempts + 1
        locked = attempts >= security.biometric.max_failed_attempts
        security = security.model_copy(update={
            "failed_attempts": attempts,
            "is_locked": security.is_locked or locked,
        })
        self._store(profile, security)

        await self.add_audit_log(profile.user_id, action, f"{details} (المحاولة {attempts})", False, commit=False)

        if locked:
            profile.is_authenticated = False
            await self.add_audit_log(
                profile.user_id, "app_locked", "تم قفل التطبيق بسبب تجاوز المحاولات", True, commit=False
            )
            logger.warning(
                "Session locked after failed authentication attempts",
                extra={"user_id": profile.user_id, "failed_attempts": attempts}
            )

        await self.db.commit()
        return AuthResult(success=False, is_locked=security.is_locked, failed_attempts=attempts)

    async def authenticate_with_password(self, user: User, password: str) -> AuthResult:
        """Re-authenticate with the account password."""
        profile = await self.get_profile(user.id)
        security = self._settings(profile)

        if not verify_password(password, user.password_hash, user.password_salt):
            return await self._failed(profile, security, "password_auth_failed", "فشلت المصادقة بكلمة المرور")

        result = self._authenticated(profile, security)
        await self.add_audit_log(user.id, "password_auth_success", "نجحت المصادقة بكلمة المرور", True)
        return result

    async def authenticate_with_biometric(self, user: User, success: bool) -> AuthResult:
        """
        Apply the outcome of the device biometric prompt.

        Unavailable biometrics fail without counting as an attempt.
        """
        profile = await self.get_profile(user.id)
        security = self._settings(profile)
        device = self._device(profile)

        if device.platform == "web":
            await self.add_audit_log(user.id, "biometric_auth_web", "محاولة مصادقة بيومترية على الويب", False)
            return AuthResult(success=False, is_locked=security.is_locked, failed_attempts=security.failed_attempts)

        if not biometric_available(device):
            await self.add_audit_log(user.id, "biometric_auth_unavailable", "المصادقة البيومترية غير متاحة", False)
            return AuthResult(success=False, is_locked=security.is_locked, failed_attempts=security.failed_attempts)

        if not success:
            return await self._failed(profile, security, "biometric_auth_failed", "فشلت المصادقة البيومترية")

        result = self._authenticated(profile, security)
        await self.add_audit_log(user.id, "biometric_auth_success", "نجحت المصادقة البيومترية", True)
        return result

    async def lock_app(self, user: User) -> SecurityState:
        profile = await self.get_profile(user.id)
        self._lock(profile)
        await self.add_audit_log(user.id, "app_lock", "تم قفل التطبيق", True)
        return self._state(profile)

    def _lock(self, profile: SecurityProfile) -> None:
        security = self._settings(profile).model_copy(update={"is_locked": True})
        self._store(profile, security)
        profile.is_authenticated = False

    async def unlock_app(self, user: User, biometric_success: Optional[bool] = None) -> AuthResult:
        """
        Unlock the app.

        With biometrics enabled this is a biometric authentication; otherwise
        the app unlocks directly.
        """
        profile = await self.get_profile(user.id)
        security = self._settings(profile)

        if security.biometric.enabled:
            if biometric_success is None:
                raise ValidationError(
                    detail="Biometric outcome is required while biometrics are enabled",
                    errors={"biometric_success": "required"}
                )
            return await self.authenticate_with_biometric(user, biometric_success)

        security = security.model_copy(update={"is_locked": False, "last_auth_time": utcnow()})
        self._store(profile, security)
        profile.is_authenticated = True
        await self.add_audit_log(user.id, "app_unlock", "تم إلغاء قفل التطبيق", True)
        return AuthResult(success=True, is_locked=False, failed_attempts=security.failed_attempts)

    async def check_session_timeout(self, user: User, now: Optional[datetime] = None) -> SessionTimeoutStatus:
        profile = await self.get_profile(user.id)
        await self.db.commit()
        security = self._settings(profile)
        return SessionTimeoutStatus(
            timed_out=session_timed_out(security, now or utcnow()),
            last_auth_time=security.last_auth_time,
            session_timeout=security.session_timeout,
        )

    async def lock_timed_out_sessions(self, now: Optional[datetime] = None) -> int:
        """
        Lock every auto-lock session whose authentication has timed out.

        Returns:
            Number of sessions locked
        """
        now = now or utcnow()
        profiles = list((await self.db.execute(select(SecurityProfile))).scalars().all())

        locked = 0
        locked_total = 0
        for profile in profiles:
            security = self._settings(profile)
            if security.auto_lock_enabled and not security.is_locked and session_timed_out(security, now):
                self._lock(profile)
                await self.add_audit_log(profile.user_id, "app_lock", "تم قفل التطبيق", True, commit=False)
                locked += 1
            if self._settings(profile).is_locked:
                locked_total += 1

        await self.db.commit()
        metrics_collector.set_locked_sessions(locked_total)

        if locked:
            logger.info("Timed out sessions locked", extra={"locked": locked})
        return locked

    # Data portability

    async def _collect_user_data(self, user: User, security: SecuritySettings) -> dict[str, Any]:
        bookings = (await self.db.execute(
            select(Booking).where(Booking.user_id == user.id).order_by(Booking.booking_date.desc())
        )).scalars().all()
        saved_events = (await self.db.execute(
            select(SavedEvent).where(SavedEvent.user_id == user.id)
        )).scalars().all()
        saved_posts = (await self.db.execute(
            select(SavedPost).where(SavedPost.user_id == user.id)
        )).scalars().all()
        chats = (await self.db.execute(
            select(Chat).where(Chat.user_id == user.id)
        )).scalars().all()
        messages = (await self.db.execute(
            select(Message)
            .join(Chat, Message.chat_id == Chat.id)
            .where(Chat.user_id == user.id)
            .order_by(Message.timestamp)
        )).scalars().all()

        audit_logs = None
        if security.audit_log_enabled:
            audit_logs = [
                AuditLogEntry.model_validate(entry).model_dump(mode="json")
                for entry in await self.get_audit_logs(user)
            ]

        data = {
            "profile": UserProfile.model_validate(user).model_dump(mode="json"),
            "bookings": [BookingSchema.model_validate(b).model_dump(mode="json") for b in bookings],
            "saved_posts": [saved_post_schema(p).model_dump(mode="json") for p in saved_posts],
            "saved_events": [SavedEventSchema.model_validate(e).model_dump(mode="json") for e in saved_events],
            "chats": [ChatSchema.model_validate(c).model_dump(mode="json") for c in chats],
            "messages": [MessageSchema.model_validate(m).model_dump(mode="json") for m in messages],
            "settings": security.model_dump(mode="json"),
            "theme": user.is_dark_mode,
            "language": user.language,
            "audit_logs": audit_logs,
            "export_date": utcnow().isoformat() + "Z",
            "version": EXPORT_FORMAT_VERSION,
            "device_fingerprint": security.device_fingerprint,
        }
        return {key: value for key, value in data.items() if value is not None}

    async def export_user_data(self, user: User, password: Optional[str] = None) -> ExportResponse:
        """
        Export everything stored for the user.

        With a password, and when the privacy settings require one, the
        export is wrapped in a password envelope; otherwise it is plain JSON.

        Raises:
            SessionLockedError: If the session is locked
        """
        profile = await self.get_profile(user.id)
        security = self._settings(profile)
        self._ensure_unlocked(security)

        await self.add_audit_log(user.id, "data_export_start", "بدء تصدير البيانات", True, commit=False)
        data = await self._collect_user_data(user, security)

        if password and security.privacy.require_password_for_export:
            exported = encrypt_user_data(data, password)
            encrypted = True
            await self.add_audit_log(user.id, "data_export_encrypted", "تم تصدير البيانات مع التشفير", True)
        else:
            exported = json.dumps(data, ensure_ascii=False, indent=2)
            encrypted = False
            await self.add_audit_log(user.id, "data_export_plain", "تم تصدير البيانات بدون تشفير", True)

        logger.info("User data exported", extra={"user_id": user.id, "encrypted": encrypted})
        return ExportResponse(data=exported, encrypted=encrypted)

    async def _import_failed(self, user_id: str, reason: str) -> DataImportError:
        await self.db.rollback()
        await self.add_audit_log(user_id, "data_import_error", f"فشل استيراد البيانات: {reason}", False)
        logger.warning("User data import failed", extra={"user_id": user_id, "reason": reason})
        return DataImportError()

    async def import_user_data(self, user: User, data: str, password: Optional[str] = None) -> None:
        """
        Restore profile fields, preferences, settings and saved items from an export.

        Bookings and chats are not replayed.

        Raises:
            SessionLockedError: If the session is locked
            DataImportError: If the data cannot be opened or is not an export
        """
        user_id = user.id
        profile = await self.get_profile(user.id)
        current = self._settings(profile)
        self._ensure_unlocked(current)

        await self.add_audit_log(user.id, "data_import_start", "بدء استيراد البيانات", True)

        try:
            if password:
                payload = decrypt_user_data(data, password)
            else:
                payload = json.loads(data)
        except (EnvelopeError, ValueError) as e:
            raise await self._import_failed(user_id, str(e)) from e

        if not isinstance(payload, dict) or not payload.get("export_date") or not payload.get("version"):
            raise await self._import_failed(user_id, "تنسيق البيانات غير صحيح")
        if not isinstance(payload.get("profile") or {}, dict):
            raise await self._import_failed(user_id, "تنسيق البيانات غير صحيح")

        try:
            await self._restore(user, profile, current, payload)
        except (PydanticValidationError, TypeError, ValueError) as e:
            raise await self._import_failed(user_id, str(e)) from e

        await self.add_audit_log(user.id, "data_import_success", "تم استيراد البيانات بنجاح", True)
        logger.info("User data imported", extra={"user_id": user.id, "version": payload.get("version")})

    async def _restore(
        self,
        user: User,
        profile: SecurityProfile,
        current: SecuritySettings,
        payload: dict[str, Any],
    ) -> None:
        exported_profile = payload.get("profile") or {}
        for field in ("name", "email", "bio", "avatar"):
            value = exported_profile.get(field)
            if isinstance(value, str) and (value or field in ("bio", "avatar")):
                setattr(user, field, value)

        if isinstance(payload.get("theme"), bool):
            user.is_dark_mode = payload["theme"]
        if payload.get("language") is not None:
            user.language = Language(payload["language"]).value
        self.db.add(user)

        if payload.get("settings") is not None:
            restored = SecuritySettings.model_validate(payload["settings"])
            session_state = {field: getattr(current, field) for field in SESSION_FIELDS}
            self._store(profile, restored.model_copy(update=session_state))

        for item in payload.get("saved_events") or []:
            saved = SavedEventSchema.model_validate(item)
            if not await self.db.get(Event, saved.event_id):
                continue
            exists = await self.db.execute(
                select(SavedEvent.id).where(SavedEvent.user_id == user.id, SavedEvent.event_id == saved.event_id)
            )
            if exists.scalar_one_or_none() is None:
                self.db.add(SavedEvent(user_id=user.id, event_id=saved.event_id, saved_date=saved.saved_date))

        for item in payload.get("saved_posts") or []:
            post = SavedPostSchema.model_validate(item)
            exists = await self.db.execute(
                select(SavedPost.id).where(SavedPost.user_id == user.id, SavedPost.post_id == post.id)
            )
            if exists.scalar_one_or_none() is None:
                self.db.add(SavedPost(
                    user_id=user.id,
                    post_id=post.id,
                    title=post.title,
                    description=post.description,
                    image_url=post.image_url,
                    author=post.author,
                    category=post.category,
                    likes=post.likes,
                    is_liked=post.is_liked,
                    saved_date=post.saved_date,
                ))

        await self.db.flush()

    async def clear_all_data(self, user: User) -> None:
        """
        Delete the user's bookings, chats, notifications and saved items and
        reset preferences, security settings and the audit log.

        Tickets of confirmed bookings are released back to their events.

        Raises:
            SessionLockedError: If the session is locked
        """
        profile = await self.get_profile(user.id)
        self._ensure_unlocked(self._settings(profile))

        bookings = (await self.db.execute(
            select(Booking).where(Booking.user_id == user.id)
        )).scalars().all()
        for booking in bookings:
            if booking.status == BookingStatus.CONFIRMED:
                event = booking.event
                event.current_attendees = max(0, event.current_attendees - booking.ticket_count)
                self.db.add(event)
        await self.db.execute(delete(Booking).where(Booking.user_id == user.id))

        chat_ids = select(Chat.id).where(Chat.user_id == user.id)
        await self.db.execute(delete(Message).where(Message.chat_id.in_(chat_ids)))
        await self.db.execute(delete(ScheduledReply).where(ScheduledReply.chat_id.in_(chat_ids)))
        await self.db.execute(delete(Chat).where(Chat.user_id == user.id))

        await self.db.execute(delete(Notification).where(Notification.user_id == user.id))
        await self.db.execute(delete(SavedEvent).where(SavedEvent.user_id == user.id))
        await self.db.execute(delete(SavedPost).where(SavedPost.user_id == user.id))
        await self.db.execute(delete(AuditLog).where(AuditLog.user_id == user.id))

        user.is_dark_mode = False
        user.language = Language.AR.value
        self.db.add(user)

        self._store(profile, SecuritySettings())
        profile.is_authenticated = False

        await self.add_audit_log(user.id, "data_clear_success", "تم مسح جميع البيانات", True)
        logger.info("User data cleared", extra={"user_id": user.id, "bookings": len(bookings)})

