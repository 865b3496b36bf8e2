"""Security router for session locking, privacy settings, audit logs and data portability."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import get_client_ip, get_current_user
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..models.user import User
from ..schemas.common import OperationResult
from ..schemas.security import (
    AddAuditLogRequest,
    AuditLogEntry,
    AuditLogList,
    AuthResult,
    BiometricAuthRequest,
    BiometricSettingsUpdate,
    DeviceCapabilities,
    ExportRequest,
    ExportResponse,
    ImportRequest,
    OnlineStatusRequest,
    PasswordAuthRequest,
    PrivacySettingsUpdate,
    SecurityScanResult,
    SecuritySettings,
    SecuritySettingsUpdate,
    SecurityState,
    SessionTimeoutStatus,
    UnlockRequest,
)
from ..services.security_service import SecurityService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/security", tags=["security"])

# Define dependencies to avoid B008 linting errors
DB_DEPENDENCY = Depends(get_db)
USER_DEPENDENCY = Depends(get_current_user)


def _ok(response_data) -> JSONResponse:
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.post("/state", response_model=SecurityState)
async def get_state(
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Settings, device capabilities, presence and authentication state."""
    return _ok(await SecurityService(db).get_state(user))


@router.post("/settings/update", response_model=SecuritySettings)
async def update_security_settings(
    request: SecuritySettingsUpdate,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Partially update security settings. Nested sections merge field by field."""
    return _ok(await SecurityService(db).update_security_settings(user, request))


@router.post("/settings/biometric", response_model=SecuritySettings)
async def update_biometric_settings(
    request: BiometricSettingsUpdate,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    return _ok(await SecurityService(db).update_biometric_settings(user, request))


@router.post("/settings/privacy", response_model=SecuritySettings)
async def update_privacy_settings(
    request: PrivacySettingsUpdate,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    return _ok(await SecurityService(db).update_privacy_settings(user, request))


@router.post("/device", response_model=SecurityState)
async def report_device(
    request: DeviceCapabilities,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Report the biometric and hardware capabilities of the client device."""
    return _ok(await SecurityService(db).report_device(user, request))


@router.post("/online", response_model=SecurityState)
async def set_online_status(
    request: OnlineStatusRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Change presence. Ignored while show_online_status is off."""
    return _ok(await SecurityService(db).set_online_status(user, request.is_online))


@router.post("/auth/password", response_model=AuthResult)
async def authenticate_with_password(
    request: PasswordAuthRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """
    Re-authenticate with the account password.

    Failures count toward max_failed_attempts and lock the session when
    the limit is reached.
    """
    security_service = SecurityService(db)

    try:
        return _ok(await security_service.authenticate_with_password(user, request.password))

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in password authentication",
            extra={"user_id": user.id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError() from e


@router.post("/auth/biometric", response_model=AuthResult)
async def authenticate_with_biometric(
    request: BiometricAuthRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """
    Apply the outcome of the device biometric prompt.

    Attempts on devices without biometrics fail without counting.
    """
    security_service = SecurityService(db)

    try:
        return _ok(await security_service.authenticate_with_biometric(user, request.success))

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in biometric authentication",
            extra={"user_id": user.id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError() from e


@router.post("/lock", response_model=SecurityState)
async def lock_app(
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    return _ok(await SecurityService(db).lock_app(user))


@router.post("/unlock", response_model=AuthResult)
async def unlock_app(
    request: UnlockRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """
    Unlock the app.

    With biometrics enabled the request must carry the prompt outcome.
    """
    return _ok(await SecurityService(db).unlock_app(user, request.biometric_success))


@router.post("/session-timeout", response_model=SessionTimeoutStatus)
async def check_session_timeout(
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    return _ok(await SecurityService(db).check_session_timeout(user))


@router.post("/export", response_model=ExportResponse)
async def export_user_data(
    request: ExportRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """
    Export the caller's data.

    With a password, and while require_password_for_export is on, the data
    is returned as a password envelope. Locked sessions cannot export.
    """
    security_service = SecurityService(db)

    try:
        return _ok(await security_service.export_user_data(user, request.password))

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in data export",
            extra={"user_id": user.id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError() from e


@router.post("/import", response_model=OperationResult)
async def import_user_data(
    request: ImportRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """
    Restore profile, preferences, settings and saved items from an export.

    Unreadable data or a wrong password fails with IMPORT_FAILED.
    """
    security_service = SecurityService(db)
    user_id = user.id

    try:
        await security_service.import_user_data(user, request.data, request.password)
        return _ok(OperationResult(success=True))

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in data import",
            extra={"user_id": user_id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError() from e


@router.post("/clear", response_model=OperationResult)
async def clear_all_data(
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Delete the caller's bookings, chats, notifications and saved items and reset settings."""
    security_service = SecurityService(db)

    try:
        await security_service.clear_all_data(user)
        return _ok(OperationResult(success=True))

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error clearing user data",
            extra={"user_id": user.id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError() from e


@router.post("/audit/list", response_model=AuditLogList)
async def get_audit_logs(
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    entries = await SecurityService(db).get_audit_logs(user)
    return _ok(AuditLogList(items=[AuditLogEntry.model_validate(entry) for entry in entries]))


@router.post("/audit/add", response_model=OperationResult)
async def add_audit_log(
    request: AddAuditLogRequest,
    http_request: Request,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Record a client-side security event. Nothing is stored while the audit log is off."""
    entry = await SecurityService(db).add_audit_log(
        user.id,
        request.action,
        request.details,
        request.success,
        ip_address=get_client_ip(http_request),
    )
    return _ok(OperationResult(success=entry is not None, affected=int(entry is not None)))


@router.post("/audit/clear", response_model=OperationResult)
async def clear_audit_logs(
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    await SecurityService(db).clear_audit_logs(user)
    return _ok(OperationResult(success=True))


@router.post("/max-security", response_model=SecuritySettings)
async def enable_maximum_security(
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Apply the strictest settings the device supports."""
    return _ok(await SecurityService(db).enable_maximum_security(user))


@router.post("/scan", response_model=SecurityScanResult)
async def perform_security_scan(
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Score the account's security settings out of 100 with recommendations."""
    return _ok(await SecurityService(db).perform_security_scan(user))
