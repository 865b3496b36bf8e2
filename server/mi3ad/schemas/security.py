"""Security, privacy and data portability schemas."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class BiometricType(str, Enum):
    """Biometric method configured by the user."""
    NONE = "none"
    FINGERPRINT = "fingerprint"
    FACE = "face"
    IRIS = "iris"


class DeviceBiometricType(str, Enum):
    """Biometric hardware reported by the device."""
    FINGERPRINT = "fingerprint"
    FACE = "face"
    IRIS = "iris"


class SecurityLevel(str, Enum):
    """Overall security posture."""
    BASIC = "basic"
    ENHANCED = "enhanced"
    MAXIMUM = "maximum"


class BiometricSettings(BaseModel):
    """Biometric authentication settings."""

    enabled: bool = False
    type: BiometricType = BiometricType.NONE
    require_for_login: bool = False
    require_for_sensitive_actions: bool = True
    lock_timeout: int = Field(5, ge=0, description="Minutes before the app locks")
    max_failed_attempts: int = Field(3, ge=1, description="Failures before the session locks")
    enable_advanced_security: bool = False


class PrivacySettings(BaseModel):
    """Privacy settings."""

    show_online_status: bool = True
    allow_location_tracking: bool = False
    share_analytics: bool = False
    allow_notifications: bool = True
    data_retention_days: int = Field(365, ge=1)
    auto_delete_old_data: bool = False
    encrypt_local_data: bool = True
    require_password_for_export: bool = True
    anonymize_data: bool = False
    limit_data_collection: bool = True
    secure_memory_mode: bool = False


class SecuritySettings(BaseModel):
    """Complete security settings document."""

    biometric: BiometricSettings = Field(default_factory=BiometricSettings)
    privacy: PrivacySettings = Field(default_factory=PrivacySettings)
    session_timeout: int = Field(30, ge=1, description="Minutes before an idle session times out")
    auto_lock_enabled: bool = True
    last_auth_time: Optional[datetime] = None
    failed_attempts: int = Field(0, ge=0)
    is_locked: bool = False
    security_level: SecurityLevel = SecurityLevel.BASIC
    device_fingerprint: Optional[str] = None
    encryption_enabled: bool = True
    audit_log_enabled: bool = True


class BiometricSettingsUpdate(BaseModel):
    """Partial biometric settings update."""

    enabled: Optional[bool] = None
    type: Optional[BiometricType] = None
    require_for_login: Optional[bool] = None
    require_for_sensitive_actions: Optional[bool] = None
    lock_timeout: Optional[int] = Field(None, ge=0)
    max_failed_attempts: Optional[int] = Field(None, ge=1)
    enable_advanced_security: Optional[bool] = None


class PrivacySettingsUpdate(BaseModel):
    """Partial privacy settings update."""

    show_online_status: Optional[bool] = None
    allow_location_tracking: Optional[bool] = None
    share_analytics: Optional[bool] = None
    allow_notifications: Optional[bool] = None
    data_retention_days: Optional[int] = Field(None, ge=1)
    auto_delete_old_data: Optional[bool] = None
    encrypt_local_data: Optional[bool] = None
    require_password_for_export: Optional[bool] = None
    anonymize_data: Optional[bool] = None
    limit_data_collection: Optional[bool] = None
    secure_memory_mode: Optional[bool] = None


class SecuritySettingsUpdate(BaseModel):
    """Partial security settings update; nested sections merge field by field."""

    biometric: Optional[BiometricSettingsUpdate] = None
    privacy: Optional[PrivacySettingsUpdate] = None
    session_timeout: Optional[int] = Field(None, ge=1)
    auto_lock_enabled: Optional[bool] = None
    security_level: Optional[SecurityLevel] = None
    device_fingerprint: Optional[str] = Field(None, max_length=255)
    encryption_enabled: Optional[bool] = None
    audit_log_enabled: Optional[bool] = None


class DeviceCapabilities(BaseModel):
    """Capabilities reported by the client device."""

    is_biometric_available: bool = False
    biometric_type: Optional[DeviceBiometricType] = None
    has_secure_hardware: bool = False
    platform: str = Field("unknown", max_length=64, description="ios, android or web")
    os_version: Optional[str] = Field(None, max_length=64)


class SecurityState(BaseModel):
    """Current security state of the caller."""

    settings: SecuritySettings
    device: DeviceCapabilities
    is_online: bool
    is_authenticated: bool


class OnlineStatusRequest(BaseModel):
    """Request schema for changing presence."""

    is_online: bool


class PasswordAuthRequest(BaseModel):
    """Request schema for password re-authentication."""

    password: str = Field(..., min_length=1, max_length=128)


class BiometricAuthRequest(BaseModel):
    """Outcome of the device biometric prompt."""

    success: bool = Field(..., description="Whether the device accepted the biometric")


class UnlockRequest(BaseModel):
    """Request schema for unlocking the app."""

    biometric_success: Optional[bool] = Field(
        None, description="Device prompt outcome, used when biometrics are enabled"
    )


class AuthResult(BaseModel):
    """Result of a re-authentication attempt."""

    success: bool
    is_locked: bool
    failed_attempts: int


class SessionTimeoutStatus(BaseModel):
    """Session timeout check."""

    timed_out: bool
    last_auth_time: Optional[datetime] = None
    session_timeout: int


class AuditLogEntry(BaseModel):
    """Security audit log entry."""

    id: str
    timestamp: datetime
    action: str
    details: str
    ip_address: Optional[str] = None
    device_info: str
    success: bool

    class Config:
        from_attributes = True


class AddAuditLogRequest(BaseModel):
    """Request schema for recording a client-side security event."""

    action: str = Field(..., min_length=1, max_length=64, description="Event name")
    details: str = Field("", max_length=2000, description="Human-readable description")
    success: bool = Field(True, description="Whether the action succeeded")


class AuditLogList(BaseModel):
    """Audit log entries."""

    items: List[AuditLogEntry] = Field(..., description="Entries, newest first")


class ExportRequest(BaseModel):
    """Request schema for exporting user data."""

    password: Optional[str] = Field(None, min_length=1, max_length=128)


class ExportResponse(BaseModel):
    """Exported user data."""

    data: str = Field(..., description="Plain JSON or a password envelope")
    encrypted: bool = Field(..., description="Whether data is a password envelope")


class ImportRequest(BaseModel):
    """Request schema for importing user data."""

    data: str = Field(..., min_length=2, description="Export produced by the export endpoint")
    password: Optional[str] = Field(None, min_length=1, max_length=128)


class SecurityScanResult(BaseModel):
    """Security checklist outcome."""

    overall_score: int = Field(..., ge=0, le=100)
    recommendations: List[str]
    vulnerabilities: List[str]
    strengths: List[str]
