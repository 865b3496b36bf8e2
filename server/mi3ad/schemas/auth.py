"""Account, profile and preference schemas."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from ..models.user import AccountType


MIN_PASSWORD_LENGTH = 6


class Language(str, Enum):
    """Supported interface languages."""
    AR = "ar"
    EN = "en"


class TextDirection(str, Enum):
    """Writing direction of a language."""
    RTL = "rtl"
    LTR = "ltr"


class RegisterRequest(BaseModel):
    """Request schema for creating an account."""

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: str = Field(..., min_length=3, max_length=255, description="Email address")
    phone: str = Field(..., min_length=1, max_length=32, description="Phone number, unique per account")
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128, description="Account password")
    account_type: AccountType = Field(AccountType.PERSONAL, description="Personal or business account")


class LoginRequest(BaseModel):
    """Request schema for logging in."""

    phone: str = Field(..., min_length=1, max_length=32, description="Phone number")
    password: str = Field(..., min_length=1, max_length=128, description="Account password")
    account_type: AccountType = Field(AccountType.PERSONAL, description="Account type used for demo profiles")


class UserProfile(BaseModel):
    """User profile response schema."""

    id: str = Field(..., description="Unique user ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    phone: str = Field(..., description="Phone number")
    bio: str = Field("", description="Short biography")
    avatar: str = Field("", description="Avatar image URL")
    account_type: AccountType = Field(..., description="Account type")
    is_dark_mode: bool = Field(..., description="Dark theme preference")
    language: Language = Field(..., description="Interface language")
    created_at: datetime = Field(..., description="Account creation time (ISO 8601)")

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    """Response schema for register and login."""

    access_token: str = Field(..., description="Bearer token")
    token_type: str = Field("bearer", description="Token type")
    user: UserProfile = Field(..., description="Authenticated user")


class UpdateProfileRequest(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, min_length=3, max_length=255)
    phone: Optional[str] = Field(None, min_length=1, max_length=32)
    bio: Optional[str] = Field(None, max_length=2000)
    avatar: Optional[str] = Field(None, max_length=1024)


class AccountTypeResponse(BaseModel):
    """Business account check."""

    account_type: AccountType = Field(..., description="Account type")
    is_business: bool = Field(..., description="True for business accounts")


class Preferences(BaseModel):
    """Theme and language preferences."""

    is_dark_mode: bool = Field(..., description="Dark theme preference")
    language: Language = Field(..., description="Interface language")
    text_direction: TextDirection = Field(..., description="Writing direction of the language")


class UpdatePreferencesRequest(BaseModel):
    """Partial preference update."""

    is_dark_mode: Optional[bool] = Field(None, description="Dark theme preference")
    language: Optional[Language] = Field(None, description="Interface language")
