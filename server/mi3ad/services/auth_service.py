"""Account service for registration, login, profile and preferences."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import ConflictError, InvalidCredentialsError, ValidationError
from ..core.security import create_access_token, hash_password, verify_password
from ..models.user import AccountType, User
from ..schemas.auth import (
    MIN_PASSWORD_LENGTH,
    AuthResponse,
    Language,
    Preferences,
    RegisterRequest,
    TextDirection,
    UpdatePreferencesRequest,
    UpdateProfileRequest,
    UserProfile,
)
from ..seed_data import DEMO_PROFILE
from .notification_service import NotificationService
from .security_service import SecurityService

logger = logging.getLogger(__name__)


def text_direction(language: str) -> TextDirection:
    return TextDirection.RTL if language == Language.AR.value else TextDirection.LTR


def preferences_of(user: User) -> Preferences:
    return Preferences(
        is_dark_mode=user.is_dark_mode,
        language=Language(user.language),
        text_direction=text_direction(user.language),
    )


class AuthService:
    """Service for account operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.security_service = SecurityService(db)

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def get_user_by_phone(self, phone: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.phone == phone))
        return result.scalar_one_or_none()

    def _issue_token(self, user: User) -> AuthResponse:
        token = create_access_token(user.id, user.phone, AccountType(user.account_type).value)
        return AuthResponse(access_token=token, user=UserProfile.model_validate(user))

    async def _create_user(
        self,
        name: str,
        email: str,
        phone: str,
        password: str,
        account_type: AccountType,
        bio: str = "",
        avatar: str = "",
    ) -> User:
        """Create an account with its starter notifications and default security settings."""
        password_hash, password_salt = hash_password(password)
        user = User(
            name=name,
            email=email,
            phone=phone,
            bio=bio,
            avatar=avatar,
            account_type=account_type,
            password_hash=password_hash,
            password_salt=password_salt,
        )
        self.db.add(user)
        await self.db.flush()

        NotificationService(self.db).seed_starter_notifications(user.id)
        await self.security_service.get_profile(user.id)

        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def register(self, request: RegisterRequest) -> AuthResponse:
        """
        Create an account and sign it in.

        Raises:
            ConflictError: If the phone number is already registered
        """
        if await self.get_user_by_phone(request.phone):
            raise ConflictError(
                detail=f"Phone number {request.phone} is already registered",
                conflicting_resource={"type": "user", "phone": request.phone}
            )

        user = await self._create_user(
            name=request.name,
            email=request.email,
            phone=request.phone,
            password=request.password,
            account_type=request.account_type,
        )

        logger.info(
            "User registered",
            extra={"user_id": user.id, "account_type": AccountType(user.account_type).value}
        )

        return self._issue_token(user)

    async def login(
        self,
        phone: str,
        password: str,
        account_type: AccountType = AccountType.PERSONAL,
        ip_address: Optional[str] = None,
    ) -> AuthResponse:
        """
        Sign in with phone and password.

        An unknown phone gets a demo profile when demo login is enabled.

        Raises:
            InvalidCredentialsError: If the password does not match, or the
                phone is unknown and demo login is disabled
            ValidationError: If a demo profile would get a password that is too short
        """
        user = await self.get_user_by_phone(phone)

        if user is None:
            if not settings.demo_login_enabled:
                logger.warning("Login attempt for unknown phone", extra={"phone": phone})
                raise InvalidCredentialsError()

            if len(password) < MIN_PASSWORD_LENGTH:
                raise ValidationError(
                    detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                    errors={"password": "too_short"}
                )

            user = await self._create_user(
                name=DEMO_PROFILE["name"],
                email=DEMO_PROFILE["email"],
                phone=phone,
                password=password,
                account_type=account_type,
                bio=DEMO_PROFILE["bio"],
                avatar=DEMO_PROFILE["avatar"],
            )
            logger.info("Demo profile created on login", extra={"user_id": user.id})

        elif not verify_password(password, user.password_hash, user.password_salt):
            await self.security_service.add_audit_log(
                user.id, "login_failed", "فشل تسجيل الدخول: كلمة المرور غير صحيحة", False, ip_address
            )
            logger.warning("Login failed: wrong password", extra={"user_id": user.id})
            raise InvalidCredentialsError()

        await self.security_service.add_audit_log(
            user.id, "login_success", "تم تسجيل الدخول بنجاح", True, ip_address
        )
        logger.info("User logged in", extra={"user_id": user.id})

        return self._issue_token(user)

    async def logout(self, user: User, ip_address: Optional[str] = None) -> None:
        """Record the logout; bearer tokens are stateless and simply expire."""
        await self.security_service.add_audit_log(user.id, "logout", "تم تسجيل الخروج", True, ip_address)
        logger.info("User logged out", extra={"user_id": user.id})

    async def update_profile(self, user: User, request: UpdateProfileRequest) -> User:
        """
        Apply a partial profile update.

        Raises:
            ConflictError: If the new phone number belongs to another account
        """
        changes = request.model_dump(exclude_unset=True, exclude_none=True)

        new_phone = changes.get("phone")
        if new_phone and new_phone != user.phone:
            other = await self.get_user_by_phone(new_phone)
            if other and other.id != user.id:
                raise ConflictError(
                    detail=f"Phone number {new_phone} is already registered",
                    conflicting_resource={"type": "user", "phone": new_phone}
                )

        for field, value in changes.items():
            setattr(user, field, value)
        self.db.add(user)

        await self.db.commit()
        await self.db.refresh(user)

        logger.info("Profile updated", extra={"user_id": user.id, "fields": sorted(changes)})
        return user

    async def update_preferences(self, user: User, request: UpdatePreferencesRequest) -> Preferences:
        if request.is_dark_mode is not None:
            user.is_dark_mode = request.is_dark_mode
        if request.language is not None:
            user.language = request.language.value
        self.db.add(user)

        await self.db.commit()
        await self.db.refresh(user)
        return preferences_of(user)
