"""Profile router for account details and preferences."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import get_current_user
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..models.user import AccountType, User
from ..schemas.auth import (
    AccountTypeResponse,
    Preferences,
    UpdatePreferencesRequest,
    UpdateProfileRequest,
    UserProfile,
)
from ..services.auth_service import AuthService, preferences_of

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/profile", tags=["profile"])

DB_DEPENDENCY = Depends(get_db)
USER_DEPENDENCY = Depends(get_current_user)


@router.post("/update", response_model=UserProfile)
async def update_profile(
    request: UpdateProfileRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """
    Update profile fields. Omitted fields keep their value.

    Moving to a phone number owned by another account is a conflict.
    """
    auth_service = AuthService(db)

    try:
        updated = await auth_service.update_profile(user, request)
        response_data = UserProfile.model_validate(updated)

        return JSONResponse(
            status_code=200,
            content=response_data.model_dump(mode="json")
        )

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in profile update",
            extra={"user_id": user.id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError() from e


@router.post("/account-type", response_model=AccountTypeResponse)
async def account_type(user: User = USER_DEPENDENCY) -> JSONResponse:
    """Report whether the caller has a business account."""
    response_data = AccountTypeResponse(
        account_type=AccountType(user.account_type),
        is_business=user.is_business_account,
    )
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.post("/preferences/get", response_model=Preferences)
async def get_preferences(user: User = USER_DEPENDENCY) -> JSONResponse:
    """Theme and language preferences, with the language's text direction."""
    return JSONResponse(status_code=200, content=preferences_of(user).model_dump(mode="json"))


@router.post("/preferences/update", response_model=Preferences)
async def update_preferences(
    request: UpdatePreferencesRequest,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Change theme or language. Unsupported languages fail request validation."""
    auth_service = AuthService(db)

    try:
        response_data = await auth_service.update_preferences(user, request)

        logger.info(
            "Preferences updated",
            extra={
                "user_id": user.id,
                "language": response_data.language.value,
                "is_dark_mode": response_data.is_dark_mode
            }
        )

        return JSONResponse(
            status_code=200,
            content=response_data.model_dump(mode="json")
        )

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in preferences update",
            extra={"user_id": user.id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError() from e
