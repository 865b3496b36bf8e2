"""Auth router for registration, login and logout."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import get_client_ip, get_current_user
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..models.user import User
from ..schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserProfile
from ..schemas.common import OperationResult
from ..services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/auth", tags=["auth"])

# Define dependencies to avoid B008 linting errors
DB_DEPENDENCY = Depends(get_db)
USER_DEPENDENCY = Depends(get_current_user)


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    request: RegisterRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """
    Create an account and return a bearer token for it.

    A phone number that is already registered is a conflict.
    """
    auth_service = AuthService(db)

    try:
        response_data = await auth_service.register(request)

        return JSONResponse(
            status_code=201,
            content=response_data.model_dump(mode="json")
        )

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in registration",
            extra={
                "phone": request.phone,
                "account_type": request.account_type.value,
                "error": str(e)
            },
            exc_info=True
        )
        raise InternalServerError() from e


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """
    Sign in with phone number and password.

    Unknown phone numbers receive a demo profile while demo login is enabled.
    """
    auth_service = AuthService(db)

    try:
        response_data = await auth_service.login(
            request.phone,
            request.password,
            request.account_type,
            ip_address=get_client_ip(http_request),
        )

        return JSONResponse(
            status_code=200,
            content=response_data.model_dump(mode="json")
        )

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in login",
            extra={"phone": request.phone, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError() from e


@router.post("/logout", response_model=OperationResult)
async def logout(
    http_request: Request,
    user: User = USER_DEPENDENCY,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """Record a logout. Tokens are stateless; the client discards its token."""
    await AuthService(db).logout(user, ip_address=get_client_ip(http_request))

    return JSONResponse(
        status_code=200,
        content=OperationResult(success=True).model_dump(mode="json")
    )


@router.post("/me", response_model=UserProfile)
async def me(user: User = USER_DEPENDENCY) -> JSONResponse:
    """Return the authenticated user's profile."""
    return JSONResponse(
        status_code=200,
        content=UserProfile.model_validate(user).model_dump(mode="json")
    )
