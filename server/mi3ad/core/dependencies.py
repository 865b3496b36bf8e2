"""FastAPI dependencies for database sessions, authentication and client metadata."""

from typing import Optional
from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from .database import get_db
from .exceptions import AuthenticationError
from .security import decode_access_token
from ..models.user import User


def parse_bearer_token(authorization: Optional[str]) -> str:
    """
    Extract the token from an Authorization header.

    Raises:
        AuthenticationError: If the header is missing or not a Bearer credential
    """
    if not authorization:
        raise AuthenticationError("Authorization header missing")

    try:
        scheme, token = authorization.split()
    except ValueError:
        raise AuthenticationError("Invalid authorization header format")

    if scheme.lower() != "bearer":
        raise AuthenticationError("Invalid authentication scheme")

    return token


async def get_current_user(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Authentication dependency that validates Bearer tokens.

    Args:
        authorization: Authorization header with Bearer token
        db: Database session

    Returns:
        User: Account the token was issued to

    Raises:
        AuthenticationError: If the token is missing, invalid, expired or
            its account no longer exists
    """
    token = parse_bearer_token(authorization)

    payload = decode_access_token(token)
    if payload is None:
        raise AuthenticationError("Token is invalid or has expired")

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token payload")

    user = await db.get(User, user_id)
    if user is None:
        raise AuthenticationError("Account no longer exists")

    return user


def get_client_ip(request: Request) -> str:
    """Extract client IP address from request."""
    # Check for forwarded headers first
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host

    return "unknown"


RequiredAuth = Depends(get_current_user)
DatabaseSession = Depends(get_db)
