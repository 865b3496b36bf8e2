"""Token, password and export-envelope helpers.

The export "encryption" is base64 encoding guarded by a salted SHA-256
password hash. It keeps casual readers out of an exported file and nothing
more; it is not a cipher.
"""

import base64
import hashlib
import json
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from jwt import PyJWTError

from .config import settings
from .database import utcnow

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
EXPORT_FORMAT_VERSION = "1.0.0"
SALT_LENGTH = 16


class EnvelopeError(ValueError):
    """Raised when an export envelope cannot be opened."""


def hash_password(password: str, salt: Optional[str] = None) -> tuple[str, str]:
    """
    Hash a password with a salt.

    Args:
        password: Plain text password
        salt: Existing salt; a new 16 character salt is generated when omitted

    Returns:
        Tuple of (hex digest, salt)
    """
    password_salt = salt or hashlib.sha256(secrets.token_bytes(32)).hexdigest()[:SALT_LENGTH]
    digest = hashlib.sha256((password + password_salt).encode("utf-8")).hexdigest()
    return digest, password_salt


def verify_password(password: str, password_hash: str, salt: str) -> bool:
    """Check a password against a stored hash and salt."""
    candidate, _ = hash_password(password, salt)
    return secrets.compare_digest(candidate, password_hash)


def generate_secure_token(length: int = 32) -> str:
    """Generate a random hex token of the given length."""
    return hashlib.sha256(secrets.token_bytes(32)).hexdigest()[:length]


def encode_secure_value(value: str) -> str:
    """Base64-encode a UTF-8 string for storage."""
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def decode_secure_value(value: str) -> str:
    """Reverse :func:`encode_secure_value`."""
    try:
        return base64.b64decode(value.encode("ascii"), validate=True).decode("utf-8")
    except (ValueError, UnicodeError) as e:
        raise EnvelopeError("Stored value is not valid base64 text") from e


def encrypt_user_data(data: dict[str, Any], password: str) -> str:
    """
    Wrap exported user data in a password-protected envelope.

    Args:
        data: JSON-serialisable export payload
        password: Password that must be supplied again on import

    Returns:
        JSON string of the envelope
    """
    payload = json.dumps(data, ensure_ascii=False)
    password_hash, salt = hash_password(password)

    return json.dumps({
        "data": encode_secure_value(payload),
        "salt": salt,
        "hash": password_hash,
        "timestamp": utcnow().isoformat() + "Z",
        "version": EXPORT_FORMAT_VERSION,
    })


def decrypt_user_data(envelope: str, password: str) -> dict[str, Any]:
    """
    Open an envelope produced by :func:`encrypt_user_data`.

    Raises:
        EnvelopeError: If the envelope is malformed or the password is wrong
    """
    try:
        parsed = json.loads(envelope)
        data, salt, password_hash = parsed["data"], parsed["salt"], parsed["hash"]
    except (ValueError, KeyError, TypeError) as e:
        raise EnvelopeError("Export envelope is malformed") from e

    if not all(isinstance(value, str) for value in (data, salt, password_hash)):
        raise EnvelopeError("Export envelope is malformed")

    if not verify_password(password, password_hash, salt):
        raise EnvelopeError("Password is incorrect")

    try:
        return json.loads(decode_secure_value(data))
    except ValueError as e:
        raise EnvelopeError("Export payload is not valid JSON") from e


def create_access_token(user_id: str, phone: str, account_type: str) -> str:
    """Issue a signed bearer token for a user."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "phone": phone,
        "account_type": account_type,
        "iat": now,
        "exp": now + timedelta(minutes=settings.access_token_ttl_minutes),
    }
    return jwt.encode(payload, settings.bearer_token_secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decode and validate a bearer token, returning None when it is not acceptable."""
    try:
        return jwt.decode(token, settings.bearer_token_secret, algorithms=[JWT_ALGORITHM])
    except PyJWTError as e:
        logger.warning("Token validation failed", extra={"error": str(e)})
        return None
