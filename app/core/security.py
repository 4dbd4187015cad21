"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings
from app.core.exceptions import InvalidInputError

# Tokens are valid for a fixed 7 days from issuance; there is no refresh or revocation.
ACCESS_TOKEN_LIFETIME = timedelta(days=7)

# bcrypt ignores input past 72 bytes; longer passwords are rejected, never truncated.
PASSWORD_MAX_BYTES = 72

NAME_MAX_LEN = 255
EMAIL_MAX_LEN = 255
# Request schemas cap password fields loosely; the 72-byte rule is checked by the services.
PASSWORD_FIELD_MAX_LEN = 128


def password_too_long(plain_password: str) -> bool:
    return len(plain_password.encode("utf-8")) > PASSWORD_MAX_BYTES


def hash_password(plain_password: str | None) -> str:
    """
    Hash a plain-text password for storage with a fresh random salt.

    Minimum length is the caller's policy. Empty input and input over 72 bytes are rejected.
    """
    if not plain_password:
        raise InvalidInputError("Password must be a non-empty string.")
    if password_too_long(plain_password):
        raise InvalidInputError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes.")
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(plain_password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str | None, hashed: str | None) -> bool:
    """Verify a plain password against a stored hash. Malformed input returns False."""
    if not plain_password or not hashed or password_too_long(plain_password):
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


# Checked against when a login email is unknown so both failure paths cost one bcrypt round.
_DUMMY_HASH = hash_password("classroll-timing-dummy")


def verify_dummy_password(plain_password: str | None) -> None:
    """Spend the same bcrypt work as a real check; the result is always discarded."""
    if not plain_password or password_too_long(plain_password):
        plain_password = "x"
    verify_password(plain_password, _DUMMY_HASH)


def create_access_token(sub: str, issued_at: datetime | None = None) -> str:
    """Create a signed JWT carrying sub (user id), iat and exp (iat + 7 days)."""
    now = issued_at or datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "iat": now,
        "exp": now + ACCESS_TOKEN_LIFETIME,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, iat, exp).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["sub", "iat", "exp"]},
    )


def verify_access_token(token: str | None) -> str | None:
    """
    Return the subject user id of a valid token, or None.

    Malformed, forged and expired tokens all yield None; callers cannot tell them apart.
    """
    if not token:
        return None
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError:
        return None
    sub = payload.get("sub")
    if not isinstance(sub, str) or not sub:
        return None
    return sub
