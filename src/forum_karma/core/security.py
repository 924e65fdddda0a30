"""Bearer token helpers for the HTTP layer."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import jwt

from forum_karma.core.settings import settings


def create_access_token(user_id: int, expires_minutes: int | None = None) -> str:
    """Return a signed JWT whose subject is the user's id."""
    minutes = expires_minutes or settings.access_token_expire_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int | None:
    """Return the user id carried by ``token`` or ``None`` if it has no subject.

    Raises:
        jose.JWTError: If the token is malformed, expired or badly signed.
    """
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    subject = payload.get("sub")
    if subject is None:
        return None
    try:
        return int(subject)
    except ValueError:
        return None
