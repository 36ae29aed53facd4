from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

import jwt

from openbalti.auth.settings import AuthSettings, get_auth_settings

logger = logging.getLogger(__name__)


def issue_session_token(user: Mapping[str, Any], settings: AuthSettings | None = None) -> str:
    """Sign a session JWT for a user document."""
    settings = settings or get_auth_settings()
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(user["_id"]),
        "role": user.get("role") or "user",
        "name": user.get("name"),
        "email": user.get("email"),
        "iat": now,
        "exp": now + timedelta(seconds=settings.jwt_lifetime_seconds),
    }
    return jwt.encode(claims, settings.jwt_secret.get_secret_value(), algorithm=settings.jwt_algorithm)


def decode_session_token(token: str, settings: AuthSettings | None = None) -> Optional[dict]:
    """Return the claims, or None for expired, tampered or malformed tokens."""
    settings = settings or get_auth_settings()
    try:
        return jwt.decode(
            token,
            settings.jwt_secret.get_secret_value(),
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        logger.debug("Session token expired")
    except jwt.InvalidTokenError as exc:
        logger.debug("Rejected session token: %s", exc)
    return None


__all__ = ["issue_session_token", "decode_session_token"]
