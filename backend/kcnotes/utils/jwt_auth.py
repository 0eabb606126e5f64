from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from kcnotes.config import Settings
from kcnotes.http.context import Identity

logger = logging.getLogger(__name__)

BEARER = "bearer"


def create_access_token(
    user_id: int,
    username: str,
    settings: Settings,
    expires_minutes: Optional[int] = None,
) -> str:
    if not settings.secret:
        raise RuntimeError("SECRET is not set")
    now = datetime.now(timezone.utc)
    minutes = settings.jwt_exp_minutes if expires_minutes is None else expires_minutes
    exp = now + timedelta(minutes=minutes)
    payload = {
        "sub": str(user_id),
        "username": username,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, settings.secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> dict:
    return jwt.decode(token, settings.secret, algorithms=[settings.jwt_algorithm])


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != BEARER:
        return None
    token = token.strip()
    return token or None


def check_auth(authorization: Optional[str], settings: Settings) -> Optional[Identity]:
    """Validate an ``Authorization`` header value.

    Returns the decoded identity, or None for any failure: missing header,
    wrong scheme, empty token, bad signature, expired token or a claim set
    without a usable subject. Callers answer None with a 401 and stop.
    """
    token = _bearer_token(authorization)
    if token is None:
        logger.debug("auth rejected: missing or malformed Authorization header")
        return None
    if not settings.secret:
        logger.error("auth rejected: SECRET is not set")
        return None
    try:
        payload = decode_token(token, settings)
    except JWTError as exc:
        logger.debug("auth rejected: %s", exc)
        return None

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        logger.debug("auth rejected: token has no numeric subject")
        return None

    return Identity(
        user_id=user_id,
        username=payload.get("username"),
        issued_at=payload.get("iat"),
        expires_at=payload.get("exp"),
    )
