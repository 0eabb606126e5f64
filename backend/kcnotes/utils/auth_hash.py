"""Salted password hashing for signup and signin.

bcrypt through passlib's CryptContext; each hash carries its own random salt,
so two users with the same password never share a stored value. When the
bcrypt backend cannot initialise, pbkdf2_sha256 is used instead. The cost can
be tuned with ``BCRYPT_ROUNDS``.
"""
from __future__ import annotations

import logging
import os
from typing import Optional

from passlib.context import CryptContext

logger = logging.getLogger(__name__)


def _rounds() -> Optional[int]:
    raw = os.environ.get("BCRYPT_ROUNDS")
    try:
        return int(raw) if raw else None
    except ValueError:
        return None


def _build_context() -> CryptContext:
    rounds = _rounds()
    try:
        ctx = CryptContext(schemes=["bcrypt"], deprecated="auto", **({"bcrypt__rounds": rounds} if rounds else {}))
        ctx.hash("probe")
        return ctx
    except Exception as exc:
        logger.warning("bcrypt backend unavailable (%s); falling back to pbkdf2_sha256", exc)
    return CryptContext(
        schemes=["pbkdf2_sha256"],
        deprecated="auto",
        **({"pbkdf2_sha256__rounds": rounds} if rounds else {}),
    )


pwd_context = _build_context()


def hash_password(plain: str) -> str:
    if plain is None:
        raise ValueError("Password must not be None")
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """True when ``plain`` matches ``hashed``; malformed hashes never match."""
    if plain is None or hashed is None:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        return False
