"""Security helpers (hashing and verification)."""

from __future__ import annotations

from functools import lru_cache

from argon2 import PasswordHasher, exceptions as argon_exc

from .config import get_settings


@lru_cache
def _hasher() -> PasswordHasher:
    return PasswordHasher(time_cost=max(1, get_settings().password_hash_time_cost))


def hash_password(password: str) -> str:
    """Create a salted Argon2 hash; the salt travels inside the encoded digest."""
    return _hasher().hash(password)


def verify_password(password: str, stored_hash: str | None) -> bool:
    stored = stored_hash or ""
    if not stored:
        return False
    try:
        return _hasher().verify(stored, password)
    except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
        return False
