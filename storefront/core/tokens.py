"""Signed session tokens carrying only the user id."""

from __future__ import annotations

from typing import Optional

import jwt

from .config import get_settings
from .logging import get_logger

logger = get_logger(__name__)

ALGORITHM = "HS256"
_CLAIMS = {"userId"}


def sign_session_token(user_id: str) -> str:
    settings = get_settings()
    return jwt.encode({"userId": str(user_id)}, settings.app_secret, algorithm=ALGORITHM)


def read_session_token(token: Optional[str]) -> Optional[str]:
    """Return the user id of a correctly signed token, or None."""
    if not token:
        return None
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.app_secret, algorithms=[ALGORITHM])
    except jwt.PyJWTError as exc:
        logger.info("Rejected session token: %s", exc)
        return None
    if set(payload) != _CLAIMS:
        logger.info("Rejected session token with claims %s", sorted(payload))
        return None
    user_id = payload.get("userId")
    return str(user_id) if user_id else None
