"""Explicit request context and session directives passed across the service boundary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

SESSION_COOKIE_NAME = "token"


@dataclass(frozen=True)
class RequestContext:
    """Who is calling. Both fields are None for anonymous requests."""

    current_user_id: Optional[str] = None
    current_user: Optional[object] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.current_user_id)


ANONYMOUS = RequestContext()


@dataclass(frozen=True)
class SessionCookie:
    """What the HTTP boundary must do with the session cookie.

    ``value`` of None means the cookie has to be cleared.
    """

    name: str
    value: Optional[str]
    max_age: int = 0
    httponly: bool = True

    @property
    def clears(self) -> bool:
        return self.value is None
