"""Session helpers (issue tokens, cookie directives, request context)."""
from __future__ import annotations

from fastapi import Request, Response

from storefront.core.config import get_settings
from storefront.core.tokens import read_session_token, sign_session_token
from storefront.domain.context import ANONYMOUS, SESSION_COOKIE_NAME, RequestContext, SessionCookie
from storefront.repositories.sql_repository import SQLRepository


def issue_session(user_id: str) -> SessionCookie:
    """Sign a token for the user and describe the cookie that carries it."""
    settings = get_settings()
    return SessionCookie(
        name=SESSION_COOKIE_NAME,
        value=sign_session_token(user_id),
        max_age=settings.session_ttl_seconds,
        httponly=True,
    )


def clear_session() -> SessionCookie:
    return SessionCookie(name=SESSION_COOKIE_NAME, value=None)


def resolve_context(token: str | None, repository: SQLRepository | None = None) -> RequestContext:
    """Build the caller context from a session token; bad tokens yield an anonymous context."""
    user_id = read_session_token(token)
    if not user_id:
        return ANONYMOUS
    user = (repository or SQLRepository()).get_user(user_id)
    if not user:
        return ANONYMOUS
    return RequestContext(current_user_id=user.id, current_user=user)


def current_context(request: Request) -> RequestContext:
    """FastAPI dependency: the context of the current request's `token` cookie."""
    return resolve_context(request.cookies.get(SESSION_COOKIE_NAME))


def apply_session_cookie(response: Response, cookie: SessionCookie | None) -> None:
    if cookie is None:
        return
    if cookie.clears:
        response.delete_cookie(cookie.name, path="/")
        return
    settings = get_settings()
    response.set_cookie(
        cookie.name,
        cookie.value,
        httponly=cookie.httponly,
        secure=settings.app_env == "prod",
        samesite="lax",
        max_age=cookie.max_age,
        path="/",
    )
