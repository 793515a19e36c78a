from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from storefront.core.config import get_settings
from storefront.core.logging import configure_logging, get_logger
from storefront.db.create_tables import create_all
from storefront.domain.errors import ServiceError
from storefront.routers import auth as auth_router
from storefront.routers import cart as cart_router
from storefront.routers import items as items_router
from storefront.routers import users as users_router

logger = get_logger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (anti clickjacking, nosniff, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": type(exc).__name__, "message": exc.message},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_all()
    yield


def create_app() -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``uvicorn storefront.app:create_app --factory``)."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Storefront API", lifespan=lifespan)

    allowed_cors = {settings.frontend_url}
    if settings.app_env != "prod":
        allowed_cors.update({"http://localhost:7777", "http://127.0.0.1:7777"})
    allowed_cors = {origin for origin in allowed_cors if origin}
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    app.add_exception_handler(ServiceError, service_error_handler)

    app.include_router(auth_router.router)
    app.include_router(cart_router.router)
    app.include_router(items_router.router)
    app.include_router(users_router.router)

    logger.info("Storefront API configured (env=%s)", settings.app_env)
    return app
