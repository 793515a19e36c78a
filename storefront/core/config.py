"""
Configuration helpers for the storefront backend.

Exposes a frozen Settings object built from environment variables so that
services and adapters never read os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    app_secret: str
    frontend_url: str
    smtp_host: str
    smtp_port: int
    smtp_user: str
    smtp_password: str
    mail_from: str
    password_reset_ttl: int
    session_ttl_seconds: int
    password_hash_time_cost: int
    stripe_secret_key: str
    stripe_api_base: str
    payment_currency: str
    payment_timeout: int
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./storefront.db"),
        app_secret=os.getenv("APP_SECRET", "change-me-in-prod"),
        frontend_url=os.getenv("FRONTEND_URL", "http://localhost:7777").rstrip("/"),
        smtp_host=os.getenv("SMTP_HOST", ""),
        smtp_port=_int(os.getenv("SMTP_PORT", "465"), 465),
        smtp_user=os.getenv("SMTP_USER", ""),
        smtp_password=os.getenv("SMTP_PASSWORD", ""),
        mail_from=os.getenv("MAIL_FROM", os.getenv("SMTP_USER", "")),
        password_reset_ttl=_int(os.getenv("PASSWORD_RESET_TTL", "3600"), 3600),
        session_ttl_seconds=_int(os.getenv("SESSION_TTL_SECONDS", str(60 * 60 * 24 * 365)), 60 * 60 * 24 * 365),
        password_hash_time_cost=_int(os.getenv("PASSWORD_HASH_TIME_COST", "2"), 2),
        stripe_secret_key=os.getenv("STRIPE_SECRET_KEY", ""),
        stripe_api_base=os.getenv("STRIPE_API_BASE", "https://api.stripe.com").rstrip("/"),
        payment_currency=(os.getenv("PAYMENT_CURRENCY") or "usd").lower(),
        payment_timeout=_int(os.getenv("PAYMENT_TIMEOUT", "15"), 15),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
