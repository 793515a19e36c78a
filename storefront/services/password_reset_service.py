"""Password reset: token issuance, expiry enforcement and credential replacement."""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass, field
from typing import Callable

from storefront.core import mailer
from storefront.core.config import get_settings
from storefront.core.logging import get_logger
from storefront.core.security import hash_password
from storefront.domain.errors import InvalidTokenError, NotFoundError, ValidationError
from storefront.domain.results import AuthResult, MessageResult, PublicUser
from storefront.repositories.sql_repository import SQLRepository
from storefront.services.auth_service import normalize_email
from storefront.services.session_service import issue_session

logger = get_logger(__name__)

RESET_TOKEN_BYTES = 20


@dataclass
class PasswordResetService:
    repository: SQLRepository = field(default_factory=SQLRepository)
    clock: Callable[[], float] = time.time

    def __post_init__(self):
        self.settings = get_settings()

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)

    def _ttl_ms(self) -> int:
        return self.settings.password_reset_ttl * 1000

    def reset_url(self, token: str) -> str:
        return f"{self.settings.frontend_url}/reset?resetToken={token}"

    def request_reset(self, email: str) -> MessageResult:
        raw_email = normalize_email(email)
        user = self.repository.get_user_by_email(raw_email)
        if not user:
            raise NotFoundError(f"No such user found for email {raw_email}")

        token = secrets.token_hex(RESET_TOKEN_BYTES)
        expiry = self._now_ms() + self._ttl_ms()
        self.repository.set_reset_token(user.id, token, expiry)
        logger.info("Reset token issued for user %s", user.id)

        # a mail failure propagates as MailError; the token stays stored and a new request replaces it
        link = self.reset_url(token)
        mailer.send_email(
            "Your Password Reset Token",
            user.email,
            mailer.make_a_nice_email(
                "Your Password Reset Token is here!\n\n"
                f'<a href="{link}">Click Here to Reset</a>'
            ),
            f"Reset your password: {link}",
            from_email=self.settings.mail_from,
        )
        return MessageResult(message="Thanks")

    def reset_password(self, reset_token: str, password: str, confirm_password: str) -> AuthResult:
        if password != confirm_password:
            raise ValidationError("Passwords don't match!")
        if not password:
            raise ValidationError("A password is required")
        token = (reset_token or "").strip()
        user = None
        if token:
            # expiry >= now - ttl, inclusive
            user = self.repository.find_user_by_reset_token(token, self._now_ms() - self._ttl_ms())
        if not user:
            raise InvalidTokenError("This token is either invalid or expired!")

        updated = self.repository.replace_password(user.id, hash_password(password), token)
        if not updated:
            raise InvalidTokenError("This token is either invalid or expired!")
        logger.info("Password reset for user %s", updated.id)
        return AuthResult(user=PublicUser.from_entity(updated), cookie=issue_session(updated.id))
