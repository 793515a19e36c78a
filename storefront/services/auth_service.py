"""
Authentication use cases: signup, signin and signout.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from storefront.core.config import get_settings
from storefront.core.logging import get_logger
from storefront.core.security import hash_password, verify_password
from storefront.domain.errors import InvalidCredentialsError, NotFoundError, ValidationError
from storefront.domain.permissions import DEFAULT_PERMISSIONS
from storefront.domain.results import AuthResult, MessageResult, PublicUser
from storefront.repositories.sql_repository import SQLRepository
from storefront.services.session_service import clear_session, issue_session

logger = get_logger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


@dataclass
class AuthService:
    """Handles signup, signin and signout."""

    repository: SQLRepository = field(default_factory=SQLRepository)

    def __post_init__(self):
        self.settings = get_settings()

    def signup(self, email: str, password: str, name: str = "") -> AuthResult:
        raw_email = normalize_email(email)
        if not raw_email or not _EMAIL_RE.match(raw_email):
            raise ValidationError("A valid email is required")
        if not password:
            raise ValidationError("A password is required")
        user = self.repository.create_user(
            raw_email,
            password_hash=hash_password(password),
            name=(name or "").strip(),
            permissions=[p.value for p in DEFAULT_PERMISSIONS],
        )
        logger.info("User %s signed up", user.id)
        return AuthResult(user=PublicUser.from_entity(user), cookie=issue_session(user.id))

    def signin(self, email: str, password: str) -> AuthResult:
        raw_email = normalize_email(email)
        user = self.repository.get_user_by_email(raw_email)
        if not user:
            raise NotFoundError(f"No such user found for email {raw_email}")
        if not verify_password(password, user.password_hash):
            logger.info("Rejected signin for user %s", user.id)
            raise InvalidCredentialsError("Invalid Password!")
        return AuthResult(user=PublicUser.from_entity(user), cookie=issue_session(user.id))

    def signout(self) -> MessageResult:
        return MessageResult(message="Goodbye!", cookie=clear_session())
