"""Permission administration."""

from __future__ import annotations

from typing import Iterable

from storefront.core.logging import get_logger
from storefront.domain.context import RequestContext
from storefront.domain.errors import AuthenticationError, NotFoundError
from storefront.domain.permissions import Permission, normalize_permissions, require_permission
from storefront.domain.results import PublicUser
from storefront.repositories.sql_repository import SQLRepository

logger = get_logger(__name__)


def require_signed_in_user(ctx: RequestContext, repository: SQLRepository, message: str = "You must be logged in!"):
    """Return the acting user for ctx, loading it from the store when the context only carries an id."""
    if not ctx.is_authenticated:
        raise AuthenticationError(message)
    user = ctx.current_user or repository.get_user(ctx.current_user_id)
    if not user:
        raise AuthenticationError(message)
    return user


class PermissionService:
    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def update_permissions(self, ctx: RequestContext, target_user_id: str, new_permissions: Iterable[str]) -> PublicUser:
        acting = require_signed_in_user(ctx, self.repository)
        require_permission(acting, {Permission.ADMIN, Permission.PERMISSIONUPDATE})

        permissions = normalize_permissions(new_permissions)
        updated = self.repository.set_permissions(target_user_id, permissions)
        if not updated:
            raise NotFoundError(f"No user found with id {target_user_id}")
        logger.info("User %s set permissions of %s to %s", acting.id, target_user_id, permissions)
        return PublicUser.from_entity(updated)
