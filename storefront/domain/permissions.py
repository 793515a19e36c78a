"""Permission names and the pure permission guard."""

from __future__ import annotations

import enum
from typing import Iterable

from storefront.domain.errors import ForbiddenError, ValidationError


class Permission(str, enum.Enum):
    ADMIN = "ADMIN"
    USER = "USER"
    ITEMCREATE = "ITEMCREATE"
    ITEMUPDATE = "ITEMUPDATE"
    ITEMDELETE = "ITEMDELETE"
    PERMISSIONUPDATE = "PERMISSIONUPDATE"


DEFAULT_PERMISSIONS = (Permission.USER,)


def normalize_permissions(values: Iterable[str | Permission]) -> list[str]:
    """Validate permission names and return them de-duplicated, in input order."""
    result: list[str] = []
    for value in values or ():
        raw = value.value if isinstance(value, Permission) else str(value or "").strip().upper()
        try:
            name = Permission(raw).value
        except ValueError:
            raise ValidationError(f"Unknown permission: {value}") from None
        if name not in result:
            result.append(name)
    if not result:
        raise ValidationError("A user must keep at least one permission")
    return result


def _name(value: str | Permission) -> str:
    return value.value if isinstance(value, Permission) else str(value)


def has_permission(user, required_any_of: Iterable[str | Permission]) -> bool:
    held = {_name(p) for p in (getattr(user, "permissions", None) or [])}
    wanted = {_name(p) for p in required_any_of}
    return bool(held & wanted)


def require_permission(user, required_any_of: Iterable[str | Permission]) -> None:
    """Raise ForbiddenError unless the user holds at least one of the permissions."""
    required = sorted(_name(p) for p in required_any_of)
    if has_permission(user, required):
        return
    held = [_name(p) for p in (getattr(user, "permissions", None) or [])]
    raise ForbiddenError(
        f"You do not have sufficient permissions: {', '.join(required)}. "
        f"You have: {', '.join(held) or 'none'}"
    )
