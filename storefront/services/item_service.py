"""Catalog item mutation gated by ownership or permissions."""

from __future__ import annotations

from storefront.core.logging import get_logger
from storefront.domain.context import RequestContext
from storefront.domain.errors import NotFoundError, ValidationError
from storefront.domain.permissions import Permission, require_permission
from storefront.domain.results import DeletedResult, ItemView
from storefront.repositories.sql_repository import SQLRepository
from storefront.services.permission_service import require_signed_in_user

logger = get_logger(__name__)

EDITABLE_FIELDS = ("title", "description", "price", "image", "large_image")


def _check_fields(values: dict) -> None:
    if "title" in values and not (values["title"] or "").strip():
        raise ValidationError("An item needs a title")
    if "price" in values:
        price = values["price"]
        if not isinstance(price, int) or isinstance(price, bool) or price < 0:
            raise ValidationError("Price must be a non-negative integer amount of cents")


class ItemService:
    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def create_item(
        self,
        ctx: RequestContext,
        title: str,
        price: int,
        description: str = "",
        image: str | None = None,
        large_image: str | None = None,
    ) -> ItemView:
        user = require_signed_in_user(ctx, self.repository, "You must be logged in to do that!")
        _check_fields({"title": title, "price": price})
        item = self.repository.create_item(
            title=title.strip(),
            description=description or "",
            price=price,
            image=image,
            large_image=large_image,
            user_id=user.id,
        )
        logger.info("User %s created item %s", user.id, item.id)
        return ItemView.from_entity(item)

    def _load_owned_or_permitted(self, ctx: RequestContext, item_id: str, permission: Permission):
        user = require_signed_in_user(ctx, self.repository, "You must be logged in to do that!")
        item = self.repository.get_item(item_id)
        if not item:
            raise NotFoundError(f"No item found with id {item_id}")
        if item.user_id != user.id:
            require_permission(user, {Permission.ADMIN, permission})
        return user, item

    def update_item(self, ctx: RequestContext, item_id: str, **changes) -> ItemView:
        user, item = self._load_owned_or_permitted(ctx, item_id, Permission.ITEMUPDATE)
        values = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS and v is not None}
        _check_fields(values)
        if "title" in values:
            values["title"] = values["title"].strip()
        updated = self.repository.update_item(item.id, values)
        if not updated:
            raise NotFoundError(f"No item found with id {item_id}")
        logger.info("User %s updated item %s: %s", user.id, item.id, sorted(values))
        return ItemView.from_entity(updated)

    def delete_item(self, ctx: RequestContext, item_id: str) -> DeletedResult:
        user, item = self._load_owned_or_permitted(ctx, item_id, Permission.ITEMDELETE)
        self.repository.delete_item(item.id)
        logger.info("User %s deleted item %s", user.id, item.id)
        return DeletedResult(id=item.id)
