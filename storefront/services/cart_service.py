"""Cart mutation: add with quantity merge, remove with ownership check."""

from __future__ import annotations

from storefront.core.logging import get_logger
from storefront.domain.context import RequestContext
from storefront.domain.errors import AuthenticationError, ForbiddenError, NotFoundError, StoreError
from storefront.domain.results import CartLine, DeletedResult
from storefront.repositories.sql_repository import SQLRepository

logger = get_logger(__name__)


class CartService:
    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def add_to_cart(self, ctx: RequestContext, item_id: str) -> CartLine:
        """Add one unit of an item; repeated adds grow the same row."""
        if not ctx.is_authenticated:
            raise AuthenticationError("You must be signed in")
        user_id = ctx.current_user_id

        if not self.repository.get_item(item_id):
            raise NotFoundError(f"No item found with id {item_id}")

        existing = self.repository.find_cart_item(user_id, item_id)
        if existing:
            line = self.repository.increment_cart_item(existing.id)
        else:
            line = self.repository.create_cart_item(user_id, item_id)
            if line is None:
                # lost the insert race on (user_id, item_id)
                existing = self.repository.find_cart_item(user_id, item_id)
                line = self.repository.increment_cart_item(existing.id) if existing else None
        if line is None:
            raise StoreError("Cart item could not be saved")

        logger.info("User %s has %s x item %s in cart", user_id, line.quantity, item_id)
        return CartLine.from_entity(line)

    def remove_from_cart(self, ctx: RequestContext, cart_item_id: str) -> DeletedResult:
        cart_item = self.repository.get_cart_item(cart_item_id)
        if not cart_item:
            raise NotFoundError("No CartItem Found!")
        if cart_item.user_id != ctx.current_user_id:
            raise ForbiddenError("That cart item belongs to someone else")

        self.repository.delete_cart_item(cart_item.id)
        logger.info("User %s removed cart item %s", ctx.current_user_id, cart_item.id)
        return DeletedResult(id=cart_item.id)
