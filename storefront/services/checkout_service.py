"""
Checkout: charge the cart total, materialize an immutable order, clear the cart.

The steps run strictly in this order:

    Pending -> Charging -> OrderCreated -> CartCleared

* A rejected charge raises PaymentError before anything is written; the cart
  is left as it was and no order exists.
* The order is written only after the gateway confirmed the charge, and its
  total is the amount the gateway reports.
* Clearing the cart happens after the order exists and is best effort: a
  failure is logged and the order is still returned. A stale cart can be
  cleared again later.
* Nothing is refunded automatically. If persisting the order fails after a
  successful charge, the charge id is logged at CRITICAL for reconciliation.
"""

from __future__ import annotations

from typing import Optional, Protocol

from storefront.core.config import get_settings
from storefront.core.logging import get_logger
from storefront.core.payments import Charge, StripeGateway
from storefront.domain.context import RequestContext
from storefront.domain.errors import AuthenticationError, StoreError, ValidationError
from storefront.domain.results import OrderLine, OrderResult
from storefront.repositories.sql_repository import SQLRepository

logger = get_logger(__name__)


class PaymentGateway(Protocol):
    def charge(self, amount: int, currency: str, source: str) -> Charge:
        ...


def snapshot_line(cart_item) -> OrderLine:
    """Copy the purchased item's fields; ids of the Item and CartItem rows are not carried over."""
    item = cart_item.item
    return OrderLine(
        title=item.title,
        description=item.description or "",
        price=item.price,
        quantity=cart_item.quantity,
        image=item.image,
        large_image=item.large_image,
    )


class CheckoutService:
    def __init__(self, repository: SQLRepository | None = None, gateway: Optional[PaymentGateway] = None) -> None:
        self.settings = get_settings()
        self.repository = repository or SQLRepository()
        self.gateway = gateway or StripeGateway()

    def create_order(self, ctx: RequestContext, payment_token: str) -> OrderResult:
        if not ctx.is_authenticated:
            raise AuthenticationError("You must be signed in to complete this order.")
        user_id = ctx.current_user_id

        cart = []
        for line in self.repository.get_cart(user_id):
            if line.item is None:
                logger.warning("Skipping cart item %s: item no longer exists", line.id)
                continue
            cart.append(line)
        if not cart:
            raise ValidationError("Your cart is empty")

        amount = sum(line.item.price * line.quantity for line in cart)
        logger.info("Checkout for user %s: %s lines, provisional total %s", user_id, len(cart), amount)

        # Charging
        charge = self.gateway.charge(amount=amount, currency=self.settings.payment_currency, source=payment_token)
        if charge.amount != amount:
            logger.warning("Gateway charged %s for cart total %s (charge %s)", charge.amount, amount, charge.id)

        # OrderCreated
        lines = [snapshot_line(line) for line in cart]
        try:
            order = self.repository.create_order(user_id, total=charge.amount, charge=charge.id, lines=lines)
        except StoreError:
            logger.critical(
                "Charge %s of %s captured for user %s but writing the order failed",
                charge.id,
                charge.amount,
                user_id,
            )
            raise
        logger.info("Order %s created for user %s (charge %s)", order.id, user_id, charge.id)

        # CartCleared
        try:
            self.repository.delete_cart_items([line.id for line in cart])
        except StoreError:
            logger.exception("Order %s saved but cart of user %s was not cleared", order.id, user_id)

        return OrderResult.from_entity(order)
