from __future__ import annotations

from fastapi import APIRouter, Depends

from storefront.domain.context import RequestContext
from storefront.domain.schemas import CheckoutIn
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService
from storefront.services.session_service import current_context

router = APIRouter(tags=["cart"])


def get_cart_service() -> CartService:
    return CartService()


def get_checkout_service() -> CheckoutService:
    return CheckoutService()


@router.post("/cart/items/{item_id}")
def add_to_cart(item_id: str, ctx: RequestContext = Depends(current_context), svc: CartService = Depends(get_cart_service)):
    return svc.add_to_cart(ctx, item_id)


@router.delete("/cart/lines/{cart_item_id}")
def remove_from_cart(cart_item_id: str, ctx: RequestContext = Depends(current_context), svc: CartService = Depends(get_cart_service)):
    return svc.remove_from_cart(ctx, cart_item_id)


@router.post("/orders", status_code=201)
def create_order(
    payload: CheckoutIn,
    ctx: RequestContext = Depends(current_context),
    svc: CheckoutService = Depends(get_checkout_service),
):
    return svc.create_order(ctx, payload.token)
