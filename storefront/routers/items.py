from __future__ import annotations

from fastapi import APIRouter, Depends

from storefront.domain.context import RequestContext
from storefront.domain.schemas import ItemIn, ItemUpdateIn
from storefront.services.item_service import ItemService
from storefront.services.session_service import current_context

router = APIRouter(prefix="/items", tags=["items"])


def get_item_service() -> ItemService:
    return ItemService()


@router.post("", status_code=201)
def create_item(payload: ItemIn, ctx: RequestContext = Depends(current_context), svc: ItemService = Depends(get_item_service)):
    return svc.create_item(
        ctx,
        title=payload.title,
        price=payload.price,
        description=payload.description,
        image=payload.image,
        large_image=payload.large_image,
    )


@router.patch("/{item_id}")
def update_item(
    item_id: str,
    payload: ItemUpdateIn,
    ctx: RequestContext = Depends(current_context),
    svc: ItemService = Depends(get_item_service),
):
    return svc.update_item(ctx, item_id, **payload.model_dump(exclude_unset=True))


@router.delete("/{item_id}")
def delete_item(item_id: str, ctx: RequestContext = Depends(current_context), svc: ItemService = Depends(get_item_service)):
    return svc.delete_item(ctx, item_id)
