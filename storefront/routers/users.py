from __future__ import annotations

from fastapi import APIRouter, Depends

from storefront.domain.context import RequestContext
from storefront.domain.schemas import UpdatePermissionsIn
from storefront.services.permission_service import PermissionService
from storefront.services.session_service import current_context

router = APIRouter(prefix="/users", tags=["users"])


def get_permission_service() -> PermissionService:
    return PermissionService()


@router.put("/{user_id}/permissions")
def update_permissions(
    user_id: str,
    payload: UpdatePermissionsIn,
    ctx: RequestContext = Depends(current_context),
    svc: PermissionService = Depends(get_permission_service),
):
    return svc.update_permissions(ctx, user_id, payload.permissions)
