"""Read-only router over the external user source."""

from fastapi import APIRouter, Depends, HTTPException

from src.user_admin.api.http.deps import get_external_user_service
from src.user_admin.core.services import ExternalUserService
from src.user_admin.entities.core.external_user import ExternalUser

router = APIRouter(prefix="/api/external-users", tags=["external-users"])


@router.get("", response_model=list[ExternalUser])
async def list_external_users(
    refresh: bool = False,
    service: ExternalUserService = Depends(get_external_user_service),
) -> list[ExternalUser]:
    """List external users. ``refresh`` bypasses the cached snapshot."""
    if refresh:
        service.clear_cache()
    return await service.fetch_users()


@router.get("/{user_id}", response_model=ExternalUser)
async def get_external_user(
    user_id: int,
    service: ExternalUserService = Depends(get_external_user_service),
) -> ExternalUser:
    """Get one external user by ID."""
    user = await service.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="External user not found")
    return user
