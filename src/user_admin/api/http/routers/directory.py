"""Directory router: the merged, filterable listing shown to operators."""

from fastapi import APIRouter, Depends, Query

from src.user_admin.api.http.deps import get_directory_service
from src.user_admin.core.services import UserDirectoryService, UserListing

router = APIRouter(prefix="/api/directory", tags=["directory"])


@router.get("", response_model=UserListing)
async def list_directory(
    q: str = Query(default="", description="Case-insensitive name or city fragment"),
    service: UserDirectoryService = Depends(get_directory_service),
) -> UserListing:
    """External users followed by local users, filtered by ``q``."""
    return await service.list_users(q)
