"""Local user API router with create, read, update and search operations."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.user_admin.api.http.deps import get_user_storage
from src.user_admin.core.storage import UserStorage
from src.user_admin.entities.core.user import User, UserCreate, UserUpdate

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    user: UserCreate,
    storage: UserStorage = Depends(get_user_storage),
) -> User:
    """Create a new user."""
    return await storage.create(user)


@router.get("", response_model=list[User])
async def list_users(
    search: str | None = Query(default=None, description="Filter by name or city"),
    storage: UserStorage = Depends(get_user_storage),
) -> list[User]:
    """List all users, optionally filtered by a free-text query."""
    if search is not None:
        return await storage.search(search)
    return await storage.list_all()


@router.get("/search", response_model=list[User])
async def search_users(
    q: str = Query(default="", description="Case-insensitive name or city fragment"),
    storage: UserStorage = Depends(get_user_storage),
) -> list[User]:
    """Search users by name or city."""
    return await storage.search(q)


@router.get("/by-username/{username}", response_model=User)
async def get_user_by_username(
    username: str,
    storage: UserStorage = Depends(get_user_storage),
) -> User:
    """Get a user by username."""
    user = await storage.get_by_username(username)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: int,
    storage: UserStorage = Depends(get_user_storage),
) -> User:
    """Get a user by ID."""
    user = await storage.get(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.api_route("/{user_id}", methods=["PUT", "PATCH"], response_model=User)
async def update_user(
    user_id: int,
    user_update: UserUpdate,
    storage: UserStorage = Depends(get_user_storage),
) -> User:
    """Update a user with the supplied fields; the ID in the path always wins."""
    updated = await storage.update(user_id, user_update)
    if updated is None:
        raise HTTPException(status_code=404, detail="User not found")
    return updated
