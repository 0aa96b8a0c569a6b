"""Health check endpoints router for monitoring service availability."""

from fastapi import APIRouter, Depends

from src.user_admin.api.http.deps import get_user_storage
from src.user_admin.core.storage import UserStorage
from src.user_admin.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe; returns 200 as long as the process is running."""
    return {"status": "healthy", "service": get_config().app.name}


@router.get("/ready")
async def readiness(
    storage: UserStorage = Depends(get_user_storage),
) -> dict[str, object]:
    """Readiness probe; the user store must be reachable.

    The external source is not checked here, listings already surface its
    failures as retryable errors.
    """
    return {
        "status": "ready",
        "checks": {
            "user_storage": {"status": "healthy", "users": await storage.count()},
            "external_source": {
                "enabled": get_config().external_source.enabled,
                "url": get_config().external_source.url,
            },
        },
    }
