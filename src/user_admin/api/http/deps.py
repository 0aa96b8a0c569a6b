"""FastAPI dependency implementations."""

from fastapi import Request

from src.user_admin.api.http.app_data import ApplicationDependencies
from src.user_admin.core.services import ExternalUserService, UserDirectoryService
from src.user_admin.core.storage import UserStorage


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the dependencies built at application startup."""
    return request.app.state.app_dependencies


def get_user_storage(request: Request) -> UserStorage:
    """Get the user store instance."""
    return get_app_dependencies(request).user_storage


def get_external_user_service(request: Request) -> ExternalUserService:
    """Get the external user source client."""
    return get_app_dependencies(request).external_user_service


def get_directory_service(request: Request) -> UserDirectoryService:
    """Get the merged directory service."""
    return get_app_dependencies(request).directory_service
