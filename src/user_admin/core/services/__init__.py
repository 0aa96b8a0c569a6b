"""Core services exports."""

from .directory_service import (
    UserDirectoryService,
    UserListing,
    filter_directory,
    merge_sources,
    to_directory_entry,
)
from .external_user_service import ExternalSourceError, ExternalUserService

__all__ = [
    # External source
    "ExternalSourceError",
    "ExternalUserService",
    # Directory
    "UserDirectoryService",
    "UserListing",
    "filter_directory",
    "merge_sources",
    "to_directory_entry",
]
