from dataclasses import dataclass

from src.user_admin.core.services import ExternalUserService, UserDirectoryService
from src.user_admin.core.storage import UserStorage


@dataclass
class ApplicationDependencies:
    user_storage: UserStorage
    external_user_service: ExternalUserService
    directory_service: UserDirectoryService
