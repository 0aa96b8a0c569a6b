"""Entities organized by business concept.

Each entity has its own package containing its domain model and the
validated input schemas that produce it:
- core.user: locally created users owned by the user store
- core.external_user: read-only users served by the external source
"""

from .core.external_user import ExternalAddress, ExternalCompany, ExternalUser
from .core.user import User, UserCreate, UserUpdate

__all__ = [
    "User",
    "UserCreate",
    "UserUpdate",
    "ExternalUser",
    "ExternalAddress",
    "ExternalCompany",
]
