"""Merged user directory: external users followed by local users."""

from collections.abc import Iterable, Sequence

from loguru import logger
from pydantic import BaseModel, Field

from src.user_admin.core.services.external_user_service import ExternalUserService
from src.user_admin.core.storage import UserStorage, matches_query
from src.user_admin.entities.core.external_user import (
    ExternalAddress,
    ExternalCompany,
    ExternalUser,
)
from src.user_admin.entities.core.user import User


class UserListing(BaseModel):
    """One rendering of the directory."""

    query: str = ""
    users: list[ExternalUser] = Field(default_factory=list)
    total: int = Field(default=0, description="Merged count before filtering")
    local: int = 0
    external: int = 0


def to_directory_entry(user: User) -> ExternalUser:
    """Map a local user into the external shape, flagged as local."""
    return ExternalUser(
        id=user.id,
        name=user.name,
        username=user.username,
        email=user.email,
        phone=user.phone or "",
        address=ExternalAddress(
            street=user.street or "",
            city=user.city,
            zipcode=user.zipcode or "",
        ),
        website="",
        company=ExternalCompany(name=""),
        is_local=True,
    )


def merge_sources(
    external_users: Iterable[ExternalUser], local_users: Iterable[User]
) -> list[ExternalUser]:
    """Concatenate external users with mapped local users.

    Order is external order then local insertion order. Entries with the same
    id from both sources are all kept; ``is_local`` tells them apart.
    """
    return [*external_users, *(to_directory_entry(user) for user in local_users)]


def filter_directory(entries: Sequence[ExternalUser], query: str) -> list[ExternalUser]:
    """Keep entries whose name or city contains ``query``, ignoring case."""
    return [
        entry for entry in entries if matches_query(query, entry.name, entry.address.city)
    ]


class UserDirectoryService:
    """Builds the operator-facing listing on every read."""

    def __init__(self, storage: UserStorage, external: ExternalUserService) -> None:
        self._storage = storage
        self._external = external

    async def list_users(self, query: str = "") -> UserListing:
        """Merge both sources and apply the free-text filter.

        Raises:
            ExternalSourceError: the external source could not be read
        """
        external_users = await self._external.fetch_users()
        local_users = await self._storage.list_all()

        merged = merge_sources(external_users, local_users)
        matched = filter_directory(merged, query)

        logger.bind(
            query=query,
            total=len(merged),
            matched=len(matched),
        ).debug("directory.listed")

        return UserListing(
            query=query,
            users=matched,
            total=len(merged),
            local=len(local_users),
            external=len(external_users),
        )
