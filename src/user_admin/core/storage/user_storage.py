"""User storage interface and implementations.

The store is the single owner of locally created users. It is constructed by
the application bootstrap and handed to request handlers; nothing else keeps
a mutable reference to its state.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod

from loguru import logger

from src.user_admin.entities.core.user import User, UserCreate, UserUpdate


class UserStorage(ABC):
    """Abstract interface for user storage backends.

    Lookups and updates signal absence by returning ``None``.
    """

    @abstractmethod
    async def get(self, user_id: int) -> User | None:
        """Retrieve a user by identity.

        Args:
            user_id: Store-assigned identity

        Returns:
            The stored user or None if not found
        """
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> User | None:
        """Retrieve the first user whose username matches exactly.

        Args:
            username: Handle to look up

        Returns:
            The first matching user in insertion order, or None
        """
        pass

    @abstractmethod
    async def create(self, data: UserCreate) -> User:
        """Insert a new user and assign it the next identity.

        Args:
            data: Validated creation fields

        Returns:
            The stored user
        """
        pass

    @abstractmethod
    async def update(self, user_id: int, data: UserUpdate) -> User | None:
        """Overlay the supplied fields onto a stored user.

        Args:
            user_id: Identity of the user to update
            data: Validated partial fields

        Returns:
            The updated user or None if no user has that identity
        """
        pass

    @abstractmethod
    async def list_all(self) -> list[User]:
        """Return a snapshot of all users in insertion order."""
        pass

    @abstractmethod
    async def search(self, query: str) -> list[User]:
        """Return users whose name or city contains ``query``, ignoring case.

        An empty query matches every user.
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored users."""
        pass


def matches_query(query: str, *values: str | None) -> bool:
    """Case-insensitive substring match of ``query`` against any of ``values``."""
    needle = query.lower()
    return any(needle in (value or "").lower() for value in values)


class InMemoryUserStorage(UserStorage):
    """Process-lifetime user store backed by an insertion-ordered dict."""

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def get(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    async def get_by_username(self, username: str) -> User | None:
        for user in list(self._users.values()):
            if user.username == username:
                return user
        return None

    async def create(self, data: UserCreate) -> User:
        async with self._lock:
            user_id = self._next_id
            self._next_id += 1
            user = User(id=user_id, **data.model_dump())
            self._users[user_id] = user

        logger.bind(user_id=user_id, username=user.username).info("user.created")
        return user

    async def update(self, user_id: int, data: UserUpdate) -> User | None:
        async with self._lock:
            existing = self._users.get(user_id)
            if existing is None:
                logger.bind(user_id=user_id).debug("user.update.not_found")
                return None

            merged = {**existing.model_dump(), **data.changes(), "id": user_id}
            updated = User.model_validate(merged)
            self._users[user_id] = updated

        logger.bind(user_id=user_id, fields=sorted(data.changes())).info("user.updated")
        return updated

    async def list_all(self) -> list[User]:
        return list(self._users.values())

    async def search(self, query: str) -> list[User]:
        return [
            user
            for user in list(self._users.values())
            if matches_query(query, user.name, user.city)
        ]

    async def count(self) -> int:
        return len(self._users)
