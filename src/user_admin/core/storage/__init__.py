"""User storage abstractions."""

from .user_storage import InMemoryUserStorage, UserStorage, matches_query

__all__ = ["InMemoryUserStorage", "UserStorage", "matches_query"]
