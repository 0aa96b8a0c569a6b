"""User entity module.

This module contains all User-related classes organized by responsibility:
- User: Domain entity assigned an identity by the store
- UserCreate: Validated input for inserts
- UserUpdate: Validated partial input for updates
"""

from .entity import User, UserCreate, UserUpdate, compose_full_name, split_full_name

__all__ = ["User", "UserCreate", "UserUpdate", "compose_full_name", "split_full_name"]
