"""External user entity package."""

from .entity import ExternalAddress, ExternalCompany, ExternalUser

__all__ = ["ExternalAddress", "ExternalCompany", "ExternalUser"]
