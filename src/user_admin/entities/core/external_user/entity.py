"""External user entity, the shape served by the read-only external source."""

from pydantic import BaseModel, ConfigDict, Field


class ExternalAddress(BaseModel):
    """Nested address block of an external user."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    street: str = ""
    city: str = ""
    zipcode: str = ""


class ExternalCompany(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""


class ExternalUser(BaseModel):
    """User record in the external source's shape.

    Local users are mapped into this shape for listings and carry
    ``is_local=True``; records fetched from the external source keep the
    default ``False``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str
    username: str
    email: str
    phone: str = ""
    address: ExternalAddress = Field(default_factory=ExternalAddress)
    website: str | None = None
    company: ExternalCompany | None = None
    is_local: bool = Field(default=False, description="Record originates from the local store")
