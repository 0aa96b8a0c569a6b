"""User domain entity and its input schemas."""

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints

from src.user_admin.entities.core._base import Entity

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def _check_email(value: str) -> str:
    local, sep, domain = value.partition("@")
    if not sep or not local or not domain:
        raise ValueError("Invalid email address")
    return value


Email = Annotated[RequiredText, AfterValidator(_check_email)]


def _blank_to_none(value: str) -> str | None:
    return value or None


OptionalText = Annotated[str, AfterValidator(_blank_to_none)]

OPTIONAL_FIELDS = ("phone", "street", "zipcode", "state")


class User(Entity):
    """User entity representing a locally created person.

    Identity is assigned by the store on insert and never changes afterwards.
    Optional fields that were not supplied are ``None``.
    """

    name: str = Field(description="Display name")
    username: str = Field(description="Handle")
    email: str = Field(description="Email address")
    phone: str | None = Field(default=None, description="Phone number")
    street: str | None = Field(default=None, description="Street address")
    city: str = Field(description="City")
    zipcode: str | None = Field(default=None, description="Postal code")
    state: str | None = Field(default=None, description="Region or state")

    def __eq__(self, other: Any) -> bool:
        """Compare users by their business attributes."""
        if not isinstance(other, User):
            return False

        return self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        return hash(tuple(self.model_dump().values()))


class UserCreate(BaseModel):
    """Validated input for creating a user.

    Required fields must be non-empty after stripping whitespace.
    """

    model_config = ConfigDict(extra="ignore")

    name: RequiredText
    username: RequiredText
    email: Email
    phone: OptionalText | None = None
    street: OptionalText | None = None
    city: RequiredText
    zipcode: OptionalText | None = None
    state: OptionalText | None = None


class UserUpdate(BaseModel):
    """Validated partial input for updating a user.

    Only fields present in the payload are applied. Unknown keys, ``id``
    included, are dropped so the stored identity is never replaced.
    """

    model_config = ConfigDict(extra="ignore")

    name: RequiredText | None = None
    username: RequiredText | None = None
    email: Email | None = None
    phone: OptionalText | None = None
    street: OptionalText | None = None
    city: RequiredText | None = None
    zipcode: OptionalText | None = None
    state: OptionalText | None = None

    def changes(self) -> dict[str, Any]:
        """Return the supplied fields."""
        supplied = self.model_dump(exclude_unset=True)
        # required fields cannot be cleared
        return {
            key: value
            for key, value in supplied.items()
            if value is not None or key in OPTIONAL_FIELDS
        }


def compose_full_name(first_name: str, last_name: str) -> str:
    """Join first and last name into the display name."""
    return f"{first_name.strip()} {last_name.strip()}".strip()


def split_full_name(name: str) -> tuple[str, str]:
    """Split a display name into first name and the remainder."""
    first, _, rest = name.strip().partition(" ")
    return first, rest.strip()
