"""Unit tests for the user entity and its input schemas."""

import pytest
from pydantic import ValidationError

from src.user_admin.entities.core.user import (
    User,
    UserCreate,
    UserUpdate,
    compose_full_name,
    split_full_name,
)


class TestUserEntity:
    """Test the User domain entity."""

    def test_create_user_with_required_fields(self):
        user = User(id=1, name="A B", username="ab", email="a@b.com", city="X")

        assert user.id == 1
        assert user.phone is None
        assert user.street is None
        assert user.zipcode is None
        assert user.state is None

    def test_identity_must_be_positive(self):
        with pytest.raises(ValidationError):
            User(id=0, name="A B", username="ab", email="a@b.com", city="X")

    def test_user_equality(self):
        user1 = User(id=1, name="A B", username="ab", email="a@b.com", city="X")
        user2 = User(id=1, name="A B", username="ab", email="a@b.com", city="X")
        user3 = User(id=2, name="A B", username="ab", email="a@b.com", city="X")

        assert user1 == user2
        assert user1 != user3
        assert hash(user1) == hash(user2)
        assert len({user1, user2, user3}) == 2


class TestUserCreate:
    """Validation applied before the store sees a new user."""

    def test_required_fields_are_stripped(self):
        data = UserCreate(name="  Ada  ", username="ada", email="ada@example.com", city=" London ")

        assert data.name == "Ada"
        assert data.city == "London"

    @pytest.mark.parametrize("field", ["name", "username", "email", "city"])
    def test_required_fields_must_be_present(self, field):
        payload = {"name": "A B", "username": "ab", "email": "a@b.com", "city": "X"}
        payload.pop(field)

        with pytest.raises(ValidationError) as exc_info:
            UserCreate(**payload)

        assert exc_info.value.errors()[0]["loc"] == (field,)

    def test_blank_required_field_is_rejected(self):
        with pytest.raises(ValidationError):
            UserCreate(name="   ", username="ab", email="a@b.com", city="X")

    @pytest.mark.parametrize("email", ["not-an-email", "@b.com", "a@"])
    def test_email_needs_local_part_and_domain(self, email):
        with pytest.raises(ValidationError):
            UserCreate(name="A B", username="ab", email=email, city="X")

    def test_blank_optional_fields_become_none(self):
        data = UserCreate(
            name="A B", username="ab", email="a@b.com", city="X", phone="", state=""
        )

        assert data.phone is None
        assert data.state is None

    def test_unknown_fields_are_ignored(self):
        data = UserCreate(name="A B", username="ab", email="a@b.com", city="X", id=7)

        assert "id" not in data.model_dump()


class TestUserUpdate:
    def test_changes_only_include_supplied_fields(self):
        update = UserUpdate(city="Paris", phone=None)

        assert update.changes() == {"city": "Paris", "phone": None}

    def test_changes_never_include_identity(self):
        update = UserUpdate.model_validate({"id": "not-a-number", "name": "New"})

        assert update.changes() == {"name": "New"}

    def test_blank_optional_field_becomes_none(self):
        assert UserUpdate(phone="").changes() == {"phone": None}

    def test_required_fields_cannot_be_cleared(self):
        assert UserUpdate(name=None, city=None).changes() == {}

    def test_blank_required_field_is_rejected(self):
        with pytest.raises(ValidationError):
            UserUpdate(email="")


class TestNameHelpers:
    def test_compose_full_name(self):
        assert compose_full_name("Ada", "Lovelace") == "Ada Lovelace"
        assert compose_full_name("Ada", "") == "Ada"
        assert compose_full_name(" ", "Lovelace ") == "Lovelace"

    def test_split_full_name(self):
        assert split_full_name("Ada King Lovelace") == ("Ada", "King Lovelace")
        assert split_full_name("Plato") == ("Plato", "")
