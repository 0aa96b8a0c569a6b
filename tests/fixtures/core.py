from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from src.user_admin.api.http.app import app
from src.user_admin.api.http.app_data import ApplicationDependencies
from src.user_admin.core.services import ExternalUserService, UserDirectoryService
from src.user_admin.core.storage import UserStorage


@pytest.fixture
def ada() -> dict[str, Any]:
    """Create payload with every field filled in."""
    return {
        "name": "Ada Lovelace",
        "username": "ada",
        "email": "ada@example.com",
        "phone": "+44 20 7946 0000",
        "street": "12 St James's Square",
        "city": "London",
        "zipcode": "SW1Y 4JH",
        "state": "Greater London",
    }


@pytest.fixture
def client(
    storage: UserStorage, external_service: ExternalUserService
) -> Generator[TestClient]:
    """Yield a TestClient whose dependencies use the test store and a mocked external source."""
    with TestClient(app) as test_client:
        app.state.app_dependencies = ApplicationDependencies(
            user_storage=storage,
            external_user_service=external_service,
            directory_service=UserDirectoryService(storage, external_service),
        )
        yield test_client
