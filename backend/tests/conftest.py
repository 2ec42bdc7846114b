"""Shared test fixtures and configuration."""
import os

# Module-level app creation reads the environment on import
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:5173")
os.environ.setdefault("STORAGE_BACKEND", "memory")

from datetime import date
from itertools import count

import pytest
from fastapi.testclient import TestClient

from dashboard.config import Settings, reset_settings
from dashboard.infra.storage import MemoryStorage
from dashboard.main import create_app

TODAY = date(2025, 9, 10)


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def fixed_clock():
    return lambda: TODAY


@pytest.fixture
def sequential_ids():
    """Id factory yielding id0001, id0002, ... regardless of requested length."""
    counter = count(1)
    return lambda length: f"id{next(counter):04d}"


@pytest.fixture
def settings() -> Settings:
    return Settings(storage_backend="memory", default_page_size=10)


@pytest.fixture
def client(settings: Settings, storage: MemoryStorage):
    app = create_app(settings=settings, storage=storage)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(client: TestClient):
    def _login(email: str, password: str) -> dict:
        response = client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.json()

    return _login


@pytest.fixture
def as_admin(login):
    return login("admin@example.com", "admin123")


@pytest.fixture
def as_manager(login):
    return login("manager@example.com", "manager123")


@pytest.fixture
def as_user(login):
    return login("user@example.com", "user123")
