import json

import pytest

from dashboard.auth.session import SESSION_STORAGE_KEY
from dashboard.infra.storage import SqlStorage
from scripts import seed_dashboard


@pytest.fixture
def database_url(tmp_path, monkeypatch: pytest.MonkeyPatch) -> str:
    url = f"sqlite:///{tmp_path / 'seed.db'}"
    monkeypatch.setenv("STORAGE_BACKEND", "sql")
    monkeypatch.setenv("DATABASE_URL", url)
    return url


def test_seed_fills_empty_storage(database_url):
    counts = seed_dashboard.seed()

    assert counts["users"] == 5
    assert counts["tickets"] == 4
    storage = SqlStorage.from_url(database_url)
    assert len(json.loads(storage.get_item("adminDashboardRoles"))) == 3
    storage.close()


def test_seed_keeps_existing_data_unless_reset(database_url):
    storage = SqlStorage.from_url(database_url)
    storage.set_item("adminDashboardTickets", "[]")
    storage.close()

    assert seed_dashboard.seed()["tickets"] == 0
    assert seed_dashboard.seed(reset=True)["tickets"] == 4


def test_logout_flag_clears_session(database_url):
    storage = SqlStorage.from_url(database_url)
    storage.set_item(SESSION_STORAGE_KEY, '{"id": "1"}')
    storage.close()

    assert seed_dashboard.main(["--logout"]) == 0

    storage = SqlStorage.from_url(database_url)
    assert storage.get_item(SESSION_STORAGE_KEY) is None
    storage.close()
