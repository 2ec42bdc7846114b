import pytest

from dashboard.config import Settings, get_settings, reset_settings

# Tests for Settings.from_env() with different environment values


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that an empty environment yields the documented defaults."""
    for name in (
        "APP_NAME",
        "DEBUG",
        "ALLOWED_ORIGINS",
        "STORAGE_BACKEND",
        "DATABASE_URL",
        "REDIS_URL",
        "REDIS_KEY_PREFIX",
        "DEFAULT_PAGE_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.app_name == "Admin Dashboard"
    assert settings.debug is False
    assert settings.allowed_origins == ["http://localhost:5173"]
    assert settings.storage_backend == "sql"
    assert settings.database_url == "sqlite:///./dashboard.db"
    assert settings.redis_key_prefix == "dashboard:"
    assert settings.default_page_size == 10


def test_allowed_origins_csv_format(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that ALLOWED_ORIGINS can be parsed as CSV."""
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://localhost:3000, http://localhost:8080")

    settings = Settings.from_env()

    assert settings.allowed_origins == ["http://localhost:3000", "http://localhost:8080"]


def test_allowed_origins_json_array_format(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that ALLOWED_ORIGINS can be parsed as JSON array."""
    monkeypatch.setenv("ALLOWED_ORIGINS", '["http://localhost:3000", "https://admin.example.com"]')

    settings = Settings.from_env()

    assert settings.allowed_origins == ["http://localhost:3000", "https://admin.example.com"]


def test_allowed_origins_rejects_wildcard(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that ALLOWED_ORIGINS rejects wildcard when credentials are used."""
    monkeypatch.setenv("ALLOWED_ORIGINS", "*")

    with pytest.raises(ValueError, match=r"cannot contain '\*' when credentialed requests"):
        Settings.from_env()


def test_allowed_origins_rejects_malformed_json(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALLOWED_ORIGINS", '["http://localhost:3000"')

    with pytest.raises(ValueError, match="malformed"):
        Settings.from_env()


def test_allowed_origins_rejects_invalid_origin(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALLOWED_ORIGINS", "localhost:3000")

    with pytest.raises(ValueError, match="valid http/https origins"):
        Settings.from_env()


@pytest.mark.parametrize("backend", ["memory", "SQL", " redis "])
def test_storage_backend_is_normalised(monkeypatch: pytest.MonkeyPatch, backend: str) -> None:
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)
    monkeypatch.setenv("STORAGE_BACKEND", backend)

    assert Settings.from_env().storage_backend == backend.strip().lower()


def test_storage_backend_rejects_unknown(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORAGE_BACKEND", "localstorage")

    with pytest.raises(ValueError, match="STORAGE_BACKEND must be one of"):
        Settings.from_env()


def test_redis_url_scheme_checked_for_redis_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORAGE_BACKEND", "redis")
    monkeypatch.setenv("REDIS_URL", "http://localhost:6379")

    with pytest.raises(ValueError, match="REDIS_URL"):
        Settings.from_env()


@pytest.mark.parametrize("value", ["0", "-5", "ten"])
def test_default_page_size_must_be_positive_integer(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("DEFAULT_PAGE_SIZE", value)

    with pytest.raises(ValueError, match="DEFAULT_PAGE_SIZE"):
        Settings.from_env()


def test_debug_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEBUG", "TRUE")

    assert Settings.from_env().debug is True


def test_get_settings_caches_until_reset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_NAME", "First")
    first = get_settings()
    monkeypatch.setenv("APP_NAME", "Second")

    assert get_settings() is first

    reset_settings()
    assert get_settings().app_name == "Second"
