import json
import os
import threading
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()

STORAGE_BACKENDS = frozenset({"memory", "sql", "redis"})


def _parse_allowed_origins(raw: str) -> list[str] | None:
    """Parse ALLOWED_ORIGINS given as CSV or as a JSON array.

    Returns None when the variable is empty so the caller can use its default.
    Credentialed requests rule out the ``*`` wildcard.
    """
    if not raw:
        return None

    if raw.startswith("["):
        try:
            parsed_list = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f"ALLOWED_ORIGINS JSON is malformed: {exc}") from exc
        if not isinstance(parsed_list, list):
            raise ValueError("ALLOWED_ORIGINS JSON must be an array")
        candidates = [item for item in parsed_list if isinstance(item, str)]
    else:
        candidates = raw.split(",")

    origins = [origin.strip() for origin in candidates if origin.strip()]
    if not origins:
        raise ValueError("ALLOWED_ORIGINS must contain at least one origin")
    if "*" in origins:
        raise ValueError("ALLOWED_ORIGINS cannot contain '*' when credentialed requests are used")

    invalid = [
        origin for origin in origins
        if urlparse(origin).scheme not in {"http", "https"} or not urlparse(origin).netloc
    ]
    if invalid:
        raise ValueError(f"ALLOWED_ORIGINS must contain valid http/https origins with host: {invalid}")
    return origins


def _positive_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default)).strip()
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be greater than 0")
    return value


class Settings(BaseModel):
    app_name: str = Field(default="Admin Dashboard")
    debug: bool = Field(default=False)
    allowed_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    storage_backend: str = Field(default="sql")
    database_url: str = Field(default="sqlite:///./dashboard.db")
    redis_url: str = Field(default="redis://localhost:6379/0")
    redis_key_prefix: str = Field(default="dashboard:")
    default_page_size: int = Field(default=10)

    @classmethod
    def from_env(cls) -> "Settings":
        allowed_origins = _parse_allowed_origins(os.getenv("ALLOWED_ORIGINS", "").strip())
        if allowed_origins is None:
            allowed_origins = cls.model_fields["allowed_origins"].default_factory()

        storage_backend = os.getenv(
            "STORAGE_BACKEND", cls.model_fields["storage_backend"].default
        ).strip().lower()
        if storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"STORAGE_BACKEND must be one of: {', '.join(sorted(STORAGE_BACKENDS))}"
            )

        database_url = os.getenv("DATABASE_URL", cls.model_fields["database_url"].default).strip()
        if storage_backend == "sql" and not urlparse(database_url).scheme:
            raise ValueError("DATABASE_URL must be a valid SQLAlchemy URL")

        redis_url = os.getenv("REDIS_URL", cls.model_fields["redis_url"].default).strip()
        if storage_backend == "redis" and urlparse(redis_url).scheme not in {"redis", "rediss", "unix"}:
            raise ValueError("REDIS_URL must start with 'redis://', 'rediss://' or 'unix://'")

        default_page_size = _positive_int(
            "DEFAULT_PAGE_SIZE", cls.model_fields["default_page_size"].default
        )

        return cls(
            app_name=os.getenv("APP_NAME", cls.model_fields["app_name"].default),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            allowed_origins=allowed_origins,
            storage_backend=storage_backend,
            database_url=database_url,
            redis_url=redis_url,
            redis_key_prefix=os.getenv(
                "REDIS_KEY_PREFIX", cls.model_fields["redis_key_prefix"].default
            ),
            default_page_size=default_page_size,
        )


_settings_instance: Settings | None = None
_settings_lock = threading.Lock()


def get_settings() -> Settings:
    """Get settings instance, creating it on first access.

    Settings validation happens when first accessed (typically during startup),
    so the module can be imported without a complete environment.

    Raises:
        ValueError: If environment variables are invalid
    """
    global _settings_instance

    if _settings_instance is not None:
        return _settings_instance

    with _settings_lock:
        if _settings_instance is None:
            _settings_instance = Settings.from_env()

    return _settings_instance


def reset_settings() -> None:
    """Drop the cached settings so the next access re-reads the environment."""
    global _settings_instance
    with _settings_lock:
        _settings_instance = None
