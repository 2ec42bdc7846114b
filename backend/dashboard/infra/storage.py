"""Synchronous key-value storage backing the dashboard's persisted state.

Every collection and the signed-in principal live under a fixed string key,
serialized as a JSON document. Writes overwrite the whole value; concurrent
writers are not coordinated (last writer wins).

Backends:
- MemoryStorage: dict-backed, lost on restart
- SqlStorage: one row per key in ``storage_items`` via SQLAlchemy
- RedisStorage: one Redis string per key, namespaced by a prefix
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from redis import Redis, RedisError
from sqlalchemy import create_engine, delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from ..config import Settings
from ..errors import StorageError
from ..models import Base, StorageItem

logger = logging.getLogger("dashboard.storage")


class KeyValueStorage(ABC):
    """Abstract base for storage backends."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove ``key``. Removing an absent key is a no-op."""

    @abstractmethod
    def keys(self) -> list[str]:
        """Return every stored key."""

    def clear(self) -> None:
        for key in self.keys():
            self.remove_item(key)

    def close(self) -> None:
        """Release backend resources."""


class MemoryStorage(KeyValueStorage):
    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()


def _is_in_memory_sqlite(url: str) -> bool:
    return url in {"sqlite://", "sqlite:///:memory:"}


def create_storage_engine(database_url: str, echo: bool = False) -> Engine:
    if _is_in_memory_sqlite(database_url):
        # One shared connection, otherwise every checkout sees an empty database
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, echo=echo, pool_pre_ping=True)


class SqlStorage(KeyValueStorage):
    def __init__(self, engine: Engine):
        self._engine = engine
        Base.metadata.create_all(engine)

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False) -> "SqlStorage":
        return cls(create_storage_engine(database_url, echo=echo))

    def _insert_for(self):
        if self._engine.dialect.name == "sqlite":
            return sqlite_insert
        return pg_insert

    def _run(self, operation: str, key: str | None, fn):
        try:
            with Session(self._engine, expire_on_commit=False) as session:
                result = fn(session)
                session.commit()
                return result
        except SQLAlchemyError as exc:
            logger.error(
                "SQL storage operation failed operation=%s key=%s error=%s",
                operation,
                key,
                exc,
            )
            raise StorageError(operation, str(exc)) from exc

    def get_item(self, key: str) -> str | None:
        return self._run(
            "GET",
            key,
            lambda session: session.execute(
                select(StorageItem.value).where(StorageItem.key == key)
            ).scalar_one_or_none(),
        )

    def set_item(self, key: str, value: str) -> None:
        insert_fn = self._insert_for()
        stmt = insert_fn(StorageItem).values(key=key, value=value)
        stmt = stmt.on_conflict_do_update(
            index_elements=["key"],
            set_={"value": stmt.excluded["value"], "updated_at": func.now()},
        )
        self._run("SET", key, lambda session: session.execute(stmt))

    def remove_item(self, key: str) -> None:
        self._run(
            "DEL",
            key,
            lambda session: session.execute(delete(StorageItem).where(StorageItem.key == key)),
        )

    def keys(self) -> list[str]:
        return self._run(
            "KEYS",
            None,
            lambda session: list(session.execute(select(StorageItem.key)).scalars().all()),
        )

    def clear(self) -> None:
        self._run("CLEAR", None, lambda session: session.execute(delete(StorageItem)))

    def close(self) -> None:
        self._engine.dispose()


class RedisStorage(KeyValueStorage):
    def __init__(self, client: Redis, key_prefix: str = "dashboard:"):
        self._redis = client
        self._prefix = key_prefix

    @classmethod
    def from_url(cls, redis_url: str, key_prefix: str = "dashboard:") -> "RedisStorage":
        return cls(Redis.from_url(redis_url, decode_responses=True), key_prefix=key_prefix)

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def _fail(self, operation: str, key: str | None, exc: RedisError) -> StorageError:
        logger.error(
            "Redis operation failed operation=%s key=%s error=%s",
            operation,
            key,
            exc,
        )
        return StorageError(operation, str(exc))

    def get_item(self, key: str) -> str | None:
        try:
            return self._redis.get(self._key(key))
        except RedisError as exc:
            raise self._fail("GET", key, exc) from exc

    def set_item(self, key: str, value: str) -> None:
        try:
            self._redis.set(self._key(key), value)
        except RedisError as exc:
            raise self._fail("SET", key, exc) from exc

    def remove_item(self, key: str) -> None:
        try:
            self._redis.delete(self._key(key))
        except RedisError as exc:
            raise self._fail("DEL", key, exc) from exc

    def keys(self) -> list[str]:
        try:
            return [
                name[len(self._prefix):]
                for name in self._redis.scan_iter(match=f"{self._prefix}*")
            ]
        except RedisError as exc:
            raise self._fail("SCAN", None, exc) from exc

    def close(self) -> None:
        self._redis.close()


def create_storage(settings: Settings) -> KeyValueStorage:
    """Build the backend selected by ``settings.storage_backend``."""
    backend = settings.storage_backend
    if backend == "memory":
        storage: KeyValueStorage = MemoryStorage()
    elif backend == "sql":
        storage = SqlStorage.from_url(settings.database_url, echo=settings.debug)
    elif backend == "redis":
        storage = RedisStorage.from_url(settings.redis_url, key_prefix=settings.redis_key_prefix)
    else:
        raise ValueError(f"Unknown storage backend '{backend}'")
    logger.info("Storage backend initialised backend=%s", backend)
    return storage
