"""Generic record store over one key-value storage slot.

One instance per entity kind. The whole collection is kept in memory, and
every mutation writes the full collection back to storage as a JSON array
(last writer wins; other processes sharing the slot are not coordinated).
"""
from __future__ import annotations

import json
import logging
import secrets
import string
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..errors import ValidationError
from ..infra.storage import KeyValueStorage
from ..schemas.records import StoredRecord

logger = logging.getLogger("dashboard.stores")

ID_ALPHABET = string.digits + string.ascii_lowercase
IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


@dataclass(frozen=True)
class EntityKind:
    """Configuration for one record collection."""

    name: str  # permission resource, e.g. "changeRequests"
    path: str  # URL segment, e.g. "change-requests"
    storage_key: str
    record_model: type[StoredRecord]
    create_model: type[BaseModel]
    update_model: type[BaseModel]
    seed: tuple[Mapping[str, Any], ...]
    label: str
    label_plural: str
    id_length: int = 8


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def random_id(length: int = 8) -> str:
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def _validation_details(exc: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]


class RecordStore:
    def __init__(
        self,
        storage: KeyValueStorage,
        kind: EntityKind,
        *,
        clock: Callable[[], date] = utc_today,
        id_factory: Callable[[int], str] = random_id,
    ):
        self._storage = storage
        self.kind = kind
        self._clock = clock
        self._id_factory = id_factory
        self._records: list[StoredRecord] = self._load_or_seed()

    # ------------------------------------------------------------------
    # persistence
    # ------------------------------------------------------------------

    def _parse(self, raw: str) -> list[StoredRecord]:
        payload = json.loads(raw)
        if not isinstance(payload, list):
            raise ValueError(f"expected a JSON array, got {type(payload).__name__}")
        return [self.kind.record_model.model_validate(item) for item in payload]

    def _seed_records(self) -> list[StoredRecord]:
        return [self.kind.record_model.model_validate(item) for item in self.kind.seed]

    def _load_or_seed(self) -> list[StoredRecord]:
        raw = self._storage.get_item(self.kind.storage_key)
        if raw is not None:
            try:
                return self._parse(raw)
            except (ValueError, PydanticValidationError) as exc:
                # pydantic's ValidationError and json's JSONDecodeError are both ValueErrors
                logger.warning(
                    "Reseeding corrupted collection kind=%s key=%s error=%s",
                    self.kind.name,
                    self.kind.storage_key,
                    exc,
                )

        records = self._seed_records()
        self._write(records)
        return records

    def _write(self, records: list[StoredRecord]) -> None:
        self._storage.set_item(
            self.kind.storage_key,
            json.dumps([record.to_storage() for record in records]),
        )

    def _save(self, records: list[StoredRecord]) -> None:
        self._write(records)
        self._records = records

    def reload(self) -> None:
        """Re-read the slot, picking up writes made by other processes."""
        self._records = self._load_or_seed()

    def reseed(self) -> None:
        self._save(self._seed_records())

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def list(self) -> list[StoredRecord]:
        return list(self._records)

    def rows(self) -> list[dict[str, Any]]:
        """Records as camelCase mappings, in collection order."""
        return [record.to_storage() for record in self._records]

    def count(self) -> int:
        return len(self._records)

    def get_by_id(self, record_id: str) -> StoredRecord | None:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    # ------------------------------------------------------------------
    # mutations
    # ------------------------------------------------------------------

    def _coerce(self, model: type[BaseModel], payload: BaseModel | Mapping[str, Any]) -> BaseModel:
        if isinstance(payload, model):
            return payload
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(exclude_unset=True)
        try:
            return model.model_validate(payload)
        except PydanticValidationError as exc:
            raise ValidationError(
                f"Invalid {self.kind.label} data",
                details=_validation_details(exc),
            ) from exc

    def _validate_record(self, fields: dict[str, Any]) -> StoredRecord:
        try:
            return self.kind.record_model.model_validate(fields)
        except PydanticValidationError as exc:
            raise ValidationError(
                f"Invalid {self.kind.label} data",
                details=_validation_details(exc),
            ) from exc

    def new_id(self, fields: Mapping[str, Any]) -> str:
        existing = {record.id for record in self._records}
        record_id = self._id_factory(self.kind.id_length)
        while record_id in existing:
            record_id = self._id_factory(self.kind.id_length)
        return record_id

    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Hook for derived fields on create."""
        return fields

    def prepare_update(
        self, current: StoredRecord, merged: dict[str, Any], changes: dict[str, Any]
    ) -> dict[str, Any]:
        """Hook for derived fields on update."""
        return merged

    def create(self, payload: BaseModel | Mapping[str, Any]) -> StoredRecord:
        data = self._coerce(self.kind.create_model, payload)
        fields = data.model_dump()
        fields["id"] = self.new_id(fields)
        fields["created_at"] = self._clock().isoformat()
        record = self._validate_record(self.prepare_create(fields))

        self._save([*self._records, record])
        logger.info("Record created kind=%s id=%s", self.kind.name, record.id)
        return record

    def update(
        self, record_id: str, payload: BaseModel | Mapping[str, Any]
    ) -> StoredRecord | None:
        """Merge the supplied fields into the record; None when the id is unknown."""
        current = self.get_by_id(record_id)
        if current is None:
            logger.info("Update skipped, record not found kind=%s id=%s", self.kind.name, record_id)
            return None

        data = self._coerce(self.kind.update_model, payload)
        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if field not in IMMUTABLE_FIELDS
        }
        # explicit nulls for required fields fail here, before any derived field is computed
        merged = self._validate_record({**current.model_dump(), **changes}).model_dump()
        updated = self._validate_record(self.prepare_update(current, merged, changes))

        self._save([updated if record.id == record_id else record for record in self._records])
        logger.info(
            "Record updated kind=%s id=%s fields=%s",
            self.kind.name,
            record_id,
            sorted(changes),
        )
        return updated

    def delete(self, record_id: str) -> None:
        """Remove the record. An unknown id still rewrites the unchanged collection."""
        before = len(self._records)
        remaining = [record for record in self._records if record.id != record_id]
        self._save(remaining)
        if len(remaining) == before:
            logger.info("Delete skipped, record not found kind=%s id=%s", self.kind.name, record_id)
        else:
            logger.info("Record deleted kind=%s id=%s", self.kind.name, record_id)
