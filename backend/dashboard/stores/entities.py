"""The eleven entity kinds and their stores."""
from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from datetime import date
from typing import Any, Final

from ..auth.rbac_contract import CRUD_RESOURCES, SYSTEM_ROLES
from ..errors import ConflictError, ValidationError
from ..infra.storage import KeyValueStorage
from ..schemas import records
from ..schemas.records import StoredRecord
from . import seeds
from .base import EntityKind, RecordStore, random_id, utc_today


def round2(value: float) -> float:
    return round(value * 100) / 100


def slugify(name: str) -> str:
    return re.sub(r"\s+", "-", name.strip().lower())


class PayrollStore(RecordStore):
    """``netPay`` is derived from ``grossPay - deductions`` and never accepted from callers."""

    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        fields["net_pay"] = round2(fields["gross_pay"] - fields["deductions"])
        return fields

    def prepare_update(
        self, current: StoredRecord, merged: dict[str, Any], changes: dict[str, Any]
    ) -> dict[str, Any]:
        if "gross_pay" in changes or "deductions" in changes:
            merged["net_pay"] = round2(merged["gross_pay"] - merged["deductions"])
        return merged


class RoleStore(RecordStore):
    """Role ids are slugs of the role name; the system roles cannot be deleted."""

    def new_id(self, fields: Mapping[str, Any]) -> str:
        role_id = slugify(fields["name"])
        if not role_id:
            raise ValidationError("Role name must contain at least one non-space character")
        if self.get_by_id(role_id) is not None:
            raise ConflictError(f"Role '{role_id}' already exists")
        return role_id

    def delete(self, record_id: str) -> None:
        if record_id in SYSTEM_ROLES:
            raise ConflictError("Cannot delete system roles")
        super().delete(record_id)


USERS = EntityKind(
    name="users",
    path="users",
    storage_key="adminDashboardUsers",
    record_model=records.UserRecord,
    create_model=records.UserCreate,
    update_model=records.UserUpdate,
    seed=seeds.SEED_USERS,
    label="User",
    label_plural="users",
    id_length=9,
)

ROLES = EntityKind(
    name="roles",
    path="roles",
    storage_key="adminDashboardRoles",
    record_model=records.RoleRecord,
    create_model=records.RoleCreate,
    update_model=records.RoleUpdate,
    seed=seeds.SEED_ROLES,
    label="Role",
    label_plural="roles",
)

ASSETS = EntityKind(
    name="assets",
    path="assets",
    storage_key="adminDashboardAssets",
    record_model=records.AssetRecord,
    create_model=records.AssetCreate,
    update_model=records.AssetUpdate,
    seed=seeds.SEED_ASSETS,
    label="Asset",
    label_plural="assets",
)

CONTRACTS = EntityKind(
    name="contracts",
    path="contracts",
    storage_key="adminDashboardContracts",
    record_model=records.ContractRecord,
    create_model=records.ContractCreate,
    update_model=records.ContractUpdate,
    seed=seeds.SEED_CONTRACTS,
    label="Contract",
    label_plural="contracts",
)

EMAILS = EntityKind(
    name="emails",
    path="emails",
    storage_key="adminDashboardEmails",
    record_model=records.EmailAccountRecord,
    create_model=records.EmailAccountCreate,
    update_model=records.EmailAccountUpdate,
    seed=seeds.SEED_EMAILS,
    label="Email account",
    label_plural="email accounts",
)

PAYROLL = EntityKind(
    name="payroll",
    path="payroll",
    storage_key="adminDashboardPayrolls",
    record_model=records.PayrollRecord,
    create_model=records.PayrollCreate,
    update_model=records.PayrollUpdate,
    seed=seeds.SEED_PAYROLL,
    label="Payroll record",
    label_plural="payroll records",
)

TICKETS = EntityKind(
    name="tickets",
    path="tickets",
    storage_key="adminDashboardTickets",
    record_model=records.TicketRecord,
    create_model=records.TicketCreate,
    update_model=records.TicketUpdate,
    seed=seeds.SEED_TICKETS,
    label="Ticket",
    label_plural="tickets",
)

CHANGE_REQUESTS = EntityKind(
    name="changeRequests",
    path="change-requests",
    storage_key="adminDashboardChangeRequests",
    record_model=records.ChangeRequestRecord,
    create_model=records.ChangeRequestCreate,
    update_model=records.ChangeRequestUpdate,
    seed=seeds.SEED_CHANGE_REQUESTS,
    label="Change request",
    label_plural="change requests",
)

ATTENDANCE = EntityKind(
    name="attendance",
    path="attendance",
    storage_key="adminDashboardAttendance",
    record_model=records.AttendanceRecord,
    create_model=records.AttendanceCreate,
    update_model=records.AttendanceUpdate,
    seed=seeds.SEED_ATTENDANCE,
    label="Attendance record",
    label_plural="attendance records",
)

KPI = EntityKind(
    name="kpi",
    path="kpi",
    storage_key="adminDashboardKPIs",
    record_model=records.KPIRecord,
    create_model=records.KPICreate,
    update_model=records.KPIUpdate,
    seed=seeds.SEED_KPIS,
    label="KPI",
    label_plural="KPIs",
)

OKR = EntityKind(
    name="okr",
    path="okr",
    storage_key="adminDashboardOKRs",
    record_model=records.OKRRecord,
    create_model=records.OKRCreate,
    update_model=records.OKRUpdate,
    seed=seeds.SEED_OKRS,
    label="OKR",
    label_plural="OKRs",
)

ENTITY_KINDS: Final[dict[str, EntityKind]] = {
    kind.name: kind
    for kind in (
        USERS,
        ROLES,
        ASSETS,
        CONTRACTS,
        EMAILS,
        PAYROLL,
        TICKETS,
        CHANGE_REQUESTS,
        ATTENDANCE,
        KPI,
        OKR,
    )
}

STORE_CLASSES: Final[dict[str, type[RecordStore]]] = {
    PAYROLL.name: PayrollStore,
    ROLES.name: RoleStore,
}

if set(ENTITY_KINDS) != set(CRUD_RESOURCES):
    raise RuntimeError(
        f"Entity kinds out of sync with permission resources: {sorted(set(ENTITY_KINDS) ^ set(CRUD_RESOURCES))}"
    )


def build_store(
    storage: KeyValueStorage,
    kind: EntityKind,
    *,
    clock: Callable[[], date] = utc_today,
    id_factory: Callable[[int], str] = random_id,
) -> RecordStore:
    store_class = STORE_CLASSES.get(kind.name, RecordStore)
    return store_class(storage, kind, clock=clock, id_factory=id_factory)


def build_stores(
    storage: KeyValueStorage,
    *,
    clock: Callable[[], date] = utc_today,
    id_factory: Callable[[int], str] = random_id,
) -> dict[str, RecordStore]:
    """Load or seed every collection, keyed by entity kind name."""
    return {
        name: build_store(storage, kind, clock=clock, id_factory=id_factory)
        for name, kind in ENTITY_KINDS.items()
    }
