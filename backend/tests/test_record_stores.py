"""Tests for the generic record store and the entity-specific rules."""
import json

import pytest

from dashboard.errors import ConflictError, ValidationError
from dashboard.infra.storage import MemoryStorage
from dashboard.stores.base import RecordStore, random_id
from dashboard.stores.entities import (
    ATTENDANCE,
    ENTITY_KINDS,
    PAYROLL,
    ROLES,
    USERS,
    PayrollStore,
    RoleStore,
    build_store,
    build_stores,
    round2,
    slugify,
)


class TestLoadOrSeed:
    def test_empty_slot_is_seeded_and_written(self, storage):
        store = build_store(storage, ATTENDANCE)

        assert [record.id for record in store.list()] == ["a-1"]
        persisted = json.loads(storage.get_item("adminDashboardAttendance"))
        assert persisted[0]["employeeName"] == "Admin User"
        assert persisted[0]["status"] == "late"

    def test_existing_slot_is_used(self):
        storage = MemoryStorage(
            {
                "adminDashboardAssets": json.dumps(
                    [
                        {
                            "id": "x-1",
                            "name": "Printer",
                            "category": "Hardware",
                            "status": "maintenance",
                            "owner": "Ops",
                            "createdAt": "2025-01-01",
                        }
                    ]
                )
            }
        )
        store = build_store(storage, ENTITY_KINDS["assets"])
        assert [record.id for record in store.list()] == ["x-1"]

    def test_empty_array_is_not_reseeded(self):
        storage = MemoryStorage({"adminDashboardTickets": "[]"})
        store = build_store(storage, ENTITY_KINDS["tickets"])
        assert store.count() == 0

    @pytest.mark.parametrize(
        "raw",
        [
            "{not json",
            '{"id": "a-1"}',
            '[{"id": "a-1"}]',
            '[{"id": "a-1", "employeeName": "X", "employeeEmail": "x@example.com", '
            '"date": "2025-09-05", "checkIn": "9am", "checkOut": "17:00", "status": "late", '
            '"createdAt": "2025-09-05"}]',
        ],
    )
    def test_corrupted_slot_is_reseeded(self, raw, caplog):
        storage = MemoryStorage({"adminDashboardAttendance": raw})

        with caplog.at_level("WARNING"):
            store = build_store(storage, ATTENDANCE)

        assert [record.id for record in store.list()] == ["a-1"]
        assert json.loads(storage.get_item("adminDashboardAttendance"))[0]["id"] == "a-1"
        assert any("Reseeding corrupted collection" in record.getMessage() for record in caplog.records)

    def test_reload_picks_up_other_writers(self, storage):
        reader = build_store(storage, ENTITY_KINDS["kpi"])
        writer = build_store(storage, ENTITY_KINDS["kpi"])
        writer.create({"name": "Churn", "target": 2, "unit": "%"})

        assert reader.count() == 1
        reader.reload()
        assert reader.count() == 2

    def test_every_kind_seeds(self, storage):
        stores = build_stores(storage)
        assert set(stores) == set(ENTITY_KINDS)
        assert all(store.count() > 0 for store in stores.values())
        assert isinstance(stores["payroll"], PayrollStore)
        assert isinstance(stores["roles"], RoleStore)


class TestCreate:
    def test_attendance_create_scenario(self, storage, fixed_clock):
        store = build_store(storage, ATTENDANCE, clock=fixed_clock)

        record = store.create(
            {
                "employeeName": "Regular User",
                "employeeEmail": "user@example.com",
                "date": "2025-09-10",
                "checkIn": "08:55",
                "checkOut": "17:00",
                "status": "present",
            }
        )

        assert record.id != "a-1"
        assert record.created_at == "2025-09-10"
        assert store.count() == 2
        assert len(json.loads(storage.get_item("adminDashboardAttendance"))) == 2

    def test_real_clock_stamps_iso_date(self, storage):
        store = build_store(storage, ATTENDANCE)
        record = store.create(
            {
                "employeeName": "Regular User",
                "employeeEmail": "user@example.com",
                "date": "2025-09-10",
                "checkIn": "08:55",
                "checkOut": "17:00",
            }
        )
        assert len(record.created_at) == 10
        assert record.created_at[4] == "-" and record.created_at[7] == "-"

    def test_caller_cannot_supply_id_or_created_at(self, storage, fixed_clock):
        store = build_store(storage, ENTITY_KINDS["assets"], clock=fixed_clock)
        record = store.create(
            {
                "id": "asset-1",
                "createdAt": "1999-01-01",
                "name": "Monitor",
                "category": "Hardware",
                "owner": "Admin User",
            }
        )
        assert record.id != "asset-1"
        assert record.created_at == "2025-09-10"

    def test_id_collision_is_retried(self, storage):
        ids = iter(["asset-1", "asset-2", "fresh-id"])
        store = build_store(storage, ENTITY_KINDS["assets"], id_factory=lambda length: next(ids))
        record = store.create({"name": "Monitor", "category": "Hardware", "owner": "Ops"})
        assert record.id == "fresh-id"

    def test_records_append_in_creation_order(self, storage, sequential_ids):
        store = build_store(storage, ENTITY_KINDS["okr"], id_factory=sequential_ids)
        store.create({"objective": "Ship v2", "quarter": "Q4 2025"})
        store.create({"objective": "Hire", "quarter": "Q4 2025", "keyResults": ["2 engineers"]})

        assert [record.id for record in store.list()] == ["okr-1", "id0001", "id0002"]
        assert store.get_by_id("id0002").key_results == ["2 engineers"]

    def test_user_ids_are_longer(self):
        assert USERS.id_length == 9

    def test_random_id_shape(self):
        value = random_id(8)
        assert len(value) == 8
        assert value.isalnum() and value == value.lower()

    def test_invalid_payload_raises_validation_error(self, storage):
        store = build_store(storage, ENTITY_KINDS["tickets"])
        with pytest.raises(ValidationError) as exc:
            store.create({"title": "", "requester": "x", "priority": "urgent"})
        assert exc.value.details
        assert store.count() == 4


class TestUpdate:
    def test_merges_supplied_fields_only(self, storage):
        store = build_store(storage, ENTITY_KINDS["tickets"])
        updated = store.update("t-1", {"status": "completed"})

        assert updated.status == "completed"
        assert updated.title == "Cannot login"
        assert store.get_by_id("t-1").status == "completed"

    def test_id_and_created_at_immutable(self, storage):
        store = build_store(storage, ENTITY_KINDS["tickets"])
        updated = store.update("t-1", {"id": "t-99", "createdAt": "2000-01-01", "title": "Renamed"})
        assert updated.id == "t-1"
        assert updated.created_at == "2025-09-01"

    def test_unknown_id_returns_none_without_writing(self, storage):
        store = build_store(storage, ENTITY_KINDS["tickets"])
        before = storage.get_item("adminDashboardTickets")

        assert store.update("missing", {"status": "completed"}) is None
        assert storage.get_item("adminDashboardTickets") == before

    @pytest.mark.parametrize("field", ["name", "email", "role"])
    def test_explicit_null_for_required_field_is_rejected(self, storage, field):
        store = build_store(storage, USERS)
        before = storage.get_item("adminDashboardUsers")

        with pytest.raises(ValidationError):
            store.update("3", {field: None})

        assert storage.get_item("adminDashboardUsers") == before
        assert getattr(store.get_by_id("3"), field) is not None


class TestDelete:
    def test_delete_removes_record(self, storage):
        store = build_store(storage, USERS)
        store.delete("3")
        assert store.get_by_id("3") is None
        assert "3" not in [user["id"] for user in json.loads(storage.get_item("adminDashboardUsers"))]

    def test_delete_unknown_id_is_noop(self, storage):
        store = build_store(storage, USERS)
        store.delete("missing")
        assert store.count() == 5


class TestPayroll:
    def test_round2(self):
        assert round2(4500) == 4500
        assert round2(10.123) == 10.12

    def test_net_pay_computed_on_create(self, storage):
        store = build_store(storage, PAYROLL)
        record = store.create(
            {
                "employeeName": "Regular User",
                "employeeEmail": "user@example.com",
                "period": "2025-09",
                "grossPay": 3200.55,
                "deductions": 200.3,
            }
        )
        assert record.net_pay == 3000.25

    def test_net_pay_not_accepted_from_caller(self, storage):
        store = build_store(storage, PAYROLL)
        record = store.create(
            {
                "employeeName": "Regular User",
                "employeeEmail": "user@example.com",
                "period": "2025-09",
                "grossPay": 100,
                "deductions": 10,
                "netPay": 1_000_000,
            }
        )
        assert record.net_pay == 90

    def test_gross_pay_change_recomputes(self, storage):
        store = build_store(storage, PAYROLL)
        assert store.update("p-1", {"grossPay": 6000}).net_pay == 5500

    def test_deductions_change_recomputes(self, storage):
        store = build_store(storage, PAYROLL)
        assert store.update("p-1", {"deductions": 750.5}).net_pay == 4249.5

    def test_unrelated_change_keeps_net_pay(self, storage):
        store = build_store(storage, PAYROLL)
        updated = store.update("p-1", {"status": "failed", "netPay": 1})
        assert updated.status == "failed"
        assert updated.net_pay == 4500

    @pytest.mark.parametrize("payload", [{"grossPay": None}, {"deductions": None}])
    def test_null_pay_amount_is_rejected(self, storage, payload):
        store = build_store(storage, PAYROLL)
        before = storage.get_item("adminDashboardPayrolls")

        with pytest.raises(ValidationError):
            store.update("p-1", payload)

        assert store.get_by_id("p-1").net_pay == 4500
        assert storage.get_item("adminDashboardPayrolls") == before


class TestRoles:
    def test_slugify(self):
        assert slugify("  Finance   Team ") == "finance-team"

    def test_role_id_is_slug(self, storage):
        store = build_store(storage, ROLES)
        role = store.create({"name": "Finance Team", "permissions": ["payroll.read"]})
        assert role.id == "finance-team"

    def test_duplicate_slug_conflicts(self, storage):
        store = build_store(storage, ROLES)
        with pytest.raises(ConflictError):
            store.create({"name": "Admin"})
        assert store.count() == 3

    @pytest.mark.parametrize("role_id", ["admin", "manager", "user"])
    def test_system_roles_cannot_be_deleted(self, storage, role_id):
        store = build_store(storage, ROLES)
        with pytest.raises(ConflictError, match="Cannot delete system roles"):
            store.delete(role_id)
        assert store.get_by_id(role_id) is not None

    def test_custom_role_can_be_deleted(self, storage):
        store = build_store(storage, ROLES)
        store.create({"name": "Auditor"})
        store.delete("auditor")
        assert store.get_by_id("auditor") is None

    @pytest.mark.parametrize("permission", ["users.*", "payroll.approve"])
    def test_permissions_must_be_in_catalog(self, storage, permission):
        store = build_store(storage, ROLES)
        with pytest.raises(ValidationError):
            store.create({"name": "Broken", "permissions": [permission]})
        with pytest.raises(ValidationError):
            store.update("user", {"permissions": [permission]})

    def test_seeded_admin_role_lists_catalog(self, storage):
        store = build_store(storage, ROLES)
        assert len(store.get_by_id("admin").permissions) == 47


def test_plain_kinds_use_generic_store(storage):
    assert type(build_store(storage, ENTITY_KINDS["okr"])) is RecordStore
