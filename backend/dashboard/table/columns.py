"""Column definitions for every entity table."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .engine import Column, Record


@dataclass(frozen=True)
class TableSpec:
    columns: tuple[Column, ...]
    search_key: str | None = None
    search_placeholder: str = "Search..."


def _capitalize(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


@dataclass(frozen=True)
class EnumLabel:
    """Renders an enum-like value as words: ``on_leave`` -> ``On Leave``."""

    key: str

    def __call__(self, record: Record) -> str | None:
        value = record.get(self.key)
        if value is None:
            return None
        return _capitalize(str(value).replace("_", " "))


def contract_dates(record: Record) -> str:
    return f"{record.get('startDate')} - {record.get('endDate')}"


def progress_percent(record: Record) -> str:
    return f"{record.get('progress', 0)}%"


def permission_summary(record: Record) -> str:
    permissions = list(record.get("permissions") or [])
    shown = ", ".join(permissions[:4])
    if len(permissions) > 4:
        return f"{shown} +{len(permissions) - 4} more"
    return shown


CREATED = Column("createdAt", "Created", sortable=True)

TABLE_SPECS: Final[dict[str, TableSpec]] = {
    "users": TableSpec(
        columns=(
            Column("name", "Name", sortable=True),
            Column("email", "Email", sortable=True),
            Column("role", "Role", render=EnumLabel("role"), sortable=True),
            Column("status", "Status", sortable=True),
            Column("division", "Division", sortable=True),
            Column("organization", "Organization", sortable=True),
            Column("position", "Position", sortable=True),
            Column("department", "Department", sortable=True),
            CREATED,
        ),
        search_key="name",
        search_placeholder="Search users...",
    ),
    "roles": TableSpec(
        columns=(
            Column("name", "Name", sortable=True),
            Column("description", "Description"),
            Column("permissions", "Permissions", render=permission_summary),
            CREATED,
        ),
        search_key="name",
        search_placeholder="Search roles...",
    ),
    "assets": TableSpec(
        columns=(
            Column("name", "Name", sortable=True),
            Column("category", "Category", sortable=True),
            Column("status", "Status", render=EnumLabel("status"), sortable=True),
            Column("owner", "Owner", sortable=True),
            CREATED,
        ),
        search_key="name",
        search_placeholder="Search assets...",
    ),
    "contracts": TableSpec(
        columns=(
            Column("title", "Title", sortable=True),
            Column("party", "Party", sortable=True),
            Column("dates", "Dates", render=contract_dates),
            Column("status", "Status", render=EnumLabel("status"), sortable=True),
            Column("type", "Type", render=EnumLabel("type"), sortable=True),
            CREATED,
        ),
        search_key="title",
        search_placeholder="Search contracts...",
    ),
    "emails": TableSpec(
        columns=(
            Column("address", "Address", sortable=True),
            Column("provider", "Provider", sortable=True),
            Column("status", "Status", render=EnumLabel("status"), sortable=True),
            CREATED,
        ),
        search_key="address",
        search_placeholder="Search email accounts...",
    ),
    "payroll": TableSpec(
        columns=(
            Column("employeeName", "Employee", sortable=True),
            Column("netPay", "Amount", sortable=True),
            Column("period", "Period", sortable=True),
            Column("status", "Status", render=EnumLabel("status"), sortable=True),
            CREATED,
        ),
        search_key="employeeName",
        search_placeholder="Search payroll records...",
    ),
    "tickets": TableSpec(
        columns=(
            Column("title", "Title", sortable=True),
            Column("priority", "Priority", render=EnumLabel("priority"), sortable=True),
            Column("status", "Status", render=EnumLabel("status"), sortable=True),
            # not a ticket field: always renders the placeholder
            Column("assignee", "Assignee", sortable=True),
            CREATED,
        ),
        search_key="title",
        search_placeholder="Search tickets...",
    ),
    "changeRequests": TableSpec(
        columns=(
            Column("title", "Title", sortable=True),
            Column("impact", "Impact", render=EnumLabel("impact"), sortable=True),
            Column("status", "Status", render=EnumLabel("status"), sortable=True),
            Column("requester", "Requester", sortable=True),
            CREATED,
        ),
        search_key="title",
        search_placeholder="Search change requests...",
    ),
    "attendance": TableSpec(
        columns=(
            Column("employeeName", "Employee", sortable=True),
            Column("date", "Date", sortable=True),
            Column("checkIn", "Check In", sortable=True),
            Column("checkOut", "Check Out", sortable=True),
            Column("status", "Status", render=EnumLabel("status"), sortable=True),
            CREATED,
        ),
        search_key="employeeName",
        search_placeholder="Search attendance records...",
    ),
    "kpi": TableSpec(
        columns=(
            Column("name", "KPI Name", sortable=True),
            Column("target", "Target", sortable=True),
            Column("current", "Current", sortable=True),
            Column("status", "Status", render=EnumLabel("status"), sortable=True),
            Column("frequency", "Frequency", render=EnumLabel("frequency"), sortable=True),
            Column("owner", "Owner", sortable=True),
        ),
        search_key="name",
        search_placeholder="Search KPIs...",
    ),
    "okr": TableSpec(
        columns=(
            Column("objective", "Objective", sortable=True),
            Column("progress", "Progress", render=progress_percent, sortable=True),
            Column("status", "Status", render=EnumLabel("status"), sortable=True),
            Column("quarter", "Quarter", sortable=True),
            Column("owner", "Owner", sortable=True),
        ),
        search_key="objective",
        search_placeholder="Search OKRs...",
    ),
}
