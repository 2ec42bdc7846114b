"""Record shapes for every entity kind.

For each kind there is a ``*Create`` payload (no id, no createdAt), the stored
record (create fields plus ``id`` and ``createdAt``) and an ``*Update`` payload
where every field is optional.
"""
from typing import Literal

from pydantic import Field, field_validator

from ..auth.rbac_contract import validate_permission
from .base import CamelModel


DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^\d{2}:\d{2}$"

ActiveStatus = Literal["active", "inactive"]
WorkStatus = Literal["pending", "on_process", "review", "completed"]
Level = Literal["low", "medium", "high"]


class StoredRecord(CamelModel):
    id: str = Field(..., min_length=1)
    created_at: str = Field(..., pattern=DATE_PATTERN)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class UserCreate(CamelModel):
    email: str = Field(..., min_length=3, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field(..., min_length=1, max_length=100)
    status: ActiveStatus = "active"
    division: str | None = None
    organization: str | None = None
    position: str | None = None
    department: str | None = None


class UserRecord(StoredRecord, UserCreate):
    pass


class UserUpdate(CamelModel):
    email: str | None = Field(None, min_length=3, max_length=255)
    name: str | None = Field(None, min_length=1, max_length=255)
    role: str | None = Field(None, min_length=1, max_length=100)
    status: ActiveStatus | None = None
    division: str | None = None
    organization: str | None = None
    position: str | None = None
    department: str | None = None


# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------

def _check_permissions(permissions: list[str] | None) -> list[str] | None:
    if permissions is None:
        return None
    return [validate_permission(permission).value for permission in permissions]


class RoleCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(default="", max_length=1000)
    permissions: list[str] = Field(default_factory=list)

    @field_validator("permissions")
    @classmethod
    def validate_permissions(cls, value: list[str] | None) -> list[str] | None:
        return _check_permissions(value)


class RoleRecord(StoredRecord, RoleCreate):
    pass


class RoleUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=1000)
    permissions: list[str] | None = None

    @field_validator("permissions")
    @classmethod
    def validate_permissions(cls, value: list[str] | None) -> list[str] | None:
        return _check_permissions(value)


# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------

AssetStatus = Literal["active", "inactive", "maintenance"]


class AssetCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)
    status: AssetStatus = "active"
    owner: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class AssetRecord(StoredRecord, AssetCreate):
    pass


class AssetUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    category: str | None = Field(None, min_length=1, max_length=100)
    status: AssetStatus | None = None
    owner: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None


# ---------------------------------------------------------------------------
# Contracts
# ---------------------------------------------------------------------------

ContractStatus = Literal["active", "expired", "draft"]
ContractType = Literal["employee", "freelance", "internship", "vendor"]


class ContractCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    party: str = Field(..., min_length=1, max_length=255)
    start_date: str = Field(..., pattern=DATE_PATTERN)
    end_date: str = Field(..., pattern=DATE_PATTERN)
    status: ContractStatus = "draft"
    type: ContractType
    notes: str | None = None


class ContractRecord(StoredRecord, ContractCreate):
    pass


class ContractUpdate(CamelModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    party: str | None = Field(None, min_length=1, max_length=255)
    start_date: str | None = Field(None, pattern=DATE_PATTERN)
    end_date: str | None = Field(None, pattern=DATE_PATTERN)
    status: ContractStatus | None = None
    type: ContractType | None = None
    notes: str | None = None


# ---------------------------------------------------------------------------
# Email accounts
# ---------------------------------------------------------------------------

class EmailAccountCreate(CamelModel):
    address: str = Field(..., min_length=3, max_length=255)
    provider: str = Field(..., min_length=1, max_length=100)
    status: ActiveStatus = "active"
    description: str | None = None


class EmailAccountRecord(StoredRecord, EmailAccountCreate):
    pass


class EmailAccountUpdate(CamelModel):
    address: str | None = Field(None, min_length=3, max_length=255)
    provider: str | None = Field(None, min_length=1, max_length=100)
    status: ActiveStatus | None = None
    description: str | None = None


# ---------------------------------------------------------------------------
# Payroll
# ---------------------------------------------------------------------------

PayrollStatus = Literal["pending", "paid", "failed"]


class PayrollCreate(CamelModel):
    employee_name: str = Field(..., min_length=1, max_length=255)
    employee_email: str = Field(..., min_length=3, max_length=255)
    period: str = Field(..., pattern=r"^\d{4}-\d{2}$")
    gross_pay: float = Field(..., ge=0)
    deductions: float = Field(default=0, ge=0)
    status: PayrollStatus = "pending"
    notes: str | None = None


class PayrollRecord(StoredRecord, PayrollCreate):
    net_pay: float


class PayrollUpdate(CamelModel):
    employee_name: str | None = Field(None, min_length=1, max_length=255)
    employee_email: str | None = Field(None, min_length=3, max_length=255)
    period: str | None = Field(None, pattern=r"^\d{4}-\d{2}$")
    gross_pay: float | None = Field(None, ge=0)
    deductions: float | None = Field(None, ge=0)
    status: PayrollStatus | None = None
    notes: str | None = None


# ---------------------------------------------------------------------------
# Tickets and change requests
# ---------------------------------------------------------------------------

class TicketCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    requester: str = Field(..., min_length=1, max_length=255)
    priority: Level = "medium"
    status: WorkStatus = "pending"
    description: str | None = None


class TicketRecord(StoredRecord, TicketCreate):
    pass


class TicketUpdate(CamelModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    requester: str | None = Field(None, min_length=1, max_length=255)
    priority: Level | None = None
    status: WorkStatus | None = None
    description: str | None = None


class ChangeRequestCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    requester: str = Field(..., min_length=1, max_length=255)
    impact: Level = "medium"
    status: WorkStatus = "pending"
    description: str | None = None


class ChangeRequestRecord(StoredRecord, ChangeRequestCreate):
    pass


class ChangeRequestUpdate(CamelModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    requester: str | None = Field(None, min_length=1, max_length=255)
    impact: Level | None = None
    status: WorkStatus | None = None
    description: str | None = None


# ---------------------------------------------------------------------------
# Attendance
# ---------------------------------------------------------------------------

AttendanceStatus = Literal["present", "absent", "late", "on_leave", "sick"]


class AttendanceCreate(CamelModel):
    employee_name: str = Field(..., min_length=1, max_length=255)
    employee_email: str = Field(..., min_length=3, max_length=255)
    date: str = Field(..., pattern=DATE_PATTERN)
    check_in: str = Field(..., pattern=TIME_PATTERN)
    check_out: str = Field(..., pattern=TIME_PATTERN)
    status: AttendanceStatus = "present"
    notes: str | None = None


class AttendanceRecord(StoredRecord, AttendanceCreate):
    pass


class AttendanceUpdate(CamelModel):
    employee_name: str | None = Field(None, min_length=1, max_length=255)
    employee_email: str | None = Field(None, min_length=3, max_length=255)
    date: str | None = Field(None, pattern=DATE_PATTERN)
    check_in: str | None = Field(None, pattern=TIME_PATTERN)
    check_out: str | None = Field(None, pattern=TIME_PATTERN)
    status: AttendanceStatus | None = None
    notes: str | None = None


# ---------------------------------------------------------------------------
# KPIs and OKRs
# ---------------------------------------------------------------------------

KPIFrequency = Literal["daily", "weekly", "monthly", "quarterly", "yearly"]
KPIStatus = Literal["on_track", "at_risk", "off_track"]


class KPICreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=1000)
    target: float
    current: float = 0
    unit: str = Field(..., min_length=1, max_length=100)
    frequency: KPIFrequency = "monthly"
    status: KPIStatus = "on_track"
    owner: str | None = None


class KPIRecord(StoredRecord, KPICreate):
    pass


class KPIUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    target: float | None = None
    current: float | None = None
    unit: str | None = Field(None, min_length=1, max_length=100)
    frequency: KPIFrequency | None = None
    status: KPIStatus | None = None
    owner: str | None = None


OKRStatus = Literal["not_started", "in_progress", "completed", "cancelled"]


class OKRCreate(CamelModel):
    objective: str = Field(..., min_length=1, max_length=255)
    key_results: list[str] = Field(default_factory=list)
    progress: int = Field(default=0, ge=0, le=100)
    quarter: str = Field(..., min_length=1, max_length=20)
    status: OKRStatus = "not_started"
    owner: str | None = None


class OKRRecord(StoredRecord, OKRCreate):
    pass


class OKRUpdate(CamelModel):
    objective: str | None = Field(None, min_length=1, max_length=255)
    key_results: list[str] | None = None
    progress: int | None = Field(None, ge=0, le=100)
    quarter: str | None = Field(None, min_length=1, max_length=20)
    status: OKRStatus | None = None
    owner: str | None = None
