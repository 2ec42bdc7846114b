"""
RBAC Contract - closed permission catalog and static role mappings.

This module is the single source of truth for:
- The permission vocabulary every protected route and action agrees on
- The system roles
- The static role -> permission mapping used for gating decisions

Permissions are opaque tokens compared by exact string equality:
- No hierarchy ("users.read" does not imply anything else)
- No wildcard permissions
- Unknown roles are granted nothing
"""
from __future__ import annotations

from enum import Enum
from typing import Final


# ============================================================================
# PERMISSIONS - CLOSED CATALOG
# ============================================================================

class Permission(str, Enum):
    """
    Every permission string known to the dashboard.

    Members compare and hash equal to their string value, so
    ``"users.read" in {Permission.USERS_READ}`` holds.
    """
    USERS_CREATE = "users.create"
    USERS_READ = "users.read"
    USERS_UPDATE = "users.update"
    USERS_DELETE = "users.delete"

    ROLES_CREATE = "roles.create"
    ROLES_READ = "roles.read"
    ROLES_UPDATE = "roles.update"
    ROLES_DELETE = "roles.delete"

    DASHBOARD_ACCESS = "dashboard.access"

    ASSETS_CREATE = "assets.create"
    ASSETS_READ = "assets.read"
    ASSETS_UPDATE = "assets.update"
    ASSETS_DELETE = "assets.delete"

    CONTRACTS_CREATE = "contracts.create"
    CONTRACTS_READ = "contracts.read"
    CONTRACTS_UPDATE = "contracts.update"
    CONTRACTS_DELETE = "contracts.delete"

    EMAILS_CREATE = "emails.create"
    EMAILS_READ = "emails.read"
    EMAILS_UPDATE = "emails.update"
    EMAILS_DELETE = "emails.delete"

    PAYROLL_CREATE = "payroll.create"
    PAYROLL_READ = "payroll.read"
    PAYROLL_UPDATE = "payroll.update"
    PAYROLL_DELETE = "payroll.delete"

    TICKETS_CREATE = "tickets.create"
    TICKETS_READ = "tickets.read"
    TICKETS_UPDATE = "tickets.update"
    TICKETS_DELETE = "tickets.delete"

    CHANGE_REQUESTS_CREATE = "changeRequests.create"
    CHANGE_REQUESTS_READ = "changeRequests.read"
    CHANGE_REQUESTS_UPDATE = "changeRequests.update"
    CHANGE_REQUESTS_DELETE = "changeRequests.delete"

    ATTENDANCE_CREATE = "attendance.create"
    ATTENDANCE_READ = "attendance.read"
    ATTENDANCE_UPDATE = "attendance.update"
    ATTENDANCE_DELETE = "attendance.delete"

    KPI_CREATE = "kpi.create"
    KPI_READ = "kpi.read"
    KPI_UPDATE = "kpi.update"
    KPI_DELETE = "kpi.delete"

    OKR_CREATE = "okr.create"
    OKR_READ = "okr.read"
    OKR_UPDATE = "okr.update"
    OKR_DELETE = "okr.delete"

    REPORTS_VIEW = "reports.view"
    SETTINGS_MANAGE = "settings.manage"

    @classmethod
    def for_action(cls, resource: str, action: str) -> "Permission":
        """
        Resolve ``<resource>.<action>`` to a catalog member.

        Raises:
            ValueError: If the combination is not in the catalog
        """
        return cls(f"{resource}.{action}")


# Resources that carry the full create/read/update/delete set
CRUD_RESOURCES: Final[tuple[str, ...]] = (
    "users",
    "roles",
    "assets",
    "contracts",
    "emails",
    "payroll",
    "tickets",
    "changeRequests",
    "attendance",
    "kpi",
    "okr",
)

CRUD_ACTIONS: Final[tuple[str, ...]] = ("create", "read", "update", "delete")

STANDALONE_PERMISSIONS: Final[frozenset[Permission]] = frozenset({
    Permission.DASHBOARD_ACCESS,
    Permission.REPORTS_VIEW,
    Permission.SETTINGS_MANAGE,
})

# All allowed permissions (explicit enumeration)
ALLOWED_PERMISSIONS: Final[frozenset[Permission]] = frozenset(Permission)


# ============================================================================
# ROLES
# ============================================================================

class Role(str, Enum):
    """System roles. Custom roles may exist in storage but grant nothing here."""
    ADMIN = "admin"
    MANAGER = "manager"
    USER = "user"


SYSTEM_ROLES: Final[frozenset[str]] = frozenset(role.value for role in Role)


ROLE_PERMISSION_MAPPINGS: Final[dict[str, frozenset[Permission]]] = {
    Role.ADMIN: ALLOWED_PERMISSIONS,

    Role.MANAGER: frozenset({
        Permission.USERS_READ,
        Permission.USERS_UPDATE,
        Permission.ROLES_READ,
        Permission.DASHBOARD_ACCESS,
        Permission.REPORTS_VIEW,
    }),

    Role.USER: frozenset({
        Permission.USERS_READ,
        Permission.DASHBOARD_ACCESS,
    }),
}


# ============================================================================
# VALIDATION
# ============================================================================

def validate_permission(permission: str) -> Permission:
    """
    Validate that a permission string is in the catalog.

    Args:
        permission: The permission to validate

    Returns:
        Permission: The matching catalog member

    Raises:
        ValueError: If permission contains wildcards or is not in the catalog
    """
    if permission.endswith("*"):
        raise ValueError(
            f"Wildcard permission '{permission}' is not allowed. "
            "All permissions must be explicit."
        )

    try:
        return Permission(permission)
    except ValueError:
        raise ValueError(
            f"Invalid permission '{permission}'. "
            f"Permission must be in the allowed list: {sorted(ALLOWED_PERMISSIONS)}"
        ) from None


def permissions_for_role(role: str | None) -> frozenset[Permission]:
    """Return the permissions mapped from ``role``; unknown roles get none."""
    if role is None:
        return frozenset()
    return ROLE_PERMISSION_MAPPINGS.get(role, frozenset())


def _validate_contract() -> None:
    """Validate the catalog and mappings at module import time."""
    errors = []

    expected = {f"{resource}.{action}" for resource in CRUD_RESOURCES for action in CRUD_ACTIONS}
    expected |= {permission.value for permission in STANDALONE_PERMISSIONS}
    catalog = {permission.value for permission in Permission}
    if catalog != expected:
        errors.append(
            f"Catalog mismatch: missing={sorted(expected - catalog)} extra={sorted(catalog - expected)}"
        )

    for role, permissions in ROLE_PERMISSION_MAPPINGS.items():
        if role not in SYSTEM_ROLES:
            errors.append(f"Invalid role in mappings: {role}")
            continue
        if not isinstance(permissions, frozenset):
            errors.append(f"Role '{role}' permissions must be a frozenset")
        for permission in permissions:
            try:
                validate_permission(permission)
            except ValueError as e:
                errors.append(f"Role '{role}' has invalid permission: {e}")

    for role in SYSTEM_ROLES:
        if role not in ROLE_PERMISSION_MAPPINGS:
            errors.append(f"Role '{role}' missing from mappings")

    if errors:
        raise RuntimeError(
            "RBAC Contract validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )


_validate_contract()
