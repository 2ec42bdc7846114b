"""Declarative mapping of protected endpoints to required permissions.

Each key of ENFORCEMENT_MATRIX is a (METHOD, PATH) tuple using the route
templates registered on the app. Every protected endpoint must appear here;
tests compare the matrix with the registered routes.

Also holds the page route table and the navigation menu, both keyed to one
catalog permission per entry.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from ..stores.entities import ENTITY_KINDS
from .rbac_contract import Permission


API_PREFIX: Final[str] = "/api"

ACTION_VERBS: Final[dict[str, str]] = {
    "create": "create",
    "read": "view",
    "update": "update",
    "delete": "delete",
}

STANDALONE_DESCRIPTIONS: Final[dict[Permission, str]] = {
    Permission.DASHBOARD_ACCESS: "access the dashboard",
    Permission.REPORTS_VIEW: "view reports",
    Permission.SETTINGS_MANAGE: "manage settings",
}


def _entity_routes() -> dict[tuple[str, str], Permission]:
    routes: dict[tuple[str, str], Permission] = {}
    for kind in ENTITY_KINDS.values():
        base = f"{API_PREFIX}/{kind.path}"
        read = Permission.for_action(kind.name, "read")
        routes[("GET", base)] = read
        routes[("POST", f"{base}/table/search")] = read
        routes[("POST", f"{base}/table/sort")] = read
        routes[("POST", f"{base}/table/page")] = read
        routes[("GET", f"{base}/{{record_id}}")] = read
        routes[("POST", base)] = Permission.for_action(kind.name, "create")
        routes[("PATCH", f"{base}/{{record_id}}")] = Permission.for_action(kind.name, "update")
        routes[("DELETE", f"{base}/{{record_id}}")] = Permission.for_action(kind.name, "delete")
    return routes


ENFORCEMENT_MATRIX: Final[dict[tuple[str, str], Permission]] = {
    ("GET", "/dashboard"): Permission.DASHBOARD_ACCESS,
    **_entity_routes(),
}

# Endpoints reachable without any permission (authentication handled per route)
PUBLIC_ROUTES: Final[frozenset[tuple[str, str]]] = frozenset({
    ("GET", "/health"),
    ("POST", "/auth/login"),
    ("POST", "/auth/logout"),
    ("GET", "/auth/me"),
    ("GET", "/navigation"),
    ("GET", "/access"),
})


def permission_for(method: str, path: str) -> Permission:
    return ENFORCEMENT_MATRIX[(method, path)]


def describe_permission(permission: Permission) -> str:
    """Words completing "You don't have permission to ..." for ``permission``."""
    if permission in STANDALONE_DESCRIPTIONS:
        return STANDALONE_DESCRIPTIONS[permission]
    resource, action = permission.value.split(".", 1)
    return f"{ACTION_VERBS[action]} {ENTITY_KINDS[resource].label_plural}"


# ============================================================================
# PAGES AND NAVIGATION
# ============================================================================

@dataclass(frozen=True)
class NavigationItem:
    name: str
    href: str
    permission: Permission


PAGE_ROUTES: Final[dict[str, Permission]] = {
    "/dashboard": Permission.DASHBOARD_ACCESS,
    "/dashboard/users": Permission.USERS_READ,
    "/dashboard/roles": Permission.ROLES_READ,
    "/dashboard/contracts": Permission.CONTRACTS_READ,
    "/dashboard/emails": Permission.EMAILS_READ,
    "/dashboard/payroll": Permission.PAYROLL_READ,
    "/dashboard/tickets": Permission.TICKETS_READ,
    "/dashboard/change-requests": Permission.CHANGE_REQUESTS_READ,
    "/dashboard/attendance": Permission.ATTENDANCE_READ,
    "/dashboard/kpi": Permission.KPI_READ,
    "/dashboard/okr": Permission.OKR_READ,
    "/dashboard/assets": Permission.ASSETS_READ,
    "/dashboard/settings": Permission.SETTINGS_MANAGE,
}

NAVIGATION: Final[tuple[NavigationItem, ...]] = (
    NavigationItem("Dashboard", "/dashboard", Permission.DASHBOARD_ACCESS),
    NavigationItem("User Management", "/dashboard/users", Permission.USERS_READ),
    NavigationItem("Role Management", "/dashboard/roles", Permission.ROLES_READ),
    NavigationItem("Contract Management", "/dashboard/contracts", Permission.CONTRACTS_READ),
    NavigationItem("Email Management", "/dashboard/emails", Permission.EMAILS_READ),
    NavigationItem("Payroll Management", "/dashboard/payroll", Permission.PAYROLL_READ),
    NavigationItem("Ticket Management", "/dashboard/tickets", Permission.TICKETS_READ),
    NavigationItem(
        "Change Request Management", "/dashboard/change-requests", Permission.CHANGE_REQUESTS_READ
    ),
    NavigationItem("Attendance Management", "/dashboard/attendance", Permission.ATTENDANCE_READ),
    NavigationItem("KPI Management", "/dashboard/kpi", Permission.KPI_READ),
    NavigationItem("OKR Management", "/dashboard/okr", Permission.OKR_READ),
    NavigationItem("Asset Management", "/dashboard/assets", Permission.ASSETS_READ),
    NavigationItem("Settings", "/dashboard/settings", Permission.SETTINGS_MANAGE),
)
