from fastapi import APIRouter, Depends, Query, Request

from ..auth.enforcement_matrix import NAVIGATION, PAGE_ROUTES
from ..auth.rbac_contract import ALLOWED_PERMISSIONS
from ..auth.session import AuthSession
from ..dependencies import (
    enforce_permission,
    get_auth_session,
    get_stores,
    require_enforced_permission,
)
from ..errors import NotFoundError
from ..schemas.auth import Principal
from ..schemas.dashboard import DashboardStat, DashboardSummary, NavigationEntry, PageAccess
from ..stores.base import RecordStore

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardSummary)
async def dashboard(
    principal: Principal = Depends(require_enforced_permission("GET", "/dashboard")),
    stores: dict[str, RecordStore] = Depends(get_stores),
) -> DashboardSummary:
    counts = {name: store.count() for name, store in stores.items()}
    active_users = sum(1 for user in stores["users"].list() if user.status == "active")
    return DashboardSummary(
        welcome=f"Welcome back, {principal.name}",
        name=principal.name,
        role=principal.role,
        stats=[
            DashboardStat(
                title="Total Users",
                value=counts["users"],
                description=f"{active_users} active users in the system",
            ),
            DashboardStat(
                title="Active Roles",
                value=counts["roles"],
                description="Different user roles",
            ),
            DashboardStat(
                title="Permissions",
                value=len(ALLOWED_PERMISSIONS),
                description="System permissions",
            ),
        ],
        record_counts=counts,
    )


@router.get("/navigation", response_model=list[NavigationEntry])
async def navigation(session: AuthSession = Depends(get_auth_session)) -> list[NavigationEntry]:
    return [
        NavigationEntry(name=item.name, href=item.href, permission=item.permission.value)
        for item in NAVIGATION
        if session.has_permission(item.permission)
    ]


@router.get("/access", response_model=PageAccess)
async def page_access(
    request: Request,
    path: str = Query(..., min_length=1, max_length=255),
    session: AuthSession = Depends(get_auth_session),
) -> PageAccess:
    """Check whether the signed-in principal may open a dashboard page."""
    permission = PAGE_ROUTES.get(path.rstrip("/") or "/")
    if permission is None:
        raise NotFoundError(f"Unknown page '{path}'")
    enforce_permission(session, permission, request)
    return PageAccess(path=path, permission=permission.value, allowed=True)
