"""Request-scoped accessors for the dashboard state held on ``app.state``.

The lifespan in ``dashboard.main`` creates one AuthSession, the record stores
and the per-table view state. Route handlers reach them only through these
dependencies.
"""
from __future__ import annotations

import logging
from typing import Callable

from fastapi import Depends, Request

from .auth.enforcement_matrix import describe_permission, permission_for
from .auth.rbac_contract import Permission
from .auth.session import AuthSession
from .config import Settings, get_settings
from .errors import AuthError, PermissionError
from .schemas.auth import Principal
from .schemas.notification import permission_denied
from .stores.base import RecordStore
from .table.engine import TableViewState

logger = logging.getLogger("dashboard.rbac")


def get_auth_session(request: Request) -> AuthSession:
    session = getattr(request.app.state, "auth_session", None)
    if session is None:
        raise RuntimeError("No auth session established on application state")
    return session


def get_stores(request: Request) -> dict[str, RecordStore]:
    stores = getattr(request.app.state, "stores", None)
    if stores is None:
        raise RuntimeError("Record stores are not initialised on application state")
    return stores


def get_table_states(request: Request) -> dict[str, TableViewState]:
    states = getattr(request.app.state, "table_states", None)
    if states is None:
        states = {}
        request.app.state.table_states = states
    return states


def get_app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()


def get_current_principal(session: AuthSession = Depends(get_auth_session)) -> Principal:
    if session.principal is None:
        raise AuthError()
    return session.principal


def enforce_permission(session: AuthSession, permission: Permission, request: Request) -> Principal:
    """Return the signed-in principal if it holds ``permission``.

    Raises:
        AuthError: No principal is signed in
        PermissionError: The role does not grant ``permission``; the details
            carry the user-facing notification
    """
    principal = session.principal
    if principal is None:
        raise AuthError()

    if not session.has_permission(permission):
        logger.warning(
            "Permission denied principal_id=%s role=%s permission=%s method=%s path=%s",
            principal.id,
            principal.role,
            permission.value,
            request.method,
            request.url.path,
        )
        notification = permission_denied(describe_permission(permission))
        raise PermissionError(permission.value, notification.model_dump(by_alias=True))
    return principal


def require_permission(permission: Permission) -> Callable:
    """
    Enforce a single permission on a route.

    Verifies:
    - A principal is signed in (401 if not)
    - The principal's role grants ``permission`` (403 if not)

    A denial is logged and answered with the user-facing notification in the
    error details; nothing is mutated.
    """
    async def dependency(
        request: Request,
        session: AuthSession = Depends(get_auth_session),
    ) -> Principal:
        return enforce_permission(session, permission, request)

    return dependency


def require_enforced_permission(method: str, path: str) -> Callable:
    return require_permission(permission_for(method, path))
