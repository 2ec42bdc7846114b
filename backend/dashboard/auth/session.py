"""
Dashboard session: the signed-in principal and permission queries.

States:
- Anonymous: no principal; every permission query answers False
- Authenticated(principal): permissions come from the principal's role

Transitions:
- restore(): read the persisted principal once at startup
- login(): Anonymous/Authenticated -> Authenticated on matching credentials
- logout(): -> Anonymous (idempotent)

The principal is persisted as JSON under SESSION_STORAGE_KEY. A restored
principal is trusted without re-checking credentials.
"""
from __future__ import annotations

import logging
from typing import Final

from pydantic import ValidationError as PydanticValidationError

from ..infra.storage import KeyValueStorage
from ..schemas.auth import Principal
from . import rbac_contract
from .credentials import check_credentials

logger = logging.getLogger("dashboard.auth")

SESSION_STORAGE_KEY: Final[str] = "adminDashboardUser"


class AuthSession:
    def __init__(self, storage: KeyValueStorage):
        self._storage = storage
        self._principal: Principal | None = None

    @classmethod
    def restored(cls, storage: KeyValueStorage) -> "AuthSession":
        session = cls(storage)
        session.restore()
        return session

    @property
    def principal(self) -> Principal | None:
        return self._principal

    @property
    def is_authenticated(self) -> bool:
        return self._principal is not None

    @property
    def permissions(self) -> frozenset[rbac_contract.Permission]:
        if self._principal is None:
            return frozenset()
        return rbac_contract.permissions_for_role(self._principal.role)

    def restore(self) -> Principal | None:
        """Load the persisted principal, if any.

        A malformed value is removed and the session stays anonymous.
        """
        raw = self._storage.get_item(SESSION_STORAGE_KEY)
        if raw is None:
            self._principal = None
            return None

        try:
            self._principal = Principal.model_validate_json(raw)
        except PydanticValidationError as exc:
            logger.warning(
                "Discarding malformed persisted session key=%s errors=%d",
                SESSION_STORAGE_KEY,
                exc.error_count(),
            )
            self._storage.remove_item(SESSION_STORAGE_KEY)
            self._principal = None
            return None

        logger.info("Session restored principal_id=%s role=%s", self._principal.id, self._principal.role)
        return self._principal

    def login(self, email: str, password: str) -> bool:
        """Attempt a credential match. Failure leaves the current state untouched."""
        principal = check_credentials(email, password)
        if principal is None:
            logger.warning("Login failed email=%s", email)
            return False

        self._principal = principal
        self._storage.set_item(SESSION_STORAGE_KEY, principal.model_dump_json(by_alias=True))
        logger.info("Login succeeded principal_id=%s role=%s", principal.id, principal.role)
        return True

    def logout(self) -> None:
        if self._principal is not None:
            logger.info("Logout principal_id=%s", self._principal.id)
        self._principal = None
        self._storage.remove_item(SESSION_STORAGE_KEY)

    def has_permission(self, permission: rbac_contract.Permission | str) -> bool:
        """Exact-match permission check against the principal's role.

        Args:
            permission: A catalog member or its string value

        Returns:
            bool: False when anonymous, for unknown roles, and for strings
            outside the role's permission set
        """
        if self._principal is None:
            return False
        return permission in self.permissions
