"""
Tests for the permission catalog and the static role mappings.

Validates that:
1. The catalog is exactly the CRUD set per resource plus the standalone tokens
2. Wildcards and unknown permissions are rejected
3. Role mappings grant what the dashboard expects and nothing else
4. Unknown roles are granted nothing
"""
import pytest

from dashboard.auth.rbac_contract import (
    ALLOWED_PERMISSIONS,
    CRUD_ACTIONS,
    CRUD_RESOURCES,
    ROLE_PERMISSION_MAPPINGS,
    SYSTEM_ROLES,
    Permission,
    Role,
    permissions_for_role,
    validate_permission,
)


class TestPermissionCatalog:
    """The closed permission vocabulary."""

    def test_catalog_size(self):
        assert len(ALLOWED_PERMISSIONS) == len(CRUD_RESOURCES) * len(CRUD_ACTIONS) + 3 == 47

    def test_every_resource_has_full_crud(self):
        values = {permission.value for permission in Permission}
        for resource in CRUD_RESOURCES:
            for action in CRUD_ACTIONS:
                assert f"{resource}.{action}" in values

    def test_standalone_tokens_present(self):
        values = {permission.value for permission in Permission}
        assert {"dashboard.access", "reports.view", "settings.manage"} <= values

    def test_members_compare_equal_to_strings(self):
        assert Permission.USERS_READ == "users.read"
        assert "users.read" in {Permission.USERS_READ}

    def test_for_action_resolves_member(self):
        assert Permission.for_action("changeRequests", "delete") is Permission.CHANGE_REQUESTS_DELETE

    def test_for_action_rejects_unknown_combination(self):
        with pytest.raises(ValueError):
            Permission.for_action("users", "approve")


class TestValidatePermission:
    """validate_permission accepts catalog strings only."""

    def test_valid_permission(self):
        assert validate_permission("kpi.update") is Permission.KPI_UPDATE

    @pytest.mark.parametrize("value", ["users.*", "*", "admin:*"])
    def test_wildcards_rejected(self, value):
        with pytest.raises(ValueError, match="Wildcard permission"):
            validate_permission(value)

    @pytest.mark.parametrize("value", ["users.write", "Users.read", "users.read ", ""])
    def test_unknown_rejected(self, value):
        with pytest.raises(ValueError, match="Invalid permission"):
            validate_permission(value)


class TestRoleMappings:
    """Static role -> permission mapping."""

    def test_every_system_role_mapped(self):
        assert set(ROLE_PERMISSION_MAPPINGS) == SYSTEM_ROLES

    def test_mappings_are_frozensets(self):
        for permissions in ROLE_PERMISSION_MAPPINGS.values():
            assert isinstance(permissions, frozenset)

    def test_admin_has_everything(self):
        assert permissions_for_role("admin") == ALLOWED_PERMISSIONS

    def test_manager_permissions(self):
        assert permissions_for_role(Role.MANAGER) == {
            "users.read",
            "users.update",
            "roles.read",
            "dashboard.access",
            "reports.view",
        }

    def test_user_permissions(self):
        assert permissions_for_role("user") == {"users.read", "dashboard.access"}

    def test_user_cannot_delete_users(self):
        assert Permission.USERS_DELETE not in permissions_for_role("user")

    @pytest.mark.parametrize("role", ["guest", "Admin", "", None, "super_admin"])
    def test_unknown_roles_get_nothing(self, role):
        assert permissions_for_role(role) == frozenset()
