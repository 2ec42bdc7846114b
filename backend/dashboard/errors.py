"""Error taxonomy shared by the stores, the session guards and the HTTP layer.

Each error class carries one HTTP status and a stable ``code``; the handlers in
``dashboard.main`` render every one of them as ``{"error": {...}}``.
"""
from typing import Any

from fastapi import status


class AppError(Exception):
    code: str = "APP_ERROR"
    message: str = "Application error"
    status_code: int = status.HTTP_400_BAD_REQUEST
    details: Any | None = None

    def __init__(self, message: str | None = None, *, details: Any | None = None):
        if message is not None:
            self.message = message
        if details is not None:
            self.details = details
        super().__init__(self.message)


class ValidationError(AppError):
    code = "VALIDATION_ERROR"
    message = "Validation error"


class AuthError(AppError):
    code = "AUTH_ERROR"
    message = "Authentication required"
    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionError(AppError):  # type: ignore[override]
    """A signed-in principal lacks ``permission``.

    The details carry the permission and the toast shown to the user.
    """

    code = "PERMISSION_DENIED"
    message = "Permission denied"
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, permission: str, notification: dict[str, Any] | None = None):
        super().__init__(details={"permission": permission, "notification": notification})
        self.permission = permission


class NotFoundError(AppError):
    code = "NOT_FOUND"
    message = "Resource not found"
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    code = "CONFLICT_ERROR"
    message = "Resource conflict"
    status_code = status.HTTP_409_CONFLICT


class StorageError(AppError):
    """The key-value backend failed; the collection in memory is unchanged."""

    code = "STORAGE_ERROR"
    message = "Storage backend unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, operation: str, reason: str):
        super().__init__(details={"operation": operation, "reason": reason})
        self.operation = operation


class InternalError(AppError):
    code = "INTERNAL_ERROR"
    message = "Internal server error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


ERROR_CODE_BY_STATUS: dict[int, str] = {
    error.status_code: error.code
    for error in (ValidationError, AuthError, PermissionError, NotFoundError, ConflictError, StorageError)
}
# request bodies rejected by FastAPI before reaching a handler
ERROR_CODE_BY_STATUS[status.HTTP_422_UNPROCESSABLE_ENTITY] = ValidationError.code


def error_payload(code: str, message: str, details: Any | None = None) -> dict[str, Any]:
    return {"error": {"code": code, "message": message, "details": details}}


def resolve_error_code(status_code: int) -> str:
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR and status_code not in ERROR_CODE_BY_STATUS:
        return InternalError.code
    return ERROR_CODE_BY_STATUS.get(status_code, "UNKNOWN_ERROR")
