from typing import Any, Literal

from .base import CamelModel


class Notification(CamelModel):
    """Transient user-facing message (a toast)."""

    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


class MutationResponse(CamelModel):
    record: dict[str, Any] | None = None
    notification: Notification


def permission_denied(description: str) -> Notification:
    return Notification(
        title="Permission denied",
        description=f"You don't have permission to {description}",
        variant="destructive",
    )


def record_changed(label: str, past_tense: str) -> Notification:
    return Notification(
        title=f"{label} {past_tense}",
        description=f"{label} has been {past_tense} successfully",
    )
