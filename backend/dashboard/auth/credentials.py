"""Static mock identities. There is no backend: login is a lookup table."""
from __future__ import annotations

from typing import Final

from ..schemas.auth import Principal


MOCK_PRINCIPALS: Final[tuple[Principal, ...]] = (
    Principal(
        id="1",
        email="admin@example.com",
        name="Admin User",
        role="admin",
        created_at="2024-01-01",
    ),
    Principal(
        id="2",
        email="manager@example.com",
        name="Manager User",
        role="manager",
        created_at="2024-01-02",
    ),
    Principal(
        id="3",
        email="user@example.com",
        name="Regular User",
        role="user",
        created_at="2024-01-03",
    ),
)

MOCK_CREDENTIALS: Final[dict[str, str]] = {
    "admin@example.com": "admin123",
    "manager@example.com": "manager123",
    "user@example.com": "user123",
}


def find_principal(email: str) -> Principal | None:
    for principal in MOCK_PRINCIPALS:
        if principal.email == email:
            return principal
    return None


def check_credentials(email: str, password: str) -> Principal | None:
    """Return the matching principal when ``password`` is right for ``email``."""
    expected = MOCK_CREDENTIALS.get(email)
    if expected is None or expected != password:
        return None
    return find_principal(email)
