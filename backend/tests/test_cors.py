from fastapi import status

PREFLIGHT = {
    "Origin": "http://localhost:5173",
    "Access-Control-Request-Method": "POST",
    "Access-Control-Request-Headers": "content-type",
}


def test_cors_preflight_auth_login(client) -> None:
    """Test that a preflight to /auth/login from the dashboard origin is allowed with credentials."""
    response = client.options("/auth/login", headers=PREFLIGHT)

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
    assert "POST" in response.headers["access-control-allow-methods"]
    assert response.headers["access-control-allow-credentials"] == "true"


def test_cors_preflight_patch_on_records(client) -> None:
    response = client.options(
        "/api/tickets/t-1",
        headers={**PREFLIGHT, "Access-Control-Request-Method": "PATCH"},
    )

    assert response.status_code == status.HTTP_200_OK
    assert "PATCH" in response.headers["access-control-allow-methods"]


def test_cors_preflight_with_disallowed_origin(client) -> None:
    """Test that a preflight from an unknown origin gets no allow-origin header."""
    response = client.options("/auth/login", headers={**PREFLIGHT, "Origin": "http://evil.com"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "access-control-allow-origin" not in response.headers


def test_simple_request_echoes_allowed_origin(client) -> None:
    response = client.get("/health", headers={"Origin": "http://localhost:5173"})

    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
    assert "Origin" in response.headers["vary"]
