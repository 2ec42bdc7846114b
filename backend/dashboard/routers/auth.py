from fastapi import APIRouter, Depends, status

from ..auth.session import AuthSession
from ..dependencies import get_auth_session, get_current_principal
from ..errors import AuthError
from ..schemas.auth import LoginRequest, Principal, SessionResponse

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_response(session: AuthSession) -> SessionResponse:
    return SessionResponse(
        principal=session.principal,
        permissions=sorted(permission.value for permission in session.permissions),
    )


@router.post("/login", response_model=SessionResponse)
async def login(
    payload: LoginRequest,
    session: AuthSession = Depends(get_auth_session),
) -> SessionResponse:
    if not session.login(payload.email, payload.password):
        raise AuthError("Invalid email or password")
    return _session_response(session)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(session: AuthSession = Depends(get_auth_session)) -> None:
    session.logout()


@router.get("/me", response_model=SessionResponse)
async def me(
    _: Principal = Depends(get_current_principal),
    session: AuthSession = Depends(get_auth_session),
) -> SessionResponse:
    return _session_response(session)
