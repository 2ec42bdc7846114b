from pydantic import Field

from .base import CamelModel


class Principal(CamelModel):
    id: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    name: str
    role: str
    created_at: str


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=255)


class SessionResponse(CamelModel):
    principal: Principal
    permissions: list[str]
