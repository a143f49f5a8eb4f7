"""
Schemas HTTP para autenticación (login/logout/me).
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from .....identity.users import User, UserRole
from .common import CamelModel


class LoginReq(CamelModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=512)

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return v.strip().lower()


class UserRes(CamelModel):
    id: UUID
    user_code: str
    name: str
    email: str
    role: UserRole
    is_active: bool
    created_at: datetime | None = None


class LoginRes(CamelModel):
    success: bool = True
    message: str = "Login successful"
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserRes


class MeRes(CamelModel):
    success: bool = True
    user: UserRes


def to_user_res(user: User) -> UserRes:
    return UserRes(
        id=user.id,
        user_code=user.user_code,
        name=user.name,
        email=user.email,
        role=user.role,
        is_active=user.is_active,
        created_at=user.created_at,
    )
