"""
Schemas HTTP para administración de usuarios (/users).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from .....application.user_service import UserPage
from .....identity.users import UserRole
from .auth import UserRes, to_user_res
from .common import CamelModel, PageRes

_NAME = Field(..., min_length=2, max_length=255)


def _clean_email(v: Optional[str]) -> Optional[str]:
    return v.strip().lower() if v is not None else v


class CreateUserReq(CamelModel):
    name: str = _NAME
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=8, max_length=512)
    role: UserRole = UserRole.USER
    is_active: bool = True

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return _clean_email(v)


class UpdateUserReq(CamelModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    email: Optional[str] = Field(None, min_length=3, max_length=320)
    password: Optional[str] = Field(None, min_length=8, max_length=512)
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: Optional[str]) -> Optional[str]:
        return _clean_email(v)


class UserActionRes(CamelModel):
    success: bool = True
    message: str
    data: UserRes


class UserListRes(PageRes):
    data: List[UserRes]


def user_res_from_snapshot(snapshot: Dict[str, Any]) -> UserRes:
    return UserRes.model_validate(snapshot)


def to_user_list_res(page: UserPage) -> UserListRes:
    return UserListRes(
        message="Users fetched successfully",
        total=page.total,
        total_pages=page.total_pages,
        current_page=page.current_page,
        limit=page.limit,
        data=[to_user_res(u) for u in page.data],
    )
