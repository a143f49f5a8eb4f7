"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/users.py (Administración de usuarios)
===============================================================================

Responsibilities:
    - Alta de usuarios (admin), listado (admin / hr), perfil propio.
    - Actualización (admin / hr) y desactivación (admin) vía AuditInterceptor,
      módulo "Users"; los payloads auditados nunca llevan el hash.

Collaborators:
    - application.user_service.UserService
    - application.audit_interceptor.AuditInterceptor
    - dependencies (request_context, guards)
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from .....application.audit_interceptor import ActionResult, AuditInterceptor
from .....application.user_service import USERS_MODULE, UserService
from .....container import get_audit_interceptor, get_user_service
from .....crosscutting.config import get_settings
from .....crosscutting.error_responses import AppHTTPException
from .....crosscutting.pagination import page_request
from .....identity.users import User
from ..dependencies import (
    admin_user,
    authenticated_user,
    manager_user,
    request_context,
)
from ..schemas.auth import MeRes, to_user_res
from ..schemas.users import (
    CreateUserReq,
    UpdateUserReq,
    UserActionRes,
    UserListRes,
    to_user_list_res,
    user_res_from_snapshot,
)

router = APIRouter(prefix="/users", tags=["users"])


def _respond(result: ActionResult, response: Response) -> UserActionRes:
    if not result.ok:
        raise AppHTTPException(result.status_code, result.message)
    response.status_code = result.status_code
    return UserActionRes(
        message=result.message, data=user_res_from_snapshot(result.payload or {})
    )


def _audited(
    request: Request,
    actor: User,
    interceptor: AuditInterceptor,
    handler,
    user_id: Optional[str] = None,
) -> ActionResult:
    return interceptor.intercept(
        USERS_MODULE,
        actor_id=str(actor.id),
        request=request_context(request),
        handler=handler,
        route_record_id=user_id,
    )


@router.post("/signup", response_model=UserActionRes, status_code=201)
def create_user(
    req: CreateUserReq,
    request: Request,
    response: Response,
    actor: User = Depends(admin_user),
    service: UserService = Depends(get_user_service),
    interceptor: AuditInterceptor = Depends(get_audit_interceptor),
):
    result = _audited(
        request,
        actor,
        interceptor,
        lambda: service.create(
            name=req.name,
            email=req.email,
            password=req.password,
            role=req.role,
            is_active=req.is_active,
        ),
    )
    return _respond(result, response)


@router.get("/all", response_model=UserListRes)
def list_users(
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    search: Optional[str] = Query(None, max_length=200),
    _: User = Depends(manager_user),
    service: UserService = Depends(get_user_service),
):
    page_req = page_request(
        page, limit, max_limit=get_settings().resource_page_max_limit
    )
    return to_user_list_res(service.list(page_req, search=search))


@router.get("/profile", response_model=MeRes)
def profile(user: User = Depends(authenticated_user)):
    return MeRes(user=to_user_res(user))


@router.put("/{user_id}", response_model=UserActionRes)
def update_user(
    user_id: str,
    req: UpdateUserReq,
    request: Request,
    response: Response,
    actor: User = Depends(manager_user),
    service: UserService = Depends(get_user_service),
    interceptor: AuditInterceptor = Depends(get_audit_interceptor),
):
    changes = req.model_dump(exclude_unset=True)
    result = _audited(
        request,
        actor,
        interceptor,
        lambda: service.update(user_id, changes, acting=actor),
        user_id,
    )
    return _respond(result, response)


@router.delete("/{user_id}", response_model=UserActionRes)
def deactivate_user(
    user_id: str,
    request: Request,
    response: Response,
    actor: User = Depends(admin_user),
    service: UserService = Depends(get_user_service),
    interceptor: AuditInterceptor = Depends(get_audit_interceptor),
):
    result = _audited(
        request,
        actor,
        interceptor,
        lambda: service.deactivate(user_id, acting=actor),
        user_id,
    )
    return _respond(result, response)
