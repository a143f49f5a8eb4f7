"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/resources.py
===============================================================================

Class/Module:
    Resource Router (CRUD genérico de recursos HR)

Responsibilities:
    - Exponer /resources/{collection} (create / list / get / update / delete).
    - Envolver cada mutación con el AuditInterceptor (módulo = label del recurso).
    - Traducir ActionResult no-2xx -> envelope de error con su status.
    - Enforce de roles en el borde: mutaciones sólo admin / hr.

Collaborators:
    - application.resource_service.ResourceService
    - application.audit_interceptor.AuditInterceptor
    - dependencies (resolve_resource, request_context, guards)
===============================================================================
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, Response

from .....application.audit_interceptor import ActionResult, AuditInterceptor
from .....application.resource_service import ResourceService
from .....container import get_audit_interceptor, get_resource_service
from .....crosscutting.config import get_settings
from .....crosscutting.error_responses import AppHTTPException
from .....crosscutting.pagination import page_request
from .....domain.registry import RegisteredResource
from .....identity.users import User
from ..dependencies import (
    authenticated_user,
    manager_user,
    request_context,
    resolve_resource,
)
from ..schemas.resources import ResourceListRes, ResourceRes, to_resource_list_res

router = APIRouter(prefix="/resources", tags=["resources"])


def _respond(result: ActionResult, response: Response) -> ResourceRes:
    if not result.ok:
        raise AppHTTPException(result.status_code, result.message)
    response.status_code = result.status_code
    return ResourceRes(message=result.message, data=result.payload or {})


def _mutate(
    resource: RegisteredResource,
    request: Request,
    user: User,
    interceptor: AuditInterceptor,
    handler,
    record_id: Optional[str] = None,
) -> ActionResult:
    return interceptor.intercept(
        resource.descriptor.module_label,
        actor_id=str(user.id),
        request=request_context(request),
        handler=handler,
        route_record_id=record_id,
    )


@router.post("/{resource}", response_model=ResourceRes, status_code=201)
def create_record(
    request: Request,
    response: Response,
    body: Dict[str, Any] = Body(...),
    resource: RegisteredResource = Depends(resolve_resource),
    user: User = Depends(manager_user),
    service: ResourceService = Depends(get_resource_service),
    interceptor: AuditInterceptor = Depends(get_audit_interceptor),
):
    result = _mutate(
        resource, request, user, interceptor, lambda: service.create(resource, body)
    )
    return _respond(result, response)


@router.get("/{resource}", response_model=ResourceListRes)
def list_records(
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    search: Optional[str] = Query(None, max_length=200),
    archived: bool = Query(False),
    resource: RegisteredResource = Depends(resolve_resource),
    _: User = Depends(authenticated_user),
    service: ResourceService = Depends(get_resource_service),
):
    page_req = page_request(
        page, limit, max_limit=get_settings().resource_page_max_limit
    )
    result = service.list(resource, page_req, search=search, archived=archived)
    return to_resource_list_res(resource.name, result)


@router.get("/{resource}/{record_id}", response_model=ResourceRes)
def get_record(
    record_id: str,
    response: Response,
    resource: RegisteredResource = Depends(resolve_resource),
    _: User = Depends(authenticated_user),
    service: ResourceService = Depends(get_resource_service),
):
    return _respond(service.get(resource, record_id), response)


def _update(
    record_id: str,
    request: Request,
    response: Response,
    body: Dict[str, Any],
    resource: RegisteredResource,
    user: User,
    service: ResourceService,
    interceptor: AuditInterceptor,
) -> ResourceRes:
    result = _mutate(
        resource,
        request,
        user,
        interceptor,
        lambda: service.update(resource, record_id, body),
        record_id=record_id,
    )
    return _respond(result, response)


@router.put("/{resource}/{record_id}", response_model=ResourceRes)
def replace_record(
    record_id: str,
    request: Request,
    response: Response,
    body: Dict[str, Any] = Body(...),
    resource: RegisteredResource = Depends(resolve_resource),
    user: User = Depends(manager_user),
    service: ResourceService = Depends(get_resource_service),
    interceptor: AuditInterceptor = Depends(get_audit_interceptor),
):
    return _update(
        record_id, request, response, body, resource, user, service, interceptor
    )


@router.patch("/{resource}/{record_id}", response_model=ResourceRes)
def patch_record(
    record_id: str,
    request: Request,
    response: Response,
    body: Dict[str, Any] = Body(...),
    resource: RegisteredResource = Depends(resolve_resource),
    user: User = Depends(manager_user),
    service: ResourceService = Depends(get_resource_service),
    interceptor: AuditInterceptor = Depends(get_audit_interceptor),
):
    return _update(
        record_id, request, response, body, resource, user, service, interceptor
    )


@router.delete("/{resource}/{record_id}", response_model=ResourceRes)
def archive_record(
    record_id: str,
    request: Request,
    response: Response,
    resource: RegisteredResource = Depends(resolve_resource),
    user: User = Depends(manager_user),
    service: ResourceService = Depends(get_resource_service),
    interceptor: AuditInterceptor = Depends(get_audit_interceptor),
):
    result = _mutate(
        resource,
        request,
        user,
        interceptor,
        lambda: service.archive(resource, record_id),
        record_id=record_id,
    )
    return _respond(result, response)
