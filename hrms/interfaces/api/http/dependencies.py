"""
===============================================================================
TARJETA CRC — dependencies.py (Dependencias y helpers comunes)
===============================================================================

Responsabilidades:
  - Centralizar helpers que se repiten en routers:
      * RequestContext (ip, user agent, método, url) para auditoría
      * resolución de recurso HR por nombre de colección (404 si no existe)
      * guards de autenticación/rol reutilizables

Colaboradores:
  - container.get_registry
  - identity.auth_users (require_user / require_roles)
  - crosscutting.error_responses.not_found
===============================================================================
"""

from __future__ import annotations

from fastapi import Depends, Request

from ....container import get_registry
from ....crosscutting.error_responses import not_found
from ....crosscutting.exceptions import ModelNotFoundError
from ....domain.activity import RequestContext
from ....domain.registry import RegisteredResource, ResourceRegistry
from ....identity.auth_users import require_roles, require_user
from ....identity.users import MANAGER_ROLES, UserRole

# Guards compartidos (una instancia por proceso).
authenticated_user = require_user()
manager_user = require_roles(*MANAGER_ROLES)
admin_user = require_roles(UserRole.ADMIN)


def request_context(request: Request) -> RequestContext:
    """Contexto HTTP mínimo para el activity log (url incluye query string)."""
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"
    return RequestContext(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        method=request.method,
        url=url,
    )


def resolve_resource(
    resource: str, registry: ResourceRegistry = Depends(get_registry)
) -> RegisteredResource:
    try:
        return registry.find_by_collection(resource)
    except ModelNotFoundError as exc:
        raise not_found("Resource", resource) from exc
