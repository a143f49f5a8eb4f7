"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/__init__.py
===============================================================================

Name:
    Routers Package (HTTP)

Responsibilities:
    - Exponer routers segmentados por contexto para ser incluidos por el
      router principal.

Notas:
    - Este archivo NO define endpoints. Solo re-exporta routers.
===============================================================================
"""

from .activities import router as activities_router
from .archives import router as archives_router
from .auth import router as auth_router
from .resources import router as resources_router
from .users import router as users_router

__all__ = [
    "activities_router",
    "archives_router",
    "auth_router",
    "resources_router",
    "users_router",
]
