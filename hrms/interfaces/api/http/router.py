"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (app.include_router).
  - Componer routers por contexto (auth / users / archives / activities / resources).

Patrones aplicados:
  - Factory: build_router() para testear composición y evitar side-effects al importar.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from .routers import (
    activities_router,
    archives_router,
    auth_router,
    resources_router,
    users_router,
)


def build_router() -> APIRouter:
    router = APIRouter()
    router.include_router(auth_router)
    router.include_router(users_router)
    router.include_router(archives_router)
    router.include_router(activities_router)
    router.include_router(resources_router)
    return router


router = build_router()
