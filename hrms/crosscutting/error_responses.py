"""
===============================================================================
MÓDULO: Respuestas de error estándar (envelope {success, message})
===============================================================================

Objetivo
--------
Uniformar TODOS los errores HTTP para que:
- El frontend lea siempre `success` + `message`
- El backend pueda correlacionar por request_id / error_id

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  AppHTTPException + handler

Responsabilidades:
  - Definir el payload de error (ErrorEnvelope)
  - Proveer factories de errores de borde (auth, validación, not found)
  - Proveer el handler FastAPI que serializa el envelope

Colaboradores:
  - crosscutting/middleware.py (request_id)
  - api/exception_handlers.py (mapea errores internos)
===============================================================================
"""

from __future__ import annotations

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorEnvelope(BaseModel):
    """Payload de error común a todos los endpoints."""

    success: bool = False
    message: str
    error_id: str | None = None
    request_id: str | None = None


class AppHTTPException(HTTPException):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AppHTTPException

    Responsabilidades:
      - Transportar status + mensaje humano hasta el handler
      - Permitir headers custom (WWW-Authenticate, etc.)

    Colaboradores:
      - app_exception_handler()
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)


# ---------------------------------------------------------------------------
# Factories de error (helpers)
# ---------------------------------------------------------------------------
def validation_error(detail: str) -> AppHTTPException:
    return AppHTTPException(422, detail)


def not_found(resource: str, identifier: str) -> AppHTTPException:
    return AppHTTPException(404, f"{resource} '{identifier}' not found")


def unauthorized(detail: str = "Authentication required") -> AppHTTPException:
    return AppHTTPException(401, detail, headers={"WWW-Authenticate": "Bearer"})


def forbidden(
    detail: str = "Access denied: You don't have permission",
) -> AppHTTPException:
    return AppHTTPException(403, detail)


def request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


def envelope_response(
    request: Request,
    *,
    status_code: int,
    message: str,
    error_id: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    envelope = ErrorEnvelope(
        message=message,
        error_id=error_id,
        request_id=request_id_from(request),
    )
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(exclude_none=True),
        headers=headers,
    )


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """Handler para AppHTTPException (propaga headers opcionales)."""
    return envelope_response(
        request,
        status_code=exc.status_code,
        message=str(exc.detail),
        headers=getattr(exc, "headers", None),
    )
