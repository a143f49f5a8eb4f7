"""
===============================================================================
TARJETA CRC — hrms/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir excepciones de la aplicación al envelope {success: false, message}.
  - Centralizar logging de errores con request_id + error_id.
  - Evitar filtrar detalles internos en errores no controlados (producción).

Patrones aplicados:
  - Exception Mapping (Presentation Layer).
  - Fail-safe: cualquier excepción no tipada -> 500 (con logging).

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, envelope_response
  - crosscutting.exceptions: HRMSError y derivadas
  - crosscutting.config.get_settings (para decidir nivel de detalle)
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    app_exception_handler,
    envelope_response,
    request_id_from,
)
from ..crosscutting.exceptions import HRMSError
from ..crosscutting.logger import logger


async def hrms_error_handler(request: Request, exc: HRMSError) -> JSONResponse:
    """
    Errores tipados de servicios (modelo no registrado, registro inexistente,
    fallas de storage): todos responden 500 con el mensaje del error.
    """
    request_id = request_id_from(request)

    logger.error(
        "Error de servicio",
        extra={
            "error_type": type(exc).__name__,
            "error_id": exc.error_id,
            "error_message": exc.message,
            "request_id": request_id,
        },
    )

    return envelope_response(
        request,
        status_code=500,
        message=exc.message,
        error_id=exc.error_id,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = first.get("msg", "Invalid request")
    if field:
        message = f"{field}: {message}"

    logger.info(
        "Request inválido",
        extra={"request_id": request_id_from(request), "errors": len(errors)},
    )
    return envelope_response(request, status_code=422, message=message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para excepciones no tipadas.

    - Log completo (stacktrace).
    - Respuesta genérica en producción.
    """
    request_id = request_id_from(request)

    logger.error(
        "Excepción no controlada",
        exc_info=True,
        extra={"request_id": request_id, "error": str(exc)},
    )

    detail = str(exc) if not get_settings().is_production() else "Internal server error"
    return envelope_response(request, status_code=500, message=detail)


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Exception genérica se registra al final como fallback.
    """
    app.add_exception_handler(HRMSError, hrms_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
