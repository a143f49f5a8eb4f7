"""
===============================================================================
TARJETA CRC — crosscutting/middleware.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Aceptar o generar X-Request-Id y devolverlo en la respuesta.
  - Setear contextvars (request_id / method / path) para logs y auditoría.
  - Emitir una línea de log y métricas por request.
  - Limpiar el contexto al salir (workers reutilizados).

Colaboradores:
  - hrms/context.py
  - crosscutting/metrics.record_request_metrics
  - crosscutting/logger
===============================================================================
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .logger import logger
from .metrics import record_request_metrics

_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

# Probes y scraping: sin log por request.
QUIET_PATHS = frozenset({"/healthz", "/metrics"})


def resolve_request_id(header_value: str | None) -> str:
    candidate = (header_value or "").strip()
    if _REQUEST_ID_RE.match(candidate):
        return candidate
    return str(uuid.uuid4())


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request.headers.get("x-request-id"))
        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )
        request.state.request_id = request_id

        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Request-Id"] = request_id
            return response
        finally:
            elapsed = time.perf_counter() - started
            record_request_metrics(
                endpoint=request.url.path,
                method=request.method,
                status_code=status_code,
                latency_seconds=elapsed,
            )
            if request.url.path not in QUIET_PATHS:
                logger.log(
                    _level_for(status_code),
                    "%s %s -> %s",
                    request.method,
                    request.url.path,
                    status_code,
                    extra={
                        "status_code": status_code,
                        "latency_ms": round(elapsed * 1000, 2),
                        "client_ip": request.client.host if request.client else None,
                    },
                )
            clear_context()
