"""
===============================================================================
MÓDULO: Logger estructurado (JSON) con contexto de request
===============================================================================

Objetivo
--------
Cada línea de log es un objeto JSON correlacionable por request_id. Los
campos sensibles de empleados y credenciales se redactan antes de salir.
Los snapshots de registros (old_values / new_values) se resumen a sus claves.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + configure_logging()

Responsabilidades:
  - Formatear LogRecord como JSON
  - Enriquecer con contexto (request_id, path, method)
  - Redactar credenciales y datos personales, resumir snapshots HR

Colaboradores:
  - hrms/context.py (ContextVars)
  - crosscutting/config.py (log_level, log_json)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Mapping

from pydantic import ValidationError

# Atributos estándar de LogRecord; el resto llega vía `extra=`.
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

# Credenciales y datos personales de empleados.
REDACTED_KEYS = frozenset(
    {
        "password",
        "password_hash",
        "token",
        "access_token",
        "authorization",
        "jwt_secret",
        "bank_account_no",
        "cnic",
        "salary",
    }
)

# Payloads de registros HR: se loguean solo sus claves.
SNAPSHOT_KEYS = frozenset({"old_values", "new_values", "record", "records"})

MAX_STRING = 2_000
MAX_DEPTH = 4


def _scrub(value: Any, key: str | None = None, depth: int = 0) -> Any:
    if key is not None:
        lowered = key.lower()
        if lowered in REDACTED_KEYS:
            return "[redacted]"
        if lowered in SNAPSHOT_KEYS and value is not None:
            return _summarize_snapshot(value)

    if depth >= MAX_DEPTH:
        return "[depth]"
    if isinstance(value, str):
        return value if len(value) <= MAX_STRING else value[:MAX_STRING] + "…"
    if isinstance(value, Mapping):
        return {str(k): _scrub(v, str(k), depth + 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_scrub(v, None, depth + 1) for v in value]
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return str(value)


def _summarize_snapshot(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {"fields": sorted(str(k) for k in value)}
    if isinstance(value, (list, tuple)):
        return {"count": len(value)}
    return "[snapshot]"


class JSONFormatter(logging.Formatter):
    """LogRecord -> una línea JSON (contexto de request + extras redactados)."""

    def format(self, record: logging.LogRecord) -> str:
        from ..context import get_context_dict

        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        entry.update(get_context_dict())

        entry.update(
            {
                name: _scrub(value, name)
                for name, value in vars(record).items()
                if name not in _STANDARD_ATTRS
            }
        )

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc, tb = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc),
                "stacktrace": traceback.format_exception(exc_type, exc, tb),
            }

        return json.dumps(entry, ensure_ascii=False, default=str)


def _settings_defaults() -> tuple[str, bool]:
    # Scripts sin DATABASE_URL: caen al default.
    try:
        from .config import get_settings

        settings = get_settings()
    except ValidationError:
        return "INFO", True
    return (settings.log_level or "INFO").upper(), settings.log_json


def configure_logging(
    name: str = "hrms-api",
    *,
    level: str | None = None,
    json_output: bool | None = None,
) -> logging.Logger:
    """
    Configura (una sola vez) el logger de la aplicación.

    Los argumentos explícitos ganan sobre Settings.
    """
    default_level, default_json = _settings_defaults()
    level = (level or default_level).upper()
    json_output = default_json if json_output is None else json_output

    log = logging.getLogger(name)
    log.setLevel(getattr(logging, level, logging.INFO))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter()
            if json_output
            else logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        log.addHandler(handler)

    return log


logger = configure_logging()
