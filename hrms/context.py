"""
===============================================================================
TARJETA CRC — hrms/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Guardar request_id / method / path / actor_id en ContextVars.
  - Exponer el contexto como dict para logs y para el dispatcher de auditoría.

Colaboradores:
  - crosscutting.middleware: setea request_id/method/path y limpia al final.
  - identity.auth_users: setea actor_id al resolver el usuario del token.
  - crosscutting.logger: enriquece cada línea con get_context_dict().
  - application.audit_dispatcher: copia el contexto al worker.

Restricciones:
  - Solo strings; "" significa "no disponible" y se omite del dict.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Dict

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
http_method_var: ContextVar[str] = ContextVar("http_method", default="")
http_path_var: ContextVar[str] = ContextVar("http_path", default="")
actor_id_var: ContextVar[str] = ContextVar("actor_id", default="")

_FIELDS: Dict[str, ContextVar[str]] = {
    "request_id": request_id_var,
    "method": http_method_var,
    "path": http_path_var,
    "actor_id": actor_id_var,
}


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    request_id_var.set(request_id or "")
    http_method_var.set(method or "")
    http_path_var.set(path or "")


def set_actor(actor_id: str) -> None:
    """Usuario autenticado del request en curso (para correlación de logs)."""
    actor_id_var.set(actor_id or "")


def get_context_dict() -> dict[str, str]:
    return {key: value for key, var in _FIELDS.items() if (value := var.get())}


def clear_context() -> None:
    for var in _FIELDS.values():
        var.set("")
