"""
===============================================================================
TARJETA CRC — application/audit_interceptor.py
===============================================================================

Componente:
  AuditInterceptor + ActionResult

Responsabilidades:
  - Envolver la llamada a un handler de mutación y auditar su resultado.
  - Inferir la acción desde el método HTTP (POST/PUT/PATCH/DELETE).
  - Auditar sólo respuestas 2xx; el resto pasa sin registrar.
  - Propagar intactas las excepciones del handler y absorber las del recorder.

Colaboradores:
  - application.activity_recorder.ActivityRecorder
  - application.resource_service (produce ActionResult)
  - interfaces.api.http.routers.resources (invoca intercept)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..crosscutting.exceptions import AuditRecordingError, InvalidIdentifierError
from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_audit_failure
from ..domain.activity import ActivityAction, RequestContext
from .activity_recorder import ActivityRecorder
from .archive_store import normalize_record_id

_METHOD_ACTIONS: Dict[str, ActivityAction] = {
    "POST": ActivityAction.CREATE,
    "PUT": ActivityAction.UPDATE,
    "PATCH": ActivityAction.UPDATE,
    "DELETE": ActivityAction.DELETE,
}


@dataclass
class ActionResult:
    """
    Resultado explícito de un handler de mutación.

    `previous` es el estado del registro antes de la mutación (pre-image),
    usado como old_values en la auditoría.
    """

    status_code: int
    payload: Optional[Dict[str, Any]] = None
    message: str = ""
    previous: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def action_for_method(method: Optional[str]) -> Optional[ActivityAction]:
    return _METHOD_ACTIONS.get((method or "").upper())


def _route_record_id(raw: Optional[str]) -> Optional[str]:
    """UUID del path en forma canónica; ids no-UUID pasan tal cual."""
    if not raw:
        return None
    try:
        return normalize_record_id(raw)
    except InvalidIdentifierError:
        return raw


class AuditInterceptor:
    def __init__(self, recorder: ActivityRecorder):
        self._recorder = recorder

    def intercept(
        self,
        module: str,
        *,
        actor_id: Optional[str],
        request: RequestContext,
        handler: Callable[[], ActionResult],
        route_record_id: Optional[str] = None,
    ) -> ActionResult:
        result = handler()

        action = action_for_method(request.method)
        if action is None or not result.ok:
            return result

        try:
            payload = result.payload
            record_id = _route_record_id(route_record_id) or (payload or {}).get("id")
            self._recorder.record(
                actor_id,
                module,
                action,
                old_value=result.previous,
                new_value=None if action is ActivityAction.DELETE else payload,
                request=request,
                record_id=record_id,
            )
        except Exception as exc:
            err = AuditRecordingError(
                f"Audit recording failed for {module}", original_error=exc
            )
            record_audit_failure("intercept")
            logger.error(
                err.message,
                extra={
                    "error_id": err.error_id,
                    "audit_module": module,
                    "action": action.value,
                    "error": str(exc),
                },
            )

        return result
