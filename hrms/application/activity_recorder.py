"""
===============================================================================
TARJETA CRC — application/activity_recorder.py (Emisión de activity log)
===============================================================================

Responsabilidades:
  - Construir entradas del activity log con formato consistente
    (actor/action/module/record_id/description/changes/request).
  - Resolver el actor al momento del evento (snapshot congelado en la entrada).
  - Persistir vía ActivityLogRepository, inline o a través del AuditDispatcher.
  - "Best-effort": si falla resolver o persistir, NO rompe el flujo de negocio.

Colaboradores:
  - domain.activity (ActivityLogEntry, ActorSnapshot, ChangeSet, RequestContext)
  - domain.repositories (ActivityLogRepository, ActorResolver)
  - application.audit_dispatcher.AuditDispatcher
  - crosscutting.metrics (entradas y fallas)

Decisiones:
  - Payloads se sanitizan a valores serializables; lo no serializable se stringifica.
  - Actor no resoluble => warning + métrica, la entrada se descarta.
===============================================================================
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_audit_entry, record_audit_failure
from ..domain.activity import (
    ActivityAction,
    ActivityLogEntry,
    ChangeSet,
    RequestContext,
)
from ..domain.repositories import ActivityLogRepository, ActorResolver
from .audit_dispatcher import AuditDispatcher

_DESCRIPTIONS = {
    ActivityAction.CREATE: "Created new {module}",
    ActivityAction.UPDATE: "Updated {module}",
    ActivityAction.DELETE: "Deleted {module}",
    ActivityAction.LOGIN: "Logged in",
    ActivityAction.LOGOUT: "Logged out",
}


def _sanitize(value: Any) -> Any:
    """
    Convierte valores a tipos serializables para JSON.
    - primitives -> OK
    - dict/list/tuple -> sanitiza recursivamente
    - otros (datetime, UUID, ...) -> str(value)
    """
    if value is None or isinstance(value, (str, int, float, bool)):
        return value

    if isinstance(value, Mapping):
        return {str(k): _sanitize(v) for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        return [_sanitize(v) for v in value]

    return str(value)


def describe(module: str, action: ActivityAction) -> str:
    return _DESCRIPTIONS[action].format(module=module)


def extract_record_id(
    record_id: Optional[object],
    new_value: Optional[Mapping[str, Any]],
    old_value: Optional[Mapping[str, Any]],
) -> Optional[str]:
    """Id explícito, si no new_value["id"], si no old_value["id"]."""
    if record_id:
        return str(record_id)
    for value in (new_value, old_value):
        if isinstance(value, Mapping) and value.get("id"):
            return str(value["id"])
    return None


class ActivityRecorder:
    def __init__(
        self,
        repository: ActivityLogRepository,
        actor_resolver: ActorResolver,
        dispatcher: AuditDispatcher | None = None,
    ):
        self._repository = repository
        self._actor_resolver = actor_resolver
        self._dispatcher = dispatcher

    def record(
        self,
        actor_id: Optional[str],
        module: str,
        action: ActivityAction | str,
        old_value: Optional[Mapping[str, Any]] = None,
        new_value: Optional[Mapping[str, Any]] = None,
        request: Optional[RequestContext] = None,
        *,
        record_id: Optional[object] = None,
        description: Optional[str] = None,
    ) -> None:
        """
        Registra una acción. Nunca lanza excepción.

        Con dispatcher la escritura queda encolada (no se espera); sin
        dispatcher se ejecuta inline.
        """
        try:
            action = ActivityAction(action)
            args = (
                actor_id,
                module,
                action,
                _sanitize(old_value) if old_value is not None else None,
                _sanitize(new_value) if new_value is not None else None,
                request or RequestContext(),
                extract_record_id(record_id, new_value, old_value),
                description or describe(module, action),
            )
            if self._dispatcher is None:
                self._write(*args)
            else:
                self._dispatcher.submit(self._write, *args)
        except Exception as exc:
            record_audit_failure("dispatch")
            logger.warning(
                "Activity log: no se pudo encolar la entrada",
                extra={"audit_module": module, "action": str(action), "error": str(exc)},
            )

    def _write(
        self,
        actor_id: Optional[str],
        module: str,
        action: ActivityAction,
        old_values: Optional[dict],
        new_values: Optional[dict],
        request: RequestContext,
        record_id: Optional[str],
        description: str,
    ) -> None:
        try:
            actor = self._actor_resolver.resolve(actor_id) if actor_id else None
        except Exception as exc:
            record_audit_failure("resolve")
            logger.warning(
                "Activity log: falló la resolución del actor",
                extra={"actor_id": actor_id, "error": str(exc)},
            )
            return

        if actor is None:
            record_audit_failure("resolve")
            logger.warning(
                "Activity log: actor no encontrado, entrada descartada",
                extra={"actor_id": actor_id, "audit_module": module, "action": action.value},
            )
            return

        entry = ActivityLogEntry(
            actor=actor,
            action=action,
            module=module,
            record_id=record_id,
            description=description,
            changes=ChangeSet(old_values=old_values, new_values=new_values),
            request=request,
        )

        try:
            self._repository.append(entry)
        except Exception as exc:
            record_audit_failure("persist")
            logger.error(
                "Activity log: falló la persistencia",
                extra={
                    "entry_id": str(entry.id),
                    "audit_module": module,
                    "action": action.value,
                    "error": str(exc),
                },
            )
            return

        record_audit_entry(action.value)
