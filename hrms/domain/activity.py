"""
===============================================================================
TARJETA CRC — domain/activity.py
===============================================================================

Módulo:
    Entidades del Activity Log (registro de auditoría append-only)

Responsabilidades:
    - Representar una entrada inmutable del activity log.
    - Capturar el snapshot del actor al momento del evento (no se re-resuelve).
    - Modelar los cambios (valores previos / nuevos) y el contexto HTTP.

Colaboradores:
    - application.activity_recorder: construye entradas.
    - domain.repositories.ActivityLogRepository: las persiste.
    - interfaces.api.http.schemas.activities: las serializa.

Reglas:
    - Frozen dataclasses: no existe camino de update/delete.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from .entities import utcnow


class ActivityAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"


@dataclass(frozen=True, slots=True)
class ActorSnapshot:
    """Identidad del actor tal como era al momento del evento."""

    user_id: str
    name: str
    email: str
    role: str


@dataclass(frozen=True, slots=True)
class ChangeSet:
    old_values: Optional[Dict[str, Any]] = None
    new_values: Optional[Dict[str, Any]] = None


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Contexto HTTP mínimo del request que originó el evento."""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    method: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ActivityLogEntry:
    actor: ActorSnapshot
    action: ActivityAction
    module: str
    description: str
    changes: ChangeSet = field(default_factory=ChangeSet)
    request: RequestContext = field(default_factory=RequestContext)
    record_id: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
