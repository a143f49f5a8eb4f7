"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (descriptores de recursos HR y registros archivables)

Responsabilidades:
    - Describir cada recurso HR de forma explícita (nombre, colección, módulo,
      prefijo de id legible, campo flag de archivado).
    - Derivar capacidades (ARCHIVE) del descriptor, sin reflexión en runtime.
    - Ofrecer helpers mínimos sobre registros (dict) para leer el flag.

Colaboradores:
    - domain.registry: registra descriptores + repositorios.
    - domain.resources: catálogo HR concreto.
    - application.archive_store / resource_service: consumen descriptores.

Principios:
    - Sin dependencias a DB/FastAPI.
    - Los registros son documentos planos (dict); el flag puede faltar y
      entonces cuenta como "activo".
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional

# Un registro HR es un documento plano.
Record = Dict[str, Any]

RECORD_ID_FIELD = "id"
CREATED_AT_FIELD = "created_at"
UPDATED_AT_FIELD = "updated_at"


def utcnow() -> datetime:
    """Fecha/hora UTC (fuente única para timestamps de registros)."""
    return datetime.now(timezone.utc)


class Capability(str, Enum):
    """Capacidades que un recurso registrado puede ofrecer."""

    CRUD = "crud"
    ARCHIVE = "archive"
    STATUS_ARCHIVE = "status_archive"
    SEQUENTIAL_ID = "sequential_id"


@dataclass(frozen=True, slots=True)
class ResourceDescriptor:
    """
    Descripción estática de un recurso HR.

    - `archive_flag` None => el recurso NO es archivable (Performance, Role).
    - `id_prefix` None => el recurso no genera id legible (Role).
    - `status_field` + `archived_status`: DELETE marca el estado en lugar del
      flag (Performance pasa a "Archived"); sigue fuera del subsistema de archivo.
    """

    name: str
    collection: str
    module_label: str
    id_prefix: Optional[str] = None
    id_field: Optional[str] = None
    archive_flag: Optional[str] = None
    status_field: Optional[str] = None
    archived_status: Optional[str] = None

    @property
    def is_archivable(self) -> bool:
        return bool(self.archive_flag)

    @property
    def capabilities(self) -> FrozenSet[Capability]:
        caps = {Capability.CRUD}
        if self.is_archivable:
            caps.add(Capability.ARCHIVE)
        if self.status_field and self.archived_status:
            caps.add(Capability.STATUS_ARCHIVE)
        if self.id_prefix and self.id_field:
            caps.add(Capability.SEQUENTIAL_ID)
        return frozenset(caps)

    @property
    def protected_fields(self) -> FrozenSet[str]:
        """Campos que el cliente no puede escribir vía update."""
        fields = {RECORD_ID_FIELD, CREATED_AT_FIELD, UPDATED_AT_FIELD}
        if self.id_field:
            fields.add(self.id_field)
        if self.archive_flag:
            fields.add(self.archive_flag)
        return frozenset(fields)


def is_archived(record: Mapping[str, Any], flag_field: str) -> bool:
    """Lee el flag de archivado; ausente o null cuenta como activo."""
    return bool(record.get(flag_field) or False)


def format_human_id(prefix: str, value: int) -> str:
    """Id legible y secuencial: EMP-0001, DEPT-0012, ..."""
    return f"{prefix}-{value:04d}"
