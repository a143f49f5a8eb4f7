"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.
    - Mantener estable el "surface area" del dominio.

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .activity import (
    ActivityAction,
    ActivityLogEntry,
    ActorSnapshot,
    ChangeSet,
    RequestContext,
)
from .entities import (
    Capability,
    Record,
    ResourceDescriptor,
    format_human_id,
    is_archived,
)
from .registry import ArchivableModel, RegisteredResource, ResourceRegistry
from .repositories import (
    ActivityLogRepository,
    ActorResolver,
    ArchivableRepository,
    RecordRepository,
    SequenceRepository,
)
from .resources import HR_RESOURCES, register_hr_resources

__all__ = [
    "ActivityAction",
    "ActivityLogEntry",
    "ActivityLogRepository",
    "ActorResolver",
    "ActorSnapshot",
    "ArchivableModel",
    "ArchivableRepository",
    "Capability",
    "ChangeSet",
    "HR_RESOURCES",
    "Record",
    "RecordRepository",
    "RegisteredResource",
    "RequestContext",
    "ResourceDescriptor",
    "ResourceRegistry",
    "SequenceRepository",
    "format_human_id",
    "is_archived",
    "register_hr_resources",
]
