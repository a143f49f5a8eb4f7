"""
===============================================================================
TARJETA CRC — application/archive_store.py
===============================================================================

Componente:
  ArchiveStore (operaciones por modelo sobre un ArchivableRepository)

Responsabilidades:
  - Resolver el modelo por nombre en el ResourceRegistry (ModelNotFound).
  - Validar identificadores de registro (InvalidIdentifier).
  - Ejecutar find/count/restore y envolver fallas del repositorio en
    StorageError con operación + modelo en el mensaje.
  - restore_one: RecordNotFound si el id no existe; idempotente si ya activo.

Colaboradores:
  - domain.registry.ResourceRegistry
  - domain.repositories.ArchivableRepository
  - crosscutting.exceptions
===============================================================================
"""

from __future__ import annotations

import logging
from typing import Callable, List, TypeVar
from uuid import UUID

from ..crosscutting.exceptions import (
    HRMSError,
    InvalidIdentifierError,
    RecordNotFoundError,
    StorageError,
)
from ..domain.entities import Record
from ..domain.registry import ArchivableModel, ResourceRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


def normalize_record_id(record_id: object) -> str:
    """UUID canónico en minúsculas; cualquier otra cosa es InvalidIdentifier."""
    try:
        return str(UUID(str(record_id).strip()))
    except (ValueError, AttributeError, TypeError) as exc:
        raise InvalidIdentifierError(str(record_id)) from exc


class ArchiveStore:
    def __init__(self, registry: ResourceRegistry):
        self._registry = registry

    def models(self) -> List[ArchivableModel]:
        """Modelos archivables en orden de registro (snapshot nuevo)."""
        return self._registry.list_archivable()

    def model(self, model_name: str) -> ArchivableModel:
        return self._registry.get_archivable(model_name)

    def _call(self, operation: str, model: ArchivableModel, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except HRMSError:
            raise
        except Exception as exc:
            logger.exception(
                "ArchiveStore: operación falló",
                extra={"operation": operation, "model": model.name},
            )
            raise StorageError(
                f"{operation} failed for model '{model.name}': {exc}",
                original_error=exc,
            ) from exc

    def find_archived(self, model_name: str) -> List[Record]:
        model = self.model(model_name)
        return self._call("find_archived", model, model.repository.find_archived)

    def find_all(self, model_name: str) -> List[Record]:
        model = self.model(model_name)
        return self._call("find_all", model, model.repository.find_all)

    def count_archived(self, model_name: str) -> int:
        model = self.model(model_name)
        return self._call(
            "count_archived", model, lambda: model.repository.count_by_flag(True)
        )

    def count_active(self, model_name: str) -> int:
        model = self.model(model_name)
        return self._call(
            "count_active", model, lambda: model.repository.count_by_flag(False)
        )

    def restore_all(self, model_name: str) -> int:
        model = self.model(model_name)
        return self._call("restore_all", model, model.repository.restore_all)

    def restore_one(self, model_name: str, record_id: object) -> Record:
        model = self.model(model_name)
        normalized = normalize_record_id(record_id)
        restored = self._call(
            "restore_one", model, lambda: model.repository.restore_by_id(normalized)
        )
        if restored is None:
            raise RecordNotFoundError(model.name, normalized)
        return restored
