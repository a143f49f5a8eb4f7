"""
===============================================================================
TARJETA CRC — domain/registry.py
===============================================================================

Módulo:
    ResourceRegistry (registro explícito de recursos HR)

Responsabilidades:
    - Registrar descriptor + repositorio por recurso al arrancar.
    - Enumerar los modelos archivables (capacidad ARCHIVE) en orden de registro.
    - Resolver un nombre de modelo a su registración o fallar con ModelNotFound.

Colaboradores:
    - domain.entities.ResourceDescriptor
    - domain.repositories.RecordRepository
    - application.archive_store / archive_service / resource_service

Notas:
    - list_archivable() devuelve una lista nueva en cada llamada: registraciones
      posteriores aparecen en llamadas posteriores.
    - Thread-safe (Lock) porque los handlers corren en el threadpool de FastAPI.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from threading import Lock
from typing import Dict, List

from ..crosscutting.exceptions import ModelNotFoundError
from .entities import Capability, ResourceDescriptor
from .repositories import RecordRepository


@dataclass(frozen=True, slots=True)
class RegisteredResource:
    descriptor: ResourceDescriptor
    repository: RecordRepository

    @property
    def name(self) -> str:
        return self.descriptor.name


@dataclass(frozen=True, slots=True)
class ArchivableModel:
    """Vista mínima de un modelo archivable (lo que consume el Archive Store)."""

    name: str
    collection: str
    flag_field: str
    repository: RecordRepository


class ResourceRegistry:
    def __init__(self) -> None:
        self._lock = Lock()
        self._entries: Dict[str, RegisteredResource] = {}

    def register(
        self, descriptor: ResourceDescriptor, repository: RecordRepository
    ) -> RegisteredResource:
        """Registra (o reemplaza) un recurso. El orden de registro se preserva."""
        entry = RegisteredResource(descriptor=descriptor, repository=repository)
        with self._lock:
            self._entries[descriptor.name] = entry
        return entry

    def names(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def all(self) -> List[RegisteredResource]:
        with self._lock:
            return list(self._entries.values())

    def get(self, name: str) -> RegisteredResource:
        """Cualquier recurso registrado (archivable o no)."""
        with self._lock:
            entry = self._entries.get(name)
        if entry is None:
            raise ModelNotFoundError(name)
        return entry

    def find_by_collection(self, collection: str) -> RegisteredResource:
        """Resuelve por nombre de colección (ej: "employees" -> Employee)."""
        with self._lock:
            for entry in self._entries.values():
                if entry.descriptor.collection == collection:
                    return entry
        raise ModelNotFoundError(collection)

    def list_archivable(self) -> List[ArchivableModel]:
        with self._lock:
            entries = list(self._entries.values())
        return [
            _as_archivable(e)
            for e in entries
            if Capability.ARCHIVE in e.descriptor.capabilities
        ]

    def get_archivable(self, name: str) -> ArchivableModel:
        with self._lock:
            entry = self._entries.get(name)
        if entry is None or Capability.ARCHIVE not in entry.descriptor.capabilities:
            raise ModelNotFoundError(name)
        return _as_archivable(entry)


def _as_archivable(entry: RegisteredResource) -> ArchivableModel:
    d = entry.descriptor
    return ArchivableModel(
        name=d.name,
        collection=d.collection,
        flag_field=d.archive_flag or "",
        repository=entry.repository,
    )
