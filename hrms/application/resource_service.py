"""
===============================================================================
TARJETA CRC — application/resource_service.py
===============================================================================

Componente:
  ResourceService (CRUD genérico sobre cualquier recurso registrado)

Responsabilidades:
  - create: asigna id (UUID), id legible secuencial, flag false y timestamps.
  - get / list (page + limit + search + filtro archived, más nuevos primero).
  - update: guarda pre-image; ignora campos protegidos.
  - archive (DELETE): flag true (soft delete) y pre-image para auditoría.
    Recursos con estado (Performance) pasan a status "Archived".
  - Devolver ActionResult explícito (lo consume el AuditInterceptor).

Colaboradores:
  - domain.registry.ResourceRegistry
  - domain.repositories.SequenceRepository
  - application.audit_interceptor.ActionResult
  - crosscutting.pagination

Reglas:
  - No existe borrado físico.
  - Id malformado se trata como inexistente (404).
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from ..crosscutting.exceptions import InvalidIdentifierError
from ..crosscutting.pagination import PageRequest, total_pages
from ..domain.entities import (
    CREATED_AT_FIELD,
    RECORD_ID_FIELD,
    UPDATED_AT_FIELD,
    Capability,
    Record,
    format_human_id,
    utcnow,
)
from ..domain.registry import RegisteredResource
from ..domain.repositories import SequenceRepository
from .archive_store import normalize_record_id
from .audit_interceptor import ActionResult

logger = logging.getLogger(__name__)


@dataclass
class ResourcePage:
    total: int
    total_pages: int
    current_page: int
    limit: int
    data: List[Record] = field(default_factory=list)


class ResourceService:
    def __init__(self, sequences: SequenceRepository):
        self._sequences = sequences

    @staticmethod
    def _not_found(resource: RegisteredResource) -> ActionResult:
        return ActionResult(404, message=f"{resource.name} not found")

    @staticmethod
    def _lookup_id(record_id: str) -> Optional[str]:
        try:
            return normalize_record_id(record_id)
        except InvalidIdentifierError:
            return None

    @staticmethod
    def _writable(resource: RegisteredResource, body: Mapping[str, Any]) -> Record:
        protected = resource.descriptor.protected_fields
        return {k: v for k, v in body.items() if k not in protected}

    def create(self, resource: RegisteredResource, body: Mapping[str, Any]) -> ActionResult:
        d = resource.descriptor
        now = utcnow()
        record: Record = self._writable(resource, body)
        record[RECORD_ID_FIELD] = str(uuid4())
        if Capability.SEQUENTIAL_ID in d.capabilities:
            seq = self._sequences.next_value(d.collection)
            record[d.id_field] = format_human_id(d.id_prefix, seq)
        if d.archive_flag:
            record[d.archive_flag] = False
        record[CREATED_AT_FIELD] = now
        record[UPDATED_AT_FIELD] = now

        created = resource.repository.insert(record)
        logger.info(
            "Registro creado",
            extra={"resource": d.name, "record_id": created[RECORD_ID_FIELD]},
        )
        return ActionResult(201, payload=created, message=f"{d.name} created successfully")

    def get(self, resource: RegisteredResource, record_id: str) -> ActionResult:
        normalized = self._lookup_id(record_id)
        record = resource.repository.get(normalized) if normalized else None
        if record is None:
            return self._not_found(resource)
        return ActionResult(200, payload=record, message=f"{resource.name} fetched successfully")

    def list(
        self,
        resource: RegisteredResource,
        page: PageRequest,
        *,
        search: Optional[str] = None,
        archived: bool = False,
    ) -> ResourcePage:
        search = (search or "").strip() or None
        repo = resource.repository
        total = repo.count_records(archived=archived, search=search)
        data = repo.list_records(
            archived=archived, search=search, limit=page.limit, offset=page.offset
        )
        return ResourcePage(
            total=total,
            total_pages=total_pages(total, page.limit),
            current_page=page.page,
            limit=page.limit,
            data=data,
        )

    def update(
        self, resource: RegisteredResource, record_id: str, body: Mapping[str, Any]
    ) -> ActionResult:
        normalized = self._lookup_id(record_id)
        previous = resource.repository.get(normalized) if normalized else None
        if previous is None:
            return self._not_found(resource)

        changes: Dict[str, Any] = self._writable(resource, body)
        updated = resource.repository.update(normalized, changes)
        if updated is None:
            return self._not_found(resource)
        return ActionResult(
            200,
            payload=updated,
            message=f"{resource.name} updated successfully",
            previous=previous,
        )

    def archive(self, resource: RegisteredResource, record_id: str) -> ActionResult:
        caps = resource.descriptor.capabilities
        if not caps & {Capability.ARCHIVE, Capability.STATUS_ARCHIVE}:
            return ActionResult(405, message=f"{resource.name} does not support archiving")

        normalized = self._lookup_id(record_id)
        previous = resource.repository.get(normalized) if normalized else None
        if previous is None:
            return self._not_found(resource)

        if Capability.ARCHIVE in caps:
            archived = resource.repository.archive_by_id(normalized)
        else:
            archived = self._mark_archived_status(resource, normalized)
        if archived is None:
            return self._not_found(resource)
        return ActionResult(
            200,
            payload=archived,
            message=f"{resource.name} archived successfully",
            previous=previous,
        )

    @staticmethod
    def _mark_archived_status(
        resource: RegisteredResource, record_id: str
    ) -> Optional[Record]:
        d = resource.descriptor
        return resource.repository.update(record_id, {d.status_field: d.archived_status})
