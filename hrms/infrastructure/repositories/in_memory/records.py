"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/records.py
============================================================
Class: InMemoryRecordRepository

Responsibilities:
  - Almacenar registros HR (documentos dict) de UNA colección en memoria.
  - Implementar CRUD + ciclo de archivado (flag de soft-delete por recurso).
  - Mantener ordering determinístico alineado con Postgres:
      ORDER BY created_at DESC, id DESC

Collaborators:
  - domain.repositories.RecordRepository (contrato a implementar)
  - domain.entities (helpers de flag y timestamps)

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Copias defensivas: nunca se entrega el dict almacenado.
  - Restaurar/archivar sólo toca el flag (updated_at incluido queda igual).
============================================================
"""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Iterable, List, Optional

from ....domain.entities import (
    CREATED_AT_FIELD,
    RECORD_ID_FIELD,
    UPDATED_AT_FIELD,
    Record,
    is_archived,
    utcnow,
)


def _matches(record: Record, needle: str) -> bool:
    """Búsqueda case-insensitive sobre los valores escalares del registro."""
    for value in record.values():
        if isinstance(value, (dict, list)):
            continue
        if value is not None and needle in str(value).lower():
            return True
    return False


class InMemoryRecordRepository:
    """
    Repositorio in-memory, thread-safe, para una colección HR.

    `flag_field` None => colección no archivable: los métodos de archivo
    operan como si no hubiera registros archivados.
    """

    def __init__(self, collection: str, flag_field: Optional[str] = None) -> None:
        self.collection = collection
        self.flag_field = flag_field
        self._lock = Lock()
        self._records: Dict[str, Record] = {}

    # =========================================================
    # Helpers internos
    # =========================================================
    @staticmethod
    def _sort_key(record: Record):
        created = record.get(CREATED_AT_FIELD) or datetime.min.replace(
            tzinfo=timezone.utc
        )
        return (created, str(record.get(RECORD_ID_FIELD, "")))

    @classmethod
    def _sorted(cls, items: Iterable[Record]) -> List[Record]:
        return sorted(items, key=cls._sort_key, reverse=True)

    def _archived(self, record: Record) -> bool:
        return bool(self.flag_field) and is_archived(record, self.flag_field)

    def _filtered(
        self, archived: Optional[bool], search: Optional[str]
    ) -> List[Record]:
        items = list(self._records.values())
        if archived is not None and self.flag_field:
            items = [r for r in items if self._archived(r) == archived]
        needle = (search or "").strip().lower()
        if needle:
            items = [r for r in items if _matches(r, needle)]
        return items

    # =========================================================
    # CRUD
    # =========================================================
    def insert(self, record: Record) -> Record:
        stored = copy.deepcopy(record)
        with self._lock:
            self._records[str(stored[RECORD_ID_FIELD])] = stored
            return copy.deepcopy(stored)

    def get(self, record_id: str) -> Optional[Record]:
        with self._lock:
            record = self._records.get(str(record_id))
            return copy.deepcopy(record) if record is not None else None

    def update(self, record_id: str, changes: Record) -> Optional[Record]:
        with self._lock:
            record = self._records.get(str(record_id))
            if record is None:
                return None
            record.update(copy.deepcopy(changes))
            record[UPDATED_AT_FIELD] = utcnow()
            return copy.deepcopy(record)

    def archive_by_id(self, record_id: str) -> Optional[Record]:
        with self._lock:
            record = self._records.get(str(record_id))
            if record is None:
                return None
            if self.flag_field:
                record[self.flag_field] = True
            return copy.deepcopy(record)

    def list_records(
        self,
        *,
        archived: Optional[bool] = False,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Record]:
        if limit <= 0:
            return []
        with self._lock:
            items = self._sorted(self._filtered(archived, search))
            return copy.deepcopy(items[max(0, offset) : max(0, offset) + limit])

    def count_records(
        self,
        *,
        archived: Optional[bool] = False,
        search: Optional[str] = None,
    ) -> int:
        with self._lock:
            return len(self._filtered(archived, search))

    # =========================================================
    # Archive lifecycle
    # =========================================================
    def find_archived(self) -> List[Record]:
        with self._lock:
            items = [r for r in self._records.values() if self._archived(r)]
            return copy.deepcopy(self._sorted(items))

    def count_by_flag(self, archived: bool) -> int:
        with self._lock:
            return sum(1 for r in self._records.values() if self._archived(r) == archived)

    def restore_all(self) -> int:
        restored = 0
        with self._lock:
            for record in self._records.values():
                if self._archived(record):
                    record[self.flag_field] = False
                    restored += 1
        return restored

    def restore_by_id(self, record_id: str) -> Optional[Record]:
        with self._lock:
            record = self._records.get(str(record_id))
            if record is None:
                return None
            if self._archived(record):
                record[self.flag_field] = False
            return copy.deepcopy(record)

    def find_all(self) -> List[Record]:
        with self._lock:
            return copy.deepcopy(self._sorted(self._records.values()))

    # -------------------------------------------------------------------------
    # Testing helpers
    # -------------------------------------------------------------------------
    def clear(self) -> None:
        with self._lock:
            self._records.clear()
