# =============================================================================
# FILE: infrastructure/repositories/in_memory/activity_log.py
# =============================================================================
"""
In-Memory Activity Log Repository for testing and development.

NOT FOR PRODUCTION USE - data is lost on restart.
"""

from __future__ import annotations

from threading import Lock
from typing import List, Optional

from ....domain.activity import ActivityLogEntry


def _matches(entry: ActivityLogEntry, needle: str) -> bool:
    haystack = (
        entry.action.value,
        entry.module,
        entry.actor.name,
        entry.actor.email,
        entry.actor.role,
    )
    return any(needle in (value or "").lower() for value in haystack)


class InMemoryActivityLogRepository:
    """
    In-memory implementation of ActivityLogRepository.

    Append-only: entries are frozen dataclasses and there is no
    update/delete method.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._entries: List[ActivityLogEntry] = []

    def append(self, entry: ActivityLogEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def _filtered(self, search: Optional[str]) -> List[ActivityLogEntry]:
        needle = (search or "").strip().lower()
        items = list(self._entries)
        if needle:
            items = [e for e in items if _matches(e, needle)]
        # created_at DESC, id DESC (estable con timestamps iguales)
        items.sort(key=lambda e: (e.created_at, str(e.id)), reverse=True)
        return items

    def list_entries(
        self,
        *,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[ActivityLogEntry]:
        if limit <= 0:
            return []
        with self._lock:
            items = self._filtered(search)
        offset = max(0, offset)
        return items[offset : offset + limit]

    def count_entries(self, *, search: Optional[str] = None) -> int:
        with self._lock:
            return len(self._filtered(search))

    # -------------------------------------------------------------------------
    # Testing helpers
    # -------------------------------------------------------------------------
    def get_all_entries(self) -> List[ActivityLogEntry]:
        """Entries in insertion order (for testing)."""
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
