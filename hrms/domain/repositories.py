"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for HR records, archive lifecycle, activity log
  and sequential id counters (ports).
- Keep application/domain independent from infrastructure (PostgreSQL, in-memory).
- Enable dependency inversion and straightforward unit testing (mock/stub repositories).

Collaborators
- domain.entities: Record
- domain.activity: ActivityLogEntry, ActorSnapshot
- infrastructure.repositories: postgres/*, in_memory/* implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Records cross the boundary as copies; callers may mutate what they receive.
- Activity log is append-only: there is no update/delete contract.

Notes
- We use typing.Protocol for structural subtyping ("duck typing").
- One repository instance serves one collection; the soft-delete flag field is
  bound at construction time, so archive methods take no flag argument.
"""

from typing import List, Optional, Protocol

from .activity import ActivityLogEntry, ActorSnapshot
from .entities import Record


class ArchivableRepository(Protocol):
    """
    R: Archive lifecycle over one collection.

    Semantics:
      - A missing/null flag counts as active.
      - Only the flag changes on restore; every other field is preserved.
    """

    def find_archived(self) -> List[Record]:
        """R: Archived records, newest created_at first."""
        ...

    def count_by_flag(self, archived: bool) -> int:
        ...

    def restore_all(self) -> int:
        """R: Flip every archived record to active. Returns transitioned count."""
        ...

    def restore_by_id(self, record_id: str) -> Optional[Record]:
        """
        R: Set flag false on one record.

        Returns:
            The (post-restore) record, or None when the id does not exist.
            Already-active records are returned unchanged.
        """
        ...

    def find_all(self) -> List[Record]:
        """R: Every record regardless of flag (backup export)."""
        ...


class RecordRepository(ArchivableRepository, Protocol):
    """R: CRUD over one HR collection (plus archive lifecycle when flagged)."""

    def insert(self, record: Record) -> Record:
        ...

    def get(self, record_id: str) -> Optional[Record]:
        ...

    def update(self, record_id: str, changes: Record) -> Optional[Record]:
        """R: Shallow merge `changes` into the stored record. None if missing."""
        ...

    def archive_by_id(self, record_id: str) -> Optional[Record]:
        """R: Set flag true (soft delete). None if missing."""
        ...

    def list_records(
        self,
        *,
        archived: Optional[bool] = False,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Record]:
        """R: Newest first; `archived=None` disables the flag filter."""
        ...

    def count_records(
        self,
        *,
        archived: Optional[bool] = False,
        search: Optional[str] = None,
    ) -> int:
        ...


class ActivityLogRepository(Protocol):
    """R: Append-only store of ActivityLogEntry."""

    def append(self, entry: ActivityLogEntry) -> None:
        ...

    def list_entries(
        self,
        *,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[ActivityLogEntry]:
        """R: Newest first; search over action, module, actor name/email/role."""
        ...

    def count_entries(self, *, search: Optional[str] = None) -> int:
        ...


class SequenceRepository(Protocol):
    """R: Atomic counters backing human-readable ids (EMP-0001)."""

    def next_value(self, key: str) -> int:
        ...


class ActorResolver(Protocol):
    """R: Resolve an actor id into an identity snapshot (None if unknown)."""

    def resolve(self, actor_id: str) -> Optional[ActorSnapshot]:
        ...
