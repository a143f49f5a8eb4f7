"""
Resultados del ArchiveService (dataclasses).

Los routers los convierten a schemas Pydantic (camelCase en el wire).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..domain.entities import Record


@dataclass
class ArchivedCollection:
    collection: str
    count: int
    records: List[Record] = field(default_factory=list)


@dataclass
class ArchiveSnapshotResult:
    total_tables: int
    total_records: int
    archives: Dict[str, ArchivedCollection]


@dataclass
class RestoredCollection:
    collection: str
    restored: int


@dataclass
class RestoreAllResult:
    message: str
    total_restored: int
    details: Dict[str, RestoredCollection]
    backup: Optional[str] = None


@dataclass
class RestoreRecordResult:
    message: str
    data: Record


@dataclass
class RestoreModelResult:
    message: str
    model: str
    collection: str
    count: int
    backup: Optional[str] = None


@dataclass
class ModelArchiveResult:
    model: str
    collection: str
    count: int
    records: List[Record] = field(default_factory=list)


@dataclass
class ModelStats:
    model: str
    collection: str
    archived: int
    active: int

    @property
    def total(self) -> int:
        return self.archived + self.active


@dataclass
class BackupResult:
    message: str
    path: str
    total_records: int
