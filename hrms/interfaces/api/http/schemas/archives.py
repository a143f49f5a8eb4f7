"""
===============================================================================
TARJETA CRC — schemas/archives.py
===============================================================================

Módulo:
    Schemas HTTP para el subsistema de archivo/restauración

Responsabilidades:
    - Definir DTOs de respuesta (camelCase) para /archives/*.
    - Mapear resultados del ArchiveService (dataclasses) -> DTOs.

Colaboradores:
    - application.archive_results
    - routers.archives
===============================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .....application.archive_results import (
    ArchiveSnapshotResult,
    BackupResult,
    ModelArchiveResult,
    ModelStats,
    RestoreAllResult,
    RestoreModelResult,
    RestoreRecordResult,
)
from .common import CamelModel

Record = Dict[str, Any]


class ArchivedCollectionRes(CamelModel):
    collection: str
    count: int
    records: List[Record]


class ArchiveSnapshotRes(CamelModel):
    success: bool = True
    total_tables: int
    total_records: int
    archives: Dict[str, ArchivedCollectionRes]


class RestoredCollectionRes(CamelModel):
    collection: str
    restored: int


class RestoreAllRes(CamelModel):
    success: bool = True
    message: str
    total_restored: int
    details: Dict[str, RestoredCollectionRes]
    backup: Optional[str] = None


class RestoreRecordRes(CamelModel):
    success: bool = True
    message: str
    data: Record


class RestoreModelRes(CamelModel):
    success: bool = True
    message: str
    model: str
    collection: str
    count: int
    backup: Optional[str] = None


class ModelArchiveRes(CamelModel):
    success: bool = True
    model: str
    collection: str
    count: int
    records: List[Record]


class ModelStatsRes(CamelModel):
    model: str
    collection: str
    archived: int
    active: int
    total: int


class ArchiveStatsRes(CamelModel):
    success: bool = True
    stats: List[ModelStatsRes]


class BackupRes(CamelModel):
    success: bool = True
    message: str
    path: str
    total_records: int


# -----------------------------------------------------------------------------
# Mappers
# -----------------------------------------------------------------------------
def to_snapshot_res(result: ArchiveSnapshotResult) -> ArchiveSnapshotRes:
    return ArchiveSnapshotRes(
        total_tables=result.total_tables,
        total_records=result.total_records,
        archives={
            name: ArchivedCollectionRes(
                collection=a.collection, count=a.count, records=a.records
            )
            for name, a in result.archives.items()
        },
    )


def to_restore_all_res(result: RestoreAllResult) -> RestoreAllRes:
    return RestoreAllRes(
        message=result.message,
        total_restored=result.total_restored,
        details={
            name: RestoredCollectionRes(collection=d.collection, restored=d.restored)
            for name, d in result.details.items()
        },
        backup=result.backup,
    )


def to_restore_record_res(result: RestoreRecordResult) -> RestoreRecordRes:
    return RestoreRecordRes(message=result.message, data=result.data)


def to_restore_model_res(result: RestoreModelResult) -> RestoreModelRes:
    return RestoreModelRes(
        message=result.message,
        model=result.model,
        collection=result.collection,
        count=result.count,
        backup=result.backup,
    )


def to_model_archive_res(result: ModelArchiveResult) -> ModelArchiveRes:
    return ModelArchiveRes(
        model=result.model,
        collection=result.collection,
        count=result.count,
        records=result.records,
    )


def to_stats_res(stats: List[ModelStats]) -> ArchiveStatsRes:
    return ArchiveStatsRes(
        stats=[
            ModelStatsRes(
                model=s.model,
                collection=s.collection,
                archived=s.archived,
                active=s.active,
                total=s.total,
            )
            for s in stats
        ]
    )


def to_backup_res(result: BackupResult) -> BackupRes:
    return BackupRes(
        message=result.message, path=result.path, total_records=result.total_records
    )
