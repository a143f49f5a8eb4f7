"""
===============================================================================
TARJETA CRC — application/archive_service.py
===============================================================================

Componente:
  ArchiveService (orquestador de archivo/restauración sobre todos los modelos)

Responsabilidades:
  - Snapshot de archivados (omitiendo modelos con 0 archivados).
  - Restauración masiva con resumen por modelo (omitiendo modelos con 0).
  - Restauración por id y por modelo (restore-table).
  - Estadísticas por modelo (siempre todos los modelos archivables).
  - Backup JSON de todos los registros, opcionalmente antes de restaurar.

Colaboradores:
  - application.archive_store.ArchiveStore (operaciones por modelo)
  - application.backup.BackupWriter
  - crosscutting.metrics (restaurados por modelo)

Reglas:
  - Las agregaciones recorren los modelos en secuencia; si un modelo falla,
    falla la operación completa (no hay resultados parciales).
  - Si el backup previo a una restauración falla, no se restaura nada.
===============================================================================
"""

from __future__ import annotations

import logging
from typing import Dict, List

from ..crosscutting.metrics import record_restored
from .archive_results import (
    ArchivedCollection,
    ArchiveSnapshotResult,
    BackupResult,
    ModelArchiveResult,
    ModelStats,
    RestoreAllResult,
    RestoredCollection,
    RestoreModelResult,
    RestoreRecordResult,
)
from .archive_store import ArchiveStore
from .backup import BackupWriter

logger = logging.getLogger(__name__)


class ArchiveService:
    def __init__(
        self,
        store: ArchiveStore,
        backup_writer: BackupWriter,
        *,
        backup_before_restore: bool = True,
    ):
        self._store = store
        self._backup_writer = backup_writer
        self._backup_before_restore = backup_before_restore

    def _pre_restore_backup(self) -> str | None:
        if not self._backup_before_restore:
            return None
        return self.create_backup().path

    # ------------------------------------------------------------------
    # Lecturas
    # ------------------------------------------------------------------
    def get_all_archived_data(self) -> ArchiveSnapshotResult:
        archives: Dict[str, ArchivedCollection] = {}
        for model in self._store.models():
            records = self._store.find_archived(model.name)
            if records:
                archives[model.name] = ArchivedCollection(
                    collection=model.collection,
                    count=len(records),
                    records=records,
                )

        return ArchiveSnapshotResult(
            total_tables=len(archives),
            total_records=sum(a.count for a in archives.values()),
            archives=archives,
        )

    def get_archived_by_model(self, model_name: str) -> ModelArchiveResult:
        model = self._store.model(model_name)
        records = self._store.find_archived(model.name)
        return ModelArchiveResult(
            model=model.name,
            collection=model.collection,
            count=len(records),
            records=records,
        )

    def get_archive_stats(self) -> List[ModelStats]:
        stats: List[ModelStats] = []
        for model in self._store.models():
            stats.append(
                ModelStats(
                    model=model.name,
                    collection=model.collection,
                    archived=self._store.count_archived(model.name),
                    active=self._store.count_active(model.name),
                )
            )
        return stats

    # ------------------------------------------------------------------
    # Restauración
    # ------------------------------------------------------------------
    def restore_all_archived(self) -> RestoreAllResult:
        backup_path = self._pre_restore_backup()

        details: Dict[str, RestoredCollection] = {}
        total = 0
        for model in self._store.models():
            restored = self._store.restore_all(model.name)
            record_restored(model.name, restored)
            if restored > 0:
                details[model.name] = RestoredCollection(
                    collection=model.collection, restored=restored
                )
                total += restored

        logger.info(
            "Restauración masiva completada",
            extra={"total_restored": total, "tables": len(details)},
        )
        return RestoreAllResult(
            message=f"Restored {total} records from {len(details)} tables.",
            total_restored=total,
            details=details,
            backup=backup_path,
        )

    def restore_by_id(self, model_name: str, record_id: str) -> RestoreRecordResult:
        record = self._store.restore_one(model_name, record_id)
        model = self._store.model(model_name)
        logger.info(
            "Registro restaurado",
            extra={"model": model.name, "record_id": record.get("id")},
        )
        return RestoreRecordResult(
            message=f"Record restored from {model.name}", data=record
        )

    def restore_model(self, model_name: str) -> RestoreModelResult:
        model = self._store.model(model_name)
        backup_path = self._pre_restore_backup()

        count = self._store.restore_all(model.name)
        record_restored(model.name, count)
        return RestoreModelResult(
            message=f"Successfully restored {count} records from {model.name}",
            model=model.name,
            collection=model.collection,
            count=count,
            backup=backup_path,
        )

    # ------------------------------------------------------------------
    # Backup
    # ------------------------------------------------------------------
    def create_backup(self) -> BackupResult:
        payload = {
            model.name: self._store.find_all(model.name)
            for model in self._store.models()
        }
        path = self._backup_writer.write(payload)
        return BackupResult(
            message=f"Backup created at {path}",
            path=str(path),
            total_records=sum(len(records) for records in payload.values()),
        )
