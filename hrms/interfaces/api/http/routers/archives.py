"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/archives.py
===============================================================================

Class/Module:
    Archive Router (administración de archivo/restauración)

Responsibilities:
    - Exponer /archives/* (snapshot, stats, por modelo, restore, backup).
    - Convertir resultados del ArchiveService -> DTOs camelCase.
    - Requerir usuario autenticado (cualquier rol).

Collaborators:
    - application.archive_service.ArchiveService (container.get_archive_service)
    - schemas.archives
    - api.exception_handlers: HRMSError -> 500 {success: false, message}

Notes:
    - Handlers sync: FastAPI los ejecuta en su threadpool.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from .....application.archive_service import ArchiveService
from .....container import get_archive_service
from .....identity.users import User
from ..dependencies import authenticated_user
from ..schemas.archives import (
    ArchiveSnapshotRes,
    ArchiveStatsRes,
    BackupRes,
    ModelArchiveRes,
    RestoreAllRes,
    RestoreModelRes,
    RestoreRecordRes,
    to_backup_res,
    to_model_archive_res,
    to_restore_all_res,
    to_restore_model_res,
    to_restore_record_res,
    to_snapshot_res,
    to_stats_res,
)

router = APIRouter(prefix="/archives", tags=["archives"])


@router.get("/all", response_model=ArchiveSnapshotRes)
def get_all_archives(
    _: User = Depends(authenticated_user),
    service: ArchiveService = Depends(get_archive_service),
):
    return to_snapshot_res(service.get_all_archived_data())


@router.get("/stats", response_model=ArchiveStatsRes)
def get_archive_stats(
    _: User = Depends(authenticated_user),
    service: ArchiveService = Depends(get_archive_service),
):
    return to_stats_res(service.get_archive_stats())


@router.get("/model/{model_name}", response_model=ModelArchiveRes)
def get_archives_by_model(
    model_name: str,
    _: User = Depends(authenticated_user),
    service: ArchiveService = Depends(get_archive_service),
):
    return to_model_archive_res(service.get_archived_by_model(model_name))


@router.post("/restore-all", response_model=RestoreAllRes)
def restore_all_archives(
    _: User = Depends(authenticated_user),
    service: ArchiveService = Depends(get_archive_service),
):
    return to_restore_all_res(service.restore_all_archived())


@router.post("/restore/{model_name}/{record_id}", response_model=RestoreRecordRes)
def restore_by_id(
    model_name: str,
    record_id: str,
    _: User = Depends(authenticated_user),
    service: ArchiveService = Depends(get_archive_service),
):
    return to_restore_record_res(service.restore_by_id(model_name, record_id))


@router.post("/restore-table/{table_name}", response_model=RestoreModelRes)
def restore_table(
    table_name: str,
    _: User = Depends(authenticated_user),
    service: ArchiveService = Depends(get_archive_service),
):
    return to_restore_model_res(service.restore_model(table_name))


@router.post("/backup", response_model=BackupRes)
def create_backup(
    _: User = Depends(authenticated_user),
    service: ArchiveService = Depends(get_archive_service),
):
    return to_backup_res(service.create_backup())
