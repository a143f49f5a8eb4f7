"""
Name: ArchiveService Tests

Responsibilities:
  - Validate snapshot/stats shapes for Department (5/2) + Employee (10/0)
  - Validate bulk and per-model restores (totals, details, backups)
  - Validate complete-or-nothing aggregation on storage failures
"""

import json
from unittest.mock import Mock

import pytest

from hrms.application.archive_service import ArchiveService
from hrms.application.archive_store import ArchiveStore
from hrms.crosscutting.exceptions import (
    ModelNotFoundError,
    RecordNotFoundError,
    StorageError,
)
from hrms.infrastructure.repositories import InMemoryRecordRepository

pytestmark = pytest.mark.unit


def test_stats_include_every_archivable_model(archive_service):
    stats = {s.model: s for s in archive_service.get_archive_stats()}

    assert list(stats) == ["Department", "Employee"]
    dept, emp = stats["Department"], stats["Employee"]
    assert (dept.archived, dept.active, dept.total) == (2, 5, 7)
    assert (emp.archived, emp.active, emp.total) == (0, 10, 10)
    assert dept.collection == "departments"


def test_snapshot_omits_models_without_archived_records(archive_service):
    snapshot = archive_service.get_all_archived_data()

    assert list(snapshot.archives) == ["Department"]
    assert snapshot.archives["Department"].count == 2
    assert snapshot.archives["Department"].collection == "departments"
    assert snapshot.total_tables == 1
    assert snapshot.total_records == 2


def test_archived_by_model(archive_service):
    result = archive_service.get_archived_by_model("Employee")

    assert result.model == "Employee"
    assert result.count == 0
    assert result.records == []


def test_restore_all_totals_match_details(archive_service, emp_repo, record_factory):
    emp_repo.insert(record_factory.create("is_archived", True))

    result = archive_service.restore_all_archived()

    assert result.total_restored == 3
    assert result.total_restored == sum(d.restored for d in result.details.values())
    assert result.details["Department"].restored == 2
    assert result.details["Employee"].restored == 1
    assert result.message == "Restored 3 records from 2 tables."
    assert archive_service.get_all_archived_data().total_records == 0


def test_restore_all_omits_models_with_nothing_restored(archive_service):
    result = archive_service.restore_all_archived()

    assert list(result.details) == ["Department"]


def test_restore_all_writes_backup_first(archive_service, backup_writer):
    result = archive_service.restore_all_archived()

    assert result.backup is not None
    with open(result.backup, encoding="utf-8") as fh:
        payload = json.load(fh)
    # Backup holds the pre-restore state.
    archived = [r for r in payload["Department"] if r["archive_department"]]
    assert len(archived) == 2


def test_restore_all_without_backup(archive_store, backup_writer):
    service = ArchiveService(archive_store, backup_writer, backup_before_restore=False)

    result = service.restore_all_archived()

    assert result.backup is None
    assert not backup_writer.backup_dir.exists()


def test_restore_by_id_on_active_record_returns_it_unchanged(archive_service, dept_repo):
    active = next(r for r in dept_repo.find_all() if not r["archive_department"])

    result = archive_service.restore_by_id("Department", active["id"])

    assert result.data == active
    assert result.message == "Record restored from Department"


def test_restore_by_id_nonexistent_raises_record_not_found(archive_service):
    with pytest.raises(RecordNotFoundError, match="Record not found"):
        archive_service.restore_by_id(
            "Department", "6ba7b810-9dad-11d1-80b4-00c04fd430c8"
        )


def test_restore_model(archive_service):
    result = archive_service.restore_model("Department")

    assert result.count == 2
    assert result.message == "Successfully restored 2 records from Department"
    assert result.collection == "departments"


def test_restore_model_unknown_raises(archive_service):
    with pytest.raises(ModelNotFoundError):
        archive_service.restore_model("Unicorn")


def test_create_backup_includes_every_record(archive_service):
    result = archive_service.create_backup()

    with open(result.path, encoding="utf-8") as fh:
        payload = json.load(fh)
    assert set(payload) == {"Department", "Employee"}
    assert len(payload["Department"]) == 7
    assert len(payload["Employee"]) == 10
    assert result.total_records == 17


def test_single_model_failure_aborts_snapshot(registry, backup_writer):
    broken = InMemoryRecordRepository("employees", "is_archived")
    broken.find_archived = Mock(side_effect=RuntimeError("boom"))
    registry.register(registry.get("Employee").descriptor, broken)
    service = ArchiveService(ArchiveStore(registry), backup_writer)

    with pytest.raises(StorageError):
        service.get_all_archived_data()
