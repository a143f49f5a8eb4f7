"""
Name: PostgreSQL Repository Integration Tests

Responsibilities:
  - Validate JSONB record storage and the archive lifecycle against Postgres
  - Validate activity log append/list and atomic id counters
"""

from uuid import uuid4

import pytest

from hrms.application.archive_store import ArchiveStore
from hrms.crosscutting.exceptions import RecordNotFoundError
from hrms.domain.activity import ActivityAction, ActivityLogEntry, ActorSnapshot, ChangeSet
from hrms.domain.entities import utcnow
from hrms.domain.registry import ResourceRegistry
from hrms.domain.resources import HR_RESOURCES
from hrms.infrastructure.repositories import (
    PostgresActivityLogRepository,
    PostgresRecordRepository,
    PostgresSequenceRepository,
)

pytestmark = pytest.mark.integration


def _record(flag: str, archived: bool, **fields):
    now = utcnow()
    return {"id": str(uuid4()), flag: archived, "created_at": now, "updated_at": now, **fields}


@pytest.fixture
def dept_repo(pg_pool):
    return PostgresRecordRepository("departments", "archive_department", pool=pg_pool)


def test_archive_lifecycle(dept_repo):
    for archived in (False, False, True):
        dept_repo.insert(_record("archive_department", archived, name="x"))

    assert dept_repo.count_by_flag(True) == 1
    assert dept_repo.count_by_flag(False) == 2
    assert dept_repo.restore_all() == 1
    assert dept_repo.count_by_flag(True) == 0


def test_restore_by_id_round_trip(dept_repo):
    original = dept_repo.insert(_record("archive_department", False, name="Ops"))

    dept_repo.archive_by_id(original["id"])
    restored = dept_repo.restore_by_id(original["id"])

    assert restored["archive_department"] is False
    assert restored["name"] == "Ops"
    assert restored["updated_at"] == original["updated_at"]


def test_store_reports_missing_record(pg_pool, dept_repo):
    reg = ResourceRegistry()
    reg.register(next(d for d in HR_RESOURCES if d.name == "Department"), dept_repo)

    with pytest.raises(RecordNotFoundError):
        ArchiveStore(reg).restore_one("Department", str(uuid4()))


def test_search_and_pagination(dept_repo):
    for i in range(4):
        dept_repo.insert(_record("archive_department", False, name=f"Team {i}"))

    assert dept_repo.count_records(archived=False, search="team 2") == 1
    assert len(dept_repo.list_records(archived=False, limit=3, offset=0)) == 3


def test_activity_log_append_and_list(pg_pool):
    repo = PostgresActivityLogRepository(pool=pg_pool)
    repo.append(
        ActivityLogEntry(
            actor=ActorSnapshot(user_id=str(uuid4()), name="Ada", email="a@x.io", role="admin"),
            action=ActivityAction.CREATE,
            module="Jobs",
            description="Created new Jobs",
            changes=ChangeSet(new_values={"id": "j-1"}),
            record_id="j-1",
        )
    )

    [entry] = repo.list_entries(limit=10, offset=0)
    assert repo.count_entries(search="ada") == 1
    assert entry.changes.new_values == {"id": "j-1"}
    assert entry.changes.old_values is None


def test_sequences_increment(pg_pool):
    seq = PostgresSequenceRepository(pool=pg_pool)

    assert [seq.next_value("employees") for _ in range(3)] == [1, 2, 3]
    assert seq.next_value("jobs") == 1
