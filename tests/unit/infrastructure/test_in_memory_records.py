"""
Name: InMemoryRecordRepository Tests

Responsibilities:
  - Validate archive lifecycle (archive / restore / counts)
  - Validate ordering (newest first), search and pagination
  - Validate returned records are detached copies
"""

import pytest

from hrms.infrastructure.repositories import InMemoryRecordRepository

pytestmark = pytest.mark.unit


@pytest.fixture
def repo():
    return InMemoryRecordRepository("departments", "archive_department")


def test_counts_partition_all_records(repo, record_factory):
    for archived in (False, False, True):
        repo.insert(record_factory.create("archive_department", archived))
    # Missing flag counts as active.
    repo.insert(record_factory.create(None, name="legacy"))

    assert repo.count_by_flag(True) == 1
    assert repo.count_by_flag(False) == 3
    assert repo.count_by_flag(True) + repo.count_by_flag(False) == len(repo.find_all())


def test_find_archived_newest_first(repo, record_factory):
    older = repo.insert(record_factory.create("archive_department", True))
    newer_data = record_factory.create("archive_department", True)
    newer_data["created_at"] = older["created_at"].replace(year=older["created_at"].year + 1)
    newer = repo.insert(newer_data)

    assert [r["id"] for r in repo.find_archived()] == [newer["id"], older["id"]]


def test_archive_then_restore_round_trip(repo, record_factory):
    original = repo.insert(record_factory.create("archive_department", False, name="Ops"))

    archived = repo.archive_by_id(original["id"])
    assert archived["archive_department"] is True

    restored = repo.restore_by_id(original["id"])
    assert restored == original


def test_restore_by_id_is_idempotent_on_active_record(repo, record_factory):
    record = repo.insert(record_factory.create("archive_department", False))

    first = repo.restore_by_id(record["id"])
    second = repo.restore_by_id(record["id"])

    assert first["archive_department"] is False
    assert second == first


def test_restore_by_id_unknown_returns_none(repo):
    assert repo.restore_by_id("00000000-0000-0000-0000-000000000000") is None


def test_restore_all_counts_transitions(repo, record_factory):
    for archived in (True, True, False):
        repo.insert(record_factory.create("archive_department", archived))

    assert repo.restore_all() == 2
    assert repo.restore_all() == 0
    assert repo.count_by_flag(True) == 0


def test_list_records_filters_search_and_paginates(repo, record_factory):
    for i in range(5):
        repo.insert(record_factory.create("archive_department", False, name=f"Team {i}"))
    repo.insert(record_factory.create("archive_department", True, name="Team archived"))

    assert repo.count_records(archived=False) == 5
    assert repo.count_records(archived=True) == 1
    assert repo.count_records(archived=False, search="team 3") == 1

    page = repo.list_records(archived=False, limit=2, offset=2)
    assert [r["name"] for r in page] == ["Team 2", "Team 3"]


def test_returned_records_are_copies(repo, record_factory):
    record = repo.insert(record_factory.create("archive_department", False, name="HR"))

    fetched = repo.get(record["id"])
    fetched["name"] = "mutated"

    assert repo.get(record["id"])["name"] == "HR"


def test_non_archivable_collection_has_no_archived_records(record_factory):
    repo = InMemoryRecordRepository("roles")
    repo.insert(record_factory.create(None, name="admin"))

    assert repo.find_archived() == []
    assert repo.count_by_flag(True) == 0
    assert repo.restore_all() == 0
