"""
Name: ResourceService Tests

Responsibilities:
  - Validate create (uuid id, sequential human id, flag false, timestamps)
  - Validate update (pre-image, protected fields ignored)
  - Validate soft delete (flag true, status "Archived" for Performance,
    405 for Role, 404 for unknown)
  - Validate listing (page metadata, archived filter, search)
"""

import pytest

from hrms.application.resource_service import ResourceService
from hrms.crosscutting.pagination import PageRequest

pytestmark = pytest.mark.unit

MISSING_ID = "6ba7b810-9dad-11d1-80b4-00c04fd430c8"


@pytest.fixture
def service(sequences):
    return ResourceService(sequences)


@pytest.fixture
def employees(full_registry):
    return full_registry.get("Employee")


def test_create_assigns_ids_flag_and_timestamps(service, employees):
    first = service.create(employees, {"name": "Ana", "is_archived": True, "id": "forged"})
    second = service.create(employees, {"name": "Beto"})

    assert first.status_code == 201
    assert first.message == "Employee created successfully"
    record = first.payload
    assert record["id"] != "forged"
    assert record["employee_id"] == "EMP-0001"
    assert second.payload["employee_id"] == "EMP-0002"
    assert record["is_archived"] is False
    assert record["created_at"] == record["updated_at"]


def test_create_without_sequential_id(service, full_registry):
    result = service.create(full_registry.get("Role"), {"name": "auditor"})

    assert result.status_code == 201
    assert set(result.payload) == {"id", "name", "created_at", "updated_at"}


def test_get_unknown_and_malformed_ids_are_404(service, employees):
    assert service.get(employees, MISSING_ID).status_code == 404
    assert service.get(employees, "garbage").status_code == 404


def test_update_stashes_previous_and_ignores_protected_fields(service, employees):
    created = service.create(employees, {"name": "Ana", "salary": 100}).payload

    result = service.update(
        employees,
        created["id"],
        {"salary": 200, "employee_id": "EMP-9999", "is_archived": True},
    )

    assert result.status_code == 200
    assert result.previous["salary"] == 100
    assert result.payload["salary"] == 200
    assert result.payload["employee_id"] == "EMP-0001"
    assert result.payload["is_archived"] is False


def test_update_unknown_is_404(service, employees):
    assert service.update(employees, MISSING_ID, {"a": 1}).status_code == 404


def test_archive_sets_flag_and_keeps_record(service, employees):
    created = service.create(employees, {"name": "Ana"}).payload

    result = service.archive(employees, created["id"])

    assert result.status_code == 200
    assert result.previous["is_archived"] is False
    assert result.payload["is_archived"] is True
    assert employees.repository.get(created["id"]) is not None


def test_archive_by_status_keeps_pre_image(service, full_registry):
    perf = full_registry.get("Performance")
    created = service.create(perf, {"score": 4, "status": "Pending"}).payload

    result = service.archive(perf, created["id"])

    assert result.status_code == 200
    assert result.previous["status"] == "Pending"
    assert result.payload["status"] == "Archived"


def test_archive_non_archivable_is_405(service, full_registry):
    roles = full_registry.get("Role")
    created = service.create(roles, {"name": "auditor"}).payload

    assert service.archive(roles, created["id"]).status_code == 405


def test_archive_unknown_is_404(service, employees):
    assert service.archive(employees, MISSING_ID).status_code == 404


def test_list_pages_and_filters(service, employees):
    ids = [service.create(employees, {"name": f"emp {i}"}).payload["id"] for i in range(12)]
    service.archive(employees, ids[0])

    page = service.list(employees, PageRequest(page=2, limit=5))
    archived = service.list(employees, PageRequest(page=1, limit=5), archived=True)
    searched = service.list(employees, PageRequest(page=1, limit=5), search="  EMP 11 ")

    assert page.total == 11
    assert page.total_pages == 3
    assert page.current_page == 2
    assert len(page.data) == 5
    assert archived.total == 1
    assert searched.total == 1
