"""Unit tests for resource descriptors and record helpers."""

import pytest

from hrms.domain.entities import (
    Capability,
    ResourceDescriptor,
    format_human_id,
    is_archived,
)
from hrms.domain.resources import HR_RESOURCES

pytestmark = pytest.mark.unit


def test_capabilities_follow_descriptor_fields():
    emp = ResourceDescriptor("Employee", "employees", "Employees", "EMP", "employee_id", "is_archived")
    role = ResourceDescriptor("Role", "roles", "Roles")

    assert emp.capabilities == {Capability.CRUD, Capability.ARCHIVE, Capability.SEQUENTIAL_ID}
    assert role.capabilities == {Capability.CRUD}
    assert not role.is_archivable


def test_performance_archives_by_status_not_flag():
    perf = next(d for d in HR_RESOURCES if d.name == "Performance")

    assert Capability.STATUS_ARCHIVE in perf.capabilities
    assert Capability.ARCHIVE not in perf.capabilities
    assert not perf.is_archivable
    assert perf.archived_status == "Archived"


def test_protected_fields_include_flag_and_human_id():
    fine = next(d for d in HR_RESOURCES if d.name == "Fine")

    assert {"id", "created_at", "updated_at", "fine_id", "archive_fine"} == fine.protected_fields


@pytest.mark.parametrize(
    "record, expected",
    [
        ({"is_archived": True}, True),
        ({"is_archived": False}, False),
        ({"is_archived": None}, False),
        ({}, False),
    ],
)
def test_is_archived_treats_missing_flag_as_active(record, expected):
    assert is_archived(record, "is_archived") is expected


def test_format_human_id_pads_to_four_digits():
    assert format_human_id("EMP", 1) == "EMP-0001"
    assert format_human_id("DEPT", 12345) == "DEPT-12345"


def test_catalog_collections_are_unique():
    collections = [d.collection for d in HR_RESOURCES]
    assert len(collections) == len(set(collections))
