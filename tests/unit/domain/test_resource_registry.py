"""
Name: ResourceRegistry Tests

Responsibilities:
  - Verify archivable models are listed in registration order
  - Verify unknown / non-archivable names fail with ModelNotFoundError
  - Verify later registrations show up in later listings
"""

import pytest

from hrms.crosscutting.exceptions import ModelNotFoundError
from hrms.domain.entities import ResourceDescriptor
from hrms.domain.registry import ResourceRegistry
from hrms.domain.resources import HR_RESOURCES
from hrms.infrastructure.repositories import InMemoryRecordRepository

pytestmark = pytest.mark.unit


def _register(reg: ResourceRegistry, descriptor: ResourceDescriptor):
    return reg.register(
        descriptor, InMemoryRecordRepository(descriptor.collection, descriptor.archive_flag)
    )


def test_full_catalog_lists_ten_archivable_models(full_registry):
    names = [m.name for m in full_registry.list_archivable()]

    assert names == [
        "Employee",
        "Department",
        "Designation",
        "Attendance",
        "Leave",
        "Payroll",
        "Job",
        "Application",
        "Training",
        "Fine",
    ]
    assert "Performance" not in names
    assert "Role" not in names
    assert "Report" not in names


def test_archivable_model_exposes_collection_and_flag(full_registry):
    dept = full_registry.get_archivable("Department")

    assert dept.collection == "departments"
    assert dept.flag_field == "archive_department"
    assert dept.repository is full_registry.get("Department").repository


def test_unknown_model_raises_model_not_found(full_registry):
    with pytest.raises(ModelNotFoundError) as exc_info:
        full_registry.get_archivable("Spaceship")

    assert "Spaceship" in exc_info.value.message


def test_non_archivable_model_is_not_resolvable_for_archive(full_registry):
    # Registered as a resource, but without an archive flag.
    assert full_registry.get("Performance").name == "Performance"
    with pytest.raises(ModelNotFoundError):
        full_registry.get_archivable("Performance")


def test_find_by_collection(full_registry):
    assert full_registry.find_by_collection("fines").name == "Fine"
    with pytest.raises(ModelNotFoundError):
        full_registry.find_by_collection("nope")


def test_list_archivable_is_a_fresh_snapshot_each_call():
    reg = ResourceRegistry()
    _register(reg, HR_RESOURCES[0])

    first = reg.list_archivable()
    _register(reg, ResourceDescriptor("Asset", "assets", "Assets", archive_flag="is_archived"))
    second = reg.list_archivable()

    assert [m.name for m in first] == ["Employee"]
    assert [m.name for m in second] == ["Employee", "Asset"]
