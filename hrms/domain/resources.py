"""
Catálogo de recursos HR registrados al arrancar.

Cada recurso declara su flag de archivado; los que no tienen flag
(Performance, Role, Report) no participan del subsistema de archivo. Performance
se da de baja por estado ("Archived").
"""

from __future__ import annotations

from typing import Callable, Tuple

from .entities import ResourceDescriptor
from .registry import ResourceRegistry
from .repositories import RecordRepository

HR_RESOURCES: Tuple[ResourceDescriptor, ...] = (
    ResourceDescriptor(
        "Employee", "employees", "Employees", "EMP", "employee_id", "is_archived"
    ),
    ResourceDescriptor(
        "Department",
        "departments",
        "Departments",
        "DEPT",
        "department_id",
        "archive_department",
    ),
    ResourceDescriptor(
        "Designation", "designations", "Designations", "DSG", "designation_id", "archive"
    ),
    ResourceDescriptor(
        "Attendance", "attendance", "Attendance", "ATT", "attendance_id", "is_archived"
    ),
    ResourceDescriptor("Leave", "leaves", "Leaves", "LV", "leave_id", "archive"),
    ResourceDescriptor(
        "Payroll", "payrolls", "Payroll", "PAY", "payroll_id", "is_archived"
    ),
    ResourceDescriptor("Job", "jobs", "Jobs", "JOB", "job_id", "is_archived"),
    ResourceDescriptor(
        "Application",
        "applications",
        "Applications",
        "APP",
        "application_id",
        "is_archived",
    ),
    ResourceDescriptor(
        "Training", "trainings", "Training", "TRN", "training_id", "is_archived"
    ),
    ResourceDescriptor("Fine", "fines", "Fines", "FINE", "fine_id", "archive_fine"),
    ResourceDescriptor(
        "Performance",
        "performances",
        "Performance",
        "PERF",
        "performance_id",
        status_field="status",
        archived_status="Archived",
    ),
    ResourceDescriptor("Role", "roles", "Roles"),
    ResourceDescriptor("Report", "reports", "Reports"),
)

RepositoryFactory = Callable[[ResourceDescriptor], RecordRepository]


def register_hr_resources(
    registry: ResourceRegistry, repository_factory: RepositoryFactory
) -> ResourceRegistry:
    """Registra el catálogo completo usando la factory de repositorios dada."""
    for descriptor in HR_RESOURCES:
        registry.register(descriptor, repository_factory(descriptor))
    return registry
