"""
===============================================================================
APPLICATION LAYER (Public API / Exports)
===============================================================================

Expone los puntos de entrada estables de la capa de aplicación:
  - ArchiveStore / ArchiveService: listado, stats, restore y backups
  - ActivityRecorder / AuditInterceptor / AuditDispatcher: activity log
  - ResourceService: CRUD genérico con soft delete
  - list_activities: consulta paginada del log
===============================================================================
"""

from .activity_queries import ActivityPage, list_activities
from .activity_recorder import ActivityRecorder
from .archive_service import ArchiveService
from .archive_store import ArchiveStore, normalize_record_id
from .audit_dispatcher import AuditDispatcher, DispatcherClosedError
from .audit_interceptor import ActionResult, AuditInterceptor, action_for_method
from .backup import BackupWriter
from .resource_service import ResourcePage, ResourceService

__all__ = [
    # Archive
    "ArchiveStore",
    "ArchiveService",
    "BackupWriter",
    "normalize_record_id",
    # Activity log
    "ActivityPage",
    "ActivityRecorder",
    "AuditDispatcher",
    "AuditInterceptor",
    "ActionResult",
    "DispatcherClosedError",
    "action_for_method",
    "list_activities",
    # Resources
    "ResourcePage",
    "ResourceService",
]
