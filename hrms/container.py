"""
===============================================================================
TARJETA CRC — hrms/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (registry, repositorios, servicios, auditoría).
  - Exponer factories para FastAPI (Depends) y para scripts.
  - Mantener singletons con caching (lru_cache).
  - Elegir adapters in-memory o PostgreSQL según APP_ENV.

Colaboradores:
  - hrms.crosscutting.config.get_settings
  - hrms.domain (registry, catálogo HR, puertos)
  - hrms.infrastructure.repositories (in_memory / postgres)
  - hrms.application (servicios de archivo, auditoría, recursos)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO debe depender de FastAPI (solo expone factories).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.activity_recorder import ActivityRecorder
from .application.archive_service import ArchiveService
from .application.archive_store import ArchiveStore
from .application.audit_dispatcher import AuditDispatcher
from .application.audit_interceptor import AuditInterceptor
from .application.backup import BackupWriter
from .application.resource_service import ResourceService
from .application.user_service import UserService
from .crosscutting.config import get_settings
from .domain.entities import ResourceDescriptor
from .domain.registry import ResourceRegistry
from .domain.repositories import (
    ActivityLogRepository,
    RecordRepository,
    SequenceRepository,
)
from .domain.resources import register_hr_resources
from .identity.actor_resolver import UserActorResolver
from .identity.users import UserRepository
from .infrastructure.repositories import (
    InMemoryActivityLogRepository,
    InMemoryRecordRepository,
    InMemorySequenceRepository,
    InMemoryUserRepository,
    PostgresActivityLogRepository,
    PostgresRecordRepository,
    PostgresSequenceRepository,
    PostgresUserRepository,
)


def _is_test_env() -> bool:
    """
    Determina si estamos en entorno de tests.

    En tests evitamos depender de Postgres.
    """
    return get_settings().is_test()


def _record_repository(descriptor: ResourceDescriptor) -> RecordRepository:
    if _is_test_env():
        return InMemoryRecordRepository(descriptor.collection, descriptor.archive_flag)
    return PostgresRecordRepository(descriptor.collection, descriptor.archive_flag)


# =============================================================================
# Registry + repositorios
# =============================================================================
@lru_cache(maxsize=1)
def get_registry() -> ResourceRegistry:
    return register_hr_resources(ResourceRegistry(), _record_repository)


@lru_cache(maxsize=1)
def get_activity_repository() -> ActivityLogRepository:
    if _is_test_env():
        return InMemoryActivityLogRepository()
    return PostgresActivityLogRepository()


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    if _is_test_env():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache(maxsize=1)
def get_sequence_repository() -> SequenceRepository:
    if _is_test_env():
        return InMemorySequenceRepository()
    return PostgresSequenceRepository()


# =============================================================================
# Archivo / restauración
# =============================================================================
@lru_cache(maxsize=1)
def get_backup_writer() -> BackupWriter:
    return BackupWriter(get_settings().backup_dir)


@lru_cache(maxsize=1)
def get_archive_store() -> ArchiveStore:
    return ArchiveStore(get_registry())


@lru_cache(maxsize=1)
def get_archive_service() -> ArchiveService:
    return ArchiveService(
        get_archive_store(),
        get_backup_writer(),
        backup_before_restore=get_settings().backup_before_restore,
    )


# =============================================================================
# Auditoría
# =============================================================================
@lru_cache(maxsize=1)
def get_audit_dispatcher() -> AuditDispatcher:
    return AuditDispatcher(max_workers=get_settings().audit_max_workers)


@lru_cache(maxsize=1)
def get_activity_recorder() -> ActivityRecorder:
    return ActivityRecorder(
        get_activity_repository(),
        UserActorResolver(get_user_repository()),
        dispatcher=get_audit_dispatcher(),
    )


@lru_cache(maxsize=1)
def get_audit_interceptor() -> AuditInterceptor:
    return AuditInterceptor(get_activity_recorder())


def reset_audit_pipeline() -> None:
    """Descarta dispatcher/recorder/interceptor cacheados (post-shutdown)."""
    get_audit_interceptor.cache_clear()
    get_activity_recorder.cache_clear()
    get_audit_dispatcher.cache_clear()


# =============================================================================
# Recursos HR
# =============================================================================
@lru_cache(maxsize=1)
def get_resource_service() -> ResourceService:
    return ResourceService(get_sequence_repository())


# =============================================================================
# Usuarios
# =============================================================================
@lru_cache(maxsize=1)
def get_user_service() -> UserService:
    # identity.auth_users importa este módulo; el hasher se resuelve acá.
    from .identity.auth_users import hash_password

    return UserService(get_user_repository(), get_sequence_repository(), hash_password)
