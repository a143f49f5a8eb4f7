"""
Adapters de persistencia (in-memory y PostgreSQL).

La elección entre ambos la hace container.py según APP_ENV.
"""

from .in_memory import (
    InMemoryActivityLogRepository,
    InMemoryRecordRepository,
    InMemorySequenceRepository,
    InMemoryUserRepository,
)
from .postgres import (
    PostgresActivityLogRepository,
    PostgresRecordRepository,
    PostgresSequenceRepository,
    PostgresUserRepository,
)

__all__ = [
    "InMemoryActivityLogRepository",
    "InMemoryRecordRepository",
    "InMemorySequenceRepository",
    "InMemoryUserRepository",
    "PostgresActivityLogRepository",
    "PostgresRecordRepository",
    "PostgresSequenceRepository",
    "PostgresUserRepository",
]
