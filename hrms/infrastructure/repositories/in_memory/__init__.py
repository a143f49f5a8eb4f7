"""
===============================================================================
TARJETA CRC — infrastructure/repositories/in_memory/__init__.py
===============================================================================

Responsabilidades:
  - Exponer adapters in-memory (tests / APP_ENV=test / dev sin DB).

Reglas:
  - Thread-safe y ordering determinístico, alineado con los adapters Postgres.
===============================================================================
"""

from .activity_log import InMemoryActivityLogRepository
from .records import InMemoryRecordRepository
from .sequences import InMemorySequenceRepository
from .users import InMemoryUserRepository

__all__ = [
    "InMemoryActivityLogRepository",
    "InMemoryRecordRepository",
    "InMemorySequenceRepository",
    "InMemoryUserRepository",
]
