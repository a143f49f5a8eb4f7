"""
===============================================================================
TARJETA CRC — infrastructure/repositories/postgres/__init__.py
===============================================================================

Responsabilidades:
  - Exponer adapters PostgreSQL (psycopg + psycopg_pool).

Reglas:
  - SQL parametrizado; errores como DatabaseError encadenado.
===============================================================================
"""

from .activity_log import PostgresActivityLogRepository
from .records import PostgresRecordRepository
from .sequences import PostgresSequenceRepository
from .users import PostgresUserRepository

__all__ = [
    "PostgresActivityLogRepository",
    "PostgresRecordRepository",
    "PostgresSequenceRepository",
    "PostgresUserRepository",
]
