"""
PostgresSequenceRepository: contadores atómicos para ids legibles (id_counters).

El upsert con RETURNING garantiza incremento atómico por clave aun con
requests concurrentes.
"""

from __future__ import annotations

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger

_NEXT_VALUE_SQL = """
    INSERT INTO id_counters (key, seq) VALUES (%s, 1)
    ON CONFLICT (key) DO UPDATE SET seq = id_counters.seq + 1
    RETURNING seq
"""


class PostgresSequenceRepository:
    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    def next_value(self, key: str) -> int:
        try:
            with self._get_pool().connection() as conn:
                row = conn.execute(_NEXT_VALUE_SQL, (key,)).fetchone()
        except Exception as exc:
            logger.exception(
                "PostgresSequenceRepository: Failed to increment counter",
                extra={"key": key, "error": str(exc)},
            )
            raise DatabaseError(f"Failed to increment counter '{key}': {exc}") from exc
        return int(row[0])
