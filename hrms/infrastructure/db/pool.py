"""
===============================================================================
CRC CARD — infrastructure/db/pool.py
===============================================================================

Componente:
  Pool de conexiones PostgreSQL del proceso (API o script de admin)

Responsabilidades:
  - init_pool / get_pool / close_pool con un único pool por proceso.
  - Sesión de cada conexión: statement_timeout, TimeZone=UTC, application_name.
  - ping() para /healthz.

Colaboradores:
  - psycopg_pool.ConnectionPool
  - crosscutting.config (db_statement_timeout_ms)
  - crosscutting.exceptions.DatabaseError (uso sin init / doble init)
===============================================================================
"""

from __future__ import annotations

import threading
from typing import Optional

import psycopg
from psycopg_pool import ConnectionPool, PoolTimeout

from ...crosscutting.exceptions import DatabaseError
from ...crosscutting.logger import logger

APPLICATION_NAME = "hrms-api"


class PoolAlreadyInitializedError(DatabaseError):
    """init_pool() llamado dos veces en el mismo proceso."""


class PoolNotInitializedError(DatabaseError):
    """Repositorio Postgres usado antes de init_pool()."""


_pool: Optional[ConnectionPool] = None
_lock = threading.Lock()


def _configure_session(conn: psycopg.Connection) -> None:
    from ...crosscutting.config import get_settings

    timeout_ms = int(get_settings().db_statement_timeout_ms)
    with conn.cursor() as cur:
        # created_at se compara/serializa siempre en UTC.
        cur.execute("SET TIME ZONE 'UTC'")
        cur.execute(f"SET application_name = '{APPLICATION_NAME}'")
        if timeout_ms > 0:
            cur.execute(f"SET statement_timeout = {timeout_ms}")
    conn.commit()


def init_pool(database_url: str, min_size: int, max_size: int) -> ConnectionPool:
    global _pool

    with _lock:
        if _pool is not None:
            raise PoolAlreadyInitializedError("Database pool already initialized")
        _pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            configure=_configure_session,
            name=APPLICATION_NAME,
            open=True,
        )
    logger.info("Pool DB abierto", extra={"min_size": min_size, "max_size": max_size})
    return _pool


def get_pool() -> ConnectionPool:
    if _pool is None:
        raise PoolNotInitializedError("Database pool not initialized")
    return _pool


def is_pool_initialized() -> bool:
    return _pool is not None


def ping(timeout: float = 2.0) -> bool:
    """SELECT 1; False ante cualquier error de conexión."""
    try:
        with get_pool().connection(timeout=timeout) as conn:
            conn.execute("SELECT 1")
    except (psycopg.Error, PoolTimeout, PoolNotInitializedError) as exc:
        logger.warning("DB ping falló", extra={"error": str(exc)})
        return False
    return True


def close_pool() -> None:
    """Idempotente."""
    global _pool

    with _lock:
        pool, _pool = _pool, None
    if pool is not None:
        pool.close()
        logger.info("Pool DB cerrado")
