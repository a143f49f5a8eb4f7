"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/activity_log.py
============================================================
Class: PostgresActivityLogRepository

Responsibilities:
  - Persistir entradas del activity log en PostgreSQL (tabla activity_logs).
  - Listar entradas con búsqueda opcional y paginación offset.
  - Mantener respuestas determinísticas (orden estable) para APIs/tests.

Collaborators:
  - domain.activity.ActivityLogEntry (entidad de dominio)
  - psycopg_pool.ConnectionPool (pool de conexiones)
  - psycopg.types.json.Json (JSON seguro hacia PostgreSQL)
  - crosscutting.logger.logger / crosscutting.exceptions.DatabaseError

Constraints / Notes:
  - Append-only: no se edita, no se borra.
  - El snapshot del actor se guarda desnormalizado (user_name/email/role).
  - Queries SIEMPRE parametrizadas (nunca interpolar input del usuario).
============================================================
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from psycopg.types.json import Json
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.activity import (
    ActivityAction,
    ActivityLogEntry,
    ActorSnapshot,
    ChangeSet,
    RequestContext,
)

_COLUMNS = """
    id, user_id, user_name, user_email, user_role, action, module, record_id,
    description, old_values, new_values, ip_address, user_agent, method, url,
    created_at
"""

_SEARCH_CONDITION = """
    (action ILIKE %s OR module ILIKE %s OR user_name ILIKE %s
     OR user_email ILIKE %s OR user_role ILIKE %s)
"""


def _search_clause(search: Optional[str]) -> tuple[str, list[object]]:
    needle = (search or "").strip()
    if not needle:
        return "", []
    pattern = f"%{needle}%"
    return f"WHERE {_SEARCH_CONDITION}", [pattern] * 5


def _row_to_entry(row: tuple) -> ActivityLogEntry:
    (
        entry_id,
        user_id,
        user_name,
        user_email,
        user_role,
        action,
        module,
        record_id,
        description,
        old_values,
        new_values,
        ip_address,
        user_agent,
        method,
        url,
        created_at,
    ) = row
    return ActivityLogEntry(
        id=entry_id,
        actor=ActorSnapshot(
            user_id=str(user_id), name=user_name, email=user_email, role=user_role
        ),
        action=ActivityAction(action),
        module=module,
        record_id=record_id,
        description=description,
        changes=ChangeSet(old_values=old_values, new_values=new_values),
        request=RequestContext(
            ip_address=ip_address, user_agent=user_agent, method=method, url=url
        ),
        created_at=created_at,
    )


class PostgresActivityLogRepository:
    """Repositorio PostgreSQL para el activity log (activity_logs)."""

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    def _fetchall(
        self,
        *,
        query: str,
        params: Iterable[object],
        error_message: str,
        extra: dict[str, object],
    ) -> list[tuple]:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            logger.exception(error_message, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{error_message}: {exc}") from exc

    def append(self, entry: ActivityLogEntry) -> None:
        changes = entry.changes
        try:
            with self._get_pool().connection() as conn:
                conn.execute(
                    f"INSERT INTO activity_logs ({_COLUMNS}) VALUES "
                    "(%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
                    (
                        entry.id,
                        entry.actor.user_id,
                        entry.actor.name,
                        entry.actor.email,
                        entry.actor.role,
                        entry.action.value,
                        entry.module,
                        entry.record_id,
                        entry.description,
                        Json(changes.old_values)
                        if changes.old_values is not None
                        else None,
                        Json(changes.new_values)
                        if changes.new_values is not None
                        else None,
                        entry.request.ip_address,
                        entry.request.user_agent,
                        entry.request.method,
                        entry.request.url,
                        entry.created_at,
                    ),
                )
        except Exception as exc:
            logger.exception(
                "PostgresActivityLogRepository: Failed to append entry",
                extra={
                    "entry_id": str(entry.id),
                    "action": entry.action.value,
                    "audit_module": entry.module,
                    "error": str(exc),
                },
            )
            raise DatabaseError(f"Failed to append activity log entry: {exc}") from exc

    def list_entries(
        self,
        *,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[ActivityLogEntry]:
        if limit <= 0:
            return []
        where, params = _search_clause(search)
        rows = self._fetchall(
            query=f"""
                SELECT {_COLUMNS}
                FROM activity_logs
                {where}
                ORDER BY created_at DESC, id DESC
                LIMIT %s OFFSET %s
            """,
            params=[*params, limit, max(0, offset)],
            error_message="PostgresActivityLogRepository: Failed to list entries",
            extra={"search": search, "limit": limit, "offset": offset},
        )
        return [_row_to_entry(r) for r in rows]

    def count_entries(self, *, search: Optional[str] = None) -> int:
        where, params = _search_clause(search)
        rows = self._fetchall(
            query=f"SELECT COUNT(*) FROM activity_logs {where}",
            params=params,
            error_message="PostgresActivityLogRepository: Failed to count entries",
            extra={"search": search},
        )
        return int(rows[0][0]) if rows else 0
