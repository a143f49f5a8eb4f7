"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/records.py
============================================================
Class: PostgresRecordRepository

Responsibilities:
  - Persistir registros HR de UNA colección como documentos JSONB.
  - Implementar CRUD + ciclo de archivado sobre el flag de soft-delete.
  - Mantener ordering determinístico: created_at DESC, id DESC.

Collaborators:
  - psycopg.sql (composición segura de identificadores: tabla y flag)
  - psycopg.types.json.Json (JSON seguro hacia PostgreSQL)
  - psycopg_pool.ConnectionPool
  - crosscutting.exceptions.DatabaseError
  - crosscutting.logger.logger

Constraints / Notes:
  - Esquema por colección: (id uuid pk, data jsonb, created_at, updated_at).
  - `id`, `created_at`, `updated_at` viven en columnas; el resto en `data`.
  - Flag ausente => activo: COALESCE((data->>flag)::boolean, false).
  - Restaurar sólo toca el flag; updated_at no cambia.
  - Queries SIEMPRE parametrizadas; nombres de tabla/flag vía sql.Identifier/Literal.
============================================================
"""

from __future__ import annotations

import json
from functools import partial
from typing import Any, Iterable, List, Optional

from psycopg import sql
from psycopg.types.json import Json
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import (
    CREATED_AT_FIELD,
    RECORD_ID_FIELD,
    UPDATED_AT_FIELD,
    Record,
)

_COLUMN_FIELDS = (RECORD_ID_FIELD, CREATED_AT_FIELD, UPDATED_AT_FIELD)
_RETURNING = sql.SQL("id, data, created_at, updated_at")
_ORDER_BY = sql.SQL("ORDER BY created_at DESC, id DESC")

_dumps = partial(json.dumps, default=str)


def _row_to_record(row: tuple) -> Record:
    record_id, data, created_at, updated_at = row
    record: Record = dict(data or {})
    record[RECORD_ID_FIELD] = str(record_id)
    record[CREATED_AT_FIELD] = created_at
    record[UPDATED_AT_FIELD] = updated_at
    return record


def _document(record: Record) -> Json:
    return Json(
        {k: v for k, v in record.items() if k not in _COLUMN_FIELDS}, dumps=_dumps
    )


class PostgresRecordRepository:
    """Repositorio PostgreSQL para una colección HR (documentos JSONB)."""

    def __init__(
        self,
        collection: str,
        flag_field: Optional[str] = None,
        pool: ConnectionPool | None = None,
    ):
        self.collection = collection
        self.flag_field = flag_field
        self._table = sql.Identifier(collection)
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    # ------------------------------------------------------------
    # Helpers SQL
    # ------------------------------------------------------------
    def _flag_expr(self) -> sql.Composable:
        return sql.SQL("COALESCE((data->>{flag})::boolean, false)").format(
            flag=sql.Literal(self.flag_field)
        )

    def _where(
        self, archived: Optional[bool], search: Optional[str]
    ) -> tuple[sql.Composable, list[object]]:
        conditions: list[sql.Composable] = []
        params: list[object] = []

        if archived is not None and self.flag_field:
            conditions.append(
                sql.SQL("{expr} = %s").format(expr=self._flag_expr())
            )
            params.append(archived)

        needle = (search or "").strip()
        if needle:
            conditions.append(
                sql.SQL(
                    "EXISTS (SELECT 1 FROM jsonb_each_text(data) kv "
                    "WHERE kv.value ILIKE %s)"
                )
            )
            params.append(f"%{needle}%")

        if not conditions:
            return sql.SQL(""), params
        return sql.SQL("WHERE ") + sql.SQL(" AND ").join(conditions), params

    def _execute(
        self,
        query: sql.Composable,
        params: Iterable[object],
        *,
        operation: str,
        fetch: str,
    ) -> Any:
        """
        Ejecuta una query y devuelve según `fetch`: "one" | "all" | "rowcount".

        Centraliza logging + DatabaseError encadenado (from exc).
        """
        try:
            with self._get_pool().connection() as conn:
                cur = conn.execute(query, tuple(params))
                if fetch == "one":
                    return cur.fetchone()
                if fetch == "all":
                    return cur.fetchall()
                return cur.rowcount
        except Exception as exc:
            message = f"PostgresRecordRepository: {operation} failed"
            logger.exception(
                message,
                extra={"collection": self.collection, "error": str(exc)},
            )
            raise DatabaseError(f"{message} on {self.collection}: {exc}") from exc

    # ------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------
    def insert(self, record: Record) -> Record:
        query = sql.SQL(
            "INSERT INTO {table} (id, data, created_at, updated_at) "
            "VALUES (%s, %s, %s, %s) RETURNING {ret}"
        ).format(table=self._table, ret=_RETURNING)
        row = self._execute(
            query,
            [
                record[RECORD_ID_FIELD],
                _document(record),
                record.get(CREATED_AT_FIELD),
                record.get(UPDATED_AT_FIELD),
            ],
            operation="insert",
            fetch="one",
        )
        return _row_to_record(row)

    def get(self, record_id: str) -> Optional[Record]:
        query = sql.SQL("SELECT {ret} FROM {table} WHERE id = %s").format(
            table=self._table, ret=_RETURNING
        )
        row = self._execute(query, [record_id], operation="get", fetch="one")
        return _row_to_record(row) if row else None

    def update(self, record_id: str, changes: Record) -> Optional[Record]:
        query = sql.SQL(
            "UPDATE {table} SET data = data || %s, updated_at = now() "
            "WHERE id = %s RETURNING {ret}"
        ).format(table=self._table, ret=_RETURNING)
        row = self._execute(
            query, [_document(changes), record_id], operation="update", fetch="one"
        )
        return _row_to_record(row) if row else None

    def archive_by_id(self, record_id: str) -> Optional[Record]:
        if not self.flag_field:
            return self.get(record_id)
        query = sql.SQL(
            "UPDATE {table} SET data = jsonb_set(data, %s, 'true'::jsonb, true) "
            "WHERE id = %s RETURNING {ret}"
        ).format(table=self._table, ret=_RETURNING)
        row = self._execute(
            query, [[self.flag_field], record_id], operation="archive", fetch="one"
        )
        return _row_to_record(row) if row else None

    def list_records(
        self,
        *,
        archived: Optional[bool] = False,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Record]:
        if limit <= 0:
            return []
        where, params = self._where(archived, search)
        query = sql.SQL(
            "SELECT {ret} FROM {table} {where} {order} LIMIT %s OFFSET %s"
        ).format(ret=_RETURNING, table=self._table, where=where, order=_ORDER_BY)
        rows = self._execute(
            query, [*params, limit, max(0, offset)], operation="list", fetch="all"
        )
        return [_row_to_record(r) for r in rows]

    def count_records(
        self,
        *,
        archived: Optional[bool] = False,
        search: Optional[str] = None,
    ) -> int:
        where, params = self._where(archived, search)
        query = sql.SQL("SELECT COUNT(*) FROM {table} {where}").format(
            table=self._table, where=where
        )
        row = self._execute(query, params, operation="count", fetch="one")
        return int(row[0]) if row else 0

    # ------------------------------------------------------------
    # Archive lifecycle
    # ------------------------------------------------------------
    def find_archived(self) -> List[Record]:
        if not self.flag_field:
            return []
        query = sql.SQL(
            "SELECT {ret} FROM {table} WHERE {expr} {order}"
        ).format(
            ret=_RETURNING, table=self._table, expr=self._flag_expr(), order=_ORDER_BY
        )
        rows = self._execute(query, [], operation="find_archived", fetch="all")
        return [_row_to_record(r) for r in rows]

    def count_by_flag(self, archived: bool) -> int:
        if not self.flag_field:
            return 0 if archived else self.count_records(archived=None)
        return self.count_records(archived=archived)

    def restore_all(self) -> int:
        if not self.flag_field:
            return 0
        query = sql.SQL(
            "UPDATE {table} SET data = jsonb_set(data, %s, 'false'::jsonb, true) "
            "WHERE {expr}"
        ).format(table=self._table, expr=self._flag_expr())
        return int(
            self._execute(
                query, [[self.flag_field]], operation="restore_all", fetch="rowcount"
            )
        )

    def restore_by_id(self, record_id: str) -> Optional[Record]:
        if not self.flag_field:
            return self.get(record_id)
        query = sql.SQL(
            "UPDATE {table} SET data = jsonb_set(data, %s, 'false'::jsonb, true) "
            "WHERE id = %s AND {expr} RETURNING {ret}"
        ).format(table=self._table, expr=self._flag_expr(), ret=_RETURNING)
        row = self._execute(
            query, [[self.flag_field], record_id], operation="restore_by_id", fetch="one"
        )
        if row:
            return _row_to_record(row)
        # Ya activo (o inexistente): se devuelve tal cual.
        return self.get(record_id)

    def find_all(self) -> List[Record]:
        query = sql.SQL("SELECT {ret} FROM {table} {order}").format(
            ret=_RETURNING, table=self._table, order=_ORDER_BY
        )
        rows = self._execute(query, [], operation="find_all", fetch="all")
        return [_row_to_record(r) for r in rows]
