"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/users.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Cargar usuarios para autenticación y auditoría (por email / por id).
  - Crear usuarios (seed de admin, script create_admin, alta por admin).
  - Listar con búsqueda (ILIKE) y actualizar campos permitidos.
  - Mapear filas crudas -> entidad `User` y validar `UserRole`.

Collaborators:
  - psycopg_pool.ConnectionPool
  - identity.users.User / UserRole
  - crosscutting.logger.logger / crosscutting.exceptions.DatabaseError

Constraints / Notes:
  - Retorna None cuando no existe el recurso (no exception por "not found").
  - Validación de roles: si el valor persistido no corresponde a UserRole -> DatabaseError.
============================================================
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional
from uuid import UUID

from psycopg import sql
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....identity.users import User, UserRole

# R: Lista explícita de columnas para mantener el contrato estable con migraciones.
_USER_COLUMNS = "id, user_code, name, email, password_hash, role, is_active, created_at"
_UPDATABLE = ("name", "email", "password_hash", "role", "is_active")
_SEARCH_CLAUSE = (
    "(%(q)s::text IS NULL OR user_code ILIKE %(q)s OR name ILIKE %(q)s "
    "OR email ILIKE %(q)s OR role ILIKE %(q)s)"
)


def _row_to_user(row: tuple) -> User:
    try:
        role = UserRole(row[5])
    except ValueError as exc:
        raise DatabaseError(f"Invalid user role in database: {row[5]}") from exc

    return User(
        id=row[0],
        user_code=row[1],
        name=row[2],
        email=row[3],
        password_hash=row[4],
        role=role,
        is_active=row[6],
        created_at=row[7],
    )


class PostgresUserRepository:
    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    def _fetchone(
        self,
        *,
        query: str | sql.Composable,
        params: Iterable[object] | Mapping[str, object],
        log_msg: str,
        log_extra: dict[str, object],
    ) -> tuple | None:
        bound = params if isinstance(params, Mapping) else tuple(params)
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, bound).fetchone()
        except Exception as exc:
            logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
            raise DatabaseError(f"{log_msg}: {exc}") from exc

    def get_by_id(self, user_id: UUID) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
            params=[user_id],
            log_msg="PostgresUserRepository: Failed to get user by id",
            log_extra={"user_id": str(user_id)},
        )
        return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s",
            params=[email],
            log_msg="PostgresUserRepository: Failed to get user by email",
            log_extra={"email": email},
        )
        return _row_to_user(row) if row else None

    def create(self, user: User) -> User:
        row = self._fetchone(
            query=f"""
                INSERT INTO users ({_USER_COLUMNS})
                VALUES (%s, %s, %s, %s, %s, %s, %s, COALESCE(%s, now()))
                RETURNING {_USER_COLUMNS}
            """,
            params=[
                user.id,
                user.user_code,
                user.name,
                user.email,
                user.password_hash,
                user.role.value,
                user.is_active,
                user.created_at,
            ],
            log_msg="PostgresUserRepository: Failed to create user",
            log_extra={"email": user.email, "role": user.role.value},
        )
        if not row:
            raise DatabaseError("Failed to create user: no row returned")
        return _row_to_user(row)

    def update(self, user_id: UUID, changes: Mapping[str, Any]) -> Optional[User]:
        values = {k: v for k, v in changes.items() if k in _UPDATABLE}
        if "role" in values:
            values["role"] = UserRole(values["role"]).value
        if not values:
            return self.get_by_id(user_id)

        assignments = sql.SQL(", ").join(
            sql.SQL("{} = {}").format(sql.Identifier(k), sql.Placeholder(k))
            for k in values
        )
        query = sql.SQL(
            "UPDATE users SET {assignments} WHERE id = %(id)s "
            f"RETURNING {_USER_COLUMNS}"
        ).format(assignments=assignments)
        row = self._fetchone(
            query=query,
            params={**values, "id": user_id},
            log_msg="PostgresUserRepository: Failed to update user",
            log_extra={"user_id": str(user_id), "fields": sorted(values)},
        )
        return _row_to_user(row) if row else None

    @staticmethod
    def _search_param(search: Optional[str]) -> Optional[str]:
        term = (search or "").strip()
        return f"%{term}%" if term else None

    def list_users(
        self, *, search: Optional[str] = None, limit: int = 10, offset: int = 0
    ) -> List[User]:
        query = (
            f"SELECT {_USER_COLUMNS} FROM users WHERE {_SEARCH_CLAUSE} "
            "ORDER BY created_at DESC LIMIT %(limit)s OFFSET %(offset)s"
        )
        params = {"q": self._search_param(search), "limit": limit, "offset": offset}
        try:
            with self._get_pool().connection() as conn:
                rows = conn.execute(query, params).fetchall()
        except Exception as exc:
            logger.exception(
                "PostgresUserRepository: Failed to list users", extra={"error": str(exc)}
            )
            raise DatabaseError(f"Failed to list users: {exc}") from exc
        return [_row_to_user(row) for row in rows]

    def count_users(self, *, search: Optional[str] = None) -> int:
        row = self._fetchone(
            query=f"SELECT COUNT(*) FROM users WHERE {_SEARCH_CLAUSE}",
            params={"q": self._search_param(search)},
            log_msg="PostgresUserRepository: Failed to count users",
            log_extra={},
        )
        return int(row[0]) if row else 0
