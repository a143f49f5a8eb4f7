"""
===============================================================================
TARJETA CRC — application/user_service.py
===============================================================================

Componente:
  UserService (administración de cuentas de usuario)

Responsabilidades:
  - create: alta por un admin con código legible secuencial (USR-001).
  - list: listado paginado con búsqueda (código, nombre, email, rol).
  - update: cambios parciales con pre-image para auditoría.
  - deactivate (DELETE): is_active = False; nunca borra la cuenta.
  - Devolver ActionResult (lo consume el AuditInterceptor, módulo "Users").

Colaboradores:
  - identity.users.UserRepository
  - domain.repositories.SequenceRepository
  - password_hasher (Argon2 en identity.auth_users)

Reglas:
  - Los snapshots nunca incluyen password_hash.
  - Email duplicado -> 400; id malformado o inexistente -> 404.
  - Sólo un admin cambia roles; nadie se desactiva a sí mismo.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional
from uuid import UUID, uuid4

from ..crosscutting.logger import logger
from ..crosscutting.pagination import PageRequest, total_pages
from ..domain.entities import utcnow
from ..domain.repositories import SequenceRepository
from ..identity.users import User, UserRepository, UserRole
from .audit_interceptor import ActionResult
from .dev_seed_admin import USER_SEQUENCE_KEY, format_user_code

USERS_MODULE = "Users"


def user_snapshot(user: User) -> Dict[str, Any]:
    """Vista auditable/serializable del usuario (sin hash de password)."""
    return {
        "id": str(user.id),
        "user_code": user.user_code,
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
        "is_active": user.is_active,
        "created_at": user.created_at,
    }


@dataclass
class UserPage:
    total: int
    total_pages: int
    current_page: int
    limit: int
    data: List[User] = field(default_factory=list)


def _parse_id(user_id: str) -> Optional[UUID]:
    try:
        return UUID(str(user_id))
    except ValueError:
        return None


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserService:
    def __init__(
        self,
        users: UserRepository,
        sequences: SequenceRepository,
        password_hasher: Callable[[str], str],
    ):
        self._users = users
        self._sequences = sequences
        self._hash = password_hasher

    @staticmethod
    def _not_found() -> ActionResult:
        return ActionResult(404, message="User not found")

    def _email_taken(self, email: str, owner: Optional[UUID] = None) -> bool:
        existing = self._users.get_by_email(email)
        return existing is not None and existing.id != owner

    def create(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
        is_active: bool = True,
    ) -> ActionResult:
        normalized = _normalize_email(email)
        if self._email_taken(normalized):
            return ActionResult(400, message="Email already exists")

        user = self._users.create(
            User(
                id=uuid4(),
                user_code=format_user_code(self._sequences.next_value(USER_SEQUENCE_KEY)),
                name=name.strip(),
                email=normalized,
                password_hash=self._hash(password),
                role=role,
                is_active=is_active,
                created_at=utcnow(),
            )
        )
        logger.info(
            "Usuario creado",
            extra={"user_id": str(user.id), "user_code": user.user_code},
        )
        return ActionResult(
            201, payload=user_snapshot(user), message="User created successfully"
        )

    def list(self, page: PageRequest, *, search: Optional[str] = None) -> UserPage:
        search = (search or "").strip() or None
        total = self._users.count_users(search=search)
        data = self._users.list_users(search=search, limit=page.limit, offset=page.offset)
        return UserPage(
            total=total,
            total_pages=total_pages(total, page.limit),
            current_page=page.page,
            limit=page.limit,
            data=data,
        )

    def update(
        self, user_id: str, changes: Mapping[str, Any], *, acting: User
    ) -> ActionResult:
        uid = _parse_id(user_id)
        previous = self._users.get_by_id(uid) if uid else None
        if previous is None:
            return self._not_found()

        role = changes.get("role")
        if role is not None and role != previous.role and acting.role is not UserRole.ADMIN:
            return ActionResult(403, message="Only admins can change user roles")

        fields: Dict[str, Any] = {
            k: v for k, v in changes.items() if v is not None and k != "password"
        }
        if "name" in fields:
            fields["name"] = fields["name"].strip()
        if "email" in fields:
            fields["email"] = _normalize_email(fields["email"])
            if self._email_taken(fields["email"], owner=previous.id):
                return ActionResult(400, message="Email already exists")
        if changes.get("password"):
            fields["password_hash"] = self._hash(changes["password"])

        updated = self._users.update(previous.id, fields)
        if updated is None:
            return self._not_found()
        return ActionResult(
            200,
            payload=user_snapshot(updated),
            message="User updated successfully",
            previous=user_snapshot(previous),
        )

    def deactivate(self, user_id: str, *, acting: User) -> ActionResult:
        uid = _parse_id(user_id)
        previous = self._users.get_by_id(uid) if uid else None
        if previous is None:
            return self._not_found()
        if previous.id == acting.id:
            return ActionResult(400, message="You cannot deactivate your own account")

        updated = self._users.update(previous.id, {"is_active": False})
        if updated is None:
            return self._not_found()
        logger.info("Usuario desactivado", extra={"user_id": str(updated.id)})
        return ActionResult(
            200,
            payload=user_snapshot(updated),
            message="User deactivated successfully",
            previous=user_snapshot(previous),
        )

