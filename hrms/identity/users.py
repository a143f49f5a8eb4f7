"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario (JWT) + contrato de persistencia de usuarios

Responsabilidades:
    - Definir el enum de roles (admin / hr / user).
    - Definir el dataclass User utilizado por login, token y auditoría.
    - Definir el puerto UserRepository (lookup por id / email, alta, listado,
      actualización parcial).

Colaboradores:
    - identity/auth_users.py: usa User y UserRole para emitir/validar JWT.
    - identity/actor_resolver.py: User -> ActorSnapshot para el activity log.
    - infrastructure/repositories/{postgres,in_memory}/users.py: implementan el puerto.

Notas:
    - Este módulo NO contiene lógica de negocio: solo "shapes" de datos.
    - Si agregás nuevos roles, revisá las dependencias require_roles de los routers.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, List, Mapping, Optional, Protocol
from uuid import UUID


class UserRole(str, Enum):
    """Roles soportados para autenticación JWT."""

    ADMIN = "admin"
    HR = "hr"
    USER = "user"


# Roles que pueden mutar recursos HR.
MANAGER_ROLES = (UserRole.ADMIN, UserRole.HR)


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario utilizado por autenticación (JWT)."""

    id: UUID
    user_code: str
    name: str
    email: str
    password_hash: str
    role: UserRole
    is_active: bool = True
    created_at: datetime | None = None


class UserRepository(Protocol):
    def get_by_id(self, user_id: UUID) -> Optional[User]:
        ...

    def get_by_email(self, email: str) -> Optional[User]:
        ...

    def create(self, user: User) -> User:
        ...

    def update(self, user_id: UUID, changes: Mapping[str, Any]) -> Optional[User]:
        ...

    def list_users(
        self, *, search: Optional[str] = None, limit: int = 10, offset: int = 0
    ) -> List[User]:
        ...

    def count_users(self, *, search: Optional[str] = None) -> int:
        ...
