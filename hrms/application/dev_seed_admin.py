# =============================================================================
# FILE: application/dev_seed_admin.py
# =============================================================================
"""
===============================================================================
TASK: Dev Seed Admin
===============================================================================

Qué es:
    Asegura que exista un usuario admin cuando DEV_SEED_ADMIN está habilitado
    (desarrollo local) o cuando se invoca explícitamente (scripts/create_admin.py).

Seguridad:
    - Settings ya bloquea DEV_SEED_ADMIN en producción.

Patrones:
    - Dependency Injection (repo + hasher + secuencias)
    - Idempotencia (ensure-create: si existe, no hace nada)

CRC:
    Component: ensure_admin / ensure_dev_admin
    Responsibilities:
      - Crear el admin con código legible (USR-001) si no existe
    Collaborators:
      - identity.users.UserRepository
      - domain.repositories.SequenceRepository
      - password_hasher (Argon2 en identity.auth_users)
===============================================================================
"""

from __future__ import annotations

from typing import Callable
from uuid import uuid4

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger
from ..domain.entities import utcnow
from ..domain.repositories import SequenceRepository
from ..identity.users import User, UserRepository, UserRole

USER_CODE_PREFIX = "USR"
USER_SEQUENCE_KEY = "users"


def format_user_code(value: int) -> str:
    """Códigos de usuario usan 3 dígitos: USR-001."""
    return f"{USER_CODE_PREFIX}-{value:03d}"


def ensure_admin(
    *,
    name: str,
    email: str,
    password: str,
    user_repo: UserRepository,
    sequences: SequenceRepository,
    password_hasher: Callable[[str], str],
) -> User:
    """Crea el admin si no existe; devuelve el usuario (nuevo o existente)."""
    normalized_email = (email or "").strip().lower()
    if not normalized_email or not password:
        raise ValueError("Admin seed requires a non-empty email and password")

    existing = user_repo.get_by_email(normalized_email)
    if existing is not None:
        logger.info("Admin seed: user exists; skipping", extra={"email": normalized_email})
        return existing

    user = user_repo.create(
        User(
            id=uuid4(),
            user_code=format_user_code(sequences.next_value(USER_SEQUENCE_KEY)),
            name=name,
            email=normalized_email,
            password_hash=password_hasher(password),
            role=UserRole.ADMIN,
            is_active=True,
            created_at=utcnow(),
        )
    )
    logger.info(
        "Admin seed: user created",
        extra={"email": normalized_email, "user_code": user.user_code},
    )
    return user


def ensure_dev_admin(
    settings: Settings,
    *,
    user_repo: UserRepository,
    sequences: SequenceRepository,
    password_hasher: Callable[[str], str],
) -> User | None:
    if not settings.dev_seed_admin:
        return None
    return ensure_admin(
        name=settings.dev_seed_admin_name,
        email=settings.dev_seed_admin_email,
        password=settings.dev_seed_admin_password,
        user_repo=user_repo,
        sequences=sequences,
        password_hasher=password_hasher,
    )
