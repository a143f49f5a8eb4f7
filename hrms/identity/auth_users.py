"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Módulo:
    Autenticación de usuarios HRMS (Argon2 + JWT bearer)

Responsabilidades:
    - Hashear/verificar passwords.
    - Emitir y validar access tokens (sub, email, role, iat, exp, typ).
    - Resolver el usuario del request y registrarlo como actor en el contexto.
    - Guards FastAPI: require_user() y require_roles(...).

Colaboradores:
    - crosscutting.config.get_settings: jwt_secret / jwt_access_ttl_minutes.
    - crosscutting.error_responses: unauthorized / forbidden (envelope).
    - container.get_user_repository (override en tests).
    - context.set_actor: correlación de logs por usuario.

Reglas:
    - Credenciales inválidas y usuario inexistente son indistinguibles (None).
    - Usuario inactivo: 403 explícito.
    - Nunca se loguean tokens ni passwords.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Mapping
from uuid import UUID

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from fastapi import Depends, Header, Request
from fastapi.concurrency import run_in_threadpool

from ..container import get_user_repository
from ..context import set_actor
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import forbidden, unauthorized
from ..crosscutting.logger import logger
from .users import User, UserRepository, UserRole

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"
REQUIRED_CLAIMS = ("sub", "email", "role", "exp")

_hasher = PasswordHasher()


@dataclass(frozen=True, slots=True)
class AuthSettings:
    jwt_secret: str
    jwt_access_ttl_minutes: int


@dataclass(frozen=True, slots=True)
class TokenPayload:
    user_id: str
    email: str
    role: UserRole


def get_auth_settings() -> AuthSettings:
    s = get_settings()
    return AuthSettings(s.jwt_secret, s.jwt_access_ttl_minutes)


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    # VerifyMismatchError es subclase de VerificationError.
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def _ensure_active(user: User) -> User:
    if not user.is_active:
        logger.warning("Usuario inactivo rechazado", extra={"user_id": str(user.id)})
        raise forbidden("User account is inactive")
    return user


def authenticate_user(
    user_repo: UserRepository, email: str, password: str
) -> User | None:
    """Login: usuario activo con esas credenciales, o None."""
    normalized = (email or "").strip().lower()
    user = user_repo.get_by_email(normalized) if normalized else None
    if user is None or not verify_password(password, user.password_hash):
        return None
    return _ensure_active(user)


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


def create_access_token(
    user: User, settings: AuthSettings | None = None
) -> tuple[str, int]:
    """Firma un access token. Retorna (token, expires_in_seconds)."""
    cfg = settings or get_auth_settings()
    issued = datetime.now(timezone.utc)
    ttl = timedelta(minutes=cfg.jwt_access_ttl_minutes)
    claims = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role.value,
        "iat": int(issued.timestamp()),
        "exp": int((issued + ttl).timestamp()),
        "typ": ACCESS_TOKEN_TYPE,
    }
    token = jwt.encode(claims, cfg.jwt_secret, algorithm=JWT_ALGORITHM)
    return token, int(ttl.total_seconds())


def _payload_from_claims(claims: Mapping[str, Any]) -> TokenPayload:
    if claims.get("typ", ACCESS_TOKEN_TYPE) != ACCESS_TOKEN_TYPE:
        raise unauthorized("Invalid token type")
    try:
        role = UserRole(str(claims["role"]))
    except ValueError as exc:
        raise unauthorized("Invalid token") from exc
    return TokenPayload(
        user_id=str(claims["sub"]), email=str(claims["email"]), role=role
    )


def decode_access_token(
    token: str, settings: AuthSettings | None = None
) -> TokenPayload:
    """Valida firma, expiración y claims; 401 ante cualquier problema."""
    cfg = settings or get_auth_settings()
    try:
        claims = jwt.decode(
            token,
            cfg.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": list(REQUIRED_CLAIMS)},
        )
    except jwt.ExpiredSignatureError as exc:
        raise unauthorized("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise unauthorized("Invalid token") from exc
    return _payload_from_claims(claims)


def get_current_user(user_repo: UserRepository, token: str) -> User:
    payload = decode_access_token(token)
    try:
        user = user_repo.get_by_id(UUID(payload.user_id))
    except ValueError as exc:
        raise unauthorized("Invalid token") from exc
    if user is None:
        raise unauthorized("Invalid token")
    return _ensure_active(user)


def bearer_token(authorization: str | None) -> str | None:
    scheme, _, token = (authorization or "").strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


# ---------------------------------------------------------------------------
# Guards FastAPI
# ---------------------------------------------------------------------------


def require_user() -> Callable:
    """
    Guard de autenticación.

    Async para que set_actor quede en el contexto del request; el lookup del
    usuario (I/O bloqueante) corre en el threadpool.
    """

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
        user_repo: UserRepository = Depends(get_user_repository),
    ) -> User:
        token = bearer_token(authorization)
        if token is None:
            raise unauthorized("Not authorized, no token")
        user = await run_in_threadpool(get_current_user, user_repo, token)
        request.state.user = user
        set_actor(str(user.id))
        return user

    return dependency


def require_roles(*roles: UserRole | str) -> Callable:
    """Guard por rol; 403 con el mensaje estándar de acceso denegado."""
    allowed = frozenset(UserRole(r) for r in roles)
    authenticated = require_user()

    def dependency(user: User = Depends(authenticated)) -> User:
        if user.role not in allowed:
            raise forbidden()
        return user

    return dependency
