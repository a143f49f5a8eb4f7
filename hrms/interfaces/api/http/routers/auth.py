"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/auth.py (Autenticación)
===============================================================================

Responsabilidades:
  - Exponer endpoints de autenticación (login/logout/me) con JWT.
  - Registrar LOGIN / LOGOUT en el activity log vía llamada explícita al
    ActivityRecorder (best-effort, no bloquea la respuesta).

Colaboradores:
  - identity.auth_users: authenticate_user, create_access_token
  - application.activity_recorder.ActivityRecorder
  - container (user repository, recorder)
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from .....application.activity_recorder import ActivityRecorder
from .....container import get_activity_recorder, get_user_repository
from .....crosscutting.error_responses import unauthorized
from .....domain.activity import ActivityAction
from .....identity.auth_users import authenticate_user, create_access_token
from .....identity.users import User, UserRepository
from ..dependencies import authenticated_user, request_context
from ..schemas.auth import LoginReq, LoginRes, MeRes, to_user_res
from ..schemas.common import MessageRes

AUTH_MODULE = "Auth"

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginRes)
def login(
    req: LoginReq,
    request: Request,
    user_repo: UserRepository = Depends(get_user_repository),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
):
    user = authenticate_user(user_repo, req.email, req.password)
    if not user:
        raise unauthorized("Invalid email or password")

    token, expires_in = create_access_token(user)

    recorder.record(
        str(user.id),
        AUTH_MODULE,
        ActivityAction.LOGIN,
        request=request_context(request),
        record_id=str(user.id),
    )

    return LoginRes(access_token=token, expires_in=expires_in, user=to_user_res(user))


@router.post("/logout", response_model=MessageRes)
def logout(
    request: Request,
    user: User = Depends(authenticated_user),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
):
    """JWT stateless: el cliente descarta el token; acá sólo se audita."""
    recorder.record(
        str(user.id),
        AUTH_MODULE,
        ActivityAction.LOGOUT,
        request=request_context(request),
        record_id=str(user.id),
    )
    return MessageRes(message="Logged out successfully")


@router.get("/me", response_model=MeRes)
def me(user: User = Depends(authenticated_user)):
    return MeRes(user=to_user_res(user))
