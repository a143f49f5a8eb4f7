"""
Name: Identity Tests (passwords, JWT, role guards)

Responsibilities:
  - Validate Argon2 hashing round-trip
  - Validate token claims and rejection of bad tokens
  - Verify require_roles behavior on a minimal app
"""

import jwt
import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from hrms import container
from hrms.api.exception_handlers import register_exception_handlers
from hrms.crosscutting.error_responses import AppHTTPException
from hrms.identity.actor_resolver import UserActorResolver
from hrms.identity.auth_users import (
    AuthSettings,
    create_access_token,
    decode_access_token,
    hash_password,
    require_roles,
    verify_password,
)
from hrms.identity.users import User, UserRole

pytestmark = pytest.mark.unit

SETTINGS = AuthSettings(jwt_secret="unit-test-secret-unit-test-secret", jwt_access_ttl_minutes=5)


def test_password_round_trip():
    hashed = hash_password("pw")

    assert verify_password("pw", hashed)
    assert not verify_password("other", hashed)
    assert not verify_password("pw", "not-a-hash")


def test_token_round_trip(make_user):
    user = make_user(UserRole.HR)

    token, expires_in = create_access_token(user, SETTINGS)
    payload = decode_access_token(token, SETTINGS)

    assert expires_in == 300
    assert payload.user_id == str(user.id)
    assert payload.role is UserRole.HR


def test_expired_token_is_rejected(make_user):
    user = make_user()
    expired = AuthSettings(jwt_secret=SETTINGS.jwt_secret, jwt_access_ttl_minutes=-1)
    token, _ = create_access_token(user, expired)

    with pytest.raises(AppHTTPException) as exc_info:
        decode_access_token(token, SETTINGS)

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Token expired"


def test_wrong_signature_is_rejected():
    token = jwt.encode(
        {"sub": "x", "email": "e", "role": "admin", "exp": 9999999999},
        "another-secret-another-secret-xx",
        algorithm="HS256",
    )

    with pytest.raises(AppHTTPException):
        decode_access_token(token, SETTINGS)


def test_require_roles_guard(user_repo, admin_user, plain_user, auth_headers):
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/managers")
    def managers(_: User = Depends(require_roles(UserRole.ADMIN, UserRole.HR))):
        return {"ok": True}

    app.dependency_overrides[container.get_user_repository] = lambda: user_repo
    client = TestClient(app)

    assert client.get("/managers", headers=auth_headers(admin_user)).status_code == 200
    denied = client.get("/managers", headers=auth_headers(plain_user))
    assert denied.status_code == 403
    assert denied.json()["message"] == "Access denied: You don't have permission"


def test_inactive_user_token_is_forbidden(user_repo, auth_headers, make_user):
    inactive = user_repo.create(make_user(email="off@example.com", is_active=False))
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/any")
    def any_user(_: User = Depends(require_roles(UserRole.ADMIN))):
        return {"ok": True}

    app.dependency_overrides[container.get_user_repository] = lambda: user_repo

    assert TestClient(app).get("/any", headers=auth_headers(inactive)).status_code == 403


def test_actor_resolver_snapshots_user(user_repo, hr_user):
    actor = UserActorResolver(user_repo).resolve(str(hr_user.id))

    assert (actor.name, actor.email, actor.role) == (hr_user.name, hr_user.email, "hr")
    assert UserActorResolver(user_repo).resolve("not-a-uuid") is None
