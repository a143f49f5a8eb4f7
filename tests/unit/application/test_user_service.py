"""Unit tests for user administration (codes, snapshots, role and self guards)."""

import pytest

from hrms.application.user_service import UserService, user_snapshot
from hrms.crosscutting.pagination import PageRequest
from hrms.identity.users import UserRole

pytestmark = pytest.mark.unit


def _hasher(password: str) -> str:
    return f"hashed:{password}"


@pytest.fixture
def service(user_repo, sequences) -> UserService:
    return UserService(user_repo, sequences, _hasher)


def test_create_assigns_sequential_codes(service, user_repo):
    first = service.create(name=" Ann ", email="Ann@X.io", password="longenough1")
    second = service.create(name="Bo", email="bo@x.io", password="longenough1")

    assert first.status_code == 201
    assert first.payload["user_code"] == "USR-001"
    assert second.payload["user_code"] == "USR-002"
    assert first.payload["name"] == "Ann"
    assert user_repo.get_by_email("ann@x.io").password_hash == "hashed:longenough1"


def test_snapshot_never_contains_password_hash(admin_user):
    snapshot = user_snapshot(admin_user)

    assert "password_hash" not in snapshot
    assert snapshot["role"] == "admin"
    assert snapshot["id"] == str(admin_user.id)


def test_update_rehashes_password_and_keeps_pre_image(service, admin_user, plain_user, user_repo):
    result = service.update(
        str(plain_user.id), {"password": "another-pass", "is_active": False}, acting=admin_user
    )

    assert result.status_code == 200
    assert result.previous["is_active"] is True
    assert result.payload["is_active"] is False
    assert user_repo.get_by_id(plain_user.id).password_hash == "hashed:another-pass"


def test_update_email_collision_is_400(service, admin_user, plain_user):
    result = service.update(str(plain_user.id), {"email": admin_user.email}, acting=admin_user)

    assert result.status_code == 400


def test_hr_role_change_is_403_but_same_role_is_allowed(service, hr_user, plain_user):
    escalate = service.update(str(plain_user.id), {"role": UserRole.ADMIN}, acting=hr_user)
    unchanged = service.update(str(plain_user.id), {"role": UserRole.USER}, acting=hr_user)

    assert escalate.status_code == 403
    assert unchanged.status_code == 200


def test_deactivate_self_is_rejected(service, admin_user):
    assert service.deactivate(str(admin_user.id), acting=admin_user).status_code == 400


def test_list_pages_newest_first(service, admin_user, hr_user, plain_user):
    page = service.list(PageRequest(page=1, limit=2))

    assert page.total == 3
    assert page.total_pages == 2
    assert len(page.data) == 2
