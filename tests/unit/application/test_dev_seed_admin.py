"""Unit tests for the admin seed (idempotent, sequential user codes)."""

import pytest

from hrms.application.dev_seed_admin import ensure_admin, ensure_dev_admin, format_user_code
from hrms.crosscutting.config import Settings
from hrms.identity.users import UserRole

pytestmark = pytest.mark.unit


def _hasher(password: str) -> str:
    return f"hashed:{password}"


def test_disabled_does_nothing(user_repo, sequences):
    settings = Settings(database_url="postgres://", dev_seed_admin=False)

    assert ensure_dev_admin(
        settings, user_repo=user_repo, sequences=sequences, password_hasher=_hasher
    ) is None
    assert user_repo.get_by_email("admin@local") is None


def test_creates_admin_once(user_repo, sequences):
    kwargs = dict(
        name="Root",
        email="  Root@Example.com ",
        password="pw",
        user_repo=user_repo,
        sequences=sequences,
        password_hasher=_hasher,
    )

    created = ensure_admin(**kwargs)
    again = ensure_admin(**kwargs)

    assert created.email == "root@example.com"
    assert created.role is UserRole.ADMIN
    assert created.user_code == "USR-001"
    assert created.password_hash == "hashed:pw"
    assert again.id == created.id


def test_requires_email_and_password(user_repo, sequences):
    with pytest.raises(ValueError):
        ensure_admin(
            name="x",
            email="",
            password="pw",
            user_repo=user_repo,
            sequences=sequences,
            password_hasher=_hasher,
        )


def test_format_user_code():
    assert format_user_code(7) == "USR-007"
