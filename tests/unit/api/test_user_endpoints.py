"""
Name: User Administration Endpoint Tests

Responsibilities:
  - Validate signup (admin only), listing (admin/hr), profile
  - Validate update and deactivation are audited under "Users"
  - Ensure password hashes never reach responses or the activity log
"""

import pytest

pytestmark = pytest.mark.unit

NEW_USER = {
    "name": "Nia New",
    "email": " NIA@example.com",
    "password": "longenough1",
    "role": "hr",
}


@pytest.fixture
def signup(api_client, auth_headers):
    def _post(actor, **overrides):
        return api_client.post(
            "/users/signup", json={**NEW_USER, **overrides}, headers=auth_headers(actor)
        )

    return _post


def test_admin_creates_user_and_is_audited(signup, admin_user, activity_repo, user_repo):
    response = signup(admin_user)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["email"] == "nia@example.com"
    assert data["role"] == "hr"
    assert data["userCode"].startswith("USR-")
    assert "passwordHash" not in data
    assert user_repo.get_by_email("nia@example.com") is not None

    [entry] = activity_repo.get_all_entries()
    assert entry.action.value == "CREATE"
    assert entry.module == "Users"
    assert entry.record_id == data["id"]
    assert "password_hash" not in entry.changes.new_values


def test_new_user_can_log_in(api_client, signup, admin_user):
    signup(admin_user)

    response = api_client.post(
        "/auth/login", json={"email": "nia@example.com", "password": "longenough1"}
    )

    assert response.status_code == 200


def test_hr_cannot_create_users(signup, hr_user, activity_repo):
    response = signup(hr_user)

    assert response.status_code == 403
    assert activity_repo.get_all_entries() == []


def test_duplicate_email_is_400_and_not_audited(signup, admin_user, activity_repo):
    response = signup(admin_user, email=admin_user.email)

    assert response.status_code == 400
    assert response.json()["message"] == "Email already exists"
    assert activity_repo.get_all_entries() == []


def test_short_password_is_rejected(signup, admin_user):
    assert signup(admin_user, password="short").status_code == 422


def test_list_users_for_hr_with_search(api_client, auth_headers, admin_user, hr_user, plain_user):
    everyone = api_client.get("/users/all", headers=auth_headers(hr_user)).json()
    found = api_client.get("/users/all?search=uma", headers=auth_headers(hr_user)).json()

    assert everyone["total"] == 3
    assert everyone["currentPage"] == 1
    assert found["total"] == 1
    assert found["data"][0]["email"] == "uma@example.com"


def test_plain_user_cannot_list_users(api_client, auth_headers, plain_user):
    response = api_client.get("/users/all", headers=auth_headers(plain_user))

    assert response.status_code == 403


def test_profile_returns_current_user(api_client, auth_headers, plain_user):
    response = api_client.get("/users/profile", headers=auth_headers(plain_user))

    assert response.status_code == 200
    assert response.json()["user"]["email"] == plain_user.email


def test_update_user_records_pre_image(api_client, auth_headers, hr_user, plain_user, activity_repo):
    response = api_client.put(
        f"/users/{plain_user.id}", json={"name": "Uma Updated"}, headers=auth_headers(hr_user)
    )

    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Uma Updated"
    [entry] = activity_repo.get_all_entries()
    assert entry.action.value == "UPDATE"
    assert entry.module == "Users"
    assert entry.changes.old_values["name"] == "Uma User"
    assert entry.changes.new_values["name"] == "Uma Updated"


def test_hr_cannot_change_roles(api_client, auth_headers, hr_user, plain_user, activity_repo):
    response = api_client.put(
        f"/users/{plain_user.id}", json={"role": "admin"}, headers=auth_headers(hr_user)
    )

    assert response.status_code == 403
    assert activity_repo.get_all_entries() == []


def test_update_unknown_user_is_404(api_client, auth_headers, admin_user):
    response = api_client.put(
        "/users/not-a-uuid", json={"name": "Ghost"}, headers=auth_headers(admin_user)
    )

    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


def test_delete_deactivates_and_blocks_login(
    api_client, auth_headers, admin_user, plain_user, activity_repo, user_password
):
    response = api_client.delete(f"/users/{plain_user.id}", headers=auth_headers(admin_user))

    assert response.status_code == 200
    assert response.json()["data"]["isActive"] is False
    [entry] = activity_repo.get_all_entries()
    assert entry.action.value == "DELETE"
    assert entry.changes.old_values["is_active"] is True
    assert entry.changes.new_values is None

    login = api_client.post(
        "/auth/login", json={"email": plain_user.email, "password": user_password}
    )
    assert login.status_code == 403


def test_admin_cannot_deactivate_self(api_client, auth_headers, admin_user, activity_repo):
    response = api_client.delete(f"/users/{admin_user.id}", headers=auth_headers(admin_user))

    assert response.status_code == 400
    assert activity_repo.get_all_entries() == []
