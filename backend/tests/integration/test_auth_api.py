"""
Auth and authorization tests: registration, login, token-gated routes and
permission seeding.
"""

import pytest

from hms.core.security import get_user_from_token
from hms.db.seed import ensure_admin, seed_permissions

REGISTRATION = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "password": "analytical-engine",
    "gender": "female",
    "blood_group": "O+",
}


@pytest.fixture
def registered(client):
    response = client.post("/api/auth/register", json=REGISTRATION)
    assert response.status_code == 201
    return response.get_json()["data"]


class TestRegister:
    def test_returns_token_with_claims(self, registered):
        user = get_user_from_token(registered["token"])

        assert user["email"] == "ada@example.com"
        assert user["name"] == "Ada Lovelace"
        # Default role starts without permissions
        assert registered["permissions"] == []

    def test_duplicate_email_is_rejected(self, client, registered):
        response = client.post(
            "/api/auth/register", json=dict(REGISTRATION, email="ADA@example.com")
        )

        assert response.status_code == 400
        assert "already registered" in response.get_json()["message"]

    def test_invalid_profile_is_rejected(self, client):
        response = client.post(
            "/api/auth/register", json=dict(REGISTRATION, blood_group="Z")
        )
        assert response.status_code == 400

    def test_missing_password(self, client):
        payload = {k: v for k, v in REGISTRATION.items() if k != "password"}
        assert client.post("/api/auth/register", json=payload).status_code == 400

    def test_password_past_bcrypt_limit_is_rejected(self, client):
        response = client.post(
            "/api/auth/register", json=dict(REGISTRATION, password="p" * 200)
        )

        assert response.status_code == 400
        assert "72 bytes" in response.get_json()["message"]


class TestLogin:
    def test_success(self, client, registered):
        response = client.post(
            "/api/auth/login",
            json={"email": "ada@example.com", "password": "analytical-engine"},
        )

        assert response.status_code == 201
        body = response.get_json()
        assert body["success"] is True
        assert get_user_from_token(body["data"]["token"])["email"] == "ada@example.com"

    def test_unknown_user(self, client):
        response = client.post(
            "/api/auth/login", json={"email": "nobody@example.com", "password": "x"}
        )
        assert response.status_code == 404

    def test_wrong_password(self, client, registered):
        response = client.post(
            "/api/auth/login", json={"email": "ada@example.com", "password": "nope"}
        )
        assert response.status_code == 400


class TestAuthorization:
    def test_missing_token_is_401(self, client):
        response = client.get("/api/buildings")

        assert response.status_code == 401
        assert response.get_json()["success"] is False

    def test_invalid_token_is_401(self, client):
        response = client.get(
            "/api/buildings", headers={"Authorization": "Bearer garbage"}
        )
        assert response.status_code == 401

    def test_missing_permission_is_403(self, client, make_auth_headers):
        response = client.post(
            "/api/buildings",
            json={"name": "Main"},
            headers=make_auth_headers("buildings.index"),
        )
        assert response.status_code == 403

    def test_granted_permission(self, client, make_auth_headers):
        response = client.get(
            "/api/buildings", headers=make_auth_headers("buildings.index")
        )
        assert response.status_code == 200

    def test_get_user_profile(self, client, registered, admin_headers):
        user_id = get_user_from_token(registered["token"])["user_id"]

        response = client.get(f"/api/auth/{user_id}", headers=admin_headers)

        assert response.status_code == 200
        profile = response.get_json()["data"]
        assert profile["email"] == "ada@example.com"
        assert profile["roles"] == ["User"]
        assert "password_hash" not in profile

    def test_get_missing_user(self, client, admin_headers):
        assert client.get("/api/auth/999", headers=admin_headers).status_code == 404


class TestPermissionSeeding:
    def test_seed_is_idempotent(self, app, db_session):
        first = seed_permissions(db_session)
        second = seed_permissions(db_session)

        assert first > 0
        assert second == 0

    def test_admin_token_carries_every_route_permission(
        self, app, client, db_session, registered
    ):
        seed_permissions(db_session)
        assert ensure_admin(db_session, "ada@example.com") is True

        response = client.post(
            "/api/auth/login",
            json={"email": "ada@example.com", "password": "analytical-engine"},
        )
        permissions = response.get_json()["data"]["permissions"]

        assert "buildings.store" in permissions
        assert "rooms.availability" in permissions
        assert "users.show" in permissions

        token = response.get_json()["data"]["token"]
        created = client.post(
            "/api/buildings",
            json={"name": "Main"},
            headers={"Authorization": f"Bearer {token}"},
        )
        assert created.status_code == 201

    def test_ensure_admin_unknown_email(self, db_session):
        assert ensure_admin(db_session, "ghost@example.com") is False
