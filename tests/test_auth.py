"""Registration, login, current user and logout."""

from jose import jwt

from shared.core.auth import create_access_token
from shared.utils.app_status_code import AppStatusCode
from .conftest import STAFF_PASSWORD, login


def _register(client, **overrides):
    payload = {
        "name": "Ana Cruz",
        "username": "ana",
        "password": "secret123",
        "password_confirmation": "secret123",
        "email": "ana@example.com",
    }
    payload.update(overrides)
    return client.post("/api/register", json=payload)


class TestRegister:

    def test_register_returns_token_and_staff_user(self, auth_client):
        resp = _register(auth_client)
        assert resp.status_code == 201
        body = resp.json()
        assert body["status"] == "Success"
        assert body["data"]["token"]
        assert body["data"]["token_type"] == "bearer"
        assert body["data"]["user"]["username"] == "ana"
        assert body["data"]["user"]["name"] == "Ana Cruz"
        assert body["data"]["user"]["role"] == "staff"

    def test_register_ignores_requested_role(self, auth_client):
        resp = _register(auth_client, role="admin")
        assert resp.status_code == 201
        assert resp.json()["data"]["user"]["role"] == "staff"

    def test_duplicate_username_is_conflict(self, auth_client):
        assert _register(auth_client).status_code == 201
        resp = _register(auth_client, email="other@example.com")
        assert resp.status_code == 409
        assert resp.json()["status_code"] == AppStatusCode.USER_USERNAME_IS_UNIQUE

    def test_password_confirmation_must_match(self, auth_client):
        resp = _register(auth_client, password_confirmation="different")
        assert resp.status_code == 422
        assert resp.json()["status"] == "Failure"

    def test_short_password_rejected(self, auth_client):
        resp = _register(auth_client, password="abc", password_confirmation="abc")
        assert resp.status_code == 422
        assert "password" in resp.json()["data"]["errors"]

    def test_blank_name_rejected(self, auth_client):
        resp = _register(auth_client, name="   ")
        assert resp.status_code == 422


class TestLogin:

    def test_login_with_valid_credentials(self, auth_client, staff_user):
        resp = auth_client.post(
            "/api/login", json={"username": "staff", "password": STAFF_PASSWORD})
        assert resp.status_code == 200
        assert resp.json()["data"]["user"]["id"] == str(staff_user.id)

    def test_wrong_password_is_unauthorized(self, auth_client, staff_user):
        resp = auth_client.post(
            "/api/login", json={"username": "staff", "password": "nope-nope"})
        assert resp.status_code == 401
        assert resp.json()["message"] == "Invalid credentials"
        assert resp.json()["status_code"] == AppStatusCode.AUTHENTICATION_CREDENTIALS_INVALID

    def test_unknown_user_gets_same_error(self, auth_client):
        resp = auth_client.post(
            "/api/login", json={"username": "ghost", "password": "whatever"})
        assert resp.status_code == 401
        assert resp.json()["message"] == "Invalid credentials"


class TestCurrentUserAndLogout:

    def test_current_user(self, auth_client, staff_headers):
        resp = auth_client.get("/api/user", headers=staff_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["username"] == "staff"

    def test_missing_token(self, auth_client):
        resp = auth_client.get("/api/user")
        assert resp.status_code == 401
        assert resp.json()["status_code"] == AppStatusCode.AUTHENTICATION_TOKEN_MISSING

    def test_garbage_token(self, auth_client):
        resp = auth_client.get("/api/user", headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401

    def test_expired_token(self, auth_client, staff_headers):
        token = staff_headers["Authorization"].split(" ", 1)[1]
        claims = jwt.get_unverified_claims(token)
        claims.pop("exp")
        expired = create_access_token(claims, expires_minutes=-5)

        resp = auth_client.get("/api/user", headers={"Authorization": f"Bearer {expired}"})
        assert resp.status_code == 401
        assert resp.json()["data"]["error"] == "Signature has expired."
        assert resp.json()["status_code"] == AppStatusCode.AUTHENTICATION_TOKEN_EXPIRED

    def test_logout_invalidates_token(self, auth_client, staff_headers):
        resp = auth_client.post("/api/logout", headers=staff_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["message"] == "Logged out"

        resp = auth_client.get("/api/user", headers=staff_headers)
        assert resp.status_code == 401

    def test_logout_only_closes_its_own_session(self, auth_client, staff_user):
        first = login(auth_client, "staff", STAFF_PASSWORD)
        second = login(auth_client, "staff", STAFF_PASSWORD)

        assert auth_client.post("/api/logout", headers=first).status_code == 200
        assert auth_client.get("/api/user", headers=first).status_code == 401
        assert auth_client.get("/api/user", headers=second).status_code == 200

    def test_health_is_public(self, auth_client):
        resp = auth_client.get("/api/auth/health")
        assert resp.status_code == 200
        assert resp.json()["data"]["status"] == "healthy"
