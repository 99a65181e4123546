"""Integration tests for the auth API: register, login, session, logout."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

from starlette.testclient import TestClient

from storefront.tests.helpers import (
    DEMO_EMAIL,
    DEMO_PASSWORD,
    STRONG_PASSWORD,
    login_customer,
    make_app,
    register_customer,
)


class TestRegister:
    def test_register_creates_session(self, client):
        response = register_customer(client)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["user"]["email"] == "a@b.com"
        assert body["data"]["user"]["firstName"] == "A"
        assert body["data"]["token"].count(".") == 2
        assert response.cookies["auth-token"] == body["data"]["token"]

    def test_session_cookie_attributes(self, client):
        header = register_customer(client).headers["set-cookie"]
        assert "HttpOnly" in header
        assert "SameSite=strict" in header
        assert "Max-Age=604800" in header

    def test_user_payload_hides_password_hash(self, client):
        user = register_customer(client).json()["data"]["user"]
        assert set(user) == {"id", "email", "firstName", "lastName", "createdAt", "updatedAt"}

    def test_duplicate_email_conflicts(self, client):
        register_customer(client)
        response = register_customer(client, email="A@B.com")

        assert response.status_code == 409
        assert response.json() == {"success": False, "error": "User already exists"}

    def test_weak_password_lists_every_problem(self, client):
        response = register_customer(client, password="weak")

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert len(body["errors"]) == 4
        assert body["error"] == ", ".join(body["errors"])

    def test_invalid_email(self, client):
        response = register_customer(client, email="not-an-email")
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid email format"

    def test_missing_field(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "a@b.com", "password": STRONG_PASSWORD, "firstName": "A"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "All fields are required"

    def test_malformed_body(self, client):
        response = client.post(
            "/api/auth/register",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid request body"}

    def test_wrong_field_type(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": ["a@b.com"], "password": STRONG_PASSWORD, "firstName": "A", "lastName": "B"},
        )
        assert response.status_code == 400


class TestLogin:
    def test_login_with_demo_account(self, client):
        response = login_customer(client, DEMO_EMAIL, DEMO_PASSWORD)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["id"] == "user-1"
        assert data["user"]["firstName"] == "John"
        assert data["redirectTo"] == "/"
        assert response.cookies["auth-token"] == data["token"]

    def test_unknown_email_and_wrong_password_look_the_same(self, client):
        register_customer(client)
        unknown = login_customer(client, "nobody@b.com", STRONG_PASSWORD)
        wrong = login_customer(client, "a@b.com", "Wrong1234!")

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json() == {"success": False, "error": "Invalid credentials"}
        assert "auth-token" not in unknown.cookies

    def test_missing_credentials(self, client):
        response = client.post("/api/auth/login", json={"email": "a@b.com"})
        assert response.status_code == 400
        assert response.json()["error"] == "Email and password are required"

    def test_unknown_field_rejected(self, client):
        response = client.post(
            "/api/auth/login",
            json={"email": "a@b.com", "password": STRONG_PASSWORD, "remember": True},
        )
        assert response.status_code == 400


class TestSession:
    def test_anonymous_session_is_null(self, client):
        response = client.get("/api/auth/session")
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": None}

    def test_session_after_login(self, client):
        login_customer(client, DEMO_EMAIL, DEMO_PASSWORD)
        response = client.get("/api/auth/session")
        assert response.json()["data"]["email"] == DEMO_EMAIL

    def test_garbage_token_is_null(self, client):
        client.cookies.set("auth-token", "garbage")
        assert client.get("/api/auth/session").json()["data"] is None

    def test_full_cycle(self, client):
        register_customer(client)
        assert client.get("/api/auth/session").json()["data"]["email"] == "a@b.com"

        logout = client.post("/api/auth/logout")
        assert logout.status_code == 200
        assert logout.json() == {"success": True, "message": "Logged out successfully"}
        assert client.get("/api/auth/session").json()["data"] is None


class TestLogout:
    def test_logout_without_session(self, client):
        response = client.post("/api/auth/logout")
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Not authenticated"}

    def test_logout_expires_cookie(self, client):
        register_customer(client)
        header = client.post("/api/auth/logout").headers["set-cookie"]
        assert header.startswith('auth-token="";')
        assert "Max-Age=0" in header


class TestRateLimiting:
    def test_login_attempts_are_limited(self):
        with TestClient(make_app(auth_rate_limit_requests=3)) as client:
            statuses = [login_customer(client, "x@b.com", STRONG_PASSWORD).status_code for _ in range(4)]
            assert statuses == [401, 401, 401, 429]
            assert login_customer(client).json()["error"] == "Too many login attempts. Please try again later."

    def test_register_and_login_budgets_are_separate(self):
        with TestClient(make_app(auth_rate_limit_requests=1)) as client:
            assert register_customer(client).status_code == 201
            assert register_customer(client, email="c@d.com").status_code == 429
            assert login_customer(client).status_code == 200

    def test_clients_are_limited_independently(self):
        with TestClient(make_app(auth_rate_limit_requests=1)) as client:
            first = {"x-forwarded-for": "10.0.0.1"}
            second = {"x-forwarded-for": "10.0.0.2"}
            body = {"email": "x@b.com", "password": STRONG_PASSWORD}
            assert client.post("/api/auth/login", json=body, headers=first).status_code == 401
            assert client.post("/api/auth/login", json=body, headers=first).status_code == 429
            assert client.post("/api/auth/login", json=body, headers=second).status_code == 401


class TestInternalErrors:
    def test_unexpected_failure_is_opaque(self):
        app = make_app()
        with TestClient(app, raise_server_exceptions=False) as client:
            with patch.object(app.state.auth_service, "login", AsyncMock(side_effect=RuntimeError("db on fire"))):
                response = login_customer(client)

            assert response.status_code == 500
            assert response.json() == {"success": False, "error": "Internal server error"}
            assert "db on fire" not in response.text
