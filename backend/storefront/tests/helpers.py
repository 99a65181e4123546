"""Helpers for building a storefront app and driving the auth endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from shared.auth.settings import AuthSettings
from storefront.server.app import create_app
from storefront.server.settings import StorefrontSettings

if TYPE_CHECKING:
    import httpx
    from starlette.applications import Starlette
    from starlette.testclient import TestClient

TEST_SECRET = "storefront-test-secret-0123456789abcdef"
STRONG_PASSWORD = "Abc12345!"
DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "Demo@12345"


def make_app(**overrides: Any) -> Starlette:  # noqa: ANN401
    """Build the app with the fast test hasher. ``auth_*`` keys go to AuthSettings."""
    auth_overrides = {key.removeprefix("auth_"): overrides.pop(key) for key in list(overrides) if key.startswith("auth_")}
    return create_app(
        settings=StorefrontSettings(**overrides),
        auth_settings=AuthSettings(jwt_secret=TEST_SECRET, password_hasher="simple", **auth_overrides),
    )


def register_customer(
    client: TestClient,
    email: str = "a@b.com",
    password: str = STRONG_PASSWORD,
) -> httpx.Response:
    return client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "firstName": "A", "lastName": "B"},
    )


def login_customer(
    client: TestClient,
    email: str = "a@b.com",
    password: str = STRONG_PASSWORD,
) -> httpx.Response:
    return client.post("/api/auth/login", json={"email": email, "password": password})
