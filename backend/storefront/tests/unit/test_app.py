"""Tests for app assembly: route policy checks and startup seeding."""

from __future__ import annotations

import pytest
from starlette.testclient import TestClient

from storefront.tests.helpers import DEMO_EMAIL, DEMO_PASSWORD, login_customer, make_app


class TestCreateApp:
    def test_protected_route_outside_boundary_fails_startup(self):
        with pytest.raises(RuntimeError, match="/account"):
            make_app(protected_prefixes=["/checkout", "/orders"])

    def test_public_route_inside_boundary_fails_startup(self):
        with pytest.raises(RuntimeError, match="public but inside the session boundary"):
            make_app(protected_prefixes=["/checkout", "/orders", "/account", "/api/products"])

    def test_custom_login_path(self):
        with TestClient(make_app(login_path="/signin")) as client:
            response = client.get("/orders", follow_redirects=False)
            assert response.headers["location"] == "/signin"
            assert client.get("/signin").status_code == 200

    def test_demo_user_seeded_on_startup(self):
        with TestClient(make_app()) as client:
            assert login_customer(client, DEMO_EMAIL, DEMO_PASSWORD).status_code == 200

    def test_demo_user_seeding_can_be_disabled(self):
        with TestClient(make_app(seed_demo_user=False)) as client:
            assert login_customer(client, DEMO_EMAIL, DEMO_PASSWORD).status_code == 401

    def test_cleanup_tasks_stop_with_lifespan(self):
        app = make_app()
        with TestClient(app):
            assert app.state.rate_limiter._cleanup_task is not None
        assert app.state.rate_limiter._cleanup_task is None
        assert app.state.auth_rate_limiter._cleanup_task is None
