"""Shared fixtures for storefront tests."""

import os

import pytest
from starlette.testclient import TestClient

# AuthSettings requires AUTH_JWT_SECRET. Set a test default before any
# AuthSettings is instantiated.
os.environ.setdefault("AUTH_JWT_SECRET", "test-jwt-secret-0123456789abcdef0123456789")

from storefront.tests.helpers import make_app  # noqa: E402


@pytest.fixture
def client():
    """Client with the lifespan running, so the demo account is seeded."""
    with TestClient(make_app()) as c:
        yield c
