"""Tests for AuthService."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from shared.auth.memory_repository import InMemoryUserRepository
from shared.auth.password import SimpleHasher
from shared.auth.service import (
    AuthService,
    InvalidCredentialsError,
    InvalidInputError,
    UserExistsError,
)
from shared.auth.tokens import TokenService

SECRET = "service-test-secret-0123456789abcdef"
PASSWORD = "Abc12345!"


@pytest.fixture
def users():
    return InMemoryUserRepository()


@pytest.fixture
def tokens():
    return TokenService(SECRET)


@pytest.fixture
def hasher():
    return SimpleHasher()


@pytest.fixture
def auth_service(users, tokens, hasher):
    return AuthService(users, tokens, password_hasher=hasher)


class TestRegister:
    async def test_registers_customer_and_issues_token(self, auth_service, tokens):
        user, token = await auth_service.register("a@b.com", PASSWORD, "A", "B")

        assert user.email == "a@b.com"
        assert user.first_name == "A"
        assert user.user_id
        claims = tokens.verify(token)
        assert claims is not None
        assert claims.user_id == user.user_id

    async def test_password_is_hashed(self, auth_service, users):
        user, _ = await auth_service.register("a@b.com", PASSWORD, "A", "B")
        stored = await users.get_by_id(user.user_id)
        assert stored.password_hash != PASSWORD
        assert stored.password_hash.startswith("simple$")

    async def test_normalizes_email_and_names(self, auth_service):
        user, _ = await auth_service.register("  A@B.COM ", PASSWORD, "  Ann ", " Lee  ")
        assert user.email == "a@b.com"
        assert user.first_name == "Ann"
        assert user.last_name == "Lee"

    @pytest.mark.parametrize(
        ("email", "password", "first", "last"),
        [
            ("", PASSWORD, "A", "B"),
            ("a@b.com", "", "A", "B"),
            ("a@b.com", PASSWORD, None, "B"),
            ("a@b.com", PASSWORD, "A", "   "),
        ],
    )
    async def test_missing_fields(self, auth_service, email, password, first, last):
        with pytest.raises(InvalidInputError, match="All fields are required"):
            await auth_service.register(email, password, first, last)

    async def test_invalid_email(self, auth_service):
        with pytest.raises(InvalidInputError, match="Invalid email format"):
            await auth_service.register("not-an-email", PASSWORD, "A", "B")

    async def test_weak_password_lists_every_violation(self, auth_service):
        with pytest.raises(InvalidInputError) as exc_info:
            await auth_service.register("a@b.com", "weak", "A", "B")

        assert len(exc_info.value.errors) == 4
        assert "Password must be at least 8 characters" in exc_info.value.errors
        assert str(exc_info.value) == ", ".join(exc_info.value.errors)

    async def test_password_over_72_bytes_rejected(self, auth_service):
        password = "Aa1!" + "é" * 40
        with pytest.raises(InvalidInputError, match="72 bytes"):
            await auth_service.register("a@b.com", password, "A", "B")

    async def test_duplicate_email_rejected(self, auth_service):
        await auth_service.register("a@b.com", PASSWORD, "A", "B")
        with pytest.raises(UserExistsError, match="User already exists"):
            await auth_service.register("A@b.com", PASSWORD, "C", "D")

    async def test_lost_insert_race_reported_as_existing_user(self, auth_service, users):
        with (
            patch.object(users, "create_user", AsyncMock(side_effect=ValueError("User already exists"))),
            pytest.raises(UserExistsError),
        ):
            await auth_service.register("a@b.com", PASSWORD, "A", "B")


class TestLogin:
    async def test_login_returns_user_and_token(self, auth_service, tokens):
        registered, _ = await auth_service.register("a@b.com", PASSWORD, "A", "B")
        user, token = await auth_service.login("A@B.com", PASSWORD)

        assert user.user_id == registered.user_id
        assert tokens.verify(token).user_id == registered.user_id

    async def test_missing_credentials(self, auth_service):
        with pytest.raises(InvalidInputError, match="Email and password are required"):
            await auth_service.login("", PASSWORD)
        with pytest.raises(InvalidInputError, match="Email and password are required"):
            await auth_service.login("a@b.com", None)

    async def test_unknown_email_and_wrong_password_are_indistinguishable(self, auth_service):
        await auth_service.register("a@b.com", PASSWORD, "A", "B")

        with pytest.raises(InvalidCredentialsError) as unknown:
            await auth_service.login("nobody@b.com", PASSWORD)
        with pytest.raises(InvalidCredentialsError) as wrong:
            await auth_service.login("a@b.com", "Wrong1234!")

        assert str(unknown.value) == str(wrong.value) == "Invalid credentials"

    async def test_unknown_email_still_verifies_a_hash(self, auth_service, hasher):
        with (
            patch.object(hasher, "verify", AsyncMock(return_value=False)) as verify,
            pytest.raises(InvalidCredentialsError),
        ):
            await auth_service.login("nobody@b.com", PASSWORD)
        verify.assert_awaited_once()


class TestCurrentUser:
    async def test_resolves_token_to_user(self, auth_service):
        registered, token = await auth_service.register("a@b.com", PASSWORD, "A", "B")
        user = await auth_service.current_user(token)
        assert user is not None
        assert user.user_id == registered.user_id

    async def test_none_for_missing_or_bad_token(self, auth_service):
        assert await auth_service.current_user(None) is None
        assert await auth_service.current_user("garbage") is None

    async def test_none_when_user_no_longer_exists(self, auth_service, tokens):
        token = tokens.issue("deleted-user", "gone@b.com")
        assert await auth_service.current_user(token) is None


class TestSeedUser:
    async def test_seeds_fixed_account(self, auth_service):
        user = await auth_service.seed_user(
            user_id="user-1",
            email="demo@example.com",
            password="Demo@12345",
            first_name="John",
            last_name="Doe",
        )
        assert user.user_id == "user-1"

        logged_in, _ = await auth_service.login("demo@example.com", "Demo@12345")
        assert logged_in.user_id == "user-1"

    async def test_existing_email_is_left_alone(self, auth_service):
        kwargs = {
            "user_id": "user-1",
            "email": "demo@example.com",
            "password": "Demo@12345",
            "first_name": "John",
            "last_name": "Doe",
        }
        await auth_service.seed_user(**kwargs)
        assert await auth_service.seed_user(**kwargs) is None
