"""Auth service coordinating registration, login, and session lookup."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from shared.auth.models import User
from shared.auth.validation import (
    PASSWORD_MAX_BYTES,
    sanitize,
    validate_email,
    validate_password,
)

if TYPE_CHECKING:
    from shared.auth.password import PasswordHasher
    from shared.auth.repository import UserRepository
    from shared.auth.tokens import TokenService

logger = structlog.get_logger()

INVALID_CREDENTIALS = "Invalid credentials"


class AuthError(Exception):
    """Authentication or registration failure safe to show to the client."""


class InvalidInputError(AuthError):
    """Missing or malformed input. ``errors`` itemizes password rule violations."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class InvalidCredentialsError(AuthError):
    def __init__(self) -> None:
        super().__init__(INVALID_CREDENTIALS)


class UserExistsError(AuthError):
    def __init__(self) -> None:
        super().__init__("User already exists")


class AuthService:
    """Register and log in customers, and resolve session tokens to users."""

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        *,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._hasher = password_hasher
        self._dummy_hash: str | None = None

    async def register(
        self,
        email: str | None,
        password: str | None,
        first_name: str | None,
        last_name: str | None,
    ) -> tuple[User, str]:
        """Create a customer account and return it with a fresh session token."""
        if not email or not password or not first_name or not last_name:
            raise InvalidInputError("All fields are required")

        clean_email = sanitize(email.lower())
        clean_first = sanitize(first_name)
        clean_last = sanitize(last_name)
        if not clean_first or not clean_last:
            raise InvalidInputError("All fields are required")
        if not validate_email(clean_email):
            raise InvalidInputError("Invalid email format")

        check = validate_password(password)
        if not check.valid:
            raise InvalidInputError(", ".join(check.errors), errors=check.errors)
        if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
            message = f"Password must not exceed {PASSWORD_MAX_BYTES} bytes when encoded"
            raise InvalidInputError(message, errors=[message])

        if await self._users.get_by_email(clean_email) is not None:
            raise UserExistsError

        user = User(
            user_id=str(uuid4()),
            email=clean_email,
            password_hash=await self._hasher.hash(password),
            first_name=clean_first,
            last_name=clean_last,
        )
        try:
            await self._users.create_user(user)
        except ValueError as e:
            # Lost a race with a concurrent registration of the same email.
            raise UserExistsError from e

        logger.info("customer registered", user_id=user.user_id)
        return user, self._tokens.issue(user.user_id, user.email)

    async def login(self, email: str | None, password: str | None) -> tuple[User, str]:
        """Check credentials and return the user with a fresh session token.

        An unknown email and a wrong password raise the same error, and both
        paths run one hash verification, so responses do not reveal which
        emails are registered.
        """
        if not email or not password:
            raise InvalidInputError("Email and password are required")

        clean_email = sanitize(email.lower())
        if not validate_email(clean_email):
            raise InvalidInputError("Invalid email format")

        user = await self._users.get_by_email(clean_email)
        if user is None:
            await self._hasher.verify(password, await self._get_dummy_hash())
            logger.info("login failed", email=clean_email)
            raise InvalidCredentialsError
        if not await self._hasher.verify(password, user.password_hash):
            logger.info("login failed", email=clean_email)
            raise InvalidCredentialsError

        logger.info("customer logged in", user_id=user.user_id)
        return user, self._tokens.issue(user.user_id, user.email)

    async def current_user(self, token: str | None) -> User | None:
        """Resolve a session token to its user. None if the chain breaks anywhere."""
        claims = self._tokens.verify(token)
        if claims is None:
            return None
        return await self._users.get_by_id(claims.user_id)

    async def seed_user(
        self,
        *,
        user_id: str,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
    ) -> User | None:
        """Create a fixed account (demo data). Returns None if the email exists."""
        if await self._users.get_by_email(email) is not None:
            return None
        now = datetime.now(tz=UTC)
        user = User(
            user_id=user_id,
            email=email.lower(),
            password_hash=await self._hasher.hash(password),
            first_name=first_name,
            last_name=last_name,
            created_at=now,
            updated_at=now,
        )
        await self._users.create_user(user)
        return user

    async def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = await self._hasher.hash(uuid4().hex)
        return self._dummy_hash
