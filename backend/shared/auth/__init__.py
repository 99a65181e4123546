"""Customer authentication: credentials, session tokens, and request throttling."""

from shared.auth.memory_repository import InMemoryUserRepository
from shared.auth.models import PasswordCheck, TokenClaims, User
from shared.auth.password import PasswordHasher, get_hasher
from shared.auth.rate_limit import SlidingWindowRateLimiter
from shared.auth.repository import UserRepository
from shared.auth.service import (
    AuthError,
    AuthService,
    InvalidCredentialsError,
    InvalidInputError,
    UserExistsError,
)
from shared.auth.settings import AuthSettings
from shared.auth.tokens import TOKEN_TTL_SECONDS, TokenService
from shared.auth.validation import sanitize, validate_email, validate_password

__all__ = [
    "TOKEN_TTL_SECONDS",
    "AuthError",
    "AuthService",
    "AuthSettings",
    "InMemoryUserRepository",
    "InvalidCredentialsError",
    "InvalidInputError",
    "PasswordCheck",
    "PasswordHasher",
    "SlidingWindowRateLimiter",
    "TokenClaims",
    "TokenService",
    "User",
    "UserExistsError",
    "UserRepository",
    "get_hasher",
    "sanitize",
    "validate_email",
    "validate_password",
]
