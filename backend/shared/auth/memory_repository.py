"""In-memory user repository."""

import asyncio

import structlog

from shared.auth.models import User
from shared.auth.repository import UserRepository

logger = structlog.get_logger()


class InMemoryUserRepository(UserRepository):
    """Process-local user store.

    Users are kept in a dict keyed by user_id with a secondary index on the
    lower-cased email. Inserts take an asyncio.Lock, so the duplicate check
    and the insert happen as one step within a single process.

    Limitation: data is lost on restart and is not shared between
    instances. Swap in a database-backed UserRepository for either.
    """

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._ids_by_email: dict[str, str] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._users)

    async def create_user(self, user: User) -> None:
        """Add a user. Raises ValueError if the id or email already exists."""
        email_key = user.email.lower()
        async with self._lock:
            if user.user_id in self._users:
                raise ValueError(f"User with id '{user.user_id}' already exists")
            if email_key in self._ids_by_email:
                raise ValueError("User already exists")
            self._users[user.user_id] = user
            self._ids_by_email[email_key] = user.user_id
        logger.debug("user stored", user_id=user.user_id)

    async def get_by_id(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    async def get_by_email(self, email: str) -> User | None:
        """Look up a user by email (case-insensitive)."""
        user_id = self._ids_by_email.get(email.lower())
        if user_id is None:
            return None
        return self._users.get(user_id)
