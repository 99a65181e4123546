"""Password hashing for stored credentials.

Customer passwords are never persisted as supplied. ``BcryptHasher`` is
the production scheme; each call costs ~100ms of CPU, so it runs in a
worker thread via anyio to keep the event loop responsive.

``SimpleHasher`` (unsalted SHA-256, ``simple$`` prefix) exists so the
test suite does not pay bcrypt's cost. Never configure it in production.
"""

from __future__ import annotations

import hashlib
from typing import Protocol, runtime_checkable

import bcrypt
from anyio import to_thread


@runtime_checkable
class PasswordHasher(Protocol):
    async def hash(self, plain: str) -> str: ...

    async def verify(self, plain: str, hashed: str) -> bool: ...


class BcryptHasher:
    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    async def hash(self, plain: str) -> str:
        encoded = plain.encode("utf-8")
        salt = bcrypt.gensalt(rounds=self._rounds)
        return await to_thread.run_sync(lambda: bcrypt.hashpw(encoded, salt).decode("utf-8"))

    async def verify(self, plain: str, hashed: str) -> bool:
        """Return False for malformed hashes instead of raising."""
        encoded_plain = plain.encode("utf-8")
        encoded_hash = hashed.encode("utf-8")
        try:
            return await to_thread.run_sync(lambda: bcrypt.checkpw(encoded_plain, encoded_hash))
        except ValueError:
            return False


_SIMPLE_PREFIX = "simple$"


class SimpleHasher:
    async def hash(self, plain: str) -> str:
        return _SIMPLE_PREFIX + hashlib.sha256(plain.encode("utf-8")).hexdigest()

    async def verify(self, plain: str, hashed: str) -> bool:
        if not hashed.startswith(_SIMPLE_PREFIX):
            return False
        return hashed == await self.hash(plain)


def get_hasher(name: str = "bcrypt") -> PasswordHasher:
    """Return a PasswordHasher by configured name ("bcrypt" or "simple")."""
    if name == "bcrypt":
        return BcryptHasher()
    if name == "simple":
        return SimpleHasher()
    raise ValueError(f"Unknown password hasher: {name!r}")
