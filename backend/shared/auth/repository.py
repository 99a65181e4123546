"""Abstract interface for customer account persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.auth.models import User


class UserRepository(ABC):
    """Abstract interface for customer account persistence.

    ``create_user`` must reject duplicate ids and emails atomically with the
    insert, so two concurrent registrations of one email cannot both succeed.
    """

    @abstractmethod
    async def create_user(self, user: User) -> None: ...

    @abstractmethod
    async def get_by_id(self, user_id: str) -> User | None: ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None: ...
