"""User model for Starlette AuthenticationMiddleware integration."""

from __future__ import annotations

from starlette.authentication import BaseUser


class AuthenticatedCustomer(BaseUser):
    """Authenticated customer for Starlette's request.user.

    Built from verified token claims only; the account itself may have been
    removed since the token was issued, so handlers that need profile data
    still load the user from the repository.
    """

    def __init__(self, user_id: str, email: str) -> None:
        self._user_id = user_id
        self._email = email

    @property
    def is_authenticated(self) -> bool:  # pragma: no cover
        return True

    @property
    def display_name(self) -> str:  # pragma: no cover
        return self._email

    @property
    def identity(self) -> str:  # pragma: no cover
        return self._user_id

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def email(self) -> str:
        return self._email
