"""Starlette AuthenticationBackend that validates the session token cookie."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.authentication import AuthCredentials, AuthenticationBackend

from storefront.auth.cookies import SESSION_COOKIE
from storefront.auth.models import AuthenticatedCustomer

if TYPE_CHECKING:
    from starlette.requests import HTTPConnection

    from shared.auth.tokens import TokenService


class TokenCookieBackend(AuthenticationBackend):
    """Authenticate requests from the ``auth-token`` cookie.

    A missing or invalid token leaves the request anonymous instead of
    failing it; route policies and the session boundary decide what
    anonymous callers may reach.
    """

    def __init__(self, tokens: TokenService) -> None:
        self._tokens = tokens

    async def authenticate(
        self,
        conn: HTTPConnection,
    ) -> tuple[AuthCredentials, AuthenticatedCustomer] | None:
        claims = self._tokens.verify(conn.cookies.get(SESSION_COOKIE))
        if claims is None:
            return None
        return AuthCredentials(["authenticated"]), AuthenticatedCustomer(
            user_id=claims.user_id,
            email=claims.email,
        )
