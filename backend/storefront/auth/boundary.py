"""Session boundary: token check in front of protected path prefixes.

Every request to a protected path must carry a verifiable session token in
the ``auth-token`` cookie. Requests without one are redirected to the login
entry point with a return-URL marker; nothing is remembered between
requests, so each one is verified from scratch.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from starlette.requests import HTTPConnection

from storefront.auth.cookies import SESSION_COOKIE, challenge

if TYPE_CHECKING:
    from collections.abc import Iterable

    from starlette.types import ASGIApp, Receive, Scope, Send

    from shared.auth.tokens import TokenService

logger = structlog.get_logger()


def is_protected(path: str, prefixes: Iterable[str]) -> bool:
    """Prefix match on whole path segments: ``/account`` covers ``/account/x``, not ``/accounts``."""
    return any(path == prefix or path.startswith(f"{prefix}/") for prefix in prefixes)


class SessionBoundaryMiddleware:
    """Admit requests to protected prefixes only with a valid session token.

    The cookie is read with Starlette's parser, the same one
    ``TokenCookieBackend`` uses, so both agree on whether a request carries
    a token. Handlers get the customer from ``request.user``.
    """

    def __init__(
        self,
        app: ASGIApp,
        tokens: TokenService,
        protected_prefixes: Iterable[str],
        login_path: str = "/auth/login",
    ) -> None:
        self.app = app
        self._tokens = tokens
        self._prefixes = tuple(p.rstrip("/") or "/" for p in protected_prefixes)
        self._login_path = login_path

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope["path"].rstrip("/") or "/"
        if not is_protected(path, self._prefixes):
            await self.app(scope, receive, send)
            return

        token = HTTPConnection(scope).cookies.get(SESSION_COOKIE)
        claims = self._tokens.verify(token) if token else None

        if claims is None:
            logger.debug("session challenged", path=path, had_token=token is not None)
            query = scope.get("query_string", b"").decode("latin-1")
            response = challenge(path, query, self._login_path)
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)

