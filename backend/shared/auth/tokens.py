"""Signed session tokens (HS256 JWT).

The token is the whole session: the server keeps no session table, so a
token stays valid until it expires even after the cookie carrying it has
been cleared.

Token format: base64url(header).base64url(claims).base64url(hmac_sha256)
Claims: {"userId": str, "email": str, "iat": int, "exp": int}
"""

from __future__ import annotations

import binascii
import time
from typing import TYPE_CHECKING

import jwt
import structlog
from jwt.utils import base64url_decode, base64url_encode

from shared.auth.models import TokenClaims

if TYPE_CHECKING:
    from collections.abc import Callable

logger = structlog.get_logger()

ALGORITHM = "HS256"
TOKEN_TTL_SECONDS = 7 * 24 * 60 * 60  # 7 days
CLOCK_SKEW_SECONDS = 60

_TOKEN_PARTS = 3
_REQUIRED_CLAIMS = ["iat", "exp", "userId", "email"]


class TokenService:
    """Issue and verify session tokens signed with a server-held secret."""

    def __init__(
        self,
        secret: str,
        *,
        ttl_seconds: int = TOKEN_TTL_SECONDS,
        leeway_seconds: int = CLOCK_SKEW_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self.ttl_seconds = ttl_seconds
        self._leeway = leeway_seconds
        self._clock = clock

    def issue(self, user_id: str, email: str) -> str:
        now = int(self._clock())
        payload = {
            "userId": user_id,
            "email": email,
            "iat": now,
            "exp": now + self.ttl_seconds,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str | None) -> TokenClaims | None:
        """Return the claims of a valid token, or None for anything else.

        Malformed, tampered, and expired tokens all yield None; this never
        raises on bad input.
        """
        if not isinstance(token, str) or len(token.split(".")) != _TOKEN_PARTS:
            return None
        if not all(_is_canonical_segment(segment) for segment in token.split(".")):
            logger.debug("session token non-canonical encoding")
            return None

        try:
            # Expiry is checked here against the injected clock rather than
            # PyJWT's wall clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": _REQUIRED_CLAIMS, "verify_exp": False, "verify_iat": False},
            )
        except jwt.PyJWTError as exc:
            logger.debug("session token rejected", reason=type(exc).__name__)
            return None

        claims = _claims_from_payload(payload)
        if claims is None:
            logger.debug("session token malformed claims")
            return None

        now = self._clock()
        if claims.issued_at > now + self._leeway:
            logger.debug("session token issued in the future")
            return None
        if now > claims.expires_at + self._leeway:
            logger.debug("session token expired")
            return None
        return claims


def _is_canonical_segment(segment: str) -> bool:
    """Reject segments that only decode because trailing bits or stray characters are ignored."""
    try:
        raw = base64url_decode(segment)
    except (ValueError, binascii.Error):
        return False
    return base64url_encode(raw).decode("ascii") == segment


def _claims_from_payload(payload: dict) -> TokenClaims | None:
    user_id = payload.get("userId")
    email = payload.get("email")
    issued_at = payload.get("iat")
    expires_at = payload.get("exp")
    if not isinstance(user_id, str) or not user_id or not isinstance(email, str):
        return None
    if isinstance(issued_at, bool) or not isinstance(issued_at, int):
        return None
    if isinstance(expires_at, bool) or not isinstance(expires_at, int):
        return None
    if expires_at <= issued_at:
        return None
    return TokenClaims(user_id=user_id, email=email, issued_at=issued_at, expires_at=expires_at)
