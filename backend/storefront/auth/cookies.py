"""Session and return-URL cookies.

The session cookie carries the signed token itself. The return-URL marker
remembers which protected page sent the visitor to the login entry point;
login consumes it once to resume navigation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote, unquote, urlsplit

from starlette.responses import RedirectResponse

from shared.auth.tokens import TOKEN_TTL_SECONDS

if TYPE_CHECKING:
    from starlette.requests import HTTPConnection
    from starlette.responses import Response

SESSION_COOKIE = "auth-token"
RETURN_URL_COOKIE = "returnUrl"
RETURN_URL_TTL_SECONDS = 10 * 60
DEFAULT_RETURN_URL = "/"


def set_session_cookie(response: Response, token: str, *, secure: bool) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        max_age=TOKEN_TTL_SECONDS,
        path="/",
        secure=secure,
        httponly=True,
        samesite="strict",
    )


def clear_session_cookie(response: Response, *, secure: bool) -> None:
    response.delete_cookie(key=SESSION_COOKIE, path="/", secure=secure, httponly=True, samesite="strict")


def is_local_path(target: str) -> bool:
    """True for same-origin absolute paths such as ``/checkout?step=2``.

    Rejects scheme-relative (``//evil.example``) and backslash variants that
    browsers treat as another host, plus anything with a scheme or netloc.
    """
    if not target.startswith("/") or target.startswith(("//", "/\\")):
        return False
    if any(ord(ch) < 0x20 or ch == "\x7f" for ch in target):
        return False
    parts = urlsplit(target)
    return not parts.scheme and not parts.netloc


def set_return_url(response: Response, target: str) -> None:
    # Percent-encoded so the value never needs cookie quoting.
    response.set_cookie(
        key=RETURN_URL_COOKIE,
        value=quote(target, safe=""),
        max_age=RETURN_URL_TTL_SECONDS,
        path="/",
        httponly=True,
        samesite="lax",
    )


def read_return_url(conn: HTTPConnection) -> str | None:
    """Return the pending return URL if it is present and local."""
    raw = conn.cookies.get(RETURN_URL_COOKIE)
    if not raw:
        return None
    target = unquote(raw)
    return target if is_local_path(target) else None


def expire_return_url(conn: HTTPConnection, response: Response) -> None:
    """Expire the marker on ``response`` if the request carried one."""
    if RETURN_URL_COOKIE in conn.cookies:
        response.delete_cookie(key=RETURN_URL_COOKIE, path="/", httponly=True, samesite="lax")


def challenge(path: str, query: str, login_path: str) -> RedirectResponse:
    """Redirect to the login entry point, remembering ``path`` for afterwards.

    The redirect is relative so the Host header cannot steer it elsewhere.
    """
    target = f"{path}?{query}" if query else path
    response = RedirectResponse(url=login_path, status_code=303)
    set_return_url(response, target)
    return response
