"""Auth endpoints: register, login, logout, session read, and login entry point."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from starlette.authentication import has_required_scope

from shared.auth.service import InvalidCredentialsError, InvalidInputError, UserExistsError
from storefront.auth.cookies import (
    DEFAULT_RETURN_URL,
    SESSION_COOKIE,
    clear_session_cookie,
    expire_return_url,
    read_return_url,
    set_session_cookie,
)
from storefront.views.responses import client_address, fail, json_endpoint, ok, parse_body
from storefront.views.types import LoginRequest, RegisterRequest

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

    from shared.auth.models import User
    from shared.auth.rate_limit import SlidingWindowRateLimiter
    from shared.auth.service import AuthService

logger = structlog.get_logger()


def _auth_rate_limited(request: Request, route: str) -> bool:
    limiter: SlidingWindowRateLimiter = request.app.state.auth_rate_limiter
    identifier = f"{route}-{client_address(request)}"
    if limiter.check(identifier):
        return False
    logger.warning("rate limit exceeded", route=route, client=client_address(request))
    return True


def _session_payload(user: User, token: str) -> dict:
    return {"user": user.public_dict(), "token": token}


@json_endpoint
async def register(request: Request) -> Response:
    """POST /api/auth/register - create an account and start a session."""
    if _auth_rate_limited(request, "register"):
        return fail("Too many registration attempts. Please try again later.", 429)

    body = await parse_body(request, RegisterRequest)
    auth_service: AuthService = request.app.state.auth_service
    try:
        user, token = await auth_service.register(body.email, body.password, body.first_name, body.last_name)
    except InvalidInputError as e:
        return fail(str(e), 400, errors=e.errors)
    except UserExistsError as e:
        return fail(str(e), 409)

    response = ok(_session_payload(user, token), status_code=201)
    set_session_cookie(response, token, secure=request.app.state.auth_settings.cookie_secure)
    return response


@json_endpoint
async def login(request: Request) -> Response:
    """POST /api/auth/login - check credentials, start a session, resume navigation."""
    if _auth_rate_limited(request, "login"):
        return fail("Too many login attempts. Please try again later.", 429)

    body = await parse_body(request, LoginRequest)
    auth_service: AuthService = request.app.state.auth_service
    try:
        user, token = await auth_service.login(body.email, body.password)
    except InvalidInputError as e:
        return fail(str(e), 400)
    except InvalidCredentialsError as e:
        return fail(str(e), 401)

    payload = _session_payload(user, token)
    payload["redirectTo"] = read_return_url(request) or DEFAULT_RETURN_URL
    response = ok(payload)
    expire_return_url(request, response)
    set_session_cookie(response, token, secure=request.app.state.auth_settings.cookie_secure)
    return response


@json_endpoint
async def logout(request: Request) -> Response:
    """POST /api/auth/logout - drop the session cookie. The token itself stays valid until expiry."""
    if not request.cookies.get(SESSION_COOKIE):
        return fail("Not authenticated", 401)
    response = ok(message="Logged out successfully")
    clear_session_cookie(response, secure=request.app.state.auth_settings.cookie_secure)
    return response


@json_endpoint
async def session(request: Request) -> Response:
    """GET /api/auth/session - the current user, or null. Never an auth error."""
    auth_service: AuthService = request.app.state.auth_service
    user = await auth_service.current_user(request.cookies.get(SESSION_COOKIE))
    return ok(user.public_dict() if user is not None else None)


@json_endpoint
async def login_entry(request: Request) -> Response:
    """GET /auth/login - where the session boundary sends anonymous visitors.

    Reports the pending return URL without consuming it; the login call does.
    """
    return ok(
        {
            "authenticated": has_required_scope(request, ["authenticated"]),
            "returnUrl": read_return_url(request),
        },
    )
