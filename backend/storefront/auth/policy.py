"""Route auth policy helpers for fail-closed authorization.

Each helper wraps a route endpoint and sets the ``AUTH_POLICY_ATTR`` marker
so that startup validation can verify every route has an explicit auth
policy, and that protected routes really sit behind the session boundary.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from starlette.authentication import has_required_scope
from starlette.routing import Mount, Route

from storefront.auth.boundary import is_protected
from storefront.auth.cookies import challenge

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.routing import BaseRoute

    Endpoint = Callable[..., Awaitable[Response]]

AUTH_POLICY_ATTR = "__auth_policy__"

PUBLIC = "public"
PROTECTED_PAGE = "protected_page"


def protected_page(endpoint: Endpoint) -> Endpoint:
    """Require an authenticated customer; otherwise challenge like the boundary does.

    The session boundary normally rejects anonymous requests first. This
    wrapper keeps the handler safe if it is ever mounted outside the
    protected prefixes by mistake.
    """

    @functools.wraps(endpoint)
    async def wrapper(request: Request, **kwargs: str) -> Response:
        if not has_required_scope(request, ["authenticated"]):
            login_path = request.app.state.settings.login_path
            return challenge(request.url.path, request.url.query, login_path)
        return await endpoint(request, **kwargs)

    setattr(wrapper, AUTH_POLICY_ATTR, PROTECTED_PAGE)
    return wrapper


def public_route(endpoint: Endpoint) -> Endpoint:
    """Mark endpoint as explicitly public (no auth required).

    Returns a thin wrapper so the marker lives on the wrapper, not on the
    original callable.
    """

    @functools.wraps(endpoint)
    async def wrapper(request: Request, **kwargs: str) -> Response:
        return await endpoint(request, **kwargs)

    setattr(wrapper, AUTH_POLICY_ATTR, PUBLIC)
    return wrapper


def validate_route_auth_policy(routes: list[BaseRoute], protected_prefixes: Iterable[str]) -> None:
    """Check every Route's policy marker against the session boundary's prefixes.

    Fails when a route has no marker, when a ``protected_page`` route is not
    covered by a protected prefix, or when a ``public`` route is (the
    boundary would silently protect it). Mount routes are exempt.

    Raises RuntimeError listing every offending route.
    """
    prefixes = tuple(protected_prefixes)
    problems: list[str] = []
    for route in routes:
        if isinstance(route, Mount) or not isinstance(route, Route):
            continue
        name = route.name or getattr(route.endpoint, "__name__", "unknown")
        policy = getattr(route.endpoint, AUTH_POLICY_ATTR, None)
        covered = is_protected(route.path, prefixes)
        if policy is None:
            problems.append(f"{route.path} ({name}): missing auth policy")
        elif policy == PROTECTED_PAGE and not covered:
            problems.append(f"{route.path} ({name}): protected but outside the session boundary")
        elif policy == PUBLIC and covered:
            problems.append(f"{route.path} ({name}): public but inside the session boundary")

    if problems:
        details = ", ".join(problems)
        msg = f"Route auth policy violations: {details}"
        raise RuntimeError(msg)
