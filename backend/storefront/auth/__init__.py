"""Storefront authentication: session boundary, Starlette backend, and route policy."""

from storefront.auth.backend import TokenCookieBackend
from storefront.auth.boundary import SessionBoundaryMiddleware
from storefront.auth.models import AuthenticatedCustomer
from storefront.auth.policy import protected_page, public_route, validate_route_auth_policy

__all__ = [
    "AuthenticatedCustomer",
    "SessionBoundaryMiddleware",
    "TokenCookieBackend",
    "protected_page",
    "public_route",
    "validate_route_auth_policy",
]
