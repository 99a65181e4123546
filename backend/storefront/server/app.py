from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING, cast

import structlog
from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.middleware.authentication import AuthenticationMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from shared.auth import AuthService, InMemoryUserRepository, SlidingWindowRateLimiter, TokenService
from shared.auth.password import get_hasher
from shared.auth.settings import AuthSettings
from shared.catalog import InMemoryProductRepository
from shared.logging import setup_logging
from storefront.auth.backend import TokenCookieBackend
from storefront.auth.boundary import SessionBoundaryMiddleware
from storefront.auth.policy import protected_page, public_route, validate_route_auth_policy
from storefront.checkout import CheckoutService
from storefront.server.middleware import SecurityHeadersMiddleware, SlashNormalizationMiddleware
from storefront.server.settings import StorefrontSettings
from storefront.views import (
    account,
    checkout,
    get_product,
    list_products,
    login,
    login_entry,
    logout,
    orders,
    register,
    session,
)

logger = structlog.get_logger()

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from starlette.requests import Request

DEMO_USER = {
    "user_id": "user-1",
    "email": "demo@example.com",
    "password": "Demo@12345",
    "first_name": "John",
    "last_name": "Doe",
}


async def _http_error_handler(_request: Request, exc: Exception) -> Response:
    """Render routing errors (404, 405, ...) in the API's JSON envelope."""
    http_exc = cast("HTTPException", exc)
    if http_exc.status_code in {204, 304}:
        return Response(status_code=http_exc.status_code, headers=http_exc.headers)
    return JSONResponse(
        {"success": False, "error": http_exc.detail or ""},
        status_code=http_exc.status_code,
        headers=http_exc.headers,
    )


async def health(_request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


async def seed_demo_user(auth_service: AuthService) -> None:
    user = await auth_service.seed_user(**DEMO_USER)
    if user is not None:
        logger.info("demo user seeded", user_id=user.user_id)


def create_app(
    settings: StorefrontSettings | None = None,
    auth_settings: AuthSettings | None = None,  # required in production (via get_app)
) -> Starlette:
    if settings is None:  # pragma: no cover
        settings = StorefrontSettings()
    if auth_settings is None:  # pragma: no cover
        auth_settings = AuthSettings()  # type: ignore[call-arg]

    routes = [
        # Behind the session boundary
        Route("/account", protected_page(account), methods=["GET"], name="account"),
        Route("/checkout", protected_page(checkout), methods=["POST"], name="checkout"),
        Route("/orders", protected_page(orders), methods=["GET"], name="orders"),
        # Public routes
        Route("/health", public_route(health), methods=["GET"], name="health"),
        Route(settings.login_path, public_route(login_entry), methods=["GET"], name="login_entry"),
        Route("/api/auth/register", public_route(register), methods=["POST"], name="register"),
        Route("/api/auth/login", public_route(login), methods=["POST"], name="login"),
        Route("/api/auth/logout", public_route(logout), methods=["POST"], name="logout"),
        Route("/api/auth/session", public_route(session), methods=["GET"], name="session"),
        Route("/api/products", public_route(list_products), methods=["GET"], name="list_products"),
        Route(
            "/api/products/{product_id}",
            public_route(get_product),
            methods=["GET"],
            name="get_product",
        ),
    ]
    validate_route_auth_policy(routes, settings.protected_prefixes)

    users = InMemoryUserRepository()
    tokens = TokenService(auth_settings.jwt_secret)
    hasher = get_hasher(auth_settings.password_hasher)
    auth_service = AuthService(users, tokens, password_hasher=hasher)
    products = InMemoryProductRepository()
    rate_limiter = SlidingWindowRateLimiter(settings.rate_limit_requests, settings.rate_limit_window_seconds)
    auth_rate_limiter = SlidingWindowRateLimiter(
        auth_settings.rate_limit_requests,
        auth_settings.rate_limit_window_seconds,
    )

    @contextlib.asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncGenerator[None]:
        if settings.seed_demo_user:
            await seed_demo_user(auth_service)
        rate_limiter.start_cleanup()
        auth_rate_limiter.start_cleanup()
        yield
        await rate_limiter.stop_cleanup()
        await auth_rate_limiter.stop_cleanup()

    app = Starlette(
        routes=routes,
        lifespan=lifespan,
        exception_handlers={HTTPException: _http_error_handler},
    )
    app.add_middleware(
        SessionBoundaryMiddleware,  # type: ignore[arg-type]
        tokens=tokens,
        protected_prefixes=settings.protected_prefixes,
        login_path=settings.login_path,
    )
    app.add_middleware(AuthenticationMiddleware, backend=TokenCookieBackend(tokens))  # type: ignore[arg-type]
    app.add_middleware(SlashNormalizationMiddleware)  # type: ignore[arg-type]
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(SecurityHeadersMiddleware)  # type: ignore[arg-type]

    app.state.settings = settings
    app.state.auth_settings = auth_settings
    app.state.users = users
    app.state.tokens = tokens
    app.state.auth_service = auth_service
    app.state.products = products
    app.state.checkout_service = CheckoutService(products)
    app.state.rate_limiter = rate_limiter
    app.state.auth_rate_limiter = auth_rate_limiter

    logger.info("storefront server ready", protected_prefixes=settings.protected_prefixes)
    return app


def get_app() -> Starlette:  # pragma: no cover
    """Factory function for uvicorn --factory storefront.server.app:get_app."""
    s = StorefrontSettings()
    auth = AuthSettings()  # ty: ignore[missing-argument]
    setup_logging(log_dir=s.log_dir)
    return create_app(settings=s, auth_settings=auth)
