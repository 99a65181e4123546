"""Catalog endpoints: product listing and product detail."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from shared.catalog.query import ProductQuery, apply_query
from storefront.views.responses import client_address, fail, json_endpoint, ok

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

    from shared.auth.rate_limit import SlidingWindowRateLimiter
    from shared.catalog.repository import InMemoryProductRepository

logger = structlog.get_logger()

RATE_LIMITED = "Too many requests. Please try again later."


def _rate_limited(request: Request) -> bool:
    limiter: SlidingWindowRateLimiter = request.app.state.rate_limiter
    if limiter.check(f"products-{client_address(request)}"):
        return False
    logger.warning("rate limit exceeded", route="products", client=client_address(request))
    return True


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    return f"Invalid query parameter {location}: {error['msg']}" if location else error["msg"]


@json_endpoint
async def list_products(request: Request) -> Response:
    """GET /api/products - filtered, sorted, paginated listing."""
    if _rate_limited(request):
        return fail(RATE_LIMITED, 429)

    try:
        query = ProductQuery.model_validate(dict(request.query_params))
    except ValidationError as e:
        return fail(_first_error(e), 400)

    products: InMemoryProductRepository = request.app.state.products
    return ok(apply_query(products.all(), query).to_wire())


@json_endpoint
async def get_product(request: Request) -> Response:
    """GET /api/products/{product_id}"""
    if _rate_limited(request):
        return fail(RATE_LIMITED, 429)

    product_id = request.path_params["product_id"].strip()
    if not product_id:
        return fail("Invalid product ID", 400)

    products: InMemoryProductRepository = request.app.state.products
    product = products.get(product_id)
    if product is None:
        return fail("Product not found", 404)
    return ok(product.to_wire())
