"""Handlers behind the session boundary: account, checkout, order history."""

from __future__ import annotations

from typing import TYPE_CHECKING

from storefront.checkout.service import InsufficientStockError, UnknownProductError
from storefront.checkout.types import CheckoutRequest
from storefront.views.responses import fail, json_endpoint, ok, parse_body

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

    from shared.auth.models import User
    from shared.auth.repository import UserRepository
    from storefront.checkout.service import CheckoutService


async def _load_customer(request: Request) -> User | None:
    """Load the account behind the verified token; None if it no longer exists."""
    users: UserRepository = request.app.state.users
    return await users.get_by_id(request.user.user_id)


@json_endpoint
async def account(request: Request) -> Response:
    """GET /account - profile of the signed-in customer."""
    user = await _load_customer(request)
    if user is None:
        return fail("Not authenticated", 401)
    return ok(user.public_dict())


@json_endpoint
async def checkout(request: Request) -> Response:
    """POST /checkout - price the submitted cart and record a simulated order."""
    user = await _load_customer(request)
    if user is None:
        return fail("Not authenticated", 401)

    body = await parse_body(request, CheckoutRequest)
    checkout_service: CheckoutService = request.app.state.checkout_service
    try:
        order = await checkout_service.place_order(user.user_id, body)
    except UnknownProductError as e:
        return fail(str(e), 404)
    except InsufficientStockError as e:
        return fail(str(e), 409)
    return ok(order.to_wire(), status_code=201)


@json_endpoint
async def orders(request: Request) -> Response:
    """GET /orders - the signed-in customer's orders, newest first."""
    checkout_service: CheckoutService = request.app.state.checkout_service
    placed = await checkout_service.list_orders(request.user.user_id)
    return ok([order.to_wire() for order in placed])
