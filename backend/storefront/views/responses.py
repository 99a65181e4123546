"""JSON envelope helpers shared by all API handlers.

Every API response body has the shape ``{"success": bool, ...}``: success
responses carry ``data`` (or ``message``), failures carry ``error``.
"""

from __future__ import annotations

import functools
import json
from typing import TYPE_CHECKING, Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError
from starlette.responses import JSONResponse

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from starlette.requests import Request
    from starlette.responses import Response

logger = structlog.get_logger()

INTERNAL_ERROR = "Internal server error"
INVALID_BODY = "Invalid request body"

M = TypeVar("M", bound=BaseModel)


class BadRequestError(Exception):
    """Request body or query string could not be parsed into the expected shape."""


def ok(data: Any = None, *, status_code: int = 200, message: str | None = None) -> JSONResponse:  # noqa: ANN401
    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    else:
        body["data"] = data
    return JSONResponse(body, status_code=status_code)


def fail(error: str, status_code: int, *, errors: list[str] | None = None) -> JSONResponse:
    body: dict[str, Any] = {"success": False, "error": error}
    if errors:
        body["errors"] = errors
    return JSONResponse(body, status_code=status_code)


async def parse_body(request: Request, model: type[M]) -> M:
    """Parse the JSON body into ``model``. Raises BadRequestError on any mismatch."""
    try:
        body = await request.json()
    except (ValueError, json.JSONDecodeError) as e:
        raise BadRequestError(INVALID_BODY) from e
    if not isinstance(body, dict):
        raise BadRequestError(INVALID_BODY)
    try:
        return model.model_validate(body)
    except ValidationError as e:
        raise BadRequestError(INVALID_BODY) from e


def json_endpoint(
    endpoint: Callable[..., Awaitable[Response]],
) -> Callable[..., Awaitable[Response]]:
    """Catch-all for API handlers.

    BadRequestError becomes a 400; any other unexpected exception is logged
    with its traceback and answered with an opaque 500 so internals never
    reach the client.
    """

    @functools.wraps(endpoint)
    async def wrapper(request: Request, **kwargs: str) -> Response:
        try:
            return await endpoint(request, **kwargs)
        except BadRequestError as e:
            return fail(str(e), 400)
        except Exception:  # noqa: BLE001
            logger.exception("unhandled error in handler", path=request.url.path, method=request.method)
            return fail(INTERNAL_ERROR, 500)

    return wrapper


def client_address(request: Request) -> str:
    """Best-effort client address: first X-Forwarded-For hop, then the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    if request.client and request.client.host:
        return request.client.host
    return "unknown"
