"""HTTP host - a Starlette app that feeds POSTed JSON-RPC messages to an McpServer.

Each request is handled on a worker thread, so calls run concurrently against
the server's locked registry.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

import anyio
import anyio.to_thread
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from mcp_engine.server import McpServer
from mcp_engine.utilities.logging import get_logger

logger = get_logger(__name__)

Authorize = Callable[[Request], bool | Awaitable[bool]]


def create_http_app(
    server: McpServer,
    *,
    path: str | None = None,
    authorize: Authorize | None = None,
) -> Starlette:
    """Create a Starlette ASGI app serving ``server`` at ``path``.

    Usage:
        app = create_http_app(server, authorize=lambda request: request.headers.get("x-key") == key)
        uvicorn.run(app, host="127.0.0.1", port=8097)
    """
    route_path = path or server.settings.http_path

    async def handle(request: Request) -> Response:
        if request.method != "POST":
            logger.debug("Rejected non-POST request: %s", request.method)
            return PlainTextResponse("Method not allowed - use POST", status_code=405)

        content_type = request.headers.get("content-type", "")
        if content_type.split(";", 1)[0].strip().lower() != "application/json":
            logger.debug("Rejected request with content-type %r", content_type)
            return PlainTextResponse("Content-Type must be application/json", status_code=400)

        if authorize is not None:
            allowed = authorize(request)
            if not isinstance(allowed, bool):
                allowed = await allowed
            if not allowed:
                return PlainTextResponse("Unauthorized", status_code=401)

        body = await request.body()
        result = await anyio.to_thread.run_sync(server.handle, body)

        wire = result.to_wire()
        if wire is None:
            return Response(status_code=204)
        # JSON-RPC errors are still HTTP 200
        return JSONResponse(wire)

    return Starlette(routes=[Route(route_path, handle, methods=["GET", "POST", "PUT", "DELETE", "PATCH"])])
