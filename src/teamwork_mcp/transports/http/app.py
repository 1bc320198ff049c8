from __future__ import annotations

import contextlib
import logging
from typing import Optional

from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.responses import JSONResponse
from starlette.routing import Route

from teamwork_mcp.core.config import ServerConfig
from teamwork_mcp.server import ToolServer, build_server
from teamwork_mcp.transports.http.config import HttpConfig
from teamwork_mcp.transports.http.middleware import ContextMiddleware
from teamwork_mcp.transports.http.ops import (
    HEALTH_PATH,
    READY_PATH,
    Readiness,
    health_payload,
    is_ops_path,
    readiness,
)
from teamwork_mcp.transports.http.request_id_middleware import RequestIdMiddleware

log = logging.getLogger(__name__)


class StreamableHTTPEndpoint:
    """ASGI endpoint handing every MCP request to the session manager."""

    def __init__(self, session_manager: StreamableHTTPSessionManager):
        self.session_manager = session_manager

    async def __call__(self, scope, receive, send):
        await self.session_manager.handle_request(scope, receive, send)


def _build_ops_app(config: ServerConfig, report: Readiness) -> Starlette:
    no_store = {"Cache-Control": "no-store"}

    async def healthz(_request):
        return JSONResponse(health_payload(config), headers=no_store)

    async def readyz(_request):
        return JSONResponse(
            report.payload(), status_code=report.status_code, headers=no_store
        )

    ops_app = Starlette()
    ops_app.add_route(HEALTH_PATH, healthz, methods=["GET"])
    ops_app.add_route(READY_PATH, readyz, methods=["GET"])
    return ops_app


class OpsDispatcher:
    """
    ASGI wrapper that routes ops endpoints to a minimal app and everything else
    to the main app, so health checks bypass authentication.
    """

    def __init__(self, ops_app, main_app):
        self.ops_app = ops_app
        self.main_app = main_app
        self.router = main_app.router
        self.state = main_app.state

    async def __call__(self, scope, receive, send):
        if is_ops_path(scope.get("path", "")):
            await self.ops_app(scope, receive, send)
            return
        await self.main_app(scope, receive, send)


def build_http_app(
    cfg: Optional[HttpConfig] = None,
    config: Optional[ServerConfig] = None,
    tool_server: Optional[ToolServer] = None,
):
    """Return an ASGI app serving MCP at ``cfg.path`` plus the ops endpoints."""
    cfg = cfg or HttpConfig.from_env()
    config = config or ServerConfig.from_env(use_dotenv=False)
    tool_server = tool_server or build_server(config)

    session_manager = StreamableHTTPSessionManager(
        app=tool_server.server,
        json_response=cfg.json_response,
        stateless=cfg.stateless_http,
    )

    @contextlib.asynccontextmanager
    async def lifespan(_app):
        async with session_manager.run():
            yield

    main_app = Starlette(
        routes=[Route(cfg.path, endpoint=StreamableHTTPEndpoint(session_manager))],
        # first entry is outermost
        middleware=[
            Middleware(RequestIdMiddleware),
            Middleware(ContextMiddleware, default_token=config.bearer_token),
        ],
        lifespan=lifespan,
    )

    report = readiness(config, tool_server)
    main_app.state.readiness = report
    log.info(
        "Built HTTP app (json_response=%s, stateless_http=%s, path=%s)",
        cfg.json_response,
        cfg.stateless_http,
        cfg.path,
    )
    return OpsDispatcher(_build_ops_app(config, report), main_app)


__all__ = ["HttpConfig", "build_http_app", "OpsDispatcher", "StreamableHTTPEndpoint"]
