"""
FastAPI/ASGI app for the Streamable HTTP transport.

- Bearer Token Auth Middleware (MCP_SERVER_TOKEN, mandatory in production)
- MCP mount under /mcp (stateless Streamable HTTP session manager)
- Healthcheck under /health
- Prometheus-style metrics under /metrics
"""
from __future__ import annotations

import hmac
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Mapping, Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from . import __version__
from .config import is_production_env
from .server import AppContext, build_server

logger = logging.getLogger("projects_mcp.http_app")

PUBLIC_PATHS = ("/health", "/metrics")


class BearerTokenAuthMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        expected_token: str = "",
        environ: Optional[Mapping[str, str]] = None,
    ):
        super().__init__(app)
        self.expected_token = expected_token
        self.environ = environ

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path in PUBLIC_PATHS or not path.startswith("/mcp"):
            return await call_next(request)

        if is_production_env(self.environ) and not self.expected_token:
            logger.error("[Auth] MCP_SERVER_TOKEN not set in production")
            return JSONResponse(
                {"error": "server_error", "message": "MCP_SERVER_TOKEN not configured"},
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        if self.expected_token:
            auth_header = request.headers.get("authorization", "")
            if not auth_header.startswith("Bearer "):
                logger.warning(f"[Auth] Missing or invalid Authorization header for {request.method} {path}")
                return JSONResponse(
                    {"error": "unauthorized", "message": "Missing or invalid Authorization header"},
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    headers={"WWW-Authenticate": "Bearer"},
                )
            token = auth_header[len("Bearer "):]
            if not hmac.compare_digest(token, self.expected_token):
                logger.warning(f"[Auth] Invalid token for {request.method} {path}")
                return JSONResponse(
                    {"error": "unauthorized", "message": "Invalid token"},
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    headers={"WWW-Authenticate": "Bearer"},
                )

        return await call_next(request)


def escape_label_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace("\"", "\\\"").replace("\n", "\\n")


def render_metrics(snapshot: Mapping[str, Mapping[str, float]]) -> str:
    lines = [
        "# HELP mcp_server_healthy MCP server health status",
        "# TYPE mcp_server_healthy gauge",
        "mcp_server_healthy 1",
    ]
    if snapshot:
        lines.append("# HELP mcp_tool_calls_total Total number of tool calls")
        lines.append("# TYPE mcp_tool_calls_total counter")
        for tool_name, m in snapshot.items():
            lines.append(f'mcp_tool_calls_total{{tool="{escape_label_value(tool_name)}"}} {int(m["calls"])}')
        lines.append("# HELP mcp_tool_errors_total Total number of tool errors")
        lines.append("# TYPE mcp_tool_errors_total counter")
        for tool_name, m in snapshot.items():
            lines.append(f'mcp_tool_errors_total{{tool="{escape_label_value(tool_name)}"}} {int(m["errors"])}')
        lines.append("# HELP mcp_tool_avg_latency_ms Average tool latency in milliseconds")
        lines.append("# TYPE mcp_tool_avg_latency_ms gauge")
        for tool_name, m in snapshot.items():
            lines.append(f'mcp_tool_avg_latency_ms{{tool="{escape_label_value(tool_name)}"}} {m["avg_latency_ms"]:.3f}')
    return "\n".join(lines) + "\n"


def create_app(ctx: AppContext, environ: Optional[Mapping[str, str]] = None) -> FastAPI:
    """
    Build the FastAPI app around an ``AppContext``.

    The session manager is started in the lifespan; the HTTP client of the
    context is closed when the app shuts down.
    """
    session_manager = StreamableHTTPSessionManager(app=build_server(ctx), stateless=True)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        async with session_manager.run():
            ctx.logger.info(f"Streamable HTTP transport ready ({len(ctx.tools)} tools)")
            try:
                yield
            finally:
                await ctx.aclose()

    app = FastAPI(
        title="GitHub Projects MCP Server",
        description="MCP tools for GitHub Projects (v2)",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(
        BearerTokenAuthMiddleware,
        expected_token=ctx.settings.server_token,
        environ=environ,
    )

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {
            "ok": True,
            "status": "healthy",
            "server": ctx.settings.name,
            "read_only": ctx.settings.read_only,
            "tool_count": len(ctx.tools),
        }

    @app.get("/metrics")
    async def metrics() -> Response:
        return Response(content=render_metrics(ctx.metrics.snapshot()), media_type="text/plain; version=0.0.4")

    async def handle_mcp(scope: Scope, receive: Receive, send: Send) -> None:
        await session_manager.handle_request(scope, receive, send)

    app.mount("/mcp", handle_mcp)
    return app


__all__ = ["BearerTokenAuthMiddleware", "create_app", "escape_label_value", "render_metrics"]
