from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import httpx
from mcp import types
from mcp.server import Server

from . import __version__
from .config import Settings
from .errors import error_kind
from .graphql_client import GraphQLClient, create_http_client
from .observability import AuditLogger, InMemoryMetrics
from .tools import ProjectTool, ToolResult, build_tools
from .translations import TranslationHelper


UNKNOWN_TOOL = "unknown"


class ToolCallError(Exception):
    """Raised towards the MCP SDK so it reports the call with isError=true."""
    pass


def setup_logger(settings: Settings) -> logging.Logger:
    logger = logging.getLogger("projects_mcp")
    if logger.handlers:
        return logger
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logger.setLevel(level)
    # stderr only: stdout carries the stdio transport
    handler = logging.StreamHandler()

    class StructuredFormatter(logging.Formatter):
        """Fills in the structured fields a record did not set."""

        def format(self, record: logging.LogRecord) -> str:
            for name in ("tool", "correlation_id", "duration_ms"):
                if not hasattr(record, name):
                    setattr(record, name, "")
            return super().format(record)

    handler.setFormatter(StructuredFormatter(
        '{"ts":"%(asctime)s","level":"%(levelname)s","tool":"%(tool)s",'
        '"correlation_id":"%(correlation_id)s","duration_ms":"%(duration_ms)s","msg":"%(message)s"}'
    ))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


@dataclass
class AppContext:
    settings: Settings
    http_client: httpx.AsyncClient
    graphql: GraphQLClient
    tools: Dict[str, ProjectTool]
    translations: TranslationHelper
    logger: logging.Logger
    metrics: InMemoryMetrics
    audit: Optional[AuditLogger] = None

    async def aclose(self) -> None:
        await self.http_client.aclose()


def create_app_context(
    settings: Settings,
    http_client: Optional[httpx.AsyncClient] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AppContext:
    logger = setup_logger(settings)
    http_client = http_client or create_http_client(settings.http_limits)
    graphql = GraphQLClient(
        http_client=http_client,
        url=settings.graphql_url,
        token=settings.token,
        user_agent=f"projects-mcp/{__version__}",
    )
    if not graphql.token:
        logger.warning(
            "GitHub token missing (GITHUB_PERSONAL_ACCESS_TOKEN or GITHUB_TOKEN not set). "
            "GraphQL calls will fail with 401."
        )
    translations = TranslationHelper(settings.translations, environ=environ)
    tools = build_tools(lambda: graphql, translations, read_only=settings.read_only)
    if settings.read_only:
        logger.info(f"Read-only mode: {len(tools)} tools registered")
    audit = AuditLogger(path=settings.audit_log) if settings.audit_log else None
    return AppContext(
        settings=settings,
        http_client=http_client,
        graphql=graphql,
        tools=tools,
        translations=translations,
        logger=logger,
        metrics=InMemoryMetrics(),
        audit=audit,
    )


async def invoke_tool(app: AppContext, name: str, arguments: Optional[Dict[str, Any]]) -> ToolResult:
    """
    Run one tool call with logging, metrics and audit.

    Never raises for tool failures: every outcome is a ``ToolResult`` so one
    bad call cannot take the server down.
    """
    arguments = arguments or {}
    correlation_id = str(uuid.uuid4())
    start = time.perf_counter()

    tool = app.tools.get(name)
    # unknown names share one bucket so callers cannot grow the metrics table
    recorded_name = name if tool is not None else UNKNOWN_TOOL
    if tool is None:
        result = ToolResult(text=f"unknown tool: {name}", is_error=True, error_kind="unknown_tool")
    else:
        try:
            result = await tool(arguments)
        except Exception as exc:
            app.logger.error(
                f"Unexpected error: {exc}",
                extra={"tool": name, "correlation_id": correlation_id},
                exc_info=True,
            )
            result = ToolResult(text=f"internal error: {exc}", is_error=True, error_kind=error_kind(exc))

    duration_ms = (time.perf_counter() - start) * 1000.0
    app.metrics.record(recorded_name, duration_ms, error=result.is_error)
    if app.audit is not None:
        app.audit.log_call(
            tool=recorded_name,
            status="error" if result.is_error else "ok",
            duration_ms=duration_ms,
            error_kind=result.error_kind,
            correlation_id=correlation_id,
            argument_keys=arguments.keys(),
        )

    extra = {"tool": recorded_name, "correlation_id": correlation_id, "duration_ms": round(duration_ms, 2)}
    if not result.is_error:
        app.logger.info("Tool call succeeded", extra=extra)
    elif result.error_kind in ("validation_error", "resolution_error", "unknown_tool"):
        app.logger.warning(f"Tool call rejected: {result.text}", extra=extra)
    elif result.error_kind == "remote_error":
        app.logger.error(f"GraphQL error: {result.text}", extra=extra)
    return result


def list_tool_definitions(app: AppContext) -> List[types.Tool]:
    return [tool.spec.to_mcp_tool() for tool in app.tools.values()]


def build_server(app: AppContext) -> Server:
    server: Server = Server(app.settings.name, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return list_tool_definitions(app)

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        result = await invoke_tool(app, name, arguments)
        if result.is_error:
            raise ToolCallError(result.text)
        return [types.TextContent(type="text", text=result.text)]

    return server


__all__ = [
    "AppContext",
    "ToolCallError",
    "build_server",
    "create_app_context",
    "invoke_tool",
    "list_tool_definitions",
    "setup_logger",
]
