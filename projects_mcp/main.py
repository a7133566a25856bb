"""
Main entry point for the GitHub Projects MCP server.

PROJECTS_MCP_TRANSPORT=stdio (default) speaks MCP over stdin/stdout,
PROJECTS_MCP_TRANSPORT=http serves the FastAPI app with uvicorn.
"""
from __future__ import annotations

import sys

import anyio
import uvicorn
from mcp.server.stdio import stdio_server

from .config import Settings, config_path, load_config, load_settings
from .server import build_server, create_app_context


async def run_stdio(settings: Settings) -> None:
    ctx = create_app_context(settings)
    server = build_server(ctx)
    ctx.logger.info(f"Serving {len(ctx.tools)} tools over stdio")
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await ctx.aclose()


def run_http(settings: Settings) -> None:
    from .http_app import create_app

    app = create_app(create_app_context(settings))
    # stdout is free here, unlike the stdio transport
    print(f"Starting MCP server on http://{settings.host}:{settings.port}")
    print(f"MCP endpoint: http://{settings.host}:{settings.port}/mcp/")
    print(f"Healthcheck: http://{settings.host}:{settings.port}/health")
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        server_header=False,
    )


def main() -> None:
    try:
        settings = load_settings(load_config(config_path()))
        if settings.transport == "http":
            run_http(settings)
        else:
            anyio.run(run_stdio, settings)
    except KeyboardInterrupt:
        print("\nServer shutdown requested...", file=sys.stderr)
        sys.exit(0)
    except Exception as e:
        print(f"Failed to start MCP server: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
