from __future__ import annotations

import asyncio
import os

from mcp import ClientSession
from mcp.client.streamable_http import streamablehttp_client


MCP_URL = os.getenv("MCP_URL", "http://127.0.0.1:9000/mcp/")


def _headers() -> dict[str, str]:
    token = os.getenv("MCP_SERVER_TOKEN", "").strip()
    return {"Authorization": f"Bearer {token}"} if token else {}


async def main() -> None:
    async with streamablehttp_client(MCP_URL, headers=_headers()) as (read_stream, write_stream, _):
        async with ClientSession(read_stream, write_stream) as session:
            await session.initialize()
            tools_result = await session.list_tools()
            print("Available tools:")
            for tool in tools_result.tools:
                read_only = bool(tool.annotations and tool.annotations.readOnlyHint)
                marker = " (read-only)" if read_only else ""
                print(f"- {tool.name}{marker}: {tool.description}")


if __name__ == "__main__":
    asyncio.run(main())
