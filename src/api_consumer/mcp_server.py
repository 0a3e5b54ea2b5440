"""MCP stdio transport for :class:`~api_consumer.server.APIConsumerServer`.

Uses the official ``mcp`` Python SDK. Registers ``tools/list`` and
``tools/call`` handlers on a low-level :class:`mcp.server.Server` and serves
them over stdin/stdout. Stdout carries the protocol, so all diagnostics go
through :mod:`logging` to stderr.

Tool calls do blocking I/O (file reads, HTTP), so each one runs in a worker
thread; at most ``max_concurrent_requests`` run at once.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from api_consumer.server import APIConsumerServer

log = logging.getLogger(__name__)


class ToolCallFailed(Exception):
    """Raised inside the call handler so the SDK marks the result ``isError``."""


def create_mcp_server(app: APIConsumerServer) -> Server:
    """Create the MCP server with all tool handlers bound to *app*."""
    server: Server = Server(app.name, version=app.version)
    limiter = asyncio.Semaphore(app.config.max_concurrent_requests)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return app.list_tools()

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        async with limiter:
            result = await asyncio.to_thread(app.call_tool, name, arguments or {})
        if result.is_error:
            raise ToolCallFailed(result.text)
        return [TextContent(type="text", text=result.text)]

    return server


async def run_stdio_server(app: APIConsumerServer) -> None:
    """Serve *app* over stdio until the client disconnects."""
    server = create_mcp_server(app)
    info = app.get_server_info()
    log.info(
        "%s %s running on stdio (protocol %s)",
        info.name,
        info.version,
        info.protocol_version,
    )
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
