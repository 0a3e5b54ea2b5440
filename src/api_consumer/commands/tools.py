"""Tools command -- list the tools the MCP server advertises."""

from __future__ import annotations

from api_consumer.output import print_table


def tools_command() -> None:
    """List advertised MCP tools with their implementation status.

    Uses the effective configuration, so a config that disables the mock
    server also hides ``create_mock_server`` here.
    """
    from api_consumer.config import resolve_config
    from api_consumer.server import PENDING_TOOLS, APIConsumerServer

    server = APIConsumerServer(resolve_config())
    rows = [
        [
            tool.name,
            "pending" if tool.name in PENDING_TOOLS else "available",
            tool.description or "",
        ]
        for tool in server.list_tools()
    ]
    print_table(["Name", "Status", "Description"], rows, title="MCP tools")
