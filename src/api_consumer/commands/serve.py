"""Serve command -- run the MCP server over stdio.

Stdout is the protocol channel once the server is running, so this command
never prints through :mod:`api_consumer.output`; diagnostics go to stderr
through :mod:`logging`.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Optional

import typer


def serve_command(
    ctx: typer.Context,
    timeout: Optional[int] = typer.Option(
        None, "--timeout", help="Default request timeout in milliseconds."
    ),
    max_concurrent_requests: Optional[int] = typer.Option(
        None,
        "--max-concurrent-requests",
        help="Maximum number of tool calls running at once.",
    ),
) -> None:
    """Run the api-consumer MCP server on stdin/stdout.

    Settings resolve from these flags, then ``API_CONSUMER_*`` environment
    variables, then the config file, then built-in defaults.

    Example::

        api-consumer serve
        api-consumer -v serve --timeout 10000
    """
    from api_consumer.config import resolve_config
    from api_consumer.mcp_server import run_stdio_server
    from api_consumer.server import APIConsumerServer

    verbose = ctx.obj.get("verbose", False) if ctx.obj else False
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = resolve_config(
        cli_timeout=timeout,
        cli_max_concurrent_requests=max_concurrent_requests,
    )
    asyncio.run(run_stdio_server(APIConsumerServer(config)))
