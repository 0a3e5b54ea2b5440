"""api-consumer -- an MCP server for consuming and documenting REST APIs.

The server exposes tools that let an MCP client build and send HTTP requests
and import OpenAPI 3.x specifications into a normalized model of the API's
endpoints, parameters, request bodies, and responses.

Typical usage::

    api-consumer serve                      # run the MCP server on stdio
    api-consumer import openapi.yaml        # print the normalized spec

Modules:
    app: Typer application and CLI entry point.
    server: Tool catalogue and tool dispatch.
    mcp_server: MCP stdio transport wiring.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
