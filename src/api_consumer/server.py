"""Tool catalogue and tool dispatch for the api-consumer MCP server.

:class:`APIConsumerServer` is transport-independent: it knows which tools
exist, what arguments they take, and how to run them, and it reports every
outcome as a :class:`ToolResult` holding the text sent back to the client.
The stdio wiring lives in :mod:`api_consumer.mcp_server`.

Implemented tools:

* ``create_request`` -- build a request configuration.
* ``execute_request`` -- send a request and return the response.
* ``import_openapi`` -- import an OpenAPI document from a file or URL.

The remaining tools in the catalogue (test generation, workflows, response
validation, mock server, performance analysis) are advertised so clients can
discover them, and answer with a "pending" notice when called.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from mcp.types import Tool
from pydantic import ValidationError

from api_consumer import __version__
from api_consumer.client import create_request, execute_request
from api_consumer.exceptions import ApiConsumerError, InvalidUsageError, SpecValidationError
from api_consumer.models import (
    HTTPMethod,
    RequestConfig,
    ServerConfig,
    ServerInfo,
)
from api_consumer.parser import import_from_file, import_from_url

logger = logging.getLogger(__name__)

SERVER_NAME = "api-consumer"
PROTOCOL_VERSION = "2024-11-05"

PENDING_TOOLS = frozenset(
    {
        "generate_test_suite",
        "execute_test_workflow",
        "validate_response",
        "create_mock_server",
        "analyze_performance",
    }
)


@dataclass
class ToolResult:
    """Outcome of one tool call: the text for the client and an error flag."""

    text: str
    is_error: bool = False


class APIConsumerServer:
    """Transport-independent core of the MCP server.

    Args:
        config: Server settings. ``None`` uses
            :class:`~api_consumer.models.ServerConfig` defaults.

    Example::

        server = APIConsumerServer()
        result = server.call_tool("import_openapi", {"source": "petstore.yaml"})
        print(result.text)
    """

    name = SERVER_NAME
    version = __version__

    def __init__(self, config: Optional[ServerConfig] = None) -> None:
        self.config = config or ServerConfig()
        self._protocol_version = PROTOCOL_VERSION
        self._handlers: dict[str, Callable[[dict[str, Any]], Any]] = {
            "create_request": self._create_request,
            "execute_request": self._execute_request,
            "import_openapi": self._import_openapi,
        }

    def get_server_info(self) -> ServerInfo:
        """Return the server's name, version, and MCP protocol version."""
        return ServerInfo(
            name=self.name,
            version=self.version,
            protocol_version=self._protocol_version,
        )

    def list_tools(self) -> list[Tool]:
        """Return every advertised tool with its JSON input schema.

        ``create_mock_server`` is omitted when the config disables the mock
        server, and the ``generate_test_suite`` framework choices come from
        ``test_frameworks``.
        """
        return _build_tools(self.config)

    def call_tool(self, name: str, arguments: Optional[dict[str, Any]] = None) -> ToolResult:
        """Run tool *name* with *arguments* and describe the outcome.

        Typed errors and malformed arguments become error results rather than
        exceptions, so a failing call never tears down the session.

        Args:
            name: The tool name from :meth:`list_tools`.
            arguments: The tool's arguments; ``None`` is treated as ``{}``.

        Returns:
            A :class:`ToolResult`. Successful results carry indented JSON.
        """
        args = arguments or {}
        logger.debug("Tool call: %s", name)

        handler = self._handlers.get(name)
        if handler is None:
            advertised = {tool.name for tool in self.list_tools()}
            if name in PENDING_TOOLS and name in advertised:
                return ToolResult(
                    f"Tool '{name}' implementation pending. "
                    f"Arguments received: {json.dumps(args, indent=2, default=str)}"
                )
            return ToolResult(f"Unknown tool: {name}", is_error=True)

        try:
            payload = handler(args)
        except SpecValidationError as exc:
            lines = [f"Error executing tool '{name}': {exc.message}"]
            lines.extend(f"- {violation}" for violation in exc.errors)
            return ToolResult("\n".join(lines), is_error=True)
        except ApiConsumerError as exc:
            logger.info("Tool %s failed: %s", name, exc)
            return ToolResult(f"Error executing tool '{name}': {exc}", is_error=True)
        except ValidationError as exc:
            return ToolResult(
                f"Error executing tool '{name}': invalid arguments: {exc}",
                is_error=True,
            )

        return ToolResult(json.dumps(payload, indent=2, ensure_ascii=False, default=str))

    # ------------------------------------------------------------------ #
    # Tool handlers
    # ------------------------------------------------------------------ #

    def _request_config(self, args: dict[str, Any]) -> RequestConfig:
        """Validate request arguments, defaulting the timeout from the server config."""
        config = RequestConfig.model_validate(args)
        if config.timeout is None:
            config = config.model_copy(update={"timeout": self.config.timeout})
        return config

    def _create_request(self, args: dict[str, Any]) -> dict[str, Any]:
        prepared = create_request(self._request_config(args))
        return prepared.model_dump(mode="json", exclude_none=True)

    def _execute_request(self, args: dict[str, Any]) -> dict[str, Any]:
        request_args = args.get("request")
        if not isinstance(request_args, dict):
            raise InvalidUsageError("'request' must be an object (from create_request)")
        prepared = create_request(self._request_config(request_args))
        response = execute_request(prepared)
        return response.model_dump(mode="json", by_alias=True)

    def _import_openapi(self, args: dict[str, Any]) -> dict[str, Any]:
        source = args.get("source")
        if not isinstance(source, str) or not source:
            raise InvalidUsageError("'source' must be a non-empty string")

        source_type = args.get("sourceType", "file")
        if source_type == "file":
            spec = import_from_file(source)
        else:
            spec = import_from_url(source)
        return spec.to_dict()


def _build_tools(config: ServerConfig) -> list[Tool]:
    """Assemble the tool catalogue for *config*."""
    framework_schema: dict[str, Any] = {"type": "string", "description": "Test framework"}
    if config.test_frameworks:
        framework_schema["enum"] = list(config.test_frameworks)
        framework_schema["default"] = config.test_frameworks[0]

    tools = [
        Tool(
            name="create_request",
            description="Create an HTTP request configuration",
            inputSchema={
                "type": "object",
                "properties": {
                    "method": {
                        "type": "string",
                        "enum": [m.value for m in HTTPMethod],
                        "description": "HTTP method",
                    },
                    "url": {"type": "string", "description": "Request URL"},
                    "headers": {
                        "type": "object",
                        "description": "Request headers",
                        "additionalProperties": {"type": "string"},
                    },
                    "params": {
                        "type": "object",
                        "description": "Query parameters",
                    },
                    "data": {"description": "Request body data"},
                    "timeout": {
                        "type": "number",
                        "description": "Request timeout in milliseconds",
                        "default": config.timeout,
                    },
                },
                "required": ["method", "url"],
            },
        ),
        Tool(
            name="execute_request",
            description="Execute an HTTP request and return the response",
            inputSchema={
                "type": "object",
                "properties": {
                    "request": {
                        "type": "object",
                        "description": "Request configuration (from create_request)",
                    },
                },
                "required": ["request"],
            },
        ),
        Tool(
            name="import_openapi",
            description="Import and parse OpenAPI/Swagger specification",
            inputSchema={
                "type": "object",
                "properties": {
                    "source": {
                        "type": "string",
                        "description": "File path or URL to OpenAPI specification",
                    },
                    "sourceType": {
                        "type": "string",
                        "enum": ["file", "url"],
                        "description": "Type of source",
                        "default": "file",
                    },
                },
                "required": ["source"],
            },
        ),
        Tool(
            name="generate_test_suite",
            description="Generate test cases from OpenAPI specification",
            inputSchema={
                "type": "object",
                "properties": {
                    "specification": {
                        "type": "object",
                        "description": "Parsed OpenAPI specification",
                    },
                    "framework": framework_schema,
                    "coverage": {
                        "type": "string",
                        "enum": ["basic", "comprehensive", "exhaustive"],
                        "description": "Test coverage level",
                        "default": "comprehensive",
                    },
                },
                "required": ["specification"],
            },
        ),
        Tool(
            name="execute_test_workflow",
            description="Execute a test workflow with orchestration",
            inputSchema={
                "type": "object",
                "properties": {
                    "workflow": {
                        "type": "string",
                        "description": "Workflow ID or name",
                    },
                    "endpoints": {
                        "type": "array",
                        "description": "Endpoints to test",
                        "items": {"type": "object"},
                    },
                    "environment": {
                        "type": "object",
                        "description": "Test environment configuration",
                    },
                    "parallel": {
                        "type": "boolean",
                        "description": "Run tests in parallel",
                        "default": False,
                    },
                },
                "required": ["workflow", "endpoints"],
            },
        ),
        Tool(
            name="validate_response",
            description="Validate API response against expected schema",
            inputSchema={
                "type": "object",
                "properties": {
                    "response": {
                        "type": "object",
                        "description": "Actual API response",
                    },
                    "expectedSchema": {
                        "type": "object",
                        "description": "Expected response schema",
                    },
                    "assertions": {
                        "type": "array",
                        "description": "Additional assertions to perform",
                        "items": {"type": "object"},
                    },
                },
                "required": ["response", "expectedSchema"],
            },
        ),
    ]

    if config.enable_mock_server:
        tools.append(
            Tool(
                name="create_mock_server",
                description="Create a mock API server from specification",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "specification": {
                            "type": "object",
                            "description": "OpenAPI specification",
                        },
                        "port": {
                            "type": "number",
                            "description": "Port for mock server",
                            "default": 3000,
                        },
                        "responseDelay": {
                            "type": "number",
                            "description": "Simulated response delay in ms",
                            "default": 0,
                        },
                    },
                    "required": ["specification"],
                },
            )
        )

    tools.append(
        Tool(
            name="analyze_performance",
            description="Analyze API performance and response times",
            inputSchema={
                "type": "object",
                "properties": {
                    "endpoint": {
                        "type": "object",
                        "description": "Endpoint to analyze",
                    },
                    "iterations": {
                        "type": "number",
                        "description": "Number of test iterations",
                        "default": 100,
                    },
                    "concurrency": {
                        "type": "number",
                        "description": "Concurrent requests",
                        "default": config.max_concurrent_requests,
                    },
                },
                "required": ["endpoint"],
            },
        )
    )

    return tools
