"""Canonical Pydantic models shared across all api-consumer modules.

This is the single source of truth for data shapes in the project. The models
fall into three groups:

**Specification models** -- produced by the OpenAPI importer and returned to
MCP clients by the ``import_openapi`` tool:
    :class:`HTTPMethod`, :class:`ParameterLocation`, :class:`APIInfo`,
    :class:`Parameter`, :class:`MediaType`, :class:`RequestBody`,
    :class:`ResponseSchema`, :class:`Endpoint`, :class:`Components`, and
    :class:`OpenAPISpecification`.

**HTTP models** -- consumed and produced by the request tools:
    :class:`RequestConfig`, :class:`PreparedRequest`, and :class:`HTTPResponse`.

**Server models** -- :class:`ServerConfig` (persisted as JSON in the user's
config directory) and :class:`ServerInfo`.

Attribute names are snake_case. Fields whose wire name differs carry an alias
(``operationId``, ``in``, ``schema``, ...); serialise with
``model_dump(by_alias=True, exclude_none=True)`` to get the wire shape with
absent optional fields omitted. Specification models are frozen: an imported
specification is a finished value owned by whoever asked for it.

Schemas are kept as plain dicts. They are copied verbatim from the source
document and never re-typed, so nested ``properties`` / ``items`` keep
whatever shape the document gave them.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_TIMEOUT_MS = 30000
"""Request timeout applied when a caller does not supply one (milliseconds)."""

Schema = dict[str, Any]
"""A JSON-Schema fragment, passed through from the source document."""


# --- Specification Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised on an OpenAPI path item.

    Declaration order is the order endpoints are emitted for a single path.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class ParameterLocation(str, enum.Enum):
    """Locations where an API parameter can appear, per OpenAPI ``in`` field."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


_SPEC_CONFIG = ConfigDict(frozen=True, populate_by_name=True)


class APIInfo(BaseModel):
    """API metadata copied from the document's *Info Object*."""

    model_config = _SPEC_CONFIG

    title: str
    version: str
    description: Optional[str] = None


class Parameter(BaseModel):
    """A single parameter of an operation.

    ``required`` defaults to ``False`` and ``schema`` to ``{"type": "string"}``
    when the source parameter omits them. A *Reference Object* entry keeps its
    pointer in ``ref`` and usually has no ``name`` or ``in``.
    """

    model_config = _SPEC_CONFIG

    name: Optional[str] = None
    location: Optional[ParameterLocation] = Field(default=None, alias="in")
    ref: Optional[str] = Field(default=None, alias="$ref")
    required: bool = False
    schema_: Schema = Field(
        default_factory=lambda: {"type": "string"}, alias="schema"
    )
    description: Optional[str] = None


class MediaType(BaseModel):
    """One content-type entry of a request body or response."""

    model_config = _SPEC_CONFIG

    mime_type: str = Field(alias="mimeType")
    schema_: Optional[Schema] = Field(default=None, alias="schema")


class RequestBody(BaseModel):
    """An operation's request body, one :class:`MediaType` per content type."""

    model_config = _SPEC_CONFIG

    ref: Optional[str] = Field(default=None, alias="$ref")
    required: bool = False
    content: list[MediaType] = Field(default_factory=list)


class ResponseSchema(BaseModel):
    """One declared response of an operation, keyed by status code.

    ``content`` is ``None`` -- never an empty list -- when the response
    declares no content entries.
    """

    model_config = _SPEC_CONFIG

    status_code: str = Field(alias="statusCode")
    ref: Optional[str] = Field(default=None, alias="$ref")
    description: str = ""
    content: Optional[list[MediaType]] = None


class Endpoint(BaseModel):
    """A single operation, identified by its ``(path, method)`` pair."""

    model_config = _SPEC_CONFIG

    path: str
    method: HTTPMethod
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    summary: Optional[str] = None
    parameters: list[Parameter] = Field(default_factory=list)
    request_body: Optional[RequestBody] = Field(default=None, alias="requestBody")
    responses: list[ResponseSchema] = Field(default_factory=list)


class Components(BaseModel):
    """Reusable definitions from ``components``, passed through untransformed."""

    model_config = _SPEC_CONFIG

    schemas: Optional[dict[str, Any]] = None
    parameters: Optional[dict[str, Any]] = None
    responses: Optional[dict[str, Any]] = None


class OpenAPISpecification(BaseModel):
    """Normalized result of importing one OpenAPI document.

    See Also:
        :func:`~api_consumer.parser.importer.import_from_file`
        :func:`~api_consumer.parser.importer.import_from_url`
    """

    model_config = _SPEC_CONFIG

    info: APIInfo
    endpoints: list[Endpoint] = Field(default_factory=list)
    components: Optional[Components] = None
    raw: Any = Field(description="The entire original document")

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-compatible wire form (camelCase, absent fields omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# --- HTTP Models ---


class RequestConfig(BaseModel):
    """Caller-supplied description of an HTTP request.

    ``timeout`` is in milliseconds; ``data`` is the request body (sent as
    JSON for dicts and lists, as raw content for strings).
    """

    method: HTTPMethod
    url: str
    headers: Optional[dict[str, str]] = None
    params: Optional[dict[str, Any]] = None
    data: Any = None
    timeout: Optional[int] = Field(default=None, description="Timeout in milliseconds")

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.upper()
        return value


class PreparedRequest(RequestConfig):
    """A :class:`RequestConfig` with every default filled in, ready to send."""

    timeout: int = Field(default=DEFAULT_TIMEOUT_MS, description="Timeout in milliseconds")


class HTTPResponse(BaseModel):
    """The parts of an HTTP response returned to callers."""

    model_config = ConfigDict(populate_by_name=True)

    data: Any = None
    status: int
    status_text: str = Field(default="", alias="statusText")
    headers: dict[str, str] = Field(default_factory=dict)


# --- Server Models ---


class ServerConfig(BaseModel):
    """Server settings persisted at ``~/.config/api-consumer/config.json``.

    Loaded by :func:`~api_consumer.config.load_server_config`. Fields here
    have the lowest precedence and can be overridden by environment variables
    or CLI flags; see :func:`~api_consumer.config.resolve_config`.
    """

    timeout: int = Field(
        default=DEFAULT_TIMEOUT_MS, gt=0, description="Default request timeout in milliseconds"
    )
    max_concurrent_requests: int = Field(
        default=10, gt=0, description="Upper bound on in-flight requests"
    )
    enable_mock_server: bool = Field(
        default=True, description="Advertise the mock-server tool"
    )
    test_frameworks: list[str] = Field(
        default_factory=lambda: ["jest", "vitest", "mocha"],
        description="Frameworks offered by the test-generation tool",
    )


class ServerInfo(BaseModel):
    """Identity reported by the server during the MCP handshake."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    version: str
    protocol_version: str = Field(alias="protocolVersion")
