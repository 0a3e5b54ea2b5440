"""Extract a normalized specification from a validated OpenAPI document.

This module walks a document tree that has passed
:func:`~api_consumer.parser.validator.validate_spec` and builds an
:class:`~api_consumer.models.OpenAPISpecification`. The single public entry
point is :func:`extract_specification`; private helpers each handle one
section of the OpenAPI structure:

* ``_extract_info`` -- the ``info`` object (title, version, description).
* ``_extract_endpoints`` -- the ``paths`` object, one endpoint per path and
  HTTP method that has an operation object.
* ``_extract_parameters`` / ``_extract_request_body`` /
  ``_extract_responses`` -- the parts of a single operation.
* ``_extract_components`` -- ``components`` passthrough.

Ordering follows the document: path keys, content-type keys, and status-code
keys are visited in the order the parser produced them. Methods within one
path follow :class:`~api_consumer.models.HTTPMethod` declaration order.

Extraction is a pure function of its input: no state is kept between calls
and the document is never mutated. Schemas and components are passed through
unchanged. Reference Objects are not resolved: a ``$ref`` standing in for a
parameter, request body, or response is carried in that entry's ``ref`` field.
Scalar text fields are stringified, since YAML may load them as numbers or
dates.
"""

from __future__ import annotations

from typing import Any, Optional

from api_consumer.models import (
    APIInfo,
    Components,
    Endpoint,
    HTTPMethod,
    MediaType,
    OpenAPISpecification,
    Parameter,
    ParameterLocation,
    RequestBody,
    ResponseSchema,
)


def extract_specification(document: dict[str, Any]) -> OpenAPISpecification:
    """Build an :class:`~api_consumer.models.OpenAPISpecification` from *document*.

    Args:
        document: A document tree that has already passed validation.

    Returns:
        The normalized specification. ``raw`` is *document* itself.

    Example::

        document = parse_document(text, "yaml")
        validate_spec(document)
        spec = extract_specification(document)
        for endpoint in spec.endpoints:
            print(f"{endpoint.method.value} {endpoint.path}")
    """
    return OpenAPISpecification(
        info=_extract_info(document["info"]),
        endpoints=_extract_endpoints(document["paths"]),
        components=_extract_components(document),
        raw=document,
    )


def _extract_info(info: dict[str, Any]) -> APIInfo:
    """Copy title, version, and description from the *Info Object*.

    Title and version are stringified because YAML loads ``version: 1.0`` as
    a float.
    """
    description = info.get("description")
    return APIInfo(
        title=str(info["title"]),
        version=str(info["version"]),
        description=str(description) if description is not None else None,
    )


def _extract_endpoints(paths: dict[str, Any]) -> list[Endpoint]:
    """Return one :class:`~api_consumer.models.Endpoint` per path and method present."""
    endpoints: list[Endpoint] = []

    for path, path_item in paths.items():
        for method in HTTPMethod:
            operation = path_item.get(method.value.lower())
            if operation is None:
                continue
            endpoints.append(_extract_endpoint(str(path), method, operation))

    return endpoints


def _extract_endpoint(
    path: str, method: HTTPMethod, operation: dict[str, Any]
) -> Endpoint:
    """Build a single endpoint from an *Operation Object*."""
    parameters = operation.get("parameters")
    if parameters is None:
        parameters = []

    responses = operation.get("responses")
    if responses is None:
        responses = {}

    return Endpoint(
        path=path,
        method=method,
        operation_id=_optional_str(operation.get("operationId")),
        summary=_optional_str(operation.get("summary")),
        parameters=_extract_parameters(parameters),
        request_body=_extract_request_body(operation.get("requestBody")),
        responses=_extract_responses(responses),
    )


def _extract_parameters(params: list[dict[str, Any]]) -> list[Parameter]:
    """Convert raw *Parameter Objects*, filling ``required`` and ``schema`` defaults.

    Path-level parameters are not merged in; only the operation's own list is
    read. *Reference Objects* are kept unresolved with their pointer in
    ``ref``.
    """
    parameters: list[Parameter] = []

    for param in params:
        required = param.get("required")
        if required is None:
            required = False

        schema = param.get("schema")
        if schema is None:
            schema = {"type": "string"}

        location = param.get("in")
        parameters.append(
            Parameter(
                name=_optional_str(param.get("name")),
                location=ParameterLocation(location) if location is not None else None,
                ref=_optional_str(param.get("$ref")),
                required=bool(required),
                schema_=schema,
                description=_optional_str(param.get("description")),
            )
        )

    return parameters


def _extract_request_body(body: Optional[dict[str, Any]]) -> Optional[RequestBody]:
    """Convert an operation's ``requestBody``, or return ``None`` when absent."""
    if body is None:
        return None

    required = body.get("required")
    if required is None:
        required = False

    return RequestBody(
        ref=_optional_str(body.get("$ref")),
        required=bool(required),
        content=_extract_content(body.get("content")),
    )


def _extract_responses(responses: dict[Any, Any]) -> list[ResponseSchema]:
    """Convert the ``responses`` map into one entry per status-code key.

    Keys such as ``"default"`` and ``"2XX"`` are kept as-is; integer keys
    produced by YAML are stringified. ``content`` is ``None`` rather than an
    empty list when a response declares no content.
    """
    result: list[ResponseSchema] = []

    for status_code, response in responses.items():
        if response is None:
            response = {}

        description = response.get("description")
        if description is None:
            description = ""

        content = _extract_content(response.get("content"))

        result.append(
            ResponseSchema(
                status_code=str(status_code),
                ref=_optional_str(response.get("$ref")),
                description=str(description),
                content=content if content else None,
            )
        )

    return result


def _extract_content(content: Optional[dict[str, Any]]) -> list[MediaType]:
    """Pair each MIME-type key of a ``content`` map with its optional ``schema``."""
    if content is None:
        return []

    media_types: list[MediaType] = []
    for mime_type, media in content.items():
        schema = media.get("schema") if isinstance(media, dict) else None
        media_types.append(MediaType(mime_type=str(mime_type), schema_=schema))
    return media_types


def _extract_components(document: dict[str, Any]) -> Optional[Components]:
    """Pass ``components.schemas`` / ``parameters`` / ``responses`` through untouched."""
    components = document.get("components")
    if components is None:
        return None

    return Components(
        schemas=components.get("schemas"),
        parameters=components.get("parameters"),
        responses=components.get("responses"),
    )


def _optional_str(value: Any) -> Optional[str]:
    """Stringify a scalar that YAML may have loaded as a number or date."""
    if value is None:
        return None
    return str(value)
