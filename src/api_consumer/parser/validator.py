"""Structural validation of OpenAPI document trees.

This is a presence/shape check only. It confirms that the mandatory
top-level fields exist and that every path item and operation is a mapping,
so that extraction can walk the tree without guarding each step. It does not
check value types, resolve ``$ref`` pointers, or validate against the
OpenAPI meta-schema.

Every check runs; the resulting
:class:`~api_consumer.exceptions.SpecValidationError` lists all violations in
check order rather than stopping at the first one.
"""

from __future__ import annotations

from typing import Any

from api_consumer.exceptions import SpecValidationError
from api_consumer.models import HTTPMethod

_VALIDATION_FAILED = "OpenAPI specification validation failed"


def validate_spec(document: Any) -> None:
    """Validate *document*, returning ``None`` on success.

    Checks, in order:

    1. ``openapi`` is present.
    2. ``info`` is present; if so, ``info.title`` and ``info.version`` are
       each present (each a separate violation).
    3. ``paths`` is present.
    4. Each path item, and each operation under a recognised method key,
       is a mapping.

    A field counts as missing when the key is absent or its value is ``None``
    or an empty string.

    Args:
        document: The deserialized document tree.

    Raises:
        SpecValidationError: If any check fails. ``errors`` holds one
            message per violation.
    """
    if not isinstance(document, dict):
        raise SpecValidationError(_VALIDATION_FAILED, ["Document root must be an object"])

    errors: list[str] = []

    if _is_missing(document, "openapi"):
        errors.append("Missing required field: openapi")

    if _is_missing(document, "info"):
        errors.append("Missing required field: info")
    else:
        info = document["info"]
        if not isinstance(info, dict):
            errors.append("Invalid field: info (expected an object)")
        else:
            if _is_missing(info, "title"):
                errors.append("Missing required field: info.title")
            if _is_missing(info, "version"):
                errors.append("Missing required field: info.version")

    if _is_missing(document, "paths"):
        errors.append("Missing required field: paths")
    else:
        errors.extend(_check_paths(document["paths"]))

    if errors:
        raise SpecValidationError(_VALIDATION_FAILED, errors)


def _is_missing(container: dict[str, Any], key: str) -> bool:
    """Return True if *key* is absent from *container* or holds ``None`` / ``""``."""
    if key not in container:
        return True
    value = container[key]
    return value is None or value == ""


def _check_paths(paths: Any) -> list[str]:
    """Return shape violations for the ``paths`` object and its path items."""
    if not isinstance(paths, dict):
        return ["Invalid field: paths (expected an object)"]

    errors: list[str] = []
    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            errors.append(f"Invalid path item: {path} (expected an object)")
            continue
        for method in HTTPMethod:
            operation = path_item.get(method.value.lower())
            if operation is not None and not isinstance(operation, dict):
                errors.append(
                    f"Invalid operation: {method.value} {path} (expected an object)"
                )
    return errors
