"""Import facade -- the two entry points that turn a source into a specification.

:func:`import_from_file` and :func:`import_from_url` acquire the raw
document, then drive it through the parser, the structural validator, and
the extractor. The error policy is the same for both:

* :class:`~api_consumer.exceptions.DocumentParseError` and
  :class:`~api_consumer.exceptions.SpecValidationError` (and any other
  :class:`~api_consumer.exceptions.OpenAPIImportError`) propagate unchanged.
* Anything else -- a missing file, a refused connection, an HTTP error
  status, an unexpected failure inside extraction -- is wrapped exactly once
  in an :class:`~api_consumer.exceptions.OpenAPIImportError` naming the
  source, with the original exception chained as its cause.

Callers therefore always see one of the three typed import errors. Nothing
is cached; every call starts from scratch.
"""

from __future__ import annotations

import logging

from api_consumer.exceptions import OpenAPIImportError
from api_consumer.models import OpenAPISpecification
from api_consumer.parser.extractor import extract_specification
from api_consumer.parser.loader import (
    decode_response,
    detect_format,
    fetch_url,
    parse_document,
    read_file,
)
from api_consumer.parser.validator import validate_spec

logger = logging.getLogger(__name__)


def import_from_file(path: str) -> OpenAPISpecification:
    """Import an OpenAPI document from a local file.

    The format is chosen from the file suffix alone: ``.yaml`` / ``.yml``
    (any case) is YAML, everything else is JSON.

    Args:
        path: Path to the document.

    Returns:
        The normalized specification.

    Raises:
        DocumentParseError: If the file content is malformed.
        SpecValidationError: If mandatory fields are missing.
        OpenAPIImportError: For any other failure, e.g. the file does not
            exist. The message names *path*.
    """
    try:
        content = read_file(path)
        document = parse_document(content, detect_format(path))
        validate_spec(document)
        spec = extract_specification(document)
    except OpenAPIImportError:
        raise
    except Exception as exc:
        raise OpenAPIImportError(
            f"Failed to import OpenAPI spec from file: {path}", cause=exc
        ) from exc

    logger.debug("Imported %d endpoints from %s", len(spec.endpoints), path)
    return spec


def import_from_url(url: str) -> OpenAPISpecification:
    """Import an OpenAPI document from a URL.

    Issues one GET with no authentication and no retry. How the body is
    decoded is described in :func:`~api_consumer.parser.loader.decode_response`.

    Args:
        url: HTTP(S) URL of the document.

    Returns:
        The normalized specification.

    Raises:
        DocumentParseError: If the body cannot be decoded.
        SpecValidationError: If mandatory fields are missing.
        OpenAPIImportError: For any other failure, e.g. a connection error
            or a non-2xx status. The message names *url*.
    """
    try:
        response = fetch_url(url)
        document = decode_response(response)
        validate_spec(document)
        spec = extract_specification(document)
    except OpenAPIImportError:
        raise
    except Exception as exc:
        raise OpenAPIImportError(
            f"Failed to import OpenAPI spec from URL: {url}", cause=exc
        ) from exc

    logger.debug("Imported %d endpoints from %s", len(spec.endpoints), url)
    return spec
