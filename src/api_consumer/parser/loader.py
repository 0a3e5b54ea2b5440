"""Acquire raw OpenAPI documents and deserialize them into plain Python trees.

This module handles all I/O for the importer: reading a local file, fetching
a URL, and turning the text into a document tree of dicts, lists, and
scalars.

* :func:`detect_format` -- pick ``"json"`` or ``"yaml"`` from a file suffix.
* :func:`parse_document` -- deserialize text in the chosen format.
* :func:`read_file` / :func:`fetch_url` -- single-shot acquisition, no retry.
* :func:`decode_response` -- turn an HTTP response body into a tree.

Acquisition errors (``OSError``, :class:`httpx.HTTPError`) are raised as-is;
the import facade in :mod:`api_consumer.parser.importer` wraps them with the
source name. Deserialization errors are raised as
:class:`~api_consumer.exceptions.DocumentParseError` here, because they are
already final.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal

import httpx
import yaml

from api_consumer.exceptions import DocumentParseError

logger = logging.getLogger(__name__)

DocumentFormat = Literal["json", "yaml"]

_YAML_SUFFIXES = (".yaml", ".yml")
_PARSE_FAILED = "Failed to parse document"


def detect_format(path: str) -> DocumentFormat:
    """Return ``"yaml"`` for ``.yaml`` / ``.yml`` paths (any case), else ``"json"``.

    Only the suffix is consulted; the content is never sniffed.
    """
    if path.lower().endswith(_YAML_SUFFIXES):
        return "yaml"
    return "json"


def parse_document(content: str, fmt: DocumentFormat) -> Any:
    """Deserialize *content* as JSON or YAML.

    Args:
        content: The raw document text.
        fmt: ``"json"`` or ``"yaml"``, usually from :func:`detect_format`.

    Returns:
        The document tree. It is not checked for shape here; see
        :func:`~api_consumer.parser.validator.validate_spec`.

    Raises:
        DocumentParseError: If the text is malformed. The original
            exception is chained as the cause.
    """
    try:
        if fmt == "yaml":
            return yaml.safe_load(content)
        return json.loads(content)
    except (ValueError, yaml.YAMLError) as exc:
        raise DocumentParseError(_PARSE_FAILED, cause=exc) from exc


def read_file(path: str) -> str:
    """Read the whole file at *path* as UTF-8 text.

    Raises:
        OSError: If the file is missing or unreadable.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    return Path(path).read_text(encoding="utf-8")


def fetch_url(url: str) -> httpx.Response:
    """Issue a single unauthenticated GET for *url*.

    The transport's default timeout applies and there is no retry.

    Raises:
        httpx.HTTPStatusError: For a non-2xx status.
        httpx.RequestError: For network failures.
    """
    logger.debug("Fetching OpenAPI document from %s", url)
    response = httpx.get(url, follow_redirects=True)
    response.raise_for_status()
    return response


def decode_response(response: httpx.Response) -> Any:
    """Decode an HTTP response body into a document tree.

    The server's content negotiation decides the format:

    * a ``Content-Type`` mentioning ``json`` is decoded as JSON;
    * one mentioning ``yaml`` / ``yml``, or a URL path ending in
      ``.yaml`` / ``.yml``, is decoded as YAML;
    * anything else is tried as JSON first, then as YAML.

    Raises:
        DocumentParseError: If the body cannot be decoded.
    """
    content_type = response.headers.get("content-type", "").lower()
    if "json" in content_type:
        return parse_document(response.text, "json")
    if "yaml" in content_type or "yml" in content_type:
        return parse_document(response.text, "yaml")
    if detect_format(response.url.path) == "yaml":
        return parse_document(response.text, "yaml")

    try:
        return parse_document(response.text, "json")
    except DocumentParseError:
        logger.debug("Body of %s is not JSON, trying YAML", response.url)
    return parse_document(response.text, "yaml")
