"""HTTP request builder and executor behind the ``create_request`` and
``execute_request`` tools.

:func:`create_request` fills in defaults on a caller-supplied
:class:`~api_consumer.models.RequestConfig`; :func:`execute_request` sends
the resulting :class:`~api_consumer.models.PreparedRequest` with
:mod:`httpx` and returns an :class:`~api_consumer.models.HTTPResponse`.

Each call is a single request: no retry, no auth injection, no caching.
Error statuses and network failures are mapped to the typed exceptions in
:mod:`api_consumer.exceptions`:

* 401 / 403 -- :class:`~api_consumer.exceptions.AuthError`
* 404 -- :class:`~api_consumer.exceptions.NotFoundError`
* any other status >= 400 -- :class:`~api_consumer.exceptions.ServerError`
* timeouts and transport errors -- :class:`~api_consumer.exceptions.ConnectionError_`
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from api_consumer.exceptions import (
    AuthError,
    ConnectionError_,
    NotFoundError,
    ServerError,
)
from api_consumer.models import (
    DEFAULT_TIMEOUT_MS,
    HTTPResponse,
    PreparedRequest,
    RequestConfig,
)

logger = logging.getLogger(__name__)


def create_request(config: RequestConfig) -> PreparedRequest:
    """Build a request ready to send from *config*.

    A missing or zero ``timeout`` becomes the 30 second default.

    Args:
        config: The caller's request description.

    Returns:
        A :class:`~api_consumer.models.PreparedRequest`.
    """
    return PreparedRequest(
        method=config.method,
        url=config.url,
        headers=config.headers,
        params=config.params,
        data=config.data,
        timeout=config.timeout or DEFAULT_TIMEOUT_MS,
    )


def execute_request(request: PreparedRequest) -> HTTPResponse:
    """Send *request* and return the decoded response.

    ``data`` is sent as raw content when it is a string or bytes, and as
    JSON otherwise. Redirects are followed.

    Args:
        request: A request built by :func:`create_request`.

    Returns:
        The response's body, status, reason phrase, and headers.

    Raises:
        AuthError: On 401 / 403.
        NotFoundError: On 404.
        ServerError: On any other status >= 400.
        ConnectionError_: On network errors and timeouts.
    """
    kwargs: dict[str, Any] = {
        "headers": request.headers,
        "params": request.params,
        "timeout": request.timeout / 1000,
        "follow_redirects": True,
    }
    if isinstance(request.data, (str, bytes)):
        kwargs["content"] = request.data
    elif request.data is not None:
        kwargs["json"] = request.data

    method = request.method.value
    logger.debug("%s %s (timeout %d ms)", method, request.url, request.timeout)

    try:
        response = httpx.request(method, request.url, **kwargs)
    except httpx.TimeoutException as exc:
        raise ConnectionError_(
            f"Request to {request.url} timed out after {request.timeout} ms"
        ) from exc
    except httpx.RequestError as exc:
        raise ConnectionError_(f"Request to {request.url} failed: {exc}") from exc

    _map_response_error(response)

    return HTTPResponse(
        data=extract_response_data(response),
        status=response.status_code,
        status_text=response.reason_phrase or "",
        headers=dict(response.headers),
    )


def extract_response_data(response: httpx.Response) -> Any:
    """Extract the body from an HTTP response.

    Attempts to parse the body as JSON first. If that fails (e.g. the
    response is HTML or plain text), returns the raw text. Returns ``None``
    for responses with no content.
    """
    if not response.content:
        return None

    try:
        return response.json()
    except ValueError:
        return response.text


def _map_response_error(response: httpx.Response) -> None:
    """Raise a typed exception for error HTTP status codes."""
    status = response.status_code
    if status < 400:
        return

    # Try to extract an error message from the response body.
    try:
        detail = response.json()
        if isinstance(detail, dict):
            msg = detail.get("message") or detail.get("error") or detail.get("detail") or ""
        else:
            msg = str(detail)
    except ValueError:
        msg = response.text[:200] if response.text else ""

    prefix = f"HTTP {status}"
    full_msg = f"{prefix}: {msg}" if msg else prefix

    if status in (401, 403):
        raise AuthError(full_msg)
    if status == 404:
        raise NotFoundError(full_msg)
    raise ServerError(full_msg)
