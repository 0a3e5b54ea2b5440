"""Tests for the request builder and executor."""

from __future__ import annotations

from typing import Any
from unittest.mock import patch

import httpx
import pytest

from api_consumer.client import create_request, execute_request
from api_consumer.client.request import extract_response_data
from api_consumer.exceptions import AuthError, ConnectionError_, NotFoundError, ServerError
from api_consumer.models import HTTPMethod, PreparedRequest, RequestConfig


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _json_response(data: Any, status_code: int = 200) -> httpx.Response:
    """Build a mock httpx.Response with JSON content."""
    return httpx.Response(
        status_code=status_code,
        headers={"content-type": "application/json"},
        json=data,
        request=httpx.Request("GET", "https://api.example.com/test"),
    )


def _text_response(text: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code=status_code,
        text=text,
        request=httpx.Request("GET", "https://api.example.com/test"),
    )


def _prepared(**kwargs: Any) -> PreparedRequest:
    base: dict[str, Any] = {"method": "GET", "url": "https://api.example.com/test"}
    base.update(kwargs)
    return create_request(RequestConfig(**base))


# ---------------------------------------------------------------------------
# create_request
# ---------------------------------------------------------------------------


class TestCreateRequest:
    def test_copies_fields(self) -> None:
        config = RequestConfig(
            method="POST",
            url="https://api.example.com/users",
            headers={"Authorization": "Bearer t"},
            params={"page": 2},
            data={"name": "Ada"},
            timeout=5000,
        )
        request = create_request(config)
        assert request.method == HTTPMethod.POST
        assert request.url == "https://api.example.com/users"
        assert request.headers == {"Authorization": "Bearer t"}
        assert request.params == {"page": 2}
        assert request.data == {"name": "Ada"}
        assert request.timeout == 5000

    def test_timeout_defaults_to_thirty_seconds(self) -> None:
        request = create_request(RequestConfig(method="GET", url="https://x.io"))
        assert request.timeout == 30000

    def test_method_is_case_insensitive(self) -> None:
        request = create_request(RequestConfig(method="patch", url="https://x.io"))
        assert request.method == HTTPMethod.PATCH

    def test_unknown_method_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            RequestConfig(method="TRACE", url="https://x.io")


# ---------------------------------------------------------------------------
# execute_request
# ---------------------------------------------------------------------------


class TestExecuteRequest:
    def test_returns_json_response(self) -> None:
        response = _json_response({"id": 1})
        with patch("api_consumer.client.request.httpx.request", return_value=response):
            result = execute_request(_prepared())

        assert result.data == {"id": 1}
        assert result.status == 200
        assert result.status_text == "OK"
        assert result.headers["content-type"] == "application/json"

    def test_passes_request_options(self) -> None:
        with patch(
            "api_consumer.client.request.httpx.request",
            return_value=_json_response({}),
        ) as mock_request:
            execute_request(
                _prepared(
                    method="POST",
                    headers={"X-Trace": "1"},
                    params={"q": "a"},
                    data={"name": "Ada"},
                    timeout=2500,
                )
            )

        mock_request.assert_called_once_with(
            "POST",
            "https://api.example.com/test",
            headers={"X-Trace": "1"},
            params={"q": "a"},
            timeout=2.5,
            follow_redirects=True,
            json={"name": "Ada"},
        )

    def test_string_body_sent_as_content(self) -> None:
        with patch(
            "api_consumer.client.request.httpx.request",
            return_value=_json_response({}),
        ) as mock_request:
            execute_request(_prepared(method="PUT", data="raw body"))

        kwargs = mock_request.call_args.kwargs
        assert kwargs["content"] == "raw body"
        assert "json" not in kwargs

    def test_text_body(self) -> None:
        with patch(
            "api_consumer.client.request.httpx.request",
            return_value=_text_response("<html>hi</html>"),
        ):
            result = execute_request(_prepared())
        assert result.data == "<html>hi</html>"

    def test_wire_form_uses_status_text_alias(self) -> None:
        with patch(
            "api_consumer.client.request.httpx.request",
            return_value=_json_response({"ok": True}),
        ):
            result = execute_request(_prepared())
        dumped = result.model_dump(mode="json", by_alias=True)
        assert dumped["statusText"] == "OK"
        assert dumped["data"] == {"ok": True}

    @pytest.mark.parametrize(
        ("status", "exc_type"),
        [
            (401, AuthError),
            (403, AuthError),
            (404, NotFoundError),
            (400, ServerError),
            (422, ServerError),
            (500, ServerError),
            (503, ServerError),
        ],
    )
    def test_error_status_mapping(self, status: int, exc_type: type) -> None:
        with patch(
            "api_consumer.client.request.httpx.request",
            return_value=_json_response({"message": "nope"}, status_code=status),
        ):
            with pytest.raises(exc_type) as exc_info:
                execute_request(_prepared())
        assert str(exc_info.value) == f"HTTP {status}: nope"

    def test_error_message_from_text_body(self) -> None:
        with patch(
            "api_consumer.client.request.httpx.request",
            return_value=_text_response("Bad Gateway", status_code=502),
        ):
            with pytest.raises(ServerError, match="HTTP 502: Bad Gateway"):
                execute_request(_prepared())

    def test_timeout_maps_to_connection_error(self) -> None:
        with patch(
            "api_consumer.client.request.httpx.request",
            side_effect=httpx.ReadTimeout("timed out"),
        ):
            with pytest.raises(ConnectionError_, match="timed out after 1000 ms"):
                execute_request(_prepared(timeout=1000))

    def test_network_error_maps_to_connection_error(self) -> None:
        with patch(
            "api_consumer.client.request.httpx.request",
            side_effect=httpx.ConnectError("Connection refused"),
        ) as mock_request:
            with pytest.raises(ConnectionError_, match="Connection refused"):
                execute_request(_prepared())
        assert mock_request.call_count == 1


# ---------------------------------------------------------------------------
# extract_response_data
# ---------------------------------------------------------------------------


class TestExtractResponseData:
    def test_json(self) -> None:
        assert extract_response_data(_json_response([1, 2])) == [1, 2]

    def test_text(self) -> None:
        assert extract_response_data(_text_response("plain")) == "plain"

    def test_empty_body(self) -> None:
        response = httpx.Response(
            status_code=204, request=httpx.Request("DELETE", "https://x.io")
        )
        assert extract_response_data(response) is None
