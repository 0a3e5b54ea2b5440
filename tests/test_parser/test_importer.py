"""Tests for the import facade (api_consumer.parser.importer)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import httpx
import pytest

from api_consumer.exceptions import (
    DocumentParseError,
    OpenAPIImportError,
    SpecValidationError,
)
from api_consumer.parser import import_from_file, import_from_url


def _url_response(
    body: bytes,
    url: str = "https://example.com/openapi.json",
    status_code: int = 200,
    content_type: str = "application/json",
) -> httpx.Response:
    return httpx.Response(
        status_code=status_code,
        content=body,
        headers={"content-type": content_type},
        request=httpx.Request("GET", url),
    )


# ---------------------------------------------------------------------------
# import_from_file
# ---------------------------------------------------------------------------


class TestImportFromFile:
    def test_imports_json(self, petstore_json_path: Path) -> None:
        spec = import_from_file(str(petstore_json_path))
        assert spec.info.title == "Petstore API"
        assert len(spec.endpoints) == 4

    def test_yaml_and_json_give_the_same_result(
        self, petstore_json_path: Path, petstore_yaml_path: Path
    ) -> None:
        from_json = import_from_file(str(petstore_json_path))
        from_yaml = import_from_file(str(petstore_yaml_path))
        assert from_yaml.to_dict() == from_json.to_dict()

    def test_uppercase_yaml_suffix(self, tmp_path: Path, petstore_yaml_path: Path) -> None:
        path = tmp_path / "SPEC.YML"
        path.write_text(petstore_yaml_path.read_text(encoding="utf-8"), encoding="utf-8")
        assert import_from_file(str(path)).info.version == "1.0.0"

    def test_yaml_content_with_json_suffix_fails_to_parse(
        self, tmp_path: Path, petstore_yaml_path: Path
    ) -> None:
        path = tmp_path / "spec.json"
        path.write_text(petstore_yaml_path.read_text(encoding="utf-8"), encoding="utf-8")
        with pytest.raises(DocumentParseError):
            import_from_file(str(path))

    def test_missing_file_is_wrapped(self, tmp_path: Path) -> None:
        path = tmp_path / "nope.json"
        with pytest.raises(OpenAPIImportError) as exc_info:
            import_from_file(str(path))

        exc = exc_info.value
        assert type(exc) is OpenAPIImportError
        assert exc.message == f"Failed to import OpenAPI spec from file: {path}"
        assert isinstance(exc.cause, FileNotFoundError)
        assert exc.__cause__ is exc.cause

    def test_validation_error_propagates_unchanged(self, tmp_path: Path) -> None:
        path = tmp_path / "spec.json"
        path.write_text(json.dumps({"openapi": "3.0.0", "info": {"title": "T"}}))
        with pytest.raises(SpecValidationError) as exc_info:
            import_from_file(str(path))
        assert exc_info.value.errors == [
            "Missing required field: info.version",
            "Missing required field: paths",
        ]

    def test_parse_error_propagates_unchanged(self, tmp_path: Path) -> None:
        path = tmp_path / "spec.json"
        path.write_text("{broken")
        with pytest.raises(DocumentParseError) as exc_info:
            import_from_file(str(path))
        assert exc_info.value.message == "Failed to parse document"

    def test_extraction_failure_is_wrapped(self, tmp_path: Path) -> None:
        document = {
            "openapi": "3.0.0",
            "info": {"title": "T", "version": "1"},
            "paths": {"/x": {"get": {"parameters": [{"name": "a", "in": "body"}]}}},
        }
        path = tmp_path / "spec.json"
        path.write_text(json.dumps(document))
        with pytest.raises(OpenAPIImportError) as exc_info:
            import_from_file(str(path))
        assert isinstance(exc_info.value.cause, ValueError)

    def test_reference_objects_are_imported(self, tmp_path: Path) -> None:
        document = {
            "openapi": "3.0.0",
            "info": {"title": "T", "version": "1"},
            "paths": {
                "/pets": {
                    "post": {
                        "parameters": [{"$ref": "#/components/parameters/Limit"}],
                        "requestBody": {"$ref": "#/components/requestBodies/Pet"},
                        "responses": {"201": {"$ref": "#/components/responses/Created"}},
                    }
                }
            },
            "components": {
                "parameters": {"Limit": {"name": "limit", "in": "query"}},
            },
        }
        path = tmp_path / "spec.json"
        path.write_text(json.dumps(document))

        endpoint = import_from_file(str(path)).endpoints[0]
        assert endpoint.parameters[0].ref == "#/components/parameters/Limit"
        assert endpoint.request_body is not None
        assert endpoint.request_body.ref == "#/components/requestBodies/Pet"
        assert endpoint.responses[0].ref == "#/components/responses/Created"

    def test_yaml_scalars_become_strings(self, tmp_path: Path) -> None:
        path = tmp_path / "spec.yaml"
        path.write_text(
            "openapi: 3.0.0\n"
            "info:\n"
            "  title: T\n"
            "  version: 1.0\n"
            "paths:\n"
            "  /x:\n"
            "    get:\n"
            "      operationId: 123\n"
            "      summary: 2024-01-01\n"
            "      parameters:\n"
            "        - name: since\n"
            "          in: query\n"
            "          description: 2024-01-01\n",
            encoding="utf-8",
        )

        spec = import_from_file(str(path))
        endpoint = spec.endpoints[0]
        assert spec.info.version == "1.0"
        assert endpoint.operation_id == "123"
        assert endpoint.summary == "2024-01-01"
        assert endpoint.parameters[0].description == "2024-01-01"

    def test_repeated_imports_are_equal(self, petstore_json_path: Path) -> None:
        assert import_from_file(str(petstore_json_path)) == import_from_file(
            str(petstore_json_path)
        )


# ---------------------------------------------------------------------------
# import_from_url
# ---------------------------------------------------------------------------


class TestImportFromUrl:
    def test_imports_json(self, petstore_json_path: Path) -> None:
        response = _url_response(petstore_json_path.read_bytes())
        with patch("api_consumer.parser.loader.httpx.get", return_value=response) as mock_get:
            spec = import_from_url("https://example.com/openapi.json")

        assert spec.info.title == "Petstore API"
        assert [e.operation_id for e in spec.endpoints] == [
            "listPets",
            "createPet",
            "showPetById",
            "deletePet",
        ]
        mock_get.assert_called_once()

    def test_imports_yaml_by_content_type(
        self, petstore_json_path: Path, petstore_yaml_path: Path
    ) -> None:
        response = _url_response(
            petstore_yaml_path.read_bytes(),
            url="https://example.com/openapi",
            content_type="application/yaml",
        )
        with patch("api_consumer.parser.loader.httpx.get", return_value=response):
            spec = import_from_url("https://example.com/openapi")
        assert spec.to_dict() == import_from_file(str(petstore_json_path)).to_dict()

    def test_http_error_status_is_wrapped(self) -> None:
        url = "https://example.com/openapi.json"
        response = _url_response(b"not found", url=url, status_code=404, content_type="text/plain")
        with patch("api_consumer.parser.loader.httpx.get", return_value=response):
            with pytest.raises(OpenAPIImportError) as exc_info:
                import_from_url(url)

        exc = exc_info.value
        assert type(exc) is OpenAPIImportError
        assert exc.message == f"Failed to import OpenAPI spec from URL: {url}"
        assert isinstance(exc.cause, httpx.HTTPStatusError)

    def test_connection_error_is_wrapped(self) -> None:
        with patch(
            "api_consumer.parser.loader.httpx.get",
            side_effect=httpx.ConnectError("Connection refused"),
        ):
            with pytest.raises(OpenAPIImportError) as exc_info:
                import_from_url("https://unreachable.invalid/spec.json")
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_validation_error_propagates_unchanged(self) -> None:
        body: dict[str, Any] = {"openapi": "3.0.0", "paths": {}}
        response = _url_response(json.dumps(body).encode())
        with patch("api_consumer.parser.loader.httpx.get", return_value=response):
            with pytest.raises(SpecValidationError) as exc_info:
                import_from_url("https://example.com/openapi.json")
        assert exc_info.value.errors == ["Missing required field: info"]

    def test_undecodable_body_raises_parse_error(self) -> None:
        response = _url_response(b"{oops", content_type="application/json")
        with patch("api_consumer.parser.loader.httpx.get", return_value=response):
            with pytest.raises(DocumentParseError):
                import_from_url("https://example.com/openapi.json")
