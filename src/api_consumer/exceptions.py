"""Exception hierarchy for api-consumer.

All exceptions inherit from :class:`ApiConsumerError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`api_consumer.exit_codes`.
The CLI entry point in :func:`api_consumer.app.main` catches
``ApiConsumerError`` and exits with the appropriate code, and the tool
dispatcher in :mod:`api_consumer.server` turns it into an error result.

Subclass hierarchy::

    ApiConsumerError (exit 1)
    +-- InvalidUsageError        (exit 2)
    +-- AuthError                (exit 3)
    +-- NotFoundError            (exit 4)
    +-- ServerError              (exit 5)
    +-- ConnectionError_         (exit 6)
    +-- ConfigError              (exit 1)
    +-- OpenAPIImportError       (exit 7)
        +-- DocumentParseError
        +-- SpecValidationError

The import family mirrors the three ways an import can fail: the source could
not be acquired (:class:`OpenAPIImportError` itself), the text could not be
deserialized (:class:`DocumentParseError`), or the document lacks mandatory
fields (:class:`SpecValidationError`).
"""

from __future__ import annotations

from typing import Optional

from api_consumer.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SERVER_ERROR,
    EXIT_SPEC_IMPORT_ERROR,
)


class ApiConsumerError(Exception):
    """Base exception for all api-consumer errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`api_consumer.exit_codes`.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ApiConsumerError):
    """Raised for invalid CLI arguments or malformed tool arguments."""

    exit_code = EXIT_INVALID_USAGE


class AuthError(ApiConsumerError):
    """Raised when the remote API answers HTTP 401 or 403."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(ApiConsumerError):
    """Raised when the remote API answers HTTP 404."""

    exit_code = EXIT_NOT_FOUND


class ServerError(ApiConsumerError):
    """Raised when the remote API answers any other 4xx or a 5xx status."""

    exit_code = EXIT_SERVER_ERROR


class ConnectionError_(ApiConsumerError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ConfigError(ApiConsumerError):
    """Raised for configuration problems (invalid JSON, out-of-range values)."""

    exit_code = EXIT_GENERIC_FAILURE


class OpenAPIImportError(ApiConsumerError):
    """Raised when an OpenAPI document cannot be imported.

    Used directly for acquisition failures (missing file, HTTP error,
    connection refused). The lower-level exception is kept both as
    ``__cause__`` (via ``raise ... from``) and as :attr:`cause`.

    Args:
        message: Human-readable error description naming the source.
        cause: The underlying exception, if any.
    """

    exit_code = EXIT_SPEC_IMPORT_ERROR

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class DocumentParseError(OpenAPIImportError):
    """Raised when raw text cannot be deserialized as JSON or YAML."""


class SpecValidationError(OpenAPIImportError):
    """Raised when a document lacks mandatory top-level fields.

    Args:
        message: Summary message.
        errors: Every violation found, in check order.
    """

    def __init__(self, message: str, errors: list[str]):
        super().__init__(message)
        self.errors = list(errors)

    def __str__(self) -> str:
        if not self.errors:
            return self.message
        return self.message + ": " + "; ".join(self.errors)
