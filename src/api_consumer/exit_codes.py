"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~api_consumer.exceptions.ApiConsumerError` subclass.
Shell wrappers can inspect the exit code of ``api-consumer import`` to tell a
broken spec apart from an unreachable one without parsing stderr.

Example::

    $ api-consumer import broken.yaml
    $ echo $?
    7   # EXIT_SPEC_IMPORT_ERROR -- the document could not be imported
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_AUTH_FAILURE = 3
"""The remote API rejected the request's credentials (HTTP 401/403)."""

EXIT_NOT_FOUND = 4
"""The requested resource was not found (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The remote API returned an error status (other 4xx, or 5xx)."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_SPEC_IMPORT_ERROR = 7
"""The OpenAPI document could not be acquired, parsed, or validated."""
