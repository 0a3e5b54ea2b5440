"""OpenAPI importer -- acquire, parse, validate, and extract specifications.

This sub-package turns an OpenAPI 3.x document (JSON or YAML, local file or
remote URL) into an :class:`~api_consumer.models.OpenAPISpecification`.

Typical usage::

    from api_consumer.parser import import_from_file, import_from_url

    spec = import_from_file("petstore.yaml")
    spec = import_from_url("https://petstore3.swagger.io/api/v3/openapi.json")

Sub-modules:

* :mod:`~api_consumer.parser.loader` -- I/O and JSON/YAML deserialization.
* :mod:`~api_consumer.parser.validator` -- presence/shape checks of the
  mandatory top-level fields.
* :mod:`~api_consumer.parser.extractor` -- walks the validated tree and
  builds the normalized model.
* :mod:`~api_consumer.parser.importer` -- the two entry points and their
  error-wrapping policy.
"""

from api_consumer.parser.extractor import extract_specification
from api_consumer.parser.importer import import_from_file, import_from_url
from api_consumer.parser.validator import validate_spec

__all__ = [
    "import_from_file",
    "import_from_url",
    "validate_spec",
    "extract_specification",
]
