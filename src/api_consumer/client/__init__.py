"""HTTP client module for api-consumer.

Builds and sends the one-shot HTTP requests behind the ``create_request``
and ``execute_request`` tools, wrapping :mod:`httpx`.

Example::

    from api_consumer.client import create_request, execute_request
    from api_consumer.models import RequestConfig

    request = create_request(RequestConfig(method="GET", url="https://api.example.com/users"))
    response = execute_request(request)
"""

from api_consumer.client.request import create_request, execute_request

__all__ = ["create_request", "execute_request"]
