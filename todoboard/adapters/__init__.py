"""
Adapters around third-party client libraries.
"""
from todoboard.adapters.http_client import (
    HTTPClientAdapter,
    HTTPClientAdapterFactory,
    HTTPError,
    HTTPResponse,
    HTTPStatusError,
    HttpxClientAdapter,
    RequestError,
)

__all__ = [
    "HTTPClientAdapter",
    "HTTPClientAdapterFactory",
    "HTTPError",
    "HTTPResponse",
    "HTTPStatusError",
    "HttpxClientAdapter",
    "RequestError",
]
