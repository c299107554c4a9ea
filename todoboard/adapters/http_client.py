"""
Adapter for the HTTP client library (httpx) used by the command-line client.
Keeps httpx imports in one place.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

HTTPError = httpx.HTTPError
HTTPStatusError = httpx.HTTPStatusError
RequestError = httpx.RequestError


class HTTPResponse:
    """Thin wrapper over an httpx response."""

    def __init__(self, response: httpx.Response):
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def is_success(self) -> bool:
        return self._response.is_success

    def raise_for_status(self) -> None:
        self._response.raise_for_status()

    def json(self) -> Any:
        return self._response.json()

    @property
    def content(self) -> bytes:
        return self._response.content

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._response.headers)


class HTTPClientAdapter(ABC):
    """Abstract adapter for HTTP client operations."""

    @abstractmethod
    def request(self, method: str, url: str, **kwargs) -> HTTPResponse:
        """Send a request with any method."""

    def get(self, url: str, **kwargs) -> HTTPResponse:
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs) -> HTTPResponse:
        return self.request("POST", url, **kwargs)

    def put(self, url: str, **kwargs) -> HTTPResponse:
        return self.request("PUT", url, **kwargs)

    def delete(self, url: str, **kwargs) -> HTTPResponse:
        return self.request("DELETE", url, **kwargs)


class HttpxClientAdapter(HTTPClientAdapter):
    """httpx implementation of HTTPClientAdapter."""

    def __init__(self, timeout: Optional[float] = None, **kwargs):
        self._client = httpx.Client(timeout=timeout, **kwargs)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._client.close()

    def request(self, method: str, url: str, **kwargs) -> HTTPResponse:
        return HTTPResponse(self._client.request(method, url, **kwargs))

    def close(self):
        self._client.close()


class HTTPClientAdapterFactory:
    """Factory for creating HTTP client adapters."""

    @staticmethod
    def create_client(timeout: Optional[float] = None, **kwargs) -> HTTPClientAdapter:
        return HttpxClientAdapter(timeout=timeout, **kwargs)
