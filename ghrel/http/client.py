"""Minimal synchronous HTTP gateway.

This module provides:
- HttpClient: Protocol for a single blocking request (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing

Any HTTP status is a response, not an error: callers decide which statuses
they accept. Only transport failures produce ``NetworkError``. There is no
retry and no connection reuse.
"""

from __future__ import annotations

import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from ghrel import __version__
from ghrel.core.result import Err, Ok, Result
from ghrel.release.errors import NetworkError

__all__ = [
    "HttpCall",
    "HttpClient",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
]


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Status code and decoded body of a completed request."""

    status: int
    body: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations."""

    def request(
        self,
        url: str,
        method: str,
        body: bytes = b"",
        headers: Mapping[str, str] | None = None,
    ) -> Result[HttpResponse, NetworkError]:
        """Send one request and wait for the complete response.

        Args:
            url: Absolute URL
            method: HTTP method ("GET", "POST", ...)
            body: Raw request body
            headers: Extra request headers

        Returns:
            Ok(HttpResponse) for any status, Err(NetworkError) on transport failure
        """
        ...


class RealHttpClient:
    """HTTP client on urllib.

    Opens a fresh connection for every call. ``timeout=None`` blocks without
    limit; callers are expected to pass one.
    """

    def __init__(
        self,
        timeout: float | None = None,
        user_agent: str = f"ghrel/{__version__}",
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def request(
        self,
        url: str,
        method: str,
        body: bytes = b"",
        headers: Mapping[str, str] | None = None,
    ) -> Result[HttpResponse, NetworkError]:
        req_headers = {"User-Agent": self.user_agent, **(headers or {})}
        try:
            req = urllib.request.Request(
                url,
                data=body if method.upper() != "GET" else None,
                headers=req_headers,
                method=method.upper(),
            )
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(HttpResponse(status=response.status, body=_decode(response.read())))
        except urllib.error.HTTPError as e:
            # Error statuses still carry a meaningful response.
            payload = e.read() if e.fp is not None else b""
            return Ok(HttpResponse(status=e.code, body=_decode(payload)))
        except urllib.error.URLError as e:
            return Err(NetworkError(url=url, message=str(e.reason)))
        except TimeoutError:
            return Err(NetworkError(url=url, message=f"request timed out after {self.timeout}s"))
        except ValueError as e:
            return Err(NetworkError(url=url, message=str(e)))
        except OSError as e:
            return Err(NetworkError(url=url, message=str(e)))


def _decode(payload: bytes) -> str:
    return payload.decode("utf-8", errors="replace")


@dataclass(frozen=True, slots=True)
class HttpCall:
    """A request recorded by MockHttpClient."""

    method: str
    url: str
    body: bytes
    headers: dict[str, str]


def _empty_calls() -> list[HttpCall]:
    return []


def _empty_routes() -> dict[tuple[str, str], list[HttpResponse | NetworkError]]:
    return {}


@dataclass
class MockHttpClient:
    """Mock HTTP client for testing.

    Responses are queued per (method, url); the last queued response is
    reused once the queue is down to one entry. Unknown routes answer 404.

    Usage:
        client = MockHttpClient()
        client.respond("POST", "https://api.example.com/x", 201, '{"ok": true}')
        client.request("https://api.example.com/x", "POST", b"{}")
        assert client.calls[0].body == b"{}"
    """

    calls: list[HttpCall] = field(default_factory=_empty_calls)
    _routes: dict[tuple[str, str], list[HttpResponse | NetworkError]] = field(
        default_factory=_empty_routes
    )

    def respond(self, method: str, url: str, status: int, body: str = "") -> None:
        """Queue a response for (method, url)."""
        self._routes.setdefault((method.upper(), url), []).append(
            HttpResponse(status=status, body=body)
        )

    def fail(self, method: str, url: str, message: str = "connection refused") -> None:
        """Queue a transport failure for (method, url)."""
        self._routes.setdefault((method.upper(), url), []).append(
            NetworkError(url=url, message=message)
        )

    def request(
        self,
        url: str,
        method: str,
        body: bytes = b"",
        headers: Mapping[str, str] | None = None,
    ) -> Result[HttpResponse, NetworkError]:
        self.calls.append(
            HttpCall(method=method.upper(), url=url, body=body, headers=dict(headers or {}))
        )

        queue = self._routes.get((method.upper(), url))
        if not queue:
            return Ok(HttpResponse(status=404, body='{"message": "Not Found (mock)"}'))

        outcome = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(outcome, NetworkError):
            return Err(outcome)
        return Ok(outcome)

    def calls_to(self, url: str, method: str = "POST") -> list[HttpCall]:
        """Recorded calls matching url and method."""
        return [c for c in self.calls if c.url == url and c.method == method.upper()]
