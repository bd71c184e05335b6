"""HTTP gateway used to talk to the release API."""

from ghrel.http.client import (
    HttpCall,
    HttpClient,
    HttpResponse,
    MockHttpClient,
    RealHttpClient,
)

__all__ = [
    "HttpCall",
    "HttpClient",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
]
