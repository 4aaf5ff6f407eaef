"""HTTP transport for webreader."""

from .client import AsyncHttpClient
from .errors import (
    TransportError,
    TransportHttpError,
    TransportNetworkError,
    TransportOtherError,
    TransportTimeout,
)
from .protocols import HttpClient, HttpResponse

__all__ = [
    "AsyncHttpClient",
    "HttpClient",
    "HttpResponse",
    "TransportError",
    "TransportHttpError",
    "TransportNetworkError",
    "TransportOtherError",
    "TransportTimeout",
]
