"""Transport seam: the response shape and the client protocol WebReader depends on."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class HttpResponse:
    """
    A successful (2xx) response, already decoded.

    Attributes:
        status_code: Final HTTP status
        content: Body bytes as received
        text: Body decoded to str (declared charset, detected, or UTF-8)
        content_type: Raw Content-Type header, "" when absent
        headers: Response headers
        url: URL the body came from, after redirects
    """

    status_code: int
    content: bytes
    text: str
    content_type: str
    headers: dict[str, str]
    url: str


class HttpClient(Protocol):
    """
    Anything WebReader can fetch through.

    AsyncHttpClient is the default; tests and embedding hosts pass their own.
    """

    async def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """
        Fetch a URL once.

        Args:
            url: Absolute URL
            timeout: Total time allowed in seconds (client default if None)
            headers: Extra request headers

        Returns:
            HttpResponse for a 2xx response

        Raises:
            TransportError subclasses on failure
        """
        ...
