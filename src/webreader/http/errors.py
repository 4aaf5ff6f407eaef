"""Transport failures surfaced to callers of WebReader.read()."""

from typing import Optional


class TransportError(Exception):
    """
    Base class for fetch failures.

    Attributes:
        url: The URL that was being fetched
    """

    kind = "transport_error"

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class TransportTimeout(TransportError):
    """Fetch did not complete within the configured timeout."""

    kind = "timeout"

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None):
        if timeout is not None:
            message = f"Request timeout after {timeout:g} seconds"
        else:
            message = "Request timeout"
        super().__init__(message, url)
        self.timeout = timeout


class TransportHttpError(TransportError):
    """Server responded with a status outside 200-299."""

    kind = "http_error"

    def __init__(self, status_code: int, url: Optional[str] = None):
        super().__init__(f"HTTP {status_code}", url)
        self.status_code = status_code


class TransportNetworkError(TransportError):
    """No response was received (DNS, refused connection, TLS failure)."""

    kind = "network_error"

    def __init__(self, message: str = "Network error - no response received", url: Optional[str] = None):
        super().__init__(message, url)


class TransportOtherError(TransportError):
    """Any other fetch failure; the original exception is the __cause__."""

    kind = "other_error"
