"""Async HTTP client for single-page reads."""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType

import aiohttp
from charset_normalizer import from_bytes as detect_encoding

from ..models.config import DEFAULT_ACCEPT, DEFAULT_USER_AGENT
from .errors import (
    TransportError,
    TransportHttpError,
    TransportNetworkError,
    TransportOtherError,
    TransportTimeout,
)
from .protocols import HttpResponse

logger = logging.getLogger(__name__)


class AsyncHttpClient:
    """
    Async HTTP client that performs one GET per read.

    Features:
    - Fixed User-Agent and Accept headers
    - Total timeout per request, redirects followed
    - Content size limits to prevent memory exhaustion
    - Encoding detection for bodies without a declared charset
    - Every failure mapped to a TransportError subclass

    TLS certificate validation is disabled unless verify_ssl=True, so that
    self-signed and internal sites can be read. Do not rely on this client
    for confidentiality or integrity of the fetched content.

    Example:
        async with AsyncHttpClient() as client:
            response = await client.get("https://example.com")
            print(response.text)
    """

    MAX_CONTENT_SIZE = 50 * 1024 * 1024  # 50 MB

    def __init__(
        self,
        user_agent: str | None = None,
        accept: str | None = None,
        default_timeout: float = 10.0,
        verify_ssl: bool = False,
        max_content_size: int = MAX_CONTENT_SIZE,
    ) -> None:
        """
        Initialize the HTTP client.

        Args:
            user_agent: Custom User-Agent string
            accept: Custom Accept header
            default_timeout: Default total request timeout in seconds
            verify_ssl: Validate TLS certificates
            max_content_size: Maximum response size in bytes
        """
        self._user_agent = user_agent or DEFAULT_USER_AGENT
        self._accept = accept or DEFAULT_ACCEPT
        self._default_timeout = default_timeout
        self._verify_ssl = verify_ssl
        self._max_content_size = max_content_size

        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> AsyncHttpClient:
        """Enter async context and create session."""
        if self._verify_ssl:
            connector = aiohttp.TCPConnector()
        else:
            logger.warning("TLS certificate verification is disabled for this session")
            connector = aiohttp.TCPConnector(ssl=False)

        self._session = aiohttp.ClientSession(
            connector=connector,
            headers={"User-Agent": self._user_agent, "Accept": self._accept},
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close session."""
        if self._session:
            await self._session.close()
            self._session = None

    def _decode_content(self, content: bytes, content_type: str) -> str:
        """
        Decode content with encoding detection.

        Fallback chain:
        1. Content-Type header charset
        2. charset-normalizer detection
        3. UTF-8 with replacement

        Args:
            content: Raw bytes content
            content_type: Content-Type header value

        Returns:
            Decoded string
        """
        encoding = None
        if content_type:
            for part in content_type.split(";"):
                part = part.strip()
                if part.lower().startswith("charset="):
                    encoding = part.split("=", 1)[1].strip().strip("\"'")
                    break

        if encoding:
            try:
                return content.decode(encoding)
            except (UnicodeDecodeError, LookupError):
                logger.debug(f"Failed to decode with declared encoding: {encoding}")

        if not content:
            return ""

        best_match = detect_encoding(content).best()
        if best_match is not None:
            logger.debug(f"Detected encoding: {best_match.encoding}")
            return str(best_match)

        return content.decode("utf-8", errors="replace")

    async def _read_body(self, response: aiohttp.ClientResponse, url: str) -> bytes:
        content_length = response.headers.get("Content-Length")
        if content_length and content_length.isdigit() and int(content_length) > self._max_content_size:
            raise TransportOtherError(f"Content too large: {content_length} bytes", url)

        content = bytearray()
        async for chunk in response.content.iter_chunked(8192):
            content.extend(chunk)
            if len(content) > self._max_content_size:
                raise TransportOtherError(f"Content size limit exceeded: >{self._max_content_size} bytes", url)
        return bytes(content)

    async def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """
        Perform a single HTTP GET request.

        Args:
            url: The URL to fetch
            timeout: Total request timeout in seconds (uses default if None)
            headers: Optional additional headers

        Returns:
            HttpResponse for a 2xx response

        Raises:
            TransportTimeout: Request exceeded the timeout
            TransportHttpError: Status outside 200-299
            TransportNetworkError: No response received
            TransportOtherError: Anything else
        """
        if self._session is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        timeout_val = timeout or self._default_timeout

        try:
            async with self._session.get(
                url,
                timeout=aiohttp.ClientTimeout(total=timeout_val),
                headers=headers,
                allow_redirects=True,
            ) as response:
                if not 200 <= response.status < 300:
                    raise TransportHttpError(response.status, url)

                content = await self._read_body(response, url)
                content_type = response.headers.get("Content-Type", "")

                logger.debug(f"Fetched {url}: {len(content)} bytes ({content_type or 'no content type'})")

                return HttpResponse(
                    status_code=response.status,
                    content=content,
                    text=self._decode_content(content, content_type),
                    content_type=content_type,
                    headers=dict(response.headers),
                    url=str(response.url),
                )

        except TransportError:
            raise

        except asyncio.TimeoutError as e:
            logger.error(f"Timeout fetching {url} after {timeout_val}s")
            raise TransportTimeout(url, timeout_val) from e

        except aiohttp.InvalidURL as e:
            raise TransportOtherError(f"Invalid URL: {e}", url) from e

        except aiohttp.TooManyRedirects as e:
            raise TransportOtherError(f"Too many redirects: {e}", url) from e

        except aiohttp.ClientResponseError as e:
            raise TransportHttpError(e.status, url) from e

        except (aiohttp.ClientConnectionError, OSError) as e:
            logger.error(f"Network error fetching {url}: {e}")
            raise TransportNetworkError(f"Network error - no response received: {e}", url) from e

        except (aiohttp.ClientError, ValueError) as e:
            logger.error(f"HTTP fetch error for {url}: {e}")
            raise TransportOtherError(str(e), url) from e
