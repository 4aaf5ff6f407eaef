"""WebReader: fetch one URL and return its main content as Markdown."""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType

from ..http import AsyncHttpClient, HttpClient, TransportTimeout
from ..models.config import ReaderConfig
from ..models.results import FetchResult, MarkdownResult
from ..pipeline import ReaderPipeline

logger = logging.getLogger(__name__)


class WebReader:
    """
    Primary API for webreader.

    Fetches a URL once (no retries), then classifies the body and either
    returns it unchanged or extracts and converts the main HTML content.

    Only transport failures are raised, as TransportError subclasses.
    Cancelling the awaiting task cancels the fetch; no processing happens
    on a partial body.

    Example:
        async with WebReader() as reader:
            result = await reader.read("https://example.com/blog/post")
            print(result.markdown)
    """

    def __init__(
        self,
        config: ReaderConfig | None = None,
        http_client: HttpClient | None = None,
        pipeline: ReaderPipeline | None = None,
    ):
        """
        Initialize the reader.

        Args:
            config: Reader configuration (defaults if None)
            http_client: HTTP client to use instead of an AsyncHttpClient
                         built from config. Its lifecycle stays with the caller.
            pipeline: Read pipeline (default extractor and converter if None)
        """
        self.config = config or ReaderConfig()
        self._pipeline = pipeline or ReaderPipeline()
        self._http_client: HttpClient | None = http_client
        self._owned_client: AsyncHttpClient | None = None

    async def __aenter__(self) -> WebReader:
        """Enter async context and open the HTTP session."""
        if self._http_client is None:
            network = self.config.network
            self._owned_client = AsyncHttpClient(
                user_agent=network.user_agent,
                accept=network.accept,
                default_timeout=network.timeout,
                verify_ssl=network.verify_ssl,
                max_content_size=network.max_content_size,
            )
            await self._owned_client.__aenter__()
            self._http_client = self._owned_client
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close the HTTP session if we own it."""
        if self._owned_client is not None:
            await self._owned_client.__aexit__(exc_type, exc_val, exc_tb)
            self._owned_client = None
            self._http_client = None

    async def fetch(self, url: str) -> FetchResult:
        """
        Fetch a URL within the configured timeout.

        Args:
            url: Absolute http(s) URL

        Returns:
            FetchResult with the decoded body and the final URL

        Raises:
            TransportError subclasses on failure
        """
        if self._http_client is None:
            raise RuntimeError("Reader not initialized. Use 'async with' context manager.")

        timeout = self.config.network.timeout
        try:
            response = await asyncio.wait_for(self._http_client.get(url, timeout=timeout), timeout=timeout)
        except asyncio.TimeoutError as e:
            raise TransportTimeout(url, timeout) from e

        return FetchResult(
            body=response.text,
            content_type=response.content_type,
            source_url=response.url or url,
        )

    async def read(self, url: str) -> MarkdownResult:
        """
        Fetch a URL and convert it to Markdown.

        Args:
            url: Absolute http(s) URL

        Returns:
            MarkdownResult with the Markdown and detection metadata

        Raises:
            TransportError subclasses on failure
        """
        logger.info(f"Reading {url}")
        fetch = await self.fetch(url)
        result = self._pipeline.process(fetch)
        logger.info(
            f"Read {fetch.source_url}: {len(result.markdown)} bytes of Markdown "
            f"({result.detection_method.value})"
        )
        return result


def read_blocking(url: str, **kwargs: object) -> MarkdownResult:
    """
    Blocking read of a single URL.

    This is a convenience wrapper for sync code that can't use async/await.

    WARNING: Do not call from within an existing event loop (e.g., Jupyter,
    asyncio-based frameworks). Use the async WebReader API instead.

    Args:
        url: The URL to read
        **kwargs: Config options passed to ReaderConfig

    Returns:
        MarkdownResult for the URL
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        raise RuntimeError("read_blocking() called from async context. Use 'async with WebReader()' instead.")

    config = ReaderConfig(**kwargs)  # type: ignore[arg-type]

    async def run() -> MarkdownResult:
        async with WebReader(config) as reader:
            return await reader.read(url)

    return asyncio.run(run())
