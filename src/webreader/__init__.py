"""
webreader - Read a web page and return its main content as Markdown.

Usage:
    from webreader import WebReader

    async with WebReader() as reader:
        result = await reader.read("https://example.com/blog/post")
        print(result.markdown)
"""

__version__ = "0.1.0"

from .core.reader import WebReader, read_blocking
from .http import (
    TransportError,
    TransportHttpError,
    TransportNetworkError,
    TransportOtherError,
    TransportTimeout,
)
from .models.config import NetworkConfig, ReaderConfig
from .models.results import DetectionMethod, FetchResult, MarkdownResult
from .pipeline import ReaderPipeline

__all__ = [
    "__version__",
    # Core
    "WebReader",
    "read_blocking",
    "ReaderPipeline",
    # Config
    "ReaderConfig",
    "NetworkConfig",
    # Results
    "DetectionMethod",
    "FetchResult",
    "MarkdownResult",
    # Errors
    "TransportError",
    "TransportHttpError",
    "TransportNetworkError",
    "TransportOtherError",
    "TransportTimeout",
]
