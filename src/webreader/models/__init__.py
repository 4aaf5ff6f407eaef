"""Webreader configuration and result models."""

from .config import (
    DEFAULT_ACCEPT,
    DEFAULT_USER_AGENT,
    ByteSize,
    NetworkConfig,
    ReaderConfig,
)
from .results import (
    ContentClassification,
    ConversionContext,
    DetectionMethod,
    FetchResult,
    MarkdownResult,
    PlainOrMarkdown,
    RequiresExtraction,
)

__all__ = [
    # Config
    "DEFAULT_ACCEPT",
    "DEFAULT_USER_AGENT",
    "ByteSize",
    "NetworkConfig",
    "ReaderConfig",
    # Results
    "ContentClassification",
    "ConversionContext",
    "DetectionMethod",
    "FetchResult",
    "MarkdownResult",
    "PlainOrMarkdown",
    "RequiresExtraction",
]
