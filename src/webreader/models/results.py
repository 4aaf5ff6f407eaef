"""Value types passed between the read pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class DetectionMethod(str, Enum):
    """How the final Markdown was obtained from the fetched body."""

    RAW = "raw"
    MARKDOWN_HEURISTIC = "markdown-heuristic"
    HTML_EXTRACTED = "html-extracted"


@dataclass(frozen=True)
class FetchResult:
    """
    Immutable result of a single fetch.

    Attributes:
        body: Decoded response body
        content_type: Content-Type header value (may be empty)
        source_url: Final URL after redirects, used for absolutization
    """

    body: str
    content_type: str
    source_url: str


@dataclass(frozen=True)
class PlainOrMarkdown:
    """Body is already plain text or Markdown and is returned unchanged."""

    body: str
    method: DetectionMethod = DetectionMethod.RAW


@dataclass(frozen=True)
class RequiresExtraction:
    """Body is HTML and needs main-content extraction and conversion."""

    html: str


ContentClassification = Union[PlainOrMarkdown, RequiresExtraction]


@dataclass(frozen=True)
class ConversionContext:
    """Read-only state shared by one conversion pass."""

    source_url: str


@dataclass(frozen=True)
class MarkdownResult:
    """
    Final output of the read pipeline.

    Attributes:
        markdown: The Markdown text
        content_type: Content-Type reported by the server
        detection_method: How the body was classified
        source_url: Final URL the content was read from
    """

    markdown: str
    content_type: str
    detection_method: DetectionMethod
    source_url: str

    def to_dict(self) -> dict:
        """Convert result to dictionary for serialization."""
        return {
            "markdown": self.markdown,
            "content_type": self.content_type,
            "detection_method": self.detection_method.value,
            "source_url": self.source_url,
        }
