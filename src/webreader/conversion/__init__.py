"""Content conversion for webreader (classification, extraction, HTML to Markdown)."""

from .classifier import (
    ATX_HEADING_PATTERN,
    PASSTHROUGH_CONTENT_TYPES,
    SETEXT_UNDERLINE_PATTERN,
    classify,
    has_setext_heading,
    looks_like_markdown,
)
from .extractor import MAIN_CONTENT_SELECTORS, MainContentExtractor, extract_main, parse_html
from .markdown import HtmlToMarkdown, PageMarkdownConverter, normalize_markdown, to_markdown
from .protocols import ContentExtractor, MarkdownConverter
from .urls import absolutize

__all__ = [
    # Protocols
    "ContentExtractor",
    "MarkdownConverter",
    # Classification
    "ATX_HEADING_PATTERN",
    "PASSTHROUGH_CONTENT_TYPES",
    "SETEXT_UNDERLINE_PATTERN",
    "classify",
    "has_setext_heading",
    "looks_like_markdown",
    # Extraction
    "MAIN_CONTENT_SELECTORS",
    "MainContentExtractor",
    "extract_main",
    "parse_html",
    # Markdown
    "HtmlToMarkdown",
    "PageMarkdownConverter",
    "normalize_markdown",
    "to_markdown",
    # URLs
    "absolutize",
]
