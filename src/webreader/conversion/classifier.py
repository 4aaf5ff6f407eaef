"""Classification of fetched bodies as Markdown/plain text or HTML."""

import logging
import re

from ..models.results import (
    ContentClassification,
    DetectionMethod,
    PlainOrMarkdown,
    RequiresExtraction,
)

logger = logging.getLogger(__name__)

# Content types returned as-is (prefix match, parameters ignored)
PASSTHROUGH_CONTENT_TYPES = ("text/plain", "text/markdown")

# "# Title" anywhere in the body, not only on the first line
ATX_HEADING_PATTERN = re.compile(r"^[ \t]*#{1,6}\s", re.MULTILINE)

# A line of === or --- (the non-blank line above it is checked separately,
# so minified single-line HTML is scanned in linear time)
SETEXT_UNDERLINE_PATTERN = re.compile(r"^(?:={3,}|-{3,})[ \t]*$", re.MULTILINE)


def has_setext_heading(text: str) -> bool:
    """Check for a non-blank line directly followed by a === or --- underline."""
    for match in SETEXT_UNDERLINE_PATTERN.finditer(text):
        newline = match.start() - 1
        if newline < 0:
            continue
        previous_line = text[text.rfind("\n", 0, newline) + 1 : newline]
        if previous_line.strip():
            return True
    return False


def is_passthrough_content_type(content_type: str) -> bool:
    """Check if the Content-Type marks the body as plain text or Markdown."""
    if not content_type:
        return False
    return content_type.strip().lower().startswith(PASSTHROUGH_CONTENT_TYPES)


def looks_like_markdown(body: str) -> bool:
    """
    Check whether a body looks like a Markdown document.

    Matches ATX headings ("## Title") or setext headings ("Title" over
    "=====") on any line of the body.
    """
    if not body:
        return False

    trimmed = body.strip()
    if not trimmed:
        return False

    trimmed = trimmed.replace("\r\n", "\n").replace("\r", "\n")
    return ATX_HEADING_PATTERN.search(trimmed) is not None or has_setext_heading(trimmed)


def classify(body: str, content_type: str) -> ContentClassification:
    """
    Decide whether a body can be returned as-is or needs HTML extraction.

    Args:
        body: Decoded response body
        content_type: Content-Type header value

    Returns:
        PlainOrMarkdown with the detection method, or RequiresExtraction
    """
    body = body or ""

    if is_passthrough_content_type(content_type):
        logger.debug(f"Passing through {content_type!r} body unchanged")
        return PlainOrMarkdown(body=body, method=DetectionMethod.RAW)

    if looks_like_markdown(body):
        logger.debug("Body detected as Markdown by heading heuristic")
        return PlainOrMarkdown(body=body, method=DetectionMethod.MARKDOWN_HEURISTIC)

    return RequiresExtraction(html=body)
