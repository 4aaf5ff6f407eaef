"""Protocol definitions for content conversion."""

from typing import Protocol

from bs4 import Tag

from ..models.results import ConversionContext


class ContentExtractor(Protocol):
    """
    Protocol for selecting the main content of an HTML document.

    Implementations must always return a node, falling back to the whole
    document rather than raising on unusual page structure.
    """

    def extract(self, html: str) -> Tag:
        """
        Extract the main content node from HTML.

        Args:
            html: HTML document or fragment

        Returns:
            Node holding the main content
        """
        ...


class MarkdownConverter(Protocol):
    """
    Protocol for converting an HTML subtree to Markdown.

    Implementations resolve relative links and images against
    ctx.source_url and never raise.
    """

    def convert(self, node: Tag, ctx: ConversionContext) -> str:
        """
        Convert an HTML subtree to Markdown.

        Args:
            node: Root of the subtree to convert
            ctx: Conversion context carrying the source URL

        Returns:
            Markdown string
        """
        ...
