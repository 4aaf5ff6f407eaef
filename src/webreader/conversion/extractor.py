"""Main content extraction from HTML pages."""

import logging
from typing import Optional

from bs4 import BeautifulSoup, NavigableString, ParserRejectedMarkup, Tag

logger = logging.getLogger(__name__)

# Tried in order, first match wins. Ids before tag names before class
# names, with body as the last resort.
MAIN_CONTENT_SELECTORS = (
    "#main-col-body",
    "#main-content",
    "article",
    "main",
    ".article",
    ".post",
    ".content",
    "body",
)


def parse_html(html: str) -> BeautifulSoup:
    """
    Parse HTML into a document tree, tolerating malformed markup.

    If the parser rejects the markup entirely, the raw text becomes the
    only node of an otherwise empty document.
    """
    try:
        return BeautifulSoup(html or "", "html.parser")
    except ParserRejectedMarkup as e:
        logger.warning(f"HTML parser rejected markup, treating body as text: {e}")
        soup = BeautifulSoup("", "html.parser")
        soup.append(NavigableString(html))
        return soup


class MainContentExtractor:
    """
    Selects the subtree holding the primary readable content.

    The returned node stays attached to its parsed document, so its
    parent chain is still navigable.

    Example:
        extractor = MainContentExtractor()
        node = extractor.extract("<html><body><article>...</article></body></html>")
    """

    def __init__(self, content_selectors: Optional[tuple[str, ...]] = None):
        """
        Initialize the content extractor.

        Args:
            content_selectors: CSS selectors tried in order (overrides defaults)
        """
        self._content_selectors = content_selectors or MAIN_CONTENT_SELECTORS

    def _find_main_content(self, soup: BeautifulSoup) -> Optional[Tag]:
        """Find the first element matching the selectors, in priority order."""
        for selector in self._content_selectors:
            element = soup.select_one(selector)
            if element is not None:
                logger.debug(f"Main content matched selector {selector!r}")
                return element
        return None

    def extract(self, html: str) -> Tag:
        """
        Extract the main content node from HTML.

        Args:
            html: HTML document or fragment

        Returns:
            The matched element, or the whole document if nothing matched
        """
        soup = parse_html(html)

        main_content = self._find_main_content(soup)
        if main_content is None:
            logger.debug("No main content selector matched, using whole document")
            return soup

        return main_content


def extract_main(html: str) -> Tag:
    """Extract the main content node using the default selectors."""
    return MainContentExtractor().extract(html)
