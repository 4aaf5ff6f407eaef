"""Read pipeline: classify, extract, convert."""

import logging
from dataclasses import dataclass, field

from ..conversion.classifier import classify
from ..conversion.extractor import MainContentExtractor
from ..conversion.markdown import HtmlToMarkdown
from ..conversion.protocols import ContentExtractor, MarkdownConverter
from ..models.results import (
    ConversionContext,
    DetectionMethod,
    FetchResult,
    MarkdownResult,
    PlainOrMarkdown,
)

logger = logging.getLogger(__name__)


@dataclass
class ReaderPipeline:
    """
    Turns a fetched body into Markdown.

    Plain text and Markdown bodies are returned unchanged. Anything else is
    treated as HTML: the main content is extracted and converted, with
    links and images resolved against the final URL.

    Every stage has a fallback, so process() does not raise once a body
    has been fetched.

    Example:
        pipeline = ReaderPipeline()
        result = pipeline.process(FetchResult(body, "text/html", "https://example.com/"))
        print(result.markdown)
    """

    extractor: ContentExtractor = field(default_factory=MainContentExtractor)
    converter: MarkdownConverter = field(default_factory=HtmlToMarkdown)

    def process(self, fetch: FetchResult) -> MarkdownResult:
        """
        Produce Markdown for a fetched resource.

        Args:
            fetch: Body, content type and final URL of the fetch

        Returns:
            MarkdownResult with the Markdown and how it was obtained
        """
        classification = classify(fetch.body, fetch.content_type)

        if isinstance(classification, PlainOrMarkdown):
            logger.debug(f"{fetch.source_url}: returning body as-is ({classification.method.value})")
            return MarkdownResult(
                markdown=classification.body,
                content_type=fetch.content_type,
                detection_method=classification.method,
                source_url=fetch.source_url,
            )

        node = self.extractor.extract(classification.html)
        markdown = self.converter.convert(node, ConversionContext(source_url=fetch.source_url))

        logger.debug(
            f"{fetch.source_url}: converted {len(fetch.body)} bytes of HTML "
            f"to {len(markdown)} bytes of Markdown"
        )
        return MarkdownResult(
            markdown=markdown,
            content_type=fetch.content_type,
            detection_method=DetectionMethod.HTML_EXTRACTED,
            source_url=fetch.source_url,
        )


def process(fetch: FetchResult) -> MarkdownResult:
    """Run the default read pipeline on a fetch result."""
    return ReaderPipeline().process(fetch)
