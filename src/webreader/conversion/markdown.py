"""HTML to Markdown conversion."""

from __future__ import annotations

import copy
import logging
import re
from typing import Any

import html2text
from bs4 import Tag
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction
from markdownify import ATX, abstract_inline_conversion
from markdownify import MarkdownConverter as BaseMarkdownConverter

from ..models.results import ConversionContext
from .urls import absolutize

logger = logging.getLogger(__name__)

# Elements whose content is never emitted
IGNORED_TAGS = frozenset(
    {
        "script",
        "style",
        "noscript",
        "template",
        "head",
        "iframe",
        "svg",
        "canvas",
        "object",
        "embed",
        "nav",
        "button",
        "input",
        "select",
        "textarea",
    }
)

SKIPPED_STRINGS = (Comment, CData, Declaration, Doctype, ProcessingInstruction)

# Text is emitted as written; no Markdown escaping
DEFAULT_OPTIONS: dict[str, Any] = {
    "heading_style": ATX,
    "bullets": "-",
    "escape_asterisks": False,
    "escape_underscores": False,
    "escape_misc": False,
}

_BACKTICK_RUN_RE = re.compile(r"`+")
_FENCE_RE = re.compile(r"^\s*(`{3,})")
_LANGUAGE_CLASS_RE = re.compile(r"^(?:language|lang)-(.+)$")


def _squash(text: str) -> str:
    """Collapse all whitespace, newlines included, to single spaces."""
    return " ".join(text.split())


def _surrounding_spaces(text: str) -> tuple[str, str]:
    lead = " " if text[:1].isspace() else ""
    trail = " " if text[-1:].isspace() else ""
    return lead, trail


def _escape_url(url: str) -> str:
    """Keep a URL from terminating the Markdown link early."""
    return url.replace(" ", "%20").replace("(", "%28").replace(")", "%29")


def _title_suffix(node: Tag) -> str:
    title = node.get("title")
    if not title:
        return ""
    title = _squash(str(title)).replace('"', '\\"')
    return f' "{title}"' if title else ""


def _longest_backtick_run(text: str) -> int:
    return max((len(run) for run in _BACKTICK_RUN_RE.findall(text)), default=0)


def _code_language(node: Tag) -> str:
    """Find a language-xxx / lang-xxx class on a pre or its code child."""
    for element in (node, node.find("code")):
        if not isinstance(element, Tag):
            continue
        classes = element.get("class") or []
        if isinstance(classes, str):
            classes = classes.split()
        for cls in classes:
            match = _LANGUAGE_CLASS_RE.match(cls)
            if match:
                return match.group(1)
    return ""


def _table_converter(base_url: str) -> html2text.HTML2Text:
    converter = html2text.HTML2Text(baseurl=base_url)
    converter.body_width = 0
    converter.inline_links = True
    converter.wrap_links = False
    converter.protect_links = False
    converter.ignore_images = False
    converter.unicode_snob = True
    converter.default_image_alt = ""
    return converter


def normalize_markdown(markdown: str) -> str:
    """
    Clean up converted Markdown.

    Strips trailing whitespace from every line and collapses runs of blank
    lines to one, except inside fenced code blocks.
    """
    lines = markdown.replace("\r\n", "\n").replace("\r", "\n").split("\n")

    result = []
    fence = ""
    previous_blank = False
    for line in lines:
        line = line.rstrip()

        match = _FENCE_RE.match(line)
        if match:
            marker = match.group(1)
            if not fence:
                fence = marker
            elif line.strip() == marker and len(marker) >= len(fence):
                fence = ""
            previous_blank = False
            result.append(line)
            continue

        if not line and not fence:
            if previous_blank:
                continue
            previous_blank = True
        else:
            previous_blank = False
        result.append(line)

    return "\n".join(result).strip()


class PageMarkdownConverter(BaseMarkdownConverter):
    """
    markdownify converter for one page.

    Link and image targets are resolved against the page URL, code blocks
    are fenced with their language hint, boilerplate elements are dropped
    with their content, and tables go through html2text.
    """

    def __init__(self, source_url: str = "", **options: Any) -> None:
        super().__init__(**options)
        self.source_url = source_url

    def process_tag(self, node, parent_tags=None):
        if node.name in IGNORED_TAGS:
            return ""
        return super().process_tag(node, parent_tags=parent_tags)

    def process_text(self, el, parent_tags=None):
        if isinstance(el, SKIPPED_STRINGS):
            return ""
        return super().process_text(el, parent_tags=parent_tags)

    def _convert_block(self, el, text, parent_tags):
        if "_inline" in parent_tags:
            return " " + text.strip() + " "
        text = text.strip()
        return f"\n\n{text}\n\n" if text else ""

    convert_div = convert_section = convert_article = convert_main = _convert_block
    convert_header = convert_footer = convert_aside = convert_body = _convert_block
    convert_figure = convert_figcaption = convert_address = convert_center = _convert_block
    convert_details = convert_summary = convert_form = convert_fieldset = _convert_block
    convert_dl = convert_dt = convert_dd = convert_html = _convert_block

    convert_strike = abstract_inline_conversion(lambda self: "~~")
    convert_tt = BaseMarkdownConverter.convert_code

    def convert_a(self, el, text, parent_tags):
        if "_noformat" in parent_tags:
            return text

        href = str(el.get("href") or "").strip()
        if not href:
            return text

        label = _squash(text)
        if not label:
            return " " if text else ""

        url = absolutize(href, self.source_url)
        lead, trail = _surrounding_spaces(text)
        return f"{lead}[{label}]({_escape_url(url)}{_title_suffix(el)}){trail}"

    def convert_img(self, el, text, parent_tags):
        src = str(el.get("src") or "").strip()
        if not src:
            return ""
        alt = _squash(str(el.get("alt") or ""))
        url = absolutize(src, self.source_url)
        return f"![{alt}]({_escape_url(url)}{_title_suffix(el)})"

    def convert_pre(self, el, text, parent_tags):
        code = text.replace("\r\n", "\n").replace("\r", "\n")
        # A newline right after <pre> is not part of the content
        if code.startswith("\n"):
            code = code[1:]
        code = code.rstrip()
        if not code.strip():
            return ""

        fence = "`" * max(3, _longest_backtick_run(code) + 1)
        return f"\n\n{fence}{_code_language(el)}\n{code}\n{fence}\n\n"

    def convert_table(self, el, text, parent_tags):
        # Work on a copy so the document tree is never modified
        table = copy.copy(el)
        for tag in table.find_all(href=True):
            tag["href"] = absolutize(str(tag["href"]).strip(), self.source_url)
        for tag in table.find_all(src=True):
            tag["src"] = absolutize(str(tag["src"]).strip(), self.source_url)

        try:
            markdown = _table_converter(self.source_url).handle(str(table))
        except Exception as e:
            logger.warning(f"Table conversion failed for {self.source_url}, using text: {e}")
            markdown = table.get_text(separator=" ")

        markdown = markdown.strip()
        return f"\n\n{markdown}\n\n" if markdown else ""


class HtmlToMarkdown:
    """
    Converts an HTML subtree to clean Markdown.

    Conversion is done by markdownify with ATX headings and "-" bullets;
    the output is then normalized. Any failure during conversion (for
    example RecursionError on pathologically deep documents) degrades to
    the subtree's plain text.

    Example:
        converter = HtmlToMarkdown()
        markdown = converter.convert(node, ConversionContext("https://docs.example.com/page"))
    """

    def __init__(self, **options: Any) -> None:
        """
        Initialize converter.

        Args:
            **options: markdownify options overriding DEFAULT_OPTIONS
        """
        self.options = {**DEFAULT_OPTIONS, **options}

    def convert(self, node: Tag, ctx: ConversionContext) -> str:
        """
        Convert an HTML subtree to Markdown.

        Args:
            node: Root of the subtree to convert
            ctx: Conversion context carrying the source URL

        Returns:
            Markdown string (never raises; degrades to plain text)
        """
        try:
            converter = PageMarkdownConverter(source_url=ctx.source_url, **self.options)
            markdown = converter.convert_soup(node)
        except Exception as e:
            logger.warning(f"Markdown conversion failed for {ctx.source_url}, falling back to text: {e}")
            markdown = node.get_text(separator="\n")

        return normalize_markdown(markdown)


def to_markdown(node: Tag, ctx: ConversionContext) -> str:
    """Convert an HTML subtree to Markdown with the default converter."""
    return HtmlToMarkdown().convert(node, ctx)
