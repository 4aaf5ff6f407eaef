"""Tests for HTML to Markdown conversion."""

import pytest
from bs4 import BeautifulSoup
from webreader.conversion import HtmlToMarkdown, PageMarkdownConverter, normalize_markdown, to_markdown
from webreader.models import ConversionContext


def convert(html: str, url: str = "https://example.com/") -> str:
    """Convert an HTML fragment against a source URL."""
    return to_markdown(BeautifulSoup(html, "html.parser"), ConversionContext(source_url=url))


class TestBlocks:
    """Tests for headings, paragraphs and other block elements."""

    def test_heading_and_paragraph_with_link(self):
        """Test the basic heading, paragraph and link mapping."""
        html = '<h1>Title</h1><p>Hello <a href="/a">link</a></p>'

        assert convert(html) == "# Title\n\nHello [link](https://example.com/a)"

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_levels(self, level):
        """Test ATX heading for every level."""
        html = f"<h{level}>Heading</h{level}>"

        assert convert(html) == f"{'#' * level} Heading"

    def test_heading_whitespace_collapsed(self):
        """Test that headings stay on one line."""
        assert convert("<h2>\n  Multi\n  line\n</h2>") == "## Multi line"

    def test_paragraphs_separated_by_blank_line(self):
        """Test paragraph separation."""
        assert convert("<p>First paragraph.</p><p>Second paragraph.</p>") == (
            "First paragraph.\n\nSecond paragraph."
        )

    def test_nested_containers(self):
        """Test that nested divs and sections produce single blank lines."""
        html = """
        <section>
            <div>
                <p>A</p>


                <div></div>
                <p>B</p>
            </div>
            trailing text
        </section>
        """

        assert convert(html) == "A\n\nB\n\ntrailing text"

    def test_line_break(self):
        """Test <br> inside a paragraph."""
        assert convert("<p>Line 1<br>Line 2</p>") == "Line 1\nLine 2"

    def test_horizontal_rule(self):
        """Test <hr> between paragraphs."""
        assert convert("<p>A</p><hr><p>B</p>") == "A\n\n---\n\nB"

    def test_blockquote(self):
        """Test blockquote prefixing."""
        html = "<blockquote><p>Quote one</p><p>Quote two</p></blockquote>"

        assert convert(html) == "> Quote one\n>\n> Quote two"


class TestInline:
    """Tests for inline formatting."""

    def test_emphasis_strong_code(self):
        """Test emphasis, strong and inline code delimiters."""
        html = "<p><em>a</em> <strong>b</strong> <code>c</code></p>"

        assert convert(html) == "*a* **b** `c`"

    def test_bold_italic_aliases(self):
        """Test <b>, <i> and <del>."""
        assert convert("<p><b>bold</b> <i>it</i> <del>gone</del></p>") == "**bold** *it* ~~gone~~"

    def test_spaces_kept_outside_delimiters(self):
        """Test that inner spacing moves outside the markers."""
        assert convert("<p>very<strong> important </strong>note</p>") == "very **important** note"

    def test_empty_emphasis_dropped(self):
        """Test that empty emphasis emits nothing."""
        assert convert("<p>a<em></em>b</p>") == "ab"

    def test_inline_code_with_backtick(self):
        """Test code spans that contain backticks."""
        assert convert("<p><code>a`b</code></p>") == "`` a`b ``"

    def test_unknown_tags_emit_text(self):
        """Test that unrecognized tags degrade to their text content."""
        assert convert("<p><span>Hello</span> <custom-tag>world</custom-tag></p>") == "Hello world"


class TestCodeBlocks:
    """Tests for fenced code blocks."""

    def test_language_hint(self):
        """Test language-xxx class on the inner code element."""
        html = '<pre><code class="language-python">print("hi")\n</code></pre>'

        assert convert(html) == '```python\nprint("hi")\n```'

    def test_lang_class_on_pre(self):
        """Test lang-xxx class on the pre element."""
        html = '<pre class="highlight lang-js"><code>let x = 1;</code></pre>'

        assert convert(html) == "```js\nlet x = 1;\n```"

    def test_no_language(self):
        """Test a plain pre block."""
        assert convert("<pre>x = 1\ny = 2</pre>") == "```\nx = 1\ny = 2\n```"

    def test_whitespace_preserved(self):
        """Test that indentation and blank lines survive in code."""
        html = "<pre>def f():\n    return 1\n\n\n\nf()</pre>"

        assert convert(html) == "```\ndef f():\n    return 1\n\n\n\nf()\n```"

    def test_markup_inside_pre(self):
        """Test highlighted spans and <br> inside a code block."""
        html = '<pre><span class="k">if</span> x:<br>    <span class="n">go</span>()</pre>'

        assert convert(html) == "```\nif x:\n    go()\n```"

    def test_fence_longer_than_content_backticks(self):
        """Test code that itself contains a fence."""
        html = "<pre>```\nx\n```</pre>"

        assert convert(html) == "````\n```\nx\n```\n````"


class TestLinksAndImages:
    """Tests for link and image conversion."""

    SOURCE = "https://example.com/blog/post"

    def test_root_relative_link(self):
        """Test that a root-relative href is resolved."""
        html = '<a href="/docs/page">Docs</a>'

        assert convert(html, self.SOURCE) == "[Docs](https://example.com/docs/page)"

    def test_parent_relative_link(self):
        """Test that a ../ href is resolved."""
        assert convert('<a href="../x">X</a>', self.SOURCE) == "[X](https://example.com/x)"

    def test_absolute_link_unchanged(self):
        """Test that absolute hrefs are kept."""
        html = '<a href="https://other.com/y">Y</a>'

        assert convert(html, self.SOURCE) == "[Y](https://other.com/y)"

    def test_anchor_without_href(self):
        """Test that an anchor without href is plain text."""
        assert convert('<p>See <a name="x">here</a>.</p>', self.SOURCE) == "See here."

    def test_link_title(self):
        """Test that the title attribute is kept."""
        html = '<a href="/a" title="Go there">A</a>'

        assert convert(html) == '[A](https://example.com/a "Go there")'

    def test_link_with_spaces_in_url(self):
        """Test that spaces in the URL are percent-encoded."""
        assert convert('<a href="/my page">P</a>') == "[P](https://example.com/my%20page)"

    def test_empty_link_dropped(self):
        """Test that a link without text or image is dropped."""
        assert convert('<p>x<a href="/a"> </a>y</p>') == "x y"

    def test_image(self):
        """Test that image src is resolved."""
        html = '<img src="/img/logo.png" alt="Logo">'

        assert convert(html, self.SOURCE) == "![Logo](https://example.com/img/logo.png)"

    def test_image_without_src(self):
        """Test that an image without src is dropped."""
        assert convert('<p>a<img alt="x">b</p>') == "ab"

    def test_linked_image(self):
        """Test an image inside a link."""
        html = '<a href="/full.png"><img src="thumb.png" alt="Thumb"></a>'

        assert convert(html, self.SOURCE) == (
            "[![Thumb](https://example.com/blog/thumb.png)](https://example.com/full.png)"
        )


class TestLists:
    """Tests for list conversion."""

    def test_unordered_list(self):
        """Test a flat unordered list."""
        html = "<ul>\n  <li>One</li>\n  <li>Two</li>\n</ul>"

        assert convert(html) == "- One\n- Two"

    def test_ordered_list(self):
        """Test a flat ordered list."""
        assert convert("<ol><li>First</li><li>Second</li></ol>") == "1. First\n2. Second"

    def test_ordered_list_start(self):
        """Test the start attribute."""
        assert convert('<ol start="3"><li>c</li><li>d</li></ol>') == "3. c\n4. d"

    def test_nested_list(self):
        """Test indentation of a nested list."""
        html = "<ul><li>Parent<ul><li>Child</li></ul></li><li>Next</li></ul>"

        assert convert(html) == "- Parent\n  - Child\n- Next"

    def test_deeply_nested_list(self):
        """Test indentation grows with nesting depth."""
        html = "<ul><li>a<ul><li>b<ul><li>c</li></ul></li></ul></li></ul>"

        assert convert(html) == "- a\n  - b\n    - c"

    def test_ordered_inside_unordered(self):
        """Test a numbered list nested in a bulleted one."""
        assert convert("<ul><li>x<ol><li>y</li></ol></li></ul>") == "- x\n  1. y"

    def test_list_item_with_code_block(self):
        """Test that code blocks inside items are indented."""
        html = "<ol><li>Run:<pre>make</pre></li></ol>"

        assert convert(html) == "1. Run:\n\n   ```\n   make\n   ```"

    def test_list_after_paragraph(self):
        """Test that a list is separated from a paragraph."""
        assert convert("<p>Items:</p><ul><li>a</li></ul>") == "Items:\n\n- a"


class TestBoilerplateAndTotality:
    """Tests for ignored content and failure-free conversion."""

    def test_scripts_styles_comments_ignored(self):
        """Test that non-content elements emit nothing."""
        html = """
            <p>Keep</p>
            <script>var x = 1;</script>
            <style>p { color: red; }</style>
            <!-- a comment -->
            <noscript>Enable JS</noscript>
            <nav><a href="/">Home</a></nav>
            <p>Also</p>
        """

        assert convert(html) == "Keep\n\nAlso"

    def test_table(self):
        """Test that tables are converted with resolved links."""
        html = """<table>
            <tr><th>Name</th><th>Link</th></tr>
            <tr><td>Item</td><td><a href="/x">X</a></td></tr>
        </table>"""

        result = convert(html)

        assert "Name" in result
        assert "Item" in result
        assert "[X](https://example.com/x)" in result
        assert "|" in result

    def test_table_conversion_leaves_tree_untouched(self):
        """Test that resolving table links does not modify the document."""
        soup = BeautifulSoup('<table><tr><td><a href="/x">X</a></td></tr></table>', "html.parser")

        HtmlToMarkdown().convert(soup, ConversionContext("https://example.com/"))

        assert soup.find("a")["href"] == "/x"

    def test_deeply_nested_document_degrades_to_text(self):
        """Test that pathological nesting falls back to plain text."""
        depth = 3000
        html = "<div>" * depth + "deep text" + "</div>" * depth

        assert convert(html) == "deep text"

    @pytest.mark.parametrize(
        "html",
        [
            "",
            "<<<>>>&&&</p></div>",
            "<a href>",
            '<img src="http://[::1">',
            "<pre></pre><code></code><ul></ul><table></table>",
            "<ol start='x'><li>a</li></ol>",
        ],
    )
    def test_unusual_input_never_raises(self, html):
        """Test that odd markup still produces a string."""
        assert isinstance(convert(html), str)

    def test_no_trailing_whitespace(self):
        """Test that no output line ends with whitespace."""
        html = "<div>  <p>text   </p>  <ul><li>item  </li></ul>  </div>"

        result = convert(html)

        assert all(line == line.rstrip() for line in result.split("\n"))
        assert result == "text\n\n- item"


class TestNormalizeMarkdown:
    """Tests for normalize_markdown()."""

    def test_collapses_blank_lines(self):
        """Test that runs of blank lines collapse to one."""
        assert normalize_markdown("a\n\n\n\nb") == "a\n\nb"

    def test_strips_trailing_whitespace(self):
        """Test trailing whitespace removal."""
        assert normalize_markdown("a  \nb\t\n") == "a\nb"

    def test_keeps_blank_lines_in_fences(self):
        """Test that code fences keep their blank lines."""
        text = "```\na\n\n\nb\n```\n\n\n\nc"

        assert normalize_markdown(text) == "```\na\n\n\nb\n```\n\nc"


class TestConverterOptions:
    """Tests for markdownify options and the page converter."""

    def test_text_not_escaped(self):
        """Test that underscores and asterisks in text are kept as written."""
        assert convert("<p>snake_case and 2*3</p>") == "snake_case and 2*3"

    def test_strike(self):
        """Test <strike> as strikethrough."""
        assert convert("<p><strike>old</strike> new</p>") == "~~old~~ new"

    def test_option_override(self):
        """Test that markdownify options can be overridden."""
        soup = BeautifulSoup("<ul><li>a</li><li>b</li></ul>", "html.parser")

        result = HtmlToMarkdown(bullets="*").convert(soup, ConversionContext("https://example.com/"))

        assert result == "* a\n* b"

    def test_page_converter_on_html_string(self):
        """Test the converter class directly on an HTML string."""
        converter = PageMarkdownConverter(source_url="https://example.com/docs/", heading_style="atx")

        result = converter.convert('<h2>Guide</h2><p><a href="start">Start</a></p><nav>Menu</nav>')

        assert result.strip() == "## Guide\n\n[Start](https://example.com/docs/start)"
