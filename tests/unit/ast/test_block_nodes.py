"""Unit tests for the block model."""

import pytest

from mdscroll.ast import (
    BlockQuote,
    BlockVisitor,
    CodeBlock,
    Heading,
    HeadingInfo,
    HorizontalRule,
    List,
    ListItem,
    Paragraph,
    StyledSpan,
    code_lines,
    spans_text,
)


class NameVisitor(BlockVisitor):
    """Return the kind of each visited block."""

    def visit_heading(self, node):
        return "heading"

    def visit_paragraph(self, node):
        return "paragraph"

    def visit_code_block(self, node):
        return "code"

    def visit_list(self, node):
        return "list"

    def visit_block_quote(self, node):
        return "quote"

    def visit_horizontal_rule(self, node):
        return "rule"


@pytest.mark.unit
class TestCodeLines:
    """Splitting code block text into display lines."""

    @pytest.mark.parametrize(
        "code,expected",
        [
            ("", []),
            ("a", ["a"]),
            ("a\n", ["a"]),
            ("a\nb\n", ["a", "b"]),
            ("a\n\nb", ["a", "", "b"]),
            ("a\r\nb\r\n", ["a", "b"]),
            ("\n", [""]),
        ],
    )
    def test_code_lines(self, code, expected):
        assert code_lines(code) == expected

    def test_source_lines_property(self):
        assert CodeBlock(code="x\ny\n").source_lines == ["x", "y"]


@pytest.mark.unit
class TestNodes:
    """Node helpers and visitor dispatch."""

    def test_spans_text(self):
        spans = (StyledSpan(text="a", bold=True), StyledSpan(text="b"), StyledSpan(text="c", code=True))
        assert spans_text(spans) == "abc"

    def test_span_defaults(self):
        span = StyledSpan(text="x")
        assert not (span.bold or span.italic or span.strikethrough or span.code)
        assert span.link_url is None

    def test_item_text(self):
        assert ListItem(spans=(StyledSpan(text="a"), StyledSpan(text="b"))).text == "ab"

    def test_heading_text(self):
        assert Heading(level=2, spans=(StyledSpan(text="Hi"),)).text == "Hi"

    @pytest.mark.parametrize(
        "block,name",
        [
            (Heading(level=1), "heading"),
            (Paragraph(), "paragraph"),
            (CodeBlock(code=""), "code"),
            (List(ordered=False), "list"),
            (BlockQuote(), "quote"),
            (HorizontalRule(), "rule"),
        ],
    )
    def test_accept_dispatch(self, block, name):
        assert block.accept(NameVisitor()) == name

    @pytest.mark.parametrize(
        "text,slug",
        [
            ("Getting Started", "getting-started"),
            ("API: Reference", "api-reference"),
            ("snake_case name", "snake_case-name"),
            ("Déjà vu", "déjà-vu"),
        ],
    )
    def test_slug(self, text, slug):
        assert HeadingInfo(level=1, text=text, logical_line=0).slug == slug

    def test_nodes_are_frozen(self):
        span = StyledSpan(text="x")
        with pytest.raises(AttributeError):
            span.text = "y"
