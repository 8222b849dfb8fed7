#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdscroll/renderers/terminal.py
"""Render the block model into styled terminal lines.

This module lowers a ``Document`` into a flat buffer of ``rich.text.Text``
lines, one per display row. While the buffer is built, the index of every
heading line is recorded so that the outline can jump to it.

Layout per block:

- Heading: marker + spans, then a blank line
- Paragraph: spans, then a blank line
- CodeBlock: opening fence, one line per source line, closing fence, blank
- List: one line per item, then a single blank line
- BlockQuote: one line with a quote bar
- HorizontalRule: rule line, then a blank line

Rendering is a pure function of (blocks, theme, highlighter, options). It
never raises; a highlighter failure on one code line degrades only that line
to plain code color.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from rich.style import Style
from rich.text import Text

from mdscroll.ast.nodes import (
    BlockQuote,
    CodeBlock,
    Document,
    Heading,
    HeadingInfo,
    HorizontalRule,
    List,
    Paragraph,
    StyledSpan,
)
from mdscroll.ast.visitors import BlockVisitor
from mdscroll.constants import CODE_FENCE, LIST_INDENT, QUOTE_BAR, RULE_CHAR
from mdscroll.options import RendererOptions
from mdscroll.renderers.highlight import Highlighter, TokenRun
from mdscroll.themes import Theme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    """Output of a render pass.

    Parameters
    ----------
    lines : tuple of rich.text.Text
        Display buffer, one entry per line
    headings : tuple of HeadingInfo
        Outline entries with ``rendered_line`` filled in

    """

    lines: tuple[Text, ...]
    headings: tuple[HeadingInfo, ...]

    def __len__(self) -> int:
        """Return the number of rendered lines."""
        return len(self.lines)


class TerminalRenderer(BlockVisitor):
    """Render documents to ``rich`` text lines.

    Parameters
    ----------
    theme : Theme
        Colors for every Markdown element
    highlighter : Highlighter or None, default = None
        Code highlighter; None renders code in a single color
    options : RendererOptions or None, default = None
        Layout settings

    Examples
    --------
        >>> from mdscroll.parsers import parse_markdown
        >>> from mdscroll.themes import get_theme
        >>> result = TerminalRenderer(get_theme("default")).render(parse_markdown("# Hi"))
        >>> [line.plain for line in result.lines]
        ['# Hi', '']

    """

    def __init__(
        self,
        theme: Theme,
        highlighter: Optional[Highlighter] = None,
        options: Optional[RendererOptions] = None,
    ):
        """Initialize the renderer."""
        self.theme = theme
        self.highlighter = highlighter
        self.options = options or RendererOptions()
        self._lines: list[Text] = []
        self._pending_headings: list[HeadingInfo] = []
        self._filled_headings: list[HeadingInfo] = []

    def render(self, document: Document) -> RenderResult:
        """Render a document into a fresh line buffer.

        Parameters
        ----------
        document : Document
            Document to render; it is not modified

        Returns
        -------
        RenderResult
            Lines and the heading table with rendered positions

        """
        self._lines = []
        self._pending_headings = list(reversed(document.headings))
        self._filled_headings = []

        for block in document.blocks:
            block.accept(self)

        # Entries without a matching Heading block keep their previous values
        headings = tuple(self._filled_headings) + tuple(reversed(self._pending_headings))
        result = RenderResult(lines=tuple(self._lines), headings=headings)
        logger.debug("Rendered %d blocks into %d lines", len(document.blocks), len(result.lines))
        return result

    # ------------------------------------------------------------------
    # Block visitors
    # ------------------------------------------------------------------

    def visit_heading(self, node: Heading) -> None:
        """Render a heading and record its line index."""
        if self._pending_headings:
            entry = self._pending_headings.pop()
            self._filled_headings.append(replace(entry, rendered_line=len(self._lines)))

        color = self.theme.heading_color(node.level)
        line = Text()
        line.append("#" * node.level + " ", Style(color=color, bold=True))
        self._append_spans(line, node.spans, base_color=color)
        self._lines.append(line)
        self._blank()

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a paragraph."""
        line = Text()
        self._append_spans(line, node.spans, base_color=self.theme.text)
        self._lines.append(line)
        self._blank()

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a code block between fence lines."""
        muted = Style(color=self.theme.text_muted)
        indent = " " * self.options.code_indent

        self._lines.append(Text(CODE_FENCE + (node.language or ""), style=muted))
        for source_line in node.source_lines:
            self._lines.append(self._code_line(indent, source_line, node.language))
        self._lines.append(Text(CODE_FENCE, style=muted))
        self._blank()

    def visit_list(self, node: List) -> None:
        """Render list items, one line each, followed by a single blank."""
        marker_style = Style(color=self.theme.list_marker)
        start = node.start if node.start is not None else 1
        top_index = 0

        for item in node.items:
            if item.depth == 0:
                marker = f"{start + top_index}. " if node.ordered else self.options.bullet
                top_index += 1
            else:
                marker = f"{item.ordinal}. " if item.ordinal is not None else self.options.bullet

            line = Text()
            line.append(LIST_INDENT * item.depth + marker, marker_style)
            self._append_spans(line, item.spans, base_color=self.theme.text)
            self._lines.append(line)

        self._blank()

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a block quote; span styles are replaced by the quote style."""
        line = Text()
        line.append(QUOTE_BAR, Style(color=self.theme.blockquote))
        quote_style = Style(color=self.theme.blockquote, italic=True)
        for span in node.spans:
            line.append(span.text, quote_style)
        self._lines.append(line)

    def visit_horizontal_rule(self, node: HorizontalRule) -> None:
        """Render a fixed-width rule line."""
        self._lines.append(Text(RULE_CHAR * self.options.rule_width, style=Style(color=self.theme.horizontal_rule)))
        self._blank()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _blank(self) -> None:
        self._lines.append(Text())

    def _append_spans(self, line: Text, spans: Sequence[StyledSpan], base_color: str) -> None:
        for span in spans:
            line.append(span.text, self._span_style(span, base_color))

    def _span_style(self, span: StyledSpan, base_color: str) -> Style:
        """Resolve the style of an inline span.

        Link styling is applied last and wins over bold and code colors;
        modifiers from the other flags are kept.
        """
        color = base_color
        bold = italic = strike = underline = None
        if span.bold:
            bold = True
            color = self.theme.strong
        if span.italic:
            italic = True
        if span.strikethrough:
            strike = True
        if span.code:
            color = self.theme.code_inline
        if span.link_url is not None:
            color = self.theme.link
            underline = True
        return Style(color=color, bold=bold, italic=italic, strike=strike, underline=underline)

    def _code_line(self, indent: str, source_line: str, language: Optional[str]) -> Text:
        background = self.theme.code_block_bg
        plain = Text(indent + source_line, style=Style(color=self.theme.code_inline, bgcolor=background))
        if self.highlighter is None:
            return plain

        try:
            runs: list[TokenRun] = [run for row in self.highlighter.highlight(source_line, language) for run in row]
        except Exception as e:
            logger.debug("Highlighting failed for %s line %r: %s", language or "plain", source_line, e)
            return plain

        line = Text()
        line.append(indent, Style(bgcolor=background))
        for token_style, text in runs:
            line.append(
                text,
                Style(
                    color=token_style.color or self.theme.code_inline,
                    bgcolor=background,
                    bold=token_style.bold or None,
                    italic=token_style.italic or None,
                    underline=token_style.underline or None,
                ),
            )
        return line


def render_document(
    document: Document,
    theme: Theme,
    highlighter: Optional[Highlighter] = None,
    options: Optional[RendererOptions] = None,
) -> RenderResult:
    """Render a document with a fresh renderer.

    Parameters
    ----------
    document : Document
        Document to render
    theme : Theme
        Color theme
    highlighter : Highlighter or None, default = None
        Optional code highlighter
    options : RendererOptions or None, default = None
        Layout settings

    Returns
    -------
    RenderResult
        Rendered lines and heading positions

    """
    return TerminalRenderer(theme, highlighter=highlighter, options=options).render(document)
