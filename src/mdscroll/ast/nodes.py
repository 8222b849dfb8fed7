#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdscroll/ast/nodes.py
"""Block model for parsed Markdown documents.

This module defines the flat block model produced by the block assembler and
consumed by the terminal renderer. A document is an ordered sequence of
blocks plus two side tables: the outline (headings) and the links found in
the text.

Block Types
-----------
- Heading, Paragraph, CodeBlock, List, BlockQuote, HorizontalRule

Inline text is represented as ``StyledSpan`` runs carrying independent
bold/italic/strikethrough/code flags and an optional link URL.

Line Numbers
------------
Two kinds of line numbers are tracked:

- ``logical_line`` is an approximate source position assigned while the
  blocks are assembled. Links are looked up by it.
- ``rendered_line`` is the index of a heading in the rendered line buffer,
  filled in after rendering. Outline jumps use it.

All nodes are immutable. Rendering produces a new ``Document`` with updated
heading positions via ``Document.with_rendered_lines``.

"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, Optional, Sequence

_SLUG_STRIP = re.compile(r"[^\w\- ]", re.UNICODE)


@dataclass(frozen=True)
class StyledSpan:
    """A run of text with independent inline style flags.

    Parameters
    ----------
    text : str
        The text content of the run
    bold : bool, default = False
        Whether the run is inside strong emphasis
    italic : bool, default = False
        Whether the run is inside emphasis
    strikethrough : bool, default = False
        Whether the run is struck through
    code : bool, default = False
        Whether the run is an inline code span
    link_url : str or None, default = None
        Destination URL when the run is link text

    """

    text: str
    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    code: bool = False
    link_url: Optional[str] = None


def spans_text(spans: Sequence[StyledSpan]) -> str:
    """Concatenate the text of a span sequence."""
    return "".join(span.text for span in spans)


@dataclass(frozen=True)
class ListItem:
    """A single list entry.

    Parameters
    ----------
    spans : tuple of StyledSpan
        Inline content of the item
    depth : int, default = 0
        Nesting depth; 0 for items of the top-level list
    ordinal : int or None, default = None
        Item number for items of a nested ordered list. Top-level items are
        numbered from the enclosing ``List`` block's start instead.

    """

    spans: tuple[StyledSpan, ...] = ()
    depth: int = 0
    ordinal: Optional[int] = None

    @property
    def text(self) -> str:
        """Return the plain text of the item."""
        return spans_text(self.spans)


class Block(ABC):
    """Base class for all document blocks.

    Blocks support the visitor pattern so renderers can dispatch on the
    block type without isinstance chains.
    """

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this block.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


@dataclass(frozen=True)
class Heading(Block):
    """Heading block (levels 1-6)."""

    level: int
    spans: tuple[StyledSpan, ...] = ()

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_heading``."""
        return visitor.visit_heading(self)

    @property
    def text(self) -> str:
        """Return the plain heading text."""
        return spans_text(self.spans)


@dataclass(frozen=True)
class Paragraph(Block):
    """Paragraph block of inline spans."""

    spans: tuple[StyledSpan, ...] = ()

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_paragraph``."""
        return visitor.visit_paragraph(self)


@dataclass(frozen=True)
class CodeBlock(Block):
    """Code block holding raw source text.

    Parameters
    ----------
    code : str
        Raw code content exactly as it appeared between the fences
    language : str or None, default = None
        Language tag of a fenced block; always None for indented blocks

    """

    code: str
    language: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_code_block``."""
        return visitor.visit_code_block(self)

    @property
    def source_lines(self) -> list[str]:
        """Return the code split into lines.

        A trailing newline does not produce an extra empty line and a
        carriage return before each newline is dropped.
        """
        return code_lines(self.code)


@dataclass(frozen=True)
class List(Block):
    """List block.

    Parameters
    ----------
    ordered : bool
        Whether the list is numbered
    start : int or None, default = None
        First number of an ordered list; None for bullet lists
    items : tuple of ListItem
        Items in display order, nested items flattened in place

    """

    ordered: bool
    start: Optional[int] = None
    items: tuple[ListItem, ...] = ()

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_list``."""
        return visitor.visit_list(self)


@dataclass(frozen=True)
class BlockQuote(Block):
    """Block quote; inner paragraphs are collapsed into one span run."""

    spans: tuple[StyledSpan, ...] = ()

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_block_quote``."""
        return visitor.visit_block_quote(self)


@dataclass(frozen=True)
class HorizontalRule(Block):
    """Thematic break."""

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_horizontal_rule``."""
        return visitor.visit_horizontal_rule(self)


@dataclass(frozen=True)
class HeadingInfo:
    """Outline entry for a heading.

    Parameters
    ----------
    level : int
        Heading level (1-6)
    text : str
        Plain heading text
    logical_line : int
        Approximate source line assigned during assembly
    rendered_line : int, default = 0
        Index of the heading in the rendered buffer, set after rendering

    """

    level: int
    text: str
    logical_line: int
    rendered_line: int = 0

    @property
    def slug(self) -> str:
        """Return a GitHub-style anchor slug for the heading text."""
        return _SLUG_STRIP.sub("", self.text.lower()).replace(" ", "-")


@dataclass(frozen=True)
class Link:
    """A link text run found in the document.

    One record is produced per text run inside a link element, so a link
    whose text is split by emphasis yields several records.
    """

    url: str
    text: str
    logical_line: int


@dataclass(frozen=True)
class Document:
    """Parsed Markdown document.

    Parameters
    ----------
    blocks : tuple of Block
        Blocks in document order
    headings : tuple of HeadingInfo
        Outline entries in document order
    links : tuple of Link
        Link text runs in document order

    """

    blocks: tuple[Block, ...] = ()
    headings: tuple[HeadingInfo, ...] = ()
    links: tuple[Link, ...] = ()

    def link_at_line(self, line: int) -> Link | None:
        """Return the first link recorded at a logical line.

        Parameters
        ----------
        line : int
            Logical line to look up

        Returns
        -------
        Link or None
            First matching link, if any

        """
        for link in self.links:
            if link.logical_line == line:
                return link
        return None

    def heading_for_anchor(self, anchor: str) -> HeadingInfo | None:
        """Find the heading targeted by an in-document anchor.

        The anchor matches when it equals the lowercased heading text with
        hyphens read as spaces, or the heading's slug.

        Parameters
        ----------
        anchor : str
            Anchor text without the leading ``#``

        Returns
        -------
        HeadingInfo or None
            First matching heading, if any

        """
        wanted = anchor.lower()
        as_text = wanted.replace("-", " ")
        for heading in self.headings:
            lowered = heading.text.lower()
            if lowered == as_text or lowered.replace(" ", "-") == wanted or heading.slug == wanted:
                return heading
        return None

    def with_rendered_lines(self, headings: Sequence[HeadingInfo]) -> Document:
        """Return a copy of the document with a new outline table.

        Parameters
        ----------
        headings : sequence of HeadingInfo
            Outline entries carrying rendered line positions

        Returns
        -------
        Document
            New document sharing blocks and links with this one

        """
        return replace(self, headings=tuple(headings))


def code_lines(code: str) -> list[str]:
    """Split code text into lines the way the renderer displays them."""
    if not code:
        return []
    lines = code.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
