#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdscroll/parsers/assembler.py
"""Assemble Markdown events into the block model.

The assembler consumes the flat event stream from
``mdscroll.parsers.events`` and produces a ``Document``: an ordered list of
blocks plus the heading outline and the link table, both stamped with
logical line numbers.

Logical Lines
-------------
A counter starting at 0 advances as blocks complete:

- Heading, Paragraph, BlockQuote and each list item: +1
- CodeBlock: number of code lines (at least 1) + 2 for the fences
- List: +1 for the separator after the last item
- HorizontalRule: +1

Line breaks inside a paragraph become a single space and do not advance
the counter, so wrapped paragraphs under-count their source span.

The assembler never raises. Containers left open when the stream ends are
dropped without emitting a partial block.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from mdscroll.ast.nodes import (
    Block,
    BlockQuote,
    CodeBlock,
    Document,
    Heading,
    HeadingInfo,
    HorizontalRule,
    Link,
    List,
    ListItem,
    Paragraph,
    StyledSpan,
    code_lines,
    spans_text,
)
from mdscroll.parsers.events import (
    BlockQuoteTag,
    Code,
    CodeBlockTag,
    EmphasisTag,
    End,
    Event,
    HardBreak,
    HeadingTag,
    ItemTag,
    LinkTag,
    ListTag,
    ParagraphTag,
    Rule,
    SoftBreak,
    Start,
    StrikethroughTag,
    StrongTag,
    Tag,
    Text,
    iter_events,
)

logger = logging.getLogger(__name__)


@dataclass
class _InlineFlags:
    """Active inline styles.

    Counters rather than booleans so that a nested tag of the same kind does
    not switch the style off when it closes.
    """

    bold: int = 0
    italic: int = 0
    strikethrough: int = 0
    link_url: Optional[str] = None

    def span(self, text: str, code: bool = False) -> StyledSpan:
        return StyledSpan(
            text=text,
            bold=self.bold > 0,
            italic=self.italic > 0,
            strikethrough=self.strikethrough > 0,
            code=code,
            link_url=self.link_url,
        )


@dataclass
class _ListFrame:
    ordered: bool
    start: Optional[int]
    emitted: int = 0


@dataclass
class _AssemblyState:
    """Accumulators threaded through one assembly pass."""

    blocks: list[Block] = field(default_factory=list)
    headings: list[HeadingInfo] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    current_line: int = 0
    flags: _InlineFlags = field(default_factory=_InlineFlags)
    spans: list[StyledSpan] = field(default_factory=list)

    heading_level: Optional[int] = None
    in_paragraph: bool = False
    quote_depth: int = 0

    in_code_block: bool = False
    code_language: Optional[str] = None
    code_parts: list[str] = field(default_factory=list)

    list_frames: list[_ListFrame] = field(default_factory=list)
    list_items: list[ListItem] = field(default_factory=list)
    # One entry per open item: True once its text was flushed ahead of a nested list
    item_flushed: list[bool] = field(default_factory=list)

    @property
    def in_list_item(self) -> bool:
        return bool(self.item_flushed)

    def take_spans(self) -> tuple[StyledSpan, ...]:
        spans = tuple(self.spans)
        self.spans.clear()
        return spans


class BlockAssembler:
    """Build a ``Document`` from a Markdown event stream.

    Examples
    --------
        >>> from mdscroll.parsers.events import iter_events
        >>> doc = BlockAssembler().assemble(iter_events("# Title"))
        >>> doc.headings[0].text
        'Title'

    """

    def assemble(self, events: Iterable[Event]) -> Document:
        """Consume events and return the assembled document.

        Parameters
        ----------
        events : iterable of Event
            Event stream in document order

        Returns
        -------
        Document
            Blocks with heading and link tables

        """
        state = _AssemblyState()

        for event in events:
            if isinstance(event, Start):
                self._on_start(state, event.tag)
            elif isinstance(event, End):
                self._on_end(state, event.tag)
            elif isinstance(event, Text):
                self._on_text(state, event.text)
            elif isinstance(event, Code):
                state.spans.append(state.flags.span(event.text, code=True))
            elif isinstance(event, (SoftBreak, HardBreak)):
                state.spans.append(state.flags.span(" "))
            elif isinstance(event, Rule):
                state.blocks.append(HorizontalRule())
                state.current_line += 1

        document = Document(blocks=tuple(state.blocks), headings=tuple(state.headings), links=tuple(state.links))
        logger.debug(
            "Assembled %d blocks, %d headings, %d links (%d logical lines)",
            len(document.blocks),
            len(document.headings),
            len(document.links),
            state.current_line,
        )
        return document

    def _on_start(self, state: _AssemblyState, tag: Tag) -> None:
        if isinstance(tag, HeadingTag):
            state.heading_level = tag.level
            state.spans.clear()
        elif isinstance(tag, ParagraphTag):
            if state.in_list_item or state.quote_depth:
                # Later paragraphs of a quote or loose item join the same line
                if state.spans:
                    state.spans.append(StyledSpan(text=" "))
            else:
                state.in_paragraph = True
                state.spans.clear()
        elif isinstance(tag, CodeBlockTag):
            state.in_code_block = True
            language = tag.info.split(maxsplit=1)[0] if tag.kind == "fenced" and tag.info else ""
            state.code_language = language or None
            state.code_parts.clear()
        elif isinstance(tag, BlockQuoteTag):
            state.quote_depth += 1
            if state.quote_depth == 1:
                state.spans.clear()
        elif isinstance(tag, ListTag):
            if state.list_frames and state.in_list_item:
                if state.spans:
                    self._emit_item(state)
                state.item_flushed[-1] = True
            state.list_frames.append(_ListFrame(ordered=tag.start is not None, start=tag.start))
        elif isinstance(tag, ItemTag):
            state.item_flushed.append(False)
            state.spans.clear()
        elif isinstance(tag, EmphasisTag):
            state.flags.italic += 1
        elif isinstance(tag, StrongTag):
            state.flags.bold += 1
        elif isinstance(tag, StrikethroughTag):
            state.flags.strikethrough += 1
        elif isinstance(tag, LinkTag):
            state.flags.link_url = tag.url

    def _on_end(self, state: _AssemblyState, tag: Tag) -> None:
        if isinstance(tag, HeadingTag):
            if state.heading_level is None:
                return
            level, state.heading_level = state.heading_level, None
            spans = state.take_spans()
            state.headings.append(HeadingInfo(level=level, text=spans_text(spans), logical_line=state.current_line))
            state.blocks.append(Heading(level=level, spans=spans))
            state.current_line += 1
        elif isinstance(tag, ParagraphTag):
            if state.in_list_item or state.quote_depth or not state.in_paragraph:
                return
            state.in_paragraph = False
            state.blocks.append(Paragraph(spans=state.take_spans()))
            state.current_line += 1
        elif isinstance(tag, CodeBlockTag):
            if not state.in_code_block:
                return
            state.in_code_block = False
            code = "".join(state.code_parts)
            state.code_parts.clear()
            state.blocks.append(CodeBlock(code=code, language=state.code_language))
            state.code_language = None
            state.current_line += max(len(code_lines(code)), 1) + 2
        elif isinstance(tag, BlockQuoteTag):
            if state.quote_depth == 0:
                return
            state.quote_depth -= 1
            if state.quote_depth == 0:
                state.blocks.append(BlockQuote(spans=state.take_spans()))
                state.current_line += 1
        elif isinstance(tag, ItemTag):
            if not state.in_list_item:
                return
            flushed = state.item_flushed.pop()
            if state.spans or not flushed:
                self._emit_item(state)
            state.spans.clear()
        elif isinstance(tag, ListTag):
            if not state.list_frames:
                return
            frame = state.list_frames.pop()
            if state.list_frames:
                return
            state.blocks.append(
                List(ordered=frame.ordered, start=frame.start, items=tuple(state.list_items))
            )
            state.list_items = []
            state.current_line += 1
        elif isinstance(tag, EmphasisTag):
            state.flags.italic = max(state.flags.italic - 1, 0)
        elif isinstance(tag, StrongTag):
            state.flags.bold = max(state.flags.bold - 1, 0)
        elif isinstance(tag, StrikethroughTag):
            state.flags.strikethrough = max(state.flags.strikethrough - 1, 0)
        elif isinstance(tag, LinkTag):
            state.flags.link_url = None

    def _on_text(self, state: _AssemblyState, text: str) -> None:
        if state.in_code_block:
            state.code_parts.append(text)
            return
        if state.flags.link_url is not None:
            state.links.append(Link(url=state.flags.link_url, text=text, logical_line=state.current_line))
        state.spans.append(state.flags.span(text))

    def _emit_item(self, state: _AssemblyState) -> None:
        if not state.list_frames:
            # Item outside of any list; nothing to attach it to
            state.spans.clear()
            return
        frame = state.list_frames[-1]
        depth = len(state.list_frames) - 1
        ordinal = None
        if depth > 0 and frame.ordered:
            ordinal = (frame.start if frame.start is not None else 1) + frame.emitted
        state.list_items.append(ListItem(spans=state.take_spans(), depth=depth, ordinal=ordinal))
        frame.emitted += 1
        state.current_line += 1


def assemble(events: Iterable[Event]) -> Document:
    """Assemble an event stream into a ``Document``."""
    return BlockAssembler().assemble(events)


def parse_markdown(markdown_text: str) -> Document:
    """Parse Markdown text into a ``Document``.

    Parameters
    ----------
    markdown_text : str
        Decoded Markdown source

    Returns
    -------
    Document
        Parsed document

    Examples
    --------
        >>> doc = parse_markdown("# Title\\n\\nHello [link](test.md) world")
        >>> [(link.url, link.text, link.logical_line) for link in doc.links]
        [('test.md', 'link', 1)]

    """
    return assemble(iter_events(markdown_text))
