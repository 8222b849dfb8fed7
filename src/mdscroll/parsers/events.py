#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdscroll/parsers/events.py
"""Markdown event stream built on top of mistune.

mistune produces a token tree. The block assembler consumes a flat,
pull-style stream of Start/End/Text events instead, so this module walks
the tree depth-first and yields events in document order.

Event Types
-----------
- Start(tag) / End(tag): open and close a block or inline container
- Text(text): a run of plain text (also the body of a code block)
- Code(text): an inline code span
- SoftBreak / HardBreak: line breaks inside a paragraph
- Rule: a thematic break

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional, Union

from mdscroll.constants import CodeBlockKind

logger = logging.getLogger(__name__)


# ============================================================================
# Tags
# ============================================================================


@dataclass(frozen=True)
class HeadingTag:
    """Heading container; ``level`` is 1-6."""

    level: int


@dataclass(frozen=True)
class ParagraphTag:
    """Paragraph container."""


@dataclass(frozen=True)
class CodeBlockTag:
    """Code block container.

    Parameters
    ----------
    kind : {"fenced", "indented"}
        How the block was written
    info : str, default = ""
        Info string following the opening fence

    """

    kind: CodeBlockKind
    info: str = ""


@dataclass(frozen=True)
class BlockQuoteTag:
    """Block quote container."""


@dataclass(frozen=True)
class ListTag:
    """List container; ``start`` is None for bullet lists."""

    start: Optional[int] = None


@dataclass(frozen=True)
class ItemTag:
    """List item container."""


@dataclass(frozen=True)
class EmphasisTag:
    """Emphasis (italic) span."""


@dataclass(frozen=True)
class StrongTag:
    """Strong (bold) span."""


@dataclass(frozen=True)
class StrikethroughTag:
    """Strikethrough span."""


@dataclass(frozen=True)
class LinkTag:
    """Link span."""

    url: str
    title: str = ""


@dataclass(frozen=True)
class ImageTag:
    """Image span; its children are the alt text."""

    url: str
    title: str = ""


Tag = Union[
    HeadingTag,
    ParagraphTag,
    CodeBlockTag,
    BlockQuoteTag,
    ListTag,
    ItemTag,
    EmphasisTag,
    StrongTag,
    StrikethroughTag,
    LinkTag,
    ImageTag,
]


# ============================================================================
# Events
# ============================================================================


@dataclass(frozen=True)
class Start:
    """Opening of a tag."""

    tag: Tag


@dataclass(frozen=True)
class End:
    """Closing of a tag."""

    tag: Tag


@dataclass(frozen=True)
class Text:
    """Plain text run."""

    text: str


@dataclass(frozen=True)
class Code:
    """Inline code span."""

    text: str


@dataclass(frozen=True)
class SoftBreak:
    """Soft line break inside a paragraph."""


@dataclass(frozen=True)
class HardBreak:
    """Hard line break inside a paragraph."""


@dataclass(frozen=True)
class Rule:
    """Thematic break."""


Event = Union[Start, End, Text, Code, SoftBreak, HardBreak, Rule]

_INLINE_CONTAINERS: dict[str, Tag] = {
    "emphasis": EmphasisTag(),
    "strong": StrongTag(),
    "strikethrough": StrikethroughTag(),
}


def iter_events(markdown_text: str) -> Iterator[Event]:
    """Parse Markdown and yield its event stream.

    Parameters
    ----------
    markdown_text : str
        Decoded Markdown source

    Yields
    ------
    Event
        Events in document order

    Examples
    --------
        >>> [type(e).__name__ for e in iter_events("*hi*")]
        ['Start', 'Start', 'Text', 'End', 'End']

    """
    import mistune

    source = markdown_text.replace("\r\n", "\n")
    markdown = mistune.create_markdown(renderer=None, plugins=["strikethrough"])
    tokens, _state = markdown.parse(source)

    if not isinstance(tokens, list):
        logger.debug("mistune returned %s instead of a token list", type(tokens).__name__)
        return

    yield from _walk(tokens)


def _walk(tokens: Iterable[dict[str, Any]]) -> Iterator[Event]:
    for token in tokens:
        yield from _token_events(token)


def _token_events(token: dict[str, Any]) -> Iterator[Event]:
    """Translate one mistune token (and its children) into events."""
    token_type = token.get("type", "")
    attrs = token.get("attrs") or {}
    children = token.get("children") or []

    # Block-level tokens
    if token_type == "heading":
        level = attrs.get("level", 1)
        if not isinstance(level, int) or level < 1 or level > 6:
            level = 1
        tag: Tag = HeadingTag(level=level)
        yield Start(tag)
        yield from _walk(children)
        yield End(tag)
    elif token_type == "paragraph":
        yield Start(ParagraphTag())
        yield from _walk(children)
        yield End(ParagraphTag())
    elif token_type == "block_text":
        # Tight list items carry their inline content without a paragraph
        yield from _walk(children)
    elif token_type == "block_code":
        if token.get("style") == "indent":
            tag = CodeBlockTag(kind="indented")
        else:
            tag = CodeBlockTag(kind="fenced", info=(attrs.get("info") or "").strip())
        yield Start(tag)
        raw = token.get("raw", "")
        if raw:
            yield Text(raw)
        yield End(tag)
    elif token_type == "block_quote":
        yield Start(BlockQuoteTag())
        yield from _walk(children)
        yield End(BlockQuoteTag())
    elif token_type == "list":
        start = attrs.get("start", 1) if attrs.get("ordered") else None
        tag = ListTag(start=start)
        yield Start(tag)
        yield from _walk(children)
        yield End(tag)
    elif token_type == "list_item":
        yield Start(ItemTag())
        yield from _walk(children)
        yield End(ItemTag())
    elif token_type == "thematic_break":
        yield Rule()

    # Inline tokens
    elif token_type == "text":
        text = token.get("raw", "")
        if text:
            yield Text(text)
    elif token_type == "codespan":
        yield Code(token.get("raw", ""))
    elif token_type == "softbreak":
        yield SoftBreak()
    elif token_type == "linebreak":
        yield HardBreak()
    elif token_type in _INLINE_CONTAINERS:
        tag = _INLINE_CONTAINERS[token_type]
        yield Start(tag)
        yield from _walk(children)
        yield End(tag)
    elif token_type in ("link", "image"):
        url = attrs.get("url", "")
        title = attrs.get("title") or ""
        tag = LinkTag(url=url, title=title) if token_type == "link" else ImageTag(url=url, title=title)
        yield Start(tag)
        yield from _walk(children)
        yield End(tag)

    # blank_line, block_html, inline_html and unknown plugin tokens carry no text
