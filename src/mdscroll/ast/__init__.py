#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Block model used between the assembler and the renderer."""

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
from mdscroll.ast.visitors import BlockVisitor

__all__ = [
    "Block",
    "BlockQuote",
    "BlockVisitor",
    "CodeBlock",
    "Document",
    "Heading",
    "HeadingInfo",
    "HorizontalRule",
    "Link",
    "List",
    "ListItem",
    "Paragraph",
    "StyledSpan",
    "code_lines",
    "spans_text",
]
