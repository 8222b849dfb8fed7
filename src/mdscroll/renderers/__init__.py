#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers turning the block model into display lines."""

from mdscroll.renderers.highlight import Highlighter, PygmentsHighlighter, TokenStyle
from mdscroll.renderers.terminal import RenderResult, TerminalRenderer, render_document

__all__ = [
    "Highlighter",
    "PygmentsHighlighter",
    "RenderResult",
    "TerminalRenderer",
    "TokenStyle",
    "render_document",
]
