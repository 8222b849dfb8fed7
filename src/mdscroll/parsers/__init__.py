#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Markdown parsing: mistune event stream and block assembly."""

from mdscroll.parsers.assembler import BlockAssembler, assemble, parse_markdown
from mdscroll.parsers.events import iter_events

__all__ = ["BlockAssembler", "assemble", "iter_events", "parse_markdown"]
