"""Search over the rendered line buffer."""

from __future__ import annotations

from typing import Sequence

from mdscroll.search.index import BufferLine, compile_pattern, find_matches, line_text
from mdscroll.search.state import SearchState
from mdscroll.search.types import SearchMatch


def search_lines(
    lines: Sequence[BufferLine],
    query: str,
    *,
    is_regex: bool = False,
    ignore_case: bool = False,
) -> list[SearchMatch]:
    """Compile ``query`` and return its matches in ``lines`` in one call."""
    return find_matches(lines, compile_pattern(query, is_regex, ignore_case=ignore_case))


__all__ = [
    "BufferLine",
    "SearchMatch",
    "SearchState",
    "compile_pattern",
    "find_matches",
    "line_text",
    "search_lines",
]
