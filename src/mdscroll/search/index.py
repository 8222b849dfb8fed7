#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdscroll/search/index.py
"""Pattern compilation and buffer scanning."""

from __future__ import annotations

import re
from typing import Sequence, Union

from rich.text import Text

from mdscroll.exceptions import InvalidPatternError
from mdscroll.search.types import SearchMatch

BufferLine = Union[Text, str]


def compile_pattern(query: str, is_regex: bool, ignore_case: bool = False) -> re.Pattern[str]:
    """Compile a search query.

    Parameters
    ----------
    query : str
        Query text as typed by the user
    is_regex : bool
        Treat the query as a regular expression; otherwise every
        metacharacter is escaped so the query matches verbatim
    ignore_case : bool, default = False
        Match case-insensitively

    Returns
    -------
    re.Pattern
        Compiled pattern

    Raises
    ------
    InvalidPatternError
        If ``is_regex`` is set and the query does not compile

    """
    flags = re.IGNORECASE if ignore_case else 0
    if not is_regex:
        return re.compile(re.escape(query), flags)
    try:
        return re.compile(query, flags)
    except re.error as e:
        raise InvalidPatternError(query, original_error=e) from e


def line_text(line: BufferLine) -> str:
    """Return the concatenated span text of a buffer line."""
    return line.plain if isinstance(line, Text) else line


def find_matches(lines: Sequence[BufferLine], pattern: re.Pattern[str]) -> list[SearchMatch]:
    """Collect every non-overlapping match, top to bottom and left to right.

    Parameters
    ----------
    lines : sequence of rich.text.Text or str
        Rendered buffer
    pattern : re.Pattern
        Compiled pattern from ``compile_pattern``

    Returns
    -------
    list of SearchMatch
        Matches in buffer order

    """
    matches: list[SearchMatch] = []
    for line_index, line in enumerate(lines):
        for match in pattern.finditer(line_text(line)):
            matches.append(SearchMatch(line=line_index, start=match.start(), end=match.end()))
    return matches
