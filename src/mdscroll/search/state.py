#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdscroll/search/state.py
"""Per-pane search state with circular match navigation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from mdscroll.search.index import BufferLine, compile_pattern, find_matches
from mdscroll.search.types import SearchMatch

logger = logging.getLogger(__name__)


@dataclass
class SearchState:
    """Query, mode, matches and cursor of one pane.

    Parameters
    ----------
    query : str, default = ""
        Last successfully applied query
    is_regex : bool, default = False
        Whether queries are compiled as regular expressions
    matches : list of SearchMatch
        Matches of ``query`` in buffer order
    current : int, default = 0
        Index of the current match

    """

    query: str = ""
    is_regex: bool = False
    matches: list[SearchMatch] = field(default_factory=list)
    current: int = 0
    ignore_case: bool = False

    @property
    def current_match(self) -> Optional[SearchMatch]:
        """Return the match under the cursor, if any."""
        if 0 <= self.current < len(self.matches):
            return self.matches[self.current]
        return None

    def apply(self, query: str, lines: Sequence[BufferLine]) -> Optional[int]:
        """Run a query against the buffer.

        An empty query changes nothing. On success the match list is
        replaced and the cursor reset to the first match.

        Parameters
        ----------
        query : str
            Query text
        lines : sequence of rich.text.Text or str
            Rendered buffer to scan

        Returns
        -------
        int or None
            Number of matches, or None when the query was empty

        Raises
        ------
        InvalidPatternError
            If regex mode is on and the query does not compile; the
            existing matches, cursor and mode are left untouched

        """
        if not query:
            return None

        pattern = compile_pattern(query, self.is_regex, ignore_case=self.ignore_case)
        self.query = query
        self.matches = find_matches(lines, pattern)
        self.current = 0
        logger.debug("Search %r (regex=%s) found %d matches", query, self.is_regex, len(self.matches))
        return len(self.matches)

    def next(self) -> Optional[SearchMatch]:
        """Advance the cursor, wrapping to the first match."""
        if not self.matches:
            return None
        self.current = (self.current + 1) % len(self.matches)
        return self.matches[self.current]

    def prev(self) -> Optional[SearchMatch]:
        """Move the cursor back, wrapping to the last match."""
        if not self.matches:
            return None
        self.current = len(self.matches) - 1 if self.current == 0 else self.current - 1
        return self.matches[self.current]

    def clear(self) -> None:
        """Forget the query and matches; the mode is kept."""
        self.query = ""
        self.matches = []
        self.current = 0

    def toggle_regex(self) -> bool:
        """Flip between literal and regex mode and return the new mode."""
        self.is_regex = not self.is_regex
        return self.is_regex
