#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdscroll/viewer/pane.py
"""Scroll and search state of a single pane.

Vertical positions are line indices into the rendered buffer and are always
clamped to ``[0, total_lines - 1]``. The horizontal offset only saturates at
zero; an offset past the end of a line simply shows an empty row.

"""

from __future__ import annotations

from dataclasses import dataclass, field

from mdscroll.search.state import SearchState
from mdscroll.search.types import SearchMatch


def clamp_line(line: int, total_lines: int) -> int:
    """Clamp a line index to the buffer bounds (0 for an empty buffer)."""
    return max(0, min(line, total_lines - 1))


@dataclass
class PaneState:
    """One independently scrollable and searchable view of the buffer.

    Parameters
    ----------
    scroll : int, default = 0
        Index of the top visible line
    horizontal_scroll : int, default = 0
        Column offset used when line wrap is off
    search : SearchState
        Search state owned by this pane only

    """

    scroll: int = 0
    horizontal_scroll: int = 0
    search: SearchState = field(default_factory=SearchState)

    @property
    def search_matches(self) -> list[SearchMatch]:
        """Return this pane's current match list."""
        return self.search.matches

    def go_to_line(self, line: int, total_lines: int) -> None:
        """Move the top of the pane to ``line``, clamped."""
        self.scroll = clamp_line(line, total_lines)

    def scroll_by(self, delta: int, total_lines: int) -> None:
        """Move by ``delta`` lines, clamped."""
        self.go_to_line(self.scroll + delta, total_lines)

    def line_down(self, total_lines: int) -> None:
        self.scroll_by(1, total_lines)

    def line_up(self, total_lines: int) -> None:
        self.scroll_by(-1, total_lines)

    def half_page_down(self, page_size: int, total_lines: int) -> None:
        self.scroll_by(page_size // 2, total_lines)

    def half_page_up(self, page_size: int, total_lines: int) -> None:
        self.scroll_by(-(page_size // 2), total_lines)

    def to_top(self) -> None:
        self.scroll = 0

    def to_bottom(self, total_lines: int) -> None:
        self.scroll = clamp_line(total_lines - 1, total_lines)

    def scroll_left(self, step: int) -> None:
        self.horizontal_scroll = max(self.horizontal_scroll - step, 0)

    def scroll_right(self, step: int) -> None:
        self.horizontal_scroll += step

    def clamp(self, total_lines: int) -> None:
        """Pull the vertical position back inside a (possibly shorter) buffer."""
        self.scroll = clamp_line(self.scroll, total_lines)

    def clone_for_split(self) -> PaneState:
        """Return a new pane at the same position with empty search state."""
        return PaneState(scroll=self.scroll, horizontal_scroll=self.horizontal_scroll)
