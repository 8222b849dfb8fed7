"""Shared data structures for the search subsystem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchMatch:
    """One match inside the rendered buffer.

    ``start`` and ``end`` are character offsets into the concatenated text
    of line ``line``.
    """

    line: int
    start: int
    end: int
