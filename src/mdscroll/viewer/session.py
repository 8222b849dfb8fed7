#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdscroll/viewer/session.py
"""Viewer session: one document, its rendered buffer and the panes over it.

The session owns the single current ``Document`` and the buffer rendered
from it. Both are replaced wholesale when new text arrives (load, reload,
completed fetch); the buffer is regenerated on theme change and highlight
toggle. After every re-render the pane positions are clamped to the new
buffer length.

Everything runs on the caller's thread. The only background work is an
optional fetch started with ``start_fetch``, which hands a complete text back
through a one-slot queue that ``poll_fetch`` drains without blocking.

"""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from pathlib import PurePath
from typing import Callable, Optional

from rich.text import Text

from mdscroll.ast.nodes import Document
from mdscroll.constants import MAX_PANES, SplitDirection
from mdscroll.exceptions import InvalidPatternError
from mdscroll.options import ViewerOptions
from mdscroll.parsers.assembler import parse_markdown
from mdscroll.renderers.highlight import Highlighter, PygmentsHighlighter
from mdscroll.renderers.terminal import render_document
from mdscroll.search.index import line_text
from mdscroll.search.types import SearchMatch
from mdscroll.themes import Theme, get_theme, next_theme
from mdscroll.viewer.links import LinkAction, LinkKind, resolve_link
from mdscroll.viewer.pane import PaneState, clamp_line

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchOutcome:
    """Result of a background fetch: either ``text`` or ``error`` is set."""

    url: str
    text: Optional[str] = None
    error: Optional[str] = None


class Viewer:
    """State of a viewing session.

    Parameters
    ----------
    options : ViewerOptions or None, default = None
        Display preferences
    highlighter : Highlighter or None, default = None
        Code highlighter to use while highlighting is enabled. When omitted a
        ``PygmentsHighlighter`` is created on first use.

    Examples
    --------
        >>> viewer = Viewer()
        >>> viewer.load_text("# Title\\n\\nSome text")
        >>> viewer.line_count
        4

    """

    def __init__(self, options: Optional[ViewerOptions] = None, highlighter: Optional[Highlighter] = None):
        """Initialize an empty session."""
        self.options = options or ViewerOptions()
        self.theme: Theme = get_theme(self.options.theme)
        self.syntax_highlighting = self.options.syntax_highlighting
        self.line_wrap = self.options.line_wrap
        self.show_outline = self.options.show_outline
        self.show_line_numbers = self.options.show_line_numbers

        self._highlighter = highlighter
        self.document: Optional[Document] = None
        self.lines: tuple[Text, ...] = ()
        self.source: Optional[str] = None

        self.panes: list[PaneState] = [PaneState()]
        self.active_pane = 0
        self.split_direction: SplitDirection = "none"
        self.outline_selected = 0
        self.status_message: Optional[str] = None

        self._fetch_channel: Optional[queue.Queue[FetchOutcome]] = None

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------

    @property
    def highlighter(self) -> Optional[Highlighter]:
        """Return the highlighter to render with, or None when disabled."""
        if not self.syntax_highlighting:
            return None
        if self._highlighter is None:
            self._highlighter = PygmentsHighlighter(self.options.highlight_style)
        return self._highlighter

    @property
    def line_count(self) -> int:
        """Return the number of rendered lines."""
        return len(self.lines)

    @property
    def pane(self) -> PaneState:
        """Return the active pane."""
        return self.panes[self.active_pane]

    def load_text(self, text: str, source: Optional[str] = None) -> None:
        """Replace the current document with newly parsed text.

        All panes return to the top and drop their search.

        Parameters
        ----------
        text : str
            Markdown source
        source : str or None, default = None
            Path or URL the text came from

        """
        self.document = parse_markdown(text)
        self.source = source
        self.rerender()

        for pane in self.panes:
            pane.scroll = 0
            pane.horizontal_scroll = 0
            pane.search.clear()

        self.outline_selected = 0
        self.status_message = None
        logger.info("Loaded %s (%d lines)", source or "<text>", self.line_count)

    def reload(self, text: str) -> None:
        """Re-parse changed text for the same source, keeping positions.

        Scroll offsets are clamped to the new buffer and every pane's query
        is re-run so that its matches refer to the new buffer.
        """
        self.document = parse_markdown(text)
        self.rerender()
        for pane in self.panes:
            if pane.search.query:
                current = pane.search.current
                try:
                    pane.search.apply(pane.search.query, self.lines)
                except InvalidPatternError:
                    # mode was toggled since the query last ran
                    pane.search.clear()
                    continue
                if pane.search.matches:
                    pane.search.current = min(current, len(pane.search.matches) - 1)
        self.outline_selected = min(self.outline_selected, max(len(self.document.headings) - 1, 0))
        self.status_message = "File reloaded"
        logger.info("Reloaded %s (%d lines)", self.source or "<text>", self.line_count)

    def rerender(self) -> None:
        """Regenerate the buffer from the current document.

        The previous buffer is discarded and pane positions are clamped to
        the new length.
        """
        if self.document is None:
            return
        result = render_document(self.document, self.theme, self.highlighter, self.options.renderer)
        self.document = self.document.with_rendered_lines(result.headings)
        self.lines = result.lines
        for pane in self.panes:
            pane.clamp(self.line_count)

    def set_theme(self, name: str) -> None:
        """Switch to a named theme and re-render."""
        self.theme = get_theme(name)
        self.rerender()

    def cycle_theme(self) -> str:
        """Switch to the next built-in theme and return its name."""
        self.theme = next_theme(self.theme.name)
        self.rerender()
        self.status_message = f"Theme: {self.theme.name}"
        return self.theme.name

    def toggle_highlighting(self) -> bool:
        """Flip syntax highlighting and re-render.

        The highlighter is created before any state changes, so a failure
        leaves the flag and the buffer as they were.
        """
        enabled = not self.syntax_highlighting
        if enabled and self._highlighter is None:
            self._highlighter = PygmentsHighlighter(self.options.highlight_style)
        self.syntax_highlighting = enabled
        self.rerender()
        return self.syntax_highlighting

    def toggle_line_wrap(self) -> bool:
        self.line_wrap = not self.line_wrap
        return self.line_wrap

    def toggle_line_numbers(self) -> bool:
        self.show_line_numbers = not self.show_line_numbers
        return self.show_line_numbers

    def toggle_outline(self) -> bool:
        self.show_outline = not self.show_outline
        return self.show_outline

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def scroll_down(self) -> None:
        self.pane.line_down(self.line_count)

    def scroll_up(self) -> None:
        self.pane.line_up(self.line_count)

    def scroll_page_down(self, page_size: int) -> None:
        self.pane.half_page_down(page_size, self.line_count)

    def scroll_page_up(self, page_size: int) -> None:
        self.pane.half_page_up(page_size, self.line_count)

    def go_to_top(self) -> None:
        self.pane.to_top()

    def go_to_bottom(self) -> None:
        self.pane.to_bottom(self.line_count)

    def go_to_line(self, line: int) -> None:
        self.pane.go_to_line(line, self.line_count)

    def scroll_left(self) -> None:
        """Scroll left; ignored while lines are wrapped."""
        if not self.line_wrap:
            self.pane.scroll_left(self.options.horizontal_step)

    def scroll_right(self) -> None:
        """Scroll right; ignored while lines are wrapped."""
        if not self.line_wrap:
            self.pane.scroll_right(self.options.horizontal_step)

    def current_line_text(self) -> Optional[str]:
        """Return the plain text of the active pane's top line."""
        if not self.lines:
            return None
        return line_text(self.lines[clamp_line(self.pane.scroll, self.line_count)])

    # ------------------------------------------------------------------
    # Panes
    # ------------------------------------------------------------------

    def split(self, direction: SplitDirection) -> bool:
        """Split the active pane; only one split is supported.

        The new pane copies the scroll position but starts with no search.
        Returns False if the view is already split.
        """
        if direction == "none" or len(self.panes) >= MAX_PANES:
            return False
        self.panes.append(self.pane.clone_for_split())
        self.split_direction = direction
        self.active_pane = len(self.panes) - 1
        return True

    def close_pane(self) -> bool:
        if len(self.panes) <= 1:
            return False
        self.panes.pop(self.active_pane)
        self.split_direction = "none"
        self.active_pane = 0
        return True

    def cycle_pane(self) -> int:
        if len(self.panes) > 1:
            self.active_pane = (self.active_pane + 1) % len(self.panes)
        return self.active_pane

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def apply_search(self, query: str) -> Optional[int]:
        """Search the buffer from the active pane.

        Returns the match count, or None when the query was empty or the
        regex was invalid. An invalid regex leaves the pane's matches as they
        were and reports the problem in ``status_message``.
        """
        search = self.pane.search
        try:
            count = search.apply(query, self.lines)
        except InvalidPatternError as e:
            logger.debug("Rejected search pattern: %s", e.message)
            self.status_message = "Invalid regex"
            return None
        if count is None:
            return None

        self.status_message = f"{count} matches found"
        if count:
            self._jump_to_match(search.current_match)
        return count

    def next_match(self) -> Optional[SearchMatch]:
        match = self.pane.search.next()
        self._jump_to_match(match)
        return match

    def prev_match(self) -> Optional[SearchMatch]:
        match = self.pane.search.prev()
        self._jump_to_match(match)
        return match

    def clear_search(self) -> None:
        self.pane.search.clear()
        self.status_message = None

    def toggle_regex(self) -> bool:
        return self.pane.search.toggle_regex()

    def _jump_to_match(self, match: Optional[SearchMatch]) -> None:
        if match is not None:
            self.go_to_line(match.line)

    # ------------------------------------------------------------------
    # Outline
    # ------------------------------------------------------------------

    def outline_labels(self) -> list[str]:
        """Return indented heading labels fitted to the outline width.

        Two columns go to the panel borders and two to the selection marker.
        Labels that do not fit are cut, ending in ``...`` when there is room.
        """
        if self.document is None:
            return []
        available = max(self.options.outline_width - 4, 0)
        labels = []
        for heading in self.document.headings:
            indent = "  " * (heading.level - 1)
            width = max(available - len(indent), 0)
            text = heading.text
            if len(text) > width:
                text = text[: width - 3] + "..." if width > 3 else text[:width]
            labels.append(indent + text)
        return labels

    def outline_up(self) -> None:
        if self.outline_selected > 0:
            self.outline_selected -= 1

    def outline_down(self) -> None:
        if self.document is not None and self.outline_selected < len(self.document.headings) - 1:
            self.outline_selected += 1

    def jump_to_heading(self, index: Optional[int] = None) -> bool:
        """Scroll the active pane to a heading's rendered line.

        Parameters
        ----------
        index : int or None, default = None
            Outline index; defaults to the current outline selection

        """
        if self.document is None:
            return False
        index = self.outline_selected if index is None else index
        if not 0 <= index < len(self.document.headings):
            return False
        self.go_to_line(self.document.headings[index].rendered_line)
        return True

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------

    def follow_link(self) -> Optional[LinkAction]:
        """Follow the link recorded at the active pane's top line.

        Links are indexed by logical line, which only approximates the
        rendered position. Anchors are resolved here by jumping to the
        matching heading; other targets are returned for the caller to open.
        """
        if self.document is None:
            return None
        link = self.document.link_at_line(self.pane.scroll)
        if link is None:
            self.status_message = "No link on this line"
            return None

        action = resolve_link(link.url, self.source)
        if action.kind is LinkKind.ANCHOR:
            heading = self.document.heading_for_anchor(action.target or "")
            if heading is None:
                self.status_message = f"Anchor not found: {action.target}"
            else:
                self.go_to_line(heading.rendered_line)
                self.status_message = f"Jumped to: {heading.text}"
        elif action.kind is LinkKind.EXTERNAL:
            self.status_message = f"Link: {link.url}"
        elif action.kind is LinkKind.UNKNOWN:
            self.status_message = f"Unknown link type: {link.url}"
        return action

    # ------------------------------------------------------------------
    # Background fetch
    # ------------------------------------------------------------------

    @property
    def is_loading(self) -> bool:
        return self._fetch_channel is not None

    def start_fetch(self, url: str, fetcher: Callable[[str], str]) -> None:
        """Run ``fetcher(url)`` on a worker thread.

        The worker delivers exactly one ``FetchOutcome``; nothing in the
        session is touched until ``poll_fetch`` receives it.
        """
        channel: queue.Queue[FetchOutcome] = queue.Queue(maxsize=1)

        def worker() -> None:
            try:
                outcome = FetchOutcome(url=url, text=fetcher(url))
            except Exception as e:
                outcome = FetchOutcome(url=url, error=str(e) or type(e).__name__)
            channel.put(outcome)

        self._fetch_channel = channel
        self.status_message = f"Loading {url}..."
        threading.Thread(target=worker, name="mdscroll-fetch", daemon=True).start()

    def poll_fetch(self, channel: Optional[queue.Queue[FetchOutcome]] = None) -> bool:
        """Apply a completed fetch without blocking.

        Parameters
        ----------
        channel : queue.Queue or None, default = None
            Queue to poll; defaults to the one created by ``start_fetch``

        Returns
        -------
        bool
            True if an outcome was received and applied

        """
        channel = channel or self._fetch_channel
        if channel is None:
            return False
        try:
            outcome = channel.get_nowait()
        except queue.Empty:
            return False

        if channel is self._fetch_channel:
            self._fetch_channel = None

        if outcome.error is not None or outcome.text is None:
            logger.info("Fetch of %s failed: %s", outcome.url, outcome.error)
            self.status_message = f"Error: {outcome.error}"
            return True

        self.load_text(outcome.text, source=outcome.url)
        display_name = PurePath(outcome.url.rstrip("/")).name or outcome.url
        self.status_message = f"Loaded: {display_name}"
        return True
