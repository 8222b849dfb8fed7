"""Unit tests for the viewer session."""

import queue
import time

import pytest

from mdscroll.exceptions import ValidationError
from mdscroll.options import ViewerOptions
from mdscroll.renderers import TokenStyle
from mdscroll.search import SearchMatch
from mdscroll.viewer import FetchOutcome, LinkKind, Viewer


class CountingHighlighter:
    """Highlighter that counts calls and returns each line unstyled."""

    def __init__(self):
        self.calls = 0

    def highlight(self, code, language):
        self.calls += 1
        return [[(TokenStyle(), code)]]


@pytest.fixture
def viewer(sample_markdown) -> Viewer:
    viewer = Viewer(ViewerOptions(syntax_highlighting=False))
    viewer.load_text(sample_markdown, source="docs/guide.md")
    return viewer


def _wait_for_fetch(viewer: Viewer, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if viewer.poll_fetch():
            return True
        time.sleep(0.01)
    return False


@pytest.mark.unit
class TestLoading:
    """Document lifecycle."""

    def test_load_text(self, viewer):
        assert viewer.line_count == 21
        assert viewer.current_line_text() == "# Guide"
        assert [h.rendered_line for h in viewer.document.headings] == [0, 4, 17]

    def test_empty_viewer(self):
        viewer = Viewer()
        assert viewer.line_count == 0
        assert viewer.current_line_text() is None
        assert viewer.follow_link() is None
        viewer.scroll_down()
        assert viewer.pane.scroll == 0

    def test_load_resets_positions_and_matches(self, viewer):
        viewer.go_to_line(10)
        viewer.apply_search("first")
        viewer.load_text("# Other")
        assert viewer.pane.scroll == 0
        assert viewer.pane.search_matches == []

    def test_load_forgets_previous_query(self, viewer):
        viewer.apply_search("Install")
        viewer.load_text("# Other")
        assert viewer.pane.search.query == ""

        viewer.reload("## Install")
        assert viewer.pane.search_matches == []

    def test_reload_clamps_scroll(self, viewer):
        viewer.go_to_bottom()
        viewer.reload("# Short\n\nbody")
        assert viewer.line_count == 4
        assert viewer.pane.scroll == 3
        assert viewer.status_message == "File reloaded"

    def test_reload_reapplies_search(self, viewer):
        viewer.apply_search("Install")
        viewer.reload("intro\n\n## Install")
        assert viewer.pane.search_matches == [SearchMatch(line=2, start=3, end=10)]

    def test_reload_after_mode_toggle_with_bad_pattern(self, viewer):
        viewer.apply_search("(")
        viewer.toggle_regex()
        viewer.reload("(again)")
        assert viewer.pane.search.query == ""
        assert viewer.pane.search_matches == []


@pytest.mark.unit
class TestDisplayToggles:
    """Theme and highlighting changes re-render the buffer."""

    def test_cycle_theme(self, viewer):
        assert viewer.cycle_theme() == "dracula"
        assert viewer.status_message == "Theme: dracula"
        heading_color = viewer.lines[0].spans[0].style.color.name
        assert heading_color == viewer.theme.heading_1

    def test_set_theme_keeps_text(self, viewer):
        before = [line.plain for line in viewer.lines]
        viewer.set_theme("nord")
        assert [line.plain for line in viewer.lines] == before

    def test_highlighter_only_used_when_enabled(self, sample_markdown):
        highlighter = CountingHighlighter()
        viewer = Viewer(ViewerOptions(syntax_highlighting=False), highlighter=highlighter)
        viewer.load_text(sample_markdown)
        assert highlighter.calls == 0

        assert viewer.toggle_highlighting() is True
        assert highlighter.calls == 2

        viewer.toggle_highlighting()
        assert highlighter.calls == 2

    def test_failed_highlighter_setup_keeps_state(self, viewer, monkeypatch):
        def broken_highlighter(style):
            raise ValidationError(f"Unknown highlight style: {style}", parameter_name="style")

        monkeypatch.setattr("mdscroll.viewer.session.PygmentsHighlighter", broken_highlighter)
        before = viewer.lines

        with pytest.raises(ValidationError):
            viewer.toggle_highlighting()

        assert viewer.syntax_highlighting is False
        assert viewer.highlighter is None
        assert viewer.lines is before

    def test_horizontal_scroll_ignored_while_wrapping(self, viewer):
        viewer.scroll_right()
        assert viewer.pane.horizontal_scroll == 0

        viewer.toggle_line_wrap()
        viewer.scroll_right()
        viewer.scroll_right()
        assert viewer.pane.horizontal_scroll == 8
        viewer.scroll_left()
        assert viewer.pane.horizontal_scroll == 4

    def test_outline_and_line_number_toggles(self, viewer):
        assert viewer.toggle_outline() is False
        assert viewer.toggle_line_numbers() is True


@pytest.mark.unit
class TestPanes:
    """Splitting and pane isolation."""

    def test_split_isolates_search(self, viewer):
        assert viewer.split("vertical") is True
        assert viewer.active_pane == 1

        viewer.cycle_pane()
        assert viewer.active_pane == 0
        viewer.apply_search("first")

        assert viewer.panes[0].search_matches
        assert viewer.panes[1].search_matches == []

    def test_split_copies_position(self, viewer):
        viewer.go_to_line(6)
        viewer.split("horizontal")
        assert viewer.pane.scroll == 6
        assert viewer.split_direction == "horizontal"

    def test_only_one_split(self, viewer):
        assert viewer.split("vertical") is True
        assert viewer.split("vertical") is False
        assert len(viewer.panes) == 2

    def test_split_none_is_rejected(self, viewer):
        assert viewer.split("none") is False

    def test_close_pane(self, viewer):
        viewer.split("vertical")
        assert viewer.close_pane() is True
        assert len(viewer.panes) == 1
        assert viewer.split_direction == "none"
        assert viewer.close_pane() is False

    def test_panes_scroll_independently(self, viewer):
        viewer.split("vertical")
        viewer.go_to_line(12)
        assert viewer.panes[0].scroll == 0
        assert viewer.panes[1].scroll == 12

    def test_reload_clamps_every_pane(self, viewer):
        viewer.go_to_line(20)
        viewer.split("vertical")
        viewer.reload("one line")
        assert [pane.scroll for pane in viewer.panes] == [1, 1]


@pytest.mark.unit
class TestSearch:
    """Search from the active pane."""

    def test_apply_search_jumps_to_first_match(self, viewer):
        assert viewer.apply_search("Links") == 1
        assert viewer.pane.scroll == 17
        assert viewer.status_message == "1 matches found"

    def test_next_and_prev_move_scroll(self, viewer):
        viewer.apply_search("mdscroll")
        assert viewer.pane.scroll == 7
        viewer.next_match()
        assert viewer.pane.scroll == 8
        viewer.next_match()
        viewer.prev_match()
        assert viewer.pane.scroll == 8

    def test_no_matches_keeps_position(self, viewer):
        viewer.go_to_line(5)
        assert viewer.apply_search("zzz") == 0
        assert viewer.pane.scroll == 5
        assert viewer.status_message == "0 matches found"

    def test_invalid_regex_reports_and_keeps_matches(self, viewer):
        viewer.apply_search("first")
        viewer.toggle_regex()
        assert viewer.apply_search("(") is None
        assert viewer.status_message == "Invalid regex"
        assert viewer.pane.search_matches == [SearchMatch(line=11, start=2, end=7)]

    def test_empty_query_is_ignored(self, viewer):
        viewer.apply_search("first")
        assert viewer.apply_search("") is None
        assert len(viewer.pane.search_matches) == 1

    def test_clear_search(self, viewer):
        viewer.apply_search("first")
        viewer.clear_search()
        assert viewer.pane.search_matches == []
        assert viewer.status_message is None


@pytest.mark.unit
class TestOutline:
    """Outline selection and jumps use rendered lines."""

    def test_outline_labels_are_indented(self, viewer):
        assert viewer.outline_labels() == ["Guide", "  Install", "    Links"]

    def test_outline_labels_fit_width(self):
        viewer = Viewer(ViewerOptions(syntax_highlighting=False, outline_width=12))
        viewer.load_text("# Introduction\n\n## Setup steps")
        assert viewer.outline_labels() == ["Intro...", "  Set..."]

    def test_outline_labels_without_room_for_ellipsis(self):
        viewer = Viewer(ViewerOptions(syntax_highlighting=False, outline_width=5))
        viewer.load_text("# Heading")
        assert viewer.outline_labels() == ["H"]

    def test_outline_selection_is_bounded(self, viewer):
        viewer.outline_up()
        assert viewer.outline_selected == 0
        for _ in range(5):
            viewer.outline_down()
        assert viewer.outline_selected == 2

    def test_jump_to_selected_heading(self, viewer):
        viewer.outline_down()
        assert viewer.jump_to_heading() is True
        assert viewer.pane.scroll == 4
        assert viewer.current_line_text() == "## Install"

    def test_jump_to_index(self, viewer):
        assert viewer.jump_to_heading(2) is True
        assert viewer.pane.scroll == 17

    def test_jump_out_of_range(self, viewer):
        assert viewer.jump_to_heading(9) is False
        assert viewer.pane.scroll == 0


@pytest.mark.unit
class TestFollowLink:
    """Links are looked up by logical line."""

    def test_anchor_jumps_to_heading(self, viewer):
        viewer.go_to_line(13)
        action = viewer.follow_link()
        assert action.kind is LinkKind.ANCHOR
        assert viewer.pane.scroll == 0
        assert viewer.status_message == "Jumped to: Guide"

    def test_no_link_on_line(self, viewer):
        assert viewer.follow_link() is None
        assert viewer.status_message == "No link on this line"

    def test_missing_anchor(self):
        viewer = Viewer(ViewerOptions(syntax_highlighting=False))
        viewer.load_text("[nowhere](#missing)")
        action = viewer.follow_link()
        assert action.kind is LinkKind.ANCHOR
        assert viewer.status_message == "Anchor not found: missing"

    def test_local_markdown_is_returned(self, viewer):
        viewer.load_text("[next](next.md)", source="docs/guide.md")
        action = viewer.follow_link()
        assert action.kind is LinkKind.LOCAL_MARKDOWN
        assert action.target.replace("\\", "/") == "docs/next.md"

    def test_external_link_is_returned(self, viewer):
        viewer.load_text("[site](https://example.com)")
        action = viewer.follow_link()
        assert action.kind is LinkKind.EXTERNAL
        assert viewer.status_message == "Link: https://example.com"


@pytest.mark.unit
class TestFetch:
    """Completed fetches replace the document wholesale."""

    def test_poll_without_fetch(self, viewer):
        assert viewer.poll_fetch() is False

    def test_poll_empty_channel(self, viewer):
        assert viewer.poll_fetch(queue.Queue()) is False

    def test_poll_applies_outcome(self, viewer):
        channel = queue.Queue()
        channel.put(FetchOutcome(url="https://example.com/notes.md", text="# Notes"))
        viewer.go_to_line(9)

        assert viewer.poll_fetch(channel) is True
        assert viewer.source == "https://example.com/notes.md"
        assert viewer.current_line_text() == "# Notes"
        assert viewer.pane.scroll == 0
        assert viewer.status_message == "Loaded: notes.md"

    def test_poll_reports_error_and_keeps_document(self, viewer):
        channel = queue.Queue()
        channel.put(FetchOutcome(url="https://example.com/x.md", error="404 Not Found"))
        before = viewer.lines

        assert viewer.poll_fetch(channel) is True
        assert viewer.lines == before
        assert viewer.status_message == "Error: 404 Not Found"

    def test_start_fetch_runs_in_background(self, viewer):
        viewer.start_fetch("https://example.com/remote.md", lambda url: f"# From {url.rsplit('/', 1)[-1]}")
        assert viewer.is_loading

        assert _wait_for_fetch(viewer)
        assert not viewer.is_loading
        assert viewer.current_line_text() == "# From remote.md"

    def test_fetcher_failure_becomes_error(self, viewer):
        def fail(url):
            raise ConnectionError("connection refused")

        viewer.start_fetch("https://example.com/remote.md", fail)
        assert _wait_for_fetch(viewer)
        assert viewer.status_message == "Error: connection refused"
