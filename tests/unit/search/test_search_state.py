"""Unit tests for per-pane search state."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mdscroll.exceptions import InvalidPatternError
from mdscroll.search import SearchMatch, SearchState

LINES = ["alpha beta", "", "beta gamma beta", "delta"]


@pytest.mark.unit
class TestApply:
    """Running queries against a buffer."""

    def test_apply_sets_matches_and_resets_cursor(self):
        state = SearchState(current=5)
        assert state.apply("beta", LINES) == 3
        assert state.query == "beta"
        assert state.current == 0
        assert state.current_match == SearchMatch(line=0, start=6, end=10)

    def test_no_matches(self):
        state = SearchState()
        assert state.apply("omega", LINES) == 0
        assert state.matches == []
        assert state.current_match is None

    def test_empty_query_changes_nothing(self):
        state = SearchState()
        state.apply("beta", LINES)
        state.next()
        before = (state.query, list(state.matches), state.current, state.is_regex)

        assert state.apply("", LINES) is None
        assert (state.query, state.matches, state.current, state.is_regex) == before

    def test_invalid_regex_leaves_state_untouched(self):
        state = SearchState()
        state.apply("beta", LINES)
        state.next()
        state.toggle_regex()
        before = (state.query, list(state.matches), state.current, state.is_regex)

        with pytest.raises(InvalidPatternError):
            state.apply("(", LINES)
        assert (state.query, state.matches, state.current, state.is_regex) == before

    def test_regex_mode(self):
        state = SearchState(is_regex=True)
        assert state.apply(r"^beta", LINES) == 1
        assert state.current_match == SearchMatch(line=2, start=0, end=4)

    def test_ignore_case(self):
        state = SearchState(ignore_case=True)
        assert state.apply("DELTA", LINES) == 1


@pytest.mark.unit
class TestNavigation:
    """Circular movement through matches."""

    def test_next_wraps(self):
        state = SearchState()
        state.apply("beta", LINES)
        assert [state.next().line for _ in range(3)] == [2, 2, 0]

    def test_prev_wraps(self):
        state = SearchState()
        state.apply("beta", LINES)
        assert state.prev() == SearchMatch(line=2, start=11, end=15)
        assert state.current == 2

    def test_navigation_without_matches(self):
        state = SearchState()
        assert state.next() is None
        assert state.prev() is None
        assert state.current == 0

    def test_clear_keeps_mode(self):
        state = SearchState(is_regex=True)
        state.apply("a", LINES)
        state.clear()
        assert state.query == ""
        assert state.matches == []
        assert state.is_regex is True

    def test_toggle_regex(self):
        state = SearchState()
        assert state.toggle_regex() is True
        assert state.toggle_regex() is False

    @given(steps=st.integers(min_value=0, max_value=20))
    def test_next_then_prev_returns_to_start(self, steps):
        state = SearchState()
        state.apply("beta", LINES)
        for _ in range(steps):
            state.next()
        for _ in range(steps):
            state.prev()
        assert state.current == 0
