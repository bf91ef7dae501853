"""Tests for the cyclic match cursor."""

from __future__ import annotations

import pytest

from quickread.models import Match, MatchSet
from quickread.search.navigator import MatchNavigator


def _matches(count: int) -> MatchSet:
    return MatchSet(query="x", matches=tuple(Match(start=i * 2, length=1) for i in range(count)))


class TestMatchNavigator:
    def test_starts_at_zero(self) -> None:
        navigator = MatchNavigator(_matches(3))

        assert navigator.cursor == 0
        assert navigator.active == Match(start=0, length=1)
        assert navigator.label == "1/3"

    @pytest.mark.parametrize("count", [1, 2, 5])
    def test_next_cycles_back_to_start(self, count: int) -> None:
        navigator = MatchNavigator(_matches(count))
        for _ in range(count):
            navigator.next()

        assert navigator.cursor == 0

    def test_prev_from_zero_wraps_to_last(self) -> None:
        navigator = MatchNavigator(_matches(4))

        assert navigator.prev() == 3
        assert navigator.label == "4/4"

    def test_next_past_last_wraps(self) -> None:
        navigator = MatchNavigator(_matches(2))

        assert navigator.next() == 1
        assert navigator.next() == 0

    def test_empty_set_is_noop(self) -> None:
        navigator = MatchNavigator()

        assert navigator.next() is None
        assert navigator.prev() is None
        assert navigator.jump_to(3) is None
        assert navigator.cursor is None
        assert navigator.active is None
        assert navigator.label == "0/0"

    def test_reset_returns_cursor_to_zero(self) -> None:
        """Cursor 2 of 3, then a new single-match set: back to 0."""
        navigator = MatchNavigator(_matches(3))
        navigator.next()
        navigator.next()
        assert navigator.cursor == 2

        navigator.reset(_matches(1))

        assert navigator.cursor == 0
        assert navigator.label == "1/1"

    @pytest.mark.parametrize(("index", "expected"), [(-4, 0), (1, 1), (99, 2)])
    def test_jump_to_clamps(self, index: int, expected: int) -> None:
        navigator = MatchNavigator(_matches(3))

        assert navigator.jump_to(index) == expected
