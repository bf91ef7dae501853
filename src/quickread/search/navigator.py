"""Cyclic cursor over a match set."""

from __future__ import annotations

from quickread.models import Match, MatchSet


class MatchNavigator:
    """Tracks the active match; stepping past either end wraps around."""

    def __init__(self, match_set: MatchSet | None = None) -> None:
        self._match_set = match_set if match_set is not None else MatchSet(query="")
        self._cursor = 0

    @property
    def match_set(self) -> MatchSet:
        return self._match_set

    @property
    def cursor(self) -> int | None:
        if not self._match_set:
            return None
        return self._cursor

    @property
    def active(self) -> Match | None:
        if not self._match_set:
            return None
        return self._match_set[self._cursor]

    @property
    def label(self) -> str:
        total = len(self._match_set)
        if not total:
            return "0/0"
        return f"{self._cursor + 1}/{total}"

    def reset(self, match_set: MatchSet) -> None:
        self._match_set = match_set
        self._cursor = 0

    def next(self) -> int | None:
        total = len(self._match_set)
        if total:
            self._cursor = (self._cursor + 1) % total
        return self.cursor

    def prev(self) -> int | None:
        total = len(self._match_set)
        if total:
            self._cursor = (self._cursor - 1 + total) % total
        return self.cursor

    def jump_to(self, index: int) -> int | None:
        """Move to ``index``, clamped into range."""
        total = len(self._match_set)
        if total:
            self._cursor = min(max(index, 0), total - 1)
        return self.cursor
