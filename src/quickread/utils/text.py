"""Text helpers for presenting matches."""

from __future__ import annotations

from typing import Tuple

from quickread.models import Match


def collapse_whitespace(text: str) -> str:
    """Replace runs of whitespace with single spaces."""
    return " ".join(text.split())


def snippet(text: str, match: Match, *, context: int = 40) -> Tuple[str, str, str]:
    """Return ``(before, matched, after)`` around ``match``.

    ``before`` and ``after`` hold at most ``context`` characters each, with
    whitespace collapsed so markers and line breaks fit on one line.
    """
    context = max(context, 0)
    start = max(match.start - context, 0)
    before = text[start : match.start]
    after = text[match.end : match.end + context]
    return (
        collapse_whitespace(before) + (" " if before[-1:].isspace() else ""),
        text[match.start : match.end],
        (" " if after[:1].isspace() else "") + collapse_whitespace(after),
    )
