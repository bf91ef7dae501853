"""Split text into plain and highlighted display segments."""

from __future__ import annotations

from typing import List

from quickread.models import MatchSet, Segment, SegmentKind


def render(text: str, match_set: MatchSet, cursor: int | None) -> List[Segment]:
    """Partition ``text`` at every match boundary.

    Joining the returned segment texts reproduces ``text`` exactly. The match
    segment whose index equals ``cursor`` is marked active; an out-of-range
    cursor marks none. Matches outside the text or overlapping an earlier
    match are left as plain text.
    """
    segments: List[Segment] = []
    position = 0
    for index, match in enumerate(match_set):
        if match.start < position or match.end > len(text) or match.length <= 0:
            continue
        if match.start > position:
            segments.append(Segment(text=text[position : match.start]))
        segments.append(
            Segment(
                text=text[match.start : match.end],
                kind=SegmentKind.MATCH,
                index=index,
                active=index == cursor,
            )
        )
        position = match.end

    if position < len(text):
        segments.append(Segment(text=text[position:]))
    return segments
