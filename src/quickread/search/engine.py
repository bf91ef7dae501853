"""Case-insensitive full-text scanning of a document's text."""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import List

from quickread.models import Match, MatchSet

LOGGER = logging.getLogger(__name__)


class SearchMode(Enum):
    LITERAL = "literal"
    # Query is a regular expression; malformed patterns match nothing.
    PATTERN = "pattern"


def _compile(query: str, mode: SearchMode) -> re.Pattern[str] | None:
    if mode is SearchMode.LITERAL:
        return re.compile(re.escape(query), re.IGNORECASE)
    try:
        return re.compile(query, re.IGNORECASE)
    except re.error as exc:
        LOGGER.debug("Ignoring malformed pattern %r: %s", query, exc)
        return None


def search(text: str, query: str, *, mode: SearchMode = SearchMode.LITERAL) -> MatchSet:
    """Find every occurrence of ``query`` in ``text``, left to right.

    Blank queries disable search and yield an empty set. Matches never
    overlap and are returned in ascending order of offset.
    """
    if not query.strip():
        return MatchSet(query=query)

    pattern = _compile(query, mode)
    if pattern is None:
        return MatchSet(query=query)

    matches: List[Match] = []
    for found in pattern.finditer(text):
        start, end = found.span()
        if end == start:
            continue
        matches.append(Match(start=start, length=end - start))
    return MatchSet(query=query, matches=tuple(matches))
