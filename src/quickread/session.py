"""Per-user reading session: active document, query, matches and cursor."""

from __future__ import annotations

import logging
from typing import List

from quickread.extraction.pipeline import ExtractionPipeline
from quickread.models import Document, MatchSet, Segment
from quickread.search.engine import SearchMode, search
from quickread.search.highlight import render
from quickread.search.navigator import MatchNavigator
from quickread.storage.recent import InMemoryRecentUploads, RecentUploads

LOGGER = logging.getLogger(__name__)


class ReaderSession:
    """Holds what the reader currently shows.

    Only the most recently started extraction may change the session; results
    of superseded extractions are dropped.
    """

    def __init__(
        self,
        store: RecentUploads | None = None,
        *,
        pipeline: ExtractionPipeline | None = None,
        mode: SearchMode = SearchMode.LITERAL,
    ) -> None:
        self.store = store if store is not None else InMemoryRecentUploads()
        self.pipeline = pipeline or ExtractionPipeline()
        self.mode = mode
        self.recent: List[Document] = list(self.store.load())
        self.current: Document | None = None
        self.query = ""
        self.navigator = MatchNavigator()
        self._generation = 0

    @property
    def match_set(self) -> MatchSet:
        return self.navigator.match_set

    @property
    def cursor(self) -> int | None:
        return self.navigator.cursor

    @property
    def status(self) -> str:
        return self.navigator.label

    async def open_file(self, name: str, data: bytes) -> Document | None:
        """Extract an upload and make it current.

        Returns ``None`` when another upload started before this one
        finished. Errors of superseded uploads are dropped as well.
        """
        self._generation += 1
        generation = self._generation
        try:
            document = await self.pipeline.run(name, data)
        except Exception:
            if generation != self._generation:
                LOGGER.info("Discarding failed extraction of %s, superseded", name)
                return None
            raise

        if generation != self._generation:
            LOGGER.info("Discarding extraction of %s, superseded", name)
            return None

        self.store.append(document)
        self.recent.append(document)
        self.select(document)
        return document

    def select(self, document: Document) -> None:
        self.current = document
        self.set_query("")

    def set_query(self, query: str) -> MatchSet:
        self.query = query
        text = self.current.text if self.current is not None else ""
        self.navigator.reset(search(text, query, mode=self.mode))
        return self.navigator.match_set

    def next_match(self) -> int | None:
        return self.navigator.next()

    def prev_match(self) -> int | None:
        return self.navigator.prev()

    def segments(self) -> List[Segment]:
        if self.current is None:
            return []
        return render(self.current.text, self.navigator.match_set, self.navigator.cursor)

    def reset_viewer(self) -> None:
        self.current = None
        self.set_query("")

    def clear_recent(self) -> None:
        self.store.clear()
        self.recent.clear()
