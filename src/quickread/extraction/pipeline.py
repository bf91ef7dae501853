"""Extraction pipeline: file name + bytes -> Document."""

from __future__ import annotations

import asyncio
import logging
import uuid
from pathlib import Path

from quickread.errors import ExtractionError, UnsupportedFormat
from quickread.extraction.extractors import extract
from quickread.models import Document, FormatTag

LOGGER = logging.getLogger(__name__)


class ExtractionPipeline:
    """Dispatches uploads to the extractor for their declared format."""

    async def run(self, name: str, data: bytes, format_tag: FormatTag | None = None) -> Document:
        """Extract ``data`` into a new :class:`Document`.

        Raises:
            UnsupportedFormat: the name's extension is not recognised. Raised
                before any decode work starts.
            ExtractionError: the decoder failed; ``cause`` holds the original.
        """
        if format_tag is None:
            format_tag = FormatTag.from_name(name)

        LOGGER.info("Extracting %s as %s", name, format_tag.value)
        try:
            text = await extract(data, format_tag)
        except UnsupportedFormat:
            raise
        except Exception as exc:
            LOGGER.error("Failed to extract %s: %s", name, exc)
            raise ExtractionError(name, exc) from exc

        if not text.strip():
            LOGGER.warning("No text extracted from %s", name)

        return Document(id=uuid.uuid4().hex, name=name, format_tag=format_tag, text=text)

    async def run_path(self, path: Path) -> Document:
        """Read ``path`` from disk and extract it."""
        format_tag = FormatTag.from_name(path.name)
        data = await asyncio.to_thread(path.read_bytes)
        return await self.run(path.name, data, format_tag)
