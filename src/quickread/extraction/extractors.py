"""Format-specific decoders turning raw bytes into normalized text.

Each format family has one extractor class. Structural boundaries (pages,
sheets, slides) are kept as inline marker lines so they survive into the flat
text and take part in search like any other text.

PDF decoding uses PyMuPDF (fitz); Office formats use python-docx, openpyxl and
python-pptx. Blocking library calls run via ``asyncio.to_thread`` so a decode
is a sequence of awaited steps.
"""

from __future__ import annotations

import asyncio
import csv
import io
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional

import docx
import fitz  # PyMuPDF
import openpyxl
from docx.table import Table
from pptx import Presentation
from pptx.shapes.group import GroupShape

from quickread.errors import DecodeError, UnsupportedFormat
from quickread.models import FormatTag

LOGGER = logging.getLogger(__name__)

PRESENTATION_FALLBACK_TEXT = "Unable to extract PowerPoint text. Please check file format."
PRESENTATION_EMPTY_TEXT = "No readable text found in this presentation."


class FailurePolicy(Enum):
    """What :func:`extract` does when a decoder raises."""

    PROPAGATE = "propagate"
    FALLBACK = "fallback"


class FormatExtractor(ABC):
    """Base decoder. Subclasses set ``format_tag`` and implement :meth:`decode`."""

    format_tag: FormatTag
    failure_policy: FailurePolicy = FailurePolicy.PROPAGATE
    # Returned instead of raising when failure_policy is FALLBACK.
    fallback_text: str | None = None
    # Returned instead of a blank result, when set.
    empty_placeholder: str | None = None

    @abstractmethod
    async def decode(self, data: bytes) -> str:
        """Return the normalized text of ``data``."""


class PlainTextExtractor(FormatExtractor):
    format_tag = FormatTag.PLAIN_TEXT

    async def decode(self, data: bytes) -> str:
        return data.decode("utf-8-sig", errors="replace")


def _page_text(doc: Any, index: int) -> str:
    """Join the ordered text runs of one page with single spaces."""
    page = doc[index]
    return " ".join(word[4] for word in page.get_text("words"))


class PdfExtractor(FormatExtractor):
    """Page-by-page PDF decoder.

    Pages are awaited strictly in order; any failure aborts the whole
    document rather than skipping the page.
    """

    format_tag = FormatTag.PDF

    async def decode(self, data: bytes) -> str:
        doc = await asyncio.to_thread(fitz.open, stream=data, filetype="pdf")
        try:
            parts: List[str] = []
            for number in range(1, len(doc) + 1):
                page_text = await asyncio.to_thread(_page_text, doc, number - 1)
                parts.append(f"\n--- Page {number} ---\n{page_text}\n\n")
            return "".join(parts)
        finally:
            doc.close()


def _read_docx(data: bytes) -> str:
    document = docx.Document(io.BytesIO(data))
    blocks: List[str] = []
    for block in document.iter_inner_content():
        if isinstance(block, Table):
            for row in block.rows:
                blocks.extend(cell.text for cell in row.cells)
        else:
            blocks.append(block.text)
    return "".join(f"{text}\n\n" for text in blocks)


class WordProcessorExtractor(FormatExtractor):
    """Raw paragraph and table text; styling is discarded."""

    format_tag = FormatTag.WORD_PROCESSOR

    async def decode(self, data: bytes) -> str:
        return await asyncio.to_thread(_read_docx, data)


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _rows_to_csv(rows: Iterable[Iterable[Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    grid = [[_cell_text(value) for value in row] for row in rows]
    # Without a stored dimension openpyxl yields ragged rows; pad to the widest.
    width = max((len(cells) for cells in grid), default=0)
    for cells in grid:
        cells.extend([""] * (width - len(cells)))
        if any(cells):
            writer.writerow(cells)
        else:
            # csv quotes a lone empty field; blank rows stay blank
            buffer.write("," * (len(cells) - 1) + "\n" if cells else "\n")
    return buffer.getvalue().removesuffix("\n")


def _read_workbook(data: bytes) -> str:
    workbook = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    try:
        parts: List[str] = []
        for name in workbook.sheetnames:
            sheet = workbook[name]
            parts.append(f"\n--- Sheet: {name} ---\n")
            # Chartsheets have no cell grid and render as an empty CSV.
            if hasattr(sheet, "iter_rows"):
                # The stored <dimension> can be stale; scan the real extent.
                sheet.reset_dimensions()
                parts.append(_rows_to_csv(sheet.iter_rows(values_only=True)))
            parts.append("\n")
        return "".join(parts)
    finally:
        workbook.close()


class SpreadsheetExtractor(FormatExtractor):
    """Every sheet, in workbook order, rendered as CSV."""

    format_tag = FormatTag.SPREADSHEET

    async def decode(self, data: bytes) -> str:
        return await asyncio.to_thread(_read_workbook, data)


def _shape_texts(shapes: Iterable[Any], title_id: Optional[int]) -> Iterator[str]:
    """Yield non-blank text blocks, descending into groups and table cells."""
    for shape in shapes:
        if isinstance(shape, GroupShape):
            yield from _shape_texts(shape.shapes, title_id)
        elif shape.has_table:
            for row in shape.table.rows:
                for cell in row.cells:
                    if cell.text.strip():
                        yield cell.text
        elif shape.has_text_frame and shape.shape_id != title_id and shape.text.strip():
            yield shape.text


def _slide_text(number: int, slide: Any) -> str:
    text = f"\n--- Slide {number} ---\n"

    title_shape = slide.shapes.title
    title = title_shape.text if title_shape is not None else ""
    if title:
        text += f"Title: {title}\n"

    title_id = title_shape.shape_id if title_shape is not None else None
    bodies = list(_shape_texts(slide.shapes, title_id))
    if bodies:
        text += "\n".join(bodies) + "\n"

    notes: List[str] = []
    if slide.has_notes_slide:
        frame = slide.notes_slide.notes_text_frame
        if frame is not None:
            notes = [paragraph.text for paragraph in frame.paragraphs if paragraph.text.strip()]
    if notes:
        text += "Notes:\n" + "\n".join(notes) + "\n"
    return text


def _read_presentation(data: bytes) -> str:
    presentation = Presentation(io.BytesIO(data))
    return "".join(
        _slide_text(number, slide) for number, slide in enumerate(presentation.slides, start=1)
    )


class PresentationExtractor(FormatExtractor):
    """Slide titles, body text and speaker notes.

    Never fails: a broken container yields :data:`PRESENTATION_FALLBACK_TEXT`.
    """

    format_tag = FormatTag.PRESENTATION
    failure_policy = FailurePolicy.FALLBACK
    fallback_text = PRESENTATION_FALLBACK_TEXT
    empty_placeholder = PRESENTATION_EMPTY_TEXT

    async def decode(self, data: bytes) -> str:
        return await asyncio.to_thread(_read_presentation, data)


EXTRACTORS: Dict[FormatTag, FormatExtractor] = {
    extractor.format_tag: extractor
    for extractor in (
        PlainTextExtractor(),
        PdfExtractor(),
        WordProcessorExtractor(),
        SpreadsheetExtractor(),
        PresentationExtractor(),
    )
}


def get_extractor(format_tag: FormatTag) -> FormatExtractor:
    try:
        return EXTRACTORS[format_tag]
    except KeyError:
        raise UnsupportedFormat(extension=format_tag.value) from None


def _label(format_tag: FormatTag) -> str:
    return format_tag.name.replace("_", " ").lower()


async def extract(data: bytes, format_tag: FormatTag) -> str:
    """Decode ``data`` with the extractor registered for ``format_tag``.

    Raises:
        UnsupportedFormat: no extractor is registered for the tag.
        DecodeError: the decoder failed and its policy is ``PROPAGATE``.
    """
    extractor = get_extractor(format_tag)
    try:
        text = await extractor.decode(data)
    except Exception as exc:
        if extractor.failure_policy is FailurePolicy.FALLBACK and extractor.fallback_text is not None:
            LOGGER.error("%s parse error, using fallback text: %s", _label(format_tag), exc)
            return extractor.fallback_text
        if isinstance(exc, DecodeError):
            raise
        raise DecodeError(format_tag, f"Could not decode {_label(format_tag)} content: {exc}") from exc

    if extractor.empty_placeholder is not None and not text.strip():
        return extractor.empty_placeholder
    return text
