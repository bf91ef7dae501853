"""Core QuickRead data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath
from typing import Iterator, Tuple

from quickread.errors import UnsupportedFormat


class FormatTag(Enum):
    """Document format family, derived once from the file extension."""

    PLAIN_TEXT = "plain_text"
    PDF = "pdf"
    WORD_PROCESSOR = "word_processor"
    SPREADSHEET = "spreadsheet"
    PRESENTATION = "presentation"

    @classmethod
    def from_extension(cls, extension: str) -> FormatTag:
        ext = extension.lower().lstrip(".")
        try:
            return _EXTENSIONS[ext]
        except KeyError:
            raise UnsupportedFormat(extension=ext) from None

    @classmethod
    def from_name(cls, name: str) -> FormatTag:
        """Resolve the tag for a file name, case-insensitively."""
        suffix = PurePath(name).suffix
        try:
            return cls.from_extension(suffix)
        except UnsupportedFormat:
            raise UnsupportedFormat(name=name, extension=suffix.lower().lstrip(".")) from None


_EXTENSIONS = {
    "txt": FormatTag.PLAIN_TEXT,
    "csv": FormatTag.PLAIN_TEXT,
    "pdf": FormatTag.PDF,
    "doc": FormatTag.WORD_PROCESSOR,
    "docx": FormatTag.WORD_PROCESSOR,
    "xls": FormatTag.SPREADSHEET,
    "xlsx": FormatTag.SPREADSHEET,
    "ppt": FormatTag.PRESENTATION,
    "pptx": FormatTag.PRESENTATION,
}

SUPPORTED_EXTENSIONS = frozenset("." + ext for ext in _EXTENSIONS)


@dataclass(frozen=True, slots=True)
class Document:
    """Normalized text extracted from one uploaded file."""

    id: str
    name: str
    format_tag: FormatTag
    text: str


@dataclass(frozen=True, slots=True)
class Match:
    """Half-open range ``[start, start + length)`` into a document's text."""

    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True, slots=True)
class MatchSet:
    """Ascending, non-overlapping matches of one query over one text."""

    query: str
    matches: Tuple[Match, ...] = ()

    def __len__(self) -> int:
        return len(self.matches)

    def __iter__(self) -> Iterator[Match]:
        return iter(self.matches)

    def __getitem__(self, index: int) -> Match:
        return self.matches[index]


class SegmentKind(Enum):
    PLAIN = "plain"
    MATCH = "match"


@dataclass(frozen=True, slots=True)
class Segment:
    """Display run of text; match runs carry their position in the MatchSet."""

    text: str
    kind: SegmentKind = SegmentKind.PLAIN
    index: int | None = None
    active: bool = False
