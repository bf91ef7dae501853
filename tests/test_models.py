"""Tests for core data models."""

from __future__ import annotations

import dataclasses

import pytest

from quickread.errors import UnsupportedFormat
from quickread.models import (
    SUPPORTED_EXTENSIONS,
    Document,
    FormatTag,
    Match,
    MatchSet,
    Segment,
    SegmentKind,
)


class TestFormatTag:
    """Extension to format mapping."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("notes.txt", FormatTag.PLAIN_TEXT),
            ("table.CSV", FormatTag.PLAIN_TEXT),
            ("paper.pdf", FormatTag.PDF),
            ("letter.doc", FormatTag.WORD_PROCESSOR),
            ("letter.Docx", FormatTag.WORD_PROCESSOR),
            ("budget.xls", FormatTag.SPREADSHEET),
            ("budget.xlsx", FormatTag.SPREADSHEET),
            ("deck.ppt", FormatTag.PRESENTATION),
            ("archive.v2.PPTX", FormatTag.PRESENTATION),
        ],
    )
    def test_from_name(self, name: str, expected: FormatTag) -> None:
        assert FormatTag.from_name(name) is expected

    @pytest.mark.parametrize("name", ["image.png", "README", "notes.txt.bak", ""])
    def test_unsupported(self, name: str) -> None:
        with pytest.raises(UnsupportedFormat):
            FormatTag.from_name(name)

    def test_unsupported_message(self) -> None:
        with pytest.raises(UnsupportedFormat) as excinfo:
            FormatTag.from_name("movie.MP4")

        assert excinfo.value.name == "movie.MP4"
        assert excinfo.value.extension == "mp4"
        assert "Unsupported file type" in str(excinfo.value)

    def test_from_extension_accepts_dot(self) -> None:
        assert FormatTag.from_extension(".PDF") is FormatTag.PDF

    def test_supported_extensions(self) -> None:
        assert ".pptx" in SUPPORTED_EXTENSIONS
        assert len(SUPPORTED_EXTENSIONS) == 9


class TestDocument:
    def test_immutable(self) -> None:
        document = Document(id="1", name="a.txt", format_tag=FormatTag.PLAIN_TEXT, text="x")

        with pytest.raises(dataclasses.FrozenInstanceError):
            document.text = "changed"  # type: ignore[misc]

    def test_equality(self) -> None:
        first = Document(id="1", name="a.txt", format_tag=FormatTag.PLAIN_TEXT, text="x")
        second = Document(id="1", name="a.txt", format_tag=FormatTag.PLAIN_TEXT, text="x")

        assert first == second


class TestMatchSet:
    def test_sequence_behaviour(self) -> None:
        matches = MatchSet(query="a", matches=(Match(0, 1), Match(4, 1)))

        assert len(matches) == 2
        assert matches[1].end == 5
        assert [m.start for m in matches] == [0, 4]
        assert matches

    def test_empty_is_falsy(self) -> None:
        assert not MatchSet(query="")


class TestSegment:
    def test_defaults_to_plain(self) -> None:
        segment = Segment(text="abc")

        assert segment.kind is SegmentKind.PLAIN
        assert segment.index is None
        assert segment.active is False
