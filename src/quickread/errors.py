"""Exceptions raised while turning uploads into documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quickread.models import FormatTag


class QuickReadError(Exception):
    """Base class for errors reported to the user as a single message."""


class UnsupportedFormat(QuickReadError):
    """The file extension does not map to any known format."""

    def __init__(self, *, name: str | None = None, extension: str = "") -> None:
        self.name = name
        self.extension = extension
        label = f".{extension}" if extension else "no extension"
        subject = f"{name} " if name else ""
        super().__init__(f"Unsupported file type: {subject}({label})")


class DecodeError(QuickReadError):
    """A format-specific decoder could not read the file contents."""

    def __init__(self, format_tag: FormatTag, message: str) -> None:
        self.format_tag = format_tag
        super().__init__(message)


class ExtractionError(QuickReadError):
    """Extraction of a named file failed; ``cause`` keeps the original error."""

    def __init__(self, name: str, cause: BaseException) -> None:
        self.name = name
        self.cause = cause
        super().__init__(f"Error reading file {name}: {cause}")
