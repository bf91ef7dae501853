"""Utility helpers for working with files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

from quickread.models import SUPPORTED_EXTENSIONS


def is_supported(path: Path) -> bool:
    return path.suffix.lower() in SUPPORTED_EXTENSIONS


def iter_document_paths(inputs: Iterable[Path]) -> Iterator[Path]:
    """Yield paths to extract, descending into directories.

    Files named explicitly are yielded whatever their extension so that the
    caller can report unsupported ones; directories only contribute files
    with a supported extension.
    """
    for item in inputs:
        if item.is_dir():
            yield from sorted(
                child for child in item.rglob("*") if child.is_file() and is_supported(child)
            )
        else:
            yield item
