"""Recent uploads log.

The reader session only talks to the :class:`RecentUploads` protocol; the
SQLite implementation persists the log between sessions, the in-memory one
keeps it for the lifetime of the process.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Protocol, runtime_checkable

from quickread.models import Document, FormatTag


@runtime_checkable
class RecentUploads(Protocol):
    """Append-only ordered log of successfully extracted documents."""

    def append(self, document: Document) -> None:
        ...

    def load(self) -> List[Document]:
        ...

    def clear(self) -> None:
        ...


class InMemoryRecentUploads:
    def __init__(self, documents: List[Document] | None = None) -> None:
        self._documents: List[Document] = list(documents or [])

    def append(self, document: Document) -> None:
        self._documents.append(document)

    def load(self) -> List[Document]:
        return list(self._documents)

    def clear(self) -> None:
        self._documents.clear()


class SQLiteRecentUploads:
    """SQLite-backed recent uploads log."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)
        self._conn = sqlite3.connect(self.db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL;")
        self._conn.execute("PRAGMA synchronous=NORMAL;")
        self._ensure_schema()

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    def close(self) -> None:
        self._conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        try:
            yield self._conn
            self._conn.commit()
        except Exception:
            self._conn.rollback()
            raise

    def _ensure_schema(self) -> None:
        with self.transaction() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS recent_uploads (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    doc_id TEXT NOT NULL UNIQUE,
                    name TEXT NOT NULL,
                    format TEXT NOT NULL,
                    text TEXT NOT NULL,
                    created_at TEXT DEFAULT CURRENT_TIMESTAMP
                )
                """
            )

    @staticmethod
    def _to_document(row: sqlite3.Row) -> Document:
        return Document(
            id=row["doc_id"],
            name=row["name"],
            format_tag=FormatTag(row["format"]),
            text=row["text"],
        )

    def append(self, document: Document) -> None:
        with self.transaction() as conn:
            conn.execute(
                "INSERT INTO recent_uploads(doc_id, name, format, text) VALUES (?, ?, ?, ?)",
                (document.id, document.name, document.format_tag.value, document.text),
            )

    def load(self) -> List[Document]:
        rows = self._conn.execute(
            "SELECT doc_id, name, format, text FROM recent_uploads ORDER BY seq"
        ).fetchall()
        return [self._to_document(row) for row in rows]

    def get(self, doc_id: str) -> Document | None:
        row = self._conn.execute(
            "SELECT doc_id, name, format, text FROM recent_uploads WHERE doc_id = ?",
            (doc_id,),
        ).fetchone()
        return self._to_document(row) if row else None

    def clear(self) -> None:
        with self.transaction() as conn:
            conn.execute("DELETE FROM recent_uploads")
