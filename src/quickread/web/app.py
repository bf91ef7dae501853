"""FastAPI application exposing extraction and in-document search."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Literal

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from quickread import __version__
from quickread.config import AppConfig
from quickread.errors import ExtractionError, UnsupportedFormat
from quickread.extraction.pipeline import ExtractionPipeline
from quickread.models import Document, Segment
from quickread.search.engine import SearchMode, search
from quickread.search.highlight import render
from quickread.search.navigator import MatchNavigator
from quickread.storage.recent import SQLiteRecentUploads

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="QuickRead API", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.db_path = None


class SearchPayload(BaseModel):
    doc_id: str
    query: str
    cursor: int = 0
    step: Literal["next", "prev"] | None = None
    pattern: bool = False


def _resolve_db_path(db: Path | None) -> Path:
    if db is None:
        db = app.state.db_path
    config = AppConfig(db_path=db if db is not None else AppConfig().db_path)
    return config.resolve_db_path(Path.cwd())


def _ensure_db_parent(db_path: Path) -> None:
    db_path.parent.mkdir(parents=True, exist_ok=True)


def _summary(document: Document) -> Dict[str, Any]:
    return {
        "id": document.id,
        "name": document.name,
        "format": document.format_tag.value,
        "characters": len(document.text),
    }


def _segment_payload(segment: Segment) -> Dict[str, Any]:
    return {
        "text": segment.text,
        "kind": segment.kind.value,
        "index": segment.index,
        "active": segment.active,
    }


def _load_document(doc_id: str, db: Path | None) -> Document:
    resolved_db = _resolve_db_path(db)
    if not resolved_db.exists():
        raise HTTPException(status_code=404, detail="Database not found")

    store = SQLiteRecentUploads(resolved_db)
    try:
        document = store.get(doc_id)
    finally:
        store.close()

    if document is None:
        raise HTTPException(status_code=404, detail=f"Document {doc_id} not found")
    return document


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.post("/documents")
async def upload_document(file: UploadFile = File(...), db: Path | None = None) -> Dict[str, Any]:
    """Extract an uploaded file and append it to recent uploads."""
    name = file.filename or ""
    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="Empty upload")
    if len(data) > AppConfig().max_upload_bytes:
        raise HTTPException(status_code=413, detail="Upload too large")

    try:
        document = await ExtractionPipeline().run(name, data)
    except UnsupportedFormat as exc:
        raise HTTPException(status_code=415, detail=str(exc)) from exc
    except ExtractionError as exc:
        LOGGER.error("Extraction failed for %s: %s", name, exc.cause)
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    resolved_db = _resolve_db_path(db)
    _ensure_db_parent(resolved_db)
    store = SQLiteRecentUploads(resolved_db)
    try:
        store.append(document)
    finally:
        store.close()

    return {**_summary(document), "text": document.text}


@app.get("/documents")
async def list_documents(db: Path | None = None) -> Dict[str, List[Dict[str, Any]]]:
    """List recent uploads in upload order."""
    resolved_db = _resolve_db_path(db)
    if not resolved_db.exists():
        return {"documents": []}

    store = SQLiteRecentUploads(resolved_db)
    try:
        documents = store.load()
    finally:
        store.close()
    return {"documents": [_summary(document) for document in documents]}


@app.get("/documents/{doc_id}")
async def get_document(doc_id: str, db: Path | None = None) -> Dict[str, Any]:
    document = _load_document(doc_id, db)
    return {**_summary(document), "text": document.text}


@app.delete("/documents")
async def clear_documents(db: Path | None = None) -> Dict[str, str]:
    """Clear recent uploads."""
    resolved_db = _resolve_db_path(db)
    if resolved_db.exists():
        store = SQLiteRecentUploads(resolved_db)
        try:
            store.clear()
        finally:
            store.close()
    return {"status": "ok"}


@app.post("/search")
async def search_document(payload: SearchPayload, db: Path | None = None) -> Dict[str, Any]:
    """Find matches in a stored document and render highlight segments.

    The client's cursor is clamped into range, then moved by ``step``.
    """
    document = _load_document(payload.doc_id, db)
    mode = SearchMode.PATTERN if payload.pattern else SearchMode.LITERAL
    navigator = MatchNavigator(search(document.text, payload.query, mode=mode))
    navigator.jump_to(payload.cursor)
    if payload.step == "next":
        navigator.next()
    elif payload.step == "prev":
        navigator.prev()

    segments = render(document.text, navigator.match_set, navigator.cursor)
    return {
        "count": len(navigator.match_set),
        "cursor": navigator.cursor,
        "label": navigator.label,
        "matches": [{"start": m.start, "length": m.length} for m in navigator.match_set],
        "segments": [_segment_payload(segment) for segment in segments],
    }
