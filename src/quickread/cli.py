"""Command line interface for QuickRead."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from quickread.config import AppConfig
from quickread.errors import QuickReadError
from quickread.extraction.pipeline import ExtractionPipeline
from quickread.models import Document, SegmentKind
from quickread.search.engine import SearchMode, search as find_matches
from quickread.search.highlight import render
from quickread.search.navigator import MatchNavigator
from quickread.storage.recent import SQLiteRecentUploads
from quickread.utils.files import iter_document_paths
from quickread.utils.text import snippet
from quickread.web.app import app as web_app

console = Console()
app = typer.Typer(help="QuickRead - read and search inside documents")

MATCH_STYLE = "black on yellow"
ACTIVE_STYLE = "bold white on red"


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _ensure_db_parent(db_path: Path) -> None:
    db_path.parent.mkdir(parents=True, exist_ok=True)


def _resolve_db(db: Path | None) -> Path:
    config = AppConfig(db_path=db if db is not None else AppConfig().db_path)
    return config.resolve_db_path(Path.cwd())


def _extract_path(path: Path) -> Document:
    return asyncio.run(ExtractionPipeline().run_path(path))


def _extract_or_exit(path: Path) -> Document:
    try:
        return _extract_path(path)
    except (QuickReadError, OSError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc


@app.command()
def extract(
    inputs: List[Path] = typer.Argument(
        ..., help="Files or folders to extract.", resolve_path=True
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the extracted text to this file"
    ),
    save: bool = typer.Option(
        False, "--save/--no-save", help="Append extracted documents to recent uploads"
    ),
    db: Path = typer.Option(None, "--db", help="Recent uploads database path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Extract normalized text from one or more documents."""
    _setup_logging(verbose)
    paths = list(iter_document_paths(inputs))
    if not paths:
        console.print("[yellow]No documents found.[/yellow]")
        return

    store = None
    if save:
        resolved_db = _resolve_db(db)
        _ensure_db_parent(resolved_db)
        store = SQLiteRecentUploads(resolved_db)

    documents: List[Document] = []
    failed = 0
    try:
        for path in paths:
            try:
                document = _extract_path(path)
            except (QuickReadError, OSError) as exc:
                console.print(f"[red]{escape(str(exc))}[/red]")
                failed += 1
                continue
            if store is not None:
                store.append(document)
            documents.append(document)
    finally:
        if store is not None:
            store.close()

    if output is not None:
        output.write_text("".join(doc.text for doc in documents), encoding="utf-8")
        console.print(f"Extracted {len(documents)} document(s) into [bold]{output}[/bold]")
    else:
        for document in documents:
            if len(paths) > 1:
                console.rule(escape(document.name))
            console.print(document.text, markup=False, highlight=False, soft_wrap=True)

    if failed:
        console.print(f"[yellow]Failed: {failed}[/yellow]")
        raise typer.Exit(code=1)


@app.command()
def search(
    path: Path = typer.Argument(..., help="Document to search", resolve_path=True),
    query: str = typer.Argument(..., help="Text to look for"),
    pattern: bool = typer.Option(False, "--pattern", help="Treat the query as a regular expression"),
    context: int = typer.Option(
        AppConfig().snippet_chars, help="Characters of context around each match"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List every occurrence of a query inside a document."""
    _setup_logging(verbose)
    document = _extract_or_exit(path)
    mode = SearchMode.PATTERN if pattern else SearchMode.LITERAL
    matches = find_matches(document.text, query, mode=mode)
    if not matches:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#")
    table.add_column("Offset")
    table.add_column("Snippet")

    for index, match in enumerate(matches):
        before, hit, after = snippet(document.text, match, context=context)
        table.add_row(str(index), str(match.start), Text.assemble(before, (hit, MATCH_STYLE), after))

    console.print(table)
    console.print(f"{len(matches)} match(es) in [bold]{escape(document.name)}[/bold]")


@app.command()
def view(
    path: Path = typer.Argument(..., help="Document to display", resolve_path=True),
    query: str = typer.Argument("", help="Text to highlight"),
    cursor: int = typer.Option(0, "--cursor", "-c", help="Index of the active match"),
    pattern: bool = typer.Option(False, "--pattern", help="Treat the query as a regular expression"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print a document with every match highlighted."""
    _setup_logging(verbose)
    document = _extract_or_exit(path)
    mode = SearchMode.PATTERN if pattern else SearchMode.LITERAL
    navigator = MatchNavigator(find_matches(document.text, query, mode=mode))
    navigator.jump_to(cursor)

    body = Text()
    for segment in render(document.text, navigator.match_set, navigator.cursor):
        if segment.kind is SegmentKind.PLAIN:
            body.append(segment.text)
        else:
            body.append(segment.text, style=ACTIVE_STYLE if segment.active else MATCH_STYLE)

    console.print(body, soft_wrap=True)
    if query.strip():
        console.print(f"[bold]{navigator.label}[/bold]")


@app.command()
def recent(
    db: Path = typer.Option(None, "--db", help="Recent uploads database path"),
) -> None:
    """List recently extracted documents."""
    resolved_db = _resolve_db(db)
    if not resolved_db.exists():
        console.print("[yellow]No recent uploads.[/yellow]")
        return

    store = SQLiteRecentUploads(resolved_db)
    try:
        documents = store.load()
    finally:
        store.close()

    if not documents:
        console.print("[yellow]No recent uploads.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Format")
    table.add_column("Characters")
    for document in documents:
        table.add_row(document.id, document.name, document.format_tag.value, str(len(document.text)))
    console.print(table)


@app.command()
def clear(
    db: Path = typer.Option(None, "--db", help="Recent uploads database path"),
) -> None:
    """Remove every entry from recent uploads."""
    resolved_db = _resolve_db(db)
    if not resolved_db.exists():
        console.print("[yellow]Database not found, nothing to clear.[/yellow]")
        return

    store = SQLiteRecentUploads(resolved_db)
    try:
        store.clear()
    finally:
        store.close()
    console.print("Recent uploads cleared.")


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    db: Path = typer.Option(None, "--db", help="Recent uploads database path"),
) -> None:
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install it with \"python -m pip install uvicorn\""
        ) from exc

    resolved_db = _resolve_db(db)
    _ensure_db_parent(resolved_db)
    web_app.state.db_path = resolved_db

    console.print(f"Starting QuickRead API on http://{host}:{port} (database: {resolved_db})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )


if __name__ == "__main__":  # pragma: no cover
    app()
