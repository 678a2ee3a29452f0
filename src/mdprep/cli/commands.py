"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from sqlmodel import Session, SQLModel

from mdprep.config import Settings, load_config
from mdprep.core.esm import strip_esm
from mdprep.core.pipeline import precompute
from mdprep.core.utils.slug import slugify
from mdprep.crud.database import init_db, make_engine
from mdprep.crud.documents import commit_doc, get_all_documents, is_stale, refresh_stale


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read {path}", e)


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        SQLModel.metadata.drop_all(engine)
        typer.echo("Existing data cleared.")
    init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")


def precompute_cmd(
    path: Annotated[Path, typer.Argument(help="Markdown/MDX file to precompute")],
    toc: Annotated[bool, typer.Option("--toc", help="Compute the table of contents")] = False,
    wpm: Annotated[Optional[int], typer.Option("--wpm", help="Reading speed in words per minute")] = None,
    ):
    """Print the artifact bundle for a file as JSON."""
    settings = _settings(overrides={"words_per_minute": wpm})
    bundle = precompute(_read(path), compute_toc=toc, settings=settings)
    typer.echo(bundle.model_dump_json(indent=2))


def strip_esm_cmd(
    path: Annotated[Path, typer.Argument(help="Markdown/MDX file to sanitize")],
    ):
    """Print the file with top-level import/export lines removed."""
    typer.echo(strip_esm(_read(path)))


def commit_cmd(
    path: Annotated[Path, typer.Argument(help="Markdown/MDX file to store")],
    slug: Annotated[Optional[str], typer.Option("--slug", help="Document slug; defaults to the file name")] = None,
    toc: Annotated[bool, typer.Option("--toc", help="Compute and store the table of contents")] = False,
    ):
    """Store a document and its precomputed artifacts."""
    settings = _settings()
    content = _read(path)
    engine = make_engine(settings.db_url)
    init_db(engine)
    try:
        with Session(engine) as session:
            doc, status = commit_doc(session, slug or slugify(path.stem), content, toc, settings)
            session.commit()
            typer.echo(f"  {status}: {doc.slug} ({doc.content_hash[:12]})")
    except Exception as e:
        _fail("Commit failed", e)


def verify_cmd():
    """List documents whose stored artifacts no longer match their content."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        stale = [doc.slug for doc in get_all_documents(session) if is_stale(doc)]
    for slug in stale:
        typer.echo(f"  stale: {slug}")
    if stale:
        typer.echo(f"{len(stale)} stale document(s). Run 'mdprep refresh'.")
        raise typer.Exit(1)
    typer.echo("All artifacts up to date.")


def refresh_cmd():
    """Recompute artifacts for every stale document."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    try:
        with Session(engine) as session:
            refreshed = [doc.slug for doc in refresh_stale(session, settings)]
            session.commit()
    except Exception as e:
        _fail("Refresh failed", e)
    for slug in refreshed:
        typer.echo(f"  refreshed: {slug}")
    typer.echo(f"Refreshed {len(refreshed)} document(s).")
