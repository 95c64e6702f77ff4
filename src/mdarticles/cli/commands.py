"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdarticles.config import Settings, load_config
from mdarticles.core.errors import NotFoundError
from mdarticles.core.pipeline import render_doc, run_build
from mdarticles.store.store import ArticleStore


PathArg = Annotated[Optional[str], typer.Argument(help="Article file or directory (default: content_dir)")]
StrictOpt = Annotated[bool, typer.Option("--strict", help="Exit 1 if any document fails to parse")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _load_store(settings: Settings, path: Optional[str], strict: bool = False) -> ArticleStore:
    """Load articles from path (or settings.content_dir), reporting skipped documents."""
    root = Path(path or settings.content_dir)
    if not root.exists():
        _fail(f"Path not found: {root}")

    store = ArticleStore(settings.parser_config)
    failures = store.load_directory(root)
    for p, err in failures:
        typer.echo(f"Skipped {p}: {err.reason}", err=True)

    if failures and strict:
        _fail(f"{len(failures)} document(s) failed to parse")
    if not len(store):
        _fail(f"No articles loaded from {root}")
    return store


def build_cmd(
    path: PathArg = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="Output format: html or md")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    strict: StrictOpt = False,
    ):
    """Render every article plus an index.json listing."""
    settings = _settings(overrides={"output_dir": out, "output_format": fmt, "parser_config": parser})
    store = _load_store(settings, path, strict)
    output_dir = Path(settings.output_dir)

    try:
        results = run_build(store, output_dir, settings.output_format)
    except OSError as e:
        _fail("Build failed", e)
    for ident, out_file in results:
        typer.echo(f"  {ident} -> {out_file}")
    typer.echo(f"Built {len(results)} document(s) to {output_dir}/")


def list_cmd(
    path: PathArg = None,
    category: Annotated[Optional[str], typer.Option("--category", help="Only documents with this exact tag")] = None,
    strict: StrictOpt = False,
    ):
    """List articles, newest first."""
    settings = _settings()
    store = _load_store(settings, path, strict)
    docs = store.list(category)
    if not len(docs):
        typer.echo(f"No documents found in category '{category}'.")
        raise typer.Exit(1)
    for doc in docs:
        typer.echo(f"{doc.date.date().isoformat()}  {doc.id}  {doc.title}  [{', '.join(doc.categories)}]")


def show_cmd(
    identifier: Annotated[str, typer.Argument(help="Document identifier")],
    path: PathArg = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="Output format: html or md")] = None,
    strict: StrictOpt = False,
    ):
    """Print a single rendered article."""
    settings = _settings(overrides={"output_format": fmt})
    store = _load_store(settings, path, strict)
    try:
        doc = store.get(identifier)
    except NotFoundError as e:
        _fail(str(e))
    typer.echo(render_doc(doc, settings.output_format, settings.parser_config), nl=False)


def categories_cmd(
    path: PathArg = None,
    strict: StrictOpt = False,
    ):
    """List category tags with their document counts."""
    settings = _settings()
    store = _load_store(settings, path, strict)
    cats = store.categories()
    if not cats:
        typer.echo("No categories found.")
        raise typer.Exit(1)
    for name, count in cats.items():
        typer.echo(f"{name}  {count}")
