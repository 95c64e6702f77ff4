"""Build step: render every stored document and write the JSON index"""

import json
import logging
from pathlib import Path

from mdarticles.core.render import listing_entry, render_html, serialize
from mdarticles.store.store import ArticleStore


logger = logging.getLogger(__name__)

INDEX_FILE = "index.json"


def render_doc(doc, fmt: str = 'html', parser_config: str = 'commonmark') -> str:
    """Render one document in the requested output format ('html' or 'md')."""
    if fmt == 'html':
        return render_html(doc, parser_config)
    if fmt == 'md':
        return serialize(doc)
    raise ValueError(f"Unknown output format: {fmt!r}")


def write_index(store: ArticleStore, output_dir: Path) -> Path:
    """Write index.json listing every document in listing order."""
    index_path = output_dir / INDEX_FILE
    index_path.write_text(
        json.dumps([listing_entry(d) for d in store.list()], indent=2, ensure_ascii=False),
        encoding='utf-8',
    )
    return index_path


def run_build(store: ArticleStore, output_dir: Path, fmt: str = 'html') -> list[tuple[str, Path]]:
    """Write <id>.<fmt> for each document plus index.json. Returns (id, path) pairs."""
    output_dir.mkdir(parents=True, exist_ok=True)
    results = []
    for doc in store.list():
        out_path = output_dir / f"{doc.id}.{fmt}"
        out_path.write_text(render_doc(doc, fmt, store.parser_config), encoding='utf-8')
        logger.debug("Wrote %s -> %s", doc.id, out_path)
        results.append((doc.id, out_path))
    write_index(store, output_dir)
    return results
