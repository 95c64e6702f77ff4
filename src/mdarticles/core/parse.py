"""File discovery, front-matter validation, and markdown-it tokenization"""

import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

import re

import yaml
from markdown_it import MarkdownIt
from pydantic import ValidationError

from mdarticles.core.errors import ParseError
from mdarticles.core.extract.blocks import split_lines, tokens_to_blocks
from mdarticles.core.models import Document
from mdarticles.core.utils.slug import slug_from_stem, slugify


logger = logging.getLogger(__name__)

NEWLINE_RE = re.compile(r'\r\n?')     # markdown-it normalizes these before mapping lines
FRONTMATTER_DELIM = '---'
MD_EXTENSIONS = {'.md', '.mdx'}
RESERVED_KEYS = ('title', 'date', 'categories', 'slug')


def make_parser(preset: str = 'commonmark') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def split_frontmatter(text: str, path: str | None = None) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body). The YAML header is required."""
    lines = split_lines(NEWLINE_RE.sub('\n', text))
    if not lines or lines[0].strip() != FRONTMATTER_DELIM:
        raise ParseError("missing front-matter header", path)

    end = next((i for i in range(1, len(lines)) if lines[i].strip() == FRONTMATTER_DELIM), None)
    if end is None:
        raise ParseError("unterminated front-matter header", path)

    try:
        fm = yaml.safe_load(''.join(lines[1:end])) or {}
    except (yaml.YAMLError, ValueError) as e:
        # out-of-range timestamps such as 2024-02-30 surface as ValueError
        raise ParseError(f"invalid YAML front-matter: {e}", path) from e
    if not isinstance(fm, dict):
        raise ParseError(f"front-matter must be a mapping, got {type(fm).__name__}", path)
    bad_keys = [k for k in fm if not isinstance(k, str)]
    if bad_keys:
        raise ParseError(f"front-matter keys must be strings, got {bad_keys[0]!r} (quote it)", path)

    return fm, ''.join(lines[end + 1:]).lstrip('\n')


def _title(fm: dict, path: str | None) -> str:
    value = fm.get('title')
    if value is None:
        raise ParseError("missing required field 'title'", path)
    if not isinstance(value, str) or not value.strip():
        raise ParseError("'title' must be a non-empty string", path)
    return value.strip()


def _publish_date(fm: dict, path: str | None) -> datetime:
    """Normalize a YAML date, datetime, or ISO-8601 string to an aware UTC datetime."""
    value = fm.get('date')
    if value is None:
        raise ParseError("missing required field 'date'", path)

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.strip())
        except ValueError as e:
            raise ParseError(f"malformed 'date' {value!r}", path) from e
    else:
        raise ParseError(f"malformed 'date' of type {type(value).__name__}", path)

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _categories(fm: dict, path: str | None) -> tuple[str, ...]:
    value = fm.get('categories')
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(c, str) for c in value):
        raise ParseError("'categories' must be a string or a list of strings", path)
    return tuple(dict.fromkeys(c.strip() for c in value if c.strip()))


def _identifier(fm: dict, title: str, path: str | None) -> str:
    """Front-matter slug, else source file stem, else title; always slugified."""
    slug = fm.get('slug')
    if slug is not None and not isinstance(slug, str):
        raise ParseError("'slug' must be a string", path)

    if slug:
        ident = slugify(slug)
    elif path:
        ident = slug_from_stem(Path(path).stem)
    else:
        ident = slugify(title)

    if not ident:
        raise ParseError("cannot derive a document identifier", path)
    return ident


def parse_document(text: str, path: str | None = None, parser_config: str = 'commonmark') -> Document:
    """Parse source text into a Document. Raises ParseError on bad front-matter."""
    fm, body = split_frontmatter(text, path)
    title = _title(fm, path)

    tokens = make_parser(parser_config).parse(body)
    blocks = tokens_to_blocks(tokens, split_lines(body))

    fields = dict(
        id=_identifier(fm, title, path),
        title=title,
        date=_publish_date(fm, path),
        categories=_categories(fm, path),
        blocks=tuple(blocks),
        path=path,
        extra={k: v for k, v in fm.items() if k not in RESERVED_KEYS},
    )
    try:
        doc = Document(**fields)
    except ValidationError as e:
        raise ParseError(f"invalid document: {e}", path) from e
    logger.debug("Parsed %s: %d block(s)", doc.id, len(doc.blocks))
    return doc


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)


def parse_file(path: Path, parser_config: str = 'commonmark') -> Document:
    """Read and parse a single markdown file."""
    try:
        raw = path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise ParseError(f"not valid UTF-8: {e}", str(path)) from e
    return parse_document(raw, str(path), parser_config)
