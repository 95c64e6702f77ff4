"""In-memory article store: load-time parsing, ordered listing, and lookup"""

import logging
from pathlib import Path
from typing import Iterator

from mdarticles.core.errors import NotFoundError, ParseError
from mdarticles.core.models import Document
from mdarticles.core.parse import discover_files, parse_document, parse_file


logger = logging.getLogger(__name__)


def _listing_key(doc: Document):
    """Newest first; ties broken by identifier ascending."""
    return (-doc.date.timestamp(), doc.id)


class Listing:
    """Lazy, finite, restartable view over a store in listing order.

    Each iteration walks the store afresh, so a Listing taken before further
    loads reflects them when iterated again.
    """

    def __init__(self, store: "ArticleStore", category: str | None = None):
        self._store = store
        self.category = category

    def __iter__(self) -> Iterator[Document]:
        for doc in self._store._ordered():
            if self.category is None or doc.has_category(self.category):
                yield doc

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"Listing(category={self.category!r}, count={len(self)})"


class ArticleStore:
    """Holds documents keyed by identifier. Documents are only ever added at load time."""

    def __init__(self, parser_config: str = 'commonmark'):
        self.parser_config = parser_config
        self._docs: dict[str, Document] = {}
        self._order: tuple[Document, ...] | None = None

    def _add(self, doc: Document) -> Document:
        existing = self._docs.get(doc.id)
        if existing is not None:
            raise ParseError(
                f"duplicate identifier '{doc.id}' (already loaded from {existing.path or '<text>'})",
                doc.path,
            )
        self._docs[doc.id] = doc
        self._order = None
        logger.debug("Loaded %s", doc.id)
        return doc

    def _ordered(self) -> tuple[Document, ...]:
        if self._order is None:
            self._order = tuple(sorted(self._docs.values(), key=_listing_key))
        return self._order

    def load(self, source_text: str, path: str | None = None) -> Document:
        """Parse source_text and add the result. Raises ParseError; the store is unchanged on failure."""
        return self._add(parse_document(source_text, path, self.parser_config))

    def load_file(self, path: Path) -> Document:
        return self._add(parse_file(path, self.parser_config))

    def load_directory(self, root: Path) -> list[tuple[Path, ParseError]]:
        """Load every .md/.mdx file under root. Failing files are skipped and returned."""
        failures: list[tuple[Path, ParseError]] = []
        for p in discover_files(root):
            try:
                self.load_file(p)
            except ParseError as e:
                logger.warning("Skipped %s: %s", p, e.reason)
                failures.append((p, e))
        return failures

    def list(self, category: str | None = None) -> Listing:
        """Documents by publish timestamp descending, optionally narrowed to an exact category tag."""
        return Listing(self, category)

    def get(self, identifier: str) -> Document:
        try:
            return self._docs[identifier]
        except KeyError:
            raise NotFoundError(identifier) from None

    def categories(self) -> dict[str, int]:
        """Sorted category names with the number of documents tagged with each."""
        counts: dict[str, int] = {}
        for doc in self._docs.values():
            for c in doc.categories:
                counts[c] = counts.get(c, 0) + 1
        return dict(sorted(counts.items()))

    def __len__(self) -> int:
        return len(self._docs)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._docs

    def __iter__(self) -> Iterator[Document]:
        return iter(self.list())
