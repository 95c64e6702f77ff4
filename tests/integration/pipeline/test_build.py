"""Integration tests for the load -> render -> write build pipeline.

Corpus (see tests/conftest.py):

    id               date        categories
    error-handling   2024-09-02  spring
    problem-details  2024-09-02  java, spring
    nullability      2024-07-25  java, nullability

Listing order is newest first with identifier as tie-breaker, so
index.json lists error-handling, problem-details, nullability.
"""

import json

import pytest

from mdarticles.core.parse import parse_document
from mdarticles.core.pipeline import INDEX_FILE, render_doc, run_build
from mdarticles.store.store import ArticleStore


@pytest.fixture(name="store")
def store_fixture(content_dir):
    s = ArticleStore()
    s.load_directory(content_dir)
    return s


def test_build_html_writes_one_file_per_document(store, tmp_path):
    out = tmp_path / "dist"
    results = run_build(store, out, "html")
    assert [ident for ident, _ in results] == ["error-handling", "problem-details", "nullability"]
    assert sorted(p.name for p in out.glob("*.html")) == [
        "error-handling.html", "nullability.html", "problem-details.html",
    ]


def test_build_html_content(store, tmp_path):
    run_build(store, tmp_path / "dist", "html")
    html = (tmp_path / "dist" / "nullability.html").read_text(encoding="utf-8")
    assert "<h1>Nullability Annotations in Java</h1>" in html
    assert '<pre><code class="language-java">@NullMarked\npackage com.example;\n</code></pre>' in html


def test_build_index_json(store, tmp_path):
    run_build(store, tmp_path / "dist", "html")
    index = json.loads((tmp_path / "dist" / INDEX_FILE).read_text(encoding="utf-8"))
    assert [e["id"] for e in index] == ["error-handling", "problem-details", "nullability"]
    assert index[2] == {
        "id": "nullability",
        "title": "Nullability Annotations in Java",
        "date": "2024-07-25T00:00:00+00:00",
        "categories": ["java", "nullability"],
        "path": store.get("nullability").path,
    }


def test_build_md_round_trips(store, tmp_path):
    """Markdown output re-parses to the same metadata and blocks."""
    run_build(store, tmp_path / "dist", "md")
    for doc in store.list():
        text = (tmp_path / "dist" / f"{doc.id}.md").read_text(encoding="utf-8")
        again = parse_document(text)
        assert (again.id, again.title, again.date, again.categories, again.blocks) == \
               (doc.id, doc.title, doc.date, doc.categories, doc.blocks)


def test_build_empty_store_writes_empty_index(tmp_path):
    results = run_build(ArticleStore(), tmp_path / "dist")
    assert results == []
    assert json.loads((tmp_path / "dist" / INDEX_FILE).read_text()) == []


def test_render_doc_unknown_format(store):
    with pytest.raises(ValueError, match="Unknown output format"):
        render_doc(store.get("nullability"), "pdf")
