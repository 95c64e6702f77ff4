"""Output builders: normalized markdown, HTML pages, and listing entries"""

import re
from datetime import date, time

import yaml
from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml

from mdarticles.core.models import Block, CodeBlock, Document, thaw
from mdarticles.core.parse import make_parser


def _date_value(doc: Document) -> date | str:
    """Midnight timestamps serialize as a bare YAML date; anything else as an ISO string."""
    if doc.date.time() == time(0):
        return doc.date.date()
    return doc.date.isoformat()


def _fence(block: CodeBlock) -> str:
    """Fence longer than any run of its character inside the code (min 3).

    Backtick openers cannot carry an info string containing a backtick, so
    such languages get a tilde fence.
    """
    char = '~' if '`' in block.language else '`'
    longest = max((len(m) for m in re.findall(re.escape(char) + '+', block.text)), default=0)
    marker = char * max(3, longest + 1)
    text = block.text if not block.text or block.text.endswith('\n') else block.text + '\n'
    return f"{marker}{block.language}\n{text}{marker}"


def _block_markdown(block: Block) -> str:
    if isinstance(block, CodeBlock):
        return _fence(block)
    return block.text


def serialize(doc: Document) -> str:
    """Return normalized markdown with a YAML front-matter block prepended."""
    fm = {
        'title': doc.title,
        'date': _date_value(doc),
        'categories': list(doc.categories),
        'slug': doc.id,
        **thaw(doc.extra),
    }
    header = yaml.safe_dump(fm, default_flow_style=False, allow_unicode=True, sort_keys=False)
    body = "\n\n".join(_block_markdown(b) for b in doc.blocks)
    return f"---\n{header}---\n\n{body}\n"


def _block_html(block: Block, md: MarkdownIt) -> str:
    if isinstance(block, CodeBlock):
        attr = f' class="language-{escapeHtml(block.language)}"' if block.language else ''
        return f"<pre><code{attr}>{escapeHtml(block.text)}</code></pre>\n"
    return md.render(block.text)


def render_article(doc: Document, parser_config: str = 'commonmark') -> str:
    """Render a document to an <article> HTML fragment. Code is escaped, never interpreted."""
    md = make_parser(parser_config)
    categories = ''.join(f"<li>{escapeHtml(c)}</li>" for c in doc.categories)
    header = (
        f"<header>\n<h1>{escapeHtml(doc.title)}</h1>\n"
        f'<time datetime="{doc.date.isoformat()}">{doc.date.date().isoformat()}</time>\n'
        + (f'<ul class="categories">{categories}</ul>\n' if categories else '')
        + "</header>\n"
    )
    body = ''.join(_block_html(b, md) for b in doc.blocks)
    return f'<article id="{escapeHtml(doc.id)}">\n{header}{body}</article>\n'


def render_html(doc: Document, parser_config: str = 'commonmark') -> str:
    """Render a standalone HTML page for a document."""
    return (
        "<!DOCTYPE html>\n<html>\n<head>\n<meta charset=\"utf-8\">\n"
        f"<title>{escapeHtml(doc.title)}</title>\n</head>\n<body>\n"
        f"{render_article(doc, parser_config)}</body>\n</html>\n"
    )


def listing_entry(doc: Document) -> dict:
    """Build the index entry for a document: id, title, date, categories, path."""
    return {
        "id": doc.id,
        "title": doc.title,
        "date": doc.date.isoformat(),
        "categories": list(doc.categories),
        "path": doc.path,
    }
