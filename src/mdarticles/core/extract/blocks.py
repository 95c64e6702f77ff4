"""Top-level token grouping into prose and code blocks using source line positions"""

import re

from mdarticles.core.models import Block, CodeBlock, ProseBlock


CODE_TOKENS = {'fence', 'code_block'}
LINE_END_RE = re.compile(r'(?<=\n)')


def split_lines(text: str) -> list[str]:
    """Split on '\\n' only, keeping line ends, so indexes agree with token.map."""
    return [line for line in LINE_END_RE.split(text) if line]


def _language(token) -> str:
    """First word of a fence info string ('java title=X' -> 'java'); '' if absent."""
    info = (token.info or '').strip()
    return info.split()[0] if info else ''


def _prose_slice(source_lines: list[str], start: int, end: int) -> str:
    return ''.join(source_lines[start:end]).strip('\n').rstrip()


def tokens_to_blocks(tokens: list, source_lines: list[str]) -> list[Block]:
    """Convert a body token stream into ordered ProseBlocks and CodeBlocks.

    Only top-level tokens are considered, so code nested inside lists or
    quotes stays part of the surrounding prose. Consecutive non-code tokens
    are merged into one ProseBlock spanning their source lines.
    """
    blocks: list[Block] = []
    span: list[int] | None = None      # [start, end) source lines of pending prose

    def _flush() -> None:
        nonlocal span
        if span is not None:
            text = _prose_slice(source_lines, *span)
            if text:
                blocks.append(ProseBlock(text=text))
            span = None

    for tok in tokens:
        if tok.level != 0 or tok.map is None:
            continue
        start, end = tok.map
        if tok.type in CODE_TOKENS:
            _flush()
            blocks.append(CodeBlock(language=_language(tok), text=tok.content))
        elif span is None:
            span = [start, end]
        else:
            span[1] = max(span[1], end)
    _flush()

    return blocks
