"""Token-to-Block conversion: fenced regions become CodeBlocks, the rest stays prose"""

import re

from mdvet.core.errors import UnterminatedBlockError
from mdvet.core.models import CodeBlock, ProseBlock


LINE_RE = re.compile(r'[^\n]*\n|[^\n]+\Z')


def split_lines(text: str) -> list[str]:
    """Split on '\\n' only, keeping line endings (matches markdown-it line numbering)."""
    return LINE_RE.findall(text)


def _is_closed(token) -> bool:
    """True if markdown-it found a closing marker for the fence token.

    The token map covers the opener, the content lines, and the closer when
    one was found; an unclosed fence runs to the end of its container.
    """
    start, end = token.map
    return end - start - 1 - len(split_lines(token.content)) == 1


def _fence_source(token) -> str:
    content = token.content
    return content[:-1] if content.endswith('\n') else content


def tokens_to_blocks(
    tokens: list,
    source_lines: list[str],
    path: str = None,
    line_offset: int = 0,
    ) -> list:
    """Convert a token stream to ordered Prose/Code blocks.

    Every fence token (top level or nested) becomes a CodeBlock; the source
    lines between fences become ProseBlocks. The first block is always prose,
    possibly empty. line_offset is the number of file lines before the body.
    """
    blocks: list = []
    cursor = 0

    for tok in tokens:
        if tok.type != 'fence' or not tok.map:
            continue
        start, end = tok.map
        if not _is_closed(tok):
            raise UnterminatedBlockError(
                f"fenced code block opened with {tok.markup!r} is never closed",
                path=path,
                line=start + 1 + line_offset,
            )
        prose = ''.join(source_lines[cursor:start])
        if prose or not blocks:
            blocks.append(ProseBlock(text=prose, line=cursor + 1 + line_offset))
        info = tok.info.strip()
        blocks.append(CodeBlock(
            language=info.split()[0] if info else '',
            source=_fence_source(tok),
            info=info,
            fence=tok.markup,
            raw=''.join(source_lines[start:end]),
            line=start + 1 + line_offset,
        ))
        cursor = end

    tail = ''.join(source_lines[cursor:])
    if tail or not blocks:
        blocks.append(ProseBlock(text=tail, line=cursor + 1 + line_offset))
    return blocks
