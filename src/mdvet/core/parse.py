"""File discovery, front matter extraction, and document loading"""

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from markdown_it import MarkdownIt

from mdvet.core.errors import MetadataParseError
from mdvet.core.extract.blocks import split_lines, tokens_to_blocks
from mdvet.core.models import Document


logger = logging.getLogger(__name__)

FRONTMATTER_MARKER = '---'
MD_EXTENSIONS = {'.md', '.mdx', '.markdown'}
NEWLINE_RE = re.compile(r'\r\n?')


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def _split_frontmatter(text: str, path: str = None) -> tuple[dict[str, Any], str, int]:
    """Return (metadata, body, body_offset) where body_offset is the count of lines consumed.

    Raises MetadataParseError for an unterminated header, invalid YAML, or a
    header that is not a mapping.
    """
    lines = split_lines(text)
    if not lines or lines[0].rstrip() != FRONTMATTER_MARKER:
        return {}, text, 0

    for i in range(1, len(lines)):
        if lines[i].rstrip() == FRONTMATTER_MARKER:
            end = i
            break
    else:
        raise MetadataParseError("front matter is never closed", path=path, line=1)

    header = ''.join(lines[1:end])
    try:
        fm = yaml.safe_load(header) if header.strip() else {}
    except yaml.YAMLError as e:
        mark = getattr(e, 'problem_mark', None)
        line = mark.line + 2 if mark is not None else 1
        raise MetadataParseError(f"invalid YAML front matter: {e}", path=path, line=line) from e
    if fm is None:
        fm = {}
    if not isinstance(fm, dict):
        raise MetadataParseError(
            f"front matter must be a mapping, got {type(fm).__name__}", path=path, line=2,
        )
    return {str(k): v for k, v in fm.items()}, ''.join(lines[end + 1:]), end + 1


def discover_files(path: Path) -> list[Path]:
    """Return sorted markdown files under path, or [path] if a single markdown file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)


def load_text(raw: str, path: str = '<text>', parser_config: str = 'gfm-like') -> Document:
    """Parse raw page content into a Document of metadata and ordered blocks."""
    text = NEWLINE_RE.sub('\n', raw)
    metadata, body, offset = _split_frontmatter(text, path)
    tokens = _make_parser(parser_config).parse(body)
    blocks = tokens_to_blocks(tokens, split_lines(body), path=path, line_offset=offset)
    return Document(path=path, metadata=metadata, body=tuple(blocks), body_line=offset + 1)


def load_file(path: Path, parser_config: str = 'gfm-like') -> Document:
    """Read a UTF-8 file (leading BOM dropped) and load it as a Document."""
    logger.debug("loading %s", path)
    raw = path.read_text(encoding='utf-8-sig')
    return load_text(raw, str(path), parser_config)
