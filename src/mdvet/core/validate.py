"""Pluggable syntax checkers keyed by language tag, and per-block validation"""

import ast
import json
import logging
import tomllib
from typing import Callable, Iterable, Optional

import yaml

from mdvet.core.errors import SnippetSyntaxError
from mdvet.core.extract.snippets import Snippets
from mdvet.core.models import CodeBlock, Document, SnippetReport, SnippetStatus


logger = logging.getLogger(__name__)

Checker = Callable[[str], None]


class CheckerRegistry:
    """Mapping of language tag (and aliases) to a checker callable.

    A checker takes the snippet source and raises SnippetSyntaxError when it
    is not well formed. Tags are matched case-insensitively.
    """

    def __init__(self):
        self._checkers: dict[str, Checker] = {}

    def register(self, tag: str, *aliases: str) -> Callable[[Checker], Checker]:
        """Decorator registering a checker under tag and any aliases."""
        def decorator(func: Checker) -> Checker:
            for name in (tag, *aliases):
                self._checkers[name.lower()] = func
            return func
        return decorator

    def get(self, tag: str) -> Optional[Checker]:
        return self._checkers.get(tag.lower()) if tag else None

    def __contains__(self, tag: str) -> bool:
        return self.get(tag) is not None

    @property
    def languages(self) -> list[str]:
        return sorted(self._checkers)

    def copy(self) -> "CheckerRegistry":
        clone = CheckerRegistry()
        clone._checkers = dict(self._checkers)
        return clone


default_registry = CheckerRegistry()


@default_registry.register('python', 'py', 'python3')
def check_python(source: str) -> None:
    try:
        ast.parse(source)
    except SyntaxError as e:
        raise SnippetSyntaxError(e.msg, line=e.lineno) from e


def _strip_prompts(source: str) -> str:
    """Blank out everything but the input lines of a REPL transcript, keeping line numbers."""
    kept = []
    for line in source.splitlines():
        if line.startswith(('>>> ', '... ')):
            kept.append(line[4:])
        else:
            kept.append('')
    return '\n'.join(kept)


@default_registry.register('pycon')
def check_pycon(source: str) -> None:
    # output lines become blank so error lines still match the snippet
    check_python(_strip_prompts(source))


@default_registry.register('json')
def check_json(source: str) -> None:
    try:
        json.loads(source)
    except json.JSONDecodeError as e:
        raise SnippetSyntaxError(e.msg, line=e.lineno) from e


@default_registry.register('yaml', 'yml')
def check_yaml(source: str) -> None:
    try:
        for _ in yaml.safe_load_all(source):
            pass
    except yaml.YAMLError as e:
        mark = getattr(e, 'problem_mark', None)
        problem = getattr(e, 'problem', None) or str(e)
        raise SnippetSyntaxError(problem, line=mark.line + 1 if mark else None) from e


@default_registry.register('toml')
def check_toml(source: str) -> None:
    try:
        tomllib.loads(source)
    except tomllib.TOMLDecodeError as e:
        raise SnippetSyntaxError(str(e), line=getattr(e, 'lineno', None)) from e


def check_block(
    doc: Document,
    index: int,
    block: CodeBlock,
    registry: CheckerRegistry = default_registry,
    ) -> SnippetReport:
    """Check one code block. Unregistered languages are reported as skipped."""
    checker = registry.get(block.language)
    base = dict(path=doc.path, index=index, language=block.language, line=block.line)
    if checker is None:
        return SnippetReport(**base, status=SnippetStatus.skipped)
    try:
        checker(block.source)
    except SnippetSyntaxError as e:
        if e.line is not None:
            # snippet line 1 sits on the line after the opening fence
            base['line'] = block.line + e.line
        logger.debug("%s block %d: %s", doc.path, index, e.message)
        return SnippetReport(**base, status=SnippetStatus.error, message=e.message)
    except (RecursionError, MemoryError, ValueError) as e:
        # deeply nested or oversized input the checker cannot parse
        logger.debug("%s block %d: %s", doc.path, index, e)
        return SnippetReport(**base, status=SnippetStatus.error, message=f"{type(e).__name__}: {e}")
    return SnippetReport(**base, status=SnippetStatus.ok)


def validate_document(
    doc: Document,
    registry: CheckerRegistry = default_registry,
    languages: Optional[Iterable[str]] = None,
    ) -> list[SnippetReport]:
    """Return one report per code block in source order; errors never stop later blocks."""
    return [check_block(doc, i, block, registry) for i, block in Snippets(doc, languages)]
