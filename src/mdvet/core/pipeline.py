"""Pipeline step functions: discover, load, and check orchestration"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Optional

from mdvet.config import Settings
from mdvet.core.errors import ParseError
from mdvet.core.models import Document, LoadFailure, RunResult
from mdvet.core.parse import discover_files, load_file
from mdvet.core.validate import CheckerRegistry, default_registry, validate_document


logger = logging.getLogger(__name__)


def _load_one(path: Path, parser_config: str) -> Document | LoadFailure:
    """Load a single file, turning a load error into a LoadFailure."""
    try:
        return load_file(path, parser_config)
    except (ParseError, OSError, UnicodeDecodeError) as e:
        logger.warning("failed to load %s: %s", path, e)
        return LoadFailure(path=str(path), error=type(e).__name__, message=str(e))


def load_all(
    paths: Iterable[Path],
    parser_config: str = 'gfm-like',
    max_workers: int = 1,
    fail_fast: bool = False,
    ) -> tuple[list[Document], list[LoadFailure]]:
    """Load every path; failures are collected unless fail_fast.

    With max_workers > 1 files are loaded on a thread pool. Results keep the
    order of paths either way.
    """
    paths = list(paths)
    if max_workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            loaded = list(pool.map(lambda p: _load_one(p, parser_config), paths))
    else:
        loaded = [_load_one(p, parser_config) for p in paths]

    documents, failures = [], []
    for item in loaded:
        if isinstance(item, LoadFailure):
            if fail_fast:
                raise RuntimeError(f"Failed to load {item.path}: {item.message}")
            failures.append(item)
        else:
            documents.append(item)
    logger.info("loaded %d document(s), %d failure(s)", len(documents), len(failures))
    return documents, failures


def run_load(
    path: str,
    settings: Settings,
    fail_fast: bool = False,
    ) -> tuple[list[Document], list[LoadFailure]]:
    """Discover markdown files under path and load them."""
    if not Path(path).exists():
        raise RuntimeError(f"Path not found: {path}")
    files = discover_files(Path(path))
    logger.debug("discovered %d file(s) under %s", len(files), path)
    return load_all(files, settings.parser_config, settings.max_workers, fail_fast)


def run_check(
    path: str,
    settings: Settings,
    registry: CheckerRegistry = default_registry,
    fail_fast: bool = False,
    languages: Optional[Iterable[str]] = None,
    ) -> RunResult:
    """Load everything under path and validate each document's code blocks."""
    documents, failures = run_load(path, settings, fail_fast)
    languages = languages or settings.languages or None
    reports = []
    for doc in documents:
        reports.extend(validate_document(doc, registry, languages))
    return RunResult(documents=documents, failures=failures, reports=reports)
