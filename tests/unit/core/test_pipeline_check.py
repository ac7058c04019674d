"""Unit tests for core/pipeline.py"""

import pytest

from mdvet.config import Settings
from mdvet.core.models import SnippetStatus
from mdvet.core.pipeline import load_all, run_check, run_load


@pytest.fixture(name="docs_dir")
def docs_dir_fixture(tmp_path):
    (tmp_path / "a.md").write_text("---\ntitle: A\n---\n```python\nx = 1\n```\n")
    (tmp_path / "b.md").write_text("```python\ndef (\n```\n")
    (tmp_path / "c.md").write_text("```python\nnever closed\n")
    (tmp_path / "d.md").write_text("---\ntitle: D\nno end\n")
    return tmp_path


def test_load_failures_do_not_abort(docs_dir):
    """Files that fail to load are recorded; the rest still load."""
    documents, failures = run_load(str(docs_dir), Settings())
    assert [d.title for d in documents] == ["A", None]
    assert sorted(f.error for f in failures) == ["MetadataParseError", "UnterminatedBlockError"]
    assert all(f.path.endswith(("c.md", "d.md")) for f in failures)


def test_fail_fast_raises(docs_dir):
    """fail_fast turns the first load failure into a RuntimeError."""
    with pytest.raises(RuntimeError, match="Failed to load"):
        run_load(str(docs_dir), Settings(), fail_fast=True)


def test_thread_pool_keeps_order(docs_dir):
    """Loading on a pool returns documents in path order."""
    paths = sorted(docs_dir.glob("*.md"))
    serial, _ = load_all(paths, max_workers=1)
    pooled, _ = load_all(paths, max_workers=4)
    assert [d.path for d in pooled] == [d.path for d in serial]


def test_run_check(docs_dir):
    """run_check reports every block and counts load failures as errors."""
    result = run_check(str(docs_dir), Settings(max_workers=2))
    assert [r.status for r in result.reports] == [SnippetStatus.ok, SnippetStatus.error]
    assert result.error_count == 3
    assert not result.ok


def test_run_check_languages_from_settings(docs_dir):
    """Settings.languages limits which blocks are reported."""
    result = run_check(str(docs_dir), Settings(languages=["json"]))
    assert result.reports == []
