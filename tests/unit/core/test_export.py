"""Unit tests for core/export.py"""

import json

from mdvet.core.export import (
    build_body,
    build_report,
    dump_document,
    snippet_filename,
    write_report,
    write_snippets,
)
from mdvet.core.models import RunResult
from mdvet.core.parse import load_text
from mdvet.core.utils.hashing import sha256
from mdvet.core.validate import validate_document


def test_build_body_reassembles_source():
    """build_body gives back the body exactly."""
    body = "Intro\n\n```python\nx = 1\n```\n\n- list\n"
    assert build_body(load_text(f"---\ntitle: T\n---\n{body}")) == body


def test_dump_roundtrip_keys_and_order(sample_doc):
    """Loading the dumped text keeps metadata keys (in order) and block order."""
    again = load_text(dump_document(sample_doc), sample_doc.path)
    assert list(again.metadata) == list(sample_doc.metadata)
    assert again.metadata == sample_doc.metadata
    assert [b.kind for b in again.body] == [b.kind for b in sample_doc.body]
    assert again.code_blocks == sample_doc.code_blocks


def test_dump_without_metadata():
    """A document without front matter dumps to its body only."""
    doc = load_text("Text\n\n```py\nx\n```\n")
    assert dump_document(doc) == "Text\n\n```py\nx\n```\n"


def test_snippet_filename(sample_doc):
    """File names combine the document slug, ordinal, and language extension."""
    blocks = sample_doc.code_blocks
    assert snippet_filename(sample_doc, 0, blocks[0]) == "maps-000.py"
    assert snippet_filename(sample_doc, 1, blocks[1]) == "maps-001.json"
    assert snippet_filename(sample_doc, 2, blocks[2]) == "maps-002.elixir"


def test_write_snippets(tmp_path, sample_doc):
    """write_snippets writes one file per block plus a manifest."""
    manifest = write_snippets([sample_doc], tmp_path)
    assert len(manifest) == 3
    first = tmp_path / "guides" / "maps-000.py"
    assert first.read_text() == "squares = {n: n * n for n in range(3)}\n"
    data = json.loads((tmp_path / "manifest.json").read_text())
    assert data["snippets"][0]["source"] == "guides/maps.md"
    assert data["snippets"][0]["line"] == 10
    assert data["snippets"][0]["hash"] == sha256("squares = {n: n * n for n in range(3)}")


def test_write_snippets_language_filter(tmp_path, sample_doc):
    """Only the requested languages are written."""
    manifest = write_snippets([sample_doc], tmp_path, languages=["json"])
    assert [m["index"] for m in manifest] == [1]


def test_report(tmp_path, broken_doc):
    """The JSON report carries a summary and per-block results."""
    result = RunResult(documents=[broken_doc], reports=validate_document(broken_doc))
    report = build_report(result)
    assert report["summary"] == {"documents": 1, "snippets": 3, "errors": 2, "load_failures": 0}
    assert report["snippets"][0]["status"] == "error"

    out = write_report(result, tmp_path / "out" / "report.json")
    assert json.loads(out.read_text()) == report
