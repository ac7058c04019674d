"""Export: re-serialize documents, write extracted snippets, and write JSON reports"""

import json
from pathlib import Path
from typing import Iterable, Optional

import yaml

from mdvet.core.extract.snippets import Snippets
from mdvet.core.models import CodeBlock, Document, RunResult
from mdvet.core.utils.hashing import sha256
from mdvet.core.utils.slug import slugify


SNIPPET_EXTENSIONS: dict[str, str] = {
    'python':  'py',
    'python3': 'py',
    'pycon':   'txt',
    'json':    'json',
    'yaml':    'yaml',
    'yml':     'yaml',
    'toml':    'toml',
    'bash':    'sh',
    'sh':      'sh',
    'shell':   'sh',
}


def build_body(doc: Document) -> str:
    """Reconstruct the body from blocks in order."""
    return ''.join(b.raw if isinstance(b, CodeBlock) else b.text for b in doc.body)


def dump_document(doc: Document) -> str:
    """Return the document as text: YAML front matter (keys in original order) then body."""
    if not doc.metadata:
        return build_body(doc)
    header = yaml.safe_dump(doc.metadata, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"---\n{header}---\n{build_body(doc)}"


def snippet_filename(doc: Document, index: int, block: CodeBlock) -> str:
    """Return '<slug>-<index>.<ext>' with ext derived from the language tag."""
    slug = slugify(Path(doc.path).stem, fallback='doc')
    ext = SNIPPET_EXTENSIONS.get(block.language.lower(), block.language.lower() or 'txt')
    return f"{slug}-{index:03d}.{slugify(ext, fallback='txt')}"


def write_snippets(
    docs: Iterable[Document],
    output_dir: Path,
    languages: Optional[Iterable[str]] = None,
    ) -> list[dict]:
    """Write each code block to output_dir mirroring the source tree, plus manifest.json.

    Returns the manifest entries.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    manifest = []
    for doc in docs:
        rel = Path(doc.path).parent
        if rel.is_absolute():
            rel = rel.relative_to(rel.anchor)
        dest_dir = output_dir / rel
        for index, block in Snippets(doc, languages):
            dest_dir.mkdir(parents=True, exist_ok=True)
            out = dest_dir / snippet_filename(doc, index, block)
            out.write_text(block.source + '\n', encoding='utf-8')
            manifest.append({
                "source": doc.path,
                "index": index,
                "language": block.language,
                "line": block.line,
                "path": str(out),
                "hash": sha256(block.source),
            })
    (output_dir / "manifest.json").write_text(
        json.dumps({"snippets": manifest}, indent=2) + "\n", encoding='utf-8',
    )
    return manifest


def build_report(result: RunResult) -> dict:
    """Build the JSON validation report: summary counts, load failures, per-block results."""
    return {
        "summary": {
            "documents": len(result.documents),
            "snippets": len(result.reports),
            "errors": len(result.errors),
            "load_failures": len(result.failures),
        },
        "failures": [f.model_dump() for f in result.failures],
        "snippets": [r.model_dump(mode='json') for r in result.reports],
    }


def write_report(result: RunResult, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(build_report(result), indent=2) + "\n", encoding='utf-8')
    return path
