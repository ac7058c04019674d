"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdvet.config import Settings, load_config
from mdvet.core.errors import ParseError
from mdvet.core.export import write_report, write_snippets
from mdvet.core.models import RunResult, SnippetStatus
from mdvet.core.parse import load_file
from mdvet.core.pipeline import run_check, run_load
from mdvet.core.utils.logs import setup_logging
from mdvet.core.validate import default_registry


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    setup_logging(settings.log_level)
    return settings


def _echo_check(result: RunResult, verbose: bool) -> None:
    """Print load failures, per-block problems, and a summary line."""
    for f in result.failures:
        typer.echo(f"  load error: {f.message}")
    for r in result.reports:
        if r.status == SnippetStatus.error:
            typer.echo(f"  {r.path}:{r.line}: [{r.language}] block {r.index}: {r.message}")
        elif verbose:
            typer.echo(f"  {r.path}:{r.line}: [{r.language or '-'}] block {r.index}: {r.status.value}")
    checked = sum(1 for r in result.reports if r.status != SnippetStatus.skipped)
    typer.echo(
        f"Checked {checked} of {len(result.reports)} snippet(s) in "
        f"{len(result.documents)} document(s) - "
        f"{len(result.errors)} error(s), "
        f"{len(result.failures)} load failure(s)"
    )


def check_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to check")],
    report: Annotated[Optional[str], typer.Option("--report", help="Write JSON report to this file")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Loader threads")] = None,
    lang: Annotated[Optional[list[str]], typer.Option("--lang", help="Only check these language tags")] = None,
    fail_fast: Annotated[bool, typer.Option("--fail-fast", help="Stop at the first file that fails to load")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Also list ok and skipped snippets")] = False,
    ):
    """Load documents and check the syntax of their code samples."""
    settings = _settings(overrides={"report_file": report, "max_workers": workers, "languages": lang or None})
    try:
        result = run_check(path, settings, default_registry, fail_fast=fail_fast)
    except RuntimeError as e:
        _fail(str(e))
    _echo_check(result, verbose)

    if settings.report_file:
        try:
            out = write_report(result, Path(settings.report_file))
        except OSError as e:
            _fail("Could not write report", e)
        typer.echo(f"Report written to {out}")
    if not result.ok:
        raise typer.Exit(1)


def extract_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to extract from")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    lang: Annotated[Optional[list[str]], typer.Option("--lang", help="Only extract these language tags")] = None,
    ):
    """Write every fenced code block to its own file plus a manifest.json."""
    settings = _settings(overrides={"output_dir": out, "languages": lang or None})
    try:
        documents, failures = run_load(path, settings)
    except RuntimeError as e:
        _fail(str(e))
    for f in failures:
        typer.echo(f"  load error: {f.message}", err=True)
    output_dir = Path(settings.output_dir)
    try:
        manifest = write_snippets(documents, output_dir, settings.languages or None)
    except OSError as e:
        _fail("Extract failed", e)
    for entry in manifest:
        typer.echo(f"  {entry['source']}#{entry['index']} -> {entry['path']}")
    typer.echo(f"Extracted {len(manifest)} snippet(s) to {output_dir}/")
    if failures:
        raise typer.Exit(1)


def show_cmd(
    path: Annotated[Path, typer.Argument(help="Markdown file to load")],
    ):
    """Print the loaded document (metadata and blocks) as JSON."""
    settings = _settings()
    try:
        doc = load_file(path, settings.parser_config)
    except (ParseError, OSError, UnicodeDecodeError) as e:
        _fail(f"Could not load {path}", e)
    typer.echo(json.dumps(doc.model_dump(mode='json'), indent=2))


def languages_cmd():
    """List language tags that have a registered syntax checker."""
    for tag in default_registry.languages:
        typer.echo(tag)
