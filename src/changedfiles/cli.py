"""changed-files CLI — Typer application with run, classify, and init commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from changedfiles import __version__

app = typer.Typer(
    name="changed-files",
    help="Classify the files changed between two commits.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _fail(label: str, exc: Exception, code: int) -> typer.Exit:
    console.print(f"[bold red]{label}:[/bold red] {escape(str(exc))}")
    return typer.Exit(code=code)


def _load_settings(
    config: Optional[str],
    format: Optional[str],
    filters: Optional[List[str]],
    filter_file: Optional[str],
    output_dir: Optional[str],
    source: Optional[str] = None,
):
    """Load config, apply CLI overrides, validate. Exit 2 on ConfigurationError."""
    from changedfiles.config.loader import (
        ConfigurationError,
        load_config,
        load_filter_file,
        validate,
    )

    try:
        cfg = load_config(Path.cwd(), config)
        if format:
            cfg.output.format = format
        if filters:
            cfg.filter.patterns = list(filters)
        if filter_file:
            extra = load_filter_file(Path(filter_file))
            cfg.filter.patterns = (list(filters) if filters else []) + extra
        if output_dir is not None:
            cfg.output.output_dir = output_dir
        if source:
            cfg.source.kind = source  # type: ignore[assignment]
        validate(cfg)
    except ConfigurationError as exc:
        raise _fail("Config error", exc, 2) from exc
    return cfg


def _trace_filters(records, patterns: List[str]) -> None:
    from changedfiles.filters.evaluator import parse_patterns, trace_file

    parsed = parse_patterns(patterns)
    for record in records:
        steps = trace_file(record.filename, parsed)
        trail = " ".join(f"{pat}→{'y' if hit else 'n'}" for pat, hit in steps)
        console.print(f"[dim]  {escape(record.filename)}: {escape(trail)}[/dim]")


def _emit(cfg, records, *, verbose: bool, debug: bool, select: Optional[str] = None) -> None:
    """Build the report from *records* and publish it. Exits non-zero on failure."""
    from changedfiles.changes.classifier import ClassificationError
    from changedfiles.engine import build_report
    from changedfiles.output import actions, terminal
    from changedfiles.output.formatter import SpaceInFilenameError
    from changedfiles.output.writer import OutputWriteError, resolve_output_dir, write_outputs

    if debug:
        console.print(f"[dim]Filter: {escape(str(cfg.filter.patterns))}[/dim]")
        _trace_filters(records, cfg.filter.patterns)

    try:
        report = build_report(records, cfg.filter.patterns, cfg.output_format)
    except ClassificationError as exc:
        raise _fail("Classification error", exc, 1) from exc
    except SpaceInFilenameError as exc:
        raise _fail("Format error", exc, 1) from exc

    if cfg.output.show_summary or verbose:
        terminal.render(report, console=console, show_summary=verbose or debug)

    # Files first: a failed write must leave the step outputs unset.
    if cfg.output.output_dir:
        directory = resolve_output_dir(cfg.output.output_dir)
        try:
            write_outputs(directory, report.category_outputs(), report.extension)
        except OutputWriteError as exc:
            raise _fail("Write error", exc, 1) from exc
        console.print(f"[dim]Output written to {escape(str(directory))}[/dim]")

    if select:
        print(report.step_outputs()[select])
    else:
        actions.set_outputs(report.step_outputs())


# ── run ───────────────────────────────────────────────────────────────────────


@app.command()
def run(
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: space-delimited | csv | json"),
    filters: Optional[List[str]] = typer.Option(None, "--filter", "-p", help="Glob filter; repeat to add, prefix with ! to exclude"),
    filter_file: Optional[str] = typer.Option(None, "--filter-file", help="YAML file with filter patterns"),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", "-o", help="Write <category>.<ext> files here"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .changed-files.toml"),
    source: Optional[str] = typer.Option(None, "--source", help="Changed-file source: github | git"),
    base: Optional[str] = typer.Option(None, "--base", help="Base commit (default: from event payload)"),
    head: Optional[str] = typer.Option(None, "--head", help="Head commit (default: from event payload)"),
    event_path: Optional[str] = typer.Option(None, "--event-path", help="Event payload JSON (default: $GITHUB_EVENT_PATH)"),
    event_name: Optional[str] = typer.Option(None, "--event-name", help="Event name (default: $GITHUB_EVENT_NAME)"),
    repository: Optional[str] = typer.Option(None, "--repository", help="owner/repo (default: $GITHUB_REPOSITORY)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Trace every filter decision"),
) -> None:
    """Fetch the files changed between two commits and set the category outputs."""
    from changedfiles.sources import (
        CommitRange,
        GitHubCompareClient,
        GitHubConfig,
        UpstreamError,
        event_name_from_env,
        get_changed_files,
        get_repo_root,
        load_event,
        repository_from_env,
        resolve_commits,
    )

    cfg = _load_settings(config, format, filters, filter_file, output_dir, source)

    try:
        if base and head:
            commits = CommitRange(base=base, head=head)
        else:
            name = event_name or event_name_from_env()
            commits = resolve_commits(name, load_event(event_path))

        if verbose or debug:
            console.print(f"[dim]Base commit: {commits.base}[/dim]")
            console.print(f"[dim]Head commit: {commits.head}[/dim]")
            console.print(f"[dim]Source: {cfg.source.kind}[/dim]")

        if cfg.source.kind == "git":
            records = get_changed_files(get_repo_root(), commits.base, commits.head)
        else:
            if repository:
                owner, _, repo = repository.partition("/")
                if not owner or not repo:
                    raise UpstreamError(f"--repository must be 'owner/repo', got '{repository}'")
            else:
                owner, repo = repository_from_env()
            gh_config = GitHubConfig.from_env(api_url=cfg.source.api_url, timeout_s=cfg.source.timeout_s)
            with GitHubCompareClient(gh_config) as client:
                records = client.changed_files(owner, repo, commits.base, commits.head)
    except UpstreamError as exc:
        raise _fail("Upstream error", exc, 2) from exc

    if verbose or debug:
        console.print(f"[dim]Files in comparison: {len(records)}[/dim]")

    _emit(cfg, records, verbose=verbose, debug=debug)


# ── classify ──────────────────────────────────────────────────────────────────


@app.command()
def classify(
    records_file: str = typer.Argument(..., help="JSON compare response, or its 'files' list ('-' for stdin)"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: space-delimited | csv | json"),
    filters: Optional[List[str]] = typer.Option(None, "--filter", "-p", help="Glob filter; repeat to add, prefix with ! to exclude"),
    filter_file: Optional[str] = typer.Option(None, "--filter-file", help="YAML file with filter patterns"),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", "-o", help="Write <category>.<ext> files here"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .changed-files.toml"),
    category: Optional[str] = typer.Option(None, "--category", help="Print only this category's output"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Trace every filter decision"),
) -> None:
    """Classify a saved list of changed files without contacting GitHub."""
    import sys

    from changedfiles.changes.models import CategoryName
    from changedfiles.engine import LEGACY_ALIASES
    from changedfiles.sources import UpstreamError, records_from_payload

    cfg = _load_settings(config, format, filters, filter_file, output_dir)

    valid = [c.value for c in CategoryName] + list(LEGACY_ALIASES)
    if category is not None and category not in valid:
        console.print(f"[bold red]Invalid category:[/bold red] {category}")
        raise typer.Exit(code=2)

    try:
        if records_file == "-":
            data = json.load(sys.stdin)
        else:
            data = json.loads(Path(records_file).read_text(encoding="utf-8"))
        files = data.get("files", []) if isinstance(data, dict) else data
        records = records_from_payload(files)
    except (OSError, json.JSONDecodeError) as exc:
        raise _fail("Input error", exc, 2) from exc
    except UpstreamError as exc:
        raise _fail("Input error", exc, 2) from exc

    _emit(cfg, records, verbose=verbose, debug=debug, select=category)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .changed-files.toml in the current directory."""
    from changedfiles.config.defaults import DEFAULT_TOML
    from changedfiles.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"changed-files {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """changed-files — classify the files changed between two commits."""
