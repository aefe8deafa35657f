"""Rich terminal summary of a run."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from changedfiles.changes.models import CategoryName
from changedfiles.engine import Report

_CATEGORY_LABEL = {
    CategoryName.ALL: "All",
    CategoryName.ADDED: "Added",
    CategoryName.MODIFIED: "Modified",
    CategoryName.REMOVED: "Removed",
    CategoryName.RENAMED: "Renamed",
    CategoryName.ADDED_MODIFIED: "Added or modified",
    CategoryName.ADDED_MODIFIED_RENAMED: "Added, modified or renamed",
}

_CATEGORY_STYLE = {
    CategoryName.ADDED: "green",
    CategoryName.MODIFIED: "yellow",
    CategoryName.REMOVED: "red",
    CategoryName.RENAMED: "cyan",
}


def render(report: Report, *, console: Optional[Console] = None, show_summary: bool = True) -> None:
    """Print each category's output to stderr using Rich."""
    console = console or Console(stderr=True)

    table = Table(
        title=f"Changed files ({report.fmt.value})",
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Category", min_width=12)
    table.add_column("Files", justify="right", style="green")
    table.add_column("Output", overflow="fold")

    counts = report.buckets.counts()
    for name, content in report.outputs.items():
        table.add_row(
            Text(_CATEGORY_LABEL[name], style=_CATEGORY_STYLE.get(name, "")),
            str(counts[name]),
            Text(content),
        )

    console.print()
    console.print(table)

    if show_summary:
        _print_summary(console, report)


def _print_summary(console: Console, report: Report) -> None:
    console.print()
    console.print(f"[dim]Files compared:[/dim]  {report.total_records}")
    console.print(f"[dim]Included:[/dim]        {len(report.buckets.all_filenames())}")
    console.print(f"[dim]Filtered out:[/dim]    {report.filtered_out}")
