"""Core pipeline — filter, classify, and format a list of changed files.

Every step raises on failure and nothing after it runs, so a Report only
exists when all outputs were produced.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from changedfiles.changes.classifier import classify
from changedfiles.changes.models import CategoryBuckets, CategoryName, ChangedFileRecord
from changedfiles.config.schema import OutputFormat
from changedfiles.filters.evaluator import build_filter
from changedfiles.output.formatter import extension_for, format_buckets

LEGACY_ALIASES: Dict[str, CategoryName] = {"deleted": CategoryName.REMOVED}


@dataclass
class Report:
    """Classified and formatted result of one run."""

    fmt: OutputFormat
    buckets: CategoryBuckets
    outputs: Dict[CategoryName, str] = field(default_factory=dict)
    total_records: int = 0

    @property
    def extension(self) -> str:
        return extension_for(self.fmt)

    @property
    def filtered_out(self) -> int:
        return self.total_records - len(self.buckets.all_filenames())

    def category_outputs(self) -> Dict[str, str]:
        """Category name → formatted content, for the output directory."""
        return {name.value: content for name, content in self.outputs.items()}

    def step_outputs(self) -> Dict[str, str]:
        """Category outputs plus the backward-compatible aliases."""
        named = self.category_outputs()
        for alias, target in LEGACY_ALIASES.items():
            named[alias] = self.outputs[target]
        return named


def build_report(
    records: Iterable[ChangedFileRecord],
    patterns: Optional[List[str]],
    fmt: OutputFormat,
    *,
    include: Optional[Callable[[str], bool]] = None,
) -> Report:
    """Run the filter → classify → format pipeline over *records*.

    *include* overrides the predicate built from *patterns*.
    """
    records = list(records)
    predicate = include if include is not None else build_filter(patterns)
    buckets = classify(records, predicate)
    outputs = format_buckets(buckets, fmt)
    return Report(
        fmt=OutputFormat(fmt),
        buckets=buckets,
        outputs=outputs,
        total_records=len(records),
    )
