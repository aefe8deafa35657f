"""Render category buckets as space-delimited, CSV, or JSON strings."""

from __future__ import annotations

import json
from typing import Dict, List

from changedfiles.changes.models import CategoryBuckets, CategoryName
from changedfiles.config.schema import OutputFormat

_EXTENSIONS = {
    OutputFormat.SPACE_DELIMITED: "txt",
    OutputFormat.CSV: "csv",
    OutputFormat.JSON: "json",
}


class SpaceInFilenameError(Exception):
    """Raised when space-delimited output is requested for a filename with a space."""

    def __init__(self, filenames: List[str]) -> None:
        self.filenames = filenames
        listed = ", ".join(repr(f) for f in filenames)
        super().__init__(
            f"One of your files includes a space ({listed}). Consider using "
            "a different output format or removing spaces from your filenames."
        )


def extension_for(fmt: OutputFormat) -> str:
    """File extension used when writing *fmt* output to disk."""
    return _EXTENSIONS[OutputFormat(fmt)]


def _encode(filenames: List[str], fmt: OutputFormat) -> str:
    if fmt is OutputFormat.SPACE_DELIMITED:
        return " ".join(filenames)
    if fmt is OutputFormat.CSV:
        return ",".join(filenames)
    if fmt is OutputFormat.JSON:
        return json.dumps(filenames, separators=(",", ":"), ensure_ascii=False)
    raise AssertionError(f"unhandled format {fmt!r}")


def check_space_delimited(buckets: CategoryBuckets) -> None:
    """Raise SpaceInFilenameError if any bucketed filename contains a space."""
    offending: List[str] = []
    for names in buckets.files.values():
        for name in names:
            if " " in name and name not in offending:
                offending.append(name)
    if offending:
        raise SpaceInFilenameError(offending)


def format_buckets(buckets: CategoryBuckets, fmt: OutputFormat) -> Dict[CategoryName, str]:
    """Return the encoded string for every category, in category order."""
    fmt = OutputFormat(fmt)
    if fmt is OutputFormat.SPACE_DELIMITED:
        check_space_delimited(buckets)
    return {name: _encode(names, fmt) for name, names in buckets.items()}
