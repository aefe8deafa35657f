"""Output formatting, file writing, and CI step outputs."""

from changedfiles.output.formatter import (
    SpaceInFilenameError,
    extension_for,
    format_buckets,
)
from changedfiles.output.writer import OutputWriteError, resolve_output_dir, write_outputs

__all__ = [
    "OutputWriteError",
    "SpaceInFilenameError",
    "extension_for",
    "format_buckets",
    "resolve_output_dir",
    "write_outputs",
]
