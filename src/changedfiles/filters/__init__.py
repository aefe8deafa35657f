"""Glob filtering — single-pattern matcher and ordered filter evaluator."""

from changedfiles.filters.evaluator import (
    DEFAULT_PATTERNS,
    FilterPattern,
    build_filter,
    include_file,
    parse_patterns,
    trace_file,
)
from changedfiles.filters.matcher import matches

__all__ = [
    "DEFAULT_PATTERNS",
    "FilterPattern",
    "build_filter",
    "include_file",
    "matches",
    "parse_patterns",
    "trace_file",
]
