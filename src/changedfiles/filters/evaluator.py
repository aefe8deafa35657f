"""Ordered include/exclude filter — a left fold over the pattern list."""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Callable, Iterable, List, Optional, Sequence

from changedfiles.filters.matcher import matches

DEFAULT_PATTERNS: tuple[str, ...] = ("*",)


@dataclass(frozen=True)
class FilterPattern:
    """One glob from the filter list. ``negated`` patterns subtract."""

    glob: str
    negated: bool = False

    @classmethod
    def parse(cls, raw: str) -> "FilterPattern":
        """Parse ``"!glob"`` / ``"glob"`` into a FilterPattern."""
        raw = raw.strip()
        if raw.startswith("!"):
            return cls(glob=raw[1:], negated=True)
        return cls(glob=raw)

    def __str__(self) -> str:
        return f"!{self.glob}" if self.negated else self.glob


def parse_patterns(raw_patterns: Optional[Iterable[str]]) -> List[FilterPattern]:
    """Build the ordered pattern list, dropping blank lines.

    An empty or missing list falls back to ``["*"]`` (match everything).
    """
    raw = [p for p in (raw_patterns or []) if p and p.strip()]
    if not raw:
        raw = list(DEFAULT_PATTERNS)
    return [FilterPattern.parse(p) for p in raw]


def _step(filename: str) -> Callable[[bool, FilterPattern], bool]:
    def step(match: bool, pattern: FilterPattern) -> bool:
        if pattern.negated:
            return match and not matches(filename, pattern.glob)
        return match or matches(filename, pattern.glob)

    return step


def include_file(filename: str, patterns: Sequence[FilterPattern]) -> bool:
    """Return True if *filename* survives the ordered *patterns*.

    Starts from False. Positive patterns OR in a match, negated patterns
    AND out a match, so a negation can only narrow what earlier positive
    patterns already included.
    """
    return reduce(_step(filename), patterns, False)


def build_filter(raw_patterns: Optional[Iterable[str]] = None) -> Callable[[str], bool]:
    """Return a ``filename -> bool`` predicate for *raw_patterns*."""
    patterns = parse_patterns(raw_patterns)

    def include(filename: str) -> bool:
        return include_file(filename, patterns)

    return include


def trace_file(filename: str, patterns: Sequence[FilterPattern]) -> List[tuple[str, bool]]:
    """Return the running match value after each pattern, for debug output."""
    steps: List[tuple[str, bool]] = []
    match = False
    step = _step(filename)
    for pattern in patterns:
        match = step(match, pattern)
        steps.append((str(pattern), match))
    return steps
