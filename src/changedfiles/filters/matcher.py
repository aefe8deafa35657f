"""Single-pattern glob matching for changed file paths.

Semantics:
  - Case-sensitive on every platform (``fnmatchcase``).
  - ``*`` ``?`` and ``[...]`` follow shell-glob rules; dotfiles are not
    hidden from ``*``.
  - A pattern without ``/`` also matches the basename, so ``*.yml``
    matches ``a/b/c.yml``.
  - A pattern with ``/`` matches the whole path or any segment-aligned
    suffix of it; a leading ``/`` anchors it at the repository root.
  - A malformed pattern never raises, it simply does not match.
"""

from __future__ import annotations

import re
from fnmatch import fnmatchcase
from typing import List


def _suffixes(filename: str) -> List[str]:
    """Return *filename* and every trailing run of its path segments."""
    parts = filename.split("/")
    return ["/".join(parts[i:]) for i in range(len(parts))]


def _fnmatch(name: str, pattern: str) -> bool:
    try:
        return fnmatchcase(name, pattern)
    except re.error:
        return False


def matches(filename: str, glob: str) -> bool:
    """Return True if *filename* matches the glob *glob*."""
    if not glob or not filename:
        return False

    if glob.startswith("/"):
        return _fnmatch(filename.lstrip("/"), glob.lstrip("/"))

    if "/" not in glob:
        basename = filename.rsplit("/", 1)[-1]
        return _fnmatch(basename, glob) or _fnmatch(filename, glob)

    return any(_fnmatch(candidate, glob) for candidate in _suffixes(filename))
