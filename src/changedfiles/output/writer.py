"""Write each category's formatted output to ``<dir>/<category>.<ext>``."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Mapping, Optional, Tuple


class OutputWriteError(Exception):
    """Raised when one or more output files could not be written."""

    def __init__(self, failures: List[Tuple[Path, OSError]]) -> None:
        self.failures = failures
        detail = "; ".join(f"{path}: {exc}" for path, exc in failures)
        super().__init__(f"Failed to write {len(failures)} output file(s): {detail}")


def resolve_output_dir(output_dir: str, workspace: Optional[str] = None) -> Path:
    """Resolve *output_dir* against the CI workspace (``GITHUB_WORKSPACE``)."""
    if workspace is None:
        workspace = os.environ.get("GITHUB_WORKSPACE", "")
    path = Path(output_dir)
    if workspace and not path.is_absolute():
        return Path(workspace) / path
    return path


def _write_one(path: Path, content: str) -> Optional[Tuple[Path, OSError]]:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        return path, exc
    return None


def write_outputs(directory: Path, contents: Mapping[str, str], ext: str) -> List[Path]:
    """Write one file per entry of *contents* and return the written paths.

    Writes run concurrently with no ordering between files. Every write is
    awaited; all failures are reported together in OutputWriteError.
    """
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError([(directory, exc)]) from exc

    targets = [(directory / f"{name}.{ext}", content) for name, content in contents.items()]
    with ThreadPoolExecutor(max_workers=len(targets) or 1) as pool:
        results = list(pool.map(lambda t: _write_one(*t), targets))

    failures = [r for r in results if r is not None]
    if failures:
        raise OutputWriteError(failures)
    return [path for path, _ in targets]
