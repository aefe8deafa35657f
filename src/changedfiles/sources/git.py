"""Local git source — changed files between two commits via ``git diff``."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional

from changedfiles.changes.models import ChangedFileRecord
from changedfiles.sources.errors import UpstreamError

# git --name-status letter -> status name. Letters outside the four
# recognised statuses map to the names the compare API uses so they fail
# classification with a readable status.
_STATUS_LETTERS = {
    "A": "added",
    "M": "modified",
    "D": "removed",
    "R": "renamed",
    "C": "copied",
    "T": "changed",
    "U": "unmerged",
    "X": "unknown",
}


def _run_git(args: list[str], cwd: Path, timeout: int = 30) -> str:
    """Run a git command and return stdout. Raises UpstreamError on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise UpstreamError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise UpstreamError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        raise UpstreamError(f"git error: {result.stderr.strip() or 'exit code ' + str(result.returncode)}")
    return result.stdout


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(out.strip())


def parse_name_status(output: str) -> List[ChangedFileRecord]:
    """Parse ``git diff --name-status -z`` output into records.

    Renames and copies carry a similarity score (``R087``) and two paths;
    the record takes the new path and counts as patched below 100%.
    """
    tokens = output.split("\0")
    if tokens and tokens[-1] == "":
        tokens.pop()

    records: List[ChangedFileRecord] = []
    idx = 0
    while idx < len(tokens):
        code = tokens[idx]
        idx += 1
        if not code:
            continue
        letter, score = code[0], code[1:]
        status = _STATUS_LETTERS.get(letter, letter)

        if letter in ("R", "C"):
            if idx + 1 >= len(tokens):
                raise UpstreamError(f"Truncated git diff output after status '{code}'")
            new_path = tokens[idx + 1]
            idx += 2
            similarity = int(score) if score.isdigit() else 100
            records.append(
                ChangedFileRecord(filename=new_path, status=status, has_patch=similarity < 100)
            )
            continue

        if idx >= len(tokens):
            raise UpstreamError(f"Truncated git diff output after status '{code}'")
        path = tokens[idx]
        idx += 1
        records.append(
            ChangedFileRecord(filename=path, status=status, has_patch=letter in ("A", "M"))
        )
    return records


def get_changed_files(repo_root: Path, base: str, head: str) -> List[ChangedFileRecord]:
    """Return the files changed between *base* and *head*, in git's order."""
    output = _run_git(
        ["diff", "--name-status", "-M", "-z", "--no-color", base, head],
        cwd=repo_root,
    )
    return parse_name_status(output)
