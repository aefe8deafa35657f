"""Shared test fixtures — sample records, compare payloads, temp git repos."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any, Dict, List

import pytest

from changedfiles.changes.models import ChangedFileRecord

_ACTION_ENV = (
    "INPUT_FORMAT",
    "INPUT_FILTER",
    "INPUT_OUTPUT-DIR",
    "INPUT_OUTPUT_DIR",
    "INPUT_TOKEN",
    "GITHUB_TOKEN",
    "GITHUB_OUTPUT",
    "GITHUB_WORKSPACE",
    "GITHUB_EVENT_PATH",
    "GITHUB_EVENT_NAME",
    "GITHUB_REPOSITORY",
    "GITHUB_API_URL",
    "CHANGED_FILES_SOURCE",
)


@pytest.fixture(autouse=True)
def _clean_action_env(monkeypatch):
    """Tests run inside CI too; never inherit the runner's action variables."""
    for name in _ACTION_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_records() -> List[ChangedFileRecord]:
    """One record per status, plus a rename that carries a patch."""
    return [
        ChangedFileRecord("a.txt", "added", has_patch=True),
        ChangedFileRecord("b.txt", "modified", has_patch=True),
        ChangedFileRecord("c.txt", "removed", has_patch=True),
        ChangedFileRecord("d.txt", "renamed", has_patch=False),
        ChangedFileRecord("e.txt", "renamed", has_patch=True),
    ]


@pytest.fixture
def compare_files() -> List[Dict[str, Any]]:
    """The ``files`` list of a GitHub compare response."""
    return [
        {"filename": "src/app.py", "status": "added", "patch": "@@ -0,0 +1 @@\n+x = 1"},
        {"filename": "README.md", "status": "modified", "patch": "@@ -1 +1 @@\n-a\n+b"},
        {"filename": "old.cfg", "status": "removed", "patch": "@@ -1 +0,0 @@\n-a"},
        {"filename": "docs/guide.md", "status": "renamed", "previous_filename": "guide.md"},
        {"filename": ".github/workflows/ci.yml", "status": "renamed",
         "previous_filename": "ci.yml", "patch": "@@ -1 +1 @@\n-a\n+b"},
    ]


@pytest.fixture
def compare_response(compare_files) -> Dict[str, Any]:
    return {"status": "ahead", "ahead_by": 2, "files": compare_files}


@pytest.fixture
def records_file(tmp_path: Path, compare_response) -> Path:
    path = tmp_path / "compare.json"
    path.write_text(json.dumps(compare_response), encoding="utf-8")
    return path


@pytest.fixture
def output_file(tmp_path: Path, monkeypatch) -> Path:
    """Point GITHUB_OUTPUT at a temp file."""
    path = tmp_path / "github_output"
    path.touch()
    monkeypatch.setenv("GITHUB_OUTPUT", str(path))
    return path


def _parse_outputs(path: Path) -> Dict[str, str]:
    """Parse a GITHUB_OUTPUT file written with the delimiter form."""
    outputs: Dict[str, str] = {}
    lines = path.read_text(encoding="utf-8").splitlines()
    idx = 0
    while idx < len(lines):
        name, delimiter = lines[idx].split("<<", 1)
        idx += 1
        value: List[str] = []
        while lines[idx] != delimiter:
            value.append(lines[idx])
            idx += 1
        idx += 1
        outputs[name] = "\n".join(value)
    return outputs


@pytest.fixture
def read_outputs():
    """Return a parser for GITHUB_OUTPUT files."""
    return _parse_outputs


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with one initial commit."""
    repo = tmp_path / "repo"
    repo.mkdir()
    subprocess.run(["git", "init", str(repo)], capture_output=True, check=True)
    _git(repo, "config", "user.email", "test@test.com")
    _git(repo, "config", "user.name", "Test")
    _git(repo, "config", "commit.gpgsign", "false")
    (repo / "README.md").write_text("# Test\n")
    (repo / "keep.txt").write_text("keep\n")
    (repo / "gone.txt").write_text("gone\n")
    (repo / "moved.txt").write_text("a stable line of content\n" * 20)
    (repo / "tweaked.txt").write_text("another stable line of content\n" * 20)
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "init")
    return repo


@pytest.fixture
def git_commit_range(tmp_git_repo: Path) -> tuple[Path, str, str]:
    """Second commit touching every status; returns (repo, base, head)."""
    repo = tmp_git_repo
    base = _git(repo, "rev-parse", "HEAD")
    (repo / "new.txt").write_text("new\n")
    (repo / "README.md").write_text("# Test\n\nMore.\n")
    (repo / "gone.txt").unlink()
    _git(repo, "mv", "moved.txt", "renamed.txt")
    _git(repo, "mv", "tweaked.txt", "tweaked_renamed.txt")
    with open(repo / "tweaked_renamed.txt", "a") as f:
        f.write("one extra line\n")
    _git(repo, "add", "-A")
    _git(repo, "commit", "-m", "change")
    head = _git(repo, "rev-parse", "HEAD")
    return repo, base, head
