"""GitHub compare-commits client.

Uses ``GET /repos/{owner}/{repo}/compare/{base}...{head}``; each entry of
the response's ``files`` becomes a ChangedFileRecord.
"""

from __future__ import annotations

import dataclasses
import os
from typing import Any, Dict, List, Optional

import httpx

from changedfiles import __version__
from changedfiles.changes.models import ChangedFileRecord
from changedfiles.sources.errors import UpstreamError


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubConfig:
    """Configuration for the GitHub REST API client."""

    token: str
    api_url: str = "https://api.github.com"
    timeout_s: float = 30.0
    user_agent: str = f"changed-files/{__version__}"

    @classmethod
    def from_env(cls, *, api_url: Optional[str] = None, timeout_s: float = 30.0) -> "GitHubConfig":
        """Build configuration from the action ``token`` input or ``GITHUB_TOKEN``."""
        token = (
            os.environ.get("INPUT_TOKEN", "").strip()
            or os.environ.get("GITHUB_TOKEN", "").strip()
        )
        if not token:
            raise UpstreamError("A GitHub token is required: set INPUT_TOKEN or GITHUB_TOKEN")
        return cls(
            token=token,
            api_url=api_url or os.environ.get("GITHUB_API_URL", "https://api.github.com"),
            timeout_s=timeout_s,
        )


class GitHubCompareClient:
    """Fetch the changed files between two commits from the GitHub API."""

    def __init__(self, config: GitHubConfig, *, http_client: Optional[httpx.Client] = None) -> None:
        self._config = config
        self._client = http_client or httpx.Client(timeout=config.timeout_s)
        self._owns_client = http_client is None

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "GitHubCompareClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._config.token}",
            "Accept": "application/vnd.github+json",
            "User-Agent": self._config.user_agent,
        }

    def compare(self, owner: str, repo: str, base: str, head: str) -> Dict[str, Any]:
        """Return the decoded compare response. Raises UpstreamError on failure."""
        url = f"{self._config.api_url.rstrip('/')}/repos/{owner}/{repo}/compare/{base}...{head}"
        try:
            response = self._client.get(url, headers=self._headers())
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Request to compare {base}...{head} failed: {exc}") from exc

        if response.status_code != 200:
            raise UpstreamError.bad_status(response.status_code, base, head)

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamError(f"Compare response for {base}...{head} is not JSON") from exc
        if not isinstance(data, dict):
            raise UpstreamError(f"Compare response for {base}...{head} is not a JSON object")
        return data

    def changed_files(self, owner: str, repo: str, base: str, head: str) -> List[ChangedFileRecord]:
        """Return one ChangedFileRecord per file in the comparison."""
        data = self.compare(owner, repo, base, head)
        return records_from_payload(data.get("files") or [])


def records_from_payload(files: Any) -> List[ChangedFileRecord]:
    """Convert a compare response ``files`` list into records."""
    if not isinstance(files, list):
        raise UpstreamError("Compare response 'files' is not a list")
    records: List[ChangedFileRecord] = []
    for entry in files:
        if not isinstance(entry, dict) or "filename" not in entry:
            raise UpstreamError("Compare response file entry has no 'filename'")
        records.append(ChangedFileRecord.from_api(entry))
    return records
