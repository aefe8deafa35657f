"""Changed-file sources — event resolution, GitHub compare API, local git."""

from changedfiles.sources.errors import UpstreamError
from changedfiles.sources.events import (
    CommitRange,
    event_name_from_env,
    load_event,
    repository_from_env,
    resolve_commits,
)
from changedfiles.sources.git import get_changed_files, get_repo_root, parse_name_status
from changedfiles.sources.github import GitHubCompareClient, GitHubConfig, records_from_payload

__all__ = [
    "CommitRange",
    "GitHubCompareClient",
    "GitHubConfig",
    "UpstreamError",
    "event_name_from_env",
    "get_changed_files",
    "get_repo_root",
    "load_event",
    "parse_name_status",
    "records_from_payload",
    "repository_from_env",
    "resolve_commits",
]
