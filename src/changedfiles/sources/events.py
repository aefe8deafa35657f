"""Resolve the base/head commits of a workflow run from its event payload."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from changedfiles.sources.errors import UpstreamError

PULL_REQUEST_EVENTS = ("pull_request", "pull_request_target")
PUSH_EVENTS = ("push",)


@dataclass(frozen=True)
class CommitRange:
    base: str
    head: str


def _dig(payload: Dict[str, Any], *keys: str) -> Optional[str]:
    node: Any = payload
    for key in keys:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node if isinstance(node, str) and node else None


def resolve_commits(event_name: str, payload: Dict[str, Any]) -> CommitRange:
    """Return the CommitRange for a pull-request or push event payload."""
    if event_name in PULL_REQUEST_EVENTS:
        base = _dig(payload, "pull_request", "base", "sha")
        head = _dig(payload, "pull_request", "head", "sha")
    elif event_name in PUSH_EVENTS:
        base = _dig(payload, "before")
        head = _dig(payload, "after")
    else:
        raise UpstreamError.unsupported_event(event_name)

    if not base or not head:
        raise UpstreamError.missing_commits(event_name)
    return CommitRange(base=base, head=head)


def load_event(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the event payload JSON (defaults to ``GITHUB_EVENT_PATH``)."""
    path = path or os.environ.get("GITHUB_EVENT_PATH", "")
    if not path:
        raise UpstreamError("No event payload: GITHUB_EVENT_PATH is not set")
    try:
        with open(Path(path), encoding="utf-8") as f:
            payload = json.load(f)
    except OSError as exc:
        raise UpstreamError(f"Cannot read event payload {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise UpstreamError(f"Event payload {path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise UpstreamError(f"Event payload {path} is not a JSON object")
    return payload


def event_name_from_env() -> str:
    name = os.environ.get("GITHUB_EVENT_NAME", "")
    if not name:
        raise UpstreamError("No event name: GITHUB_EVENT_NAME is not set")
    return name


def repository_from_env() -> Tuple[str, str]:
    """Split ``GITHUB_REPOSITORY`` (``owner/repo``) into its parts."""
    value = os.environ.get("GITHUB_REPOSITORY", "")
    owner, sep, repo = value.partition("/")
    if not sep or not owner or not repo:
        raise UpstreamError(f"GITHUB_REPOSITORY must be 'owner/repo', got '{value}'")
    return owner, repo
