"""Errors raised by changed-file sources."""

from __future__ import annotations

from typing import Optional


class UpstreamError(Exception):
    """Raised when the commit range or the changed-file list cannot be obtained."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def unsupported_event(cls, event_name: str) -> "UpstreamError":
        return cls(
            f"Only pull requests and pushes are supported, "
            f"'{event_name}' events are not."
        )

    @classmethod
    def missing_commits(cls, event_name: str) -> "UpstreamError":
        return cls(
            f"The base and head commits are missing from the payload for "
            f"this '{event_name}' event."
        )

    @classmethod
    def bad_status(cls, status_code: int, base: str, head: str) -> "UpstreamError":
        return cls(
            f"Comparing {base}...{head} returned HTTP {status_code}, expected 200.",
            status_code=status_code,
        )
