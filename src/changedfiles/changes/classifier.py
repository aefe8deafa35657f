"""Bucket filtered changed files into output categories."""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from changedfiles.changes.models import (
    CategoryBuckets,
    CategoryName,
    ChangedFileRecord,
    FileStatus,
)

_RECOGNISED = ", ".join(f"'{s.value}'" for s in FileStatus)


class ClassificationError(Exception):
    """Raised when a changed file carries a status outside FileStatus."""

    def __init__(self, filename: str, status: str) -> None:
        self.filename = filename
        self.status = status
        super().__init__(
            f"{filename} has unsupported file status '{status}', "
            f"expected one of {_RECOGNISED}"
        )


def _parse_status(record: ChangedFileRecord) -> FileStatus:
    try:
        return FileStatus(record.status)
    except ValueError:
        raise ClassificationError(record.filename, record.status) from None


def _categories_for(status: FileStatus, has_patch: bool) -> tuple[CategoryName, ...]:
    """Return the categories (besides ``all``) a file with *status* lands in."""
    if status is FileStatus.ADDED:
        return (
            CategoryName.ADDED,
            CategoryName.ADDED_MODIFIED,
            CategoryName.ADDED_MODIFIED_RENAMED,
        )
    if status is FileStatus.MODIFIED:
        return (
            CategoryName.MODIFIED,
            CategoryName.ADDED_MODIFIED,
            CategoryName.ADDED_MODIFIED_RENAMED,
        )
    if status is FileStatus.REMOVED:
        return (CategoryName.REMOVED,)
    if status is FileStatus.RENAMED:
        # A rename that carries a patch also changed content.
        if has_patch:
            return (
                CategoryName.RENAMED,
                CategoryName.MODIFIED,
                CategoryName.ADDED_MODIFIED,
                CategoryName.ADDED_MODIFIED_RENAMED,
            )
        return (CategoryName.RENAMED, CategoryName.ADDED_MODIFIED_RENAMED)
    raise AssertionError(f"unhandled status {status!r}")


def classify(
    records: Iterable[ChangedFileRecord],
    include: Optional[Callable[[str], bool]] = None,
) -> CategoryBuckets:
    """Classify *records* into CategoryBuckets.

    Records rejected by *include* are skipped entirely. The first record
    with an unrecognised status raises ClassificationError and nothing is
    returned.
    """
    buckets = CategoryBuckets()
    for record in records:
        if include is not None and not include(record.filename):
            continue
        status = _parse_status(record)
        buckets.add(CategoryName.ALL, record.filename)
        for category in _categories_for(status, record.has_patch):
            buckets.add(category, record.filename)
    return buckets
