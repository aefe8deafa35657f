"""Data models for changed files and their categories."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Set


class FileStatus(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"
    RENAMED = "renamed"


class CategoryName(str, Enum):
    """Output categories, in output order."""

    ALL = "all"
    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"
    RENAMED = "renamed"
    ADDED_MODIFIED = "added_modified"
    ADDED_MODIFIED_RENAMED = "added_modified_renamed"


@dataclass(frozen=True)
class ChangedFileRecord:
    """One file touched by a commit comparison.

    ``status`` is the raw string from the source so that statuses outside
    :class:`FileStatus` reach the classifier and fail there.
    """

    filename: str
    status: str
    has_patch: bool = False

    @classmethod
    def from_api(cls, entry: Mapping[str, Any]) -> "ChangedFileRecord":
        """Build a record from a compare-API ``files[]`` entry."""
        return cls(
            filename=str(entry["filename"]),
            status=str(entry.get("status", "")),
            has_patch=bool(entry.get("patch")),
        )


@dataclass
class CategoryBuckets:
    """Ordered filename lists per category. Every category is always present."""

    files: Dict[CategoryName, List[str]] = field(
        default_factory=lambda: {name: [] for name in CategoryName}
    )
    _seen: Dict[CategoryName, Set[str]] = field(
        default_factory=lambda: {name: set() for name in CategoryName},
        init=False,
        repr=False,
        compare=False,
    )

    def __post_init__(self) -> None:
        for name, names in self.files.items():
            self._seen[name].update(names)

    def add(self, category: CategoryName, filename: str) -> None:
        seen = self._seen[category]
        if filename not in seen:
            seen.add(filename)
            self.files[category].append(filename)

    def __getitem__(self, category: CategoryName) -> List[str]:
        return self.files[CategoryName(category)]

    def __iter__(self) -> Iterator[CategoryName]:
        return iter(self.files)

    def items(self):
        return self.files.items()

    def all_filenames(self) -> List[str]:
        return self.files[CategoryName.ALL]

    def counts(self) -> Dict[CategoryName, int]:
        return {name: len(names) for name, names in self.files.items()}
