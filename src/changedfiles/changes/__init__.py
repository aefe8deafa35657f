"""Changed-file models and the category classifier."""

from changedfiles.changes.classifier import ClassificationError, classify
from changedfiles.changes.models import (
    CategoryBuckets,
    CategoryName,
    ChangedFileRecord,
    FileStatus,
)

__all__ = [
    "CategoryBuckets",
    "CategoryName",
    "ChangedFileRecord",
    "ClassificationError",
    "FileStatus",
    "classify",
]
