"""changedfiles — classify the files changed between two commits."""

__version__ = "2.3.0"
