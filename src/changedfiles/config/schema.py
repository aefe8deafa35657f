"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Literal, Optional


class OutputFormat(str, Enum):
    SPACE_DELIMITED = "space-delimited"
    CSV = "csv"
    JSON = "json"


FORMAT_VALUES: tuple[str, ...] = tuple(f.value for f in OutputFormat)

SourceKind = Literal["github", "git"]

SOURCE_VALUES: tuple[str, ...] = ("github", "git")


@dataclass
class OutputConfig:
    format: str = OutputFormat.SPACE_DELIMITED.value
    output_dir: str = ""  # empty = do not write files
    show_summary: bool = True


@dataclass
class FilterConfig:
    patterns: List[str] = field(default_factory=lambda: ["*"])
    file: Optional[str] = None  # YAML file with extra patterns


@dataclass
class SourceConfig:
    kind: SourceKind = "github"
    api_url: str = "https://api.github.com"
    timeout_s: float = 30.0


@dataclass
class ChangedFilesConfig:
    version: str = "1.0"
    output: OutputConfig = field(default_factory=OutputConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)
    source: SourceConfig = field(default_factory=SourceConfig)

    @property
    def output_format(self) -> OutputFormat:
        return OutputFormat(self.output.format)
