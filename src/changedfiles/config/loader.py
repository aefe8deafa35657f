"""Load and merge configuration from .changed-files.toml, action inputs, and env vars."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import yaml

from changedfiles.config.schema import (
    FORMAT_VALUES,
    SOURCE_VALUES,
    ChangedFilesConfig,
    FilterConfig,
    OutputConfig,
    OutputFormat,
    SourceConfig,
)

CONFIG_FILENAME = ".changed-files.toml"


class ConfigurationError(Exception):
    """Raised when config is malformed, unreadable, or names an unknown format."""


def parse_format(value: str) -> OutputFormat:
    """Return the OutputFormat for *value* or raise ConfigurationError."""
    try:
        return OutputFormat(value)
    except ValueError:
        allowed = ", ".join(f"'{v}'" for v in FORMAT_VALUES)
        raise ConfigurationError(
            f"Format must be one of {allowed}, got '{value}'."
        ) from None


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigurationError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    import dataclasses

    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.get(section, {}).items() if k in valid_fields}
    return cls(**filtered)


def split_patterns(value: str) -> List[str]:
    """Split a multiline action input into pattern lines, dropping blanks."""
    return [line.strip() for line in value.splitlines() if line.strip()]


def _input(name: str) -> Optional[str]:
    """Read a GitHub Actions input (``INPUT_<NAME>``), accepting ``-`` or ``_``."""
    for key in (f"INPUT_{name.upper()}", f"INPUT_{name.upper().replace('-', '_')}"):
        val = os.environ.get(key)
        if val is not None:
            return val.strip()
    return None


def _merge_env_overrides(cfg: ChangedFilesConfig) -> None:
    """Apply action inputs and CHANGED_FILES_* environment overrides."""
    if val := _input("format"):
        cfg.output.format = val
    if val := _input("filter"):
        cfg.filter.patterns = split_patterns(val)
    if val := _input("output-dir"):
        cfg.output.output_dir = val
    if val := os.environ.get("CHANGED_FILES_SOURCE"):
        cfg.source.kind = val  # type: ignore[assignment]
    if val := os.environ.get("GITHUB_API_URL"):
        cfg.source.api_url = val


def load_filter_file(path: Path) -> List[str]:
    """Read filter patterns from a YAML file.

    Accepts either a plain list of patterns or a mapping with a ``filter``
    list.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigurationError(f"Cannot read filter file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse {path}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("filter")
    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(p, str) for p in data):
        raise ConfigurationError(
            f"Filter file {path} must contain a list of glob strings"
        )
    return [p.strip() for p in data if p.strip()]


def validate(cfg: ChangedFilesConfig) -> None:
    """Raise ConfigurationError if *cfg* holds values outside the allowed sets."""
    parse_format(cfg.output.format)
    if cfg.source.kind not in SOURCE_VALUES:
        allowed = ", ".join(f"'{v}'" for v in SOURCE_VALUES)
        raise ConfigurationError(
            f"Source must be one of {allowed}, got '{cfg.source.kind}'."
        )


def load_config(
    root: Path,
    config_override: Optional[str] = None,
) -> ChangedFilesConfig:
    """Load, merge env overrides, and return a ChangedFilesConfig.

    Validation is left to :func:`validate` so that CLI flags can still
    override a bad value before the run starts.
    """
    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = ChangedFilesConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = ChangedFilesConfig(
            version=raw.get("version", "1.0"),
            output=_build_section(raw, OutputConfig, "output"),
            filter=_build_section(raw, FilterConfig, "filter"),
            source=_build_section(raw, SourceConfig, "source"),
        )
        if cfg.filter.file:
            filter_path = Path(cfg.filter.file)
            if not filter_path.is_absolute():
                filter_path = config_path.parent / filter_path
            explicit = raw.get("filter", {}).get("patterns") or []
            cfg.filter.patterns = list(explicit) + load_filter_file(filter_path)

    _merge_env_overrides(cfg)
    return cfg
