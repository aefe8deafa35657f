"""Configuration loading, schema, and defaults."""

from changedfiles.config.loader import (
    ConfigurationError,
    load_config,
    load_filter_file,
    parse_format,
    validate,
)
from changedfiles.config.schema import ChangedFilesConfig, OutputFormat

__all__ = [
    "ChangedFilesConfig",
    "ConfigurationError",
    "OutputFormat",
    "load_config",
    "load_filter_file",
    "parse_format",
    "validate",
]
