"""Starter .changed-files.toml template."""

DEFAULT_TOML = """\
# changed-files configuration
version = "1.0"

[output]
format = "space-delimited"   # space-delimited | csv | json
# output_dir = "changed"     # write <category>.<ext> files here
show_summary = true

[filter]
# Evaluated top to bottom. "!" patterns only remove files that an
# earlier pattern already included.
patterns = ["*"]
# file = "filters.yml"       # YAML list of extra patterns

[source]
kind = "github"              # github | git
# api_url = "https://api.github.com"
# timeout_s = 30.0
"""
