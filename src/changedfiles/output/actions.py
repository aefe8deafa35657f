"""GitHub Actions step outputs.

Outputs are appended to the file named by ``GITHUB_OUTPUT`` using the
multiline delimiter form::

    name<<ghadelimiter_<uuid>
    value
    ghadelimiter_<uuid>

Outside Actions (no ``GITHUB_OUTPUT``) each output is printed as
``name=value`` on stdout.
"""

from __future__ import annotations

import os
import uuid
from pathlib import Path
from typing import Mapping, Optional


def _delimited(name: str, value: str) -> str:
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise ValueError(f"Unexpected delimiter collision for output {name!r}")
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def set_output(name: str, value: str, *, output_file: Optional[str] = None) -> None:
    """Set a single step output."""
    target = output_file if output_file is not None else os.environ.get("GITHUB_OUTPUT", "")
    if not target:
        print(f"{name}={value}")
        return
    with open(Path(target), "a", encoding="utf-8") as f:
        f.write(_delimited(name, value))


def set_outputs(outputs: Mapping[str, str], *, output_file: Optional[str] = None) -> None:
    """Set every output in *outputs*, in mapping order."""
    for name, value in outputs.items():
        set_output(name, value, output_file=output_file)
