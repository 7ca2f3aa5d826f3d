"""
CI output helpers for phpmatrix.

Serializes named results into the ``name=value`` / heredoc format read by
GitHub Actions from the file named in ``GITHUB_OUTPUT``.
"""

from __future__ import annotations

import json
import uuid
from typing import Any, Mapping

from phpmatrix.utils.logger import get_logger
from phpmatrix.utils.filesystem import PathLike, safe_append_file

logger = get_logger("outputs")


def serialize_output_value(value: Any) -> str:
    """Render an output value as text.

    Strings pass through unchanged, ``None`` becomes an empty string and
    everything else (lists, numbers, booleans) is JSON encoded.

    Example::

        >>> serialize_output_value(["8.1", "8.2"])
        '["8.1", "8.2"]'
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def format_output(name: str, value: Any) -> str:
    """Format one output entry, using a heredoc block for multi-line text."""
    text = serialize_output_value(value)

    if "\n" not in text and "\r" not in text:
        return f"{name}={text}\n"

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    # The delimiter must not occur inside the value
    while delimiter in text:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{text}\n{delimiter}\n"


def write_outputs(path: PathLike, outputs: Mapping[str, Any]) -> None:
    """Append every output in ``outputs`` to the file at ``path``.

    Entries are written in mapping order in a single append.
    """
    content = "".join(format_output(name, value) for name, value in outputs.items())
    safe_append_file(path, content)
    logger.info("Wrote %d output(s) to %s", len(outputs), path)
