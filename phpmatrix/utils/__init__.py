"""
Shared helpers used by the phpmatrix collaborators and CLI.

The resolution engine in :mod:`phpmatrix.core.resolver` needs none of
these apart from logging; they serve the manifest reader, catalog client
and commands.
"""

from __future__ import annotations

from phpmatrix.utils.http import HTTPClient
from phpmatrix.utils.outputs import format_output, write_outputs
from phpmatrix.utils.logger import get_logger, setup_logging, disable_logging
from phpmatrix.utils.filesystem import safe_append_file, safe_read_file, validate_path
from phpmatrix.utils.console import (
    colorize_status,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)

__all__ = [
    "HTTPClient",
    "format_output",
    "write_outputs",
    "get_logger",
    "setup_logging",
    "disable_logging",
    "safe_read_file",
    "safe_append_file",
    "validate_path",
    "print_error",
    "print_success",
    "print_warning",
    "print_table",
    "get_raw_console",
    "colorize_status",
    "reconfigure_console",
]
