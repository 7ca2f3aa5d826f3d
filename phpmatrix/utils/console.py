"""
Terminal output for phpmatrix, rendered with Rich.

Everything a user is meant to read (status lines, the version table, the
plain ``name: value`` listing) goes through the shared console returned by
:func:`get_raw_console`. Diagnostics belong in
:mod:`phpmatrix.utils.logger`.
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Dict, List, Mapping, Optional

from rich.table import Table
from rich.theme import Theme
from rich.console import Console

# Release lifecycle status -> theme style
_STATUS_STYLES: Dict[str, str] = {
    "secure": "status.secure",
    "active": "status.active",
    "end-of-life": "status.eol",
    "future": "status.future",
}

PHPMATRIX_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "dim": "dim",
        "status.secure": "green",
        "status.active": "cyan",
        "status.eol": "red",
        "status.future": "magenta",
    }
)

_console: Optional[Console] = None
_console_lock = threading.Lock()


def _should_use_color() -> bool:
    """Return True if stdout is a terminal and nothing asks for plain text."""
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, OSError, ValueError):
        return False


def _get_console() -> Console:
    global _console

    if _console is None:
        with _console_lock:
            if _console is None:
                use_color = _should_use_color()
                _console = Console(
                    theme=PHPMATRIX_THEME,
                    no_color=not use_color,
                    highlight=False,
                )
    return _console


def get_raw_console() -> Console:
    """Return the shared Rich console."""
    return _get_console()


def reconfigure_console() -> None:
    """Forget the shared console so the next call re-reads the environment."""
    global _console
    with _console_lock:
        _console = None


def _print_status(style: str, prefix: str, message: str) -> None:
    # Messages may contain constraint text such as "[>=8.1]"; never parse markup
    _get_console().print(f"{prefix} {message}", style=style, markup=False)


def print_success(message: str, *, prefix: str = "[OK]") -> None:
    _print_status("success", prefix, message)


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    _print_status("error", prefix, message)


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    _print_status("warning", prefix, message)


def print_table(
    rows: List[Mapping[str, Any]],
    *,
    headers: Optional[List[str]] = None,
    title: Optional[str] = None,
    column_styles: Optional[Dict[str, Dict[str, Any]]] = None,
) -> None:
    """Render ``rows`` as a table; nothing is printed for an empty list.

    Args:
        rows: One mapping per row. Cell values may use Rich markup.
        headers: Columns to show, in order. Defaults to the first row's keys.
        title: Caption printed above the table.
        column_styles: Per-column ``style`` / ``justify`` / ``no_wrap``.
    """
    if not rows:
        return

    columns = headers or list(rows[0].keys())
    styles = column_styles or {}

    table = Table(title=title, header_style="bold")
    for column in columns:
        options = styles.get(column, {})
        table.add_column(
            column,
            style=options.get("style"),
            justify=options.get("justify", "left"),
            no_wrap=options.get("no_wrap", False),
        )

    for row in rows:
        table.add_row(*(str(row.get(column, "")) for column in columns))

    _get_console().print(table)


def colorize_status(status: str) -> str:
    """Wrap a release status (``secure``, ``end-of-life``...) in theme markup."""
    style = _STATUS_STYLES.get(status.lower())
    return f"[{style}]{status}[/{style}]" if style else status
