"""
Per-invocation state shared by the phpmatrix CLI commands.

The ``phpmatrix`` group fills a :class:`PhpMatrixContext` and Click hands
it to subcommands decorated with :data:`pass_context`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import click

from phpmatrix.config import PhpMatrixConfig


class PhpMatrixContext:
    """Global options and loaded configuration for one CLI run.

    Attributes:
        config_path: Configuration file in use, if any.
        verbose: Number of ``-v`` flags.
        color: Whether colored output is enabled.
        config: Loaded configuration; ``None`` until the group callback runs.
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: Optional[PhpMatrixConfig] = None

    def setting(self, name: str, override: Any = None) -> Any:
        """Return ``override`` unless it is ``None``, else the configured value.

        Command-line flags left unset arrive as ``None`` and fall back to the
        configuration file, then to the built-in defaults.
        """
        if override is not None:
            return override
        return getattr(self.config or PhpMatrixConfig(), name)


#: Click decorator injecting the :class:`PhpMatrixContext` into commands.
pass_context = click.make_pass_decorator(PhpMatrixContext, ensure=True)
