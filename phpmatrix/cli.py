"""
Command-line interface for phpmatrix.

The ``phpmatrix`` group handles the options shared by every command
(configuration file, verbosity, color) and stores the result in a
:class:`~phpmatrix.context.PhpMatrixContext` for the subcommands.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from phpmatrix.config import load_config
from phpmatrix.__version__ import __version__
from phpmatrix.context import PhpMatrixContext
from phpmatrix.commands.resolve import resolve
from phpmatrix.exceptions import ConfigError, PhpMatrixError
from phpmatrix.utils.console import print_error, print_warning, reconfigure_console
from phpmatrix.utils.logger import get_logger, setup_logging, verbosity_to_level

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="PHPMATRIX_CONFIG",
    help="Configuration file (default: phpmatrix.toml or [tool.phpmatrix] in pyproject.toml).",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Show progress (-v) or debug output (-vv) on stderr.",
)
@click.option(
    "--color/--no-color",
    default=True,
    envvar="PHPMATRIX_COLOR",
    help="Enable or disable colored output.",
)
@click.version_option(__version__, prog_name="phpmatrix", message="%(prog)s %(version)s")
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: int, color: bool) -> None:
    """phpmatrix: PHP version matrices from composer.json.

    \b
    Examples:
      phpmatrix resolve
      phpmatrix resolve -d ./app --exclude-unsupported
      phpmatrix -v resolve --format json
    """
    _apply_color(color)
    _configure_logging(verbose)

    try:
        settings = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    state = ctx.ensure_object(PhpMatrixContext)
    state.config_path = config or settings.source_path
    state.verbose = verbose
    state.color = color
    state.config = settings

    logger.debug("phpmatrix %s, config %s", __version__, state.config_path or "<defaults>")
    logger.debug("Settings: %s", settings.to_log_dict())


def _apply_color(color: bool) -> None:
    """Propagate ``--no-color`` through ``NO_COLOR`` so Rich and logging agree."""
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()


def _configure_logging(verbose: int) -> None:
    level = verbosity_to_level(verbose)
    setup_logging(level=level, verbose=verbose >= 2)
    logger.debug("Logging at %s", logging.getLevelName(level))


cli.add_command(resolve)


def main() -> int:
    """Console-script entry point.

    Returns:
        0 on success, 1 on any failure, 2 on usage errors and 130 when
        interrupted.
    """
    try:
        result = cli(standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except (click.exceptions.Abort, KeyboardInterrupt):
        print_warning("Interrupted")
        return 130
    except PhpMatrixError as exc:
        print_error(str(exc))
        logger.debug("Error details: %s", dict(exc.details), exc_info=True)
        return 1
    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1

    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    sys.exit(main())
