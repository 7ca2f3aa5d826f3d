"""Resolve command implementation for phpmatrix.

Reads the PHP requirement from ``composer.json``, loads the release
catalog, and reports the matching PHP versions together with the lowest
and highest of them.

The command wires three pieces together:

1. **Manifest reader** (:func:`~phpmatrix.core.manifest.php_constraint`)
   extracts ``require.php``.
2. **Release catalog** (:class:`~phpmatrix.core.catalog.ReleaseCatalog`,
   or :func:`~phpmatrix.core.catalog.load_catalog_file` with
   ``--catalog``) supplies the known releases.
3. **Resolver** (:func:`~phpmatrix.core.resolver.resolve`) builds the
   matrix and picks its extremes.

Typical usage::

    # Human-readable table
    $ phpmatrix resolve

    # Inside a GitHub Actions step (GITHUB_OUTPUT is set by the runner)
    $ phpmatrix resolve --working-directory ./app --exclude-unsupported

    # Offline, machine-readable
    $ phpmatrix resolve --catalog releases.json --format json
"""

from __future__ import annotations

import sys
import json
import click
import asyncio
from pathlib import Path
from typing import Dict, List, Optional

from phpmatrix.config import PhpMatrixConfig
from phpmatrix.models import SupportPolicy
from phpmatrix.exceptions import ParseError, PhpMatrixError
from phpmatrix.context import pass_context, PhpMatrixContext
from phpmatrix.core import (
    ReleaseCatalog,
    Resolution,
    load_catalog_file,
    manifest_path,
    php_constraint,
    resolve as resolve_versions,
)
from phpmatrix.utils import (
    HTTPClient,
    colorize_status,
    get_logger,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    write_outputs,
)

logger = get_logger("commands.resolve")


@click.command()
@click.option(
    "--working-directory",
    "-d",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    envvar="INPUT_WORKING-DIRECTORY",
    help="Directory containing composer.json.",
)
@click.option(
    "--catalog",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read releases from a local JSON file instead of the remote catalog.",
)
@click.option(
    "--include-future/--exclude-future",
    default=None,
    help="Include releases that are not generally available yet.",
)
@click.option(
    "--include-unsupported/--exclude-unsupported",
    default=None,
    help="Include releases that are no longer supported.",
)
@click.option(
    "--support-policy",
    type=click.Choice([policy.value for policy in SupportPolicy], case_sensitive=False),
    default=None,
    help="What counts as supported when unsupported releases are excluded.",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "simple", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@click.option(
    "--github-output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    envvar="GITHUB_OUTPUT",
    help="Append results to this GitHub Actions output file.",
)
@pass_context
def resolve(
    ctx: PhpMatrixContext,
    working_directory: Path,
    catalog: Optional[Path],
    include_future: Optional[bool],
    include_unsupported: Optional[bool],
    support_policy: Optional[str],
    format: str,
    github_output: Optional[Path],
) -> None:
    """Resolve the PHP versions allowed by composer.json.

    Emits the constraint (``composer-php-version``), the matching versions
    (``matrix``), and the lowest and highest of them (``minimal`` and
    ``latest``). Flags left unset fall back to the configuration file.

    Exits:
        0 on success, 1 if any step fails. The failure message is printed
        unchanged.
    """
    try:
        resolution = asyncio.run(
            _resolve_async(
                ctx.config or PhpMatrixConfig(),
                working_directory,
                catalog,
                include_future=ctx.setting("include_future", include_future),
                include_unsupported=ctx.setting("include_unsupported", include_unsupported),
                support_policy=ctx.setting("support_policy", support_policy),
            )
        )

        if github_output is not None:
            write_outputs(github_output, resolution.to_outputs())

        _display(resolution, format.lower())

    except PhpMatrixError as e:
        print_error(f"{e}")
        sys.exit(1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        logger.exception("Error in resolve command")
        sys.exit(1)


# ---------------------------------------------------------------------------
# Async orchestration
# ---------------------------------------------------------------------------


async def _resolve_async(
    config: PhpMatrixConfig,
    working_directory: Path,
    catalog_file: Optional[Path],
    *,
    include_future: bool,
    include_unsupported: bool,
    support_policy: str,
) -> Resolution:
    """Read the manifest, load the catalog and resolve.

    Raises:
        ParseError: The manifest declares no PHP requirement, or is
            malformed.
        FileOperationError: The manifest or catalog file cannot be read.
        NetworkError: The remote catalog cannot be fetched.
        NoValidVersionsError: No release satisfies the requirement.
    """
    path = manifest_path(working_directory)
    constraint = php_constraint(path)

    if constraint is None:
        raise ParseError(
            f"No PHP requirement found in {path.name}",
            file_path=str(path),
        )

    logger.info("PHP requirement in %s is %s", path, constraint)

    if catalog_file is not None:
        releases = load_catalog_file(catalog_file)
    else:
        async with HTTPClient(timeout=config.timeout) as client:
            releases = await ReleaseCatalog(client, config.catalog_url).fetch()

    logger.debug(
        "Resolving against %d release(s) (future=%s, unsupported=%s, policy=%s)",
        len(releases),
        include_future,
        include_unsupported,
        support_policy,
    )

    return resolve_versions(
        constraint,
        releases,
        include_future=include_future,
        include_unsupported=include_unsupported,
        support_policy=support_policy,
    )


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------


def _display(resolution: Resolution, format: str) -> None:
    if format == "json":
        print(json.dumps(resolution.to_json(), indent=2))
    elif format == "simple":
        _display_simple(resolution)
    else:
        _display_table(resolution)


def _display_simple(resolution: Resolution) -> None:
    console = get_raw_console()
    for name, value in resolution.to_outputs().items():
        text = ", ".join(value) if isinstance(value, list) else value
        console.print(f"{name}: {text}", markup=False, highlight=False)


def _display_table(resolution: Resolution) -> None:
    rows: List[Dict[str, str]] = []
    for release in resolution.releases:
        marks = []
        if release.name == resolution.minimal:
            marks.append("minimal")
        if release.name == resolution.latest:
            marks.append("latest")
        rows.append(
            {
                "Version": release.name,
                "Status": colorize_status(release.status),
                "Notes": ", ".join(marks) or "[dim]-[/dim]",
            }
        )

    print_table(
        rows,
        title=f"PHP versions matching {resolution.constraint}",
        column_styles={
            "Version": {"style": "bold", "no_wrap": True},
            "Status": {"justify": "center"},
        },
    )
    print_success(
        f"{len(resolution.versions)} version(s): "
        f"minimal {resolution.minimal}, latest {resolution.latest}"
    )
