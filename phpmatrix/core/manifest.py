"""Composer manifest reader for phpmatrix.

Extracts the PHP platform requirement (``require.php``) from a
``composer.json`` file. Read and parse failures are raised to the caller
unchanged; nothing here touches the resolution engine.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from phpmatrix.exceptions import ParseError
from phpmatrix.utils.logger import get_logger
from phpmatrix.utils.filesystem import PathLike, safe_read_file, validate_path
from phpmatrix.constants import MANIFEST_FILENAME, PHP_PLATFORM_PACKAGE

logger = get_logger("core.manifest")

__all__ = ["manifest_path", "read_manifest", "php_constraint"]


def manifest_path(working_directory: PathLike = ".") -> Path:
    """Return the ``composer.json`` path inside ``working_directory``."""
    return validate_path(Path(working_directory) / MANIFEST_FILENAME)


def read_manifest(path: PathLike) -> Dict[str, Any]:
    """Read and decode a Composer manifest.

    Args:
        path: Path to ``composer.json``.

    Returns:
        The decoded top-level JSON object.

    Raises:
        FileOperationError: The file is missing, not a file, too large or
            unreadable.
        ParseError: The content is not JSON, or not a JSON object.
    """
    content = safe_read_file(path)

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ParseError(
            f"Invalid JSON in {Path(path).name}: {exc.msg}",
            file_path=str(path),
            reason=f"line {exc.lineno}, column {exc.colno}",
        ) from exc

    if not isinstance(data, dict):
        raise ParseError(
            f"Expected a JSON object in {Path(path).name}, got {type(data).__name__}",
            file_path=str(path),
        )

    return data


def php_constraint(path: PathLike) -> Optional[str]:
    """Return the PHP version constraint declared by a Composer manifest.

    Args:
        path: Path to ``composer.json``.

    Returns:
        The raw ``require.php`` string, or ``None`` when the manifest
        declares no PHP requirement.

    Raises:
        FileOperationError: As for :func:`read_manifest`.
        ParseError: As for :func:`read_manifest`, or when ``require`` is
            not an object or the PHP requirement is not a string.

    Example::

        >>> php_constraint("composer.json")
        '^8.1'
    """
    manifest = read_manifest(path)
    require = manifest.get("require")

    if require is None:
        logger.debug("No 'require' section in %s", path)
        return None

    if not isinstance(require, dict):
        raise ParseError(
            "'require' must be an object",
            file_path=str(path),
        )

    constraint = require.get(PHP_PLATFORM_PACKAGE)
    if constraint is None:
        logger.debug("No PHP requirement in %s", path)
        return None

    if not isinstance(constraint, str):
        raise ParseError(
            f"'require.{PHP_PLATFORM_PACKAGE}' must be a string",
            file_path=str(path),
        )

    logger.debug("PHP requirement in %s is %r", path, constraint)
    return constraint
