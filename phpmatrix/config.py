"""Settings file support for phpmatrix.

Resolution flags can be pinned in a TOML file so CI jobs do not have to
repeat them on every invocation. Two locations are understood:

- ``phpmatrix.toml`` with a ``[phpmatrix]`` table
- ``pyproject.toml`` with a ``[tool.phpmatrix]`` table

An explicit ``--config`` (or ``PHPMATRIX_CONFIG``) wins; otherwise the
current directory is searched in that order. Command-line flags override
whatever the file sets, and the file overrides the built-in defaults.

Example (``phpmatrix.toml``)::

    [phpmatrix]
    include_unsupported = false
    support_policy = "secure"
    timeout = 10
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple

from phpmatrix.exceptions import ConfigError
from phpmatrix.utils.logger import get_logger
from phpmatrix.models.release import SupportPolicy
from phpmatrix.constants import (
    DEFAULT_INCLUDE_FUTURE,
    DEFAULT_INCLUDE_UNSUPPORTED,
    DEFAULT_SUPPORT_POLICY,
    DEFAULT_TIMEOUT,
    PHP_RELEASES_API,
)

logger = get_logger("config")

CONFIG_FILENAME = "phpmatrix.toml"
CONFIG_SECTION = "phpmatrix"
PYPROJECT_FILENAME = "pyproject.toml"

# option -> (accepted TOML type, wording used in errors)
_OPTION_TYPES: Dict[str, Tuple[type, str]] = {
    "include_future": (bool, "a boolean"),
    "include_unsupported": (bool, "a boolean"),
    "support_policy": (str, "a string"),
    "catalog_url": (str, "a string"),
    "timeout": (int, "an integer"),
}


@dataclass
class PhpMatrixConfig:
    """Resolution settings read from a configuration file.

    Every field has a default, so a missing file or an empty table yields
    the same result as no configuration at all.

    Attributes:
        include_future: Keep releases that are not generally available yet.
        include_unsupported: Keep releases that are unsupported under
            ``support_policy``.
        support_policy: ``"maintained"`` (secure or not end of life) or
            ``"secure"`` (secure only).
        catalog_url: Release catalog endpoint or local JSON file.
        timeout: HTTP timeout in seconds.
        source_path: File the values came from; ``None`` for defaults.
    """

    include_future: bool = DEFAULT_INCLUDE_FUTURE
    include_unsupported: bool = DEFAULT_INCLUDE_UNSUPPORTED
    support_policy: str = DEFAULT_SUPPORT_POLICY
    catalog_url: str = PHP_RELEASES_API
    timeout: int = DEFAULT_TIMEOUT

    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """User-facing options as a dict, for debug output."""
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name in _OPTION_TYPES}


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Locate the configuration file for this run.

    Args:
        explicit_path: Path given on the command line; it must exist.

    Returns:
        The file to load, or ``None`` when the current directory has
        neither ``phpmatrix.toml`` nor a ``pyproject.toml`` with a
        ``[tool.phpmatrix]`` table.

    Raises:
        ConfigError: ``explicit_path`` does not point to a file.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()
    candidate = cwd / CONFIG_FILENAME
    if candidate.is_file():
        logger.debug("Found %s", candidate)
        return candidate

    candidate = cwd / PYPROJECT_FILENAME
    if candidate.is_file() and _pyproject_has_section(candidate):
        logger.debug("Found [tool.%s] in %s", CONFIG_SECTION, candidate)
        return candidate

    logger.debug("No configuration file in %s", cwd)
    return None


def _pyproject_has_section(path: Path) -> bool:
    # A broken pyproject.toml belongs to another tool; treat it as absent.
    try:
        document = _read_toml(path)
    except ConfigError:
        return False
    return CONFIG_SECTION in document.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> PhpMatrixConfig:
    """Discover, read and validate the configuration.

    Args:
        config_path: Explicit file, or ``None`` to search the current
            directory.

    Returns:
        The parsed settings; defaults when no file applies.

    Raises:
        ConfigError: The file is unreadable, not TOML, or holds unknown
            keys or invalid values.
    """
    path = discover_config_file(config_path)
    if path is None:
        return PhpMatrixConfig()

    logger.info("Loading configuration from %s", path)
    document = _read_toml(path)

    if path.name == PYPROJECT_FILENAME:
        document = document.get("tool", {})
    section = document.get(CONFIG_SECTION, {})

    if not section:
        logger.debug("%s has no %s settings, using defaults", path.name, CONFIG_SECTION)
        return PhpMatrixConfig(source_path=path)

    config = _parse_section(section, config_path=str(path))
    config.source_path = path
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Parse ``path`` as TOML, reporting failures as :class:`ConfigError`."""
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path.name}: {exc}", config_path=str(path)) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _check_type(option: str, value: Any, config_path: str) -> None:
    expected, label = _OPTION_TYPES[option]
    # TOML booleans are ints to Python but never valid timeouts
    if isinstance(value, expected) and not (expected is int and isinstance(value, bool)):
        return
    raise ConfigError(
        f"{option} must be {label}, got {type(value).__name__}",
        config_path=config_path,
        option=option,
    )


def _parse_section(section: Dict[str, Any], *, config_path: str) -> PhpMatrixConfig:
    """Validate a ``[phpmatrix]`` table and build the config from it.

    Raises:
        ConfigError: Unknown keys, wrong types or out-of-range values.
    """
    unknown = sorted(set(section) - set(_OPTION_TYPES))
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(unknown)}",
            config_path=config_path,
        )

    for option, value in section.items():
        _check_type(option, value, config_path)

    values = dict(section)

    if "support_policy" in values:
        try:
            values["support_policy"] = SupportPolicy.from_value(values["support_policy"]).value
        except ValueError as exc:
            raise ConfigError(str(exc), config_path=config_path, option="support_policy") from exc

    if values.get("timeout", 1) <= 0:
        raise ConfigError(
            f"timeout must be positive, got {values['timeout']}",
            config_path=config_path,
            option="timeout",
        )

    if not values.get("catalog_url", PHP_RELEASES_API).strip():
        raise ConfigError(
            "catalog_url must not be empty",
            config_path=config_path,
            option="catalog_url",
        )

    return PhpMatrixConfig(**values)
