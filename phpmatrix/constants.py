"""
Centralized constants for phpmatrix.

This module defines immutable configuration values used by the collaborators
around the resolution engine: the release catalog endpoint, network
settings, manifest names, output names and logging formats. The engine in
:mod:`phpmatrix.core.resolver` never reads from here; it receives its inputs
as plain arguments.
"""

from typing import Final, Sequence

# ---------------------------------------------------------------------------
# Project metadata
# ---------------------------------------------------------------------------

#: HTTP User-Agent template used for outbound requests.
USER_AGENT_TEMPLATE: Final[str] = (
    "phpmatrix/{version} (https://github.com/phpmatrix/phpmatrix)"
)

# ---------------------------------------------------------------------------
# Release catalog
# ---------------------------------------------------------------------------

#: Endpoint returning every known PHP release with its lifecycle flags.
PHP_RELEASES_API: Final[str] = "https://php.watch/api/v1/versions"

# ---------------------------------------------------------------------------
# HTTP configuration
# ---------------------------------------------------------------------------

#: Default network timeout in seconds.
DEFAULT_TIMEOUT: Final[int] = 30

#: Maximum number of retries for failed HTTP requests.
DEFAULT_MAX_RETRIES: Final[int] = 3

# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------

#: Manifest file name looked up inside the working directory.
MANIFEST_FILENAME: Final[str] = "composer.json"

#: Platform package name holding the PHP requirement under ``require``.
PHP_PLATFORM_PACKAGE: Final[str] = "php"

#: Maximum allowed file size (in bytes) when reading manifests and catalogs.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Resolution defaults
# ---------------------------------------------------------------------------

#: Include releases that are not generally available yet.
DEFAULT_INCLUDE_FUTURE: Final[bool] = False

#: Include releases that are no longer supported.
DEFAULT_INCLUDE_UNSUPPORTED: Final[bool] = True

#: Support policy applied when unsupported releases are excluded.
DEFAULT_SUPPORT_POLICY: Final[str] = "maintained"

# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

#: Output names written for CI consumers, in emission order.
OUTPUT_NAMES: Final[Sequence[str]] = (
    "composer-php-version",
    "matrix",
    "minimal",
    "latest",
)

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
