"""
phpmatrix: PHP version matrices from Composer constraints

phpmatrix reads the PHP requirement of a ``composer.json`` file, matches it
against the catalog of known PHP releases, and reports the satisfying
versions as a sorted matrix together with the lowest and highest of them.
It is meant for CI pipelines that test a library against every PHP
version it claims to support.

Features include:
    • Loose version labels canonicalized to ``major.minor.patch``
    • Comparison, tilde, caret, wildcard and hyphen-range constraints,
      combined with AND / OR
    • Filtering of future and unsupported releases
    • GitHub Actions output support
"""

from __future__ import annotations

from phpmatrix.__version__ import __version__
from phpmatrix.exceptions import NoValidVersionsError, PhpMatrixError
from phpmatrix.models import CanonicalVersion, ReleaseDescriptor, SupportPolicy
from phpmatrix.core.resolver import latest, matrix, maximum, minimal, minimum

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "phpmatrix Contributors"
__license__ = "Apache-2.0"
__description__ = "PHP version matrices from composer.json constraints."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
    "matrix",
    "minimum",
    "maximum",
    "minimal",
    "latest",
    "CanonicalVersion",
    "ReleaseDescriptor",
    "SupportPolicy",
    "PhpMatrixError",
    "NoValidVersionsError",
]
