"""
Core functionality exports for phpmatrix.

The resolution engine (canonicalizer, constraint evaluator, matrix builder
and extremes selector) plus the manifest and catalog readers that feed it:

    from phpmatrix.core import matrix, minimum, maximum
"""

from __future__ import annotations

from phpmatrix.core.canonical import canonicalize, parse_partial
from phpmatrix.core.constraint import parse_constraint, satisfies
from phpmatrix.core.manifest import manifest_path, php_constraint, read_manifest
from phpmatrix.core.catalog import ReleaseCatalog, load_catalog_file, parse_catalog
from phpmatrix.core.resolver import (
    Resolution,
    latest,
    matrix,
    maximum,
    minimal,
    minimum,
    resolve,
    sort_versions,
)

__all__ = [
    "canonicalize",
    "parse_partial",
    "parse_constraint",
    "satisfies",
    "sort_versions",
    "matrix",
    "minimum",
    "maximum",
    "minimal",
    "latest",
    "resolve",
    "Resolution",
    "manifest_path",
    "read_manifest",
    "php_constraint",
    "ReleaseCatalog",
    "parse_catalog",
    "load_catalog_file",
]
