"""
Unified data model exports for phpmatrix.

Example:
    >>> from phpmatrix.models import ReleaseDescriptor, SupportPolicy
"""

from __future__ import annotations

from phpmatrix.models.version import CanonicalVersion
from phpmatrix.models.release import ReleaseDescriptor, SupportPolicy

__all__ = [
    "CanonicalVersion",
    "ReleaseDescriptor",
    "SupportPolicy",
]
