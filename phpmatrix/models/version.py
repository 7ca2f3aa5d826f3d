"""
Canonical version model for phpmatrix.

A :class:`CanonicalVersion` pairs a raw version label with the
``major.minor.patch`` triple extracted from it. Ordering and equality
only look at the triple, so two labels such as ``"8.1"`` and
``"v8.1.0"`` compare equal while both are kept.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from packaging.version import Version


@dataclass(frozen=True, order=True)
class CanonicalVersion:
    """A version label and its comparable ``(major, minor, patch)`` form.

    Attributes:
        original: Source string the version was derived from.
        comparable: Release-only :class:`packaging.version.Version` with
            exactly three components.
    """

    comparable: Version
    original: str = field(compare=False)

    @property
    def major(self) -> int:
        return self.comparable.release[0]

    @property
    def minor(self) -> int:
        return self.comparable.release[1]

    @property
    def patch(self) -> int:
        return self.comparable.release[2]

    @property
    def triple(self) -> Tuple[int, int, int]:
        """The ``(major, minor, patch)`` tuple."""
        return (self.major, self.minor, self.patch)

    def __str__(self) -> str:
        return self.original
