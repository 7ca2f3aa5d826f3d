"""Version canonicalization for phpmatrix.

Release labels and constraint operands arrive in loose shapes: ``"8"``,
``"8.1"``, ``"v8.1.2"``, ``"php-8.3.0RC1"``, ``"8.1.*"``. This module turns
them into something comparable.

- :func:`canonicalize` extracts the first numeric dotted run of a release
  label and completes it to ``major.minor.patch``. Labels without any
  digits yield ``None``; callers drop them.
- :func:`parse_partial` reads a constraint operand and keeps track of
  which components were actually given, which is what tilde, caret,
  wildcard and hyphen-range completion depend on.

Example::

    >>> canonicalize("v8.1").triple
    (8, 1, 0)
    >>> parse_partial("8.1.*")
    PartialVersion(major=8, minor=1, patch=None)
"""

from __future__ import annotations

import re
from typing import Any, NamedTuple, Optional

from packaging.version import Version

from phpmatrix.models.version import CanonicalVersion

__all__ = ["PartialVersion", "canonicalize", "parse_partial", "make_version"]

# First run of up to three dot-separated integers, anywhere in the label
_LEADING_VERSION = re.compile(r"(\d+)(?:\.(\d+))?(?:\.(\d+))?")

_WILDCARDS = frozenset("xX*")

# Operand: optional "v", up to three numeric-or-wildcard components and an
# optional "@stability" flag. Extra numeric components and prerelease/build
# suffixes are only allowed after a patch component, so "8.1-8.2" is
# rejected instead of read as "8.1".
_PARTIAL_VERSION = re.compile(
    r"""
    ^v?
    (?P<major>\d+|[xX*])
    (?:\.(?P<minor>\d+|[xX*])
        (?:\.(?P<patch>\d+|[xX*])
            (?:\.\d+)*
            (?:[-+][0-9A-Za-z.+-]*)?
        )?
    )?
    (?:@[A-Za-z]+)?
    $
    """,
    re.VERBOSE,
)


def make_version(major: int, minor: int = 0, patch: int = 0) -> Version:
    """Build a release-only :class:`Version` with exactly three components."""
    return Version(f"{major}.{minor}.{patch}")


def canonicalize(value: Any) -> Optional[CanonicalVersion]:
    """Extract a ``major.minor.patch`` version from an arbitrary label.

    Leading noise is skipped and missing components default to zero.

    Args:
        value: Release label. Non-string values yield ``None``.

    Returns:
        The :class:`CanonicalVersion`, or ``None`` when the label holds no
        number at all.

    Example::

        >>> canonicalize("8").triple
        (8, 0, 0)
        >>> canonicalize("php-8.2.3").triple
        (8, 2, 3)
        >>> canonicalize("next") is None
        True
    """
    if not isinstance(value, str):
        return None

    match = _LEADING_VERSION.search(value)
    if match is None:
        return None

    major, minor, patch = (int(part) if part else 0 for part in match.groups())
    return CanonicalVersion(comparable=make_version(major, minor, patch), original=value)


class PartialVersion(NamedTuple):
    """A constraint operand; ``None`` marks a missing or wildcard component."""

    major: Optional[int]
    minor: Optional[int]
    patch: Optional[int]

    @property
    def is_any(self) -> bool:
        """True for ``*`` / ``x``: no component constrained."""
        return self.major is None

    @property
    def is_complete(self) -> bool:
        return self.patch is not None

    def floor(self) -> Version:
        """Lowest version matching the operand (missing parts become zero)."""
        return make_version(self.major or 0, self.minor or 0, self.patch or 0)

    def next_unit(self) -> Version:
        """First version past the operand's last given component.

        ``8`` -> ``9.0.0``, ``8.2`` -> ``8.3.0``, ``8.2.1`` -> ``8.2.2``.
        """
        major = self.major or 0
        if self.minor is None:
            return make_version(major + 1)
        if self.patch is None:
            return make_version(major, self.minor + 1)
        return make_version(major, self.minor, self.patch + 1)


def parse_partial(literal: str) -> Optional[PartialVersion]:
    """Parse a constraint operand such as ``8.1``, ``8.x`` or ``8.1.0-RC1``.

    Components after the first wildcard are treated as wildcards too, so
    ``8.*.3`` reads as ``8.*``.

    Returns:
        The :class:`PartialVersion`, or ``None`` if ``literal`` is not a
        version operand.
    """
    match = _PARTIAL_VERSION.match(literal.strip())
    if match is None:
        return None

    parts = []
    for raw in match.group("major", "minor", "patch"):
        if raw is None or raw in _WILDCARDS:
            break
        parts.append(int(raw))

    parts.extend([None] * (3 - len(parts)))
    return PartialVersion(*parts)
