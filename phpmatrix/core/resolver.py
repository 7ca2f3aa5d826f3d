"""Version matrix resolution for phpmatrix.

Given a constraint and a release catalog, :func:`matrix` returns every
release label that satisfies the constraint, ascending. :func:`minimum`
and :func:`maximum` pick the ends of any list of labels. All three are
pure functions of their arguments and share :func:`sort_versions`, so
they always agree on ordering.

Labels that cannot be canonicalized are skipped silently. The only error
raised here is :class:`~phpmatrix.exceptions.NoValidVersionsError`, when
nothing is left to return.

Typical usage::

    releases = [ReleaseDescriptor("8.1"), ReleaseDescriptor("8.2")]
    versions = matrix("^8.1", releases)      # ['8.1', '8.2']
    lowest = minimum(versions)               # '8.1'
"""

from __future__ import annotations

from operator import attrgetter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from phpmatrix.utils.logger import get_logger
from phpmatrix.models.version import CanonicalVersion
from phpmatrix.exceptions import NoValidVersionsError
from phpmatrix.core.canonical import canonicalize
from phpmatrix.core.constraint import matches, parse_constraint
from phpmatrix.models.release import ReleaseDescriptor, SupportPolicy

logger = get_logger("core.resolver")

__all__ = [
    "Resolution",
    "sort_versions",
    "filter_releases",
    "matrix",
    "minimum",
    "maximum",
    "minimal",
    "latest",
    "resolve",
]


# ---------------------------------------------------------------------------
# Shared ordering primitive
# ---------------------------------------------------------------------------


def sort_versions(versions: Iterable[str]) -> List[CanonicalVersion]:
    """Canonicalize ``versions`` and sort them ascending.

    Non-canonicalizable labels are dropped. The sort is stable, so labels
    sharing a triple keep their input order.

    Example::

        >>> [v.original for v in sort_versions(["8.1", "beta", "7.4", "v7.4.0"])]
        ['7.4', 'v7.4.0', '8.1']
    """
    canonical: List[CanonicalVersion] = []

    for value in versions:
        version = canonicalize(value)
        if version is None:
            logger.debug("Skipping non-canonicalizable version %r", value)
            continue
        canonical.append(version)

    return sorted(canonical, key=attrgetter("comparable"))


def _sorted_or_raise(versions: Iterable[str]) -> List[CanonicalVersion]:
    ordered = sort_versions(versions)
    if not ordered:
        raise NoValidVersionsError()
    return ordered


# ---------------------------------------------------------------------------
# Matrix builder
# ---------------------------------------------------------------------------


def filter_releases(
    releases: Iterable[ReleaseDescriptor],
    *,
    include_future: bool = False,
    include_unsupported: bool = True,
    support_policy: Union[SupportPolicy, str] = SupportPolicy.MAINTAINED,
) -> List[ReleaseDescriptor]:
    """Apply the lifecycle filters of :func:`matrix` without matching.

    Args:
        releases: Catalog entries.
        include_future: Keep releases that are not generally available yet.
        include_unsupported: Keep releases that are unsupported under
            ``support_policy``.
        support_policy: Rule deciding what "supported" means.

    Returns:
        The surviving releases, in input order.
    """
    policy = SupportPolicy.from_value(support_policy)

    return [
        release
        for release in releases
        if (include_future or not release.is_future)
        and (include_unsupported or release.is_supported(policy))
    ]


def matrix(
    constraint: str,
    releases: Iterable[ReleaseDescriptor],
    include_future: bool = False,
    include_unsupported: bool = True,
    support_policy: Union[SupportPolicy, str] = SupportPolicy.MAINTAINED,
) -> List[str]:
    """Return the release labels satisfying ``constraint``, ascending.

    Args:
        constraint: Raw constraint string, e.g. ``">=7.4 <8.3 || ^8.4"``.
        releases: Catalog entries; never modified.
        include_future: Keep releases flagged ``is_future``.
        include_unsupported: When ``False``, drop releases that are not
            supported under ``support_policy``.
        support_policy: ``SupportPolicy.MAINTAINED`` (secure or not end of
            life) or ``SupportPolicy.SECURE`` (secure only).

    Returns:
        Original labels of the matching releases, sorted by their
        ``major.minor.patch`` triple; ties keep catalog order.

    Raises:
        NoValidVersionsError: Nothing survives filtering, canonicalization
            and matching.

    Example::

        >>> releases = [ReleaseDescriptor(n) for n in ("7.4", "8.0", "8.1")]
        >>> matrix(">=8.0", releases)
        ['8.0', '8.1']
    """
    candidates = filter_releases(
        releases,
        include_future=include_future,
        include_unsupported=include_unsupported,
        support_policy=support_policy,
    )
    parsed = parse_constraint(constraint)

    selected = [
        version
        for version in sort_versions(release.name for release in candidates)
        if matches(version, parsed)
    ]

    logger.debug(
        "Constraint %r: %d candidate(s), %d match(es)",
        constraint,
        len(candidates),
        len(selected),
    )

    if not selected:
        raise NoValidVersionsError(constraint=constraint)

    return [version.original for version in selected]


# ---------------------------------------------------------------------------
# Extremes selector
# ---------------------------------------------------------------------------


def minimum(versions: Iterable[str]) -> str:
    """Return the lowest version label in ``versions``.

    Raises:
        NoValidVersionsError: No label can be canonicalized.
    """
    return _sorted_or_raise(versions)[0].original


def maximum(versions: Iterable[str]) -> str:
    """Return the highest version label in ``versions``.

    Raises:
        NoValidVersionsError: No label can be canonicalized.
    """
    return _sorted_or_raise(versions)[-1].original


minimal = minimum
latest = maximum


# ---------------------------------------------------------------------------
# Bundled result
# ---------------------------------------------------------------------------


@dataclass
class Resolution:
    """Everything resolved for one constraint.

    Attributes:
        constraint: The constraint as supplied.
        versions: The matrix, ascending.
        minimal: Lowest entry of ``versions``.
        latest: Highest entry of ``versions``.
        releases: Catalog entries behind ``versions``, same order.
    """

    constraint: str
    versions: List[str]
    minimal: str
    latest: str
    releases: List[ReleaseDescriptor] = field(default_factory=list)

    def to_outputs(self) -> Dict[str, Any]:
        """Return the named outputs handed to CI consumers."""
        return {
            "composer-php-version": self.constraint,
            "matrix": list(self.versions),
            "minimal": self.minimal,
            "latest": self.latest,
        }

    def to_json(self) -> Dict[str, Any]:
        """Return a JSON-safe representation."""
        data = self.to_outputs()
        data["releases"] = [release.to_json() for release in self.releases]
        return data


def resolve(
    constraint: str,
    releases: Iterable[ReleaseDescriptor],
    *,
    include_future: bool = False,
    include_unsupported: bool = True,
    support_policy: Union[SupportPolicy, str] = SupportPolicy.MAINTAINED,
) -> Resolution:
    """Build the matrix for ``constraint`` and select its extremes.

    Raises:
        NoValidVersionsError: As for :func:`matrix`.
    """
    catalog = list(releases)
    versions = matrix(
        constraint,
        catalog,
        include_future=include_future,
        include_unsupported=include_unsupported,
        support_policy=support_policy,
    )

    by_name: Dict[str, ReleaseDescriptor] = {}
    for release in filter_releases(
        catalog,
        include_future=include_future,
        include_unsupported=include_unsupported,
        support_policy=support_policy,
    ):
        by_name.setdefault(release.name, release)

    found: List[Optional[ReleaseDescriptor]] = [by_name.get(name) for name in versions]

    return Resolution(
        constraint=constraint,
        versions=versions,
        minimal=minimum(versions),
        latest=maximum(versions),
        releases=[release for release in found if release is not None],
    )
