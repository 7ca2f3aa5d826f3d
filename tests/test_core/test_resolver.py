"""Unit tests for phpmatrix.core.resolver.

Test Coverage:
- Matrix building against a PHP release catalog
- Future / unsupported filtering and both support policies
- Ordering, stability and idempotence of the matrix
- Minimum / maximum selection
- The "no valid versions" failure, surfaced verbatim
- Resolution bundling and output mapping
"""

from __future__ import annotations

import copy
from typing import List

import pytest

from phpmatrix.exceptions import NoValidVersionsError
from phpmatrix.core.canonical import canonicalize
from phpmatrix.models import ReleaseDescriptor, SupportPolicy
from phpmatrix.core.resolver import (
    Resolution,
    filter_releases,
    latest,
    matrix,
    maximum,
    minimal,
    minimum,
    resolve,
    sort_versions,
)


def _names(*names: str) -> List[ReleaseDescriptor]:
    return [ReleaseDescriptor(name) for name in names]


@pytest.fixture
def stable_releases() -> List[ReleaseDescriptor]:
    """7.2 - 8.4, none of them future."""
    return _names("7.2", "7.3", "7.4", "8.0", "8.1", "8.2", "8.3", "8.4")


@pytest.mark.unit
class TestMatrix:
    """Tests for matrix."""

    def test_greater_equal(self, stable_releases: List[ReleaseDescriptor]) -> None:
        assert matrix(">=8.0", stable_releases) == ["8.0", "8.1", "8.2", "8.3", "8.4"]

    def test_tilde_minor(self, stable_releases: List[ReleaseDescriptor]) -> None:
        assert matrix("~8.1", stable_releases) == ["8.1"]

    def test_caret_full(self, stable_releases: List[ReleaseDescriptor]) -> None:
        assert matrix("^7.1.0", stable_releases) == ["7.2", "7.3", "7.4"]

    def test_wildcard_or(self, stable_releases: List[ReleaseDescriptor]) -> None:
        assert matrix("8.0.* || 8.2.*", stable_releases) == ["8.0", "8.2"]

    def test_range_or_caret(self, stable_releases: List[ReleaseDescriptor]) -> None:
        assert matrix(">=7.4 <8.3 || ^8.4", stable_releases) == [
            "7.4",
            "8.0",
            "8.1",
            "8.2",
            "8.4",
        ]

    def test_sorts_unordered_catalog(self) -> None:
        releases = _names("8.4", "7.4", "8.10", "8.2", "8.9")
        assert matrix("^8.0", releases) == ["8.2", "8.4", "8.9", "8.10"]

    def test_returns_original_labels(self) -> None:
        releases = _names("php-8.1", "v8.2.0", "8.3")
        assert matrix("^8.1", releases) == ["php-8.1", "v8.2.0", "8.3"]

    def test_skips_non_canonicalizable_names(self) -> None:
        releases = _names("next", "8.1", "master", "8.2")
        assert matrix("*", releases) == ["8.1", "8.2"]

    def test_ties_keep_catalog_order(self) -> None:
        releases = _names("8.1.0", "8.0", "v8.1", "8.1")
        assert matrix("^8.0", releases) == ["8.0", "8.1.0", "v8.1", "8.1"]

    def test_does_not_mutate_input(self, stable_releases: List[ReleaseDescriptor]) -> None:
        reversed_releases = list(reversed(stable_releases))
        snapshot = copy.deepcopy(reversed_releases)

        matrix("^8.0", reversed_releases)

        assert reversed_releases == snapshot

    def test_idempotent(self, stable_releases: List[ReleaseDescriptor]) -> None:
        assert matrix("^7.4 || ^8.0", stable_releases) == matrix(
            "^7.4 || ^8.0", stable_releases
        )

    def test_accepts_generator(self) -> None:
        releases = (ReleaseDescriptor(name) for name in ("8.1", "8.2"))
        assert matrix("^8.0", releases) == ["8.1", "8.2"]

    def test_output_is_subset_and_non_decreasing(
        self, php_releases: List[ReleaseDescriptor]
    ) -> None:
        result = matrix(">=7.3 <8.4 || 8.4.*", php_releases, include_future=True)

        names = {release.name for release in php_releases}
        assert set(result) <= names

        triples = [canonicalize(name).triple for name in result]
        assert triples == sorted(triples)


@pytest.mark.unit
class TestMatrixFiltering:
    """Tests for lifecycle filtering."""

    def test_future_excluded_by_default(self, php_releases: List[ReleaseDescriptor]) -> None:
        assert "8.5" not in matrix("^8.0", php_releases)

    def test_future_included_on_request(self, php_releases: List[ReleaseDescriptor]) -> None:
        assert matrix("^8.4", php_releases, include_future=True) == ["8.4", "8.5"]

    def test_unsupported_included_by_default(
        self, php_releases: List[ReleaseDescriptor]
    ) -> None:
        assert matrix("^7.2", php_releases) == ["7.2", "7.3", "7.4"]

    def test_exclude_unsupported_maintained_policy(self) -> None:
        releases = [
            ReleaseDescriptor("7.4", is_end_of_life=True),
            ReleaseDescriptor("8.0", is_end_of_life=False, is_secure=False),
            ReleaseDescriptor("8.1", is_end_of_life=True, is_secure=True),
        ]

        result = matrix("*", releases, include_unsupported=False)

        assert result == ["8.0", "8.1"]

    def test_exclude_unsupported_secure_policy(self) -> None:
        releases = [
            ReleaseDescriptor("7.4", is_end_of_life=True),
            ReleaseDescriptor("8.0", is_end_of_life=False, is_secure=False),
            ReleaseDescriptor("8.1", is_end_of_life=True, is_secure=True),
        ]

        result = matrix(
            "*",
            releases,
            include_unsupported=False,
            support_policy=SupportPolicy.SECURE,
        )

        assert result == ["8.1"]

    def test_support_policy_accepts_string(
        self, php_releases: List[ReleaseDescriptor]
    ) -> None:
        result = matrix(">=7.0", php_releases, include_unsupported=False, support_policy="secure")
        assert result == ["8.1", "8.2", "8.3", "8.4"]

    def test_unknown_support_policy_raises_value_error(
        self, php_releases: List[ReleaseDescriptor]
    ) -> None:
        with pytest.raises(ValueError, match="Unknown support policy"):
            matrix(">=7.0", php_releases, support_policy="whenever")

    def test_filter_releases_keeps_order(self, php_releases: List[ReleaseDescriptor]) -> None:
        kept = filter_releases(php_releases, include_unsupported=False)
        assert [r.name for r in kept] == ["8.1", "8.2", "8.3", "8.4"]


@pytest.mark.unit
class TestMatrixFailures:
    """Tests for the empty-result failure."""

    def test_empty_catalog(self) -> None:
        with pytest.raises(NoValidVersionsError) as exc_info:
            matrix(">=8.0", [])

        assert "no valid versions" in str(exc_info.value).lower()

    def test_message_is_not_decorated(self) -> None:
        with pytest.raises(NoValidVersionsError) as exc_info:
            matrix(">=8.0", [])

        assert str(exc_info.value) == "No valid versions found"
        assert exc_info.value.constraint == ">=8.0"

    def test_nothing_matches(self, stable_releases: List[ReleaseDescriptor]) -> None:
        with pytest.raises(NoValidVersionsError):
            matrix("^9.0", stable_releases)

    def test_only_future_releases_match(self, php_releases: List[ReleaseDescriptor]) -> None:
        with pytest.raises(NoValidVersionsError):
            matrix("^8.5", php_releases)

    def test_malformed_constraint(self, stable_releases: List[ReleaseDescriptor]) -> None:
        with pytest.raises(NoValidVersionsError):
            matrix("not a constraint", stable_releases)


@pytest.mark.unit
class TestExtremes:
    """Tests for minimum / maximum and their aliases."""

    VERSIONS = ["8.3", "8.0", "8.4", "7.1", "7.4"]

    def test_minimal(self) -> None:
        assert minimal(self.VERSIONS) == "7.1"

    def test_latest(self) -> None:
        assert latest(self.VERSIONS) == "8.4"

    def test_aliases(self) -> None:
        assert minimal is minimum
        assert latest is maximum

    def test_numeric_not_lexical(self) -> None:
        assert maximum(["8.9", "8.10", "8.2"]) == "8.10"

    def test_skips_invalid_entries(self) -> None:
        assert minimum(["nightly", "8.2", "8.1"]) == "8.1"
        assert maximum(["8.2", "nightly"]) == "8.2"

    def test_returns_original_label(self) -> None:
        assert maximum(["8.1", "php-8.3.1"]) == "php-8.3.1"

    def test_minimum_not_above_maximum(self) -> None:
        low = canonicalize(minimum(self.VERSIONS))
        high = canonicalize(maximum(self.VERSIONS))
        assert low <= high

    @pytest.mark.parametrize("versions", [[], ["nightly", "master"]])
    def test_no_valid_versions(self, versions: List[str]) -> None:
        with pytest.raises(NoValidVersionsError, match="No valid versions"):
            minimum(versions)
        with pytest.raises(NoValidVersionsError, match="No valid versions"):
            maximum(versions)

    def test_agrees_with_matrix_ordering(self, stable_releases: List[ReleaseDescriptor]) -> None:
        result = matrix("^7.2 || ^8.0", stable_releases)
        assert minimum(result) == result[0]
        assert maximum(result) == result[-1]


@pytest.mark.unit
class TestSortVersions:
    """Tests for the shared ordering primitive."""

    def test_sorted_and_filtered(self) -> None:
        ordered = sort_versions(["8.1", "beta", "7.4", "v7.4.0"])
        assert [v.original for v in ordered] == ["7.4", "v7.4.0", "8.1"]

    def test_empty(self) -> None:
        assert sort_versions([]) == []


@pytest.mark.unit
class TestResolve:
    """Tests for resolve and Resolution."""

    def test_bundles_matrix_and_extremes(self, php_releases: List[ReleaseDescriptor]) -> None:
        resolution = resolve("^7.4 || ^8.0", php_releases)

        assert isinstance(resolution, Resolution)
        assert resolution.versions == ["7.4", "8.0", "8.1", "8.2", "8.3", "8.4"]
        assert resolution.minimal == "7.4"
        assert resolution.latest == "8.4"
        assert [r.name for r in resolution.releases] == resolution.versions

    def test_to_outputs(self, php_releases: List[ReleaseDescriptor]) -> None:
        outputs = resolve("~8.1", php_releases).to_outputs()

        assert outputs == {
            "composer-php-version": "~8.1",
            "matrix": ["8.1"],
            "minimal": "8.1",
            "latest": "8.1",
        }

    def test_to_json_includes_release_flags(
        self, php_releases: List[ReleaseDescriptor]
    ) -> None:
        data = resolve("8.1.*", php_releases).to_json()

        assert data["releases"] == [
            {
                "name": "8.1",
                "isFutureVersion": False,
                "isEOLVersion": False,
                "isSecureVersion": True,
            }
        ]

    def test_propagates_no_valid_versions(self, php_releases: List[ReleaseDescriptor]) -> None:
        with pytest.raises(NoValidVersionsError):
            resolve("^9", php_releases)
