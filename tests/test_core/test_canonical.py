"""Unit tests for phpmatrix.core.canonical.

Test Coverage:
- Canonicalization of full, partial and noisy release labels
- Rejection of labels without digits and of non-string input
- Constraint operand parsing with wildcards and suffixes
- PartialVersion floor / next_unit completion
"""

from __future__ import annotations

import pytest
from packaging.version import Version

from phpmatrix.core.canonical import (
    PartialVersion,
    canonicalize,
    make_version,
    parse_partial,
)


@pytest.mark.unit
class TestCanonicalize:
    """Tests for canonicalize."""

    @pytest.mark.parametrize(
        "label, expected",
        [
            ("8", (8, 0, 0)),
            ("8.1", (8, 1, 0)),
            ("8.1.2", (8, 1, 2)),
            ("v8.1", (8, 1, 0)),
            ("php-8.2.3", (8, 2, 3)),
            ("8.3.0RC1", (8, 3, 0)),
            ("8.1.2.4", (8, 1, 2)),
            ("PHP 7.4 (legacy)", (7, 4, 0)),
        ],
        ids=[
            "major-only",
            "major-minor",
            "full",
            "v-prefix",
            "leading-noise",
            "prerelease-suffix",
            "four-components",
            "embedded",
        ],
    )
    def test_extracts_triple(self, label: str, expected: tuple) -> None:
        """Test the first numeric dotted run is completed to a triple."""
        version = canonicalize(label)

        assert version is not None
        assert version.triple == expected
        assert version.original == label

    @pytest.mark.parametrize("label", ["", "next", "master", "dev-main", "x.y"])
    def test_no_digits_returns_none(self, label: str) -> None:
        """Test labels without any number are rejected without raising."""
        assert canonicalize(label) is None

    @pytest.mark.parametrize("value", [None, 8.1, 8, ["8.1"]])
    def test_non_string_returns_none(self, value: object) -> None:
        """Test non-string input is rejected without raising."""
        assert canonicalize(value) is None

    def test_comparable_is_three_component_version(self) -> None:
        """Test the comparable form is a release-only packaging Version."""
        version = canonicalize("8.1")

        assert version is not None
        assert version.comparable == Version("8.1.0")
        assert version.comparable.release == (8, 1, 0)

    def test_deterministic(self) -> None:
        """Test the same label always yields an equal result."""
        assert canonicalize("v8.2.1") == canonicalize("v8.2.1")


@pytest.mark.unit
class TestParsePartial:
    """Tests for parse_partial."""

    @pytest.mark.parametrize(
        "literal, expected",
        [
            ("8", (8, None, None)),
            ("8.1", (8, 1, None)),
            ("8.1.2", (8, 1, 2)),
            ("8.1.*", (8, 1, None)),
            ("8.x", (8, None, None)),
            ("8.X.1", (8, None, None)),
            ("*", (None, None, None)),
            ("x", (None, None, None)),
            ("v8.1", (8, 1, None)),
            ("8.1.0-RC1", (8, 1, 0)),
            ("8.1@dev", (8, 1, None)),
            ("8.1.0.0", (8, 1, 0)),
        ],
    )
    def test_parses_operands(self, literal: str, expected: tuple) -> None:
        """Test operand components, stopping at the first wildcard."""
        assert parse_partial(literal) == PartialVersion(*expected)

    @pytest.mark.parametrize("literal", ["", "abc", "8..1", ">=8.1", "8.1 8.2", "-", "8.1-8.2", "8.1-foo", "8+build"])
    def test_malformed_returns_none(self, literal: str) -> None:
        """Test anything that is not a version operand is rejected."""
        assert parse_partial(literal) is None


@pytest.mark.unit
class TestPartialVersion:
    """Tests for PartialVersion completion helpers."""

    def test_floor_fills_zeros(self) -> None:
        assert PartialVersion(8, None, None).floor() == make_version(8, 0, 0)
        assert PartialVersion(8, 2, None).floor() == make_version(8, 2, 0)

    @pytest.mark.parametrize(
        "partial, expected",
        [
            ((8, None, None), (9, 0, 0)),
            ((8, 2, None), (8, 3, 0)),
            ((8, 2, 1), (8, 2, 2)),
        ],
    )
    def test_next_unit(self, partial: tuple, expected: tuple) -> None:
        """Test next_unit bumps the last given component."""
        assert PartialVersion(*partial).next_unit() == make_version(*expected)

    def test_flags(self) -> None:
        assert PartialVersion(None, None, None).is_any
        assert PartialVersion(8, 1, 2).is_complete
        assert not PartialVersion(8, 1, None).is_complete
