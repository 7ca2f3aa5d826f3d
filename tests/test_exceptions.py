from __future__ import annotations

import pytest

from phpmatrix.exceptions import (
    MAX_DETAIL_LENGTH,
    CatalogError,
    ConfigError,
    FileOperationError,
    NetworkError,
    NoValidVersionsError,
    ParseError,
    PhpMatrixError,
)


@pytest.mark.unit
class TestPhpMatrixError:
    """Tests for the base exception."""

    def test_message_only(self) -> None:
        exc = PhpMatrixError("boom")

        assert str(exc) == "boom"
        assert exc.details == {}

    def test_details_rendered(self) -> None:
        exc = PhpMatrixError("boom", {"file": "composer.json", "line": 3})

        assert str(exc) == "boom (file=composer.json, line=3)"

    def test_details_are_copied(self) -> None:
        source = {"a": 1}
        exc = PhpMatrixError("boom", source)
        exc.details["b"] = 2

        assert source == {"a": 1}

    def test_repr(self) -> None:
        assert repr(PhpMatrixError("boom")) == "PhpMatrixError('boom', details={})"


@pytest.mark.unit
class TestSubclasses:
    """Tests for the specialised exceptions."""

    @pytest.mark.parametrize(
        "cls",
        [NoValidVersionsError, ParseError, NetworkError, CatalogError, FileOperationError, ConfigError],
    )
    def test_hierarchy(self, cls: type) -> None:
        assert issubclass(cls, PhpMatrixError)

    def test_no_valid_versions_message_is_plain(self) -> None:
        exc = NoValidVersionsError(constraint="^5.3")

        assert str(exc) == "No valid versions found"
        assert exc.constraint == "^5.3"

    def test_parse_error_skips_missing_details(self) -> None:
        exc = ParseError("Invalid JSON", file_path="composer.json")

        assert exc.details == {"file": "composer.json"}
        assert exc.reason is None

    def test_network_error_truncates_body_in_details(self) -> None:
        body = "x" * (MAX_DETAIL_LENGTH + 50)
        exc = NetworkError("HTTP 403 error", url="https://example.com", status_code=403, response_body=body)

        assert exc.response_body == body
        assert exc.details["response"] == "x" * MAX_DETAIL_LENGTH + "..."
        assert exc.details["status_code"] == 403

    def test_catalog_error_records_source(self) -> None:
        exc = CatalogError("Invalid catalog", catalog_url="releases.json", url="https://example.com")

        assert isinstance(exc, NetworkError)
        assert exc.details == {"url": "https://example.com", "catalog": "releases.json"}

    def test_file_operation_error_stringifies_cause(self) -> None:
        cause = OSError("permission denied")
        exc = FileOperationError("Failed", file_path="out", operation="append", original_error=cause)

        assert exc.original_error is cause
        assert exc.details["original_error"] == "permission denied"

    def test_config_error_option(self) -> None:
        exc = ConfigError("bad", config_path="phpmatrix.toml", option="timeout")

        assert str(exc) == "bad (config=phpmatrix.toml, option=timeout)"
