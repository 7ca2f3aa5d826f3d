from __future__ import annotations

from pathlib import Path

import pytest

from phpmatrix.utils.outputs import format_output, serialize_output_value, write_outputs


@pytest.mark.unit
class TestSerializeOutputValue:
    """Tests for serialize_output_value."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("^8.1", "^8.1"),
            (None, ""),
            (["8.1", "8.2"], '["8.1", "8.2"]'),
            ([], "[]"),
            (True, "true"),
            (3, "3"),
        ],
    )
    def test_values(self, value: object, expected: str) -> None:
        assert serialize_output_value(value) == expected


@pytest.mark.unit
class TestFormatOutput:
    """Tests for format_output."""

    def test_single_line(self) -> None:
        assert format_output("latest", "8.4") == "latest=8.4\n"

    def test_list_is_json(self) -> None:
        assert format_output("matrix", ["8.3", "8.4"]) == 'matrix=["8.3", "8.4"]\n'

    def test_multiline_uses_heredoc(self) -> None:
        text = format_output("notes", "line one\nline two")

        header, body_one, body_two, footer, trailing = text.split("\n")
        name, delimiter = header.split("<<")

        assert name == "notes"
        assert delimiter.startswith("ghadelimiter_")
        assert (body_one, body_two) == ("line one", "line two")
        assert footer == delimiter
        assert trailing == ""


@pytest.mark.unit
class TestWriteOutputs:
    """Tests for write_outputs."""

    def test_writes_in_order(self, tmp_path: Path) -> None:
        path = tmp_path / "github_output"

        write_outputs(
            path,
            {
                "composer-php-version": "^8.3",
                "matrix": ["8.3", "8.4"],
                "minimal": "8.3",
                "latest": "8.4",
            },
        )

        assert path.read_text(encoding="utf-8").splitlines() == [
            "composer-php-version=^8.3",
            'matrix=["8.3", "8.4"]',
            "minimal=8.3",
            "latest=8.4",
        ]

    def test_preserves_existing_content(self, tmp_path: Path) -> None:
        path = tmp_path / "github_output"
        path.write_text("other-step=1\n", encoding="utf-8")

        write_outputs(path, {"latest": "8.4"})

        assert path.read_text(encoding="utf-8") == "other-step=1\nlatest=8.4\n"
