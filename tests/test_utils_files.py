"""Tests for file utility functions."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from radcliffe.models import DataType, Format, Metadata
from radcliffe.utils.files import (
    output_path_for,
    serialize_records,
    validate_input_path,
    write_records,
)


class TestValidateInputPath:
    """Test validate_input_path function."""

    def test_valid_json_file(self, tmp_path: Path) -> None:
        source = tmp_path / "doc.json"
        source.write_text("{}")

        assert validate_input_path(source) == source

    def test_case_insensitive_extension(self, tmp_path: Path) -> None:
        source = tmp_path / "doc.JSON"
        source.write_text("{}")

        assert validate_input_path(source) == source

    def test_wrong_extension(self, tmp_path: Path) -> None:
        source = tmp_path / "doc.txt"
        source.write_text("{}")

        with pytest.raises(ValueError, match="file extension must be .json"):
            validate_input_path(source)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="file not found"):
            validate_input_path(tmp_path / "missing.json")

    def test_directory(self, tmp_path: Path) -> None:
        folder = tmp_path / "folder.json"
        folder.mkdir()

        with pytest.raises(ValueError, match="not a file"):
            validate_input_path(folder)


class TestOutputPathFor:
    """Test output_path_for function."""

    def test_default_suffix(self) -> None:
        assert output_path_for(Path("/data/sample.json")) == Path("/data/sample_out.json")

    def test_custom_suffix(self) -> None:
        assert output_path_for(Path("sample.json"), "_schema.json") == Path("sample_schema.json")


class TestWriteRecords:
    """Test record serialization."""

    def test_serialize_omits_missing_format(self) -> None:
        records = [
            Metadata("a", DataType.OBJECT),
            Metadata("a.b", DataType.NUMBER, Format.DOUBLE),
        ]

        assert serialize_records(records) == [
            {"path": "a", "type": "object"},
            {"path": "a.b", "type": "number", "format": "double"},
        ]

    def test_write_records(self, tmp_path: Path) -> None:
        """Writes a tab-indented array with a trailing newline."""
        destination = tmp_path / "out.json"

        write_records(destination, [Metadata("flag", DataType.BOOLEAN)])

        content = destination.read_text()
        assert content.endswith("\n")
        assert "\t" in content
        assert json.loads(content) == [{"path": "flag", "type": "boolean"}]

    def test_write_empty(self, tmp_path: Path) -> None:
        destination = tmp_path / "out.json"

        write_records(destination, [])

        assert json.loads(destination.read_text()) == []
