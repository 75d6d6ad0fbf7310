"""Utility helpers for working with files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from radcliffe.models import Metadata

JSON_SUFFIX = ".json"


def validate_input_path(path: Path) -> Path:
    """Ensure ``path`` points to an existing ``.json`` file."""
    if path.suffix.lower() != JSON_SUFFIX:
        raise ValueError(f"file extension must be .json: {path}")
    if not path.exists():
        raise ValueError(f"file not found: {path}")
    if not path.is_file():
        raise ValueError(f"not a file: {path}")
    return path


def output_path_for(path: Path, suffix: str = "_out.json") -> Path:
    """Return ``<stem><suffix>`` next to the input file."""
    return path.with_name(path.stem + suffix)


def serialize_records(records: Iterable[Metadata]) -> list[dict[str, str]]:
    return [record.to_dict() for record in records]


def write_records(path: Path, records: Iterable[Metadata]) -> None:
    """Write records as a tab-indented JSON array."""
    payload = json.dumps(serialize_records(records), indent="\t")
    with path.open("w", encoding="utf-8") as handle:
        handle.write(payload)
        handle.write("\n")
