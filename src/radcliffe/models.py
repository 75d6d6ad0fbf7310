"""Core Radcliffe data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Union


class DataType(str, Enum):
    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    OBJECT = "object"
    UNKNOWN = "unknown"


class Format(str, Enum):
    FLOAT = "float"
    DOUBLE = "double"
    INT32 = "int32"
    INT64 = "int64"
    DATE = "date"
    DATE_TIME = "date-time"


@dataclass(frozen=True, slots=True)
class JsonBoolean:
    value: bool


@dataclass(frozen=True, slots=True)
class JsonString:
    value: str


@dataclass(frozen=True, slots=True)
class JsonNumber:
    """A JSON number kept as the exact decimal text it was written with."""

    text: str


@dataclass(frozen=True, slots=True)
class JsonObject:
    members: Dict[str, "JsonValue"] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class JsonOther:
    """Null, arrays and anything else the classifier does not refine."""

    value: Any = None


JsonValue = Union[JsonBoolean, JsonString, JsonNumber, JsonObject, JsonOther]


@dataclass(frozen=True, slots=True)
class Pair:
    """One key of the document together with the path of its parent scope."""

    key: str
    value: JsonValue
    root_path: str


@dataclass(frozen=True, slots=True)
class Metadata:
    """Inferred type information for a single document path."""

    path: str
    type: DataType
    format: Format | None = None

    def to_dict(self) -> Dict[str, str]:
        data = {"path": self.path, "type": self.type.value}
        if self.format is not None:
            data["format"] = self.format.value
        return data
