"""Decode JSON text into tagged values that keep numbers as written."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Tuple

from radcliffe.errors import DocumentDecodeError, UnsupportedShapeError
from radcliffe.models import (
    JsonBoolean,
    JsonNumber,
    JsonObject,
    JsonOther,
    JsonString,
    JsonValue,
)

LOGGER = logging.getLogger(__name__)


def _keep_text(text: str) -> JsonNumber:
    return JsonNumber(text)


def to_json_value(raw: Any) -> JsonValue:
    """Wrap a value produced by ``json.loads`` in its tagged variant.

    Uses an explicit stack so document depth is bounded by the decoder only.
    """
    root: Dict[int, JsonValue] = {}
    stack: List[Tuple[Any, Any, Any]] = [(raw, root, 0)]
    while stack:
        item, target, slot = stack.pop()
        match item:
            case JsonNumber() | JsonOther():
                target[slot] = item
            case bool():
                target[slot] = JsonBoolean(item)
            case str():
                target[slot] = JsonString(item)
            case dict():
                wrapped = JsonObject(dict.fromkeys(item))
                target[slot] = wrapped
                stack.extend((value, wrapped.members, key) for key, value in item.items())
            case list():
                items: List[Any] = [None] * len(item)
                target[slot] = JsonOther(items)
                stack.extend((value, items, index) for index, value in enumerate(item))
            case _:
                target[slot] = JsonOther(item)
    return root[0]


def decode_document(text: str | bytes) -> JsonValue:
    """Decode JSON text, preserving the original text of every number.

    ``NaN`` and ``Infinity`` literals are not valid JSON numbers and are kept
    as unclassified values.
    """
    try:
        raw = json.loads(
            text,
            parse_int=_keep_text,
            parse_float=_keep_text,
            parse_constant=lambda name: JsonOther(name),
        )
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DocumentDecodeError(str(exc)) from exc
    except RecursionError as exc:
        raise DocumentDecodeError("document is nested too deeply") from exc
    return to_json_value(raw)


def require_object(value: JsonValue) -> JsonObject:
    """Return ``value`` if it is an object, reject any other top-level shape."""
    if isinstance(value, JsonObject):
        return value
    if isinstance(value, JsonOther) and isinstance(value.value, list):
        raise UnsupportedShapeError("arrays not supported")
    raise UnsupportedShapeError(f"top-level value must be an object, got {type(value).__name__}")


def load_document(text: str | bytes) -> JsonObject:
    document = require_object(decode_document(text))
    LOGGER.debug("Decoded document with %d top-level keys", len(document.members))
    return document
