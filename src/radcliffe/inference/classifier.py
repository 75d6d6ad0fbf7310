"""Type and format inference for decoded JSON values.

Numbers are classified from their original decimal text so that ``7`` and
``7.0`` stay distinguishable:

* text with a decimal point and at least one fractional digit is a
  ``number``, ``float`` when its magnitude is below the largest finite 32-bit
  IEEE value and ``double`` otherwise;
* any other text is an ``integer``, ``int32`` when it fits the signed 32-bit
  range and ``int64`` otherwise.

Strings are checked for RFC 3339 style date-times first and plain calendar
dates second.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Tuple

from radcliffe.models import (
    DataType,
    Format,
    JsonBoolean,
    JsonNumber,
    JsonObject,
    JsonOther,
    JsonString,
    JsonValue,
)

LOGGER = logging.getLogger(__name__)

FLOAT32_MAX = 3.4028234663852886e38
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

FLOAT_PATTERN = re.compile(r"^[+-]?[0-9]*\.[0-9]+$")
INTEGER_PATTERN = re.compile(r"^[+-]?([0-9]+)$")

_DATE = r"[0-9]{4}-(?:0[1-9]|1[0-2])-(?:0[1-9]|[12][0-9]|3[01])"
_TIME = r"(?:[01][0-9]|2[0-3]):[0-5][0-9]:(?:[0-5][0-9]|60)"
_OFFSET = r"(?:Z|[+-](?:[01][0-9]|2[0-3]):[0-5][0-9])"

# YYYY-MM-DDThh:mm:ss[.f{1,4}](Z|+hh:mm|-hh:mm)
DATE_TIME_PATTERN = re.compile(rf"{_DATE}T{_TIME}(?:\.[0-9]{{1,4}})?{_OFFSET}")
DATE_PATTERN = re.compile(_DATE)

Classification = Tuple[DataType, Optional[Format]]


def classify(value: JsonValue) -> Classification:
    """Return the ``(type, format)`` pair inferred for ``value``."""
    match value:
        case JsonBoolean():
            return DataType.BOOLEAN, None
        case JsonObject():
            return DataType.OBJECT, None
        case JsonNumber(text=text):
            return classify_number(text)
        case JsonString(value=text):
            return DataType.STRING, string_format(text)
        case JsonOther():
            return DataType.UNKNOWN, None
        case _:
            return DataType.UNKNOWN, None


def classify_number(text: str) -> Classification:
    if FLOAT_PATTERN.match(text):
        return DataType.NUMBER, _float_format(text)
    return DataType.INTEGER, _integer_format(text)


def _float_format(text: str) -> Format:
    magnitude = abs(float(text))
    if magnitude < FLOAT32_MAX:
        return Format.FLOAT
    return Format.DOUBLE


def _integer_format(text: str) -> Format:
    match = INTEGER_PATTERN.match(text)
    if match is None:
        LOGGER.error("Unable to parse integer value %r, assuming int64", text)
        return Format.INT64

    # Anything longer than ten significant digits cannot fit in 32 bits.
    digits = match.group(1).lstrip("0")
    if len(digits) > 10:
        return Format.INT64

    value = int(text)
    if INT32_MIN <= value <= INT32_MAX:
        return Format.INT32
    return Format.INT64


def string_format(text: str) -> Format | None:
    if DATE_TIME_PATTERN.fullmatch(text):
        return Format.DATE_TIME
    if DATE_PATTERN.search(text):
        return Format.DATE
    return None
