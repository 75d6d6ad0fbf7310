"""Exceptions raised by Radcliffe."""

from __future__ import annotations


class RadcliffeError(ValueError):
    """Base class for all Radcliffe errors."""


class DocumentDecodeError(RadcliffeError):
    """The input text is not a valid JSON document."""


class UnsupportedShapeError(RadcliffeError):
    """The top-level JSON value is not an object."""

    def __init__(self, message: str = "arrays not supported") -> None:
        super().__init__(message)
