"""Dot-joined document paths."""

from __future__ import annotations

SEPARATOR = "."


def build_path(parent_path: str, key: str) -> str:
    """Return the path of ``key`` inside ``parent_path``.

    ``parent_path`` is either empty (top level) or already ends with the
    separator, see :func:`child_scope`.
    """
    if not parent_path:
        return key
    return parent_path + key


def child_scope(parent_path: str, key: str) -> str:
    """Return the scope path used for the members of the object at ``key``."""
    return build_path(parent_path, key) + SEPARATOR
