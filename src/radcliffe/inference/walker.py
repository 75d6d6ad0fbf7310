"""Depth-first traversal emitting one pair per key."""

from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Optional, Tuple

from radcliffe.inference.paths import child_scope
from radcliffe.models import JsonObject, JsonValue, Pair

LOGGER = logging.getLogger(__name__)

Emit = Callable[[Pair], None]

# (remaining members, scope path, the object's own pair emitted once its members are done)
_Frame = Tuple[Iterator[Tuple[str, JsonValue]], str, Optional[Pair]]


def walk(document: JsonObject, emit: Emit, *, depth: int = 0, root_path: str = "") -> int:
    """Emit a :class:`Pair` for every key reachable from ``document``.

    Nested objects are descended into before their own pair is emitted, so an
    object's pair always follows the pairs of its members. Descent happens on
    the calling thread with an explicit stack: when the call returns, nothing
    else will be emitted. Returns the number of pairs emitted.
    """
    emitted = 0
    deepest = depth
    stack: List[_Frame] = [(iter(document.members.items()), root_path, None)]
    while stack:
        members, scope, pending = stack[-1]
        for key, value in members:
            if isinstance(value, JsonObject):
                stack.append(
                    (iter(value.members.items()), child_scope(scope, key), Pair(key, value, scope))
                )
                deepest = max(deepest, depth + len(stack) - 1)
                break
            emit(Pair(key=key, value=value, root_path=scope))
            emitted += 1
        else:
            stack.pop()
            if pending is not None:
                emit(pending)
                emitted += 1
    LOGGER.debug("Walked %d pairs, deepest level %d", emitted, deepest)
    return emitted
