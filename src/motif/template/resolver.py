"""Context resolution: dot-path lookup, truthiness and stringification.

Contexts are plain mappings. Each render layers ``collections.ChainMap``
children over the caller's mapping instead of copying or mutating it, so the
context a caller passes in is never changed by a render.

Lookup walks a dot path one segment at a time. Mappings are indexed by key,
sequences by integer segment, and anything else by attribute. A missing
segment anywhere yields ``UNDEFINED``, which renders as the empty string.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from motif.nodes import Node


class _Undefined:
    """Sentinel for an unresolved path; falsy and renders as ``""``."""

    __slots__ = ()

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return ""

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Any = _Undefined()


@dataclass(frozen=True, slots=True)
class Fragment:
    """Unrendered nodes paired with the context they render against.

    Bound as ``content``/``$content`` inside layouts and as ``$children`` and
    ``$slots.<name>`` inside components. Writing a fragment through a variable
    renders its nodes in place. An empty fragment is falsy, so
    ``{{#if $slots.footer}}`` tests whether the slot was filled.
    """

    nodes: tuple[Node, ...]
    context: Mapping[str, Any]

    def __len__(self) -> int:
        return len(self.nodes)

    def __bool__(self) -> bool:
        return bool(self.nodes)

    def __iter__(self):
        return iter(self.nodes)


def is_sequence(value: Any) -> bool:
    """True for list-like values a loop can iterate; strings are excluded."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _segment(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(key, UNDEFINED)
    if is_sequence(value):
        if key == "length":
            return len(value)
        try:
            return value[int(key)]
        except (ValueError, IndexError):
            return UNDEFINED
    if value is None or value is UNDEFINED or key.startswith("_"):
        return UNDEFINED
    return getattr(value, key, UNDEFINED)


def resolve_path(context: Mapping[str, Any], path: str) -> Any:
    """Resolve a dot path such as ``user.profile.name`` against ``context``.

    ``this`` and ``.`` are ordinary keys; the loop binds ``this`` to the
    current element. A path that names a key containing dots is tried whole
    before splitting, so ``{"a.b": 1}`` resolves ``a.b``.

    Example:
        >>> resolve_path({"user": {"tags": ["a", "b"]}}, "user.tags.1")
        'b'
        >>> resolve_path({}, "missing.key")
        UNDEFINED
    """
    path = path.strip()
    if not path:
        return UNDEFINED
    if path in context:
        return context[path]
    head, _, rest = path.partition(".")
    value = context.get(head, UNDEFINED)
    if not rest:
        return value
    for key in rest.split("."):
        if value is UNDEFINED:
            return UNDEFINED
        value = _segment(value, key)
    return value


def is_truthy(value: Any) -> bool:
    """Conditional truthiness.

    Falsy: ``None``, ``UNDEFINED``, ``False``, numeric zero (and NaN),
    ``""``, and empty sequences including empty fragments. Mappings, even
    empty ones, are truthy.
    """
    if value is None or value is UNDEFINED or value is False:
        return False
    if isinstance(value, bool):
        return True
    if isinstance(value, (int, float)):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value != ""
    if isinstance(value, Fragment):
        return bool(value)
    if is_sequence(value):
        return len(value) > 0
    return True


def stringify(value: Any) -> str:
    """Convert a resolved value to output text before escaping."""
    if value is None or value is UNDEFINED:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if is_sequence(value):
        return ",".join(stringify(item) for item in value)
    return str(value)


def is_absent(value: Any) -> bool:
    """True for values the ``default`` helper replaces."""
    return value is None or value is UNDEFINED or value == ""
