"""Leading ``---`` metadata blocks.

    ---
    title: Home
    layout: base
    tags: [news, tech]
    draft: false
    ---
    <h1>{{ title }}</h1>

Values are coerced: JSON-looking arrays and objects are decoded, other
``[a, b]`` lists are split on commas, ``true``/``false`` become booleans,
integer and decimal tokens become numbers, and surrounding quotes are
stripped from everything else.
"""

from __future__ import annotations

import json
import re
from typing import Any

_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)", re.S | re.M)
_INT_RE = re.compile(r"-?\d+")
_FLOAT_RE = re.compile(r"-?\d+\.\d+")


def coerce_value(raw: str) -> Any:
    """Coerce one frontmatter value string.

    Example:
        >>> coerce_value("[1, two, 'three']")
        [1, 'two', 'three']
        >>> coerce_value('"quoted: yes"')
        'quoted: yes'
    """
    value = raw.strip()
    if value.startswith(("[", "{")):
        try:
            return json.loads(value)
        except ValueError:
            pass
    if value.startswith("[") and value.endswith("]"):
        inner = value[1:-1].strip()
        if not inner:
            return []
        return [coerce_value(part) for part in inner.split(",")]
    if value == "true":
        return True
    if value == "false":
        return False
    if _INT_RE.fullmatch(value):
        return int(value)
    if _FLOAT_RE.fullmatch(value):
        return float(value)
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def parse_frontmatter_block(block: str) -> dict[str, Any]:
    """Parse the ``key: value`` lines between the ``---`` fences."""
    data: dict[str, Any] = {}
    for line in block.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or ":" not in stripped:
            continue
        key, _, raw = stripped.partition(":")
        key = key.strip()
        if key:
            data[key] = coerce_value(raw)
    return data


def split_frontmatter(source: str) -> tuple[str, dict[str, Any], int]:
    """Split ``source`` into body, frontmatter and body line offset.

    The offset is how many lines the fence consumed, so body line numbers can
    be reported against the original file. A source without a complete
    leading block is returned unchanged with empty frontmatter.
    """
    match = _FRONTMATTER_RE.match(source)
    if match is None:
        return source, {}, 0
    consumed = source[: match.end()]
    return source[match.end() :], parse_frontmatter_block(match.group(1)), consumed.count("\n")
