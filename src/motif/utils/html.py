"""HTML escaping and the Markup safe-string type.

Escaping is a single ``str.translate()`` pass over the five characters that
matter in element content and quoted attribute values.
"""

from __future__ import annotations

from typing import Any, SupportsIndex

_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
    }
)

_UNESCAPE_PAIRS = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&#x27;", "'"),
    ("&amp;", "&"),
)


class Markup(str):
    """A string that is already safe to emit without escaping.

    Helpers and filters return ``Markup`` to opt out of output escaping:

        >>> env.register_helper("bold", lambda s: Markup(f"<b>{html_escape(s)}</b>"))

    Concatenating with a plain ``str`` escapes the plain side.
    """

    __slots__ = ()

    def __new__(cls, value: Any = "") -> Markup:
        if hasattr(value, "__html__"):
            value = value.__html__()
        return super().__new__(cls, value)

    def __html__(self) -> Markup:
        return self

    def __add__(self, other: str) -> Markup:
        return Markup(str.__add__(self, html_escape(other)))

    def __radd__(self, other: str) -> Markup:
        return Markup(str.__add__(html_escape(other), self))

    def __mul__(self, n: SupportsIndex) -> Markup:
        return Markup(str.__mul__(self, n))

    def __repr__(self) -> str:
        return f"Markup({str.__repr__(self)})"


def html_escape(value: Any) -> str:
    """Escape ``value`` for HTML output.

    Objects implementing ``__html__`` (``Markup`` included) pass through.

    Example:
        >>> html_escape('<a href="x">')
        '&lt;a href=&quot;x&quot;&gt;'
    """
    if hasattr(value, "__html__"):
        return str(value.__html__())
    return str(value).translate(_ESCAPE_TABLE)


def html_unescape(value: str) -> str:
    """Reverse ``html_escape``; ``&amp;`` is handled last."""
    for entity, char in _UNESCAPE_PAIRS:
        value = value.replace(entity, char)
    return value
