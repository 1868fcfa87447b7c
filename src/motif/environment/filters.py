"""Built-in filters, applied with a pipe: ``{{ price | currency "EUR" }}``.

A filter receives the running value first, then its own resolved arguments.
Stages run left to right and each may return an awaitable.
"""

from __future__ import annotations

import base64 as _base64
import hashlib
from collections.abc import Callable, Mapping
from typing import Any

from motif.environment import helpers
from motif.template.resolver import is_sequence, stringify
from motif.utils.html import Markup, html_escape, html_unescape


def escape(value: Any) -> Markup:
    """Escape now and mark safe, so output escaping does not apply twice."""
    return Markup(html_escape(stringify(value)))


def unescape(value: Any) -> str:
    return html_unescape(stringify(value))


def size(value: Any) -> int:
    if isinstance(value, (str, Mapping)) or is_sequence(value):
        return len(value)
    return 0


def short_time_ago(value: Any, now: Any = None) -> str:
    """``time_ago`` without the "ago": ``"5 minutes"``, or "just now"."""
    phrase = helpers.time_ago(value, now)
    return phrase.removesuffix(" ago")


def to_base64(value: Any) -> str:
    return _base64.b64encode(stringify(value).encode("utf-8")).decode("ascii")


def md5(value: Any) -> str:
    return hashlib.md5(stringify(value).encode("utf-8"), usedforsecurity=False).hexdigest()


BUILTIN_FILTERS: dict[str, Callable[..., Any]] = {
    "upper": helpers.upper,
    "lower": helpers.lower,
    "title": helpers.title,
    "capitalize": helpers.capitalize,
    "trim": helpers.trim,
    "truncate": helpers.truncate,
    "escape": escape,
    "unescape": unescape,
    "currency": helpers.format_price,
    "percent": helpers.percent,
    "round": helpers.round_number,
    "size": size,
    "length": size,
    "join": helpers.join,
    "first": helpers.first,
    "last": helpers.last,
    "sort": helpers.sort,
    "reverse": helpers.reverse,
    "unique": helpers.unique,
    "date": helpers.format_date,
    "timeago": short_time_ago,
    "keys": helpers.keys,
    "values": helpers.values,
    "default": helpers.default,
    "json": helpers.to_json,
    "url_encode": helpers.url_encode,
    "url_decode": helpers.url_decode,
    "base64": to_base64,
    "md5": md5,
    "slugify": helpers.slugify,
}
