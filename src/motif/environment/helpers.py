"""Built-in helpers for motif templates.

Helpers are called with space-separated arguments:

    {{ format_date post.created "MMMM DD, YYYY" }}
    {{ truncate post.body 120 }}
    {{ t "nav.home" }}

Arguments arrive already resolved: identifier-shaped tokens are looked up in
the context (``None`` when unresolved), quoted tokens are strings and numeric
tokens are numbers. Return values are escaped like variables unless the
helper returns ``Markup``.

Each helper is a plain function; ``t``/``tn`` are built per environment by
``i18n_helpers()`` because they close over its ``Translator``. The camelCase
aliases at the bottom keep templates written for the JavaScript-style names
working.
"""

from __future__ import annotations

import json as _json
import logging
import re
from collections.abc import Callable, Mapping
from datetime import UTC, date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, unquote

from motif.template.resolver import (
    UNDEFINED,
    is_absent,
    is_sequence,
    is_truthy,
    resolve_path,
    stringify,
)

if TYPE_CHECKING:
    from motif.environment.i18n import Translator

logger = logging.getLogger(__name__)

_MISSING: Any = object()

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Longest tokens first so MMMM wins over MMM and MM in one pass.
_DATE_TOKEN_RE = re.compile(r"YYYY|MMMM|MMM|MM|DD|HH|mm|ss")

_CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CNY": "¥",
    "INR": "₹",
    "KRW": "₩",
    "CAD": "CA$",
    "AUD": "A$",
    "CHF": "CHF ",
}
_ZERO_DECIMAL_CURRENCIES = frozenset({"JPY", "KRW"})


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


def to_datetime(value: Any) -> datetime | None:
    """Coerce datetimes, dates, ISO strings and epoch seconds.

    Epoch seconds are interpreted as UTC. Returns None for anything else.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool) or value is None or value is UNDEFINED:
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def _number(value: Any) -> float | int:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    if value is None or value is UNDEFINED or value == "":
        return 0
    return float(value)


def _field(item: Any, key: str) -> Any:
    value = resolve_path({"item": item}, f"item.{key}")
    return None if value is UNDEFINED else value


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


def format_date(value: Any, fmt: str = "YYYY-MM-DD") -> str:
    """Format a date with ``YYYY MMMM MMM MM DD HH mm ss`` tokens.

    Example:
        >>> format_date("2024-03-05T14:07:09", "MMMM DD, YYYY HH:mm:ss")
        'March 05, 2024 14:07:09'
        >>> format_date("not a date")
        ''
    """
    moment = to_datetime(value)
    if moment is None:
        return ""
    fields = {
        "YYYY": f"{moment.year:04d}",
        "MMMM": MONTH_NAMES[moment.month - 1],
        "MMM": MONTH_NAMES[moment.month - 1][:3],
        "MM": f"{moment.month:02d}",
        "DD": f"{moment.day:02d}",
        "HH": f"{moment.hour:02d}",
        "mm": f"{moment.minute:02d}",
        "ss": f"{moment.second:02d}",
    }
    return _DATE_TOKEN_RE.sub(lambda m: fields[m.group()], str(fmt))


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def time_ago(value: Any, now: Any = None) -> str:
    """Relative time: "just now", "5 minutes ago", "1 year ago".

    Breakpoints: under a minute is "just now", then minutes, hours, days
    (under 30), months of 30 days (under 12) and years of 365 days.
    """
    then = to_datetime(value)
    if then is None:
        return ""
    current = to_datetime(now) if now is not None else None
    if current is None:
        current = datetime.now(UTC) if then.tzinfo else datetime.now()
    if (then.tzinfo is None) != (current.tzinfo is None):
        then = then.replace(tzinfo=UTC) if then.tzinfo is None else then
        current = current.replace(tzinfo=UTC) if current.tzinfo is None else current

    seconds = int((current - then).total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24
    if minutes < 1:
        return "just now"
    if hours < 1:
        return _plural(minutes, "minute")
    if days < 1:
        return _plural(hours, "hour")
    if days < 30:
        return _plural(days, "day")
    if days // 30 < 12:
        return _plural(days // 30, "month")
    return _plural(max(days // 365, 1), "year")


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------


def upper(value: Any) -> str:
    return stringify(value).upper()


def lower(value: Any) -> str:
    return stringify(value).lower()


def capitalize(value: Any) -> str:
    text = stringify(value)
    return text[:1].upper() + text[1:].lower()


def title(value: Any) -> str:
    return re.sub(r"\w\S*", lambda m: capitalize(m.group()), stringify(value))


def trim(value: Any) -> str:
    return stringify(value).strip()


def slugify(value: Any) -> str:
    """``"Hello, World!"`` → ``"hello-world"``."""
    return re.sub(r"[^a-z0-9]+", "-", stringify(value).lower()).strip("-")


def truncate(value: Any, length: Any = 50, suffix: str = "...") -> str:
    text = stringify(value)
    limit = int(_number(length))
    return text[:limit] + stringify(suffix) if len(text) > limit else text


def replace(value: Any, search: Any, replacement: Any = "") -> str:
    return stringify(value).replace(stringify(search), stringify(replacement))


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


def round_number(value: Any, decimals: Any = 0) -> int | float:
    """Round half away from zero: ``round 2.5`` is 3, not banker's 2."""
    places = int(_number(decimals))
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(str(_number(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if places <= 0 else float(rounded)


def format_number(value: Any, decimals: Any = 0) -> str:
    places = int(_number(decimals))
    return f"{round_number(value, places):.{places}f}"


def format_price(value: Any, currency: Any = "USD") -> str:
    """Format a currency amount the way en-US locales do: ``$1,234.56``."""
    code = stringify(currency).upper() or "USD"
    amount = _number(value)
    places = 0 if code in _ZERO_DECIMAL_CURRENCIES else 2
    body = f"{abs(round_number(amount, places)):,.{places}f}"
    sign = "-" if amount < 0 else ""
    symbol = _CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{sign}{code} {body}"
    return f"{sign}{symbol}{body}"


def percent(value: Any, decimals: Any = 2) -> str:
    """``0.256`` → ``"25.60%"``."""
    places = int(_number(decimals))
    return f"{round_number(_number(value) * 100, places):.{places}f}%"


# ---------------------------------------------------------------------------
# Sequences and mappings
# ---------------------------------------------------------------------------


def length(value: Any) -> int:
    if isinstance(value, (str, Mapping)) or is_sequence(value):
        return len(value)
    return 0


def first(value: Any) -> Any:
    return value[0] if is_sequence(value) and value else None


def last(value: Any) -> Any:
    return value[-1] if is_sequence(value) and value else None


def slice_(value: Any, start: Any = 0, end: Any = None) -> Any:
    if not (is_sequence(value) or isinstance(value, str)):
        return value
    begin = int(_number(start))
    stop = None if end is None else int(_number(end))
    result = value[begin:stop]
    return list(result) if is_sequence(value) else result


def sort(value: Any, key: Any = None) -> Any:
    """Sort a sequence, optionally by a field (dot paths allowed)."""
    if not is_sequence(value):
        return value
    if key is None:
        return sorted(value)
    return sorted(value, key=lambda item: _field(item, str(key)))


def reverse(value: Any) -> Any:
    if is_sequence(value):
        return list(reversed(value))
    if isinstance(value, str):
        return value[::-1]
    return value


def join(value: Any, separator: Any = ", ") -> str:
    if is_sequence(value):
        return stringify(separator).join(stringify(item) for item in value)
    return stringify(value)


def unique(value: Any) -> Any:
    """De-duplicate preserving first-seen order; works for unhashable items."""
    if not is_sequence(value):
        return value
    seen: list[Any] = []
    for item in value:
        if item not in seen:
            seen.append(item)
    return seen


def filter_(value: Any, key: Any, match: Any = _MISSING) -> Any:
    """Keep items whose ``key`` field is truthy, or equals ``match``.

    ``key`` may also be a predicate callable.
    """
    if not is_sequence(value):
        return value
    if callable(key):
        return [item for item in value if is_truthy(key(item))]
    if match is _MISSING:
        return [item for item in value if is_truthy(_field(item, str(key)))]
    return [item for item in value if _field(item, str(key)) == match]


def map_(value: Any, key: Any) -> Any:
    if not is_sequence(value):
        return value
    if callable(key):
        return [key(item) for item in value]
    return [_field(item, str(key)) for item in value]


def keys(value: Any) -> list[Any]:
    return list(value.keys()) if isinstance(value, Mapping) else []


def values(value: Any) -> list[Any]:
    return list(value.values()) if isinstance(value, Mapping) else []


def has(value: Any, key: Any) -> bool:
    if isinstance(value, Mapping):
        return key in value
    if is_sequence(value):
        return key in value
    return value is not None and value is not UNDEFINED and hasattr(value, str(key))


# ---------------------------------------------------------------------------
# Logic
# ---------------------------------------------------------------------------


def eq(a: Any, b: Any) -> bool:
    return a == b


def ne(a: Any, b: Any) -> bool:
    return a != b


def gt(a: Any, b: Any) -> bool:
    return _number(a) > _number(b)


def lt(a: Any, b: Any) -> bool:
    return _number(a) < _number(b)


def gte(a: Any, b: Any) -> bool:
    return _number(a) >= _number(b)


def lte(a: Any, b: Any) -> bool:
    return _number(a) <= _number(b)


def and_(*args: Any) -> bool:
    return all(is_truthy(arg) for arg in args)


def or_(*args: Any) -> bool:
    return any(is_truthy(arg) for arg in args)


def not_(value: Any) -> bool:
    return not is_truthy(value)


def when(condition: Any, truthy: Any, falsy: Any = "") -> Any:
    return truthy if is_truthy(condition) else (falsy if is_truthy(falsy) else "")


def unless(condition: Any, content: Any) -> Any:
    return "" if is_truthy(condition) else content


# ---------------------------------------------------------------------------
# Utility
# ---------------------------------------------------------------------------


def to_json(value: Any, indent: Any = 2) -> str:
    """JSON with indentation; unknown types fall back to ``str()``."""
    if value is UNDEFINED:
        value = None
    width = int(_number(indent)) if indent is not None else None
    return _json.dumps(value, indent=width, default=str, ensure_ascii=False)


def default(value: Any, fallback: Any = "") -> Any:
    """``fallback`` when ``value`` is None, unresolved or the empty string."""
    return fallback if is_absent(value) else value


def typeof(value: Any) -> str:
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if callable(value):
        return "function"
    return "object"


def debug(value: Any) -> Any:
    """Log ``value`` through the ``motif`` logger and return it unchanged."""
    logger.debug("Template debug: %r", value)
    return value


def url_encode(value: Any) -> str:
    return quote(stringify(value), safe="-_.!~*'()")


def url_decode(value: Any) -> str:
    return unquote(stringify(value))


BUILTIN_HELPERS: dict[str, Callable[..., Any]] = {
    # dates
    "format_date": format_date,
    "time_ago": time_ago,
    # strings
    "upper": upper,
    "uppercase": upper,
    "lower": lower,
    "lowercase": lower,
    "capitalize": capitalize,
    "title": title,
    "trim": trim,
    "slugify": slugify,
    "truncate": truncate,
    "replace": replace,
    # numbers
    "round": round_number,
    "format_number": format_number,
    "format_price": format_price,
    "currency": format_price,
    "percent": percent,
    # sequences and mappings
    "length": length,
    "first": first,
    "last": last,
    "slice": slice_,
    "sort": sort,
    "reverse": reverse,
    "join": join,
    "unique": unique,
    "filter": filter_,
    "map": map_,
    "keys": keys,
    "values": values,
    "has": has,
    # logic
    "eq": eq,
    "ne": ne,
    "gt": gt,
    "lt": lt,
    "gte": gte,
    "lte": lte,
    "and": and_,
    "or": or_,
    "not": not_,
    "when": when,
    "unless": unless,
    # utility
    "json": to_json,
    "default": default,
    "typeof": typeof,
    "stringify": stringify,
    "debug": debug,
    "url_encode": url_encode,
    "url_decode": url_decode,
}

BUILTIN_HELPERS.update(
    {
        "formatDate": format_date,
        "timeAgo": time_ago,
        "formatNumber": format_number,
        "formatPrice": format_price,
        "urlEncode": url_encode,
        "urlDecode": url_decode,
    }
)


def i18n_helpers(translator: Translator) -> dict[str, Callable[..., Any]]:
    """``t`` and ``tn`` bound to ``translator``."""

    def t(key: Any, locale: Any = None) -> str:
        return translator.translate(stringify(key), locale or None)

    def tn(key: Any, count: Any, locale: Any = None) -> str:
        return translator.translate_plural(stringify(key), _number(count), locale or None)

    return {"t": t, "tn": tn}
