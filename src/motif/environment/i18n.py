"""Translation tables for the ``t`` and ``tn`` helpers.

Tables map locale → key → string. They can be passed inline, loaded from a
directory of ``<locale>.json`` files, or both (inline entries win). Nested
JSON objects are flattened to dotted keys, so ``{"nav": {"home": "Home"}}``
answers ``t "nav.home"``.

Locale precedence for a lookup: the helper's explicit locale argument, then
the ``locale`` metadata of the active render (``render(..., locale="fr")`` or
``RenderContext.set_meta``), then ``Translator.locale``. A key missing in that
locale is looked up in the fallback locale, and finally the key itself is
returned.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from motif.render_context import get_render_context

logger = logging.getLogger(__name__)


def _flatten(table: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    flat: dict[str, str] = {}
    for key, value in table.items():
        name = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, f"{name}."))
        else:
            flat[name] = str(value)
    return flat


def load_translations(directory: str | Path, encoding: str = "utf-8") -> dict[str, dict[str, str]]:
    """Load every ``<locale>.json`` file in ``directory``.

    Raises:
        ValueError: A file does not contain a JSON object
        json.JSONDecodeError: A file is not valid JSON
    """
    tables: dict[str, dict[str, str]] = {}
    for path in sorted(Path(directory).glob("*.json")):
        data = json.loads(path.read_text(encoding))
        if not isinstance(data, Mapping):
            raise ValueError(f"Translation file {path} must contain a JSON object")
        tables[path.stem] = _flatten(data)
        logger.debug("Loaded %d translations for %r from %s", len(tables[path.stem]), path.stem, path)
    return tables


class Translator:
    """Locale-aware key lookup.

    Example:
        >>> tr = Translator({"en": {"greeting": "Hello"}, "fr": {"greeting": "Bonjour"}},
        ...                 locale="fr", fallback="en")
        >>> tr.translate("greeting")
        'Bonjour'
        >>> tr.translate("missing")
        'missing'

    Args:
        translations: Inline tables, locale → key → string
        locale: Locale used when neither the call nor the render names one
        fallback: Locale consulted when a key is missing
        directory: Directory of ``<locale>.json`` files merged under the
            inline tables
        encoding: Encoding of the JSON files
    """

    __slots__ = ("_tables", "fallback", "locale")

    def __init__(
        self,
        translations: Mapping[str, Mapping[str, Any]] | None = None,
        *,
        locale: str = "en",
        fallback: str | None = None,
        directory: str | Path | None = None,
        encoding: str = "utf-8",
    ):
        tables: dict[str, dict[str, str]] = {}
        if directory is not None:
            tables = load_translations(directory, encoding)
        for name, table in (translations or {}).items():
            tables.setdefault(name, {}).update(_flatten(table))
        self._tables = tables
        self.locale = locale
        self.fallback = fallback

    @property
    def locales(self) -> list[str]:
        return sorted(self._tables)

    def add(self, locale: str, table: Mapping[str, Any]) -> None:
        """Merge ``table`` into ``locale``, replacing existing keys."""
        merged = {**self._tables.get(locale, {}), **_flatten(table)}
        self._tables = {**self._tables, locale: merged}

    def active_locale(self, locale: str | None = None) -> str:
        if locale:
            return str(locale)
        ctx = get_render_context()
        if ctx is not None:
            current = ctx.get_meta("locale")
            if current:
                return str(current)
        return self.locale

    def translate(self, key: str, locale: str | None = None) -> str:
        target = self.active_locale(locale)
        found = self._tables.get(target, {}).get(key)
        if found:
            return found
        if self.fallback and self.fallback != target:
            found = self._tables.get(self.fallback, {}).get(key)
            if found:
                return found
        return key

    def translate_plural(self, key: str, count: float, locale: str | None = None) -> str:
        """Use ``key`` for a count of one and ``key_plural`` otherwise.

        ``{count}`` in the translated string is replaced by the count.
        """
        plural_key = key if count == 1 else f"{key}_plural"
        shown = int(count) if float(count).is_integer() else count
        return self.translate(plural_key, locale).replace("{count}", str(shown))

    @classmethod
    def coerce(cls, value: Translator | Mapping[str, Any] | None) -> Translator:
        """Accept a Translator, or a mapping of Translator keyword arguments."""
        if isinstance(value, Translator):
            return value
        if value is None:
            return cls()
        options = dict(value)
        return cls(options.pop("translations", None), **options)
