"""Parse cache and debounced invalidation.

``TemplateCache`` maps ``(kind, resolved path)`` to a ``ParseResult``.
Entries are immutable, so reads take no lock. A miss may be parsed by two
renders at once; both writes store equivalent results and the last one wins.

Entries are dropped only by ``clear()``. There is no per-access timestamp
check; a file watcher (or anything else that knows a template changed) calls
``Environment.notify_change()``, which a ``ChangeDebouncer`` collapses into a
single clear per burst of changes.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from motif._types import ParseResult, TemplateKind

logger = logging.getLogger(__name__)

CacheKey = tuple[TemplateKind, str]


@dataclass(frozen=True, slots=True)
class CacheInfo:
    """Cache statistics snapshot."""

    hits: int
    misses: int
    size: int


class TemplateCache:
    """Per-environment ParseResult cache.

    Example:
        >>> cache = TemplateCache()
        >>> cache.get((TemplateKind.PARTIAL, "views/partials/header.html")) is None
        True
        >>> cache.info()
        CacheInfo(hits=0, misses=1, size=0)
    """

    __slots__ = ("_entries", "_hits", "_misses")

    def __init__(self) -> None:
        self._entries: dict[CacheKey, ParseResult] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: CacheKey) -> ParseResult | None:
        result = self._entries.get(key)
        if result is None:
            self._misses += 1
        else:
            self._hits += 1
        return result

    def set(self, key: CacheKey, result: ParseResult) -> None:
        self._entries[key] = result

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries = {}

    def info(self) -> CacheInfo:
        return CacheInfo(self._hits, self._misses, len(self._entries))


class ChangeDebouncer:
    """Run ``callback`` once after a burst of ``trigger()`` calls goes quiet.

    Each trigger restarts a ``threading.Timer`` of ``delay`` seconds.
    ``flush()`` runs a pending callback immediately; ``cancel()`` drops it.

    Example:
        >>> debouncer = ChangeDebouncer(env.clear_cache, delay=0.1)
        >>> for path in changed_paths:
        ...     debouncer.trigger(path)   # one clear_cache() 100ms later
    """

    def __init__(self, callback: Callable[[], None], delay: float = 0.1):
        self._callback = callback
        self._delay = delay
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._changes: list[str] = []

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def trigger(self, path: str | None = None) -> None:
        with self._lock:
            if path is not None:
                self._changes.append(path)
            if self._timer is not None:
                self._timer.cancel()
            if self._delay <= 0:
                self._timer = None
                run_now = True
            else:
                self._timer = threading.Timer(self._delay, self._fire)
                self._timer.daemon = True
                self._timer.start()
                run_now = False
        if run_now:
            self._fire()

    def flush(self) -> None:
        with self._lock:
            if self._timer is None:
                return
            self._timer.cancel()
            self._timer = None
        self._fire()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._changes = []

    def _fire(self) -> None:
        with self._lock:
            self._timer = None
            changes, self._changes = self._changes, []
        logger.debug("Template change burst (%d paths): clearing cache", len(changes))
        self._callback()
