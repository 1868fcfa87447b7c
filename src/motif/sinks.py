"""Output sinks for incremental rendering.

A sink is whatever the caller wants chunks written to:

- an object with ``write(chunk)``; if ``write`` returns an awaitable it is
  awaited (``asyncio.StreamWriter`` is drained after each write)
- a binary stream (``io.RawIOBase``, ``io.BufferedIOBase``,
  ``asyncio.StreamWriter``); chunks are encoded first
- a plain callable taking each chunk

The engine never closes or flushes a sink; its lifetime belongs to the caller.
"""

from __future__ import annotations

import asyncio
import inspect
import io
from collections.abc import Awaitable, Callable
from typing import Any, Protocol


class TextSink(Protocol):
    def write(self, chunk: str, /) -> Any: ...


Sink = TextSink | Callable[[str], Any]


def _is_binary(sink: Any) -> bool:
    if isinstance(sink, (io.RawIOBase, io.BufferedIOBase, asyncio.StreamWriter)):
        return True
    mode = getattr(sink, "mode", None)
    return isinstance(mode, str) and "b" in mode


def make_writer(sink: Any, encoding: str = "utf-8") -> Callable[[str], Awaitable[None]]:
    """Adapt ``sink`` to an ``async write(chunk)`` function.

    Raises:
        TypeError: ``sink`` has no ``write`` method and is not callable
    """
    write = getattr(sink, "write", None)
    if write is None:
        if not callable(sink):
            raise TypeError(
                f"Sink must have a write() method or be callable, got {type(sink).__name__}"
            )
        write = sink
    binary = _is_binary(sink)
    drain = sink.drain if isinstance(sink, asyncio.StreamWriter) else None

    async def emit(chunk: str) -> None:
        result = write(chunk.encode(encoding) if binary else chunk)
        if inspect.isawaitable(result):
            await result
        if drain is not None:
            await drain()

    return emit
