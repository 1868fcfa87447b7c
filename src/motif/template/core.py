"""Motif Template: a parsed page bound to its Environment.

Architecture:
    ```
    Template
    ├── _env_ref: WeakRef[Environment]  # Prevents circular refs
    └── _result: ParseResult            # Immutable nodes + metadata
    ```

Memory Safety:
Uses ``weakref.ref(env)`` to break potential cycles:
``Template → (weak) → Environment → cache → ParseResult``

Thread-Safety:
Templates hold only immutable state. Every render builds its own context
layers and RenderContext, so any number of threads or tasks can render the
same Template at once.

"""

from __future__ import annotations

import weakref
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from motif._types import ParseResult, TemplateMetadata
    from motif.environment import Environment
    from motif.nodes import Node


def _build_context(args: tuple[Any, ...], kwargs: dict[str, Any], method: str) -> dict[str, Any]:
    ctx: dict[str, Any] = {}
    if args:
        if len(args) == 1 and isinstance(args[0], dict):
            ctx.update(args[0])
        else:
            raise TypeError(f"{method}() takes at most 1 positional argument (a dict), got {len(args)}")
    ctx.update(kwargs)
    return ctx


class Template:
    """Parsed template ready for rendering.

    Context is passed as one dict, keyword arguments, or both (keywords win).
    Environment globals sit beneath it.

    Example:
            >>> t = env.from_string("Hello, {{ name }}!")
            >>> t.render(name="World")
            'Hello, World!'
            >>> t.render({"name": "World"})
            'Hello, World!'
    """

    __slots__ = ("__weakref__", "_env_ref", "_result")

    def __init__(self, env: Environment, result: ParseResult):
        self._env_ref: weakref.ref[Environment] = weakref.ref(env)
        self._result = result

    @property
    def _env(self) -> Environment:
        """Get the Environment (dereferences weak reference)."""
        env = self._env_ref()
        if env is None:
            raise RuntimeError(
                f"Environment has been garbage collected (template: {self.name or 'unknown'})"
            )
        return env

    @property
    def name(self) -> str | None:
        return self._result.name

    @property
    def filename(self) -> str | None:
        return self._result.filename

    @property
    def result(self) -> ParseResult:
        return self._result

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self._result.nodes

    @property
    def metadata(self) -> TemplateMetadata:
        return self._result.metadata

    def render(self, *args: Any, locale: str | None = None, **kwargs: Any) -> str:
        """Render to a string.

        ``locale`` is a render option, not a context value: it becomes the
        render's ``locale`` metadata read by ``t``/``tn`` and other helpers.

        Raises:
            TemplateRuntimeError: Called inside a running event loop; use
                ``render_async()`` there
        """
        return self._env.render(self._result, _build_context(args, kwargs, "render"), locale=locale)

    async def render_async(self, *args: Any, locale: str | None = None, **kwargs: Any) -> str:
        ctx = _build_context(args, kwargs, "render_async")
        return await self._env.render_async(self._result, ctx, locale=locale)

    async def render_stream_async(
        self, *args: Any, locale: str | None = None, **kwargs: Any
    ) -> AsyncIterator[str]:
        """Render as an async generator of HTML chunks.

        Example:
            >>> async for chunk in template.render_stream_async(items=data):
            ...     await response.write(chunk)
        """
        ctx = _build_context(args, kwargs, "render_stream_async")
        async for chunk in self._env.stream(self._result, ctx, locale=locale):
            yield chunk

    async def stream_to(self, sink: Any, *args: Any, locale: str | None = None, **kwargs: Any) -> None:
        """Write chunks to ``sink`` as they are produced."""
        ctx = _build_context(args, kwargs, "stream_to")
        await self._env.render_stream(self._result, ctx, sink, locale=locale)

    def render_with_layout(self, layout: str, *args: Any, locale: str | None = None, **kwargs: Any) -> str:
        """Render inside ``layout``, overriding any frontmatter layout."""
        ctx = _build_context(args, kwargs, "render_with_layout")
        return self._env.render(self._result, ctx, layout=layout, locale=locale)

    def __repr__(self) -> str:
        return f"<Template {self.name or '(inline)'}>"
