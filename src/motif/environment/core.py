"""Motif Environment: configuration, registries, template loading and rendering.

The Environment is the entry point. It owns:

- helper and filter registries (copy-on-write, exposed as ``env.helpers`` and
  ``env.filters``)
- pre-registered partials, components and layouts, consulted before the loader
- the parse cache and its change debouncer
- the ``Translator`` behind the ``t``/``tn`` helpers

Architecture:
    ```
    Environment
    ├── loader: Loader                     # FileSystemLoader(".") by default
    ├── _helpers / _filters: dict          # replaced, never mutated in place
    ├── _registered: kind → name → ParseResult
    ├── template_cache: TemplateCache      # (kind, cache_key) → ParseResult
    └── translator: Translator
    ```

Thread-Safety:
Registries are swapped whole on write, so a render in progress keeps the
snapshot it started with. ParseResults are immutable and shared freely.
Each render builds its own ``RenderContext``.

Example:
    >>> env = Environment(loader=DictLoader(partials={"hi": "Hi {{ name }}"}))
    >>> env.render(env.parse("{{> hi name=who}}!"), {"who": "Ada"})
    'Hi Ada!'

"""

from __future__ import annotations

import asyncio
import logging
from collections import ChainMap
from collections.abc import AsyncIterator, Mapping, Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from motif._types import ParseResult, TemplateKind
from motif.environment.cache import ChangeDebouncer, TemplateCache
from motif.environment.exceptions import (
    TemplateError,
    TemplateLoadError,
    TemplateRuntimeError,
)
from motif.environment.filters import BUILTIN_FILTERS
from motif.environment.helpers import BUILTIN_HELPERS, i18n_helpers
from motif.environment.i18n import Translator
from motif.environment.loaders import FileSystemLoader, Loader
from motif.environment.registry import FunctionRegistry, HelperFunc
from motif.nodes import Layout, Node
from motif.parser import Parser
from motif.render_context import create_render_context
from motif.renderer import Renderer
from motif.sinks import make_writer

if TYPE_CHECKING:
    from motif.template import Template

logger = logging.getLogger(__name__)

Renderable = ParseResult | Sequence[Node]


def _in_event_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class Environment:
    """Central configuration and entry point for motif.

    Args:
        loader: Source of templates; ``FileSystemLoader(".")`` when omitted
        cache: Keep parsed templates until ``clear_cache()``
        debug: Diagnostic nodes for malformed syntax, ``<!-- motif ... -->``
            comments for render problems, WARNING logs for load failures
        globals: Values visible to every template, beneath the render context
        helpers: Extra helpers, overriding built-ins of the same name
        filters: Extra filters, overriding built-ins of the same name
        i18n: A ``Translator`` or a mapping of ``Translator`` keyword arguments
        max_depth: Partial/component/layout nesting limit
        change_debounce: Seconds ``notify_change()`` waits before clearing

    Example:
        >>> env = Environment(loader=FileSystemLoader("views"), cache=True)
        >>> env.register_helper("shout", lambda s: f"{s}!")
        >>> env.from_string("{{ shout 'hey' }}").render()
        'hey!'
    """

    def __init__(
        self,
        loader: Loader | None = None,
        *,
        cache: bool = False,
        debug: bool = False,
        globals: Mapping[str, Any] | None = None,
        helpers: Mapping[str, HelperFunc] | None = None,
        filters: Mapping[str, HelperFunc] | None = None,
        i18n: Translator | Mapping[str, Any] | None = None,
        max_depth: int = 50,
        change_debounce: float = 0.1,
    ):
        self.loader: Loader = loader if loader is not None else FileSystemLoader(".")
        self.cache_enabled = cache
        self.debug = debug
        self.globals: dict[str, Any] = dict(globals or {})
        self.max_depth = max_depth
        self.translator = Translator.coerce(i18n)

        self._helpers: dict[str, HelperFunc] = {
            **BUILTIN_HELPERS,
            **i18n_helpers(self.translator),
            **(helpers or {}),
        }
        self._filters: dict[str, HelperFunc] = {**BUILTIN_FILTERS, **(filters or {})}
        self._registered: dict[TemplateKind, dict[str, ParseResult]] = {
            kind: {} for kind in TemplateKind
        }

        self.template_cache = TemplateCache()
        self.change_debouncer = ChangeDebouncer(self.clear_cache, change_debounce)

    # ─────────────────────────────────────────────────────────────────────────
    # Registries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def helpers(self) -> FunctionRegistry:
        """Helper registry; writes are copy-on-write."""
        return FunctionRegistry(self, "_helpers")

    @property
    def filters(self) -> FunctionRegistry:
        """Filter registry; writes are copy-on-write."""
        return FunctionRegistry(self, "_filters")

    def register_helper(self, name: str, fn: HelperFunc) -> None:
        self.helpers[name] = fn

    def register_filter(self, name: str, fn: HelperFunc) -> None:
        self.filters[name] = fn

    def lookup(self, name: str) -> HelperFunc | None:
        """Helper named ``name``, else the filter, else None."""
        fn = self._helpers.get(name)
        if fn is None:
            fn = self._filters.get(name)
        return fn

    def lookup_filter(self, name: str) -> HelperFunc | None:
        """Filter named ``name``, else the helper, else None."""
        fn = self._filters.get(name)
        if fn is None:
            fn = self._helpers.get(name)
        return fn

    def _register(self, kind: TemplateKind, name: str, template: str | ParseResult) -> ParseResult:
        result = template if isinstance(template, ParseResult) else self.parse(template, name=name)
        self._registered = {**self._registered, kind: {**self._registered[kind], name: result}}
        return result

    def register_partial(self, name: str, template: str | ParseResult) -> ParseResult:
        """Make ``{{> name}}`` resolve to ``template`` without the loader."""
        return self._register(TemplateKind.PARTIAL, name, template)

    def register_component(self, name: str, template: str | ParseResult) -> ParseResult:
        return self._register(TemplateKind.COMPONENT, name, template)

    def register_layout(self, name: str, template: str | ParseResult) -> ParseResult:
        return self._register(TemplateKind.LAYOUT, name, template)

    # ─────────────────────────────────────────────────────────────────────────
    # Loading
    # ─────────────────────────────────────────────────────────────────────────

    def parse(self, source: str, *, name: str | None = None, filename: str | None = None) -> ParseResult:
        """Parse ``source`` with this environment's debug setting."""
        return Parser(source, name=name, filename=filename, debug=self.debug).parse()

    def _cache_key(self, name: str, kind: TemplateKind) -> tuple[TemplateKind, str] | None:
        if not self.cache_enabled:
            return None
        return (kind, self.loader.cache_key(name, kind))

    def _load(self, name: str, kind: TemplateKind) -> ParseResult:
        """Load and parse ``name``, consulting the cache when enabled.

        Raises:
            TemplateNotFoundError: The loader has no such template
            TemplateLoadError: The loader failed in any other way
        """
        key = self._cache_key(name, kind)
        if key is not None:
            cached = self.template_cache.get(key)
            if cached is not None:
                logger.debug("Cache hit for %s %r", kind.value, name)
                return cached
            logger.debug("Cache miss for %s %r", kind.value, name)

        try:
            source, filename = self.loader.get_source(name, kind)
        except TemplateError:
            raise
        except Exception as exc:
            # Any loader failure, custom loaders included, is a load error.
            raise TemplateLoadError(
                f"Cannot read {kind.value} '{name}': {exc}",
                name=name,
                filename=getattr(exc, "filename", None),
            ) from exc

        result = self.parse(source, name=name, filename=filename)
        if key is not None:
            self.template_cache.set(key, result)
        return result

    def load_template(self, name: str, kind: TemplateKind | str = TemplateKind.TEMPLATE) -> ParseResult | None:
        """Load ``name`` as ``kind``, or None when it is missing or unreadable.

        Failures are logged at WARNING in debug mode.
        """
        kind = TemplateKind.coerce(kind)
        try:
            return self._load(name, kind)
        except TemplateError as exc:
            if self.debug:
                logger.warning("Failed to load %s %r: %s", kind.value, name, exc)
            return None

    async def load_template_async(
        self, name: str, kind: TemplateKind | str = TemplateKind.TEMPLATE
    ) -> ParseResult | None:
        """``load_template()`` without blocking the event loop on file I/O.

        Cache hits and loaders that declare ``blocking = False`` are served
        inline; everything else is read in a worker thread.
        """
        kind = TemplateKind.coerce(kind)
        key = self._cache_key(name, kind)
        if key is not None and key in self.template_cache:
            return self.load_template(name, kind)
        if not getattr(self.loader, "blocking", True):
            return self.load_template(name, kind)
        return await asyncio.to_thread(self.load_template, name, kind)

    async def resolve(self, name: str, kind: TemplateKind) -> ParseResult | None:
        """Registered template first, then the loader."""
        registered = self._registered[kind].get(name)
        if registered is not None:
            return registered
        return await self.load_template_async(name, kind)

    def get_template(self, name: str) -> Template:
        """Load a page as a ``Template``.

        Raises:
            TemplateNotFoundError: The loader has no such template
            TemplateLoadError: The source exists but cannot be read
        """
        from motif.template import Template

        return Template(self, self._load(name, TemplateKind.TEMPLATE))

    def from_string(self, source: str, name: str | None = None) -> Template:
        from motif.template import Template

        return Template(self, self.parse(source, name=name))

    def clear_cache(self) -> None:
        """Drop every cached parse. Registered templates are kept."""
        size = len(self.template_cache)
        self.template_cache.clear()
        logger.debug("Cleared template cache (%d entries)", size)

    def notify_change(self, path: str | None = None) -> None:
        """Report a changed template; the cache clears once the burst settles."""
        self.change_debouncer.trigger(path)

    # ─────────────────────────────────────────────────────────────────────────
    # Rendering
    # ─────────────────────────────────────────────────────────────────────────

    def _entry(
        self, nodes: Renderable, layout: str | None
    ) -> tuple[Sequence[Node], str | None, Mapping[str, Any]]:
        """Top-level nodes, template name and the page props to layer over the context.

        With a layout the props travel on the ``Layout`` wrapper instead.
        """
        if isinstance(nodes, str):
            raise TypeError("render() takes a ParseResult or nodes; use from_string() for source text")
        if isinstance(nodes, ParseResult):
            layout_name = layout or nodes.metadata.layout
            frontmatter: Mapping[str, Any] = nodes.metadata.frontmatter
            name = nodes.name
            body: Sequence[Node] = nodes.nodes
        else:
            layout_name, frontmatter, name, body = layout, {}, None, nodes
        if layout_name:
            wrapper = Layout(1, 0, props=MappingProxyType({**frontmatter, "layout": layout_name}), children=tuple(body))
            return (wrapper,), name, {}
        return body, name, frontmatter

    async def stream(
        self,
        nodes: Renderable,
        context: Mapping[str, Any] | None = None,
        *,
        layout: str | None = None,
        locale: str | None = None,
    ) -> AsyncIterator[str]:
        """Yield the rendered HTML chunk by chunk.

        ``nodes`` is a ``ParseResult`` (its frontmatter layout applies unless
        ``layout`` overrides it) or a plain node sequence. A page's frontmatter
        values are visible to its body whether or not it has a layout, and
        take precedence over same-named context values.
        """
        body, name, page_props = self._entry(nodes, layout)
        state = create_render_context(
            name,
            self.debug,
            self.max_depth,
            {"locale": locale} if locale else None,
        )
        scope: ChainMap[str, Any] = ChainMap({}, context or {}, self.globals)
        if page_props:
            scope = scope.new_child(dict(page_props))
        async for chunk in Renderer(self, state).render(body, scope):
            yield chunk

    async def render_async(
        self,
        nodes: Renderable,
        context: Mapping[str, Any] | None = None,
        *,
        layout: str | None = None,
        locale: str | None = None,
    ) -> str:
        return "".join([chunk async for chunk in self.stream(nodes, context, layout=layout, locale=locale)])

    def render(
        self,
        nodes: Renderable,
        context: Mapping[str, Any] | None = None,
        *,
        layout: str | None = None,
        locale: str | None = None,
    ) -> str:
        """Render to a string, driving a private event loop.

        Raises:
            TemplateRuntimeError: Called from inside a running event loop
        """
        if _in_event_loop():
            raise TemplateRuntimeError(
                "render() cannot run inside a running event loop",
                template_name=nodes.name if isinstance(nodes, ParseResult) else None,
                suggestion="await env.render_async(...) instead",
            )
        return asyncio.run(self.render_async(nodes, context, layout=layout, locale=locale))

    async def render_stream(
        self,
        nodes: Renderable,
        context: Mapping[str, Any] | None,
        sink: Any,
        *,
        layout: str | None = None,
        locale: str | None = None,
    ) -> None:
        """Write each chunk to ``sink`` as soon as it is produced.

        Binary sinks receive chunks encoded with the loader's encoding. The
        sink is never flushed or closed; errors it raises propagate.
        """
        emit = make_writer(sink, getattr(self.loader, "encoding", "utf-8"))
        async for chunk in self.stream(nodes, context, layout=layout, locale=locale):
            await emit(chunk)

    def __repr__(self) -> str:
        return (
            f"<Environment loader={type(self.loader).__name__} "
            f"cache={self.cache_enabled} debug={self.debug}>"
        )


__all__ = ["Environment", "Renderable"]
