"""Per-render state held in a ContextVar, apart from the user's context.

The data a template sees is the caller's mapping layered with ChainMap
children. Bookkeeping the engine needs while rendering (which template is
rendering, how deep partial/component/layout nesting is, whether debug
diagnostics are on, framework metadata such as the active locale) lives in a
``RenderContext`` instead, so user keys and engine state never collide.

Each asyncio task and thread sees its own ``RenderContext``; concurrent
renders of the same template never share one.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field


@dataclass
class RenderContext:
    """Per-render state isolated from user context.

    Attributes:
        template_name: Template currently rendering, for diagnostics
        depth: Current partial/component/layout nesting depth
        max_depth: Nesting limit; deeper references render nothing
        debug: Emit diagnostic comments for recoverable problems
        template_stack: Chain of (template_name, line) references that led here
    """

    template_name: str | None = None
    depth: int = 0
    # 50 is deep enough for real component trees while catching a component
    # that renders itself.
    max_depth: int = 50
    debug: bool = False
    template_stack: list[tuple[str, int]] = field(default_factory=list)

    # Framework metadata (locale, request info, ...)
    _meta: dict[str, object] = field(default_factory=dict)

    def get_meta(self, key: str, default: object = None) -> object:
        """Get framework-specific metadata.

        The ``t``/``tn`` helpers read ``locale`` from here when no locale
        argument is given:

            with render_context() as ctx:
                ctx.set_meta("locale", request.locale)
                html = env.render(page, data)
        """
        return self._meta.get(key, default)

    def set_meta(self, key: str, value: object) -> None:
        self._meta[key] = value

    @property
    def depth_exceeded(self) -> bool:
        return self.depth >= self.max_depth

    def child_context(self, template_name: str, lineno: int = 0) -> RenderContext:
        """Context for a nested partial, component or layout.

        Shares metadata with the parent and records the reference site on
        the template stack.
        """
        new_stack = self.template_stack.copy()
        new_stack.append((self.template_name or "<template>", lineno))
        return RenderContext(
            template_name=template_name,
            depth=self.depth + 1,
            max_depth=self.max_depth,
            debug=self.debug,
            template_stack=new_stack,
            _meta=self._meta,
        )


_render_context: ContextVar[RenderContext | None] = ContextVar(
    "motif_render_context",
    default=None,
)


def get_render_context() -> RenderContext | None:
    """Current render context, or None outside a render."""
    return _render_context.get()


def create_render_context(
    template_name: str | None,
    debug: bool,
    max_depth: int,
    parent_meta: dict[str, object] | None,
) -> RenderContext:
    """Build a RenderContext without installing it.

    The renderer passes its RenderContext down explicitly and installs it
    only around helper calls, because an async generator can be finalized
    from a different task than the one that set a ContextVar.
    """
    # Metadata set by an enclosing render_context() (framework integration)
    # is inherited by the render that runs inside it.
    outer = _render_context.get()
    meta: dict[str, object] = {}
    if outer is not None:
        meta.update(outer._meta)
    if parent_meta:
        meta.update(parent_meta)
    return RenderContext(
        template_name=template_name,
        debug=debug,
        max_depth=max_depth,
        _meta=meta,
    )


@contextmanager
def render_context(
    template_name: str | None = None,
    *,
    debug: bool = False,
    max_depth: int = 50,
    parent_meta: dict[str, object] | None = None,
) -> Iterator[RenderContext]:
    """Context manager for render-scoped state.

    Example:
        with render_context() as ctx:
            ctx.set_meta("locale", "fr")
            html = env.render(page, data)   # t/tn helpers now use "fr"
    """
    ctx = create_render_context(template_name, debug, max_depth, parent_meta)
    token: Token[RenderContext | None] = _render_context.set(ctx)
    try:
        yield ctx
    finally:
        _render_context.reset(token)


@asynccontextmanager
async def async_render_context(
    template_name: str | None = None,
    *,
    debug: bool = False,
    max_depth: int = 50,
    parent_meta: dict[str, object] | None = None,
) -> AsyncIterator[RenderContext]:
    """Async counterpart of ``render_context()`` for ``async with``."""
    ctx = create_render_context(template_name, debug, max_depth, parent_meta)
    token: Token[RenderContext | None] = _render_context.set(ctx)
    try:
        yield ctx
    finally:
        _render_context.reset(token)


def set_render_context(ctx: RenderContext) -> Token[RenderContext | None]:
    """Set ``ctx`` as current and return the reset token."""
    return _render_context.set(ctx)


def reset_render_context(token: Token[RenderContext | None]) -> None:
    _render_context.reset(token)
