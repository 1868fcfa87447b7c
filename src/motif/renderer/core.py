"""Motif Renderer core: walks a node tree and yields HTML chunks.

The Renderer turns a parsed node tree plus a data context into a stream of
strings. Rendering is an async generator end to end, so helpers and filters
may be coroutines and output can be written to a sink as it is produced.

Design Principles:
1. **Exhaustive dispatch**: ``match`` over the closed ``Node`` union, ending
   in ``assert_never`` so a new node type fails type checking until handled
2. **Never mutate the caller's data**: scopes are ``ChainMap`` children
3. **Degrade, don't raise**: a missing helper, partial or component renders
   nothing, or a ``<!-- motif ... -->`` comment in debug mode
4. **Explicit state**: the RenderContext travels with the Renderer and is
   installed in the ContextVar only while a helper or filter runs

Example:
        >>> env = Environment()
        >>> state = create_render_context(None, debug=False, max_depth=50, parent_meta=None)
        >>> chunks = Renderer(env, state).render(env.parse("Hi {{ name }}").nodes, ChainMap({"name": "Ada"}))
        >>> "".join([chunk async for chunk in chunks])
        'Hi Ada'

"""

from __future__ import annotations

from collections import ChainMap
from collections.abc import AsyncIterator, Sequence
from typing import TYPE_CHECKING, Any, assert_never

from motif.nodes import (
    Component,
    Diagnostic,
    EachBlock,
    Helper,
    IfBlock,
    Layout,
    Node,
    Partial,
    Text,
    Variable,
)
from motif.render_context import RenderContext
from motif.renderer.statements import StatementRenderingMixin

if TYPE_CHECKING:
    from motif.environment.core import Environment


class Renderer(StatementRenderingMixin):
    """Render node trees for one Environment and one RenderContext.

    A Renderer is cheap: nested partials, components and layouts each get a
    child Renderer via ``_child()`` whose RenderContext is one level deeper.

    Attributes:
        _env: Environment supplying helpers, filters and template lookup
        _state: Per-render state (template name, depth, debug flag, metadata)
    """

    __slots__ = ("_env", "_state")

    def __init__(self, env: Environment, state: RenderContext):
        self._env = env
        self._state = state

    @property
    def state(self) -> RenderContext:
        return self._state

    def _child(self, template_name: str, lineno: int) -> Renderer:
        return Renderer(self._env, self._state.child_context(template_name, lineno))

    async def render(self, nodes: Sequence[Node], context: ChainMap[str, Any]) -> AsyncIterator[str]:
        """Yield the output of ``nodes`` in document order.

        Empty chunks are never yielded.
        """
        for node in nodes:
            match node:
                case Text():
                    if node.content:
                        yield node.content
                case Variable() | Helper():
                    async for chunk in self._render_output(node, context):
                        yield chunk
                case IfBlock():
                    async for chunk in self._render_if(node, context):
                        yield chunk
                case EachBlock():
                    async for chunk in self._render_each(node, context):
                        yield chunk
                case Partial():
                    async for chunk in self._render_partial(node, context):
                        yield chunk
                case Component():
                    async for chunk in self._render_component(node, context):
                        yield chunk
                case Layout():
                    async for chunk in self._render_layout(node, context):
                        yield chunk
                case Diagnostic():
                    yield self._render_diagnostic(node)
                case _:
                    assert_never(node)
