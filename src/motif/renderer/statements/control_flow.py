"""Conditional and loop rendering.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

from collections import ChainMap
from collections.abc import AsyncIterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from motif.nodes import EachBlock, IfBlock, Node
from motif.template.resolver import is_sequence, is_truthy, resolve_path


class ControlFlowMixin:
    """Mixin for ``#if`` / ``if`` and ``#each`` / ``for`` blocks."""

    if TYPE_CHECKING:

        def render(self, nodes: Sequence[Node], context: ChainMap[str, Any]) -> AsyncIterator[str]: ...

    async def _render_if(self, node: IfBlock, context: ChainMap[str, Any]) -> AsyncIterator[str]:
        if is_truthy(resolve_path(context, node.condition)):
            async for chunk in self.render(node.children, context):
                yield chunk

    async def _render_each(self, node: EachBlock, context: ChainMap[str, Any]) -> AsyncIterator[str]:
        """Render the body once per element.

        Each iteration sees, innermost first: the alias, ``this`` and the
        ``@index``/``@first``/``@last``/``@length`` loop variables, then the
        element's own keys when it is a mapping, then the enclosing context.
        A target that is not a sequence renders nothing.
        """
        items = resolve_path(context, node.target)
        if not is_sequence(items):
            return
        length = len(items)
        for index, item in enumerate(items):
            loop_vars = {
                node.alias: item,
                "this": item,
                "@index": index,
                "@first": index == 0,
                "@last": index == length - 1,
                "@length": length,
            }
            if isinstance(item, Mapping):
                scope = ChainMap(loop_vars, item, *context.maps)
            else:
                scope = context.new_child(loop_vars)
            async for chunk in self.render(node.children, scope):
                yield chunk
