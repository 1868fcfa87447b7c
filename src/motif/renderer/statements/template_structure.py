"""Composition rendering: partials, components with slots, and layouts.

Every reference renders through a child ``Renderer`` whose RenderContext is
one level deeper. Past ``max_depth`` the reference renders nothing (plus a
diagnostic in debug mode), which stops a component that renders itself.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

import logging
from collections import ChainMap
from collections.abc import AsyncIterator, Mapping, Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from motif._types import ParseResult, TemplateKind
from motif.environment.exceptions import ErrorCode
from motif.nodes import Component, Layout, Node, Partial
from motif.nodes.structure import SLOT_TAG
from motif.template.resolver import Fragment

if TYPE_CHECKING:
    from motif.environment.core import Environment
    from motif.render_context import RenderContext
    from motif.renderer.core import Renderer

logger = logging.getLogger(__name__)

_NOT_FOUND = {
    TemplateKind.TEMPLATE: ErrorCode.TEMPLATE_NOT_FOUND,
    TemplateKind.PARTIAL: ErrorCode.PARTIAL_NOT_FOUND,
    TemplateKind.COMPONENT: ErrorCode.COMPONENT_NOT_FOUND,
    TemplateKind.LAYOUT: ErrorCode.LAYOUT_NOT_FOUND,
}


def collect_slots(children: Sequence[Node], context: ChainMap[str, Any]) -> dict[str, Fragment]:
    """Bucket a component's children into named slots.

    ``<Slot name="x">`` contributes its children to slot ``x``; a child
    component with a string ``slot`` prop goes to that slot whole. Everything
    else is the ``default`` slot, which is always present.
    """
    buckets: dict[str, list[Node]] = {"default": []}
    for child in children:
        if isinstance(child, Component) and child.name == SLOT_TAG:
            name = child.props.get("name")
            key = name if isinstance(name, str) and name else "default"
            buckets.setdefault(key, []).extend(child.children)
            continue
        if isinstance(child, Component):
            target = child.props.get("slot")
            if isinstance(target, str) and target:
                buckets.setdefault(target, []).append(child)
                continue
        buckets["default"].append(child)
    return {name: Fragment(tuple(nodes), context) for name, nodes in buckets.items()}


class TemplateStructureMixin:
    """Mixin for partial, component and layout nodes."""

    if TYPE_CHECKING:
        _env: Environment
        _state: RenderContext

        def render(self, nodes: Sequence[Node], context: ChainMap[str, Any]) -> AsyncIterator[str]: ...

        def _diagnostic(self, code: ErrorCode, message: str) -> str: ...

        def _resolve_arg(self, token: str, context: Mapping[str, Any]) -> Any: ...

        def _child(self, template_name: str, lineno: int) -> Renderer: ...

        def _trace(self) -> str: ...

    async def _reference(self, name: str, kind: TemplateKind) -> tuple[ParseResult | None, str]:
        """Resolve a reference, or return the diagnostic to emit instead."""
        if self._state.depth_exceeded:
            message = f"Maximum nesting depth ({self._state.max_depth}) exceeded at {kind.value} '{name}'"
            if self._state.debug:
                logger.warning("%s%s", message, self._trace())
            return None, self._diagnostic(ErrorCode.DEPTH_EXCEEDED, message)
        result = await self._env.resolve(name, kind)
        if result is None:
            return None, self._diagnostic(_NOT_FOUND[kind], f"{kind.value.capitalize()} '{name}' not found")
        return result, ""

    async def _render_partial(self, node: Partial, context: ChainMap[str, Any]) -> AsyncIterator[str]:
        result, issue = await self._reference(node.name, TemplateKind.PARTIAL)
        if result is None:
            if issue:
                yield issue
            return
        props = {key: self._resolve_arg(token, context) for key, token in node.props.items()}
        async for chunk in self._child(node.name, node.lineno).render(result.nodes, context.new_child(props)):
            yield chunk

    async def _render_component(self, node: Component, context: ChainMap[str, Any]) -> AsyncIterator[str]:
        if node.name == SLOT_TAG:
            # Outside a component's children a slot wrapper is transparent.
            async for chunk in self.render(node.children, context):
                yield chunk
            return

        result, issue = await self._reference(node.name, TemplateKind.COMPONENT)
        if result is None:
            if issue:
                yield issue
            return
        scope = {
            **node.props,
            "$slots": collect_slots(node.children, context),
            "$children": Fragment(tuple(node.children), context),
        }
        async for chunk in self._child(node.name, node.lineno).render(result.nodes, context.new_child(scope)):
            yield chunk

    async def _render_layout(self, node: Layout, context: ChainMap[str, Any]) -> AsyncIterator[str]:
        """Render the layout around ``node.children``.

        The layout sees the page props (frontmatter included) and the page
        body as ``content`` (and ``$content``). A layout whose own
        frontmatter names a layout is wrapped in turn. A missing layout
        renders the page body alone.
        """
        name = node.name
        # The page body sees its own props but not ``content``.
        page = context.new_child(dict(node.props))
        result, issue = await self._reference(name, TemplateKind.LAYOUT)
        if result is None:
            if issue:
                yield issue
            async for chunk in self.render(node.children, page):
                yield chunk
            return

        content = Fragment(tuple(node.children), page)
        # Props are layered last, so a prop named ``content`` wins.
        scope = context.new_child({"content": content, "$content": content}).new_child(dict(node.props))
        child = self._child(name, node.lineno)
        parent = result.metadata.layout
        if parent and parent != name:
            outer = Layout(
                node.lineno,
                node.col_offset,
                props=MappingProxyType({**result.metadata.frontmatter, "layout": parent}),
                children=result.nodes,
            )
            async for chunk in child._render_layout(outer, scope):
                yield chunk
            return
        async for chunk in child.render(result.nodes, scope):
            yield chunk
