"""Composition nodes: components, partials and layouts."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from motif.nodes.base import Node

_EMPTY: Mapping[str, object] = MappingProxyType({})

# `<Slot name="footer">...</Slot>` routes its children into a named slot of
# the enclosing component.
SLOT_TAG = "Slot"


@dataclass(frozen=True, slots=True)
class Component(Node):
    """Capitalized tag: ``<Card title="Hi">body</Card>``.

    Prop values are literal strings, or ``True`` for bare attributes.
    A child component carrying a ``slot`` prop is routed to that named slot.
    """

    name: str
    props: Mapping[str, object] = field(default_factory=lambda: _EMPTY)
    children: Sequence[Node] = ()


@dataclass(frozen=True, slots=True)
class Partial(Node):
    """Partial include: ``{{> header title=page.title}}``.

    Prop values are raw argument tokens resolved against the context at render.
    """

    name: str
    props: Mapping[str, str] = field(default_factory=lambda: _EMPTY)


@dataclass(frozen=True, slots=True)
class Layout(Node):
    """Wraps ``children`` in the layout named by ``props["layout"]``.

    Produced by the engine when rendering a page with a layout; the parser
    never emits it from template text.
    """

    props: Mapping[str, object] = field(default_factory=lambda: _EMPTY)
    children: Sequence[Node] = ()

    @property
    def name(self) -> str:
        return str(self.props.get("layout", ""))
