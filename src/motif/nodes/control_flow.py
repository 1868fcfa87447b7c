"""Control flow nodes for the motif template tree."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from motif.nodes.base import Node


@dataclass(frozen=True, slots=True)
class IfBlock(Node):
    """Conditional block: ``{{#if user}}...{{/if}}`` or ``<% if user %>``.

    There is no else branch; the children render only when ``condition``
    resolves to a truthy value.
    """

    condition: str
    children: Sequence[Node] = ()


@dataclass(frozen=True, slots=True)
class EachBlock(Node):
    """Loop block: ``{{#each posts as post}}`` or ``<% for post in posts %>``."""

    target: str
    alias: str = "item"
    children: Sequence[Node] = ()


Block = IfBlock | EachBlock
