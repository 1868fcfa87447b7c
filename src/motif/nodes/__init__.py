"""Immutable node tree produced by the motif parser.

Every node is a frozen, slotted dataclass carrying its source position.
``Node`` below is the closed union the renderer dispatches over.
"""

from __future__ import annotations

from motif.nodes.base import Node as BaseNode
from motif.nodes.control_flow import Block, EachBlock, IfBlock
from motif.nodes.output import Diagnostic, FilterCall, Helper, Text, Variable
from motif.nodes.structure import Component, Layout, Partial

Node = Text | Variable | Helper | IfBlock | EachBlock | Component | Partial | Layout | Diagnostic

__all__ = [
    "BaseNode",
    "Block",
    "Component",
    "Diagnostic",
    "EachBlock",
    "FilterCall",
    "Helper",
    "IfBlock",
    "Layout",
    "Node",
    "Partial",
    "Text",
    "Variable",
]
