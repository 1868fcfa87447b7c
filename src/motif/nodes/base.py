"""Base node class for the motif template tree."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all template nodes.

    All nodes track their source location for diagnostics.
    Nodes are immutable so a parsed tree can be shared between renders.

    """

    lineno: int
    col_offset: int
