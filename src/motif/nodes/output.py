"""Output nodes: literal text, variables, helper calls and diagnostics."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from motif.nodes.base import Node


@dataclass(frozen=True, slots=True)
class FilterCall:
    """One stage of a pipe: ``{{ price | currency "EUR" }}``.

    ``args`` are raw argument tokens, resolved against the context at render.
    """

    name: str
    args: Sequence[str] = ()


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal template text, emitted verbatim."""

    content: str


@dataclass(frozen=True, slots=True)
class Variable(Node):
    """Dot-path lookup: ``{{ user.name }}`` or ``{{{ raw_html }}}``."""

    path: str
    escape: bool = True
    filters: Sequence[FilterCall] = ()


@dataclass(frozen=True, slots=True)
class Helper(Node):
    """Helper invocation: ``{{ format_date created "YYYY-MM-DD" }}``."""

    name: str
    args: Sequence[str] = ()
    escape: bool = True
    filters: Sequence[FilterCall] = ()


@dataclass(frozen=True, slots=True)
class Diagnostic(Node):
    """Malformed construct recorded by a debug-mode parse.

    ``source`` is the literal text a normal-mode parse would have emitted.
    """

    code: str
    message: str
    source: str = ""
