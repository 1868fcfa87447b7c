"""Shared block-stack machinery for the motif parser mixins.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from motif.environment.exceptions import ErrorCode
from motif.nodes import Diagnostic, FilterCall, Helper, Node, Text, Variable
from motif.parser.errors import ParseIssue
from motif.parser.tokens import IDENT_RE, split_pipes, tokenize


class BlockStackMixin:
    """Open/close bookkeeping and degradation of malformed constructs.

    Each open block pushes its close key ("/if", "/each", "endif", "endfor").
    A close key belonging to an enclosing block ends the inner block as
    unclosed, so the outer block still closes where the author intended.
    """

    # ─────────────────────────────────────────────────────────────────────────
    # Host attributes and cross-mixin dependencies (type-check only)
    # ─────────────────────────────────────────────────────────────────────────
    if TYPE_CHECKING:
        _source: str
        _pos: int
        _debug: bool
        _stack: list[str]
        _issues: list[ParseIssue]

        def _parse_body(self, close: str | None = None) -> tuple[list[Node], bool]: ...
        def _location(self, pos: int) -> tuple[int, int]: ...

    def _append(self, nodes: list[Node], node: Node) -> None:
        """Append ``node``, merging adjacent text nodes."""
        if isinstance(node, Text):
            if not node.content:
                return
            if nodes and isinstance(nodes[-1], Text):
                prev = nodes[-1]
                nodes[-1] = Text(prev.lineno, prev.col_offset, prev.content + node.content)
                return
        nodes.append(node)

    def _splice(self, nodes: list[Node], children: Sequence[Node]) -> None:
        for child in children:
            self._append(nodes, child)

    def _malformed(
        self,
        nodes: list[Node],
        code: ErrorCode,
        message: str,
        raw: str,
        pos: int,
    ) -> None:
        """Degrade a construct: literal text normally, a Diagnostic in debug mode."""
        lineno, col = self._location(pos)
        self._issues.append(ParseIssue(code, message, lineno, col, raw))
        if self._debug:
            nodes.append(Diagnostic(lineno, col, code.value, message, raw))
        else:
            self._append(nodes, Text(lineno, col, raw))

    def _open_block(
        self,
        nodes: list[Node],
        close: str,
        build: Callable[[tuple[Node, ...]], Node],
        raw: str,
        pos: int,
        label: str,
    ) -> None:
        """Parse children up to ``close`` and append ``build(children)``.

        An unclosed block degrades its opening marker and splices the children
        it did parse into ``nodes`` as siblings.
        """
        self._stack.append(close)
        children, closed = self._parse_body(close)
        self._stack.pop()
        if closed:
            nodes.append(build(tuple(children)))
            return
        self._malformed(nodes, ErrorCode.UNCLOSED_BLOCK, f"Unclosed {label} block", raw, pos)
        self._splice(nodes, children)

    def _parse_expression(self, content: str, escape: bool, pos: int) -> Variable | Helper:
        """Classify output content as a helper call or a variable lookup.

        ``name arg1 arg2`` with an identifier-shaped ``name`` is a helper call.
        Anything else is a variable path. Either may be followed by
        ``| filter arg`` stages.
        """
        lineno, col = self._location(pos)
        head, *stages = split_pipes(content)
        filters = []
        for stage in stages:
            parts = tokenize(stage)
            if parts:
                filters.append(FilterCall(parts[0], tuple(parts[1:])))

        tokens = tokenize(head)
        if len(tokens) > 1 and IDENT_RE.fullmatch(tokens[0]):
            return Helper(lineno, col, tokens[0], tuple(tokens[1:]), escape, tuple(filters))
        return Variable(lineno, col, head.strip(), escape, tuple(filters))
