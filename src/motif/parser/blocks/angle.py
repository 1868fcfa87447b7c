"""Angle-percent markers: ``<% if %>``, ``<% for %>``, ``<%= %>``, ``<%- %>``."""

from __future__ import annotations

import re

from motif.environment.exceptions import ErrorCode
from motif.nodes import EachBlock, IfBlock, Node
from motif.parser.blocks.core import BlockStackMixin

_IF_RE = re.compile(r"if(?![\w.$@])\s*(.*)", re.S)
_FOR_RE = re.compile(r"for\s+([\w$]+)\s+in\s+(.+)", re.S)
_FOR_WORD_RE = re.compile(r"for(?![\w.$@])")


class AngleParsingMixin(BlockStackMixin):
    """Mixin for parsing ``<% ... %>`` markers.

    Required Host Attributes:
        - All from BlockStackMixin
    """

    def _parse_angle(self, nodes: list[Node]) -> None:
        src = self._source
        start = self._pos
        end = src.find("%>", start + 2)
        if end == -1:
            self._malformed(nodes, ErrorCode.UNCLOSED_TAG, "Unclosed <% tag", "<%", start)
            self._pos = start + 2
            return

        raw = src[start : end + 2]
        inner = src[start + 2 : end]
        self._pos = end + 2

        if inner.startswith("#"):
            return
        if inner.startswith(("=", "-")):
            content = inner[1:].strip()
            if not content:
                self._malformed(nodes, ErrorCode.EMPTY_TAG, f"Empty {raw} tag", raw, start)
                return
            self._append(nodes, self._parse_expression(content, inner[0] == "=", start))
            return

        content = inner.strip()
        if not content:
            self._malformed(nodes, ErrorCode.EMPTY_TAG, f"Empty {raw} tag", raw, start)
            return

        lineno, col = self._location(start)
        match = _IF_RE.fullmatch(content)
        if match:
            condition = match.group(1).replace("(", "").replace(")", "").strip()
            if not condition:
                self._malformed(nodes, ErrorCode.UNKNOWN_BLOCK, f"{raw} has no condition", raw, start)
                return
            self._open_block(
                nodes,
                "endif",
                lambda children: IfBlock(lineno, col, condition, children),
                raw,
                start,
                "<% if %>",
            )
            return

        match = _FOR_RE.fullmatch(content)
        if match:
            alias, target = match.group(1), match.group(2).strip()
            self._open_block(
                nodes,
                "endfor",
                lambda children: EachBlock(lineno, col, target, alias, children),
                raw,
                start,
                "<% for %>",
            )
            return
        if _FOR_WORD_RE.match(content):
            self._malformed(
                nodes, ErrorCode.UNKNOWN_BLOCK, f"Expected <% for item in items %>, got {raw}", raw, start
            )
            return

        self._append(nodes, self._parse_expression(content, True, start))
