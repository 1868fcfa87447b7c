"""Mustache-style markers: ``{{ }}``, ``{{{ }}}``, blocks, partials, comments."""

from __future__ import annotations

import re
from types import MappingProxyType

from motif.environment.exceptions import ErrorCode
from motif.nodes import EachBlock, IfBlock, Node, Partial
from motif.parser.blocks.core import BlockStackMixin
from motif.parser.tokens import tokenize, unquote

_WS_RE = re.compile(r"\s+")


class MustacheParsingMixin(BlockStackMixin):
    """Mixin for parsing ``{{ ... }}`` markers.

    Required Host Attributes:
        - All from BlockStackMixin
    """

    def _parse_mustache(self, nodes: list[Node]) -> None:
        src = self._source
        start = self._pos

        if src.startswith("{{!--", start):
            end = src.find("--}}", start + 5)
            if end == -1:
                self._malformed(nodes, ErrorCode.UNCLOSED_TAG, "Unclosed {{!-- comment", "{{!--", start)
                self._pos = start + 5
            else:
                self._pos = end + 4
            return

        triple = src.startswith("{{{", start)
        opener, closer = ("{{{", "}}}") if triple else ("{{", "}}")
        end = src.find(closer, start + len(opener))
        if end == -1:
            self._malformed(nodes, ErrorCode.UNCLOSED_TAG, f"Unclosed {opener} tag", opener, start)
            self._pos = start + len(opener)
            return

        raw = src[start : end + len(closer)]
        content = src[start + len(opener) : end].strip()
        self._pos = end + len(closer)

        if not content:
            self._malformed(nodes, ErrorCode.EMPTY_TAG, f"Empty {raw} tag", raw, start)
            return
        if content.startswith("!"):
            return

        # Blocks and partials read the same with a third brace; it only
        # changes escaping of output tags.
        lead = content[0]
        if lead == "#":
            self._parse_mustache_block(nodes, content[1:].strip(), raw, start)
        elif lead == ">":
            self._parse_partial(nodes, content[1:].strip(), raw, start)
        elif triple:
            self._append(nodes, self._parse_expression(content, False, start))
        elif lead == "/":
            self._malformed(nodes, ErrorCode.STRAY_CLOSE, f"{raw} without an open block", raw, start)
        else:
            self._append(nodes, self._parse_expression(content, True, start))

    def _parse_mustache_block(self, nodes: list[Node], body: str, raw: str, start: int) -> None:
        """Parse ``{{#if cond}}`` / ``{{#each items as item}}``."""
        command, *rest = _WS_RE.split(body, maxsplit=1)
        argument = rest[0].strip() if rest else ""
        lineno, col = self._location(start)

        if command == "if" and argument:
            self._open_block(
                nodes,
                "/if",
                lambda children: IfBlock(lineno, col, argument, children),
                raw,
                start,
                "{{#if}}",
            )
            return

        if command == "each" and argument:
            parts = argument.split()
            target = parts[0]
            alias = "item"
            # `as item` and the Handlebars `as |item|` spelling
            if len(parts) >= 3 and parts[1] == "as":
                alias = parts[2].strip("|") or alias
            self._open_block(
                nodes,
                "/each",
                lambda children: EachBlock(lineno, col, target, alias, children),
                raw,
                start,
                "{{#each}}",
            )
            return

        self._malformed(nodes, ErrorCode.UNKNOWN_BLOCK, f"Unknown block {raw}", raw, start)

    def _parse_partial(self, nodes: list[Node], body: str, raw: str, start: int) -> None:
        """Parse ``{{> name key=value ...}}``; props stay raw tokens."""
        tokens = tokenize(body)
        if not tokens:
            self._malformed(nodes, ErrorCode.EMPTY_TAG, f"Partial tag {raw} has no name", raw, start)
            return
        props: dict[str, str] = {}
        for token in tokens[1:]:
            key, sep, value = token.partition("=")
            if sep and key:
                props[key] = value
        lineno, col = self._location(start)
        nodes.append(Partial(lineno, col, unquote(tokens[0]), MappingProxyType(props)))
