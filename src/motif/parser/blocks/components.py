"""Capitalized component tags: ``<Card title="Hi">...</Card>`` and ``<Icon/>``."""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import TYPE_CHECKING

from motif.environment.exceptions import ErrorCode
from motif.nodes import Component, Node, Text
from motif.parser.blocks.core import BlockStackMixin

_TAG_NAME_RE = re.compile(r"<([A-Z][\w.]*)")
_WS_RE = re.compile(r"\s*")
_ATTR_RE = re.compile(
    r"""([A-Za-z_@:$][\w:.@$-]*)(?:\s*=\s*("[^"]*"|'[^']*'|\{[^}]*\}|[^\s"'=<>`/]+))?"""
)


def _prop_value(raw: str | None) -> object:
    if raw is None:
        return True
    if raw[0] in "\"'":
        return raw[1:-1]
    if raw[0] == "{":
        return raw[1:-1].strip()
    return raw


class ComponentParsingMixin(BlockStackMixin):
    """Mixin for parsing component tags.

    Inner text is parsed by a child parser sharing the debug flag and line
    numbering, so components nest to any depth.

    Required Host Attributes:
        - All from BlockStackMixin
        - _parse_children: method
    """

    if TYPE_CHECKING:

        def _parse_children(self, inner: str, pos: int) -> list[Node]: ...

    def _scan_open_tag(self, pos: int) -> tuple[str, dict[str, object], bool, int] | None:
        """Scan an opening tag at ``pos``.

        Returns (name, props, self_closing, end) or None when the text at
        ``pos`` is not a well-formed tag.
        """
        src = self._source
        match = _TAG_NAME_RE.match(src, pos)
        if match is None:
            return None
        name = match.group(1)
        props: dict[str, object] = {}
        i = match.end()
        while True:
            ws_end = _WS_RE.match(src, i).end()
            if src.startswith("/>", ws_end):
                return name, props, True, ws_end + 2
            if src.startswith(">", ws_end):
                return name, props, False, ws_end + 1
            if ws_end == i and i == match.end():
                # `<Foo-bar` or `<Foo"`: not a tag
                return None
            attr = _ATTR_RE.match(src, ws_end)
            if attr is None:
                return None
            props[attr.group(1)] = _prop_value(attr.group(2))
            i = attr.end()

    def _find_close(self, name: str, pos: int) -> tuple[int, int] | None:
        """Locate ``</name>`` balancing nested same-name tags."""
        escaped = re.escape(name)
        pattern = re.compile(rf"<{escaped}(?=[\s/>])|</{escaped}\s*>")
        depth = 1
        i = pos
        while True:
            match = pattern.search(self._source, i)
            if match is None:
                return None
            if match.group().startswith("</"):
                depth -= 1
                if depth == 0:
                    return match.start(), match.end()
                i = match.end()
                continue
            tag = self._scan_open_tag(match.start())
            if tag is None:
                i = match.end()
                continue
            if not tag[2]:
                depth += 1
            i = tag[3]

    def _parse_component(self, nodes: list[Node]) -> None:
        start = self._pos
        lineno, col = self._location(start)
        tag = self._scan_open_tag(start)
        if tag is None:
            self._append(nodes, Text(lineno, col, "<"))
            self._pos = start + 1
            return

        name, props, self_closing, open_end = tag
        if self_closing:
            nodes.append(Component(lineno, col, name, MappingProxyType(props)))
            self._pos = open_end
            return

        close = self._find_close(name, open_end)
        if close is None:
            self._malformed(
                nodes,
                ErrorCode.UNCLOSED_COMPONENT,
                f"<{name}> has no closing </{name}>",
                self._source[start:open_end],
                start,
            )
            self._pos = open_end
            return

        children = self._parse_children(self._source[open_end : close[0]], open_end)
        nodes.append(Component(lineno, col, name, MappingProxyType(props), tuple(children)))
        self._pos = close[1]
