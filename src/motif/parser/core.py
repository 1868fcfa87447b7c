"""Recursive-descent parser for motif templates.

Scans left to right without a declared syntax mode. Three marker families are
recognised wherever they appear:

- ``{{ }}`` / ``{{{ }}}``: variables, helper calls, ``#if``/``#each`` blocks,
  ``>partial`` includes and ``!`` comments
- ``<% %>``: ``if``/``for`` blocks, ``=`` escaped and ``-`` raw output,
  ``#`` comments
- ``<Name ...>``: capitalized component tags

Everything else is literal text. Parsing never raises: malformed markers
degrade to literal text (or ``Diagnostic`` nodes in debug mode) and are
recorded in ``Parser.issues``.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from motif._types import ParseResult, TemplateMetadata
from motif.environment.exceptions import ErrorCode
from motif.nodes import Component, EachBlock, IfBlock, Layout, Node, Partial, Text
from motif.nodes.structure import SLOT_TAG
from motif.parser.blocks import AngleParsingMixin, ComponentParsingMixin, MustacheParsingMixin
from motif.parser.errors import ParseIssue
from motif.parser.frontmatter import split_frontmatter

_MARKER_RE = re.compile(r"\{\{|<%|<[A-Z]")
_CLOSE_RE = re.compile(r"\{\{\s*/\s*([\w-]*)\s*\}\}|<%\s*(endif|endfor)\s*%>")


class Parser(MustacheParsingMixin, AngleParsingMixin, ComponentParsingMixin):
    """Parse one template source into a ``ParseResult``.

    Example:
        >>> result = Parser("---\\nlayout: base\\n---\\n<h1>{{ title }}</h1>").parse()
        >>> result.metadata.layout
        'base'
        >>> result.nodes[1]
        Variable(lineno=4, col_offset=4, path='title', escape=True, filters=())

    Args:
        source: Template text, optionally starting with a frontmatter block.
        name: Template name for diagnostics.
        filename: Source path for diagnostics.
        debug: Emit ``Diagnostic`` nodes instead of literal text for
            malformed constructs.
        frontmatter: Strip and parse a leading ``---`` block. Disabled for
            component bodies.
    """

    def __init__(
        self,
        source: str,
        *,
        name: str | None = None,
        filename: str | None = None,
        debug: bool = False,
        frontmatter: bool = True,
        line_offset: int = 0,
        col_offset: int = 0,
    ):
        self._raw = source
        self._name = name
        self._filename = filename
        self._debug = debug
        self._frontmatter = frontmatter
        self._base_line_offset = line_offset
        self._line_offset = line_offset
        self._first_col = col_offset
        self._source = source
        self._pos = 0
        self._line_starts: list[int] = [0]
        self._stack: list[str] = []
        self._issues: list[ParseIssue] = []

    @property
    def issues(self) -> tuple[ParseIssue, ...]:
        """Malformed constructs found by the last ``parse()``."""
        return tuple(self._issues)

    def parse(self) -> ParseResult:
        frontmatter: dict[str, Any] = {}
        body = self._raw
        self._line_offset = self._base_line_offset
        if self._frontmatter:
            body, frontmatter, consumed = split_frontmatter(self._raw)
            self._line_offset += consumed
        nodes = self._parse_source(body)

        layout = frontmatter.get("layout")
        return ParseResult(
            nodes=tuple(nodes),
            metadata=collect_metadata(
                nodes,
                frontmatter,
                layout=layout if isinstance(layout, str) and layout else None,
            ),
            name=self._name,
            filename=self._filename,
        )

    def _parse_source(self, body: str) -> list[Node]:
        self._source = body
        self._pos = 0
        self._stack = []
        self._issues = []
        self._line_starts = [0, *(m.end() for m in re.finditer(r"\n", body))]
        nodes, _ = self._parse_body()
        return nodes

    def _location(self, pos: int) -> tuple[int, int]:
        """1-based line and 0-based column of ``pos`` in the original file."""
        index = bisect_right(self._line_starts, pos)
        col = pos - self._line_starts[index - 1]
        if index == 1:
            col += self._first_col
        return index + self._line_offset, col

    def _parse_body(self, close: str | None = None) -> tuple[list[Node], bool]:
        """Parse nodes until ``close``, an enclosing block's close, or EOF.

        Returns the nodes and whether ``close`` was found and consumed.
        """
        src = self._source
        nodes: list[Node] = []
        while self._pos < len(src):
            match = _MARKER_RE.search(src, self._pos)
            if match is None:
                self._append(nodes, Text(*self._location(self._pos), src[self._pos :]))
                self._pos = len(src)
                break
            if match.start() > self._pos:
                self._append(nodes, Text(*self._location(self._pos), src[self._pos : match.start()]))
                self._pos = match.start()

            closing = _CLOSE_RE.match(src, self._pos)
            if closing is not None:
                key = f"/{closing.group(1)}" if closing.group(2) is None else closing.group(2)
                if key == close:
                    self._pos = closing.end()
                    return nodes, True
                if key in self._stack:
                    return nodes, False
                self._malformed(
                    nodes,
                    ErrorCode.STRAY_CLOSE,
                    f"{closing.group()} without an open block",
                    closing.group(),
                    self._pos,
                )
                self._pos = closing.end()
                continue

            marker = match.group()
            if marker == "{{":
                self._parse_mustache(nodes)
            elif marker == "<%":
                self._parse_angle(nodes)
            else:
                self._parse_component(nodes)
        return nodes, close is None

    def _parse_children(self, inner: str, pos: int) -> list[Node]:
        lineno, col = self._location(pos)
        child = Parser(
            inner,
            name=self._name,
            filename=self._filename,
            debug=self._debug,
            frontmatter=False,
            line_offset=lineno - 1,
            col_offset=col,
        )
        nodes = child._parse_source(inner)
        self._issues.extend(child._issues)
        return nodes


def _walk(nodes: Iterable[Node]) -> Iterable[Node]:
    for node in nodes:
        yield node
        if isinstance(node, (IfBlock, EachBlock, Component, Layout)):
            yield from _walk(node.children)


def collect_metadata(
    nodes: Iterable[Node],
    frontmatter: Mapping[str, Any],
    *,
    layout: str | None = None,
) -> TemplateMetadata:
    """Gather component, partial and layout references from a node tree."""
    components: dict[str, None] = {}
    partials: dict[str, None] = {}
    dependencies: dict[str, None] = {}
    for node in _walk(nodes):
        if isinstance(node, Component) and node.name != SLOT_TAG:
            components[node.name] = None
            dependencies[node.name] = None
        elif isinstance(node, Partial):
            partials[node.name] = None
            dependencies[node.name] = None
    if layout:
        dependencies[layout] = None
    return TemplateMetadata(
        dependencies=tuple(dependencies),
        components=tuple(components),
        partials=tuple(partials),
        layout=layout,
        frontmatter=MappingProxyType(dict(frontmatter)),
    )


def parse(source: str, *, name: str | None = None, debug: bool = False) -> ParseResult:
    """Parse ``source`` with a fresh ``Parser``."""
    return Parser(source, name=name, debug=debug).parse()
