"""Parse issues for motif.

The parser never raises on malformed input. It records a ``ParseIssue`` for
each construct it had to degrade, and in debug mode also leaves a
``Diagnostic`` node in the tree where the construct was.
"""

from __future__ import annotations

from dataclasses import dataclass

from motif.environment import terminal
from motif.environment.exceptions import ErrorCode, build_source_snippet


@dataclass(frozen=True, slots=True)
class ParseIssue:
    """A malformed construct found while parsing.

    Attributes:
        code: Error code shared with the matching ``Diagnostic`` node.
        message: Human-readable description.
        lineno: 1-based line of the construct in the original source.
        col_offset: 0-based column of the construct.
        source: Literal text the construct degraded to.
    """

    code: ErrorCode
    message: str
    lineno: int
    col_offset: int
    source: str = ""

    def format(self, template_source: str | None = None, name: str | None = None) -> str:
        """Format like a compiler diagnostic, with a snippet when source is given.

        Example:
            ```
            M-PAR-002: Unclosed {{#if}} block
              --> home.html:3:0
               |
            >  3 | {{#if user}}
               |    ^
               |
            ```
        """
        location = f"{name or '<template>'}:{self.lineno}:{self.col_offset}"
        parts = [
            terminal.format_error_header(self.code.value, self.message),
            f"  --> {terminal.location(location)}",
        ]
        if template_source:
            snippet = build_source_snippet(
                template_source, self.lineno, context_lines=1, column=self.col_offset
            )
            parts.append(snippet.format())
        return "\n".join(parts)
