"""Template parsing: source text to an immutable ``ParseResult``."""

from __future__ import annotations

from motif.parser.core import Parser, collect_metadata, parse
from motif.parser.errors import ParseIssue
from motif.parser.frontmatter import coerce_value, split_frontmatter

__all__ = [
    "ParseIssue",
    "Parser",
    "coerce_value",
    "collect_metadata",
    "parse",
    "split_frontmatter",
]
