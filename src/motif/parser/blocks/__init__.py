"""Parsing mixins, one per marker family.

- core: block stack, text merging, degradation, expression classification
- mustache: ``{{ }}`` and ``{{{ }}}`` markers
- angle: ``<% %>`` markers
- components: capitalized component tags
"""

from __future__ import annotations

from motif.parser.blocks.angle import AngleParsingMixin
from motif.parser.blocks.components import ComponentParsingMixin
from motif.parser.blocks.core import BlockStackMixin
from motif.parser.blocks.mustache import MustacheParsingMixin

__all__ = [
    "AngleParsingMixin",
    "BlockStackMixin",
    "ComponentParsingMixin",
    "MustacheParsingMixin",
]
