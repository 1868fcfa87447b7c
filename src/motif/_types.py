"""Shared value types for motif: template kinds and parse results."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from motif.nodes import Node


class TemplateKind(Enum):
    """What a template name refers to; each kind has its own base directory."""

    TEMPLATE = "template"
    PARTIAL = "partial"
    COMPONENT = "component"
    LAYOUT = "layout"

    @classmethod
    def coerce(cls, value: TemplateKind | str) -> TemplateKind:
        if isinstance(value, cls):
            return value
        return cls(str(value).lower())


@dataclass(frozen=True, slots=True)
class TemplateMetadata:
    """Facts about one template gathered while parsing it.

    Attributes:
        dependencies: Every partial, component and layout name referenced,
            in first-seen order.
        components: Component tag names used anywhere in the tree.
        partials: Partial names used anywhere in the tree.
        layout: Layout named by the frontmatter, if any.
        frontmatter: All frontmatter keys with coerced values.
    """

    dependencies: tuple[str, ...] = ()
    components: tuple[str, ...] = ()
    partials: tuple[str, ...] = ()
    layout: str | None = None
    frontmatter: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Node tree plus metadata for one template source.

    Holds its nodes by value and refers to other templates only by name, so
    one result can be shared by any number of concurrent renders.
    """

    nodes: tuple[Node, ...]
    metadata: TemplateMetadata = field(default_factory=TemplateMetadata)
    name: str | None = None
    filename: str | None = None
