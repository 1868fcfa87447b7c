"""Template object and render-time value resolution."""

from motif.template.resolver import (
    UNDEFINED,
    Fragment,
    is_absent,
    is_sequence,
    is_truthy,
    resolve_path,
    stringify,
)
from motif.template.core import Template

__all__ = [
    "UNDEFINED",
    "Fragment",
    "Template",
    "is_absent",
    "is_sequence",
    "is_truthy",
    "resolve_path",
    "stringify",
]
