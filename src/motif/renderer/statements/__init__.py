"""Node rendering for the motif Renderer.

Provides mixins for rendering each kind of node.

The statements package is organized into logical modules:
- basic: Output (text, variables, helper calls, filters, diagnostics)
- control_flow: Conditionals and loops
- template_structure: Partials, components with slots, layouts

Uses inline TYPE_CHECKING declarations for host attributes.

"""

from __future__ import annotations

from motif.renderer.statements.basic import BasicRenderingMixin
from motif.renderer.statements.control_flow import ControlFlowMixin
from motif.renderer.statements.template_structure import TemplateStructureMixin, collect_slots


class StatementRenderingMixin(
    BasicRenderingMixin,
    ControlFlowMixin,
    TemplateStructureMixin,
):
    """Combined mixin for rendering all node types.

    Host attributes and cross-mixin dependencies are declared via inline
    TYPE_CHECKING blocks in each individual mixin.

    """


__all__ = [
    "BasicRenderingMixin",
    "ControlFlowMixin",
    "StatementRenderingMixin",
    "TemplateStructureMixin",
    "collect_slots",
]
