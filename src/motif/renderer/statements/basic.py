"""Output rendering: text, variables, helper calls, filters and diagnostics.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import AsyncIterator, Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from motif.environment.exceptions import ErrorCode, RenderDiagnostic, format_template_stack
from motif.nodes import Diagnostic, FilterCall, Helper, Node, Variable
from motif.parser.tokens import FLOAT_RE, IDENT_RE, INT_RE, is_quoted
from motif.render_context import RenderContext, reset_render_context, set_render_context
from motif.template.resolver import UNDEFINED, Fragment, resolve_path, stringify
from motif.utils.html import html_escape

if TYPE_CHECKING:
    from motif.environment.core import Environment

logger = logging.getLogger(__name__)

_LITERALS: dict[str, Any] = {"true": True, "false": False, "null": None, "none": None}


def _comment_safe(text: str) -> str:
    return text.replace("--", "- -")


class BasicRenderingMixin:
    """Mixin for rendering output nodes.

    Host attributes and cross-mixin dependencies are declared via inline
    TYPE_CHECKING blocks.
    """

    # ─────────────────────────────────────────────────────────────────────────
    # Host attributes and cross-mixin dependencies (type-check only)
    # ─────────────────────────────────────────────────────────────────────────
    if TYPE_CHECKING:
        _env: Environment
        _state: RenderContext

        def render(self, nodes: Sequence[Node], context: Any) -> AsyncIterator[str]: ...

    def _diagnostic(self, code: ErrorCode, message: str) -> str:
        """Diagnostic comment in debug mode, nothing otherwise."""
        if not self._state.debug:
            return ""
        return f"<!-- motif {code.value}: {_comment_safe(message)} -->"

    def _resolve_arg(self, token: str, context: Mapping[str, Any]) -> Any:
        """Resolve one raw argument token.

        Quoted tokens are literal strings and numeric tokens numbers.
        Identifier-shaped tokens are looked up in the context; when unresolved,
        ``true``/``false``/``null`` read as literals and anything else as None.
        Other tokens pass through unchanged.
        """
        if is_quoted(token):
            return token[1:-1]
        if INT_RE.fullmatch(token):
            return int(token)
        if FLOAT_RE.fullmatch(token):
            return float(token)
        if IDENT_RE.fullmatch(token):
            value = resolve_path(context, token)
            if value is UNDEFINED:
                return _LITERALS.get(token)
            return value
        return token

    async def _call(self, fn: Callable[..., Any], *args: Any) -> Any:
        """Invoke a helper or filter with the render context installed."""
        token = set_render_context(self._state)
        try:
            result = fn(*args)
            if inspect.isawaitable(result):
                result = await result
        finally:
            reset_render_context(token)
        return result

    def _trace(self) -> str:
        """The partial/component/layout chain that led here, for debug logs."""
        stack = format_template_stack(self._state.template_stack)
        return f"\n{stack}" if stack else ""

    def _failure(self, code: ErrorCode, what: str, exc: Exception) -> RenderDiagnostic:
        message = f"{what} raised {type(exc).__name__}: {exc}"
        if self._state.debug:
            logger.warning(
                "%s (in %s)%s", message, self._state.template_name or "<template>", self._trace(), exc_info=exc
            )
        return RenderDiagnostic(code, message)

    async def _apply_filters(
        self, value: Any, filters: Sequence[FilterCall], context: Mapping[str, Any]
    ) -> Any:
        for stage in filters:
            fn = self._env.lookup_filter(stage.name)
            if fn is None:
                raise RenderDiagnostic(ErrorCode.FILTER_NOT_FOUND, f"Filter '{stage.name}' not found")
            args = [self._resolve_arg(token, context) for token in stage.args]
            try:
                value = await self._call(fn, value, *args)
            except Exception as exc:
                raise self._failure(ErrorCode.FILTER_ERROR, f"Filter '{stage.name}'", exc) from exc
        return value

    async def _evaluate(self, node: Variable | Helper, context: Mapping[str, Any]) -> Any:
        """Value of an output node before escaping.

        Raises:
            RenderDiagnostic: unknown helper or filter, or one of them raised
        """
        if isinstance(node, Variable):
            value = resolve_path(context, node.path)
        else:
            fn = self._env.lookup(node.name)
            if fn is None:
                raise RenderDiagnostic(ErrorCode.HELPER_NOT_FOUND, f"Helper '{node.name}' not found")
            args = [self._resolve_arg(token, context) for token in node.args]
            try:
                value = await self._call(fn, *args)
            except Exception as exc:
                raise self._failure(ErrorCode.HELPER_ERROR, f"Helper '{node.name}'", exc) from exc
        if node.filters:
            value = await self._apply_filters(value, node.filters, context)
        return value

    async def _render_output(self, node: Variable | Helper, context: Mapping[str, Any]) -> AsyncIterator[str]:
        try:
            value = await self._evaluate(node, context)
        except RenderDiagnostic as issue:
            comment = self._diagnostic(issue.code, issue.message)
            if comment:
                yield comment
            return

        if isinstance(value, Fragment):
            async for chunk in self.render(value.nodes, value.context):
                yield chunk
            return

        text = html_escape(value if hasattr(value, "__html__") else stringify(value)) if node.escape else stringify(value)
        if text:
            yield text

    def _render_diagnostic(self, node: Diagnostic) -> str:
        return f"<!-- motif {node.code}: {_comment_safe(node.message)} -->"
