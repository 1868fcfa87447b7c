"""Exceptions and error codes for the motif template engine.

Exception Hierarchy:
TemplateError (base)
├── TemplateNotFoundError     # Loader has no source for the name
├── TemplateLoadError         # Loader failed for any other reason
├── TemplateRuntimeError      # Misuse of the rendering API
└── RenderDiagnostic          # Recoverable render problem (internal)

Most template problems never raise. Malformed syntax degrades to literal
text, and missing helpers, partials or components render nothing. Debug mode
turns both into ``Diagnostic`` nodes and ``<!-- motif ... -->`` comments
tagged with the same ``ErrorCode`` values defined here.

Example:
    ```
    M-TPL-001: Template 'home' not found in: views/
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from motif.environment import terminal

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------


class ErrorCode(Enum):
    """Searchable error codes for motif diagnostics.

    Format: M-{CATEGORY}-{NUMBER}
    Categories: PAR (parser), RUN (render), TPL (template loading)
    """

    # Parser diagnostics (M-PAR-xxx)
    UNCLOSED_TAG = "M-PAR-001"
    UNCLOSED_BLOCK = "M-PAR-002"
    STRAY_CLOSE = "M-PAR-003"
    UNKNOWN_BLOCK = "M-PAR-004"
    EMPTY_TAG = "M-PAR-005"
    UNCLOSED_COMPONENT = "M-PAR-006"

    # Render diagnostics (M-RUN-xxx)
    HELPER_NOT_FOUND = "M-RUN-001"
    HELPER_ERROR = "M-RUN-002"
    FILTER_NOT_FOUND = "M-RUN-003"
    FILTER_ERROR = "M-RUN-004"
    DEPTH_EXCEEDED = "M-RUN-005"
    RUNTIME_ERROR = "M-RUN-006"

    # Template loading (M-TPL-xxx)
    TEMPLATE_NOT_FOUND = "M-TPL-001"
    PARTIAL_NOT_FOUND = "M-TPL-002"
    COMPONENT_NOT_FOUND = "M-TPL-003"
    LAYOUT_NOT_FOUND = "M-TPL-004"
    LOAD_ERROR = "M-TPL-005"

    @property
    def category(self) -> str:
        """Error category (e.g., 'parser', 'runtime', 'template')."""
        prefix = self.value.split("-")[1]
        return {
            "PAR": "parser",
            "RUN": "runtime",
            "TPL": "template",
        }.get(prefix, "unknown")


# ---------------------------------------------------------------------------
# Source snippets
# ---------------------------------------------------------------------------


def format_template_stack(stack: list[tuple[str, int]] | None) -> str:
    """Format the partial/component/layout chain for error messages.

    Example:
        >>> print(format_template_stack([("home", 3), ("components/Card", 1)]))
        Template stack:
          • home:3
          • components/Card:1
    """
    if not stack:
        return ""

    lines = [terminal.dim_text("Template stack:")]
    for template_name, line_num in stack:
        location_str = f"{template_name}:{line_num}"
        lines.append(f"  • {terminal.location(location_str)}")
    return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Template source context around a diagnostic line.

    Attributes:
        lines: Tuple of (line_number, line_content) pairs around the error.
        error_line: The 1-based line number of the diagnostic.
        column: Optional column offset for caret pointer.
    """

    lines: tuple[tuple[int, str], ...]
    error_line: int
    column: int | None = None

    def format(self) -> str:
        """Format snippet with line numbers and the offending line highlighted."""
        parts: list[str] = [terminal.dim_text("   |")]
        for lineno, content in self.lines:
            is_error = lineno == self.error_line
            parts.append(terminal.format_source_line(lineno, content, is_error=is_error))
        if self.column is not None:
            caret = " " * self.column + "^"
            parts.append(f"{terminal.dim_text('   |')} {terminal.error_line(caret)}")
        parts.append(terminal.dim_text("   |"))
        return "\n".join(parts)


def build_source_snippet(
    source: str,
    error_line: int,
    *,
    context_lines: int = 2,
    column: int | None = None,
) -> SourceSnippet:
    """Build a SourceSnippet from template source.

    Args:
        source: Full template source text.
        error_line: 1-based line number of the error.
        context_lines: Number of lines to show before/after the error line.
        column: Optional column offset for caret pointer.
    """
    all_lines = source.splitlines()
    start = max(0, error_line - 1 - context_lines)
    end = min(len(all_lines), error_line + context_lines)
    lines = tuple((i + 1, all_lines[i]) for i in range(start, end))
    return SourceSnippet(lines=lines, error_line=error_line, column=column)


class TemplateError(Exception):
    """Base exception for all motif template errors.

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a one-line ``CODE: message`` summary.

        Example:
            >>> TemplateNotFoundError("Template 'home' not found").format_compact()
            "M-TPL-001: Template 'home' not found"
        """
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        return header


class TemplateNotFoundError(TemplateError):
    """Template not found by the configured loader.

    Raised by loaders' ``get_source()`` and by ``Environment.get_template()``.
    Render-time lookups of partials, components and layouts catch it and
    degrade instead.
    """

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND


class TemplateLoadError(TemplateError):
    """Loader failed for a reason other than a missing template."""

    code: ErrorCode | None = ErrorCode.LOAD_ERROR

    def __init__(self, message: str, *, name: str | None = None, filename: str | None = None):
        self.name = name
        self.filename = filename
        super().__init__(message)


class TemplateRuntimeError(TemplateError):
    """Rendering API used in a way that cannot work.

    Output Format:
            ```
            Runtime Error: render() cannot run inside a running event loop
              Location: home
              Suggestion: await env.render_async(...) instead
            ```

    Attributes:
        message: Error description
        template_name: Name of the template being rendered
        suggestion: Actionable fix suggestion
    """

    code: ErrorCode | None = ErrorCode.RUNTIME_ERROR

    def __init__(
        self,
        message: str,
        *,
        template_name: str | None = None,
        suggestion: str | None = None,
    ):
        self.message = message
        self.template_name = template_name
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [f"Runtime Error: {self.message}"]
        if self.template_name:
            parts.append(f"  Location: {terminal.location(self.template_name)}")
        if self.suggestion:
            parts.append(f"\n  {terminal.hint('Suggestion:')} {self.suggestion}")
        return "\n".join(parts)

    def format_compact(self) -> str:
        parts = [
            terminal.format_error_header(self.code.value if self.code else None, self.message)
        ]
        if self.template_name:
            parts.append(f"  Location: {terminal.location(self.template_name)}")
        if self.suggestion:
            parts.append(f"  {terminal.hint('Hint:')} {self.suggestion}")
        return "\n".join(parts)


class RenderDiagnostic(TemplateError):
    """Recoverable render problem, turned into a debug comment.

    Never escapes a render: the node renderer catches it and emits
    ``<!-- motif CODE: message -->`` in debug mode, nothing otherwise.
    """

    def __init__(self, code: ErrorCode, message: str):
        self.code = code
        self.message = message
        super().__init__(f"{code.value}: {message}")
