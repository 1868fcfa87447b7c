"""Helpers for testing and measuring templates.

These run a template in debug mode and report problems as data instead of
raising, which makes them convenient in test suites and editor tooling.

Example:
    >>> result = render_for_test("<p>{{ missing_helper 'x' }}</p>")
    >>> result.html
    "<p><!-- motif M-RUN-001: Helper 'missing_helper' not found --></p>"
    >>> result.errors
    ["M-RUN-001: Helper 'missing_helper' not found"]
"""

from __future__ import annotations

import asyncio
import re
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from motif._types import ParseResult, TemplateMetadata
from motif.environment import Environment, TemplateError
from motif.parser import Parser

_DIAGNOSTIC_RE = re.compile(r"<!-- motif (M-[A-Z]+-\d+): (.*?) -->", re.S)


@dataclass(frozen=True, slots=True)
class RenderResult:
    """Output of ``render_for_test``.

    Attributes:
        html: Rendered output, diagnostic comments included
        errors: ``CODE: message`` for every problem, in document order
        metadata: Metadata of the parsed template
    """

    html: str
    errors: list[str] = field(default_factory=list)
    metadata: TemplateMetadata = field(default_factory=TemplateMetadata)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True, slots=True)
class SyntaxReport:
    """Outcome of ``validate_syntax``; ``issues`` are formatted with snippets."""

    valid: bool
    issues: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class BenchmarkResult:
    """Timing of repeated renders. Times are in milliseconds."""

    iterations: int
    total_time: float
    average_time: float
    iterations_per_second: float


def _diagnostics(html: str) -> list[str]:
    return [f"{code}: {message}" for code, message in _DIAGNOSTIC_RE.findall(html)]


def render_for_test(
    source: str,
    context: Mapping[str, Any] | None = None,
    **env_kwargs: Any,
) -> RenderResult:
    """Parse and render ``source`` in debug mode without raising.

    ``env_kwargs`` are passed to ``Environment`` (loader, helpers, ...).
    Diagnostics from parsing and rendering are collected into ``errors``.
    A failure that would raise, such as a loader error, is reported the same
    way with empty ``html``.
    """
    env_kwargs["debug"] = True
    env = Environment(**env_kwargs)
    try:
        result = env.parse(source)
        html = env.render(result, context)
    except TemplateError as exc:
        return RenderResult(html="", errors=[exc.format_compact()])
    return RenderResult(html=html, errors=_diagnostics(html), metadata=result.metadata)


def validate_syntax(source: str, name: str | None = None) -> SyntaxReport:
    """Check ``source`` for malformed tags and blocks without rendering it."""
    parser = Parser(source, name=name, debug=True)
    parser.parse()
    issues = [issue.format(source, name) for issue in parser.issues]
    return SyntaxReport(valid=not issues, issues=issues)


def benchmark_template(
    source: str | ParseResult,
    context: Mapping[str, Any] | None = None,
    iterations: int = 1000,
    env: Environment | None = None,
) -> BenchmarkResult:
    """Render a template ``iterations`` times and report the timing.

    The template is parsed once; only rendering is measured.
    """
    if iterations < 1:
        raise ValueError("iterations must be at least 1")
    env = env or Environment()
    result = env.parse(source) if isinstance(source, str) else source

    async def run() -> float:
        start = time.perf_counter()
        for _ in range(iterations):
            await env.render_async(result, context)
        return time.perf_counter() - start

    total_ms = asyncio.run(run()) * 1000
    average = total_ms / iterations
    return BenchmarkResult(
        iterations=iterations,
        total_time=total_ms,
        average_time=average,
        iterations_per_second=1000 / average if average else float("inf"),
    )


def compare_templates(
    sources: Mapping[str, str | ParseResult],
    context: Mapping[str, Any] | None = None,
    iterations: int = 100,
    env: Environment | None = None,
) -> list[tuple[str, BenchmarkResult]]:
    """Benchmark several templates on the same context, fastest first."""
    timings = [
        (label, benchmark_template(source, context, iterations, env))
        for label, source in sources.items()
    ]
    return sorted(timings, key=lambda item: item[1].average_time)
