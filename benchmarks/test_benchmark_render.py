"""Template rendering benchmarks: motif vs Jinja2 (in-memory templates).

Template sizes:
- "minimal": Single variable
- "small": Loop over 5 escaped string items
- "large": 1000 loop items with a filter per row
- "page": Frontmatter layout with a partial and a component

Run with: pytest benchmarks/test_benchmark_render.py --benchmark-only
Compare: pytest benchmarks/test_benchmark_render.py --benchmark-compare
"""

from __future__ import annotations

import pytest
from jinja2 import Environment as Jinja2Environment
from pytest_benchmark.fixture import BenchmarkFixture

from motif import Environment as MotifEnvironment


@pytest.mark.parametrize(
    ("motif_name", "jinja2_name", "context_fixture"),
    [
        ("minimal", "minimal.html", "minimal_context"),
        ("small", "small.html", "small_context"),
        ("large", "large.html", "large_context"),
        ("page", "page.html", "page_context"),
    ],
)
def test_outputs_match(
    request: pytest.FixtureRequest,
    motif_env: MotifEnvironment,
    jinja2_env: Jinja2Environment,
    motif_name: str,
    jinja2_name: str,
    context_fixture: str,
) -> None:
    """Timings are only comparable when both engines produce the same page."""
    context = request.getfixturevalue(context_fixture)
    expected = jinja2_env.get_template(jinja2_name).render(**context)
    assert motif_env.get_template(motif_name).render(**context) == expected


@pytest.mark.benchmark(group="render:minimal")
def test_render_minimal_motif(
    benchmark: BenchmarkFixture,
    motif_env: MotifEnvironment,
    minimal_context: dict[str, object],
) -> None:
    template = motif_env.get_template("minimal")
    benchmark(template.render, **minimal_context)


@pytest.mark.benchmark(group="render:minimal")
def test_render_minimal_jinja2(
    benchmark: BenchmarkFixture,
    jinja2_env: Jinja2Environment,
    minimal_context: dict[str, object],
) -> None:
    template = jinja2_env.get_template("minimal.html")
    benchmark(template.render, **minimal_context)


@pytest.mark.benchmark(group="render:small")
def test_render_small_motif(
    benchmark: BenchmarkFixture,
    motif_env: MotifEnvironment,
    small_context: dict[str, object],
) -> None:
    template = motif_env.get_template("small")
    benchmark(template.render, **small_context)


@pytest.mark.benchmark(group="render:small")
def test_render_small_jinja2(
    benchmark: BenchmarkFixture,
    jinja2_env: Jinja2Environment,
    small_context: dict[str, object],
) -> None:
    template = jinja2_env.get_template("small.html")
    benchmark(template.render, **small_context)


@pytest.mark.benchmark(group="render:large")
def test_render_large_motif(
    benchmark: BenchmarkFixture,
    motif_env: MotifEnvironment,
    large_context: dict[str, object],
) -> None:
    template = motif_env.get_template("large")
    benchmark(template.render, **large_context)


@pytest.mark.benchmark(group="render:large")
def test_render_large_jinja2(
    benchmark: BenchmarkFixture,
    jinja2_env: Jinja2Environment,
    large_context: dict[str, object],
) -> None:
    template = jinja2_env.get_template("large.html")
    benchmark(template.render, **large_context)


@pytest.mark.benchmark(group="render:page")
def test_render_page_motif(
    benchmark: BenchmarkFixture,
    motif_env: MotifEnvironment,
    page_context: dict[str, object],
) -> None:
    """Layout, partial and component all come from the warm cache."""
    template = motif_env.get_template("page")
    benchmark(template.render, **page_context)


@pytest.mark.benchmark(group="render:page")
def test_render_page_jinja2(
    benchmark: BenchmarkFixture,
    jinja2_env: Jinja2Environment,
    page_context: dict[str, object],
) -> None:
    template = jinja2_env.get_template("page.html")
    benchmark(template.render, **page_context)


# =============================================================================
# Parsing
# =============================================================================


@pytest.mark.benchmark(group="parse:large")
def test_parse_large_motif(benchmark: BenchmarkFixture, motif_env: MotifEnvironment) -> None:
    source = motif_env.loader.get_source("large")[0]
    benchmark(motif_env.parse, source)


@pytest.mark.benchmark(group="parse:large")
def test_parse_large_jinja2(benchmark: BenchmarkFixture, jinja2_env: Jinja2Environment) -> None:
    source = jinja2_env.loader.get_source(jinja2_env, "large.html")[0]
    benchmark(jinja2_env.from_string, source)
