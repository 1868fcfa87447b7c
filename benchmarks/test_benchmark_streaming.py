"""Streaming render benchmarks: buffered render vs chunk streaming.

Compares render() with consuming render_stream_async() and with writing to
a sink through stream_to(). Includes Jinja2 generate() for the same page,
plus time-to-first-chunk for motif.

Run with: pytest benchmarks/test_benchmark_streaming.py --benchmark-only -v
"""

from __future__ import annotations

import asyncio
import io
import time

import pytest
from jinja2 import Environment as Jinja2Environment
from pytest_benchmark.fixture import BenchmarkFixture

from motif import Environment as MotifEnvironment
from motif import Template


async def _consume(template: Template, context: dict[str, object]) -> str:
    return "".join([chunk async for chunk in template.render_stream_async(**context)])


async def _first_chunk_ns(template: Template, context: dict[str, object]) -> int:
    stream = template.render_stream_async(**context)
    start = time.perf_counter_ns()
    await anext(stream)
    elapsed = time.perf_counter_ns() - start
    await stream.aclose()
    return elapsed


@pytest.mark.benchmark(group="streaming:large")
def test_render_large_motif(
    benchmark: BenchmarkFixture,
    motif_env: MotifEnvironment,
    large_context: dict[str, object],
) -> None:
    template = motif_env.get_template("large")
    benchmark(template.render, **large_context)


@pytest.mark.benchmark(group="streaming:large")
def test_stream_large_motif(
    benchmark: BenchmarkFixture,
    motif_env: MotifEnvironment,
    large_context: dict[str, object],
) -> None:
    """motif: render_stream_async() full consume."""
    template = motif_env.get_template("large")
    benchmark(lambda: asyncio.run(_consume(template, large_context)))


@pytest.mark.benchmark(group="streaming:large")
def test_stream_to_sink_large_motif(
    benchmark: BenchmarkFixture,
    motif_env: MotifEnvironment,
    large_context: dict[str, object],
) -> None:
    """motif: stream_to() an in-memory text sink."""
    template = motif_env.get_template("large")

    def run() -> str:
        sink = io.StringIO()
        asyncio.run(template.stream_to(sink, **large_context))
        return sink.getvalue()

    benchmark(run)


@pytest.mark.benchmark(group="streaming:large")
def test_generate_large_jinja2(
    benchmark: BenchmarkFixture,
    jinja2_env: Jinja2Environment,
    large_context: dict[str, object],
) -> None:
    """Jinja2: generate() full consume."""
    template = jinja2_env.get_template("large.html")
    benchmark(lambda: "".join(template.generate(**large_context)))


@pytest.mark.benchmark(group="streaming:time-to-first-chunk")
def test_time_to_first_chunk_page_motif(
    benchmark: BenchmarkFixture,
    motif_env: MotifEnvironment,
    page_context: dict[str, object],
) -> None:
    template = motif_env.get_template("page")
    benchmark(lambda: asyncio.run(_first_chunk_ns(template, page_context)))
