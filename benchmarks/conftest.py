"""Shared fixtures for motif vs Jinja2 benchmarks.

Both engines load the same pages from memory so that file I/O never shows
up in the numbers. Every motif template has a Jinja2 twin that renders
byte-identical output (see test_outputs_match in test_benchmark_render.py).
"""

from __future__ import annotations

import platform
import sys

import pytest
from jinja2 import DictLoader as Jinja2DictLoader
from jinja2 import Environment as Jinja2Environment

from motif import DictLoader as MotifDictLoader
from motif import Environment as MotifEnvironment

MOTIF_TEMPLATES = {
    "minimal": "Hello, {{ name }}!",
    "small": "<h1>{{ title }}</h1><ul>{{#each items}}<li>{{ this }}</li>{{/each}}</ul>",
    "large": (
        "<table>{{#each rows as |row|}}"
        "<tr><td>{{ row.id }}</td><td>{{ row.name | upper }}</td></tr>"
        "{{/each}}</table>"
    ),
    "page": "---\nlayout: base\ntitle: Page\n---\n<p>{{ body }}</p><Card/>",
}
MOTIF_PARTIALS = {
    "nav": '<nav>{{#each links}}<a href="{{ href }}">{{ label }}</a>{{/each}}</nav>',
}
MOTIF_COMPONENTS = {
    "Card": '<div class="card">{{ body }}</div>',
}
MOTIF_LAYOUTS = {
    "base": "<html><title>{{ title }}</title><body>{{> nav}}{{{ content }}}</body></html>",
}

JINJA2_TEMPLATES = {
    "minimal.html": "Hello, {{ name }}!",
    "small.html": "<h1>{{ title }}</h1><ul>{% for item in items %}<li>{{ item }}</li>{% endfor %}</ul>",
    "large.html": (
        "<table>{% for row in rows %}"
        "<tr><td>{{ row.id }}</td><td>{{ row.name | upper }}</td></tr>"
        "{% endfor %}</table>"
    ),
    "nav.html": '<nav>{% for link in links %}<a href="{{ link.href }}">{{ link.label }}</a>{% endfor %}</nav>',
    "card.html": '<div class="card">{{ body }}</div>',
    "base.html": (
        "<html><title>{% block title %}{% endblock %}</title>"
        "<body>{% include 'nav.html' %}{% block content %}{% endblock %}</body></html>"
    ),
    "page.html": (
        "{% extends 'base.html' %}{% block title %}Page{% endblock %}"
        "{% block content %}<p>{{ body }}</p>{% include 'card.html' %}{% endblock %}"
    ),
}

MINIMAL_CONTEXT: dict[str, object] = {"name": "Benchmark"}
SMALL_CONTEXT: dict[str, object] = {
    "title": "Fruit & Veg",
    "items": ["apple", "banana", "<cherry>", "damson", "elderberry"],
}
LARGE_CONTEXT: dict[str, object] = {
    "rows": [{"id": i, "name": f"row {i}"} for i in range(1000)],
}
PAGE_CONTEXT: dict[str, object] = {
    "body": "Welcome back",
    "links": [{"href": f"/section/{i}", "label": f"Section {i}"} for i in range(8)],
}


def pytest_benchmark_update_machine_info(config: pytest.Config, machine_info: dict[str, object]) -> None:
    import jinja2

    machine_info["python"] = sys.version.split()[0]
    machine_info["implementation"] = platform.python_implementation()
    machine_info["jinja2"] = jinja2.__version__


@pytest.fixture(scope="session")
def motif_env() -> MotifEnvironment:
    loader = MotifDictLoader(
        MOTIF_TEMPLATES,
        partials=MOTIF_PARTIALS,
        components=MOTIF_COMPONENTS,
        layouts=MOTIF_LAYOUTS,
    )
    # Warm cache so repeated renders measure rendering, not parsing.
    return MotifEnvironment(loader=loader, cache=True)


@pytest.fixture(scope="session")
def jinja2_env() -> Jinja2Environment:
    return Jinja2Environment(loader=Jinja2DictLoader(JINJA2_TEMPLATES), autoescape=True)


@pytest.fixture(scope="session")
def minimal_context() -> dict[str, object]:
    return MINIMAL_CONTEXT


@pytest.fixture(scope="session")
def small_context() -> dict[str, object]:
    return SMALL_CONTEXT


@pytest.fixture(scope="session")
def large_context() -> dict[str, object]:
    return LARGE_CONTEXT


@pytest.fixture(scope="session")
def page_context() -> dict[str, object]:
    return PAGE_CONTEXT
