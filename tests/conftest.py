"""Pytest configuration and fixtures for motif tests."""

import pytest

from motif import DictLoader, Environment


@pytest.fixture(autouse=True)
def _no_color(monkeypatch):
    """Plain diagnostics regardless of the terminal running the tests."""
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")


@pytest.fixture
def env():
    """Environment with an empty in-memory loader."""
    return Environment(loader=DictLoader())


@pytest.fixture
def debug_env():
    """Environment in debug mode with an empty in-memory loader."""
    return Environment(loader=DictLoader(), debug=True)


@pytest.fixture
def site_loader():
    """A small site: pages, partials, components and layouts."""
    return DictLoader(
        {
            "home": "---\nlayout: base\ntitle: Home\n---\n<h1>{{ title }}</h1>{{> nav}}",
            "about": "<p>About {{ site }}</p>",
        },
        partials={
            "nav": '<nav>{{#each links}}<a href="{{ href }}">{{ label }}</a>{{/each}}</nav>',
            "greet": "Hi {{ name }}",
        },
        components={
            "Card": '<div class="card"><h2>{{ title }}</h2>{{{ $children }}}</div>',
            "Icon": '<i class="icon-{{ name }}"></i>',
            "Panel": (
                "<header>{{{ $slots.header }}}</header>"
                "<main>{{{ $slots.default }}}</main>"
                "{{#if $slots.footer}}<footer>{{{ $slots.footer }}}</footer>{{/if}}"
            ),
            "Badge": "<b>{{ label }}</b>",
        },
        layouts={
            "base": "<html><title>{{ title }}</title><body>{{{ content }}}</body></html>",
            "docs": "---\nlayout: base\n---\n<article>{{{ content }}}</article>",
            "alt": "<section>{{ $content }}</section>",
        },
    )


@pytest.fixture
def site_env(site_loader):
    return Environment(loader=site_loader)
