"""Fixtures for the runnable motif examples.

Every example directory holds an ``app.py`` that builds an Environment,
renders its pages at import time and leaves the results in module globals
(``output``, ``template``, ``chunks`` and so on). Tests read those globals
through the ``example_app`` fixture.
"""

import runpy
from pathlib import Path
from types import SimpleNamespace

import pytest


@pytest.fixture
def example_app(request: pytest.FixtureRequest) -> SimpleNamespace:
    """Run the sibling app.py and expose its globals as attributes.

    The script runs afresh for each test, so caches and registries built by
    one test never leak into the next.
    """
    app_path = Path(request.path).parent / "app.py"
    if not app_path.is_file():
        pytest.fail(f"{request.path.parent.name} has no app.py")
    namespace = runpy.run_path(str(app_path), run_name=f"motif_example_{app_path.parent.name}")
    return SimpleNamespace(**namespace)
