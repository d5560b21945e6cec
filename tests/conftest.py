from __future__ import annotations

import sys
from pathlib import Path

import pytest


# Ensure src/ is importable for all tests (CI and local)
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for p in (ROOT, SRC):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


@pytest.fixture(autouse=True)
def _default_settings():
    """Reset the active settings so tracing from one test never leaks."""

    from win_events.config import EventsSettings, configure

    configure(EventsSettings())
    yield
    configure(EventsSettings())


def pytest_collection_modifyitems(config, items):
    """Default all tests to 'unit' unless explicitly marked otherwise."""
    for item in items:
        marks = {m.name for m in item.iter_markers()}
        if not ("integ" in marks or "smoke" in marks or "unit" in marks):
            item.add_marker(pytest.mark.unit)
