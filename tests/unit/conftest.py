"""Auto-apply @pytest.mark.unit to all tests in tests/unit/."""

from __future__ import annotations

from pathlib import Path

import pytest

_DIR = Path(__file__).parent


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Add 'unit' marker to every test collected from this directory."""
    marker = pytest.mark.unit
    for item in items:
        if str(_DIR) in str(item.fspath):
            item.add_marker(marker)
