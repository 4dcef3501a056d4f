"""Auto-apply @pytest.mark.integration to all tests in tests/integration/."""

from __future__ import annotations

from pathlib import Path

import pytest

_DIR = Path(__file__).parent


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Add 'integration' marker to every test collected from this directory."""
    marker = pytest.mark.integration
    for item in items:
        if str(_DIR) in str(item.fspath):
            item.add_marker(marker)
