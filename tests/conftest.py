"""Shared fixtures: keep every test away from the real config and database."""

from __future__ import annotations

from pathlib import Path

import pytest

_FRANK_ENV = (
    "FRANK_CONFIG",
    "FRANK_LOG_LEVEL",
    "FRANK_LOG_FORMAT",
    "FRANK_DB_PATH",
    "FRANK_RULES_PATH",
)


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the data directory at a temp dir and drop FRANK_* overrides."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    for name in _FRANK_ENV:
        monkeypatch.delenv(name, raising=False)
    return home
