"""Unit tests for frank.core.config — FrankConfig loading, env overlays and saving."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

from frank.core.config import (
    FrankConfig,
    load_config,
    load_config_or_default,
    save_config,
)
from frank.core.exceptions import ConfigError, ConfigNotFoundError


def _write_config(tmp_path: Path, content: str) -> Path:
    p = tmp_path / "config.toml"
    p.write_text(content)
    return p


FULL_TOML = """
config_version = 1

[logging]
level = "debug"
format = "json"

[store]
path = "~/frank-test/progress.db"

[conversation]
save_on_pause = false
show_checklists = false
"""


class TestLoadConfig:
    def test_full(self, tmp_path: Path) -> None:
        cfg = load_config(_write_config(tmp_path, FULL_TOML))
        assert cfg.logging.level == "DEBUG"
        assert cfg.logging.format == "json"
        assert cfg.conversation.save_on_pause is False
        assert cfg.db_path == Path("~/frank-test/progress.db").expanduser()

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "nonexistent.toml")

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(_write_config(tmp_path, "this is not valid toml %%% [[["))

    def test_invalid_log_level_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(_write_config(tmp_path, '[logging]\nlevel = "LOUD"\n'))

    def test_unknown_conversation_key_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(_write_config(tmp_path, "[conversation]\nsurprise = true\n"))

    def test_newer_config_version_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="newer"):
            load_config(_write_config(tmp_path, "config_version = 99\n"))

    def test_frank_config_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        p = _write_config(tmp_path, FULL_TOML)
        monkeypatch.setenv("FRANK_CONFIG", str(p))
        assert load_config().logging.format == "json"


class TestEnvOverrides:
    def test_env_beats_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FRANK_LOG_LEVEL", "error")
        monkeypatch.setenv("FRANK_DB_PATH", str(tmp_path / "env.db"))
        cfg = load_config(_write_config(tmp_path, FULL_TOML))
        assert cfg.logging.level == "ERROR"
        assert cfg.db_path == tmp_path / "env.db"

    def test_rules_path_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FRANK_RULES_PATH", str(tmp_path / "rules.yaml"))
        assert load_config_or_default().rules_path == tmp_path / "rules.yaml"


class TestDefaults:
    def test_missing_file_yields_defaults(self) -> None:
        cfg = load_config_or_default()
        assert cfg == FrankConfig()
        assert cfg.conversation.save_on_pause is True

    def test_default_db_path_in_data_dir(self, _isolated_home: Path) -> None:
        expected = _isolated_home / ".config" / "frank" / "frank.db"
        assert load_config_or_default().db_path == expected

    def test_no_rules_file_means_built_in(self) -> None:
        assert FrankConfig().rules_path is None

    def test_default_rules_file_picked_up(self, _isolated_home: Path) -> None:
        rules_file = _isolated_home / ".config" / "frank" / "rules.yaml"
        rules_file.parent.mkdir(parents=True)
        rules_file.write_text("name: mine\n")
        assert FrankConfig().rules_path == rules_file


class TestSaveConfig:
    def test_round_trip(self, tmp_path: Path) -> None:
        path = save_config({"logging": {"level": "INFO"}}, tmp_path / "out" / "config.toml")
        cfg = load_config(path)
        assert cfg.logging.level == "INFO"
        assert cfg.config_version == 1

    def test_owner_only_permissions(self, tmp_path: Path) -> None:
        path = save_config({}, tmp_path / "config.toml")
        assert stat.S_IMODE(path.stat().st_mode) == 0o600
