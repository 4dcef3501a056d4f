"""Frank configuration: Pydantic model, load, and save."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from frank.core.constants import (
    CONFIG_FILENAME,
    DB_FILENAME,
    RULES_FILENAME,
    _default_data_dir,
)
from frank.core.exceptions import ConfigError, ConfigNotFoundError

CURRENT_CONFIG_VERSION = 1


def frank_dir() -> Path:
    """
    Return the Frank data directory, creating it if needed.

    macOS : ~/Library/Application Support/frank
    Linux : ~/.config/frank  (or $XDG_CONFIG_HOME/frank)
    Other : ~/.frank
    """
    d = _default_data_dir()
    d.mkdir(mode=0o700, parents=True, exist_ok=True)
    return d


# ---------------------------------------------------------------------------
# Sub-models
# ---------------------------------------------------------------------------


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    format: str = "text"  # "text" | "json"

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in ("text", "json"):
            raise ValueError("Log format must be 'text' or 'json'")
        return v


class StoreConfig(BaseModel):
    path: str = ""  # empty → use default


class RulesConfig(BaseModel):
    path: str = ""  # empty → built-in rules only


class ConversationConfig(BaseModel):
    """Conversation behaviour settings."""

    model_config = {"extra": "forbid"}

    save_on_pause: bool = True
    """Persist step progress when the user chooses Pause."""

    show_checklists: bool = True
    """Render step checklists in the terminal UI."""


# ---------------------------------------------------------------------------
# Root config
# ---------------------------------------------------------------------------


class FrankConfig(BaseModel):
    """Root Frank configuration model."""

    config_version: int = CURRENT_CONFIG_VERSION
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    rules: RulesConfig = Field(default_factory=RulesConfig)
    conversation: ConversationConfig = Field(default_factory=ConversationConfig)

    _config_path: Path | None = None

    @field_validator("config_version")
    @classmethod
    def validate_version(cls, v: int) -> int:
        if v > CURRENT_CONFIG_VERSION:
            raise ValueError(
                f"config_version {v} is newer than this release supports "
                f"({CURRENT_CONFIG_VERSION}). Upgrade frank."
            )
        return v

    @property
    def db_path(self) -> Path:
        if self.store.path:
            return Path(self.store.path).expanduser()
        return frank_dir() / DB_FILENAME

    @property
    def rules_path(self) -> Path | None:
        """Explicit rules file, or the default one if it exists, else None."""
        if self.rules.path:
            return Path(self.rules.path).expanduser()
        default = _default_data_dir() / RULES_FILENAME
        return default if default.exists() else None


# ---------------------------------------------------------------------------
# Load / save
# ---------------------------------------------------------------------------


def _config_file_path() -> Path:
    if env_path := os.environ.get("FRANK_CONFIG"):
        return Path(env_path)
    return _default_data_dir() / CONFIG_FILENAME


def load_config(path: Path | str | None = None) -> FrankConfig:
    """
    Load FrankConfig from TOML file, overlaid with environment variables.

    Priority (highest to lowest):
      1. Environment variables (FRANK_*)
      2. Config file (platform data dir / config.toml, or $FRANK_CONFIG)
    """
    import tomllib

    cfg_path = Path(path) if path is not None else _config_file_path()

    if not cfg_path.exists():
        raise ConfigNotFoundError(f"Config file not found: {cfg_path}")

    try:
        with open(cfg_path, "rb") as f:
            data = tomllib.load(f)
    except Exception as exc:
        raise ConfigError(f"Cannot read config file {cfg_path}: {exc}") from exc

    _apply_env_overrides(data)

    try:
        config = FrankConfig.model_validate(data)
    except Exception as exc:
        raise ConfigError(f"Invalid config at {cfg_path}: {exc}") from exc

    config._config_path = cfg_path
    return config


def load_config_or_default(path: Path | str | None = None) -> FrankConfig:
    """Like load_config(), but a missing file yields defaults (plus env overlays)."""
    try:
        return load_config(path)
    except ConfigNotFoundError:
        data: dict[str, Any] = {}
        _apply_env_overrides(data)
        try:
            return FrankConfig.model_validate(data)
        except Exception as exc:
            raise ConfigError(f"Invalid environment configuration: {exc}") from exc


def _apply_env_overrides(data: dict[str, Any]) -> None:
    """Overlay FRANK_* environment variables onto parsed TOML."""
    if level := os.environ.get("FRANK_LOG_LEVEL", ""):
        data.setdefault("logging", {})["level"] = level
    if fmt := os.environ.get("FRANK_LOG_FORMAT", ""):
        data.setdefault("logging", {})["format"] = fmt
    if db := os.environ.get("FRANK_DB_PATH", ""):
        data.setdefault("store", {})["path"] = db
    if rules := os.environ.get("FRANK_RULES_PATH", ""):
        data.setdefault("rules", {})["path"] = rules


def save_config(config_data: dict[str, Any], path: Path | None = None) -> Path:
    """Write config dict to TOML file with owner-only permissions (0600)."""
    import tomli_w

    cfg_path = path or _config_file_path()
    cfg_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)

    config_data.setdefault("config_version", CURRENT_CONFIG_VERSION)

    # Write atomically
    tmp_path = cfg_path.with_suffix(".tmp")
    try:
        with open(tmp_path, "wb") as f:
            tomli_w.dump(config_data, f)
        tmp_path.rename(cfg_path)
    except Exception as exc:
        tmp_path.unlink(missing_ok=True)
        raise ConfigError(f"Cannot write config to {cfg_path}: {exc}") from exc

    cfg_path.chmod(0o600)
    return cfg_path
