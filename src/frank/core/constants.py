"""Frank constants: filesystem layout, word-count thresholds, and limits."""

from __future__ import annotations

import os
import sys
from enum import IntEnum
from pathlib import Path

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    INPUT_ERROR = 3
    STORE_ERROR = 4


# ---------------------------------------------------------------------------
# Platform-specific data directory
# ---------------------------------------------------------------------------


def _default_data_dir() -> Path:
    """
    Return the platform-appropriate Frank data directory.

    macOS : ~/Library/Application Support/frank
    Linux : ~/.config/frank
    Other : ~/.frank
    """
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "frank"
    if sys.platform.startswith("linux"):
        xdg = Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config")))
        return xdg / "frank"
    return Path.home() / ".frank"


# ---------------------------------------------------------------------------
# Filesystem layout
# ---------------------------------------------------------------------------

CONFIG_FILENAME = "config.toml"
DB_FILENAME = "frank.db"
RULES_FILENAME = "rules.yaml"

# ---------------------------------------------------------------------------
# Classification thresholds (word counts)
# ---------------------------------------------------------------------------

DEFAULT_EMOTIONAL_MAX_WORDS = 10  # below this, unmatched input reads as emotional
SHORT_ANSWER_MAX_WORDS = 10  # an answer this short needs no declarative shape
DECLARATIVE_FALLBACK_MAX_WORDS = 15  # neither declarative nor exploratory
NEW_TOPIC_MIN_WORDS = 20  # longer than this is treated as a new topic

# ---------------------------------------------------------------------------
# Response shape limits
# ---------------------------------------------------------------------------

MIN_DIRECTION_OPTIONS = 2
MAX_DIRECTION_OPTIONS = 4
MAX_STEPPING_ACTIONS = 2
