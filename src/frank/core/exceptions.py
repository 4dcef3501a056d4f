"""Frank exception hierarchy."""

from __future__ import annotations


class FrankError(Exception):
    """Base exception for all Frank errors."""


class ConfigError(FrankError):
    """Raised when the configuration is invalid or cannot be read."""


class ConfigNotFoundError(ConfigError):
    """Raised when the configuration file does not exist."""


class RulesError(FrankError):
    """Raised when a rules file cannot be parsed or fails validation."""


class EmptyInputError(FrankError, ValueError):
    """Raised when a turn is submitted with no text. Never classified."""


class SessionError(FrankError):
    """Raised when a conversation session is used incorrectly."""


class SessionBusyError(SessionError):
    """Raised when submit() is re-entered while a turn is being composed."""


class SessionPausedError(SessionError):
    """Raised when a paused session is asked for a new turn before resume()."""


class StoreError(FrankError):
    """Raised when the progress store cannot read or write."""
