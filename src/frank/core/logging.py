"""
Structured logging configuration for Frank.

Uses structlog so every turn leaves a machine-parseable trail: which rule
classified it, whether it was taken as an answer, which mode was chosen and
whether the validator had to repair the response.

Setup:
    Call ``configure_logging()`` once at process startup. Every module then
    uses::

        import structlog
        logger = structlog.get_logger()

    Sessions bind their id so it flows through the whole turn::

        log = logger.bind(session_id="3f2a9c")
        log.info("turn_classified", signal="emotional", certainty="low")
        # → {"event": "turn_classified", "session_id": "3f2a9c",
        #    "signal": "emotional", "certainty": "low",
        #    "timestamp": "2026-10-19T...", "level": "info"}

What students type stays out of the logs.  Events carry labels and counts;
if a caller does pass user text under one of ``USER_TEXT_KEYS``,
``redact_user_text`` swaps it for its length before anything is rendered.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

USER_TEXT_KEYS = ("text", "raw_input", "answer", "original_input", "task_input")


def redact_user_text(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Replace user-typed values with ``<key>_chars`` lengths."""
    for key in USER_TEXT_KEYS:
        if key in event_dict:
            value = event_dict.pop(key)
            event_dict[f"{key}_chars"] = len(value) if isinstance(value, str) else None
    return event_dict


def _renderer(json_output: bool) -> list[structlog.types.Processor]:
    if json_output:
        # composer_failed carries exc_info; keep the traceback inside the JSON line
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(
    *,
    level: str = "WARNING",
    json_output: bool = False,
) -> None:
    """
    Configure structlog + stdlib logging for the process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).
        json_output: If True, emit JSON lines. If False, emit coloured
                     human-readable output.

    Safe to call more than once; handlers are not duplicated.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        redact_user_text,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *_renderer(json_output),
        ],
        foreign_pre_chain=shared_processors,
    )

    root = logging.getLogger()
    existing = next(
        (
            h
            for h in root.handlers
            if isinstance(h, logging.StreamHandler)
            and isinstance(getattr(h, "formatter", None), structlog.stdlib.ProcessorFormatter)
        ),
        None,
    )
    if existing is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        root.addHandler(handler)
    else:
        # a second call may switch between text and JSON output
        existing.setFormatter(formatter)

    root.setLevel(log_level)
