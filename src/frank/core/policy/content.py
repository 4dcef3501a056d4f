"""
Content policy — screens each turn before classification.

Keywords match on word boundaries, so "assignment" never trips the
sexual category and "skill" never trips the violent one.  Categories are
checked in rule order and the first hit wins.
"""

from __future__ import annotations

import re
from re import Pattern

import structlog

from frank.core.dialogue.models import Mode, Response
from frank.core.rules.model import RuleConfig

logger = structlog.get_logger()


class ContentPolicy:
    def __init__(self, rules: RuleConfig) -> None:
        self._redirect = rules.content_policy.redirect_message
        self._categories: list[tuple[str, Pattern[str]]] = [
            (
                cat.name,
                re.compile(
                    r"\b(?:" + "|".join(re.escape(k) for k in cat.keywords) + r")\b",
                    re.IGNORECASE,
                ),
            )
            for cat in rules.content_policy.categories
            if cat.keywords
        ]

    @property
    def categories(self) -> list[str]:
        return [name for name, _ in self._categories]

    def check(self, text: str) -> str | None:
        """Return the first matching category name, or None."""
        for name, pattern in self._categories:
            if pattern.search(text):
                logger.info("content_policy_blocked", category=name)
                return name
        return None

    def redirect_response(self) -> Response:
        return Response(mode=Mode.LISTENING, message=self._redirect)
