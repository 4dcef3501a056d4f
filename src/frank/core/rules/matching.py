"""
Keyword helpers shared by the classifier, answer detector and planner.

Matching is plain case-insensitive substring containment, so "hate" also
matches "hated" and "hateful".
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from re import Pattern

from frank.core.rules.model import RuleConfig


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    lower = text.lower()
    return any(k in lower for k in keywords)


def count_matches(text: str, keywords: Iterable[str]) -> int:
    lower = text.lower()
    return sum(1 for k in keywords if k in lower)


def word_count(text: str) -> int:
    return len(text.split())


def compile_patterns(patterns: Iterable[str]) -> tuple[Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


def search_any(text: str, patterns: Iterable[Pattern[str]]) -> bool:
    return any(p.search(text) for p in patterns)


def has_explicit_overwhelm(text: str, rules: RuleConfig) -> bool:
    """
    True when the user explicitly says they are overwhelmed.

    Relevance complaints ("this is pointless") only count when they also
    carry an explicit marker such as "too much" or "can't".
    """
    if not text:
        return False
    ow = rules.overwhelm
    if contains_any(text, ow.informational) and not contains_any(text, ow.explicit):
        return False
    return (
        contains_any(text, ow.loss_of_function)
        or contains_any(text, ow.generic)
        or contains_any(text, ow.explicit)
    )
