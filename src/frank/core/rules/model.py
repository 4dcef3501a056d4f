"""
Rule vocabulary model.

Every keyword list, regex and canned phrase the dialogue engine matches
against lives in a single :class:`RuleConfig`.  The model is frozen: it is
loaded once per process and shared by every conversation.

Keyword lists are matched as case-insensitive substrings.  Regex lists are
compiled with ``re.IGNORECASE`` by the components that use them; the
validators here only guarantee that they compile and do not match the empty
string.
"""

from __future__ import annotations

import hashlib
import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field, field_validator

from frank.core.constants import (
    DECLARATIVE_FALLBACK_MAX_WORDS,
    DEFAULT_EMOTIONAL_MAX_WORDS,
    NEW_TOPIC_MIN_WORDS,
    SHORT_ANSWER_MAX_WORDS,
)

_FROZEN = {"extra": "forbid", "frozen": True}


def _check_keywords(values: tuple[str, ...]) -> tuple[str, ...]:
    cleaned = []
    for v in values:
        v = v.strip().lower()
        if not v:
            raise ValueError("keyword entries must not be empty")
        cleaned.append(v)
    return tuple(cleaned)


def _check_patterns(values: tuple[str, ...]) -> tuple[str, ...]:
    for v in values:
        if len(v) > 200:
            raise ValueError(f"pattern too long ({len(v)} chars, max 200)")
        try:
            compiled = re.compile(v, re.IGNORECASE)
        except re.error as exc:
            raise ValueError(f"Invalid regex {v!r}: {exc}") from exc
        if compiled.search(""):
            raise ValueError(f"Regex {v!r} matches empty string, too broad")
    return values


Keywords = Annotated[tuple[str, ...], AfterValidator(_check_keywords)]
Patterns = Annotated[tuple[str, ...], AfterValidator(_check_patterns)]


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


class CertaintyRules(BaseModel):
    """Markers used by ``detect_certainty``.  High is checked before low."""

    model_config = _FROZEN

    high: Keywords = ()
    low: Keywords = ()


class OverwhelmRules(BaseModel):
    """The overwhelm vocabularies, most specific first."""

    model_config = _FROZEN

    loss_of_function: Keywords = ()
    """The user reports they cannot think or act at all."""

    intensity_only: Keywords = ()
    """Strong feeling that is information, not collapse."""

    generic: Keywords = ()
    """Older catch-all list, checked after the two above."""

    explicit: Keywords = ()
    """Markers that justify offering a pause or a breathing step."""

    informational: Keywords = ()
    """Complaints about relevance that must not be read as overwhelm."""


class ClassificationRules(BaseModel):
    model_config = _FROZEN

    shrink: Keywords = ()
    explanatory_patterns: Patterns = ()
    emotional: Keywords = ()
    assignment: Keywords = ()
    default_max_words: int = Field(default=DEFAULT_EMOTIONAL_MAX_WORDS, ge=1)


class ReadinessRules(BaseModel):
    """Phrases that open the Stepping gate."""

    model_config = _FROZEN

    signals: Keywords = ()
    """Explicit readiness: "let's start", "first step", ..."""

    action_directions: Keywords = ()
    """A previously selected direction that implies the user wants to act."""

    direct_request_patterns: Patterns = ()
    """First-turn requests such as "help me write ..."."""

    answer_readiness: Keywords = ()
    """Words in an answer that move straight to a step."""


class TopicGroup(BaseModel):
    """Question words and the answer words that count as on-topic for them."""

    model_config = _FROZEN

    question_words: Keywords
    answer_words: Keywords = ()
    answer_prefixes: Keywords = ()


class AnswerRules(BaseModel):
    model_config = _FROZEN

    short_max_words: int = Field(default=SHORT_ANSWER_MAX_WORDS, ge=1)
    declarative_max_words: int = Field(default=DECLARATIVE_FALLBACK_MAX_WORDS, ge=1)
    new_topic_min_words: int = Field(default=NEW_TOPIC_MIN_WORDS, ge=1)
    declarative_patterns: Patterns = ()
    exploratory_patterns: Patterns = ()
    new_topic_patterns: Patterns = ()
    topics: tuple[TopicGroup, ...] = ()
    uncertainty_markers: Keywords = ()
    answer_markers: Keywords = ()


class PolicyCategory(BaseModel):
    model_config = _FROZEN

    name: str = Field(pattern=r"^[a-z][a-z0-9_]{0,31}$")
    keywords: Keywords


class ContentPolicyRules(BaseModel):
    model_config = _FROZEN

    categories: tuple[PolicyCategory, ...] = ()
    redirect_message: str = (
        "I'm smart but not all knowing - some things are better left to asking a trusted adult."
    )


class DirectionLabels(BaseModel):
    """Button labels the composer offers.  Action ids derive from these."""

    model_config = _FROZEN

    that_makes_sense: str = "That makes sense"
    talk_more: str = "Talk more about this"
    minimum: str = "Help me get through the minimum"
    make_smaller: str = "Make this smaller"
    break_differently: str = "Break this down differently"
    pause_for_now: str = "Pause for now"
    keep_going: str = "Keep going"
    start_step: str = "Start this step"
    make_step_smaller: str = "Make it smaller"


class PlannerRules(BaseModel):
    model_config = _FROZEN

    general_help: Keywords = ()
    compare_contrast: Keywords = ()
    reading: Keywords = ()


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class RuleConfig(BaseModel):
    """
    Root rule vocabulary.

    Loaded once (see :func:`frank.core.rules.loader.load_rules`) and never
    mutated afterwards; components receive it by reference.
    """

    model_config = _FROZEN

    rules_version: str = "1"
    name: str = "default"
    certainty: CertaintyRules = Field(default_factory=CertaintyRules)
    overwhelm: OverwhelmRules = Field(default_factory=OverwhelmRules)
    classification: ClassificationRules = Field(default_factory=ClassificationRules)
    readiness: ReadinessRules = Field(default_factory=ReadinessRules)
    answers: AnswerRules = Field(default_factory=AnswerRules)
    content_policy: ContentPolicyRules = Field(default_factory=ContentPolicyRules)
    directions: DirectionLabels = Field(default_factory=DirectionLabels)
    planner: PlannerRules = Field(default_factory=PlannerRules)

    @field_validator("rules_version")
    @classmethod
    def check_version(cls, v: str) -> str:
        if v != "1":
            raise ValueError(f"Unsupported rules_version {v!r}. Only version '1' is supported.")
        return v

    def content_hash(self) -> str:
        """Stable SHA-256 hash of this rule set (first 16 hex chars)."""
        return hashlib.sha256(self.model_dump_json().encode()).hexdigest()[:16]
