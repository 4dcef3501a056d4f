"""
SemanticAnswerDetector — is this turn answering the question we just asked?

A turn counts as an answer only when all of these hold:

  - the previous turn asked a question;
  - the input is short or declarative, and not exploratory;
  - the input is on the topic of that question;
  - it is not dominated by uncertainty ("maybe", "not sure", ...).

When the answer path fires the composer acknowledges instead of asking
again, which is what stops a conversation from chaining clarifying
questions about a concern the user already explained.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from frank.core.dialogue.models import ConversationTurn, Mode
from frank.core.rules.matching import (
    compile_patterns,
    contains_any,
    count_matches,
    search_any,
    word_count,
)
from frank.core.rules.model import RuleConfig

logger = structlog.get_logger()


class SemanticAnswerDetector:
    def __init__(self, rules: RuleConfig) -> None:
        self._rules = rules.answers
        self._declarative = compile_patterns(self._rules.declarative_patterns)
        self._exploratory = compile_patterns(self._rules.exploratory_patterns)
        self._new_topic = compile_patterns(self._rules.new_topic_patterns)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def is_answer(
        self,
        text: str,
        prior_turns: Sequence[ConversationTurn],
        prior_mode: Mode | None = None,
    ) -> bool:
        """
        Return True when *text* answers the question asked on the last turn.

        Args:
            text:        The new user input (not yet in ``prior_turns``).
            prior_turns: Conversation context before this turn.
            prior_mode:  The mode the previous response was in.
        """
        if not prior_turns or not text.strip():
            return False
        previous = prior_turns[-1]
        if not previous.had_question:
            return False
        if self.introduces_new_topic(text, prior_turns):
            return False

        # A question was asked but its wording was not kept.
        if not previous.last_question:
            return prior_mode == Mode.CLARIFYING

        if not self.is_short_or_declarative(text):
            return False
        if not self.is_aligned(text, previous.last_question):
            return False
        if not self.reduces_ambiguity(text):
            return False

        logger.debug("answer_detected", words=word_count(text))
        return True

    def introduces_new_topic(self, text: str, prior_turns: Sequence[ConversationTurn]) -> bool:
        """A direct request, a change of subject, a question, or a long message."""
        if not prior_turns:
            return False
        stripped = text.strip()
        if search_any(stripped, self._new_topic):
            return True
        return word_count(stripped) > self._rules.new_topic_min_words

    # ------------------------------------------------------------------
    # Individual checks
    # ------------------------------------------------------------------

    def is_short_or_declarative(self, text: str) -> bool:
        stripped = text.strip()
        if search_any(stripped, self._exploratory):
            return False
        words = word_count(stripped)
        if words <= self._rules.short_max_words:
            return True
        if search_any(stripped, self._declarative):
            return True
        return words <= self._rules.declarative_max_words

    def is_aligned(self, text: str, question: str) -> bool:
        """Does *text* stay on the topic of *question*?"""
        lower = text.strip().lower()
        q = question.lower()

        known_topic = False
        for group in self._rules.topics:
            if not contains_any(q, group.question_words):
                continue
            known_topic = True
            if contains_any(lower, group.question_words):
                return True
            if contains_any(lower, group.answer_words):
                return True
            if any(lower.startswith(f"{p} ") for p in group.answer_prefixes):
                return True

        # Nothing to compare against: any real reply counts.
        return not known_topic and len(lower) > 3

    def reduces_ambiguity(self, text: str) -> bool:
        """At most one uncertainty marker, and no more of them than answer markers."""
        uncertain = count_matches(text, self._rules.uncertainty_markers)
        answering = count_matches(text, self._rules.answer_markers)
        if uncertain > 1:
            return False
        if answering == 0:
            return uncertain == 0
        return uncertain / answering <= 1
