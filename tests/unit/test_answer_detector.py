"""Unit tests for frank.core.dialogue.answer_detector — SemanticAnswerDetector."""

from __future__ import annotations

import pytest

from frank.core.dialogue.answer_detector import SemanticAnswerDetector
from frank.core.dialogue.models import CertaintyLevel, ConversationTurn, Mode, Signal, SignalType
from frank.core.rules import DEFAULT_RULES

WORST_QUESTION = "What about it feels the worst right now?"


def _asked(question: str | None, had_question: bool = True) -> list[ConversationTurn]:
    turn = ConversationTurn(
        raw_input="I hate this",
        signal=Signal(SignalType.EMOTIONAL, CertaintyLevel.HIGH),
    )
    turn.had_question = had_question
    turn.last_question = question
    return [turn]


@pytest.fixture
def detector() -> SemanticAnswerDetector:
    return SemanticAnswerDetector(DEFAULT_RULES)


class TestIsAnswer:
    def test_short_aligned_answer(self, detector: SemanticAnswerDetector) -> None:
        assert detector.is_answer(
            "the reading is just confusing", _asked(WORST_QUESTION), Mode.CLARIFYING
        )

    def test_no_prior_turns(self, detector: SemanticAnswerDetector) -> None:
        assert not detector.is_answer("the reading is just confusing", [], Mode.CLARIFYING)

    def test_no_question_was_asked(self, detector: SemanticAnswerDetector) -> None:
        turns = _asked(None, had_question=False)
        assert not detector.is_answer("the reading is just confusing", turns, Mode.LISTENING)

    def test_question_back_is_not_an_answer(self, detector: SemanticAnswerDetector) -> None:
        assert not detector.is_answer(
            "why do we even read this?", _asked(WORST_QUESTION), Mode.CLARIFYING
        )

    def test_direct_request_is_new_topic(self, detector: SemanticAnswerDetector) -> None:
        assert not detector.is_answer(
            "help me write the essay", _asked(WORST_QUESTION), Mode.CLARIFYING
        )

    def test_off_topic_reply(self, detector: SemanticAnswerDetector) -> None:
        assert not detector.is_answer("pizza tonight", _asked(WORST_QUESTION), Mode.CLARIFYING)

    def test_uncertain_reply(self, detector: SemanticAnswerDetector) -> None:
        assert not detector.is_answer(
            "not sure, maybe the hard part", _asked(WORST_QUESTION), Mode.CLARIFYING
        )

    def test_lost_question_text_trusts_clarifying_mode(
        self, detector: SemanticAnswerDetector
    ) -> None:
        turns = _asked(None)
        assert detector.is_answer("the reading", turns, Mode.CLARIFYING)
        assert not detector.is_answer("the reading", turns, Mode.LISTENING)

    def test_unknown_topic_accepts_any_real_reply(
        self, detector: SemanticAnswerDetector
    ) -> None:
        turns = _asked("Tell me more about that.")
        assert detector.is_answer("the tutor is strict", turns, Mode.CLARIFYING)


class TestChecks:
    def test_long_message_is_new_topic(self, detector: SemanticAnswerDetector) -> None:
        text = " ".join(["word"] * 25)
        assert detector.introduces_new_topic(text, _asked(WORST_QUESTION))

    def test_short_or_declarative(self, detector: SemanticAnswerDetector) -> None:
        assert detector.is_short_or_declarative("it is boring")
        assert not detector.is_short_or_declarative("what if it is boring?")

    def test_long_declarative(self, detector: SemanticAnswerDetector) -> None:
        text = "it feels like nobody explained why any of this matters for the test next week"
        assert detector.is_short_or_declarative(text)

    def test_aligned_by_topic(self, detector: SemanticAnswerDetector) -> None:
        assert detector.is_aligned("it's hard", WORST_QUESTION)
        assert detector.is_aligned("because nobody cares", "Why does it bother you?")

    def test_reduces_ambiguity(self, detector: SemanticAnswerDetector) -> None:
        assert detector.reduces_ambiguity("it is boring")
        assert not detector.reduces_ambiguity("maybe, I guess")
        assert not detector.reduces_ambiguity("no idea maybe")
