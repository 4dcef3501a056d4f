"""Unit tests for frank.core.dialogue.classifier — ordered intent rules and certainty."""

from __future__ import annotations

import pytest

from frank.core.dialogue.classifier import InputClassifier, detect_certainty
from frank.core.dialogue.models import CertaintyLevel, Mode, SignalType
from frank.core.rules import DEFAULT_RULES, FALLBACK_RULES


@pytest.fixture
def classifier() -> InputClassifier:
    return InputClassifier(DEFAULT_RULES)


class TestRuleOrder:
    def test_rule_order_is_exposed(self, classifier: InputClassifier) -> None:
        assert classifier.rule_names == [
            "loss_of_function",
            "intensity_only",
            "generic_overwhelm",
            "shrink_request",
            "clarifying_reply",
            "explanatory",
            "emotional",
            "assignment",
            "default",
        ]

    def test_loss_of_function_beats_generic(self, classifier: InputClassifier) -> None:
        # "too much" alone is generic overwhelm; "can't do this" is loss of function
        signal = classifier.classify("I can't do this, it's too much")
        assert signal.type == SignalType.OVERWHELMED
        assert signal.has_loss_of_function is True
        assert signal.rule == "loss_of_function"

    def test_intensity_beats_generic(self, classifier: InputClassifier) -> None:
        signal = classifier.classify("this is unbearable and I give up")
        assert signal.type == SignalType.INTENSE_EMOTION
        assert signal.has_loss_of_function is False

    def test_overwhelm_beats_assignment(self, classifier: InputClassifier) -> None:
        signal = classifier.classify("this essay is too much")
        assert signal.type == SignalType.OVERWHELMED


class TestClassify:
    @pytest.mark.parametrize(
        ("text", "expected", "rule"),
        [
            ("I can't think, my mind is blank", SignalType.OVERWHELMED, "loss_of_function"),
            ("This is unbearable", SignalType.INTENSE_EMOTION, "intensity_only"),
            ("It's too much", SignalType.OVERWHELMED, "generic_overwhelm"),
            ("Can you make it smaller", SignalType.REQUEST_TO_SHRINK, "shrink_request"),
            ("it doesn't feel relevant to my life", SignalType.EXPLANATORY, "explanatory"),
            ("I hate math", SignalType.EMOTIONAL, "emotional"),
            (
                "help me write an essay about World War I",
                SignalType.READY_FOR_ACTION,
                "assignment",
            ),
            ("ok", SignalType.EMOTIONAL, "default"),
        ],
    )
    def test_signal(
        self, classifier: InputClassifier, text: str, expected: SignalType, rule: str
    ) -> None:
        signal = classifier.classify(text)
        assert signal.type == expected
        assert signal.rule == rule

    def test_long_unmatched_input_is_ready_for_action(self, classifier: InputClassifier) -> None:
        text = "the weather today is grey and we walked around the park for a while before lunch"
        signal = classifier.classify(text)
        assert signal.type == SignalType.READY_FOR_ACTION
        assert signal.rule == "default"

    def test_reply_to_clarifying_question(self, classifier: InputClassifier) -> None:
        signal = classifier.classify("the reading is just confusing", Mode.CLARIFYING)
        assert signal.type == SignalType.READY_FOR_ACTION
        assert signal.rule == "clarifying_reply"

    def test_explanation_after_clarifying_is_not_re_explained(
        self, classifier: InputClassifier
    ) -> None:
        signal = classifier.classify("because it doesn't connect to anything", Mode.CLARIFYING)
        assert signal.type != SignalType.EXPLANATORY

    def test_overwhelm_still_wins_after_clarifying(self, classifier: InputClassifier) -> None:
        signal = classifier.classify("I can't think", Mode.CLARIFYING)
        assert signal.has_loss_of_function is True

    def test_idempotent(self, classifier: InputClassifier) -> None:
        text = "this feels kind of pointless"
        assert classifier.classify(text, Mode.LISTENING) == classifier.classify(
            text, Mode.LISTENING
        )

    def test_fallback_rules_degrade_without_failing(self) -> None:
        signal = InputClassifier(FALLBACK_RULES).classify("I can't think")
        assert signal.type == SignalType.OVERWHELMED
        assert signal.has_loss_of_function is True


class TestCertainty:
    def test_low(self) -> None:
        certainty = detect_certainty("this feels kind of pointless", DEFAULT_RULES)
        assert certainty == CertaintyLevel.LOW

    def test_high(self) -> None:
        assert detect_certainty("I hate math", DEFAULT_RULES) == CertaintyLevel.HIGH

    def test_high_checked_before_low(self) -> None:
        assert detect_certainty("maybe it is always like this", DEFAULT_RULES) == (
            CertaintyLevel.HIGH
        )

    def test_medium_when_no_marker(self) -> None:
        assert detect_certainty("the reading is confusing", DEFAULT_RULES) == (
            CertaintyLevel.MEDIUM
        )

    def test_classify_carries_certainty(self) -> None:
        signal = InputClassifier(DEFAULT_RULES).classify("maybe I feel a bit lost")
        assert signal.certainty_level == CertaintyLevel.LOW
