"""
InputClassifier — ordered, first-match-wins intent rules.

Each turn is reduced to a :class:`Signal` by walking ``rules`` in order.
The order is the contract: specific overwhelm markers beat generic ones,
and a reply to a clarifying question is never re-read as a fresh complaint.

  1. loss_of_function   → OVERWHELMED (has_loss_of_function=True)
  2. intensity_only     → INTENSE_EMOTION
  3. generic_overwhelm  → OVERWHELMED
  4. shrink_request     → REQUEST_TO_SHRINK
  5. clarifying_reply   → READY_FOR_ACTION (prior mode was clarifying)
  6. explanatory        → EXPLANATORY
  7. emotional          → EMOTIONAL
  8. assignment         → READY_FOR_ACTION
  9. default            → EMOTIONAL when short, otherwise READY_FOR_ACTION

The classifier is stateless: the same ``(text, prior_mode)`` always
produces the same Signal.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import structlog

from frank.core.dialogue.models import CertaintyLevel, Mode, Signal, SignalType
from frank.core.rules.matching import compile_patterns, contains_any, search_any, word_count
from frank.core.rules.model import RuleConfig

logger = structlog.get_logger()

Predicate = Callable[[str, Mode | None], bool]


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    predicate: Predicate
    signal_type: SignalType
    loss_of_function: bool = False


def detect_certainty(text: str, rules: RuleConfig) -> CertaintyLevel:
    """High markers are checked first; no marker at all means MEDIUM."""
    if contains_any(text, rules.certainty.high):
        return CertaintyLevel.HIGH
    if contains_any(text, rules.certainty.low):
        return CertaintyLevel.LOW
    return CertaintyLevel.MEDIUM


class InputClassifier:
    """Classifies free text into a Signal using one frozen RuleConfig."""

    def __init__(self, rules: RuleConfig) -> None:
        self._rules = rules
        self._explanatory = compile_patterns(rules.classification.explanatory_patterns)
        self.rules: tuple[ClassificationRule, ...] = self._build_rules()

    @property
    def rule_names(self) -> list[str]:
        return [r.name for r in self.rules]

    def _build_rules(self) -> tuple[ClassificationRule, ...]:
        ow = self._rules.overwhelm
        cls = self._rules.classification

        def is_short(text: str, _prior: Mode | None) -> bool:
            return word_count(text) < cls.default_max_words

        return (
            ClassificationRule(
                "loss_of_function",
                lambda t, _p: contains_any(t, ow.loss_of_function),
                SignalType.OVERWHELMED,
                loss_of_function=True,
            ),
            ClassificationRule(
                "intensity_only",
                lambda t, _p: contains_any(t, ow.intensity_only),
                SignalType.INTENSE_EMOTION,
            ),
            ClassificationRule(
                "generic_overwhelm",
                lambda t, _p: contains_any(t, ow.generic),
                SignalType.OVERWHELMED,
            ),
            ClassificationRule(
                "shrink_request",
                lambda t, _p: contains_any(t, cls.shrink),
                SignalType.REQUEST_TO_SHRINK,
            ),
            ClassificationRule(
                "clarifying_reply",
                lambda t, p: p == Mode.CLARIFYING and bool(t.strip()),
                SignalType.READY_FOR_ACTION,
            ),
            ClassificationRule(
                "explanatory",
                lambda t, p: p != Mode.CLARIFYING and search_any(t, self._explanatory),
                SignalType.EXPLANATORY,
            ),
            ClassificationRule(
                "emotional",
                lambda t, _p: contains_any(t, cls.emotional),
                SignalType.EMOTIONAL,
            ),
            ClassificationRule(
                "assignment",
                lambda t, _p: contains_any(t, cls.assignment),
                SignalType.READY_FOR_ACTION,
            ),
            ClassificationRule("default", is_short, SignalType.EMOTIONAL),
        )

    def classify(self, text: str, prior_mode: Mode | None = None) -> Signal:
        """
        Classify one turn.

        Args:
            text:       Raw user input.
            prior_mode: The mode the conversation was in before this turn.

        Returns:
            A Signal naming the rule that fired.  Unmatched long input falls
            through to READY_FOR_ACTION.
        """
        certainty = detect_certainty(text, self._rules)
        for rule in self.rules:
            if rule.predicate(text, prior_mode):
                signal = Signal(
                    type=rule.signal_type,
                    certainty_level=certainty,
                    has_loss_of_function=rule.loss_of_function,
                    rule=rule.name,
                )
                break
        else:
            signal = Signal(
                type=SignalType.READY_FOR_ACTION,
                certainty_level=certainty,
                rule="default",
            )

        logger.debug(
            "turn_classified",
            signal=str(signal.type),
            certainty=str(signal.certainty_level),
            loss_of_function=signal.has_loss_of_function,
            rule=signal.rule,
            words=word_count(text),
        )
        return signal
