"""Unit tests for frank.core.dialogue.composer and its phrase tables."""

from __future__ import annotations

import pytest
import structlog

from frank.core.dialogue.composer import ResponseComposer
from frank.core.dialogue.models import CertaintyLevel, Mode, StepPayload
from frank.core.dialogue.phrases import (
    CALMING_REASSURANCE,
    CLARIFYING_QUESTION,
    MIRROR_EMOTION,
    NARROW_CHOICES,
    direct_phrases,
    hedged_phrases,
)
from frank.core.dialogue.state import GENERIC_MIRROR, ConversationStateMachine
from frank.core.planner.models import TaskProgress
from frank.core.rules import DEFAULT_RULES

_TENTATIVE = ("might", "could", "sounds like", "maybe", "perhaps")


@pytest.fixture
def composer() -> ResponseComposer:
    return ResponseComposer(DEFAULT_RULES)


@pytest.fixture
def state() -> ConversationStateMachine:
    return ConversationStateMachine(session_id="test")


@pytest.fixture
def progress() -> TaskProgress:
    return TaskProgress()


def _turn(composer, state, progress, text):
    response = composer.generate(text, state, progress)
    state.commit(response)
    return response


class TestPhrases:
    def test_every_hedged_phrase_is_tentative(self) -> None:
        for phrase in hedged_phrases():
            assert any(w in phrase.lower() for w in _TENTATIVE), phrase

    def test_hedged_and_direct_sets_differ(self) -> None:
        assert hedged_phrases().isdisjoint(direct_phrases())

    def test_pick_by_keyword_and_certainty(self) -> None:
        assert MIRROR_EMOTION.pick("I hate it", CertaintyLevel.HIGH) == "That sounds really hard."
        assert "might" in MIRROR_EMOTION.pick("I hate it", CertaintyLevel.LOW)

    def test_default_entry(self) -> None:
        assert CLARIFYING_QUESTION.pick("blah", CertaintyLevel.MEDIUM) == (
            "What's bothering you about this?"
        )


class TestBranches:
    def test_loss_of_function_is_calming(self, composer, state, progress) -> None:
        response = _turn(composer, state, progress, "I can't do this, it's too much")
        assert response.mode == Mode.CALMING
        assert response.message == CALMING_REASSURANCE
        assert response.question is None
        assert response.action_labels == ["Pause", "Come back later"]
        assert set(response.action_ids) == {"pause"}

    def test_generic_overwhelm_checks_function(self, composer, state, progress) -> None:
        response = _turn(composer, state, progress, "It's too much")
        assert response.mode == Mode.CLARIFYING
        assert response.question is not None
        assert response.actions == ()

    def test_emotional_is_clarifying(self, composer, state, progress) -> None:
        response = _turn(composer, state, progress, "I hate math")
        assert response.mode == Mode.CLARIFYING
        assert response.message == "That sounds really hard."
        assert response.question == "What about it feels the worst right now?"
        turn = state.turns[-1]
        assert turn.had_question is True
        assert turn.last_question == response.question

    def test_low_certainty_uses_hedged_phrasing(self, composer, state, progress) -> None:
        response = _turn(composer, state, progress, "this feels kind of pointless")
        assert response.mode == Mode.CLARIFYING
        assert response.message in hedged_phrases()
        assert response.question in hedged_phrases()
        assert "might" in response.message

    def test_explanatory_reflects_meaning(self, composer, state, progress) -> None:
        response = _turn(composer, state, progress, "it doesn't feel relevant to my life")
        assert response.mode == Mode.CLARIFYING
        assert "doesn't connect to your life" in response.question

    def test_unmatched_explanation_gets_narrowing_question(
        self, composer, state, progress
    ) -> None:
        response = _turn(composer, state, progress, "the problem is the professor")
        assert response.mode == Mode.CLARIFYING
        assert response.question == NARROW_CHOICES.default.direct
        assert response.question.endswith("?")
        assert " or " in response.question

    def test_shrink_request_offers_direction(self, composer, state, progress) -> None:
        response = _turn(composer, state, progress, "can you break it down")
        assert response.mode == Mode.OFFERING_DIRECTION
        assert "Make this smaller" in response.action_labels
        assert 2 <= len(response.actions) <= 4

    def test_first_turn_direct_request_steps(self, composer, state, progress) -> None:
        response = _turn(composer, state, progress, "help me write an essay about World War I")
        assert response.mode == Mode.STEPPING
        assert response.question is None
        assert "Start this step" in response.action_labels
        assert isinstance(response.message, StepPayload)
        assert response.message.title == "Understand What You're Being Asked"
        assert progress.task_input == "help me write an essay about World War I"

    def test_stepping_without_readiness_has_no_actions(self, composer, state, progress) -> None:
        text = "the weather today is grey and we walked around the park for a while before lunch"
        response = _turn(composer, state, progress, text)
        assert response.mode == Mode.STEPPING
        assert response.actions == ()


class TestAnswerPath:
    def test_answer_is_acknowledged_not_questioned(self, composer, state, progress) -> None:
        _turn(composer, state, progress, "I hate math")
        response = _turn(composer, state, progress, "the reading is just confusing")
        assert response.mode != Mode.CLARIFYING
        assert response.question is None
        assert response.mode == Mode.OFFERING_DIRECTION
        assert response.message.startswith("Confusing makes everything harder.")
        assert response.action_labels[:2] == ["That makes sense", "Talk more about this"]
        assert "Pause for now" not in response.action_labels
        assert response.internal_state == "understanding"

    def test_pause_offered_only_with_explicit_overwhelm(self, composer, state, progress) -> None:
        _turn(composer, state, progress, "I hate math")
        response = _turn(composer, state, progress, "it's hard and I'm stressed")
        assert response.mode == Mode.OFFERING_DIRECTION
        assert response.action_labels[-1] == "Pause for now"

    def test_answer_with_readiness_goes_to_step(self, composer, state, progress) -> None:
        _turn(composer, state, progress, "I hate math")
        response = _turn(composer, state, progress, "the hard part is where to start")
        assert response.mode == Mode.STEPPING
        assert isinstance(response.message, StepPayload)
        assert response.message.lead_in is not None
        assert response.question is None


class TestFailures:
    def test_composer_failure_yields_listening(
        self, composer, state, progress, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def boom(*_args, **_kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(composer.classifier, "classify", boom)
        with structlog.testing.capture_logs() as captured:
            response = composer.generate("anything at all", state, progress)
        assert response.mode == Mode.LISTENING
        assert response.message == GENERIC_MIRROR
        assert any(e["event"] == "composer_failed" for e in captured)

    def test_no_clarifying_with_actions_across_inputs(self, composer) -> None:
        inputs = [
            "I can't think",
            "It's too much",
            "this is unbearable",
            "I hate this essay",
            "make it smaller",
            "it doesn't feel relevant",
            "ok",
            "help me with my homework",
        ]
        for text in inputs:
            state = ConversationStateMachine()
            response = composer.generate(text, state, TaskProgress())
            if response.mode == Mode.CLARIFYING:
                assert response.actions == (), text
            if response.mode == Mode.STEPPING:
                assert response.question is None, text

