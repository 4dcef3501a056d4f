"""
Multi-turn conversation flows, end to end through ConversationSession.

Each test drives a session the way the chat loop does: free text in,
actions picked by id, and a real SQLite store for pause and resume.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from frank.core.dialogue.models import Mode, StepPayload
from frank.core.rules import DEFAULT_RULES, parse_rules
from frank.core.session.conversation import ConversationSession
from frank.core.store.progress import ProgressStore

ESSAY = "help me write an essay about World War I"


@pytest.fixture
def store(tmp_path: Path) -> ProgressStore:
    s = ProgressStore(tmp_path / "flows.db")
    s.connect()
    yield s
    s.close()


class TestEssayFlow:
    def test_first_two_steps(self, store: ProgressStore) -> None:
        session = ConversationSession(store=store)

        opening = session.submit(ESSAY)
        assert opening.mode == Mode.STEPPING
        assert opening.message.title == "Understand What You're Being Asked"
        assert opening.message.total_steps == 5
        assert opening.action_labels == ["Start this step", "Make it smaller"]

        session.select_action("start-step")
        done = session.submit("I have to explain why the war started")
        assert done.mode == Mode.OFFERING_DIRECTION
        assert done.action_labels == ["Keep going", "Come back later"]

        second = session.select_action("keep-going")
        assert second.message.title == "Brainstorm Your Ideas"
        assert second.message.step_index == 1

    def test_come_back_later_saves_and_resumes(self, store: ProgressStore) -> None:
        session = ConversationSession(store=store)
        session.submit(ESSAY)
        session.select_action("start-step")
        session.submit("I have to explain why the war started")

        paused = session.select_action("pause")
        assert paused.mode == Mode.CALMING
        assert session.is_paused

        [saved] = store.list()
        assert saved.current_step_index == 1

        later = ConversationSession(store=store)
        resumed = later.resume(saved)
        assert resumed.mode == Mode.STEPPING
        assert resumed.message.title == "Brainstorm Your Ideas"

        later.select_action("start-step")
        later.submit("alliances, nationalism")
        assert later.progress.answers == [
            "I have to explain why the war started",
            "alliances, nationalism",
        ]


class TestFeelingsFlow:
    def test_explained_concern_is_not_questioned_again(self) -> None:
        session = ConversationSession()

        first = session.submit("I hate math")
        assert first.mode == Mode.CLARIFYING
        assert first.question

        second = session.submit("the reading is just confusing")
        assert second.mode == Mode.OFFERING_DIRECTION
        assert second.question is None
        assert "Help me get through the minimum" in second.action_labels

        third = session.select_action("help-me-get-through-the-minimum")
        assert third.mode == Mode.STEPPING
        assert isinstance(third.message, StepPayload)
        assert third.message.title == "Name What's Happening"
        assert "Start this step" in third.action_labels

    def test_overwhelmed_task_resumes_on_same_step(self, store: ProgressStore) -> None:
        session = ConversationSession(store=store)
        session.submit("I hate this, I'm overwhelmed")
        ready = session.submit("I can think, help me start")
        assert "start-step" in ready.action_ids
        session.select_action("start-step")
        session.submit("I keep putting it off")
        expected = session.breakdown().step(1).title
        session.pause()

        [saved] = store.list()
        assert saved.current_step_index == 1
        resumed = ConversationSession(store=store).resume(saved)
        assert resumed.message.title == expected == "What Can You Control?"

    def test_step_input_saying_too_much_calms(self) -> None:
        session = ConversationSession()
        session.submit(ESSAY)
        session.select_action("start-step")
        response = session.submit("I can't do this, it's too much")
        assert response.mode == Mode.CALMING
        assert session.progress.answers == []

    def test_overwhelm_goes_to_calming(self) -> None:
        session = ConversationSession()
        response = session.submit("I can't think, my mind is blank")
        assert response.mode == Mode.CALMING
        assert response.question is None
        assert {a.action_id for a in response.actions} == {"pause"}

    def test_shrink_then_tiny_step(self) -> None:
        session = ConversationSession()
        session.submit(ESSAY)
        offer = session.submit("can you make it smaller")
        assert offer.mode == Mode.OFFERING_DIRECTION
        tiny = session.select_action("make-smaller")
        assert tiny.message.title == "One Tiny Thing"


class TestCustomRules:
    def test_extended_vocabulary_changes_routing(self) -> None:
        rules = parse_rules(
            "extend:\n  overwhelm:\n    loss_of_function: [brain is fried]\n"
        )
        assert ConversationSession().submit("my brain is fried").mode != Mode.CALMING
        assert ConversationSession(rules).submit("my brain is fried").mode == Mode.CALMING

    def test_sessions_share_rules_not_state(self) -> None:
        a = ConversationSession(DEFAULT_RULES)
        b = ConversationSession(DEFAULT_RULES)
        a.submit(ESSAY)
        assert a.progress.has_task
        assert not b.progress.has_task
