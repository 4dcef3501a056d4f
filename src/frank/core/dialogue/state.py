"""
Conversation mode state machine.

Every response is in exactly one mode, and the mode decides which fields
the response may carry:

  mode                 message       question    actions
  listening            required      forbidden   forbidden
  clarifying           required      required    forbidden
  offering_direction   required      forbidden   2-4 items
  calming              required      forbidden   pause-class only
  stepping             step payload  forbidden   0-2 items

``validate`` repairs a response that breaks its mode's row: forbidden
fields are stripped, excess actions are cut, and a missing required field
is filled with a generic one (too few direction options are topped up
from ``GENERIC_DIRECTIONS``).  Each repair is logged as
``mode_invariant_repaired`` and listed on the returned response.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass, field

import structlog

from frank.core.constants import (
    MAX_DIRECTION_OPTIONS,
    MAX_STEPPING_ACTIONS,
    MIN_DIRECTION_OPTIONS,
)
from frank.core.dialogue.models import (
    PAUSE_ACTION_ID,
    ConversationTurn,
    Mode,
    Response,
    StepPayload,
    actions_from_labels,
)

logger = structlog.get_logger()

GENERIC_MIRROR = "I hear you."
GENERIC_QUESTION = "What's bothering you about this?"
GENERIC_DIRECTIONS = actions_from_labels("That makes sense", "Talk more about this")

DEFAULT_STEP = StepPayload(
    title="One Tiny Thing",
    description="What's the smallest, easiest part you could do right now? Just one thing.",
    needs_input=True,
    input_prompt="What's one tiny thing you could do?",
    input_placeholder="Type one small thing...",
)


@dataclass(frozen=True)
class ModeRule:
    """One row of the mode table."""

    question: bool  # required when True, forbidden otherwise
    min_actions: int
    max_actions: int
    step_message: bool = False
    allowed_action_ids: frozenset[str] | None = None  # None = any id


MODE_RULES: dict[Mode, ModeRule] = {
    Mode.LISTENING: ModeRule(question=False, min_actions=0, max_actions=0),
    Mode.CLARIFYING: ModeRule(question=True, min_actions=0, max_actions=0),
    Mode.OFFERING_DIRECTION: ModeRule(
        question=False, min_actions=MIN_DIRECTION_OPTIONS, max_actions=MAX_DIRECTION_OPTIONS
    ),
    Mode.CALMING: ModeRule(
        question=False,
        min_actions=0,
        max_actions=2,
        allowed_action_ids=frozenset({PAUSE_ACTION_ID}),
    ),
    Mode.STEPPING: ModeRule(
        question=False, min_actions=0, max_actions=MAX_STEPPING_ACTIONS, step_message=True
    ),
}


def _repair(repairs: list[str], mode: Mode, what: str) -> None:
    repairs.append(what)
    logger.info("mode_invariant_repaired", mode=str(mode), repair=what)


def validate(response: Response) -> Response:
    """Return *response* with every field its mode forbids removed."""
    mode = response.mode
    rule = MODE_RULES[mode]
    repairs: list[str] = []

    message = response.message
    if rule.step_message:
        if not isinstance(message, StepPayload):
            _repair(repairs, mode, "message_replaced_with_step")
            message = DEFAULT_STEP
    elif isinstance(message, StepPayload):
        _repair(repairs, mode, "step_payload_removed")
        message = GENERIC_MIRROR
    elif not message or not message.strip():
        _repair(repairs, mode, "message_filled")
        message = GENERIC_MIRROR

    question = response.question
    if rule.question and not question:
        _repair(repairs, mode, "question_filled")
        question = GENERIC_QUESTION
    elif not rule.question and question is not None:
        _repair(repairs, mode, "question_stripped")
        question = None

    actions = response.actions
    if rule.allowed_action_ids is not None:
        kept = tuple(a for a in actions if a.action_id in rule.allowed_action_ids)
        if len(kept) != len(actions):
            _repair(repairs, mode, "actions_not_allowed_stripped")
            actions = kept
    if len(actions) > rule.max_actions:
        _repair(repairs, mode, "actions_truncated" if rule.max_actions else "actions_stripped")
        actions = actions[: rule.max_actions]
    if len(actions) < rule.min_actions:
        _repair(repairs, mode, "actions_filled")
        ids = {a.action_id for a in actions}
        extra = tuple(a for a in GENERIC_DIRECTIONS if a.action_id not in ids)
        actions = (actions + extra)[: rule.min_actions]

    if not repairs:
        return response
    return dataclasses.replace(
        response,
        message=message,
        question=question,
        actions=actions,
        repairs=response.repairs + tuple(repairs),
    )


@dataclass
class ConversationStateMachine:
    """Holds the active mode and conversation context for one session."""

    session_id: str = ""
    mode: Mode | None = None
    turns: list[ConversationTurn] = field(default_factory=list)
    history: list[tuple[Mode, str]] = field(default_factory=list)
    on_transition: Callable[[Mode | None, Mode], None] | None = None

    @property
    def prior_mode(self) -> Mode | None:
        return self.mode

    @property
    def last_turn(self) -> ConversationTurn | None:
        return self.turns[-1] if self.turns else None

    @property
    def is_first_turn(self) -> bool:
        return len(self.turns) <= 1

    def append_turn(self, turn: ConversationTurn) -> None:
        self.turns.append(turn)

    def validate(self, response: Response) -> Response:
        return validate(response)

    def commit(self, response: Response, reason: str = "") -> None:
        """Set the active mode for this turn and record it."""
        old = self.mode
        self.mode = response.mode
        self.history.append((response.mode, reason or f"{old} → {response.mode}"))
        logger.debug(
            "mode_committed",
            session_id=self.session_id,
            from_mode=str(old) if old else None,
            to_mode=str(response.mode),
        )
        if self.on_transition:
            self.on_transition(old, response.mode)

    def reset(self) -> None:
        self.mode = None
        self.turns.clear()
        self.history.clear()
