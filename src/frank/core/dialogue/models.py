"""
Dialogue domain models.

Signal            — classified intent of one user turn (never persisted).
ConversationTurn  — one entry in a session's conversation context.
Response          — the single coherent reply produced for a turn.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from types import MappingProxyType
from typing import Any


class SignalType(StrEnum):
    OVERWHELMED = "overwhelmed"
    INTENSE_EMOTION = "intense_emotion"
    EMOTIONAL = "emotional"
    EXPLANATORY = "explanatory"
    REQUEST_TO_SHRINK = "request_to_shrink"
    READY_FOR_ACTION = "ready_for_action"


class CertaintyLevel(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Mode(StrEnum):
    """The one behavioural state that decides which Response fields are legal."""

    LISTENING = "listening"
    CLARIFYING = "clarifying"
    OFFERING_DIRECTION = "offering_direction"
    CALMING = "calming"
    STEPPING = "stepping"


@dataclass(frozen=True)
class Signal:
    type: SignalType
    certainty_level: CertaintyLevel
    has_loss_of_function: bool = False
    rule: str = ""  # name of the classification rule that fired


@dataclass
class ConversationTurn:
    """One user turn.  Flags are set by the composer that answered it."""

    raw_input: str
    signal: Signal
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())
    had_question: bool = False
    last_question: str | None = None
    selected_direction: str | None = None
    internal_state: str | None = None


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

ACTION_ID_OVERRIDES: MappingProxyType[str, str] = MappingProxyType(
    {
        "Pause": "pause",
        "Pause for now": "pause",
        "Come back later": "pause",
        "Make this smaller": "make-smaller",
        "Make it smaller": "make-smaller",
        "Start this step": "start-step",
    }
)

PAUSE_ACTION_ID = "pause"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def action_id_for(label: str) -> str:
    """Kebab-case *label* unless it has a fixed id."""
    if label in ACTION_ID_OVERRIDES:
        return ACTION_ID_OVERRIDES[label]
    return _NON_ALNUM.sub("-", label.lower()).strip("-")


@dataclass(frozen=True)
class Action:
    label: str
    action_id: str

    @classmethod
    def from_label(cls, label: str) -> Action:
        return cls(label=label, action_id=action_id_for(label))

    def to_dict(self) -> dict[str, str]:
        return {"label": self.label, "action_id": self.action_id}


def actions_from_labels(*labels: str) -> tuple[Action, ...]:
    return tuple(Action.from_label(label) for label in labels)


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StepPayload:
    """The message Stepping carries: one guided step."""

    title: str
    description: str
    needs_input: bool = False
    input_prompt: str | None = None
    input_placeholder: str | None = None
    checklist: tuple[str, ...] = ()
    step_index: int = 0
    total_steps: int = 1
    lead_in: str | None = None  # short mirror shown above the step

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "needs_input": self.needs_input,
            "input_prompt": self.input_prompt,
            "input_placeholder": self.input_placeholder,
            "checklist": list(self.checklist),
            "step_index": self.step_index,
            "total_steps": self.total_steps,
            "lead_in": self.lead_in,
        }


@dataclass(frozen=True)
class Response:
    """
    The reply to one turn.

    ``mode`` is authoritative: the state machine strips any field the mode
    does not allow and records what it removed in ``repairs``.
    """

    mode: Mode
    message: str | StepPayload | None
    question: str | None = None
    actions: tuple[Action, ...] = ()
    repairs: tuple[str, ...] = ()
    internal_state: str | None = None

    @property
    def action_labels(self) -> list[str]:
        return [a.label for a in self.actions]

    @property
    def action_ids(self) -> list[str]:
        return [a.action_id for a in self.actions]

    def to_dict(self) -> dict[str, Any]:
        message: Any = self.message
        if isinstance(message, StepPayload):
            message = message.to_dict()
        return {
            "mode": str(self.mode),
            "message": message,
            "question": self.question,
            "actions": [a.to_dict() for a in self.actions],
        }
