"""Task breakdown models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class TaskType(StrEnum):
    RESILIENCE_HELP = "resilience_help"
    COMPARE_CONTRAST = "compare_contrast"
    ESSAY = "essay"
    READING_RESPONSE = "reading_response"
    GENERAL = "general"


@dataclass(frozen=True)
class Step:
    title: str
    description: str
    needs_input: bool = False
    input_prompt: str | None = None
    input_placeholder: str | None = None
    checklist: tuple[str, ...] = ()
    analogy: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "needs_input": self.needs_input,
            "input_prompt": self.input_prompt,
            "input_placeholder": self.input_placeholder,
            "checklist": list(self.checklist),
            "analogy": self.analogy,
        }


@dataclass(frozen=True)
class HowToStart:
    title: str
    content: str


@dataclass(frozen=True)
class TaskBreakdown:
    """
    Ordered guided steps for one task.

    Always rebuilt from the original input; only progress through it
    (step index, answers, checklist ticks) is ever stored.
    """

    type: TaskType
    persona_message: str
    how_to_start: HowToStart
    steps: tuple[Step, ...]

    def __len__(self) -> int:
        return len(self.steps)

    @property
    def has_regulation(self) -> bool:
        """True when the list opens with the breathing step."""
        return bool(self.steps) and self.steps[0].title == "Take a Breath"

    def step(self, index: int) -> Step | None:
        if 0 <= index < len(self.steps):
            return self.steps[index]
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": str(self.type),
            "persona_message": self.persona_message,
            "how_to_start": {
                "title": self.how_to_start.title,
                "content": self.how_to_start.content,
            },
            "steps": [s.to_dict() for s in self.steps],
        }


@dataclass
class TaskProgress:
    """Where one conversation is within its breakdown.  This is what gets saved."""

    task_input: str | None = None
    task_type: TaskType | None = None
    step_index: int = 0
    answers: list[str] = field(default_factory=list)
    checklist_progress: dict[str, bool] = field(default_factory=dict)
    user_selected_pause: bool = False
    shrunk: bool = False  # the current step was replaced by one tiny step
    regulated: bool | None = None  # breathing step shown; fixed once a step is answered

    @property
    def has_task(self) -> bool:
        return self.task_input is not None

    def record_answer(self, answer: str) -> None:
        self.answers.append(answer)
        self.step_index += 1
        self.shrunk = False

    def tick(self, item_index: int, done: bool = True) -> None:
        self.checklist_progress[f"{self.step_index}:{item_index}"] = done

    def clear(self) -> None:
        self.task_input = None
        self.task_type = None
        self.step_index = 0
        self.answers.clear()
        self.checklist_progress.clear()
        self.user_selected_pause = False
        self.shrunk = False
        self.regulated = None
