"""
TaskBreakdownPlanner — turns accepted input into ordered guided steps.

Task type is decided before any steps are built, and a cry for help is
checked before assignment words: "I hate this essay and can't cope" is a
resilience_help breakdown, not an essay outline.

Breakdowns are pure functions of their inputs.  The resilience list only
starts with "Take a Breath" when the input being answered carries an
explicit overwhelm marker (or the user picked Pause).  Once a step has
been answered, callers pass the decision back as *regulation* so saved
step indexes keep pointing at the same step.
"""

from __future__ import annotations

import hashlib

import structlog

from frank.core.planner.models import TaskBreakdown, TaskType
from frank.core.planner.templates import (
    DEFAULT_HOW_TO_START,
    HOW_TO_START,
    PERSONA_MESSAGES,
    RESILIENCE_ACKNOWLEDGEMENTS,
    STEP_TEMPLATES,
    TAKE_A_BREATH,
)
from frank.core.rules.matching import contains_any, has_explicit_overwhelm
from frank.core.rules.model import RuleConfig

logger = structlog.get_logger()


class TaskBreakdownPlanner:
    def __init__(self, rules: RuleConfig) -> None:
        self._rules = rules

    def classify_task(self, text: str) -> TaskType:
        planner = self._rules.planner
        lower = text.lower()
        if contains_any(lower, planner.general_help):
            return TaskType.RESILIENCE_HELP
        if contains_any(lower, planner.compare_contrast):
            return TaskType.COMPARE_CONTRAST
        if "essay" in lower or ("write" in lower and "paper" in lower):
            return TaskType.ESSAY
        if contains_any(lower, planner.reading):
            return TaskType.READING_RESPONSE
        return TaskType.GENERAL

    def generate(
        self,
        text: str,
        task_type: TaskType | None = None,
        *,
        current_input: str | None = None,
        user_selected_pause: bool = False,
        regulation: bool | None = None,
    ) -> TaskBreakdown:
        """
        Build the breakdown for *text*.

        Args:
            text:                The input that defined the task.
            task_type:           Force a type instead of classifying *text*.
            current_input:       The latest user turn; the breathing step is
                                 decided from it.  Defaults to *text*.
            user_selected_pause: The user chose Pause on the previous turn.
            regulation:          A breathing-step decision already made for
                                 this task.  When given it wins over
                                 *current_input* and *user_selected_pause*.
        """
        kind = task_type or self.classify_task(text)
        steps = STEP_TEMPLATES[kind]

        if kind == TaskType.RESILIENCE_HELP:
            if regulation is None:
                regulation_text = text if current_input is None else current_input
                regulation = user_selected_pause or has_explicit_overwhelm(
                    regulation_text, self._rules
                )
            if regulation:
                steps = (TAKE_A_BREATH, *steps)

        breakdown = TaskBreakdown(
            type=kind,
            persona_message=self._persona_message(text, kind),
            how_to_start=HOW_TO_START.get(kind, DEFAULT_HOW_TO_START),
            steps=steps,
        )
        logger.debug(
            "breakdown_generated",
            task_type=str(kind),
            steps=len(breakdown),
            regulation=breakdown.has_regulation,
        )
        return breakdown

    @staticmethod
    def _persona_message(text: str, kind: TaskType) -> str:
        if kind == TaskType.RESILIENCE_HELP:
            digest = hashlib.sha256(text.strip().lower().encode()).digest()
            return RESILIENCE_ACKNOWLEDGEMENTS[digest[0] % len(RESILIENCE_ACKNOWLEDGEMENTS)]
        return PERSONA_MESSAGES[kind]
