"""
ConversationSession — one conversation, one turn at a time.

The session owns everything that changes during a conversation: the mode
state machine, the turn context and progress through the current task.
Create one per conversation; nothing here is module-global, so any number
of sessions can run side by side.

Per turn::

    text ─► empty check ─► content policy ─► ResponseComposer ─► commit mode
                              │
                              └─ blocked: canned redirect, composer skipped

Actions picked from a Response come back through ``select_action``.
"Pause" saves a ProgressSnapshot and stops the session producing turns
until ``resume()``.
"""

from __future__ import annotations

import secrets
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from frank.core.dialogue.composer import ResponseComposer
from frank.core.dialogue.models import (
    ConversationTurn,
    Mode,
    Response,
    actions_from_labels,
)
from frank.core.dialogue.phrases import (
    ALL_STEPS_DONE,
    PAUSED_MESSAGE,
    RESUMED,
    STEP_DONE,
    WELCOME_BACK,
)
from frank.core.dialogue.state import ConversationStateMachine
from frank.core.exceptions import (
    EmptyInputError,
    SessionBusyError,
    SessionError,
    SessionPausedError,
)
from frank.core.planner.models import TaskBreakdown, TaskProgress, TaskType
from frank.core.policy.content import ContentPolicy
from frank.core.rules.defaults import DEFAULT_RULES
from frank.core.rules.model import RuleConfig
from frank.core.store.progress import ProgressSnapshot, ProgressStore

logger = structlog.get_logger()


class ConversationSession:
    """
    Orchestrates one conversation.

    Args:
        rules:         Frozen rule vocabulary; defaults to ``DEFAULT_RULES``.
        store:         Connected ProgressStore used on pause, or None.
        session_id:    Identifier bound into every log line.
        save_on_pause: Persist progress when the user pauses.
    """

    def __init__(
        self,
        rules: RuleConfig | None = None,
        *,
        store: ProgressStore | None = None,
        session_id: str | None = None,
        save_on_pause: bool = True,
    ) -> None:
        self.rules = rules or DEFAULT_RULES
        self.session_id = session_id or secrets.token_hex(6)
        self.state = ConversationStateMachine(session_id=self.session_id)
        self.progress = TaskProgress()
        self.composer = ResponseComposer(self.rules)
        self.policy = ContentPolicy(self.rules)
        self._store = store
        self._save_on_pause = save_on_pause
        self._busy = False
        self._paused = False
        self._awaiting_step_input = False
        self._last_response: Response | None = None
        self._log = logger.bind(session_id=self.session_id)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def mode(self) -> Mode | None:
        return self.state.mode

    @property
    def turns(self) -> list[ConversationTurn]:
        return self.state.turns

    @property
    def last_response(self) -> Response | None:
        return self._last_response

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def awaiting_step_input(self) -> bool:
        return self._awaiting_step_input

    def breakdown(self) -> TaskBreakdown | None:
        """The current task's breakdown, rebuilt from its original input."""
        if self.progress.task_input is None:
            return None
        breakdown = self.composer.planner.generate(
            self.progress.task_input,
            self.progress.task_type,
            current_input=self._latest_input(),
            user_selected_pause=self.progress.user_selected_pause,
            regulation=self.progress.regulated if self.progress.step_index > 0 else None,
        )
        self.progress.regulated = breakdown.has_regulation
        return breakdown

    # ------------------------------------------------------------------
    # Turns
    # ------------------------------------------------------------------

    def submit(self, text: str) -> Response:
        """
        Answer one user turn.

        While a started step is waiting for input, the text is taken as the
        step's answer, unless it says the step is too much or asks for a
        smaller one.  Then the step stays current and the response adapts.

        Raises:
            EmptyInputError:    *text* is empty or whitespace.
            SessionPausedError: the session is paused.
            SessionBusyError:   called again while a turn is being composed.
        """
        if not text or not text.strip():
            raise EmptyInputError("Input is empty")
        self._ensure_active()

        with self._turn():
            category = self.policy.check(text)
            if category is not None:
                response = self.policy.redirect_response()
                self._finish(response, f"content policy: {category}")
                return response

            if self._awaiting_step_input:
                feedback = self.composer.step_feedback(text, self.state, self.progress)
                if feedback is None:
                    return self._complete_step(text)
                self._awaiting_step_input = False
                return self._finish(feedback, "step feedback")

            response = self.composer.generate(text, self.state, self.progress)
            self._finish(response, "turn")
            return response

    def select_action(self, action_id: str) -> Response:
        """
        Act on one of the actions offered by the last response.

        Fixed ids (pause, start-step, make-smaller, keep-going) are handled
        here; any other action is fed back in as the user saying its label.
        """
        self._ensure_active()
        offered = self._last_response.actions if self._last_response else ()
        action = next((a for a in offered if a.action_id == action_id), None)
        if action is None:
            raise SessionError(f"Action {action_id!r} was not offered on the last turn")

        if (last := self.state.last_turn) is not None:
            last.selected_direction = action.label
        self._log.info("action_selected", action_id=action_id)

        match action_id:
            case "pause":
                with self._turn():
                    return self._pause_turn()
            case "start-step":
                with self._turn():
                    return self._start_step()
            case "make-smaller":
                with self._turn():
                    return self._make_smaller()
            case "keep-going":
                with self._turn():
                    return self._keep_going()
            case _:
                return self.submit(action.label)

    def complete_step(self, answer: str = "") -> Response:
        """Record *answer* for the current step and move to the next one."""
        self._ensure_active()
        with self._turn():
            return self._complete_step(answer)

    def tick(self, item_index: int, done: bool = True) -> None:
        """Tick (or untick) a checklist item on the current step."""
        self.progress.tick(item_index, done)

    # ------------------------------------------------------------------
    # Pause / resume / reset
    # ------------------------------------------------------------------

    def snapshot(self) -> ProgressSnapshot | None:
        if self.progress.task_input is None:
            return None
        return ProgressSnapshot(
            original_input=self.progress.task_input,
            answers=list(self.progress.answers),
            current_step_index=self.progress.step_index,
            checklist_progress=dict(self.progress.checklist_progress),
            task_type=str(self.progress.task_type) if self.progress.task_type else None,
            regulated=self.progress.regulated,
        )

    def pause(self) -> ProgressSnapshot | None:
        """Stop producing turns; save progress if there is a task and a store."""
        snapshot = self.snapshot()
        if snapshot is not None and self._store is not None and self._save_on_pause:
            snapshot = self._store.save(snapshot)
        self._paused = True
        self._awaiting_step_input = False
        self._log.info("session_paused", has_task=snapshot is not None)
        return snapshot

    def resume(self, snapshot: ProgressSnapshot | None = None) -> Response:
        """
        Continue after a pause, optionally from a saved snapshot.

        With a task in progress the response is the step the user stopped
        on; otherwise a plain welcome.
        """
        if snapshot is not None:
            self.progress.clear()
            self.progress.task_input = snapshot.original_input
            self.progress.task_type = TaskType(snapshot.task_type) if snapshot.task_type else None
            self.progress.answers = list(snapshot.answers)
            self.progress.step_index = snapshot.current_step_index
            self.progress.checklist_progress = dict(snapshot.checklist_progress)
            self.progress.regulated = snapshot.regulated
        self._paused = False
        self.progress.user_selected_pause = False
        self._log.info("session_resumed", has_task=self.progress.has_task)

        with self._turn():
            if not self.progress.has_task:
                response = Response(mode=Mode.LISTENING, message=RESUMED)
            else:
                d = self.rules.directions
                response = Response(
                    mode=Mode.STEPPING,
                    message=self.composer.next_step(
                        self._latest_input(), self.state, self.progress, lead_in=WELCOME_BACK
                    ),
                    actions=actions_from_labels(d.start_step, d.make_step_smaller),
                )
            return self._finish(response, "resume")

    def reset(self) -> None:
        """Forget the conversation and the task; start over."""
        self.state.reset()
        self.progress.clear()
        self._paused = False
        self._awaiting_step_input = False
        self._last_response = None
        self._log.info("session_reset")

    # ------------------------------------------------------------------
    # Action handlers (called inside _turn)
    # ------------------------------------------------------------------

    def _pause_turn(self) -> Response:
        self.progress.user_selected_pause = True
        response = self._finish(Response(mode=Mode.CALMING, message=PAUSED_MESSAGE), "pause")
        self.pause()
        return response

    def _start_step(self) -> Response:
        payload = self.composer.next_step(self._latest_input(), self.state, self.progress)
        self._awaiting_step_input = True
        return self._finish(Response(mode=Mode.STEPPING, message=payload), "start step")

    def _make_smaller(self) -> Response:
        self._ensure_task()
        self.progress.shrunk = True
        d = self.rules.directions
        response = Response(
            mode=Mode.STEPPING,
            message=self.composer.tiny_step(),
            actions=actions_from_labels(d.start_step),
        )
        return self._finish(response, "make smaller")

    def _keep_going(self) -> Response:
        d = self.rules.directions
        response = Response(
            mode=Mode.STEPPING,
            message=self.composer.next_step(self._latest_input(), self.state, self.progress),
            actions=actions_from_labels(d.start_step, d.make_step_smaller),
        )
        return self._finish(response, "keep going")

    def _complete_step(self, answer: str) -> Response:
        self._ensure_task()
        self._awaiting_step_input = False
        breakdown = self.breakdown()
        total = len(breakdown) if breakdown is not None else 0

        self.progress.record_answer(answer.strip())
        self._log.info(
            "step_completed",
            step_index=self.progress.step_index - 1,
            total_steps=total,
            answered=bool(answer.strip()),
        )

        if self.progress.step_index >= total:
            response = Response(mode=Mode.LISTENING, message=ALL_STEPS_DONE)
        else:
            d = self.rules.directions
            response = Response(
                mode=Mode.OFFERING_DIRECTION,
                message=STEP_DONE,
                actions=actions_from_labels(d.keep_going, "Come back later"),
            )
        return self._finish(response, "step completed")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @contextmanager
    def _turn(self) -> Iterator[None]:
        if self._busy:
            raise SessionBusyError("A turn is already being composed for this session")
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    def _ensure_active(self) -> None:
        if self._paused:
            raise SessionPausedError("Session is paused; call resume() first")

    def _ensure_task(self) -> None:
        if self.progress.has_task:
            return
        if not self.state.turns:
            raise SessionError("No task in progress")
        self.progress.task_input = self.state.turns[0].raw_input

    def _latest_input(self) -> str:
        last = self.state.last_turn
        if last is not None:
            return last.raw_input
        return self.progress.task_input or ""

    def _finish(self, response: Response, reason: str) -> Response:
        response = self.state.validate(response)
        self.state.commit(response, reason)
        self._last_response = response
        return response


