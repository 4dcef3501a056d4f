"""
ResponseComposer — one coherent Response per turn.

  1. classify the input (signal + certainty)
  2. append the turn to the conversation context
  3. if the turn answers the pending question → acknowledge and offer
     directions (never a second question)
  4. otherwise dispatch on the signal:

       OVERWHELMED + loss of function → calming
       OVERWHELMED / INTENSE_EMOTION  → clarifying (intensity + function check)
       EMOTIONAL                      → clarifying (mirror + question)
       EXPLANATORY                    → clarifying (meaning + narrowing question)
       REQUEST_TO_SHRINK              → offering_direction
       READY_FOR_ACTION               → stepping

  5. validate against the mode table and set the turn's flags

Text typed into a started step is read by ``step_feedback`` instead: an
answer completes the step, overwhelm or a shrink request adapts it.

Every mirror and question goes through a certainty-matched phrase table.
"""

from __future__ import annotations

import structlog

from frank.core.dialogue.answer_detector import SemanticAnswerDetector
from frank.core.dialogue.classifier import InputClassifier
from frank.core.dialogue.models import (
    Action,
    ConversationTurn,
    Mode,
    Response,
    Signal,
    SignalType,
    StepPayload,
    actions_from_labels,
)
from frank.core.dialogue.phrases import (
    ACKNOWLEDGMENT,
    ANSWER_MIRROR,
    CALMING_REASSURANCE,
    CLARIFYING_QUESTION,
    FUNCTION_CHECK,
    INTENSITY_REFLECTION,
    MIRROR_EMOTION,
    NARROW_CHOICES,
    REFLECT_MEANING,
    SHRINK_OFFER,
    STEP_TOO_MUCH,
)
from frank.core.dialogue.state import (
    DEFAULT_STEP,
    GENERIC_MIRROR,
    ConversationStateMachine,
    validate,
)
from frank.core.planner.breakdown import TaskBreakdownPlanner
from frank.core.planner.models import TaskProgress
from frank.core.rules.matching import (
    compile_patterns,
    contains_any,
    has_explicit_overwhelm,
    search_any,
)
from frank.core.rules.model import RuleConfig

logger = structlog.get_logger()

UNDERSTANDING = "understanding"

_EXPLAINING = ("because", "since", "it's", "its", "feels like", "seems like")
_DISMISSIVE = (
    "irrelevant",
    "doesn't matter",
    "doesnt matter",
    "pointless",
    "boring",
    "don't care",
    "dont care",
)
_STRUGGLING = ("hard", "difficult", "stuck")
_NOT_UNDERSTANDING = ("don't get", "dont get", "understand")


class ResponseComposer:
    """Composes Responses for one rule set.  Holds no conversation state."""

    def __init__(self, rules: RuleConfig, planner: TaskBreakdownPlanner | None = None) -> None:
        self._rules = rules
        self.classifier = InputClassifier(rules)
        self.detector = SemanticAnswerDetector(rules)
        self.planner = planner or TaskBreakdownPlanner(rules)
        self._direct_requests = compile_patterns(rules.readiness.direct_request_patterns)

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def generate(
        self,
        text: str,
        state: ConversationStateMachine,
        progress: TaskProgress,
    ) -> Response:
        """
        Compose the Response for *text*.

        Appends the turn to ``state.turns`` and sets its flags.  Never
        raises: a failure inside composition is logged and answered with a
        plain listening response.
        """
        try:
            return self._generate(text, state, progress)
        except Exception as exc:  # noqa: BLE001
            logger.error("composer_failed", error=str(exc), exc_info=True)
            return validate(Response(mode=Mode.LISTENING, message=GENERIC_MIRROR))

    def _generate(
        self,
        text: str,
        state: ConversationStateMachine,
        progress: TaskProgress,
    ) -> Response:
        prior_mode = state.prior_mode
        prior_turns = list(state.turns)

        signal = self.classifier.classify(text, prior_mode)
        answered = self.detector.is_answer(text, prior_turns, prior_mode)
        turn = ConversationTurn(raw_input=text, signal=signal)
        state.append_turn(turn)

        if answered:
            response = self.handle_answer(text, signal, state, progress)
        else:
            response = self._dispatch(text, signal, state, progress)

        response = validate(response)
        turn.had_question = response.question is not None
        turn.last_question = response.question
        turn.internal_state = response.internal_state

        logger.info(
            "turn_composed",
            session_id=state.session_id,
            signal=str(signal.type),
            certainty=str(signal.certainty_level),
            answered=answered,
            mode=str(response.mode),
            actions=len(response.actions),
            repairs=len(response.repairs),
        )
        return response

    def _dispatch(
        self,
        text: str,
        signal: Signal,
        state: ConversationStateMachine,
        progress: TaskProgress,
    ) -> Response:
        certainty = signal.certainty_level
        match signal.type:
            case SignalType.OVERWHELMED if signal.has_loss_of_function:
                return self.calming()
            case SignalType.OVERWHELMED | SignalType.INTENSE_EMOTION:
                return Response(
                    mode=Mode.CLARIFYING,
                    message=INTENSITY_REFLECTION.pick(text, certainty),
                    question=FUNCTION_CHECK.render(certainty),
                )
            case SignalType.EMOTIONAL:
                return Response(
                    mode=Mode.CLARIFYING,
                    message=MIRROR_EMOTION.pick(text, certainty),
                    question=CLARIFYING_QUESTION.pick(text, certainty),
                )
            case SignalType.EXPLANATORY:
                return Response(
                    mode=Mode.CLARIFYING,
                    message=REFLECT_MEANING.pick(text, certainty),
                    question=NARROW_CHOICES.pick(text, certainty),
                )
            case SignalType.REQUEST_TO_SHRINK:
                return self.shrink_offer()
            case SignalType.READY_FOR_ACTION:
                return self.stepping(text, state, progress)

    # ------------------------------------------------------------------
    # Branches
    # ------------------------------------------------------------------

    def calming(self) -> Response:
        return Response(
            mode=Mode.CALMING,
            message=CALMING_REASSURANCE,
            actions=actions_from_labels("Pause", "Come back later"),
        )

    def shrink_offer(self) -> Response:
        d = self._rules.directions
        return Response(
            mode=Mode.OFFERING_DIRECTION,
            message=SHRINK_OFFER,
            actions=actions_from_labels(d.keep_going, d.make_smaller),
        )

    def handle_answer(
        self,
        text: str,
        signal: Signal,
        state: ConversationStateMachine,
        progress: TaskProgress,
    ) -> Response:
        """Acknowledge an answer in the user's own terms and offer where to go next."""
        certainty = signal.certainty_level
        message = ANSWER_MIRROR.pick(text, certainty)
        if ack := ACKNOWLEDGMENT.pick(text, certainty):
            message = f"{message} {ack}"

        if contains_any(text, self._rules.readiness.answer_readiness):
            d = self._rules.directions
            return Response(
                mode=Mode.STEPPING,
                message=self.next_step(text, state, progress, lead_in=message),
                actions=actions_from_labels(d.start_step, d.make_step_smaller),
                internal_state=UNDERSTANDING,
            )

        return Response(
            mode=Mode.OFFERING_DIRECTION,
            message=message,
            actions=actions_from_labels(*self.direction_options(text, signal)),
            internal_state=UNDERSTANDING,
        )

    def direction_options(self, text: str, signal: Signal) -> list[str]:
        """Two to four labels; Pause only when the user said they're overwhelmed."""
        d = self._rules.directions
        options = [d.that_makes_sense, d.talk_more]
        if signal.type == SignalType.EXPLANATORY or contains_any(text, _EXPLAINING):
            options.append(d.minimum)
        elif contains_any(text, _DISMISSIVE):
            options.append(d.minimum)
        elif contains_any(text, _STRUGGLING):
            options.append(d.make_smaller)
        elif contains_any(text, _NOT_UNDERSTANDING):
            options.append(d.break_differently)
        else:
            options.append(d.minimum)
        if has_explicit_overwhelm(text, self._rules):
            options.append(d.pause_for_now)
        return options

    def stepping(
        self,
        text: str,
        state: ConversationStateMachine,
        progress: TaskProgress,
    ) -> Response:
        actions: tuple[Action, ...] = ()
        if self.readiness_gate(text, state):
            d = self._rules.directions
            actions = actions_from_labels(d.start_step, d.make_step_smaller)
        return Response(
            mode=Mode.STEPPING,
            message=self.next_step(text, state, progress),
            actions=actions,
        )

    def readiness_gate(self, text: str, state: ConversationStateMachine) -> bool:
        """Offer step actions only when the user has actually asked to act."""
        readiness = self._rules.readiness
        if contains_any(text, readiness.signals):
            return True
        if len(state.turns) >= 2:
            chosen = state.turns[-2].selected_direction
            if chosen and contains_any(chosen, readiness.action_directions):
                return True
        return state.is_first_turn and search_any(text.strip(), self._direct_requests)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def next_step(
        self,
        text: str,
        state: ConversationStateMachine,
        progress: TaskProgress,
        lead_in: str | None = None,
    ) -> StepPayload:
        """
        The step the user is on, rebuilt from the task's original input.

        The first step request fixes the task to the conversation's opening
        turn; a shrunk or finished breakdown yields the one-tiny-thing step.
        """
        if not progress.has_task:
            progress.task_input = state.turns[0].raw_input if state.turns else text
        if progress.shrunk:
            return self.tiny_step(lead_in)

        breakdown = self.planner.generate(
            progress.task_input or text,
            progress.task_type,
            current_input=text,
            user_selected_pause=progress.user_selected_pause,
            regulation=progress.regulated if progress.step_index > 0 else None,
        )
        progress.task_type = breakdown.type
        progress.regulated = breakdown.has_regulation
        step = breakdown.step(progress.step_index)
        if step is None:
            return self.tiny_step(lead_in)
        return StepPayload(
            title=step.title,
            description=step.description,
            needs_input=step.needs_input,
            input_prompt=step.input_prompt,
            input_placeholder=step.input_placeholder,
            checklist=step.checklist,
            step_index=progress.step_index,
            total_steps=len(breakdown),
            lead_in=lead_in,
        )

    @staticmethod
    def tiny_step(lead_in: str | None = None) -> StepPayload:
        if lead_in is None:
            return DEFAULT_STEP
        return StepPayload(
            title=DEFAULT_STEP.title,
            description=DEFAULT_STEP.description,
            needs_input=DEFAULT_STEP.needs_input,
            input_prompt=DEFAULT_STEP.input_prompt,
            input_placeholder=DEFAULT_STEP.input_placeholder,
            lead_in=lead_in,
        )

    def step_feedback(
        self,
        text: str,
        state: ConversationStateMachine,
        progress: TaskProgress,
    ) -> Response | None:
        """
        Read text typed into a started step as feedback about the step.

        Returns None when *text* is the step's answer.  Otherwise the step
        stays where it is: loss of function gets the calming response, a
        request to shrink swaps in the one-tiny-thing step, and any other
        overwhelm is mirrored and offered a smaller step or a pause.
        """
        signal = self.classifier.classify(text, state.prior_mode)
        d = self._rules.directions
        match signal.type:
            case SignalType.OVERWHELMED if signal.has_loss_of_function:
                response = self.calming()
            case SignalType.REQUEST_TO_SHRINK:
                progress.shrunk = True
                response = Response(
                    mode=Mode.STEPPING,
                    message=self.tiny_step(),
                    actions=actions_from_labels(d.start_step),
                )
            case SignalType.OVERWHELMED | SignalType.INTENSE_EMOTION:
                mirror = MIRROR_EMOTION.pick(text, signal.certainty_level)
                response = Response(
                    mode=Mode.OFFERING_DIRECTION,
                    message=f"{mirror} {STEP_TOO_MUCH}",
                    actions=actions_from_labels(d.make_smaller, d.pause_for_now),
                )
            case _:
                return None

        logger.info(
            "step_feedback",
            session_id=state.session_id,
            signal=str(signal.type),
            step_index=progress.step_index,
            mode=str(response.mode),
        )
        return response
