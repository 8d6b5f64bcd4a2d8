"""Quiz session state machine.

One session walks a fixed question set front to back. Each question is judged
exactly once, when advance() leaves it, using the option selected for that
question. The judgment feeds both the score and, on the last question, the
history record, so the two can never disagree.

The engine is synchronous and not thread-safe: callers serialize commands
(see QuizController).
"""
import logging
from dataclasses import dataclass, replace
from typing import Optional

from quiz_bot.exceptions import CommandRejected
from quiz_bot.models import HistoryRecord, Phase, QuestionSet, SessionState, SessionView

logger = logging.getLogger(__name__)

NO_SELECTION_MSG = "Please select an answer before advancing"
NOT_IN_PROGRESS_MSG = "There is no question to answer right now"


@dataclass(frozen=True)
class AdvanceOutcome:
    """Result of judging the current question."""
    was_correct: bool
    record: Optional[HistoryRecord] = None   # set only when the session completed


class QuizSession:
    """State machine over SessionState."""

    def __init__(self):
        self._state = SessionState()
        self._questions: QuestionSet = ()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def view(self) -> SessionView:
        state = self._state
        total = len(state.questions)
        question = None
        if state.phase is Phase.IN_PROGRESS:
            question = state.questions[state.current_index]
        return SessionView(
            phase=state.phase,
            question=question,
            question_number=min(state.current_index + 1, total),
            total_questions=total,
            selected_option=state.selected_option,
            score=state.score,
            is_last_question=total > 0 and state.current_index == total - 1,
        )

    def initialize(self, questions: QuestionSet) -> SessionState:
        """Start a session over questions. An empty set ends in the EMPTY phase."""
        self._questions = tuple(questions)
        self._state = SessionState(
            questions=self._questions,
            phase=Phase.IN_PROGRESS if self._questions else Phase.EMPTY,
        )
        logger.debug("Session initialized with %d questions", len(self._questions))
        return self._state

    def select_option(self, index: int) -> SessionState:
        """Select an option of the current question. The last selection wins."""
        state = self._state
        if state.phase is not Phase.IN_PROGRESS:
            self._reject(NOT_IN_PROGRESS_MSG)

        options = state.questions[state.current_index].options
        if not 0 <= index < len(options):
            self._reject(f"Option {index + 1} does not exist")

        self._state = replace(state, selected_option=index)
        return self._state

    def advance(self) -> AdvanceOutcome:
        """
        Judge the current question and move on.

        Returns:
            AdvanceOutcome; its record is set when this was the last question

        Raises:
            CommandRejected: no option selected or no question in progress
        """
        state = self._state
        if state.selected_option is None:
            self._reject(NO_SELECTION_MSG)
        if state.phase is not Phase.IN_PROGRESS:
            self._reject(NOT_IN_PROGRESS_MSG)

        question = state.questions[state.current_index]
        was_correct = state.selected_option == question.correct_option_index
        score = state.score + (1 if was_correct else 0)
        next_index = state.current_index + 1
        total = len(state.questions)

        if next_index < total:
            self._state = replace(
                state, current_index=next_index, selected_option=None, score=score,
            )
            return AdvanceOutcome(was_correct=was_correct)

        self._state = replace(
            state,
            current_index=total,
            selected_option=None,
            score=score,
            phase=Phase.COMPLETED,
        )
        record = HistoryRecord.create(score=score, total_questions=total)
        logger.info("Session completed: %d/%d", score, total)
        return AdvanceOutcome(was_correct=was_correct, record=record)

    def reset(self) -> SessionState:
        """Restart the session over the same question set. History is not touched."""
        if self._state.phase is Phase.LOADING:
            # nothing loaded yet, nothing to restart
            return self._state
        return self.initialize(self._questions)

    def _reject(self, reason: str):
        logger.debug("Command rejected in phase %s: %s", self._state.phase.name, reason)
        raise CommandRejected(reason)
