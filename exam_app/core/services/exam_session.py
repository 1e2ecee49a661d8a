"""Service driving one user through a sampled sequence of questions."""

from __future__ import annotations

from collections.abc import Iterable
import logging
from threading import Lock
from typing import NoReturn

from exam_app.constants.exam_constants import DEFAULT_USER_NAME
from exam_app.core.errors import InvalidStateError
from exam_app.core.models import (
    AnswerFeedback,
    AnswerState,
    AnswerStatus,
    ExamSummary,
    Question,
    QuestionResult,
    SessionStatus,
)
from exam_app.core.question_codec import validate_question

logger = logging.getLogger(__name__)


class ExamSession:
    """State machine for a single practice exam.

    Each question moves ``UNANSWERED -> SELECTED -> REVEALED``; the session
    moves ``IN_PROGRESS -> COMPLETED`` once the last revealed question is
    advanced past. Timers are driven from outside through :meth:`on_tick`.
    All mutations, ticks included, run under one lock per session.
    """

    def __init__(self, questions: Iterable[Question], user_name: str | None = None) -> None:
        sequence = tuple(validate_question(question) for question in questions)
        seen: set[str] = set()
        for question in sequence:
            if question.id in seen:
                raise ValueError(f"Duplicate question id {question.id!r} in session.")
            seen.add(question.id)

        self._lock = Lock()
        self._sequence = sequence
        self._answers = [AnswerState() for _ in sequence]
        self._position = 0
        self._user_name = (user_name or "").strip() or DEFAULT_USER_NAME
        self._total_elapsed_seconds = 0
        self._question_elapsed_seconds = 0
        self._status = SessionStatus.IN_PROGRESS
        self._summary: ExamSummary | None = None
        if not sequence:
            logger.info("Session for %s seeded with no questions; completing.", self._user_name)
            self._complete()

    # --- Reads ---

    @property
    def user_name(self) -> str:
        return self._user_name

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def is_completed(self) -> bool:
        return self._status is SessionStatus.COMPLETED

    @property
    def position(self) -> int:
        return self._position

    @property
    def question_count(self) -> int:
        return len(self._sequence)

    @property
    def total_elapsed_seconds(self) -> int:
        return self._total_elapsed_seconds

    @property
    def question_elapsed_seconds(self) -> int:
        return self._question_elapsed_seconds

    @property
    def current_question(self) -> Question | None:
        if not self._sequence:
            return None
        return self._sequence[self._position]

    @property
    def summary(self) -> ExamSummary:
        if self._summary is None:
            raise InvalidStateError("Exam has not been completed yet.")
        return self._summary

    def answer_state(self, index: int | None = None) -> AnswerState:
        state = self._answers[self._resolve_index(index)]
        return AnswerState(status=state.status, option=state.option)

    def selected_option(self, index: int | None = None) -> str | None:
        return self._answers[self._resolve_index(index)].option

    def is_correct(self, index: int | None = None) -> bool | None:
        """Whether a revealed answer matches the correct option; None before reveal."""
        resolved = self._resolve_index(index)
        state = self._answers[resolved]
        if state.status is not AnswerStatus.REVEALED:
            return None
        return state.option == self._sequence[resolved].correct_option

    @property
    def correct_count(self) -> int:
        return sum(1 for index in range(len(self._sequence)) if self.is_correct(index))

    def results(self) -> list[QuestionResult]:
        return [
            QuestionResult(
                question_id=question.id,
                status=state.status,
                selected_option=state.option,
                is_correct=self.is_correct(index),
            )
            for index, (question, state) in enumerate(zip(self._sequence, self._answers))
        ]

    # --- Transitions ---

    def select(self, option: str) -> None:
        """Choose an option for the current question; the last choice wins."""
        with self._lock:
            self._require_in_progress("select")
            state = self._answers[self._position]
            if state.status is AnswerStatus.REVEALED:
                self._reject("select", "answer is already revealed and locked")
            question = self._sequence[self._position]
            if option not in question.options:
                raise ValueError(f"{option!r} is not an option of question {question.id!r}.")
            self._answers[self._position] = AnswerState(AnswerStatus.SELECTED, option)

    def submit(self) -> AnswerFeedback:
        """Reveal the current answer and return its feedback."""
        with self._lock:
            self._require_in_progress("submit")
            state = self._answers[self._position]
            if state.status is AnswerStatus.UNANSWERED:
                self._reject("submit", "choose an answer before submitting")
            if state.status is AnswerStatus.REVEALED:
                self._reject("submit", "answer is already revealed")
            option = state.option or ""
            self._answers[self._position] = AnswerState(AnswerStatus.REVEALED, option)
            return self._build_feedback(self._sequence[self._position], option)

    def feedback(self, index: int | None = None) -> AnswerFeedback | None:
        """Feedback for a revealed question; None while it is still open."""
        if not self._sequence:
            return None
        return self._feedback_at(self._resolve_index(index))

    def advance(self) -> ExamSummary | None:
        """Move past a revealed question; returns the summary after the last one."""
        with self._lock:
            self._require_in_progress("advance")
            if self._answers[self._position].status is not AnswerStatus.REVEALED:
                self._reject("advance", "current answer has not been revealed")
            if self._position + 1 < len(self._sequence):
                self._position += 1
                self._question_elapsed_seconds = 0
                self._answers[self._position] = AnswerState()
                return None
            return self._complete()

    def on_tick(self) -> None:
        """Record one elapsed second. Ticks after completion are ignored."""
        with self._lock:
            if self._status is not SessionStatus.IN_PROGRESS:
                return
            self._total_elapsed_seconds += 1
            self._question_elapsed_seconds += 1

    # --- Internals ---

    def _complete(self) -> ExamSummary:
        self._status = SessionStatus.COMPLETED
        self._summary = ExamSummary(
            user_name=self._user_name,
            questions_completed=len(self._sequence),
            total_elapsed_seconds=self._total_elapsed_seconds,
            correct_answers=self.correct_count,
        )
        logger.info(
            "Exam completed for %s: %d question(s), %d correct, %ds",
            self._user_name,
            self._summary.questions_completed,
            self._summary.correct_answers,
            self._summary.total_elapsed_seconds,
        )
        return self._summary

    def _feedback_at(self, index: int) -> AnswerFeedback | None:
        state = self._answers[index]
        if state.status is not AnswerStatus.REVEALED or state.option is None:
            return None
        return self._build_feedback(self._sequence[index], state.option)

    @staticmethod
    def _build_feedback(question: Question, option: str) -> AnswerFeedback:
        return AnswerFeedback(
            question_id=question.id,
            selected_option=option,
            correct_option=question.correct_option,
            is_correct=option == question.correct_option,
            rationale=question.rationale,
        )

    def _require_in_progress(self, operation: str) -> None:
        if self._status is not SessionStatus.IN_PROGRESS:
            self._reject(operation, "exam is already completed")

    def _reject(self, operation: str, reason: str) -> NoReturn:
        logger.debug("Rejected %s at position %d: %s", operation, self._position, reason)
        raise InvalidStateError(f"Cannot {operation}: {reason}.")

    def _resolve_index(self, index: int | None) -> int:
        resolved = self._position if index is None else index
        if not 0 <= resolved < len(self._sequence):
            raise IndexError(f"Question index {resolved} out of range")
        return resolved
