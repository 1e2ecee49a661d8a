"""Domain models for the exam simulator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-choice practice question. Never mutated once loaded."""

    id: str
    prompt: str
    options: tuple[str, ...]
    correct_option: str
    rationale: str = ""


class AnswerStatus(Enum):
    UNANSWERED = "unanswered"
    SELECTED = "selected"
    REVEALED = "revealed"


class SessionStatus(Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(slots=True)
class AnswerState:
    """Answer progress for one question of a session."""

    status: AnswerStatus = AnswerStatus.UNANSWERED
    option: str | None = None


@dataclass(frozen=True, slots=True)
class AnswerFeedback:
    """What the user sees once the current answer is revealed."""

    question_id: str
    selected_option: str
    correct_option: str
    is_correct: bool
    rationale: str


@dataclass(frozen=True, slots=True)
class QuestionResult:
    """Review row for a single question of a session."""

    question_id: str
    status: AnswerStatus
    selected_option: str | None
    is_correct: bool | None


@dataclass(frozen=True, slots=True)
class ExamSummary:
    """Snapshot shown when a session completes."""

    user_name: str
    questions_completed: int
    total_elapsed_seconds: int
    correct_answers: int = 0

    def to_payload(self) -> dict[str, object]:
        return {
            "userName": self.user_name,
            "questionsCompleted": self.questions_completed,
            "totalElapsedSeconds": self.total_elapsed_seconds,
            "correctAnswers": self.correct_answers,
        }
