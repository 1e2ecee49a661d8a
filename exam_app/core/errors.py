"""Exceptions raised by the exam core."""

from __future__ import annotations


class InvalidStateError(RuntimeError):
    """Raised when a session operation is attempted out of sequence."""


class MalformedQuestionError(ValueError):
    """Raised when a question cannot be trusted for grading."""

    def __init__(self, message: str, question_id: str | None = None) -> None:
        super().__init__(message)
        self.question_id = question_id
