"""Validation and wire conversion for questions.

The wire form uses the field names consumers already rely on:
``id``, ``question``, ``options``, ``correct`` and ``rationale``.
"""

from __future__ import annotations

from collections.abc import Mapping

from exam_app.core.errors import MalformedQuestionError
from exam_app.core.models import Question


def validate_question(question: Question) -> Question:
    """Return the question unchanged or raise ``MalformedQuestionError``."""
    question_id = question.id
    if not str(question_id).strip():
        raise MalformedQuestionError("Question id must not be empty.")
    if not question.prompt.strip():
        raise MalformedQuestionError(
            f"Question {question_id!r} has no prompt text.", question_id
        )
    if not question.options:
        raise MalformedQuestionError(
            f"Question {question_id!r} has no options.", question_id
        )
    if any(not option.strip() for option in question.options):
        raise MalformedQuestionError(
            f"Question {question_id!r} has an empty option.", question_id
        )
    if len(set(question.options)) != len(question.options):
        raise MalformedQuestionError(
            f"Question {question_id!r} repeats an option.", question_id
        )
    if question.correct_option not in question.options:
        raise MalformedQuestionError(
            f"Correct answer of question {question_id!r} is not one of its options.",
            question_id,
        )
    return question


def question_from_payload(payload: Mapping[str, object]) -> Question:
    """Build and validate a question from its wire representation."""
    raw_id = payload.get("id")
    try:
        options = payload["options"]
        question = Question(
            id="" if raw_id is None else str(raw_id),
            prompt=str(payload["question"]),
            options=tuple(str(option) for option in options),  # type: ignore[union-attr]
            correct_option=str(payload["correct"]),
            rationale=str(payload.get("rationale") or ""),
        )
    except KeyError as exc:
        raise MalformedQuestionError(
            f"Question payload is missing field {exc.args[0]!r}.",
            None if raw_id is None else str(raw_id),
        ) from exc
    except TypeError as exc:
        raise MalformedQuestionError(
            "Question options must be a list of strings.",
            None if raw_id is None else str(raw_id),
        ) from exc
    return validate_question(question)


def question_to_payload(question: Question, *, reveal: bool = True) -> dict[str, object]:
    """Serialize a question; ``reveal=False`` leaves out the answer and rationale."""
    payload: dict[str, object] = {
        "id": question.id,
        "question": question.prompt,
        "options": list(question.options),
    }
    if reveal:
        payload["correct"] = question.correct_option
        payload["rationale"] = question.rationale
    return payload
