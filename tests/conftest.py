from __future__ import annotations

import pytest

from exam_app.core.models import Question


def make_question(question_id: str, correct_letter: str = "B") -> Question:
    options = tuple(f"{letter}. Option {letter} for {question_id}" for letter in "ABCD")
    correct = next(option for option in options if option.startswith(f"{correct_letter}."))
    return Question(
        id=question_id,
        prompt=f"Prompt for {question_id}?",
        options=options,
        correct_option=correct,
        rationale=f"Because {correct_letter} fits {question_id}.",
    )


@pytest.fixture
def pool() -> list[Question]:
    return [make_question(f"q{index}") for index in range(1, 6)]
