"""Utilities for loading the question pool from a plain-text file.

File format (repeat blocks separated by blank lines or '---'):

    ID: q7               (optional; defaults to q<block number>)
    Q: Question text (supports markdown). Additional lines until the next
       marker are treated as part of the question.
    A: First option text
    B: Second option text
    ...                  (at least two options, lettered A, B, C, ... in order)
    CORRECT: B
    RATIONALE: Why B is right. Additional lines are appended.

Example:

    ID: risk-1
    Q: A risk has high probability and high impact. What is the BEST response?
    A: Accept the risk.
    B: Mitigate the risk.
    C: Avoid the risk.
    D: Transfer the risk.
    CORRECT: C
    RATIONALE: Avoiding the risk eliminates the threat entirely.

Options are stored with their letter prefix ("C. Avoid the risk.") because
answers are graded by exact text comparison against the correct option.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import string

from exam_app.core.errors import MalformedQuestionError
from exam_app.core.models import Question
from exam_app.core.question_codec import validate_question


class QuestionImportError(Exception):
    """Raised when a question file cannot be parsed."""


@dataclass(slots=True)
class ImportedQuestions:
    """Container for imported questions and where they came from."""

    source_path: Path
    questions: list[Question]


_OPTION_LETTERS = string.ascii_uppercase


def load_questions_from_file(file_path: Path) -> ImportedQuestions:
    text = file_path.read_text(encoding="utf-8")
    questions = parse_questions_text(text)
    if not questions:
        raise QuestionImportError("Question file did not contain any questions.")
    return ImportedQuestions(source_path=file_path, questions=questions)


def parse_questions_text(text: str) -> list[Question]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            # Blank line ends the current block
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())

    questions: list[Question] = []
    for number, block in enumerate(blocks, start=1):
        try:
            questions.append(_parse_block(block, number))
        except QuestionImportError as exc:
            raise QuestionImportError(f"Block {number}: {exc}") from exc
    return questions


def _parse_block(block: str, number: int) -> Question:
    question_id: str | None = None
    question_lines: list[str] = []
    rationale_lines: list[str] = []
    options: dict[str, str] = {}
    correct_letter: str | None = None
    current_section: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("ID:"):
            question_id = line[3:].strip()
            current_section = None
            continue

        if upper.startswith("Q:"):
            question_lines = [line[2:].strip()]
            current_section = "Q"
            continue

        if upper.startswith("CORRECT:"):
            correct_letter = line.split(":", 1)[1].strip().upper()
            current_section = None
            continue

        if upper.startswith("RATIONALE:"):
            rationale_lines = [line.split(":", 1)[1].strip()]
            current_section = "RATIONALE"
            continue

        if len(line) > 2 and line[0].upper() in _OPTION_LETTERS and line[1] == ":":
            letter = line[0].upper()
            options[letter] = line[2:].strip()
            current_section = letter
            continue

        if current_section == "Q":
            question_lines.append(line)
        elif current_section == "RATIONALE":
            rationale_lines.append(line)
        elif current_section in options:
            options[current_section] = options[current_section] + f"\n{line}"
        else:
            raise QuestionImportError(
                f"Encountered text outside of a known section: '{line}'."
            )

    prompt = "\n".join(question_lines).strip()
    if not prompt:
        raise QuestionImportError("Question text missing (Q: ...)")
    if len(options) < 2:
        raise QuestionImportError("Each question must define at least two options.")

    letters = list(_OPTION_LETTERS[: len(options)])
    if sorted(options) != letters:
        raise QuestionImportError(
            f"Options must be lettered consecutively from A to {letters[-1]}."
        )
    option_list = [f"{letter}. {options[letter].strip()}" for letter in letters]

    if correct_letter is None:
        raise QuestionImportError("CORRECT is required.")
    if correct_letter not in letters:
        raise QuestionImportError(f"CORRECT must be one of {', '.join(letters)}.")

    question = Question(
        id=question_id or f"q{number}",
        prompt=prompt,
        options=tuple(option_list),
        correct_option=option_list[letters.index(correct_letter)],
        rationale="\n".join(rationale_lines).strip(),
    )
    try:
        return validate_question(question)
    except MalformedQuestionError as exc:
        raise QuestionImportError(str(exc)) from exc
