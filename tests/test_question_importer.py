from __future__ import annotations

from pathlib import Path

import pytest

from exam_app.core.question_importer import (
    QuestionImportError,
    load_questions_from_file,
    parse_questions_text,
)
from exam_app.core.services.question_bank import QuestionBank

_SAMPLE = """\
ID: risk-1
Q: A risk has high probability and high impact.
What is the BEST response?
A: Accept the risk.
B: Mitigate the risk.
C: Avoid the risk.
D: Transfer the risk.
CORRECT: C
RATIONALE: Avoiding the risk eliminates the threat.
It is preferred when feasible.

---

Q: Which process formalizes acceptance of deliverables?
A: Control Quality.
B: Validate Scope.
CORRECT: b
"""


def test_parses_blocks_with_letter_prefixed_options():
    first, second = parse_questions_text(_SAMPLE)

    assert first.id == "risk-1"
    assert first.prompt == "A risk has high probability and high impact.\nWhat is the BEST response?"
    assert first.options[2] == "C. Avoid the risk."
    assert first.correct_option == "C. Avoid the risk."
    assert first.rationale.endswith("It is preferred when feasible.")

    assert second.id == "q2"
    assert second.options == ("A. Control Quality.", "B. Validate Scope.")
    assert second.correct_option == "B. Validate Scope."
    assert second.rationale == ""


def test_missing_correct_answer_is_an_error():
    with pytest.raises(QuestionImportError, match="Block 1"):
        parse_questions_text("Q: Pick one\nA: Yes\nB: No\n")


def test_correct_letter_must_name_an_option():
    with pytest.raises(QuestionImportError):
        parse_questions_text("Q: Pick one\nA: Yes\nB: No\nCORRECT: D\n")


def test_options_must_be_consecutive():
    with pytest.raises(QuestionImportError):
        parse_questions_text("Q: Pick one\nA: Yes\nC: No\nCORRECT: A\n")


def test_option_text_can_span_lines():
    (question,) = parse_questions_text("Q: Pick one\nA: Yes\nand more\nB: No\nCORRECT: A\n")
    assert question.options[0] == "A. Yes\nand more"
    assert question.correct_option == "A. Yes\nand more"


def test_stray_text_is_rejected():
    with pytest.raises(QuestionImportError):
        parse_questions_text("hello\nQ: Pick one\nA: Yes\nB: No\nCORRECT: A\n")


def test_bank_from_file(tmp_path: Path):
    path = tmp_path / "questions.txt"
    path.write_text(_SAMPLE, encoding="utf-8")
    bank = QuestionBank.from_file(path, seed=5)
    assert len(bank) == 2
    assert {q.id for q in bank.sample(10)} == {"risk-1", "q2"}


def test_empty_file_is_rejected(tmp_path: Path):
    path = tmp_path / "empty.txt"
    path.write_text("\n\n---\n", encoding="utf-8")
    with pytest.raises(QuestionImportError):
        load_questions_from_file(path)
