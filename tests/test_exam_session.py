from __future__ import annotations

import pytest

from conftest import make_question
from exam_app.core.errors import InvalidStateError, MalformedQuestionError
from exam_app.core.models import AnswerStatus, Question, SessionStatus
from exam_app.core.services.exam_session import ExamSession
from exam_app.core.services.question_bank import QuestionBank


def _option(question: Question, letter: str) -> str:
    return next(option for option in question.options if option.startswith(f"{letter}."))


def test_two_question_walkthrough():
    first, second = make_question("q1", "B"), make_question("q2", "C")
    session = ExamSession([first, second], user_name="Ada")

    session.select(_option(first, "B"))
    feedback = session.submit()
    assert feedback.is_correct is (_option(first, "B") == first.correct_option)
    assert feedback.rationale == first.rationale
    assert session.is_correct() is True

    session.on_tick()
    session.on_tick()
    assert session.advance() is None
    assert session.position == 1
    assert session.question_elapsed_seconds == 0
    assert session.total_elapsed_seconds == 2
    assert session.answer_state().status is AnswerStatus.UNANSWERED

    session.select(_option(second, "A"))
    assert session.submit().is_correct is False
    summary = session.advance()

    assert session.status is SessionStatus.COMPLETED
    assert summary is not None
    assert summary.questions_completed == 2
    assert summary.user_name == "Ada"
    assert summary.correct_answers == 1
    assert session.summary == summary


def test_reselecting_keeps_only_the_last_choice():
    question = make_question("q1")
    session = ExamSession([question])
    session.select(_option(question, "A"))
    session.select(_option(question, "D"))
    state = session.answer_state()
    assert state.status is AnswerStatus.SELECTED
    assert state.option == _option(question, "D")


def test_submit_without_selection_is_rejected_and_state_unchanged():
    session = ExamSession([make_question("q1")])
    with pytest.raises(InvalidStateError):
        session.submit()
    assert session.answer_state().status is AnswerStatus.UNANSWERED
    assert session.selected_option() is None


def test_advance_before_submit_is_rejected():
    question = make_question("q1")
    session = ExamSession([question, make_question("q2")])
    with pytest.raises(InvalidStateError):
        session.advance()
    session.select(_option(question, "A"))
    with pytest.raises(InvalidStateError):
        session.advance()
    assert session.position == 0


def test_choice_is_locked_after_reveal():
    question = make_question("q1")
    session = ExamSession([question, make_question("q2")])
    session.select(_option(question, "A"))
    session.submit()
    with pytest.raises(InvalidStateError):
        session.select(_option(question, "B"))
    with pytest.raises(InvalidStateError):
        session.submit()
    assert session.selected_option() == _option(question, "A")
    assert session.answer_state().status is AnswerStatus.REVEALED


def test_every_mutation_fails_after_completion():
    question = make_question("q1")
    session = ExamSession([question])
    session.select(_option(question, "B"))
    session.submit()
    session.advance()
    assert session.is_completed
    with pytest.raises(InvalidStateError):
        session.select(_option(question, "A"))
    with pytest.raises(InvalidStateError):
        session.submit()
    with pytest.raises(InvalidStateError):
        session.advance()


def test_empty_sample_completes_immediately():
    bank = QuestionBank([make_question("q1")])
    session = ExamSession(bank.sample(0))
    assert session.is_completed
    assert session.current_question is None
    assert session.summary.questions_completed == 0
    assert session.user_name == "Guest"
    with pytest.raises(InvalidStateError):
        session.select("A. anything")


def test_summary_is_unavailable_until_completion():
    session = ExamSession([make_question("q1")])
    with pytest.raises(InvalidStateError):
        _ = session.summary


def test_selecting_an_unknown_option_is_rejected():
    session = ExamSession([make_question("q1")])
    with pytest.raises(ValueError):
        session.select("Z. Not offered")
    assert session.answer_state().status is AnswerStatus.UNANSWERED


def test_grading_is_an_exact_text_match():
    question = make_question("q1", "B")
    session = ExamSession([question])
    with pytest.raises(ValueError):
        session.select(question.correct_option.lower())
    session.select(question.correct_option)
    assert session.submit().is_correct is True


def test_ticks_drive_both_timers_and_stop_after_completion():
    question = make_question("q1")
    session = ExamSession([question])
    for _ in range(3):
        session.on_tick()
    assert session.total_elapsed_seconds == 3
    assert session.question_elapsed_seconds == 3
    session.select(_option(question, "A"))
    session.submit()
    session.on_tick()
    session.advance()
    session.on_tick()
    assert session.total_elapsed_seconds == 4
    assert session.summary.total_elapsed_seconds == 4


def test_malformed_question_is_rejected_at_seeding():
    broken = Question(id="x", prompt="?", options=(), correct_option="A")
    with pytest.raises(MalformedQuestionError):
        ExamSession([broken])


def test_duplicate_ids_are_rejected_at_seeding():
    with pytest.raises(ValueError):
        ExamSession([make_question("q1"), make_question("q1")])


def test_results_report_each_question():
    first, second = make_question("q1", "A"), make_question("q2", "A")
    session = ExamSession([first, second])
    session.select(_option(first, "A"))
    session.submit()
    results = session.results()
    assert [row.question_id for row in results] == ["q1", "q2"]
    assert results[0].is_correct is True
    assert results[1].status is AnswerStatus.UNANSWERED
    assert results[1].is_correct is None


def test_blank_user_name_falls_back_to_guest():
    assert ExamSession([make_question("q1")], user_name="   ").user_name == "Guest"
