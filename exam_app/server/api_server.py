"""FastAPI server exposing question sampling and exam sessions."""

from __future__ import annotations

import logging
from threading import Thread

from fastapi import Depends, FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field
import uvicorn

from exam_app.constants.about import APP_NAME, APP_VERSION, WELCOME_TEXT
from exam_app.constants.network_constants import CORS_ALLOW_ORIGINS, DEFAULT_HOST, DEFAULT_PORT
from exam_app.core.errors import InvalidStateError
from exam_app.core.markdown_renderer import renderer
from exam_app.core.models import AnswerFeedback
from exam_app.core.question_codec import question_to_payload
from exam_app.core.services.exam_session import ExamSession
from exam_app.core.services.question_bank import QuestionBank, estimate_minutes
from exam_app.core.services.session_store import SessionStore
from exam_app.server.session_ticker import SessionTicker
from exam_app.utils.time_format import format_elapsed

logger = logging.getLogger(__name__)


class SampleRequest(BaseModel):
    """Payload schema for sampling questions from the pool."""

    model_config = ConfigDict(populate_by_name=True)

    num_questions: int | None = Field(default=None, alias="numQuestions")
    topic: str | None = None


class SessionRequest(SampleRequest):
    """Payload schema for starting a server-hosted exam session."""

    user_name: str | None = Field(default=None, alias="userName")


class SelectPayload(BaseModel):
    """Payload schema for choosing an option."""

    option: str


def _requested_count(bank: QuestionBank, payload: SampleRequest) -> int:
    # A missing count means the whole pool
    if payload.num_questions is None:
        return len(bank)
    return payload.num_questions


def _feedback_payload(feedback: AnswerFeedback) -> dict[str, object]:
    return {
        "questionId": feedback.question_id,
        "selectedOption": feedback.selected_option,
        "isCorrect": feedback.is_correct,
        "correct": feedback.correct_option,
        "rationale": feedback.rationale,
        "rationaleHtml": renderer.render_fragment(feedback.rationale),
    }


def _session_view(session_id: str, session: ExamSession) -> dict[str, object]:
    view: dict[str, object] = {
        "sessionId": session_id,
        "userName": session.user_name,
        "status": session.status.value,
        "position": session.position,
        "questionCount": session.question_count,
        "totalElapsedSeconds": session.total_elapsed_seconds,
        "questionElapsedSeconds": session.question_elapsed_seconds,
        "totalElapsed": format_elapsed(session.total_elapsed_seconds),
        "questionElapsed": format_elapsed(session.question_elapsed_seconds),
        "question": None,
        "answerState": None,
        "selectedOption": None,
        "isCorrect": None,
        "correct": None,
        "rationale": None,
        "rationaleHtml": None,
        "summary": None,
    }
    question = session.current_question
    if question is not None:
        question_view = question_to_payload(question, reveal=False)
        question_view.update(renderer.render_question(question))
        view["question"] = question_view
        view["answerState"] = session.answer_state().status.value
        view["selectedOption"] = session.selected_option()
        feedback = session.feedback()
        if feedback is not None:
            revealed = _feedback_payload(feedback)
            for key in ("isCorrect", "correct", "rationale", "rationaleHtml"):
                view[key] = revealed[key]
    if session.is_completed:
        view["summary"] = session.summary.to_payload()
    return view


def _get_bank_dependency(bank: QuestionBank):
    def dependency() -> QuestionBank:
        return bank

    return dependency


def _get_store_dependency(store: SessionStore):
    def dependency() -> SessionStore:
        return store

    return dependency


def create_api_app(bank: QuestionBank, store: SessionStore | None = None) -> FastAPI:
    """Create a FastAPI application wired to the provided question bank."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    bank_dep = _get_bank_dependency(bank)
    store_dep = _get_store_dependency(store if store is not None else SessionStore())

    def lookup_session(session_id: str, sessions: SessionStore) -> ExamSession:
        session = sessions.get(session_id)
        if session is None:
            raise HTTPException(status_code=404, detail="Unknown exam session.")
        return session

    @app.get("/", response_class=PlainTextResponse)
    def welcome() -> str:
        return WELCOME_TEXT

    @app.post("/api/questions")
    def sample_questions(
        payload: SampleRequest,
        question_bank: QuestionBank = Depends(bank_dep),
    ) -> list[dict[str, object]]:
        count = _requested_count(question_bank, payload)
        questions = question_bank.sample(count, topic=payload.topic)
        return [question_to_payload(question) for question in questions]

    @app.get("/api/estimate")
    def estimate(num_questions: int = Query(alias="numQuestions", ge=0)) -> dict[str, object]:
        return {
            "numQuestions": num_questions,
            "estimatedMinutes": estimate_minutes(num_questions),
        }

    @app.post("/api/sessions", status_code=201)
    def start_session(
        payload: SessionRequest,
        question_bank: QuestionBank = Depends(bank_dep),
        sessions: SessionStore = Depends(store_dep),
    ) -> dict[str, object]:
        count = _requested_count(question_bank, payload)
        session = ExamSession(
            question_bank.sample(count, topic=payload.topic),
            user_name=payload.user_name,
        )
        session_id = sessions.add(session)
        return _session_view(session_id, session)

    @app.get("/api/sessions/{session_id}")
    def get_session(
        session_id: str,
        sessions: SessionStore = Depends(store_dep),
    ) -> dict[str, object]:
        return _session_view(session_id, lookup_session(session_id, sessions))

    @app.post("/api/sessions/{session_id}/select")
    def select_option(
        session_id: str,
        payload: SelectPayload,
        sessions: SessionStore = Depends(store_dep),
    ) -> dict[str, object]:
        session = lookup_session(session_id, sessions)
        try:
            session.select(payload.option)
        except InvalidStateError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _session_view(session_id, session)

    @app.post("/api/sessions/{session_id}/submit")
    def submit_answer(
        session_id: str,
        sessions: SessionStore = Depends(store_dep),
    ) -> dict[str, object]:
        session = lookup_session(session_id, sessions)
        try:
            feedback = session.submit()
        except InvalidStateError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _feedback_payload(feedback)

    @app.post("/api/sessions/{session_id}/advance")
    def advance_session(
        session_id: str,
        sessions: SessionStore = Depends(store_dep),
    ) -> dict[str, object]:
        session = lookup_session(session_id, sessions)
        try:
            session.advance()
        except InvalidStateError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _session_view(session_id, session)

    @app.delete("/api/sessions/{session_id}", status_code=204)
    def abandon_session(
        session_id: str,
        sessions: SessionStore = Depends(store_dep),
    ) -> Response:
        if not sessions.discard(session_id):
            raise HTTPException(status_code=404, detail="Unknown exam session.")
        return Response(status_code=204)

    return app


def start_api_server(
    bank: QuestionBank,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the ticker and the FastAPI server in background daemon threads."""
    store = SessionStore()
    ticker = SessionTicker(store)
    ticker.start()
    app = create_api_app(bank, store=store)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        try:
            server.run()
        finally:
            ticker.stop()

    thread = Thread(target=run_server, name="ExamApiServer", daemon=True)
    thread.start()
    logger.info("Serving %d pooled question(s) on %s:%d", len(bank), host, port)
    return thread
