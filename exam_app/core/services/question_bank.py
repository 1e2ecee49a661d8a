"""Service holding the read-only question pool and sampling from it."""

from __future__ import annotations

from collections.abc import Iterable
import logging
from pathlib import Path
import random

from exam_app.constants.exam_constants import MINUTES_PER_QUESTION
from exam_app.core.errors import MalformedQuestionError
from exam_app.core.models import Question
from exam_app.core.question_codec import validate_question

logger = logging.getLogger(__name__)


class QuestionBank:
    """Fixed pool of questions, populated once and never mutated afterwards."""

    def __init__(self, questions: Iterable[Question], seed: int | None = None) -> None:
        pool: dict[str, Question] = {}
        for question in questions:
            try:
                validate_question(question)
            except MalformedQuestionError as exc:
                logger.warning("Excluding malformed question from the pool: %s", exc)
                continue
            if question.id in pool:
                raise ValueError(f"Duplicate question id {question.id!r} in pool.")
            pool[question.id] = question
        self._pool = pool
        self._rng = random.Random(seed)

    @classmethod
    def default(cls, seed: int | None = None) -> "QuestionBank":
        from exam_app.core.default_questions import DEFAULT_QUESTIONS

        return cls(DEFAULT_QUESTIONS, seed=seed)

    @classmethod
    def from_file(cls, file_path: Path, seed: int | None = None) -> "QuestionBank":
        from exam_app.core.question_importer import load_questions_from_file

        imported = load_questions_from_file(file_path)
        logger.info(
            "Loaded %d question(s) from %s", len(imported.questions), imported.source_path
        )
        return cls(imported.questions, seed=seed)

    def __len__(self) -> int:
        return len(self._pool)

    def get(self, question_id: str) -> Question | None:
        return self._pool.get(question_id)

    def questions(self) -> list[Question]:
        """Return a copy of the pool in load order."""
        return list(self._pool.values())

    def sample(self, count: int, topic: str | None = None) -> list[Question]:
        """Return up to ``count`` distinct questions in random order.

        The whole pool is shuffled with ``random.Random.shuffle`` (Fisher-Yates,
        every permutation equally likely) and the first ``count`` items are
        kept. Requests larger than the pool are capped; ``count <= 0`` gives
        an empty list. ``topic`` is accepted for forward compatibility but the
        pool carries no topic data, so it does not filter anything.
        """
        if topic:
            logger.debug("Ignoring topic filter %r; pool is not partitioned by topic.", topic)
        size = min(max(count, 0), len(self._pool))
        if size == 0:
            return []
        shuffled = list(self._pool.values())
        self._rng.shuffle(shuffled)
        return shuffled[:size]


def estimate_minutes(count: int) -> float:
    """Rough time needed for ``count`` questions, in minutes."""
    return round(max(count, 0) * MINUTES_PER_QUESTION, 1)
