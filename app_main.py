"""Application entry point for the PMP exam simulator backend."""

from __future__ import annotations

import os
from pathlib import Path

from exam_app.constants.about import APP_NAME
from exam_app.constants.exam_constants import QUESTIONS_FILE_ENV_VAR
from exam_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from exam_app.core.services.question_bank import QuestionBank
from exam_app.server.api_server import start_api_server
from exam_app.utils.logging_config import configure_logging


def _load_question_bank() -> QuestionBank:
    """Use the configured question file if there is one, else the built-in pool."""
    configured = os.environ.get(QUESTIONS_FILE_ENV_VAR, "").strip()
    if configured:
        return QuestionBank.from_file(Path(configured))
    return QuestionBank.default()


def main() -> None:
    """Initialize logging, load the question pool and serve the API."""
    logger = configure_logging()
    logger.info("Starting %s…", APP_NAME)

    bank = _load_question_bank()
    server_thread = start_api_server(bank=bank, host=DEFAULT_HOST, port=DEFAULT_PORT)
    logger.info("Backend server listening at http://localhost:%d", DEFAULT_PORT)
    try:
        server_thread.join()
    except KeyboardInterrupt:
        logger.info("Shutting down.")


if __name__ == "__main__":
    main()
