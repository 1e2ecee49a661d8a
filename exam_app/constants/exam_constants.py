"""Exam-related constants shared across the core and server layers."""

DEFAULT_USER_NAME: str = "Guest"
MINUTES_PER_QUESTION: float = 1.2
TICK_INTERVAL_SECONDS: float = 1.0
QUESTIONS_FILE_ENV_VAR: str = "EXAM_QUESTIONS_FILE"
SESSION_IDLE_TIMEOUT_TICKS: int = 30 * 60
COMPLETED_SESSION_RETENTION_TICKS: int = 5 * 60
