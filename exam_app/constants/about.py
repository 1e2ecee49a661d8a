"""Static metadata describing the exam simulator."""

APP_NAME = "PMP Exam Simulator"
APP_VERSION = "0.1.0"
WELCOME_TEXT = f"{APP_NAME} Backend is running!"
