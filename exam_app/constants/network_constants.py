"""Network configuration constants for the exam simulator."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 5000
CORS_ALLOW_ORIGINS: list[str] = ["*"]
