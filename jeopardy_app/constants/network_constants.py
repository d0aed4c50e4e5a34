"""Network configuration constants for the quiz-show server."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 4242
