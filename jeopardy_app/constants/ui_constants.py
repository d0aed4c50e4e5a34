"""Text and layout constants for the HTML pages."""

PAGE_TITLE: str = "Jeopardy"
ADMIN_PAGE_TITLE: str = "Jeopardy Admin"

SPLASH_HEADING: str = "Welcome to Jeopardy! Pick a name and register!"
REGISTER_BUTTON: str = "Register"
BUZZER_BUTTON: str = "Buzzer!"

STATUS_LABELS: dict[int, str] = {0: "Registration", 1: "Buzzer active"}
RATING_LABELS: dict[str, str] = {"positive": "Correct", "neutral": "Neutral", "negative": "Wrong"}
DOUBLE_BADGE: str = "Double Jeopardy!"
BACK_TO_BOARD: str = "Back to board"
NO_PLAYERS_MESSAGE: str = "No players registered yet."
NO_BUZZES_MESSAGE: str = "Nobody has buzzed."

ADMIN_REFRESH_SECONDS: int = 5
