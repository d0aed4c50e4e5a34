"""Static metadata describing OpenJeopardy."""

APP_NAME = "OpenJeopardy"
APP_VERSION = "0.2"
APP_ABOUT_TEXT = (
    "OpenJeopardy is a quiz-show controller for a single room. The host drives the "
    "board from the server machine while contestants register and buzz from their phones."
)
