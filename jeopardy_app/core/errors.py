"""Exceptions raised by the game session and the board loader."""

from __future__ import annotations


class GameError(Exception):
    """Base class for per-request errors; carries the HTTP status to report."""

    status_code: int = 400


class InvalidNameError(GameError):
    """Raised when a display name contains characters outside the allow-list."""

    status_code = 400


class GameNotJoinableError(GameError):
    """Raised when registering while the buzzer round is running."""

    status_code = 409


class IdentityUnavailableError(GameError):
    """Raised when the caller's network address cannot be determined."""

    status_code = 500


class NotRegisteredError(GameError):
    status_code = 403


class IndexOutOfRangeError(GameError, IndexError):
    status_code = 404


class UnauthorizedError(GameError):
    """Raised when an admin operation is requested from a non-loopback address."""

    status_code = 401


class DataUnavailableError(Exception):
    """Raised when the question file is missing or malformed. Fatal at startup."""
