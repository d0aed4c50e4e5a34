"""Session status machine and active-player pointer."""

from __future__ import annotations

from jeopardy_app.core.models import SessionStatus


class SessionStatusMachine:
    """Two-state switch gating registration. The admin may toggle it freely."""

    def __init__(self) -> None:
        self._status = SessionStatus.REGISTRATION

    def set_code(self, code: int) -> SessionStatus:
        self._status = SessionStatus.from_code(code)
        return self._status

    def get_status(self) -> SessionStatus:
        return self._status

    def is_registration_open(self) -> bool:
        return self._status is SessionStatus.REGISTRATION

    def reset(self) -> None:
        self._status = SessionStatus.REGISTRATION


class ActivePlayerSelector:
    """Index of the player who is graded next. Out-of-range values are kept as-is."""

    def __init__(self) -> None:
        self._index: int = 0

    def select(self, index: int) -> None:
        self._index = index

    def get_index(self) -> int:
        return self._index

    def reset(self) -> None:
        self._index = 0
