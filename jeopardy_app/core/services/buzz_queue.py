"""Ordered log of buzzes since the admin last picked a player."""

from __future__ import annotations

from datetime import datetime, timezone

from jeopardy_app.core.models import BuzzEntry


class BuzzQueue:
    def __init__(self) -> None:
        self._entries: list[BuzzEntry] = []

    def record(self, player_name: str) -> BuzzEntry:
        entry = BuzzEntry(player_name=player_name, buzzed_at=datetime.now(timezone.utc))
        self._entries.append(entry)
        return entry

    def get_entries(self) -> list[BuzzEntry]:
        """Return buzzes oldest first."""
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()
