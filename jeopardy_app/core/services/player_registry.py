"""Service for managing registered players and their running scores."""

from __future__ import annotations

from jeopardy_app.core.models import Player


class PlayerRegistry:
    """Append-only, registration-ordered list of players.

    Players are never removed, so a player's position doubles as its id and
    the active-player pointer stays valid for the whole game.
    """

    def __init__(self) -> None:
        self._players: list[Player] = []

    def add_player(self, display_name: str) -> Player:
        player = Player(display_name=display_name)
        self._players.append(player)
        return player

    def get_player(self, index: int) -> Player | None:
        """Return the player at ``index`` or ``None`` when there is no such slot."""
        if 0 <= index < len(self._players):
            return self._players[index]
        return None

    def adjust_score(self, index: int, delta: int) -> Player:
        player = self.get_player(index)
        if player is None:
            raise IndexError(f"Player index {index} out of range")
        player.score += delta
        return player

    def get_players(self) -> list[Player]:
        """Return copies of all players in registration order."""
        return [Player(display_name=p.display_name, score=p.score) for p in self._players]

    def clear(self) -> None:
        self._players = []
