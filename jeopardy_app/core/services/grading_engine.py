"""Applies the admin's rating to the active player and records the attempt."""

from __future__ import annotations

from jeopardy_app.constants.game_constants import UNKNOWN_PLAYER_TEMPLATE
from jeopardy_app.core.models import Rating, Try
from jeopardy_app.core.services.player_registry import PlayerRegistry
from jeopardy_app.core.services.question_board import QuestionBoard


class GradingEngine:
    """Scores one attempt against one answer.

    Not synchronised on its own: the caller must hold the session lock so the
    point value read, the score update and the attempt append happen as one
    step. Grading is additive; grading the same answer twice scores twice.
    """

    def __init__(self, board: QuestionBoard, registry: PlayerRegistry) -> None:
        self._board = board
        self._registry = registry

    def grade(
        self,
        category_index: int,
        answer_index: int,
        rating: Rating,
        active_index: int,
    ) -> Try:
        answer = self._board.get_answer(category_index, answer_index)
        points = answer.points

        attempt = Try(
            player_name=self._resolve_name(active_index),
            rating=rating,
            points=None if rating is Rating.NEUTRAL else points,
        )
        # An out-of-range pointer has no score to change, the attempt is still kept.
        if self._registry.get_player(active_index) is not None:
            self._registry.adjust_score(active_index, attempt.score_delta)
        self._board.record_try(category_index, answer_index, attempt)
        return attempt

    def _resolve_name(self, active_index: int) -> str:
        player = self._registry.get_player(active_index)
        if player is None:
            return UNKNOWN_PLAYER_TEMPLATE.format(number=active_index + 1)
        return player.display_name
