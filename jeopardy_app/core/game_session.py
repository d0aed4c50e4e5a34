"""Business logic for the running game, shared between all request handlers."""

from __future__ import annotations

import logging
from threading import Lock

from jeopardy_app.constants.game_constants import IDENTITY_TTL_SECONDS, NAME_PATTERN
from jeopardy_app.core.errors import (
    GameNotJoinableError,
    IdentityUnavailableError,
    InvalidNameError,
    NotRegisteredError,
)
from jeopardy_app.core.models import BuzzEntry, Category, Player, Rating, SessionStatus, Try
from jeopardy_app.core.services.buzz_queue import BuzzQueue
from jeopardy_app.core.services.grading_engine import GradingEngine
from jeopardy_app.core.services.identity_cache import (
    AddressIdentityResolver,
    IdentityCache,
    IdentityResolver,
)
from jeopardy_app.core.services.player_registry import PlayerRegistry
from jeopardy_app.core.services.question_board import QuestionBoard
from jeopardy_app.core.services.turn_state import ActivePlayerSelector, SessionStatusMachine
from jeopardy_app.core.views import AdminView, AnswerView

logger = logging.getLogger(__name__)


class GameSession:
    """Facade for the game services: Board, Registry, Selector, Status and Identity.

    One instance lives for the lifetime of the server process. Every mutation
    and every snapshot read runs under ``self._lock``. The identity cache has
    its own lock, always taken after the session lock when both are held.
    """

    def __init__(
        self,
        categories: list[Category],
        identity_cache: IdentityCache | None = None,
        resolver: IdentityResolver | None = None,
        identity_ttl_seconds: float = IDENTITY_TTL_SECONDS,
    ) -> None:
        self._lock = Lock()

        # Services
        self._board = QuestionBoard(categories)
        self._registry = PlayerRegistry()
        self._status = SessionStatusMachine()
        self._selector = ActivePlayerSelector()
        self._buzzes = BuzzQueue()
        self._grading = GradingEngine(self._board, self._registry)
        if identity_cache is None:
            identity_cache = IdentityCache(ttl_seconds=identity_ttl_seconds)
        self._identities = identity_cache
        self._resolver = resolver if resolver is not None else AddressIdentityResolver()

    # --- Contestant actions ---

    def register(self, client_address: str | None, name: str) -> Player:
        with self._lock:
            if not self._status.is_registration_open():
                raise GameNotJoinableError("Game has already started! Try again later.")
            if not NAME_PATTERN.fullmatch(name):
                raise InvalidNameError("Invalid name")
            key = self._resolver.resolve(client_address)
            self._identities.remember(key, name)
            self._registry.add_player(name)
        logger.info('%s registered using name "%s"', key, name)
        return Player(display_name=name)

    def buzz(self, client_address: str | None) -> BuzzEntry:
        key = self._resolver.resolve(client_address)
        with self._lock:
            # Lookup and record are atomic with respect to reset_game.
            name = self._identities.lookup(key)
            if name is None:
                raise NotRegisteredError("Not registered")
            entry = self._buzzes.record(name)
        logger.info("%s buzzered!", name)
        return entry

    def identify(self, client_address: str | None) -> str | None:
        """Return the display name remembered for a caller, if any."""
        try:
            key = self._resolver.resolve(client_address)
        except IdentityUnavailableError:
            return None
        return self._identities.lookup(key)

    # --- Board and grading ---

    def reveal_answer(self, category_index: int, answer_index: int) -> AnswerView:
        with self._lock:
            return self._answer_view(category_index, answer_index)

    def grade(self, category_index: int, answer_index: int, rating: Rating) -> Try:
        with self._lock:
            attempt = self._grade_locked(category_index, answer_index, rating)
        _log_attempt(category_index, answer_index, attempt)
        return attempt

    def set_answer_value(self, category_index: int, answer_index: int, points: int) -> None:
        with self._lock:
            self._board.set_points(category_index, answer_index, points)
        logger.info("Answer %d/%d now worth %d points", category_index, answer_index, points)

    def answer_action(
        self,
        category_index: int,
        answer_index: int,
        rating: Rating | None = None,
        new_value: int | None = None,
    ) -> AnswerView:
        """Reveal an answer, optionally overriding its value and grading it first."""
        attempt = None
        with self._lock:
            # Validate before touching anything so a bad pair leaves no trace.
            self._board.get_answer(category_index, answer_index)
            if new_value is not None:
                self._board.set_points(category_index, answer_index, new_value)
            if rating is not None:
                attempt = self._grade_locked(category_index, answer_index, rating)
            view = self._answer_view(category_index, answer_index)
        if attempt is not None:
            _log_attempt(category_index, answer_index, attempt)
        return view

    # --- Admin controls ---

    def set_status(self, code: int) -> SessionStatus:
        with self._lock:
            status = self._status.set_code(code)
        logger.info("Status set to %s", status.name)
        return status

    def get_status(self) -> SessionStatus:
        with self._lock:
            return self._status.get_status()

    def select_active_player(self, index: int) -> None:
        with self._lock:
            self._selector.select(index)
            self._buzzes.clear()
        logger.info("Active player set to index %d", index)

    def get_active_player_index(self) -> int:
        with self._lock:
            return self._selector.get_index()

    def get_players(self) -> list[Player]:
        with self._lock:
            return self._registry.get_players()

    def get_buzz_order(self) -> list[BuzzEntry]:
        with self._lock:
            return self._buzzes.get_entries()

    def reset_game(self) -> None:
        with self._lock:
            self._registry.clear()
            self._board.reset()
            self._status.reset()
            self._selector.reset()
            self._buzzes.clear()
            self._identities.clear()
        logger.info("Game reset")

    def admin_snapshot(self) -> AdminView:
        with self._lock:
            return AdminView.build(
                categories=self._board.get_categories(),
                players=self._registry.get_players(),
                status_code=int(self._status.get_status()),
                active_player_index=self._selector.get_index(),
                buzz_order=[entry.player_name for entry in self._buzzes.get_entries()],
            )

    # --- Internals (lock must be held) ---

    def _grade_locked(self, category_index: int, answer_index: int, rating: Rating) -> Try:
        attempt = self._grading.grade(
            category_index, answer_index, rating, self._selector.get_index()
        )
        self._buzzes.clear()
        return attempt

    def _answer_view(self, category_index: int, answer_index: int) -> AnswerView:
        answer = self._board.get_answer(category_index, answer_index)
        category = self._board.get_category(category_index)
        return AnswerView.from_answer(category_index, answer_index, category, answer)


def _log_attempt(category_index: int, answer_index: int, attempt: Try) -> None:
    logger.info(
        "Graded %d/%d as %s for %s",
        category_index,
        answer_index,
        attempt.rating.value,
        attempt.player_name,
    )
