import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from conftest import FakeTimer
from jeopardy_app.core.errors import (
    GameNotJoinableError,
    IdentityUnavailableError,
    IndexOutOfRangeError,
    InvalidNameError,
    NotRegisteredError,
)
from jeopardy_app.core.game_session import GameSession
from jeopardy_app.core.models import Rating, SessionStatus, Try
from jeopardy_app.core.services.identity_cache import IdentityCache


def _scores(session):
    return [(p.display_name, p.score) for p in session.get_players()]


def test_full_round_scenario(session):
    session.register("10.0.0.2", "Alice")
    assert _scores(session) == [("Alice", 0)]

    session.set_status(1)
    with pytest.raises(GameNotJoinableError):
        session.register("10.0.0.3", "Bob")

    session.select_active_player(0)
    session.grade(0, 0, Rating.POSITIVE)
    assert _scores(session) == [("Alice", 200)]

    session.grade(0, 0, Rating.NEGATIVE)
    assert _scores(session) == [("Alice", 0)]
    view = session.reveal_answer(0, 0)
    assert view.attempt_lines == ["+ Alice (200)", "- Alice (200)"]


@pytest.mark.parametrize("name", ["Alice", "bob_42", "x-y", "Z"])
def test_register_accepts_allowed_names_only_during_registration(session, name):
    session.register("10.0.0.2", name)
    session.set_status(1)
    with pytest.raises(GameNotJoinableError):
        session.register("10.0.0.2", name)
    assert len(session.get_players()) == 1


@pytest.mark.parametrize("name", ["", "Al ice", "Zoë", "a;b", "name\n"])
def test_register_rejects_invalid_names(session, name):
    with pytest.raises(InvalidNameError):
        session.register("10.0.0.2", name)
    assert session.get_players() == []


def test_register_without_address(session):
    with pytest.raises(IdentityUnavailableError):
        session.register(None, "Alice")
    assert session.get_players() == []


def test_reregistration_from_same_address_appends_second_player(session):
    session.register("10.0.0.2", "Alice")
    session.register("10.0.0.2", "Alicia")

    assert _scores(session) == [("Alice", 0), ("Alicia", 0)]
    assert session.identify("10.0.0.2") == "Alicia"


@pytest.mark.parametrize("status_code", [0, 1])
def test_buzz_from_unknown_address_is_not_registered(session, status_code):
    session.set_status(status_code)
    with pytest.raises(NotRegisteredError):
        session.buzz("10.0.0.9")


def test_buzz_records_order_until_player_selected(session):
    session.register("10.0.0.2", "Alice")
    session.register("10.0.0.3", "Bob")
    session.set_status(1)

    session.buzz("10.0.0.3")
    session.buzz("10.0.0.2")
    assert [b.player_name for b in session.get_buzz_order()] == ["Bob", "Alice"]

    session.select_active_player(1)
    assert session.get_buzz_order() == []


def test_buzz_after_identity_expiry_is_not_registered(categories):
    timer = FakeTimer()
    session = GameSession(categories, identity_cache=IdentityCache(ttl_seconds=60, timer=timer))
    session.register("10.0.0.2", "Alice")
    session.buzz("10.0.0.2")

    timer.advance(61)

    with pytest.raises(NotRegisteredError):
        session.buzz("10.0.0.2")
    assert len(session.get_players()) == 1


@pytest.mark.parametrize(
    "rating, expected",
    [(Rating.POSITIVE, 400), (Rating.NEGATIVE, -400), (Rating.NEUTRAL, 0)],
)
def test_grade_changes_score_by_exact_point_value(session, rating, expected):
    session.register("10.0.0.2", "Alice")
    session.register("10.0.0.3", "Bob")
    session.select_active_player(1)

    attempt = session.grade(0, 1, rating)

    assert _scores(session) == [("Alice", 0), ("Bob", expected)]
    assert attempt.player_name == "Bob"
    assert attempt.score_delta == expected


def test_neutral_attempt_has_no_points(session):
    session.register("10.0.0.2", "Alice")
    attempt = session.grade(0, 0, Rating.NEUTRAL)
    assert attempt == Try(player_name="Alice", rating=Rating.NEUTRAL, points=None)


def test_grading_is_not_idempotent(session):
    session.register("10.0.0.2", "Alice")
    session.grade(0, 0, Rating.POSITIVE)
    session.grade(0, 0, Rating.POSITIVE)

    assert _scores(session) == [("Alice", 400)]
    assert len(session.reveal_answer(0, 0).attempt_lines) == 2


def test_overridden_value_is_used_for_grading(session):
    session.register("10.0.0.2", "Alice")
    session.set_answer_value(0, 0, 1000)
    session.grade(0, 0, Rating.POSITIVE)

    assert _scores(session) == [("Alice", 1000)]
    assert session.reveal_answer(0, 0).attempt_lines == ["+ Alice (1000)"]


def test_attempt_keeps_value_at_grading_time(session):
    session.register("10.0.0.2", "Alice")
    session.grade(0, 0, Rating.POSITIVE)
    session.set_answer_value(0, 0, 50)

    view = session.reveal_answer(0, 0)
    assert view.points == 50
    assert view.attempt_lines == ["+ Alice (200)"]


def test_out_of_range_active_player_only_records_placeholder(session):
    session.register("10.0.0.2", "Alice")
    session.select_active_player(4)

    attempt = session.grade(0, 0, Rating.POSITIVE)

    assert attempt.player_name == "UNKNOWN No.5"
    assert _scores(session) == [("Alice", 0)]
    assert session.reveal_answer(0, 0).attempt_lines == ["+ UNKNOWN No.5 (200)"]


def test_grading_with_no_players_uses_placeholder(session):
    attempt = session.grade(1, 0, Rating.NEGATIVE)
    assert attempt.player_name == "UNKNOWN No.1"


@pytest.mark.parametrize("position", [(2, 0), (0, 2), (-1, 0), (1, 1)])
def test_invalid_indices_raise_index_error(session, position):
    with pytest.raises(IndexOutOfRangeError):
        session.reveal_answer(*position)
    with pytest.raises(IndexOutOfRangeError):
        session.grade(*position, Rating.POSITIVE)
    with pytest.raises(IndexOutOfRangeError):
        session.set_answer_value(*position, 100)


def test_answer_action_with_bad_indices_changes_nothing(session):
    session.register("10.0.0.2", "Alice")
    with pytest.raises(IndexOutOfRangeError):
        session.answer_action(0, 9, rating=Rating.POSITIVE, new_value=10)
    assert _scores(session) == [("Alice", 0)]


def test_answer_action_applies_value_before_rating(session):
    session.register("10.0.0.2", "Alice")

    view = session.answer_action(0, 1, rating=Rating.POSITIVE, new_value=800)

    assert view.points == 800
    assert view.is_double is True
    assert view.attempt_lines == ["+ Alice (800)"]
    assert _scores(session) == [("Alice", 800)]


def test_set_status_maps_codes(session):
    assert session.set_status(0) is SessionStatus.REGISTRATION
    assert session.set_status(7) is SessionStatus.BUZZER_ACTIVE
    assert session.set_status(7) is SessionStatus.BUZZER_ACTIVE
    assert session.get_status() is SessionStatus.BUZZER_ACTIVE
    assert session.set_status(0) is SessionStatus.REGISTRATION


def test_reset_game_restores_initial_state(session):
    session.register("10.0.0.2", "Alice")
    session.set_status(1)
    session.select_active_player(0)
    session.set_answer_value(0, 0, 999)
    session.grade(0, 0, Rating.POSITIVE)
    session.buzz("10.0.0.2")

    session.reset_game()

    assert session.get_players() == []
    assert session.get_status() is SessionStatus.REGISTRATION
    assert session.get_active_player_index() == 0
    assert session.get_buzz_order() == []
    assert session.identify("10.0.0.2") is None
    view = session.reveal_answer(0, 0)
    assert view.points == 200
    assert view.attempt_lines == []
    with pytest.raises(NotRegisteredError):
        session.buzz("10.0.0.2")


def test_concurrent_grading_applies_every_delta(session):
    session.register("10.0.0.2", "Alice")

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: session.grade(1, 0, Rating.POSITIVE), range(200)))

    assert _scores(session) == [("Alice", 200 * 100)]
    assert len(session.reveal_answer(1, 0).attempt_lines) == 200


def test_concurrent_registration_keeps_every_player(session):
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda i: session.register(f"10.0.1.{i}", f"p{i}"), range(100)))

    assert len(session.get_players()) == 100
    assert session.identify("10.0.1.42") == "p42"


def test_injected_identity_cache_is_used(categories):
    cache = IdentityCache(ttl_seconds=60, timer=FakeTimer())
    session = GameSession(categories, identity_cache=cache)

    session.register("10.0.0.2", "Alice")

    assert cache.lookup("10.0.0.2") == "Alice"


def test_reset_during_buzz_lookup_leaves_no_stale_buzz(categories):
    class ResettingCache(IdentityCache):
        """Starts a reset from another thread while a lookup is in progress."""

        def __init__(self) -> None:
            super().__init__(ttl_seconds=60)
            self.session = None
            self.reset_thread = None

        def lookup(self, key):
            name = super().lookup(key)
            if self.reset_thread is None and self.session is not None:
                self.reset_thread = threading.Thread(target=self.session.reset_game)
                self.reset_thread.start()
                self.reset_thread.join(timeout=0.2)
            return name

    cache = ResettingCache()
    session = GameSession(categories, identity_cache=cache)
    session.register("10.0.0.2", "Alice")
    cache.session = session

    session.buzz("10.0.0.2")
    cache.reset_thread.join()

    assert session.get_buzz_order() == []
    assert session.get_players() == []
