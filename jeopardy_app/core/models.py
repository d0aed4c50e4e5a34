"""Domain models for the quiz-show board and its contestants."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum


class TaskKind(str, Enum):
    TEXT = "text"
    PICTURE = "picture"


class Rating(str, Enum):
    """Admin verdict for an attempt; values match the query-string spelling."""

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class SessionStatus(IntEnum):
    """Whether contestants may still register."""

    REGISTRATION = 0
    BUZZER_ACTIVE = 1

    @classmethod
    def from_code(cls, code: int) -> "SessionStatus":
        return cls.REGISTRATION if code == 0 else cls.BUZZER_ACTIVE


@dataclass(slots=True, frozen=True)
class Task:
    """What is shown on screen when an answer is revealed."""

    kind: TaskKind
    content: str  # Text body, or the picture URL


@dataclass(slots=True, frozen=True)
class Try:
    """One grading event recorded against an answer.

    ``player_name`` is a snapshot taken at grading time, not a reference into
    the player registry. ``points`` is ``None`` for neutral ratings.
    """

    player_name: str
    rating: Rating
    points: int | None = None

    @property
    def score_delta(self) -> int:
        if self.rating is Rating.POSITIVE:
            return self.points or 0
        if self.rating is Rating.NEGATIVE:
            return -(self.points or 0)
        return 0


@dataclass(slots=True)
class Answer:
    """Board cell. ``points`` may be overridden by the admin during play."""

    task: Task
    points: int
    is_double: bool = False
    catalog_points: int = field(init=False)
    attempts: list[Try] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.points < 0:
            raise ValueError("Point value must not be negative.")
        self.catalog_points = self.points


@dataclass(slots=True)
class Category:
    name: str
    answers: list[Answer]


@dataclass(slots=True)
class Player:
    """Registered contestant. Scores may go negative."""

    display_name: str
    score: int = 0


@dataclass(slots=True, frozen=True)
class BuzzEntry:
    """Represents a buzz pressed by a registered contestant."""

    player_name: str
    buzzed_at: datetime
