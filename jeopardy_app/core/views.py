"""Read-only snapshots handed to the page layer."""

from __future__ import annotations

from dataclasses import dataclass

from jeopardy_app.core.models import Answer, Category, Player, Rating, TaskKind, Try

_RATING_SIGNS = {
    Rating.POSITIVE: "+",
    Rating.NEGATIVE: "-",
    Rating.NEUTRAL: "0",
}


def format_attempt(attempt: Try) -> str:
    """Render an attempt as ``"+ Alice (200)"``; neutral ones omit the points."""
    sign = _RATING_SIGNS[attempt.rating]
    if attempt.points is None:
        return f"{sign} {attempt.player_name}"
    return f"{sign} {attempt.player_name} ({attempt.points})"


def format_player(player: Player) -> str:
    return f"{player.display_name}: {player.score}"


@dataclass(slots=True)
class AnswerView:
    """Everything the answer page shows for one board cell."""

    category_index: int
    answer_index: int
    category_name: str
    task_kind: TaskKind
    content: str
    points: int
    is_double: bool
    attempt_lines: list[str]

    @classmethod
    def from_answer(
        cls, category_index: int, answer_index: int, category: Category, answer: Answer
    ) -> "AnswerView":
        return cls(
            category_index=category_index,
            answer_index=answer_index,
            category_name=category.name,
            task_kind=answer.task.kind,
            content=answer.task.content,
            points=answer.points,
            is_double=answer.is_double,
            attempt_lines=[format_attempt(a) for a in answer.attempts],
        )


@dataclass(slots=True)
class AdminCellView:
    points: int
    is_double: bool
    attempt_lines: list[str]

    @property
    def display_lines(self) -> list[str]:
        """Attempt history once graded, otherwise just the point value."""
        return self.attempt_lines or [str(self.points)]


@dataclass(slots=True)
class AdminCategoryView:
    name: str
    cells: list[AdminCellView]


@dataclass(slots=True)
class AdminView:
    categories: list[AdminCategoryView]
    player_lines: list[str]
    status_code: int
    active_player_index: int
    buzz_order: list[str]

    @classmethod
    def build(
        cls,
        categories: list[Category],
        players: list[Player],
        status_code: int,
        active_player_index: int,
        buzz_order: list[str],
    ) -> "AdminView":
        return cls(
            categories=[
                AdminCategoryView(
                    name=category.name,
                    cells=[
                        AdminCellView(
                            points=answer.points,
                            is_double=answer.is_double,
                            attempt_lines=[format_attempt(a) for a in answer.attempts],
                        )
                        for answer in category.answers
                    ],
                )
                for category in categories
            ],
            player_lines=[format_player(p) for p in players],
            status_code=status_code,
            active_player_index=active_player_index,
            buzz_order=buzz_order,
        )
