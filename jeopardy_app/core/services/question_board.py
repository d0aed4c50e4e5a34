"""Service holding the category/answer catalog of the running game."""

from __future__ import annotations

from jeopardy_app.core.errors import IndexOutOfRangeError
from jeopardy_app.core.models import Answer, Category, Try


class QuestionBoard:
    """Owns the board: fixed shape, mutable point values and attempt history."""

    def __init__(self, categories: list[Category]) -> None:
        if not categories:
            raise ValueError("Board must contain at least one category.")
        self._categories = categories

    def get_categories(self) -> list[Category]:
        """Return the categories in board order (live objects, caller holds the lock)."""
        return list(self._categories)

    def get_category(self, category_index: int) -> Category:
        if not 0 <= category_index < len(self._categories):
            raise IndexOutOfRangeError(f"Category index {category_index} out of range")
        return self._categories[category_index]

    def get_answer(self, category_index: int, answer_index: int) -> Answer:
        category = self.get_category(category_index)
        if not 0 <= answer_index < len(category.answers):
            raise IndexOutOfRangeError(
                f"Answer index {answer_index} out of range for category {category_index}"
            )
        return category.answers[answer_index]

    def set_points(self, category_index: int, answer_index: int, points: int) -> None:
        if points < 0:
            raise ValueError("Point value must not be negative.")
        self.get_answer(category_index, answer_index).points = points

    def record_try(self, category_index: int, answer_index: int, attempt: Try) -> None:
        self.get_answer(category_index, answer_index).attempts.append(attempt)

    def reset(self) -> None:
        """Forget all attempts and restore the catalog point values."""
        for category in self._categories:
            for answer in category.answers:
                answer.points = answer.catalog_points
                answer.attempts.clear()
