"""Utilities for loading the game board from a JSON question file.

File format:

    {
      "categories": [
        {
          "name": "History",
          "answers": [
            {"task": {"Text": "He crossed the Rubicon."}, "points": 100, "double": false},
            {"task": {"Picture": "https://example.org/map.png"}, "points": 200, "double": true}
          ]
        }
      ]
    }

``double`` is optional and defaults to false. Each task names exactly one of
``Text`` or ``Picture``.

Architecture note:
    The file is validated with pydantic models that mirror the JSON layout and
    are then converted into the mutable domain models. Keeping the schema
    separate from ``core.models`` means the runtime-only fields (attempts,
    catalog points) never leak into the file format.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from jeopardy_app.core.errors import DataUnavailableError
from jeopardy_app.core.models import Answer, Category, Task, TaskKind


class _TaskSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    Text: str | None = None
    Picture: str | None = None

    @model_validator(mode="after")
    def _exactly_one_kind(self) -> "_TaskSchema":
        if (self.Text is None) == (self.Picture is None):
            raise ValueError("task must define exactly one of 'Text' or 'Picture'")
        return self

    def to_task(self) -> Task:
        if self.Text is not None:
            return Task(kind=TaskKind.TEXT, content=self.Text)
        return Task(kind=TaskKind.PICTURE, content=self.Picture or "")


class _AnswerSchema(BaseModel):
    task: _TaskSchema
    points: int = Field(ge=0)
    double: bool = False


class _CategorySchema(BaseModel):
    name: str = Field(min_length=1)
    answers: list[_AnswerSchema] = Field(min_length=1)


class _BoardSchema(BaseModel):
    categories: list[_CategorySchema] = Field(min_length=1)


def load_board_from_file(file_path: Path) -> list[Category]:
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DataUnavailableError(f"Could not read question file {file_path}: {exc}") from exc
    return parse_board_json(text)


def parse_board_json(text: str) -> list[Category]:
    """Parse and validate a question document into board categories."""
    try:
        document = _BoardSchema.model_validate_json(text)
    except ValidationError as exc:
        raise DataUnavailableError(f"Data file structure invalid: {exc}") from exc

    return [
        Category(
            name=category.name,
            answers=[
                Answer(task=answer.task.to_task(), points=answer.points, is_double=answer.double)
                for answer in category.answers
            ],
        )
        for category in document.categories
    ]
