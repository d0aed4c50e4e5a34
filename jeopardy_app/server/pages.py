"""HTML pages served to contestants and to the host.

Pages are built from the view snapshots in ``core.views``. Every dynamic
string goes through ``html.escape`` except rendered task markdown, which the
renderer already escapes.
"""

from __future__ import annotations

from html import escape
from itertools import zip_longest
from urllib.parse import urlencode

from jeopardy_app.constants.ui_constants import (
    ADMIN_PAGE_TITLE,
    ADMIN_REFRESH_SECONDS,
    BACK_TO_BOARD,
    BUZZER_BUTTON,
    DOUBLE_BADGE,
    NO_BUZZES_MESSAGE,
    NO_PLAYERS_MESSAGE,
    PAGE_TITLE,
    RATING_LABELS,
    REGISTER_BUTTON,
    SPLASH_HEADING,
    STATUS_LABELS,
)
from jeopardy_app.core.markdown_renderer import renderer
from jeopardy_app.core.models import TaskKind
from jeopardy_app.core.views import AdminView, AnswerView

_STYLE = """
      body { font-family: system-ui, sans-serif; margin: 0; }
      .buzzer { background-color: #ee2210; border: none; border-radius: 42px; color: #fff;
                width: 90vw; height: 95vh; margin: 10px 5vw; cursor: pointer; font-size: 8vw; }
      .regular { background-color: #3a5eff; border: none; color: #fff; width: 90vw; height: 100px;
                 margin: 10px 3vw; cursor: pointer; }
      .pad { margin-left: 3vw; margin-right: 3vw; }
      input[type=text] { margin-left: 3vw; margin-right: 3vw; width: 90vw; }
      table.board { border-collapse: collapse; width: 100%; }
      table.board th, table.board td { border: 1px solid #1b2a8a; padding: 0.5rem; text-align: center; }
      table.board th { background: #1b2a8a; color: #fff; }
      table.board td a { display: block; color: #1b2a8a; text-decoration: none; }
      .double { color: #d97706; font-weight: bold; }
      .active { font-weight: bold; }
      .task img { max-width: 90vw; max-height: 70vh; }
"""


def _page(body: str, title: str = PAGE_TITLE, refresh_seconds: int | None = None) -> str:
    refresh = ""
    if refresh_seconds:
        refresh = f'\n    <meta http-equiv="refresh" content="{refresh_seconds}" />'
    return f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>{escape(title)}</title>
    <meta name="viewport" content="width=device-width, initial-scale=1" />{refresh}
    <style>{_STYLE}    </style>
  </head>
  <body>
{body}
  </body>
</html>
"""


def _link(path: str, label: str, **params: object) -> str:
    query = f"?{urlencode(params)}" if params else ""
    return f'<a href="{escape(path + query)}">{escape(label)}</a>'


def render_splash_page() -> str:
    body = f"""    <h1 class="pad">{escape(SPLASH_HEADING)}</h1>
    <form action="/register">
      <input type="text" id="name" name="name" pattern="[0-9A-Za-z_\\-]+" required>
      <input type="submit" class="regular" value="{escape(REGISTER_BUTTON)}">
    </form>"""
    return _page(body)


def render_buzzer_page(display_name: str | None = None) -> str:
    greeting = ""
    if display_name:
        greeting = f'    <p class="pad">{escape(display_name)}</p>\n'
    body = f"""{greeting}    <form action="/buzz">
      <input type="submit" class="buzzer" value="{escape(BUZZER_BUTTON)}">
    </form>"""
    return _page(body)


def render_admin_page(view: AdminView) -> str:
    header = "".join(f"<th>{escape(category.name)}</th>" for category in view.categories)
    rows: list[str] = []
    columns = [category.cells for category in view.categories]
    for answer_index, row in enumerate(zip_longest(*columns)):
        cells: list[str] = []
        for category_index, cell in enumerate(row):
            if cell is None:
                cells.append("<td></td>")
                continue
            text = "<br>".join(escape(line) for line in cell.display_lines)
            css = ' class="double"' if cell.is_double else ""
            href = escape(f"/answer?{urlencode({'c': category_index, 'a': answer_index})}")
            cells.append(f'<td{css}><a href="{href}">{text}</a></td>')
        rows.append(f"<tr>{''.join(cells)}</tr>")

    players: list[str] = []
    for index, line in enumerate(view.player_lines):
        css = ' class="active"' if index == view.active_player_index else ""
        players.append(f"<li{css}>{escape(line)} {_link('/admin', 'select', player=index)}</li>")
    player_list = "\n".join(players) or f"<li>{escape(NO_PLAYERS_MESSAGE)}</li>"

    buzzes = "\n".join(f"<li>{escape(name)}</li>" for name in view.buzz_order)
    buzz_list = buzzes or f"<li>{escape(NO_BUZZES_MESSAGE)}</li>"

    board_rows = "".join(rows)
    status_label = STATUS_LABELS.get(view.status_code, str(view.status_code))
    next_code = 0 if view.status_code else 1
    controls = " | ".join(
        [
            _link("/admin", f"Switch to {STATUS_LABELS[next_code]}", setstate=next_code),
            _link("/admin", "Reset game", reset="true"),
        ]
    )
    body = f"""    <div class="pad">
      <p>Status: <strong>{escape(status_label)}</strong> ({view.status_code}) | {controls}</p>
      <table class="board">
        <tr>{header}</tr>
        {board_rows}
      </table>
      <h2>Players</h2>
      <ol start="0">
{player_list}
      </ol>
      <h2>Buzz order</h2>
      <ol>
{buzz_list}
      </ol>
    </div>"""
    return _page(body, title=ADMIN_PAGE_TITLE, refresh_seconds=ADMIN_REFRESH_SECONDS)


def render_answer_page(view: AnswerView) -> str:
    if view.task_kind is TaskKind.PICTURE:
        task_html = f'<img src="{escape(view.content)}" alt="">'
    else:
        task_html = renderer.render_fragment(view.content)

    double = f'<p class="double">{escape(DOUBLE_BADGE)}</p>' if view.is_double else ""
    position = {"c": view.category_index, "a": view.answer_index}
    ratings = " | ".join(
        _link("/answer", label, rating=rating, **position) for rating, label in RATING_LABELS.items()
    )
    back_link = _link("/admin", BACK_TO_BOARD)
    attempts = "".join(f"<li>{escape(line)}</li>" for line in view.attempt_lines)
    body = f"""    <div class="pad">
      <h2>{escape(view.category_name)} for {view.points}</h2>
      {double}
      <div class="task">{task_html}</div>
      <p>{ratings}</p>
      <form action="/answer">
        <input type="hidden" name="c" value="{view.category_index}">
        <input type="hidden" name="a" value="{view.answer_index}">
        <input type="number" name="value" min="0" value="{view.points}">
        <input type="submit" value="Set value">
      </form>
      <ul>{attempts}</ul>
      <p>{back_link}</p>
    </div>"""
    return _page(body)
