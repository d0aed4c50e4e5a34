"""FastAPI server exposing the contestant and host pages."""

from __future__ import annotations

import ipaddress
import logging
from dataclasses import asdict
from urllib.parse import urlencode

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
import uvicorn

from jeopardy_app.constants.about import APP_NAME, APP_VERSION
from jeopardy_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from jeopardy_app.core.errors import GameError, UnauthorizedError
from jeopardy_app.core.game_session import GameSession
from jeopardy_app.core.models import Rating
from jeopardy_app.server.pages import (
    render_admin_page,
    render_answer_page,
    render_buzzer_page,
    render_splash_page,
)

logger = logging.getLogger(__name__)


def get_client_address(request: Request) -> str | None:
    """Return the peer address of the request, if the transport knows it."""
    if request.client is None:
        return None
    return request.client.host


def is_loopback_address(address: str | None) -> bool:
    if not address:
        return False
    try:
        return ipaddress.ip_address(address).is_loopback
    except ValueError:
        return False


def _http_error(exc: GameError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=str(exc))


def _require_admin(address: str | None) -> None:
    if not is_loopback_address(address):
        logger.warning("Rejected admin request from %s", address)
        raise _http_error(UnauthorizedError("Not an admin"))


def _get_session_dependency(session: GameSession):
    def dependency() -> GameSession:
        return session

    return dependency


def create_api_app(session: GameSession) -> FastAPI:
    """Create a FastAPI application wired to the provided game session."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    session_dep = _get_session_dependency(session)

    @app.get("/", response_class=HTMLResponse)
    def serve_splash_page() -> str:
        return render_splash_page()

    @app.get("/buzzer", response_class=HTMLResponse)
    def serve_buzzer_page(
        address: str | None = Depends(get_client_address),
        game: GameSession = Depends(session_dep),
    ) -> str:
        return render_buzzer_page(game.identify(address))

    @app.get("/register")
    def register(
        name: str,
        address: str | None = Depends(get_client_address),
        game: GameSession = Depends(session_dep),
    ) -> RedirectResponse:
        try:
            game.register(address, name)
        except GameError as exc:
            raise _http_error(exc) from exc
        return RedirectResponse(url="/buzzer", status_code=307)

    @app.get("/buzz")
    def buzz(
        address: str | None = Depends(get_client_address),
        game: GameSession = Depends(session_dep),
    ) -> RedirectResponse:
        try:
            game.buzz(address)
        except GameError as exc:
            raise _http_error(exc) from exc
        return RedirectResponse(url="/buzzer", status_code=307)

    @app.get("/admin", response_class=HTMLResponse, response_model=None)
    def admin(
        setstate: int | None = None,
        reset: bool = False,
        player: int | None = Query(default=None, ge=0),
        address: str | None = Depends(get_client_address),
        game: GameSession = Depends(session_dep),
    ) -> HTMLResponse | RedirectResponse:
        _require_admin(address)
        if reset:
            game.reset_game()
        if setstate is not None:
            game.set_status(setstate)
        if player is not None:
            game.select_active_player(player)
        if reset or setstate is not None or player is not None:
            # Keep the refreshing board URL free of one-shot actions.
            return RedirectResponse(url="/admin", status_code=303)
        return HTMLResponse(render_admin_page(game.admin_snapshot()))

    @app.get("/answer", response_class=HTMLResponse, response_model=None)
    def answer(
        c: int = Query(ge=0),
        a: int = Query(ge=0),
        value: int | None = Query(default=None, ge=0),
        rating: Rating | None = None,
        address: str | None = Depends(get_client_address),
        game: GameSession = Depends(session_dep),
    ) -> HTMLResponse | RedirectResponse:
        _require_admin(address)
        try:
            view = game.answer_action(c, a, rating=rating, new_value=value)
        except GameError as exc:
            raise _http_error(exc) from exc
        if rating is not None or value is not None:
            return RedirectResponse(url=f"/answer?{urlencode({'c': c, 'a': a})}", status_code=303)
        return HTMLResponse(render_answer_page(view))

    @app.get("/api/admin/snapshot")
    def admin_snapshot(
        address: str | None = Depends(get_client_address),
        game: GameSession = Depends(session_dep),
    ) -> dict[str, object]:
        _require_admin(address)
        return asdict(game.admin_snapshot())

    return app


def run_api_server(
    session: GameSession,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    log_level: str = "info",
) -> None:
    """Serve the game until the process is interrupted."""
    app = create_api_app(session)
    config = uvicorn.Config(app=app, host=host, port=port, log_level=log_level)
    server = uvicorn.Server(config)
    server.run()
