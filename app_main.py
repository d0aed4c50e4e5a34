"""Application entry point for the OpenJeopardy server."""

from __future__ import annotations

import argparse
from pathlib import Path
import socket
import sys

from jeopardy_app.constants.about import APP_ABOUT_TEXT, APP_NAME
from jeopardy_app.constants.game_constants import IDENTITY_TTL_SECONDS
from jeopardy_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from jeopardy_app.core.board_loader import load_board_from_file
from jeopardy_app.core.errors import DataUnavailableError
from jeopardy_app.core.game_session import GameSession
from jeopardy_app.server.api_server import run_api_server
from jeopardy_app.utils.logging_config import configure_logging


def _determine_contestant_url(port: int) -> str:
    """Best-effort determination of the local IP for the contestant-facing URL."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}/"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="openjeopardy", description=APP_ABOUT_TEXT)
    parser.add_argument("question_file", type=Path, help="JSON file with the board's categories")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument(
        "--identity-ttl",
        type=float,
        default=IDENTITY_TTL_SECONDS,
        help="seconds a contestant's registration is remembered",
    )
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Load the board, build the game session and serve it."""
    args = parse_args(argv)
    logger = configure_logging(args.log_level)
    logger.info("Starting %s…", APP_NAME)

    question_path = args.question_file
    if not question_path.is_absolute():
        question_path = Path.cwd() / question_path
    try:
        categories = load_board_from_file(question_path)
    except DataUnavailableError as exc:
        logger.error("%s", exc)
        sys.exit(1)
    logger.info("Loaded %d categories from %s", len(categories), question_path)

    session = GameSession(categories, identity_ttl_seconds=args.identity_ttl)
    logger.info("Contestant page available at %s", _determine_contestant_url(args.port))
    logger.info("Admin board available at http://127.0.0.1:%d/admin", args.port)
    run_api_server(session, host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
