import json

import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from jeopardy_app.core.board_loader import parse_board_json
from jeopardy_app.core.game_session import GameSession
from jeopardy_app.server.api_server import create_api_app, get_client_address

ADMIN_ADDRESS = "127.0.0.1"
CLIENT_HEADER = "x-test-client-address"

BOARD_DOCUMENT = {
    "categories": [
        {
            "name": "History",
            "answers": [
                {"task": {"Text": "He crossed the Rubicon."}, "points": 200, "double": False},
                {"task": {"Text": "Year the Berlin Wall fell."}, "points": 400, "double": True},
            ],
        },
        {
            "name": "Flags",
            "answers": [
                {"task": {"Picture": "https://example.org/flag.png"}, "points": 100},
            ],
        },
    ]
}


class FakeTimer:
    """Manually advanced clock for identity expiry tests."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _address_from_header(request: Request) -> str | None:
    return request.headers.get(CLIENT_HEADER)


@pytest.fixture
def board_json():
    return json.dumps(BOARD_DOCUMENT)


@pytest.fixture
def categories(board_json):
    return parse_board_json(board_json)


@pytest.fixture
def session(categories):
    return GameSession(categories)


@pytest.fixture
def client(session):
    app = create_api_app(session)
    app.dependency_overrides[get_client_address] = _address_from_header
    with TestClient(app) as test_client:
        yield test_client


def as_client(address):
    """Headers that make a TestClient request appear to come from ``address``."""
    return {CLIENT_HEADER: address} if address is not None else {}
