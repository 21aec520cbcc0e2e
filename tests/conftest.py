from __future__ import annotations

from collections.abc import Callable, Generator

import fakeredis
import pytest
from fastapi.testclient import TestClient

from tictactoe.api.deps import get_redis
from tictactoe.board import Board
from tictactoe.game import TicTacToe
from tictactoe.main import app

ALICE = "alice"
BOB = "bob"
MALLORY = "mallory"


@pytest.fixture()
def client_and_redis() -> Generator[tuple[TestClient, fakeredis.FakeRedis], None, None]:
    """FastAPI TestClient wired to a fresh fakeredis instance."""

    r = fakeredis.FakeRedis(decode_responses=True)

    def _override() -> Generator[fakeredis.FakeRedis, None, None]:
        yield r

    app.dependency_overrides[get_redis] = _override
    with TestClient(app) as c:
        yield c, r
    app.dependency_overrides.clear()


@pytest.fixture()
def client(client_and_redis: tuple[TestClient, fakeredis.FakeRedis]) -> TestClient:
    return client_and_redis[0]


@pytest.fixture()
def started_game() -> TicTacToe:
    """alice (x) vs bob (o), x to move, outbox drained."""

    game = TicTacToe.new(ALICE)
    game.join(BOB)
    game.drain_events()
    return game


@pytest.fixture()
def play() -> Callable[[TicTacToe, list[int]], None]:
    """Play coordinates alternately starting with whoever is to move."""

    def _play(game: TicTacToe, coordinates: list[int]) -> None:
        for c in coordinates:
            caller = game.get_turning_player()
            assert caller is not None
            game.turn(caller, c)

    return _play


def board_of(*codes: int | None) -> Board:
    return Board.from_codes(list(codes))
